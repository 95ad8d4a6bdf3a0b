from __future__ import annotations

from flask import Flask, request

from ..common.guards import current_user, roles_required
from ..common.payload import opt_bool, opt_datetime, opt_str, pick, request_payload
from ..common.responses import created, fail, listing, ok
from ..common.validators import parse_enum, parse_optional_float
from ..container import Container
from ..core.enums import ProficiencyLevel, Role, SkillCategory
from .model import Skill

_REVIEWERS = (Role.HR, Role.ADMIN)


def skill_from_payload(payload: dict) -> Skill:
    category = pick(payload, "category")
    level = pick(payload, "proficiency_level")
    return Skill(
        student_id=opt_str(payload, "student_id") or "",
        skill_name=opt_str(payload, "skill_name") or "",
        category=parse_enum(SkillCategory, category, "category") if category else None,
        proficiency_level=parse_enum(ProficiencyLevel, level, "proficiency level") if level else None,
        years_of_experience=parse_optional_float(pick(payload, "years_of_experience"), "Years of experience"),
        certified=opt_bool(payload, "certified") or opt_bool(payload, "is_certified"),
        certification_name=opt_str(payload, "certification_name"),
        certification_date=opt_datetime(payload, "certification_date", "Certification date"),
        description=opt_str(payload, "description"),
    )


def register(app: Flask, container: Container) -> None:
    skills = container.skill_service

    @app.post("/api/hr/skill", endpoint="hr_skill_create")
    @roles_required(*_REVIEWERS)
    def create_skill():
        skill = skills.add_skill(skill_from_payload(request_payload()))
        return created("Skill added successfully", skill)

    @app.get("/api/hr/skill/unverified", endpoint="hr_skill_unverified")
    @roles_required(*_REVIEWERS)
    def unverified_skills():
        return listing("Unverified skills retrieved", skills.all_unverified())

    @app.get("/api/hr/skill/search", endpoint="hr_skill_search")
    @roles_required(*_REVIEWERS)
    def search_skills():
        return listing("Search results", skills.search_by_name(request.args.get("name", "")))

    @app.get("/api/hr/skill/category/<category>", endpoint="hr_skill_by_category")
    @roles_required(*_REVIEWERS)
    def skills_by_category(category: str):
        return listing("Skills retrieved successfully", skills.by_category(parse_enum(SkillCategory, category, "category")))

    @app.get("/api/hr/skill/student/<student_id>", endpoint="hr_skill_by_student")
    @roles_required(*_REVIEWERS)
    def skills_by_student(student_id: str):
        verified = request.args.get("verified")
        if verified is None:
            items = skills.by_student(student_id)
        elif verified.lower() in {"1", "true", "yes"}:
            items = skills.verified_by_student(student_id)
        else:
            items = skills.unverified_by_student(student_id)
        return listing("Skills retrieved successfully", items)

    @app.get("/api/hr/skill/<skill_id>", endpoint="hr_skill_get")
    @roles_required(*_REVIEWERS)
    def get_skill(skill_id: str):
        skill = skills.get(skill_id)
        if not skill:
            return fail(f"Skill not found with id: {skill_id}", 404)
        return ok("Skill found", skill)

    @app.put("/api/hr/skill/<skill_id>", endpoint="hr_skill_update")
    @roles_required(*_REVIEWERS)
    def update_skill(skill_id: str):
        skill = skills.update_skill(skill_id, skill_from_payload(request_payload()))
        if not skill:
            return fail(f"Skill not found with id: {skill_id}", 404)
        return ok("Skill updated successfully", skill)

    @app.put("/api/hr/skill/<skill_id>/verify", endpoint="hr_skill_verify")
    @roles_required(*_REVIEWERS)
    def verify_skill(skill_id: str):
        reviewer = current_user()
        if not skills.verify_skill(skill_id, reviewer.user_id):
            return fail(f"Skill not found with id: {skill_id}", 404)
        return ok("Skill verified successfully", skills.get(skill_id))

    @app.delete("/api/hr/skill/<skill_id>", endpoint="hr_skill_delete")
    @roles_required(*_REVIEWERS)
    def delete_skill(skill_id: str):
        if not skills.get(skill_id):
            return fail(f"Skill not found with id: {skill_id}", 404)
        skills.delete_skill(skill_id)
        return ok("Skill deleted successfully")
