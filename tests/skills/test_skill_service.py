from datetime import timedelta

import pytest

from src.jupiter_hr.jupiter_hr.core.enums import ProficiencyLevel, SkillCategory
from src.jupiter_hr.jupiter_hr.core.exceptions import ValidationError
from src.jupiter_hr.jupiter_hr.skills.model import Skill


def _skill(name="Python", student_id="s1", **kw):
    return Skill(student_id=student_id, skill_name=name, **kw)


def test_add_skill_starts_unverified(container, fixed_now):
    skill = container.skill_service.add_skill(
        _skill(category=SkillCategory.PROGRAMMING, verified_by_hr=True, hr_verifier_id="h9"), now=fixed_now
    )

    assert skill.id
    assert skill.verified_by_hr is False
    assert skill.hr_verifier_id is None
    assert skill.created_at == fixed_now


@pytest.mark.parametrize("student_id,name", [("", "Python"), ("s1", ""), ("s1", "   ")])
def test_add_skill_requires_student_and_name(container, student_id, name):
    with pytest.raises(ValidationError):
        container.skill_service.add_skill(_skill(name=name, student_id=student_id))


def test_verify_records_verifier_and_date(container, fixed_now):
    service = container.skill_service
    skill = service.add_skill(_skill(), now=fixed_now)

    later = fixed_now + timedelta(days=2)
    assert service.verify_skill(skill.id, "hr-1", now=later) is True

    stored = service.get(skill.id)
    assert stored.verified_by_hr is True
    assert stored.hr_verifier_id == "hr-1"
    assert stored.verification_date == later
    assert stored.updated_at == later


def test_verify_unknown_skill_is_not_found(container):
    saves_before = container.skills_repo.saves
    assert container.skill_service.verify_skill("missing", "hr-1") is False
    assert container.skills_repo.saves == saves_before


def test_reverify_overwrites_verifier(container):
    service = container.skill_service
    skill = service.add_skill(_skill())

    service.verify_skill(skill.id, "hr-1")
    service.verify_skill(skill.id, "hr-2")

    assert service.get(skill.id).hr_verifier_id == "hr-2"


def test_verified_and_unverified_views(container, fixed_now):
    service = container.skill_service
    a = service.add_skill(_skill("SQL"), now=fixed_now)
    service.add_skill(_skill("Java"), now=fixed_now + timedelta(minutes=1))
    service.add_skill(_skill("Go", student_id="s2"), now=fixed_now + timedelta(minutes=2))
    service.verify_skill(a.id, "hr-1")

    assert [s.skill_name for s in service.by_student("s1")] == ["Java", "SQL"]
    assert [s.skill_name for s in service.verified_by_student("s1")] == ["SQL"]
    assert [s.skill_name for s in service.unverified_by_student("s1")] == ["Java"]
    assert [s.skill_name for s in service.all_unverified()] == ["Java", "Go"]
    assert service.count_by_student("s1") == 2
    assert service.count_verified_by_student("s1") == 1


def test_update_keeps_verification(container):
    service = container.skill_service
    skill = service.add_skill(_skill())
    service.verify_skill(skill.id, "hr-1")

    updated = service.update_skill(
        skill.id, _skill("Python 3", proficiency_level=ProficiencyLevel.EXPERT, years_of_experience=4.5)
    )

    assert updated.skill_name == "Python 3"
    assert updated.proficiency_level == ProficiencyLevel.EXPERT
    assert updated.verified_by_hr is True
    assert service.update_skill("missing", _skill()) is None


def test_search_and_category(container):
    service = container.skill_service
    service.add_skill(_skill("PostgreSQL", category=SkillCategory.DATABASE))
    service.add_skill(_skill("MySQL", category=SkillCategory.DATABASE))
    service.add_skill(_skill("Public speaking", category=SkillCategory.SOFT_SKILL))

    assert sorted(s.skill_name for s in service.search_by_name("sql")) == ["MySQL", "PostgreSQL"]
    assert len(service.by_category(SkillCategory.DATABASE)) == 2
    with pytest.raises(ValidationError):
        service.search_by_name(" ")


def test_delete(container):
    service = container.skill_service
    skill = service.add_skill(_skill())
    service.delete_skill(skill.id)
    service.delete_skill(skill.id)
    assert service.get(skill.id) is None


@pytest.mark.parametrize("years", [-0.5, 50.5, float("inf")])
def test_years_of_experience_bounds(container, years):
    service = container.skill_service
    with pytest.raises(ValidationError):
        service.add_skill(_skill(years_of_experience=years))

    kept = service.add_skill(_skill(years_of_experience=50))
    with pytest.raises(ValidationError):
        service.update_skill(kept.id, _skill(years_of_experience=years))
    assert service.get(kept.id).years_of_experience == 50
