from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.validators import check_range, require_non_empty
from ..core.constants import YEARS_OF_EXPERIENCE_RANGE
from ..core.enums import ReviewAction, SkillCategory
from ..workflow.transitions import next_skill_verified
from .model import Skill
from .repository import SkillRepository

logger = logging.getLogger(__name__)


class SkillService:
    """Skill records and their HR verification."""

    def __init__(self, skills: SkillRepository):
        self._skills = skills

    def add_skill(self, skill: Skill, *, now: Optional[datetime] = None) -> Skill:
        skill.student_id = require_non_empty(skill.student_id, "Student ID")
        skill.skill_name = require_non_empty(skill.skill_name, "Skill name")
        check_range(skill.years_of_experience, "Years of experience", *YEARS_OF_EXPERIENCE_RANGE)

        now = now or now_local()
        skill.id = None
        skill.verified_by_hr = False
        skill.hr_verifier_id = None
        skill.verification_date = None
        skill.created_at = now
        skill.updated_at = now
        saved = self._skills.save(skill)
        logger.info("skill '%s' added for student %s: %s", saved.skill_name, saved.student_id, saved.id)
        return saved

    def get(self, skill_id: str) -> Optional[Skill]:
        return self._skills.get_by_id(skill_id)

    def by_student(self, student_id: str) -> Sequence[Skill]:
        return self._skills.list_by_student(student_id)

    def verified_by_student(self, student_id: str) -> Sequence[Skill]:
        return self._skills.list_by_student(student_id, verified=True)

    def unverified_by_student(self, student_id: str) -> Sequence[Skill]:
        return self._skills.list_by_student(student_id, verified=False)

    def all_unverified(self) -> Sequence[Skill]:
        return self._skills.list_unverified()

    def by_category(self, category: SkillCategory) -> Sequence[Skill]:
        return self._skills.list_by_category(category)

    def search_by_name(self, name: str) -> Sequence[Skill]:
        name = require_non_empty(name, "Name")
        return self._skills.search_by_name(name)

    def verify_skill(self, skill_id: str, hr_id: str, *, now: Optional[datetime] = None) -> bool:
        """Mark a skill as verified by `hr_id`. False when the skill does not exist."""
        logger.info("verifying skill %s by HR %s", skill_id, hr_id)
        skill = self._skills.get_by_id(skill_id)
        if not skill:
            logger.warning("skill not found for verification: %s", skill_id)
            return False

        now = now or now_local()
        skill.verified_by_hr = next_skill_verified(skill.verified_by_hr, ReviewAction.VERIFY)
        skill.hr_verifier_id = hr_id
        skill.verification_date = now
        skill.updated_at = now
        self._skills.save(skill)
        logger.info("skill verified: %s", skill_id)
        return True

    def update_skill(self, skill_id: str, changes: Skill, *, now: Optional[datetime] = None) -> Optional[Skill]:
        existing = self._skills.get_by_id(skill_id)
        if not existing:
            logger.warning("skill not found for update: %s", skill_id)
            return None

        existing.skill_name = require_non_empty(changes.skill_name, "Skill name")
        existing.category = changes.category
        existing.proficiency_level = changes.proficiency_level
        existing.years_of_experience = check_range(
            changes.years_of_experience, "Years of experience", *YEARS_OF_EXPERIENCE_RANGE
        )
        existing.certified = changes.certified
        existing.certification_name = changes.certification_name
        existing.certification_date = changes.certification_date
        existing.description = changes.description
        existing.updated_at = now or now_local()
        saved = self._skills.save(existing)
        logger.info("skill updated: %s", skill_id)
        return saved

    def delete_skill(self, skill_id: str) -> None:
        logger.info("deleting skill %s", skill_id)
        self._skills.delete_by_id(skill_id)

    def count_by_student(self, student_id: str) -> int:
        return self._skills.count_by_student(student_id)

    def count_verified_by_student(self, student_id: str) -> int:
        return self._skills.count_by_student(student_id, verified=True)
