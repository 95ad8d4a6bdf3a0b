from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import SkillCategory
from .model import Skill


class SkillRepository(Protocol):
    def save(self, skill: Skill) -> Skill:
        raise NotImplementedError

    def get_by_id(self, skill_id: str) -> Optional[Skill]:
        raise NotImplementedError

    def list_by_student(self, student_id: str, *, verified: Optional[bool] = None) -> Sequence[Skill]:
        raise NotImplementedError

    def list_unverified(self) -> Sequence[Skill]:
        """HR review queue: every skill not yet verified, oldest first."""

        raise NotImplementedError

    def list_by_category(self, category: SkillCategory) -> Sequence[Skill]:
        raise NotImplementedError

    def search_by_name(self, name: str) -> Sequence[Skill]:
        raise NotImplementedError

    def count_by_student(self, student_id: str, *, verified: Optional[bool] = None) -> int:
        raise NotImplementedError

    def delete_by_id(self, skill_id: str) -> None:
        raise NotImplementedError
