from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import ProficiencyLevel, SkillCategory


@dataclass
class Skill:
    student_id: str
    skill_name: str
    category: Optional[SkillCategory] = None
    proficiency_level: Optional[ProficiencyLevel] = None
    years_of_experience: Optional[float] = None
    certified: bool = False
    certification_name: Optional[str] = None
    certification_date: Optional[datetime] = None
    description: Optional[str] = None

    # HR verification
    verified_by_hr: bool = False
    hr_verifier_id: Optional[str] = None
    verification_date: Optional[datetime] = None

    id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
