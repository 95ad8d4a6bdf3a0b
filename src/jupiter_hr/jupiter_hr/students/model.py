from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from ..core.enums import StudentStatus


@dataclass
class Address:
    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    country: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> Optional["Address"]:
        if not data:
            return None
        return cls(
            street=data.get("street"),
            city=data.get("city"),
            state=data.get("state"),
            zip_code=data.get("zip_code") or data.get("zipCode"),
            country=data.get("country"),
        )

    def to_dict(self) -> dict:
        return {
            "street": self.street,
            "city": self.city,
            "state": self.state,
            "zip_code": self.zip_code,
            "country": self.country,
        }


@dataclass
class Student:
    """Domain entity: Student (aggregate root for skill/document ids).

    skill_ids/document_ids are back-references only; they can drift from the
    records that actually point at this student.
    """

    __json_extras__ = ("full_name",)

    student_code: str
    first_name: str
    email: str
    last_name: Optional[str] = None
    id: Optional[str] = None
    user_id: Optional[str] = None
    phone: Optional[str] = None
    date_of_birth: Optional[date] = None
    gender: Optional[str] = None
    address: Optional[Address] = None
    department: Optional[str] = None
    course: Optional[str] = None
    semester: Optional[int] = None
    enrollment_date: Optional[date] = None
    graduation_date: Optional[date] = None
    cgpa: Optional[float] = None
    status: StudentStatus = StudentStatus.ACTIVE
    skill_ids: list[str] = field(default_factory=list)
    document_ids: list[str] = field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name or ''}".strip()
