from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import StudentStatus
from .model import Student


class StudentRepository(Protocol):
    def save(self, student: Student) -> Student:
        raise NotImplementedError

    def get_by_id(self, student_id: str) -> Optional[Student]:
        raise NotImplementedError

    def get_by_student_code(self, student_code: str) -> Optional[Student]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[Student]:
        raise NotImplementedError

    def get_by_user_id(self, user_id: str) -> Optional[Student]:
        raise NotImplementedError

    def exists_by_student_code(self, student_code: str) -> bool:
        raise NotImplementedError

    def exists_by_email(self, email: str) -> bool:
        raise NotImplementedError

    def list_filtered(
        self,
        *,
        department: Optional[str] = None,
        course: Optional[str] = None,
        status: Optional[StudentStatus] = None,
        semester: Optional[int] = None,
        min_cgpa: Optional[float] = None,
    ) -> Sequence[Student]:
        """All students matching every given filter (None means 'any')."""

        raise NotImplementedError

    def list_page(self, *, offset: int, limit: int) -> Sequence[Student]:
        """Newest first."""

        raise NotImplementedError

    def search_by_name(self, name: str) -> Sequence[Student]:
        raise NotImplementedError

    def count(self, *, department: Optional[str] = None, status: Optional[StudentStatus] = None) -> int:
        raise NotImplementedError

    def delete_by_id(self, student_id: str) -> None:
        raise NotImplementedError
