from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.validators import check_range, require_email, require_non_empty
from ..core.constants import CGPA_RANGE, DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, SEMESTER_RANGE
from ..core.enums import StudentStatus
from ..core.exceptions import DuplicateRecordError, ValidationError
from .model import Student
from .repository import StudentRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StudentPage:
    items: Sequence[Student]
    page: int
    size: int
    total_items: int

    @property
    def total_pages(self) -> int:
        if self.size <= 0:
            return 0
        return (self.total_items + self.size - 1) // self.size


# Fields a client may overwrite through update_student.
_UPDATABLE = (
    "user_id",
    "first_name",
    "last_name",
    "phone",
    "date_of_birth",
    "gender",
    "address",
    "department",
    "course",
    "semester",
    "enrollment_date",
    "graduation_date",
    "cgpa",
)


def _check_academics(student: Student) -> None:
    check_range(student.cgpa, "CGPA", *CGPA_RANGE)
    check_range(student.semester, "Semester", *SEMESTER_RANGE)


class StudentService:
    def __init__(self, students: StudentRepository):
        self._students = students

    def create_student(self, student: Student, *, now: Optional[datetime] = None) -> Student:
        student.student_code = require_non_empty(student.student_code, "Student code")
        student.first_name = require_non_empty(student.first_name, "First name")
        student.email = require_email(student.email)
        _check_academics(student)

        if self._students.exists_by_student_code(student.student_code):
            raise DuplicateRecordError(f"Student code already exists: {student.student_code}")
        if self._students.exists_by_email(student.email):
            raise DuplicateRecordError(f"Email already exists: {student.email}")

        now = now or now_local()
        student.id = None
        student.status = StudentStatus.ACTIVE
        student.created_at = now
        student.updated_at = now
        saved = self._students.save(student)
        logger.info("student created: %s (%s)", saved.id, saved.student_code)
        return saved

    def get(self, student_id: str) -> Optional[Student]:
        return self._students.get_by_id(student_id)

    def get_by_code(self, student_code: str) -> Optional[Student]:
        return self._students.get_by_student_code(student_code)

    def get_by_email(self, email: str) -> Optional[Student]:
        return self._students.get_by_email(email)

    def get_by_user_id(self, user_id: str) -> Optional[Student]:
        return self._students.get_by_user_id(user_id)

    def list_all(self) -> Sequence[Student]:
        return self._students.list_filtered()

    def page(self, page: int = 0, size: int = DEFAULT_PAGE_SIZE) -> StudentPage:
        """Zero-based page of students, newest first."""
        if page < 0:
            raise ValidationError("Page must be >= 0")
        if size <= 0 or size > MAX_PAGE_SIZE:
            raise ValidationError(f"Size must be between 1 and {MAX_PAGE_SIZE}")
        items = self._students.list_page(offset=page * size, limit=size)
        return StudentPage(items=items, page=page, size=size, total_items=self._students.count())

    def by_department(self, department: str) -> Sequence[Student]:
        return self._students.list_filtered(department=department)

    def by_course(self, course: str) -> Sequence[Student]:
        return self._students.list_filtered(course=course)

    def by_status(self, status: StudentStatus) -> Sequence[Student]:
        return self._students.list_filtered(status=status)

    def by_semester(self, semester: int) -> Sequence[Student]:
        return self._students.list_filtered(semester=semester)

    def with_min_cgpa(self, min_cgpa: float) -> Sequence[Student]:
        return self._students.list_filtered(min_cgpa=min_cgpa)

    def search_by_name(self, name: str) -> Sequence[Student]:
        name = require_non_empty(name, "Name")
        return self._students.search_by_name(name)

    def update_student(self, student_id: str, changes: Student, *, now: Optional[datetime] = None) -> Optional[Student]:
        """Copy the editable fields of `changes` onto the stored record.

        student_code and email are identity fields and are left as they are.
        """
        existing = self._students.get_by_id(student_id)
        if not existing:
            logger.warning("student not found for update: %s", student_id)
            return None

        for name in _UPDATABLE:
            setattr(existing, name, getattr(changes, name))
        if changes.status is not None:
            existing.status = changes.status
        existing.first_name = require_non_empty(existing.first_name, "First name")
        _check_academics(existing)
        existing.updated_at = now or now_local()
        saved = self._students.save(existing)
        logger.info("student updated: %s", student_id)
        return saved

    def update_status(self, student_id: str, status: StudentStatus) -> Optional[Student]:
        student = self._students.get_by_id(student_id)
        if not student:
            logger.warning("student not found for status change: %s", student_id)
            return None
        student.status = status
        student.updated_at = now_local()
        saved = self._students.save(student)
        logger.info("student %s status -> %s", student_id, status.value)
        return saved

    def update_cgpa(self, student_id: str, cgpa: float) -> Optional[Student]:
        student = self._students.get_by_id(student_id)
        if not student:
            logger.warning("student not found for cgpa change: %s", student_id)
            return None
        student.cgpa = check_range(cgpa, "CGPA", *CGPA_RANGE)
        student.updated_at = now_local()
        saved = self._students.save(student)
        logger.info("student %s cgpa -> %s", student_id, cgpa)
        return saved

    def add_skill(self, student_id: str, skill_id: str) -> Optional[Student]:
        return self._link(student_id, "skill_ids", skill_id)

    def add_document(self, student_id: str, document_id: str) -> Optional[Student]:
        return self._link(student_id, "document_ids", document_id)

    def _link(self, student_id: str, attr: str, ref_id: str) -> Optional[Student]:
        ref_id = require_non_empty(ref_id, "Reference id")
        student = self._students.get_by_id(student_id)
        if not student:
            logger.warning("student not found for %s link: %s", attr, student_id)
            return None
        refs = getattr(student, attr)
        if ref_id not in refs:
            refs.append(ref_id)
            student.updated_at = now_local()
            student = self._students.save(student)
            logger.info("student %s linked %s %s", student_id, attr, ref_id)
        return student

    def delete_student(self, student_id: str) -> None:
        logger.info("deleting student %s", student_id)
        self._students.delete_by_id(student_id)

    def exists_by_student_code(self, student_code: str) -> bool:
        return self._students.exists_by_student_code(student_code)

    def exists_by_email(self, email: str) -> bool:
        return self._students.exists_by_email(email)

    def count_all(self) -> int:
        return self._students.count()

    def count_by_department(self, department: str) -> int:
        return self._students.count(department=department)

    def count_by_status(self, status: StudentStatus) -> int:
        return self._students.count(status=status)

    def stats(self) -> dict:
        return {
            "total_students": self._students.count(),
            "active_students": self._students.count(status=StudentStatus.ACTIVE),
            "graduated_students": self._students.count(status=StudentStatus.GRADUATED),
        }
