from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import StudentStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, dump_json, fetchall, fetchone, like_pattern, load_json, new_id
from .model import Address, Student
from .repository import StudentRepository

_FIELDS = (
    "id",
    "user_id",
    "student_code",
    "first_name",
    "last_name",
    "email",
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
    "status",
    "skill_ids",
    "document_ids",
    "created_at",
    "updated_at",
)
_COLUMNS = ", ".join(_FIELDS)
_PLACEHOLDERS = ",".join(["%s"] * len(_FIELDS))
_UPDATES = ", ".join(f"{c}=VALUES({c})" for c in _FIELDS if c not in {"id", "created_at"})


def _row_to_student(row: dict) -> Student:
    return Student(
        id=row["id"],
        user_id=row.get("user_id"),
        student_code=row["student_code"],
        first_name=row["first_name"],
        last_name=row.get("last_name"),
        email=row["email"],
        phone=row.get("phone"),
        date_of_birth=row.get("date_of_birth"),
        gender=row.get("gender"),
        address=Address.from_dict(load_json(row.get("address"))),
        department=row.get("department"),
        course=row.get("course"),
        semester=int(row["semester"]) if row.get("semester") is not None else None,
        enrollment_date=row.get("enrollment_date"),
        graduation_date=row.get("graduation_date"),
        cgpa=float(row["cgpa"]) if row.get("cgpa") is not None else None,
        status=StudentStatus(row.get("status") or StudentStatus.ACTIVE.value),
        skill_ids=list(load_json(row.get("skill_ids"), [])),
        document_ids=list(load_json(row.get("document_ids"), [])),
        created_at=row.get("created_at"),
        updated_at=row.get("updated_at"),
    )


class MySQLStudentRepository(StudentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def save(self, student: Student) -> Student:
        if not student.id:
            student.id = new_id()
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"INSERT INTO students({_COLUMNS}) VALUES({_PLACEHOLDERS}) ON DUPLICATE KEY UPDATE {_UPDATES}",
                (
                    student.id,
                    student.user_id,
                    student.student_code,
                    student.first_name,
                    student.last_name,
                    student.email,
                    student.phone,
                    student.date_of_birth,
                    student.gender,
                    dump_json(student.address.to_dict()) if student.address else None,
                    student.department,
                    student.course,
                    student.semester,
                    student.enrollment_date,
                    student.graduation_date,
                    student.cgpa,
                    student.status.value,
                    dump_json(list(student.skill_ids)),
                    dump_json(list(student.document_ids)),
                    student.created_at,
                    student.updated_at,
                ),
            )
        return student

    def _get_one(self, column: str, value) -> Optional[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM students WHERE {column}=%s LIMIT 1", (value,))
            row = fetchone(cur)
            return _row_to_student(row) if row else None

    def get_by_id(self, student_id: str) -> Optional[Student]:
        return self._get_one("id", student_id)

    def get_by_student_code(self, student_code: str) -> Optional[Student]:
        return self._get_one("student_code", student_code)

    def get_by_email(self, email: str) -> Optional[Student]:
        return self._get_one("email", email)

    def get_by_user_id(self, user_id: str) -> Optional[Student]:
        return self._get_one("user_id", user_id)

    def exists_by_student_code(self, student_code: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT 1 AS hit FROM students WHERE student_code=%s LIMIT 1", (student_code,))
            return fetchone(cur) is not None

    def exists_by_email(self, email: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT 1 AS hit FROM students WHERE email=%s LIMIT 1", (email,))
            return fetchone(cur) is not None

    def list_filtered(
        self,
        *,
        department: Optional[str] = None,
        course: Optional[str] = None,
        status: Optional[StudentStatus] = None,
        semester: Optional[int] = None,
        min_cgpa: Optional[float] = None,
    ) -> Sequence[Student]:
        clauses: list[str] = []
        params: list[object] = []
        if department is not None:
            clauses.append("department=%s")
            params.append(department)
        if course is not None:
            clauses.append("course=%s")
            params.append(course)
        if status is not None:
            clauses.append("status=%s")
            params.append(status.value)
        if semester is not None:
            clauses.append("semester=%s")
            params.append(int(semester))
        if min_cgpa is not None:
            clauses.append("cgpa >= %s")
            params.append(float(min_cgpa))
        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM students {where} ORDER BY student_code", tuple(params))
            return [_row_to_student(r) for r in fetchall(cur)]

    def list_page(self, *, offset: int, limit: int) -> Sequence[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM students ORDER BY created_at DESC LIMIT %s OFFSET %s",
                (int(limit), int(offset)),
            )
            return [_row_to_student(r) for r in fetchall(cur)]

    def search_by_name(self, name: str) -> Sequence[Student]:
        pattern = like_pattern(name)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS} FROM students
                WHERE LOWER(first_name) LIKE %s OR LOWER(last_name) LIKE %s
                ORDER BY first_name, last_name
                """,
                (pattern, pattern),
            )
            return [_row_to_student(r) for r in fetchall(cur)]

    def count(self, *, department: Optional[str] = None, status: Optional[StudentStatus] = None) -> int:
        clauses: list[str] = []
        params: list[object] = []
        if department is not None:
            clauses.append("department=%s")
            params.append(department)
        if status is not None:
            clauses.append("status=%s")
            params.append(status.value)
        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT COUNT(*) AS n FROM students {where}", tuple(params))
            row = fetchone(cur)
            return int(row["n"]) if row else 0

    def delete_by_id(self, student_id: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM students WHERE id=%s", (student_id,))
