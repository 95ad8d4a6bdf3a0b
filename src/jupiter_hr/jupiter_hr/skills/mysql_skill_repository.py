from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import ProficiencyLevel, SkillCategory
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, like_pattern, new_id
from .model import Skill
from .repository import SkillRepository

_COLUMNS = (
    "id, student_id, skill_name, category, proficiency_level, years_of_experience, "
    "is_certified, certification_name, certification_date, description, "
    "verified_by_hr, hr_verifier_id, verification_date, created_at, updated_at"
)


def _row_to_skill(row: dict) -> Skill:
    return Skill(
        id=row["id"],
        student_id=row["student_id"],
        skill_name=row["skill_name"],
        category=SkillCategory(row["category"]) if row.get("category") else None,
        proficiency_level=ProficiencyLevel(row["proficiency_level"]) if row.get("proficiency_level") else None,
        years_of_experience=float(row["years_of_experience"]) if row.get("years_of_experience") is not None else None,
        certified=bool(row.get("is_certified")),
        certification_name=row.get("certification_name"),
        certification_date=row.get("certification_date"),
        description=row.get("description"),
        verified_by_hr=bool(row.get("verified_by_hr")),
        hr_verifier_id=row.get("hr_verifier_id"),
        verification_date=row.get("verification_date"),
        created_at=row.get("created_at"),
        updated_at=row.get("updated_at"),
    )


class MySQLSkillRepository(SkillRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def save(self, skill: Skill) -> Skill:
        if not skill.id:
            skill.id = new_id()
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                INSERT INTO skills({_COLUMNS})
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    student_id=VALUES(student_id),
                    skill_name=VALUES(skill_name),
                    category=VALUES(category),
                    proficiency_level=VALUES(proficiency_level),
                    years_of_experience=VALUES(years_of_experience),
                    is_certified=VALUES(is_certified),
                    certification_name=VALUES(certification_name),
                    certification_date=VALUES(certification_date),
                    description=VALUES(description),
                    verified_by_hr=VALUES(verified_by_hr),
                    hr_verifier_id=VALUES(hr_verifier_id),
                    verification_date=VALUES(verification_date),
                    updated_at=VALUES(updated_at)
                """,
                (
                    skill.id,
                    skill.student_id,
                    skill.skill_name,
                    skill.category.value if skill.category else None,
                    skill.proficiency_level.value if skill.proficiency_level else None,
                    skill.years_of_experience,
                    1 if skill.certified else 0,
                    skill.certification_name,
                    skill.certification_date,
                    skill.description,
                    1 if skill.verified_by_hr else 0,
                    skill.hr_verifier_id,
                    skill.verification_date,
                    skill.created_at,
                    skill.updated_at,
                ),
            )
        return skill

    def get_by_id(self, skill_id: str) -> Optional[Skill]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM skills WHERE id=%s", (skill_id,))
            row = fetchone(cur)
            return _row_to_skill(row) if row else None

    def list_by_student(self, student_id: str, *, verified: Optional[bool] = None) -> Sequence[Skill]:
        sql = f"SELECT {_COLUMNS} FROM skills WHERE student_id=%s"
        params: list[object] = [student_id]
        if verified is not None:
            sql += " AND verified_by_hr=%s"
            params.append(1 if verified else 0)
        sql += " ORDER BY skill_name"
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [_row_to_skill(r) for r in fetchall(cur)]

    def list_unverified(self) -> Sequence[Skill]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM skills WHERE verified_by_hr=0 ORDER BY created_at")
            return [_row_to_skill(r) for r in fetchall(cur)]

    def list_by_category(self, category: SkillCategory) -> Sequence[Skill]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM skills WHERE category=%s ORDER BY skill_name", (category.value,))
            return [_row_to_skill(r) for r in fetchall(cur)]

    def search_by_name(self, name: str) -> Sequence[Skill]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM skills WHERE LOWER(skill_name) LIKE %s ORDER BY skill_name",
                (like_pattern(name),),
            )
            return [_row_to_skill(r) for r in fetchall(cur)]

    def count_by_student(self, student_id: str, *, verified: Optional[bool] = None) -> int:
        sql = "SELECT COUNT(*) AS n FROM skills WHERE student_id=%s"
        params: list[object] = [student_id]
        if verified is not None:
            sql += " AND verified_by_hr=%s"
            params.append(1 if verified else 0)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            row = fetchone(cur)
            return int(row["n"]) if row else 0

    def delete_by_id(self, skill_id: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM skills WHERE id=%s", (skill_id,))
