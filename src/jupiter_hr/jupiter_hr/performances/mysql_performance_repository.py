from __future__ import annotations

from typing import Optional, Sequence

from ..core.constants import DEFAULT_MAX_SCORE
from ..core.enums import EvaluationStatus, EvaluationType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, dump_json, fetchall, fetchone, load_json, new_id
from .model import Performance, PerformanceMetric
from .repository import PerformanceRepository

_COLUMNS = (
    "id, student_id, evaluator_id, evaluator_name, evaluation_type, evaluation_period, "
    "evaluation_date, overall_score, max_score, grade, metrics, strengths, "
    "areas_for_improvement, comments, goals, status, created_at, updated_at"
)

# Newest evaluation first; created_at breaks ties between same-day records.
_NEWEST_FIRST = "ORDER BY evaluation_date DESC, created_at DESC"


def _row_to_performance(row: dict) -> Performance:
    return Performance(
        id=row["id"],
        student_id=row["student_id"],
        evaluator_id=row["evaluator_id"],
        evaluator_name=row.get("evaluator_name"),
        evaluation_type=EvaluationType(row["evaluation_type"]) if row.get("evaluation_type") else None,
        evaluation_period=row.get("evaluation_period"),
        evaluation_date=row.get("evaluation_date"),
        overall_score=float(row["overall_score"]) if row.get("overall_score") is not None else None,
        max_score=float(row["max_score"]) if row.get("max_score") is not None else DEFAULT_MAX_SCORE,
        grade=row.get("grade"),
        metrics=[PerformanceMetric.from_dict(m) for m in load_json(row.get("metrics"), [])],
        strengths=list(load_json(row.get("strengths"), [])),
        areas_for_improvement=list(load_json(row.get("areas_for_improvement"), [])),
        comments=row.get("comments"),
        goals=list(load_json(row.get("goals"), [])),
        status=EvaluationStatus(row.get("status") or EvaluationStatus.DRAFT.value),
        created_at=row.get("created_at"),
        updated_at=row.get("updated_at"),
    )


class MySQLPerformanceRepository(PerformanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def save(self, performance: Performance) -> Performance:
        if not performance.id:
            performance.id = new_id()
        p = performance
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                INSERT INTO performances({_COLUMNS})
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    student_id=VALUES(student_id),
                    evaluator_id=VALUES(evaluator_id),
                    evaluator_name=VALUES(evaluator_name),
                    evaluation_type=VALUES(evaluation_type),
                    evaluation_period=VALUES(evaluation_period),
                    evaluation_date=VALUES(evaluation_date),
                    overall_score=VALUES(overall_score),
                    max_score=VALUES(max_score),
                    grade=VALUES(grade),
                    metrics=VALUES(metrics),
                    strengths=VALUES(strengths),
                    areas_for_improvement=VALUES(areas_for_improvement),
                    comments=VALUES(comments),
                    goals=VALUES(goals),
                    status=VALUES(status),
                    updated_at=VALUES(updated_at)
                """,
                (
                    p.id,
                    p.student_id,
                    p.evaluator_id,
                    p.evaluator_name,
                    p.evaluation_type.value if p.evaluation_type else None,
                    p.evaluation_period,
                    p.evaluation_date,
                    p.overall_score,
                    p.max_score,
                    p.grade,
                    dump_json([m.to_dict() for m in p.metrics]),
                    dump_json(list(p.strengths)),
                    dump_json(list(p.areas_for_improvement)),
                    p.comments,
                    dump_json(list(p.goals)),
                    p.status.value,
                    p.created_at,
                    p.updated_at,
                ),
            )
        return performance

    def get_by_id(self, performance_id: str) -> Optional[Performance]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM performances WHERE id=%s", (performance_id,))
            row = fetchone(cur)
            return _row_to_performance(row) if row else None

    def list_by_student(self, student_id: str) -> Sequence[Performance]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM performances WHERE student_id=%s {_NEWEST_FIRST}", (student_id,))
            return [_row_to_performance(r) for r in fetchall(cur)]

    def latest_for_student(self, student_id: str) -> Optional[Performance]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM performances WHERE student_id=%s {_NEWEST_FIRST} LIMIT 1",
                (student_id,),
            )
            row = fetchone(cur)
            return _row_to_performance(row) if row else None

    def list_by_evaluator(self, evaluator_id: str) -> Sequence[Performance]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM performances WHERE evaluator_id=%s {_NEWEST_FIRST}",
                (evaluator_id,),
            )
            return [_row_to_performance(r) for r in fetchall(cur)]

    def list_by_status(self, status: EvaluationStatus) -> Sequence[Performance]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM performances WHERE status=%s {_NEWEST_FIRST}", (status.value,))
            return [_row_to_performance(r) for r in fetchall(cur)]

    def count_by_student(self, student_id: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM performances WHERE student_id=%s", (student_id,))
            row = fetchone(cur)
            return int(row["n"]) if row else 0

    def delete_by_id(self, performance_id: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM performances WHERE id=%s", (performance_id,))
