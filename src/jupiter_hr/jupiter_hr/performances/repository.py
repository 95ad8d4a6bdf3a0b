from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import EvaluationStatus
from .model import Performance


class PerformanceRepository(Protocol):
    def save(self, performance: Performance) -> Performance:
        raise NotImplementedError

    def get_by_id(self, performance_id: str) -> Optional[Performance]:
        raise NotImplementedError

    def list_by_student(self, student_id: str) -> Sequence[Performance]:
        """Newest evaluation_date first."""

        raise NotImplementedError

    def latest_for_student(self, student_id: str) -> Optional[Performance]:
        raise NotImplementedError

    def list_by_evaluator(self, evaluator_id: str) -> Sequence[Performance]:
        raise NotImplementedError

    def list_by_status(self, status: EvaluationStatus) -> Sequence[Performance]:
        raise NotImplementedError

    def count_by_student(self, student_id: str) -> int:
        raise NotImplementedError

    def delete_by_id(self, performance_id: str) -> None:
        raise NotImplementedError
