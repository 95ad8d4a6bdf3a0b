from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.validators import check_range, require_non_empty
from ..core.constants import METRIC_WEIGHTAGE_RANGE
from ..core.enums import EvaluationStatus, ReviewAction
from ..workflow.transitions import next_performance_status
from .model import Performance
from .repository import PerformanceRepository
from .scoring import ScoreCalculator, WeightedPercentageCalculator, calculate_overall_score

logger = logging.getLogger(__name__)


def _check_metrics(performance: Performance) -> None:
    """Reject unnamed or out-of-range metrics. max_score 0 is left to the calculator."""
    check_range(performance.max_score, "Max score", low=0)
    for metric in performance.metrics:
        metric.metric_name = require_non_empty(metric.metric_name, "Metric name")
        label = f"Metric '{metric.metric_name}'"
        check_range(metric.score, f"{label} score", low=0)
        check_range(metric.max_score, f"{label} max score", low=0)
        check_range(metric.weightage, f"{label} weightage", *METRIC_WEIGHTAGE_RANGE)


class PerformanceService:
    def __init__(self, performances: PerformanceRepository, *, calculator: Optional[ScoreCalculator] = None):
        self._performances = performances
        self._calculator = calculator or WeightedPercentageCalculator()

    def create_performance(self, performance: Performance, *, now: Optional[datetime] = None) -> Performance:
        performance.student_id = require_non_empty(performance.student_id, "Student ID")
        performance.evaluator_id = require_non_empty(performance.evaluator_id, "Evaluator ID")
        _check_metrics(performance)
        logger.info("creating performance evaluation for student %s", performance.student_id)

        now = now or now_local()
        performance.id = None
        performance.evaluation_date = now.date()
        performance.created_at = now
        performance.updated_at = now
        if performance.metrics:
            calculate_overall_score(performance, self._calculator)

        saved = self._performances.save(performance)
        logger.info("performance evaluation created: %s", saved.id)
        return saved

    def get(self, performance_id: str) -> Optional[Performance]:
        return self._performances.get_by_id(performance_id)

    def by_student(self, student_id: str) -> Sequence[Performance]:
        return self._performances.list_by_student(student_id)

    def latest(self, student_id: str) -> Optional[Performance]:
        return self._performances.latest_for_student(student_id)

    def by_evaluator(self, evaluator_id: str) -> Sequence[Performance]:
        return self._performances.list_by_evaluator(evaluator_id)

    def by_status(self, status: EvaluationStatus) -> Sequence[Performance]:
        return self._performances.list_by_status(status)

    def pending_reviews(self) -> Sequence[Performance]:
        return self._performances.list_by_status(EvaluationStatus.UNDER_REVIEW)

    def update_performance(
        self, performance_id: str, changes: Performance, *, now: Optional[datetime] = None
    ) -> Optional[Performance]:
        """Overwrite the evaluation content and recompute the score.

        student_id, evaluation_date and created_at stay as stored.
        """
        existing = self._performances.get_by_id(performance_id)
        if not existing:
            logger.warning("performance not found for update: %s", performance_id)
            return None
        logger.info("updating performance %s", performance_id)

        existing.evaluator_id = require_non_empty(changes.evaluator_id, "Evaluator ID")
        existing.evaluator_name = changes.evaluator_name
        existing.evaluation_type = changes.evaluation_type
        existing.evaluation_period = changes.evaluation_period
        existing.metrics = list(changes.metrics)
        existing.max_score = changes.max_score
        existing.strengths = list(changes.strengths)
        existing.areas_for_improvement = list(changes.areas_for_improvement)
        existing.comments = changes.comments
        existing.goals = list(changes.goals)
        _check_metrics(existing)
        if changes.status is not None:
            existing.status = changes.status
        existing.updated_at = now or now_local()
        calculate_overall_score(existing, self._calculator)

        return self._performances.save(existing)

    def approve(self, performance_id: str) -> bool:
        return self._review(performance_id, ReviewAction.APPROVE)

    def reject(self, performance_id: str) -> bool:
        return self._review(performance_id, ReviewAction.REJECT)

    def _review(self, performance_id: str, action: ReviewAction) -> bool:
        logger.info("%s performance %s", action.value.lower(), performance_id)
        performance = self._performances.get_by_id(performance_id)
        if not performance:
            logger.warning("performance not found for %s: %s", action.value.lower(), performance_id)
            return False

        performance.status = next_performance_status(performance.status, action)
        performance.updated_at = now_local()
        self._performances.save(performance)
        logger.info("performance %s -> %s", performance_id, performance.status.value)
        return True

    def delete_performance(self, performance_id: str) -> None:
        logger.info("deleting performance %s", performance_id)
        self._performances.delete_by_id(performance_id)

    def count_by_student(self, student_id: str) -> int:
        return self._performances.count_by_student(student_id)
