from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from ..core.constants import FAILING_GRADE, GRADE_THRESHOLDS
from .model import Performance, PerformanceMetric


class ScoreCalculator(ABC):
    """Calculator interface (Strategy Pattern for evaluation scores)."""

    @abstractmethod
    def overall_score(self, metrics: Sequence[PerformanceMetric]) -> float:
        raise NotImplementedError


class WeightedPercentageCalculator(ScoreCalculator):
    """Weighted mean of score/max_score percentages.

    Metrics missing score, max_score or weightage are skipped. A metric with
    max_score == 0 raises ZeroDivisionError.
    """

    def overall_score(self, metrics: Sequence[PerformanceMetric]) -> float:
        weighted_sum = 0.0
        weight_total = 0.0
        for m in metrics:
            if m.score is None or m.max_score is None or m.weightage is None:
                continue
            percentage = (m.score / m.max_score) * 100
            weighted_sum += percentage * m.weightage
            weight_total += m.weightage
        return weighted_sum / weight_total if weight_total > 0 else 0.0


def grade_for(score: float) -> str:
    for lower_bound, grade in GRADE_THRESHOLDS:
        if score >= lower_bound:
            return grade
    return FAILING_GRADE


def calculate_overall_score(performance: Performance, calculator: Optional[ScoreCalculator] = None) -> Performance:
    """Recompute overall_score and grade in place (nothing is persisted).

    An empty metric list gives 0.0 and leaves the grade untouched.
    """
    if not performance.metrics:
        performance.overall_score = 0.0
        return performance

    calculator = calculator or WeightedPercentageCalculator()
    performance.overall_score = calculator.overall_score(performance.metrics)
    performance.grade = grade_for(performance.overall_score)
    return performance
