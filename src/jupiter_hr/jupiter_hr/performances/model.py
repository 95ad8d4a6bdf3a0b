from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from ..core.constants import DEFAULT_MAX_SCORE
from ..core.enums import EvaluationStatus, EvaluationType


@dataclass
class PerformanceMetric:
    metric_name: str
    score: Optional[float] = None
    max_score: Optional[float] = None
    weightage: Optional[float] = None
    comments: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> "PerformanceMetric":
        def num(*keys):
            for key in keys:
                if data.get(key) is not None:
                    return float(data[key])
            return None

        return cls(
            metric_name=str(data.get("metric_name") or data.get("metricName") or ""),
            score=num("score"),
            max_score=num("max_score", "maxScore"),
            weightage=num("weightage"),
            comments=data.get("comments"),
        )

    def to_dict(self) -> dict:
        return {
            "metric_name": self.metric_name,
            "score": self.score,
            "max_score": self.max_score,
            "weightage": self.weightage,
            "comments": self.comments,
        }


@dataclass
class Performance:
    """One evaluation of a student by an evaluator.

    overall_score/grade are derived from metrics by scoring.calculate_overall_score;
    the service recomputes them on create and update.
    """

    student_id: str
    evaluator_id: str
    evaluator_name: Optional[str] = None
    evaluation_type: Optional[EvaluationType] = None
    evaluation_period: Optional[str] = None
    evaluation_date: Optional[date] = None
    metrics: list[PerformanceMetric] = field(default_factory=list)
    overall_score: Optional[float] = None
    max_score: float = DEFAULT_MAX_SCORE
    grade: Optional[str] = None
    strengths: list[str] = field(default_factory=list)
    areas_for_improvement: list[str] = field(default_factory=list)
    comments: Optional[str] = None
    goals: list[str] = field(default_factory=list)
    status: EvaluationStatus = EvaluationStatus.DRAFT

    id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
