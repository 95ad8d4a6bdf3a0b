import pytest

from src.jupiter_hr.jupiter_hr.performances.model import Performance, PerformanceMetric
from src.jupiter_hr.jupiter_hr.performances.scoring import (
    WeightedPercentageCalculator,
    calculate_overall_score,
    grade_for,
)


def _perf(*metrics):
    return Performance(student_id="s1", evaluator_id="h1", metrics=list(metrics))


def test_weighted_example_gives_84_and_grade_a():
    perf = _perf(
        PerformanceMetric("Exams", score=80, max_score=100, weightage=0.6),
        PerformanceMetric("Project", score=45, max_score=50, weightage=0.4),
    )

    calculate_overall_score(perf)

    assert perf.overall_score == pytest.approx(84.0)
    assert perf.grade == "A"


def test_empty_metrics_zero_score_and_grade_untouched():
    perf = _perf()
    perf.grade = "B"

    calculate_overall_score(perf)

    assert perf.overall_score == 0.0
    assert perf.grade == "B"


def test_incomplete_metrics_are_skipped():
    perf = _perf(
        PerformanceMetric("Exams", score=90, max_score=100, weightage=1.0),
        PerformanceMetric("No weight", score=10, max_score=100, weightage=None),
        PerformanceMetric("No score", score=None, max_score=100, weightage=5.0),
    )

    calculate_overall_score(perf)

    assert perf.overall_score == pytest.approx(90.0)
    assert perf.grade == "A+"


def test_only_incomplete_metrics_gives_zero_and_f():
    perf = _perf(PerformanceMetric("Partial", score=50, max_score=None, weightage=1.0))

    calculate_overall_score(perf)

    assert perf.overall_score == 0.0
    assert perf.grade == "F"


def test_zero_max_score_raises():
    perf = _perf(PerformanceMetric("Broken", score=10, max_score=0, weightage=1.0))

    with pytest.raises(ZeroDivisionError):
        calculate_overall_score(perf)


@pytest.mark.parametrize(
    "score,grade",
    [
        (100, "A+"),
        (90, "A+"),
        (89.99, "A"),
        (80, "A"),
        (79.99, "B+"),
        (70, "B+"),
        (69.99, "B"),
        (60, "B"),
        (59.99, "C"),
        (50, "C"),
        (49.99, "D"),
        (40, "D"),
        (39.99, "F"),
        (0, "F"),
    ],
)
def test_grade_boundaries(score, grade):
    assert grade_for(score) == grade


@pytest.mark.parametrize(
    "metrics",
    [
        [(0, 10, 1.0)],
        [(10, 10, 3.0), (0, 5, 1.0)],
        [(7.5, 10, 0.2), (3, 4, 0.3), (99, 100, 0.5)],
    ],
)
def test_overall_score_stays_in_range_when_scores_within_max(metrics):
    calc = WeightedPercentageCalculator()
    score = calc.overall_score([PerformanceMetric(f"m{i}", s, m, w) for i, (s, m, w) in enumerate(metrics)])
    assert 0.0 <= score <= 100.0


def test_metric_from_dict_accepts_camel_case():
    metric = PerformanceMetric.from_dict({"metricName": "Exams", "score": "80", "maxScore": 100, "weightage": 0.5})
    assert metric.metric_name == "Exams"
    assert metric.score == 80.0
    assert metric.max_score == 100.0
    assert metric.weightage == 0.5
