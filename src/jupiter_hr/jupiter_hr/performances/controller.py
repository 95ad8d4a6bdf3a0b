from __future__ import annotations

from typing import Optional

from flask import Flask

from ..common.guards import roles_required
from ..common.payload import opt_str, pick, request_payload, str_list
from ..common.responses import created, fail, listing, ok
from ..common.validators import parse_enum, parse_optional_float
from ..container import Container
from ..core.constants import DEFAULT_MAX_SCORE
from ..core.enums import EvaluationStatus, EvaluationType, Role
from ..core.exceptions import ValidationError
from .model import Performance, PerformanceMetric

_REVIEWERS = (Role.HR, Role.ADMIN)


def _metrics_from(raw) -> list[PerformanceMetric]:
    if not raw:
        return []
    if not isinstance(raw, list):
        raise ValidationError("metrics must be a list")
    try:
        return [PerformanceMetric.from_dict(item) for item in raw]
    except (AttributeError, TypeError, ValueError):
        raise ValidationError("Each metric needs numeric score, max_score and weightage")


def performance_from_payload(payload: dict, *, default_status: Optional[EvaluationStatus] = EvaluationStatus.DRAFT) -> Performance:
    evaluation_type = pick(payload, "evaluation_type")
    status = pick(payload, "status")
    max_score = parse_optional_float(pick(payload, "max_score"), "Max score")
    return Performance(
        student_id=opt_str(payload, "student_id") or "",
        evaluator_id=opt_str(payload, "evaluator_id") or "",
        evaluator_name=opt_str(payload, "evaluator_name"),
        evaluation_type=parse_enum(EvaluationType, evaluation_type, "evaluation type") if evaluation_type else None,
        evaluation_period=opt_str(payload, "evaluation_period"),
        metrics=_metrics_from(pick(payload, "metrics")),
        max_score=max_score if max_score is not None else DEFAULT_MAX_SCORE,
        strengths=str_list(payload, "strengths"),
        areas_for_improvement=str_list(payload, "areas_for_improvement"),
        comments=opt_str(payload, "comments"),
        goals=str_list(payload, "goals"),
        status=parse_enum(EvaluationStatus, status, "status") if status else default_status,
    )


def register(app: Flask, container: Container) -> None:
    performances = container.performance_service

    @app.post("/api/hr/performance", endpoint="hr_performance_create")
    @roles_required(*_REVIEWERS)
    def create_performance():
        performance = performances.create_performance(performance_from_payload(request_payload()))
        return created("Performance evaluation created successfully", performance)

    @app.get("/api/hr/performance/pending", endpoint="hr_performance_pending")
    @roles_required(*_REVIEWERS)
    def pending_reviews():
        return listing("Pending reviews retrieved", performances.pending_reviews())

    @app.get("/api/hr/performance/status/<status>", endpoint="hr_performance_by_status")
    @roles_required(*_REVIEWERS)
    def by_status(status: str):
        return listing(
            "Performance records retrieved",
            performances.by_status(parse_enum(EvaluationStatus, status, "status")),
        )

    @app.get("/api/hr/performance/evaluator/<evaluator_id>", endpoint="hr_performance_by_evaluator")
    @roles_required(*_REVIEWERS)
    def by_evaluator(evaluator_id: str):
        return listing("Performance records retrieved", performances.by_evaluator(evaluator_id))

    @app.get("/api/hr/performance/student/<student_id>", endpoint="hr_performance_by_student")
    @roles_required(*_REVIEWERS)
    def by_student(student_id: str):
        return listing("Performance records retrieved", performances.by_student(student_id))

    @app.get("/api/hr/performance/student/<student_id>/latest", endpoint="hr_performance_latest")
    @roles_required(*_REVIEWERS)
    def latest(student_id: str):
        performance = performances.latest(student_id)
        if not performance:
            return fail(f"No performance records for student: {student_id}", 404)
        return ok("Latest performance retrieved", performance)

    @app.get("/api/hr/performance/<performance_id>", endpoint="hr_performance_get")
    @roles_required(*_REVIEWERS)
    def get_performance(performance_id: str):
        performance = performances.get(performance_id)
        if not performance:
            return fail(f"Performance not found with id: {performance_id}", 404)
        return ok("Performance found", performance)

    @app.put("/api/hr/performance/<performance_id>", endpoint="hr_performance_update")
    @roles_required(*_REVIEWERS)
    def update_performance(performance_id: str):
        changes = performance_from_payload(request_payload(), default_status=None)
        performance = performances.update_performance(performance_id, changes)
        if not performance:
            return fail(f"Performance not found with id: {performance_id}", 404)
        return ok("Performance updated successfully", performance)

    @app.put("/api/hr/performance/<performance_id>/approve", endpoint="hr_performance_approve")
    @roles_required(*_REVIEWERS)
    def approve(performance_id: str):
        if not performances.approve(performance_id):
            return fail(f"Performance not found with id: {performance_id}", 404)
        return ok("Performance approved successfully", performances.get(performance_id))

    @app.put("/api/hr/performance/<performance_id>/reject", endpoint="hr_performance_reject")
    @roles_required(*_REVIEWERS)
    def reject(performance_id: str):
        if not performances.reject(performance_id):
            return fail(f"Performance not found with id: {performance_id}", 404)
        return ok("Performance rejected successfully", performances.get(performance_id))

    @app.delete("/api/hr/performance/<performance_id>", endpoint="hr_performance_delete")
    @roles_required(*_REVIEWERS)
    def delete_performance(performance_id: str):
        if not performances.get(performance_id):
            return fail(f"Performance not found with id: {performance_id}", 404)
        performances.delete_performance(performance_id)
        return ok("Performance deleted successfully")
