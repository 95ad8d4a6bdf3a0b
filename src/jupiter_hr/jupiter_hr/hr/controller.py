from __future__ import annotations

from flask import Flask

from ..common.guards import roles_required
from ..common.responses import ok
from ..container import Container
from ..core.enums import Role


def student_summary(container: Container, student_id: str) -> dict:
    """Skill/performance/document counters for one student."""
    latest = container.performance_service.latest(student_id)
    return {
        "student_id": student_id,
        "total_skills": container.skill_service.count_by_student(student_id),
        "verified_skills": container.skill_service.count_verified_by_student(student_id),
        "total_performances": container.performance_service.count_by_student(student_id),
        "latest_overall_score": latest.overall_score if latest else None,
        "latest_grade": latest.grade if latest else None,
        "total_documents": container.document_service.count_by_student(student_id),
        "verified_documents": container.document_service.count_verified_by_student(student_id),
    }


def register(app: Flask, container: Container) -> None:
    @app.get("/api/hr/ping", endpoint="hr_ping")
    def ping():
        return ok("HR service is running", "pong")

    @app.get("/api/hr/status", endpoint="hr_status")
    def service_status():
        return ok(
            "HR service status",
            {
                "service": "hr",
                "status": "UP",
                "pending_documents": len(container.document_service.pending()),
                "pending_reviews": len(container.performance_service.pending_reviews()),
                "unverified_skills": len(container.skill_service.all_unverified()),
            },
        )

    @app.get("/api/hr/stats/student/<student_id>", endpoint="hr_student_stats")
    @roles_required(Role.HR, Role.ADMIN)
    def student_stats(student_id: str):
        return ok("Student statistics", student_summary(container, student_id))
