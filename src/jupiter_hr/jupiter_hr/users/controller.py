from __future__ import annotations

from typing import Optional

from flask import Flask, request, session

from ..common.guards import current_user, login_required, roles_required, store_identity
from ..common.payload import opt_str, pick, request_payload
from ..common.responses import created, fail, listing, ok
from ..common.validators import parse_enum
from ..container import Container
from ..core.enums import EvaluationStatus, Role, StudentStatus
from ..core.exceptions import ValidationError
from .model import SessionUser
from .routing import LOGIN_PATH, can_access, dashboard_path_for


def _deny(user: Optional[SessionUser]):
    if user is None:
        return fail("Please log in to continue", 401)
    return fail("You do not have permission to access this resource", 403)


def register(app: Flask, container: Container) -> None:
    @app.get("/", endpoint="index")
    def index():
        user = current_user()
        return ok("Jupiter HR", {"redirect": dashboard_path_for(user.role if user else None)})

    @app.get("/login", endpoint="login_form")
    def login_form():
        user = current_user()
        if user is not None:
            return ok("Already logged in", {"user": user, "redirect": dashboard_path_for(user.role)})
        return ok("Send username and password to log in", {"redirect": LOGIN_PATH})

    @app.post("/login", endpoint="login")
    def login():
        payload = request_payload()
        s_user = container.auth_service.authenticate(
            str(pick(payload, "username", "") or ""),
            str(pick(payload, "password", "") or ""),
        )

        session.clear()
        session.permanent = True
        store_identity(s_user)
        return ok("Login successful", {"user": s_user, "redirect": dashboard_path_for(s_user.role)})

    @app.get("/logout", endpoint="logout")
    def logout():
        session.clear()
        return ok("You have been logged out successfully", {"redirect": LOGIN_PATH})

    @app.get("/me", endpoint="me")
    @login_required
    def me():
        return ok("Current user", current_user())

    @app.get("/student/dashboard", endpoint="student_dashboard")
    def student_dashboard():
        user = current_user()
        if not can_access(user.role if user else None, "student"):
            return _deny(user)

        student = container.student_service.get_by_user_id(user.user_id)
        data = {"user": user, "student": student, "skills": [], "performances": [], "documents": []}
        if student:
            data["skills"] = container.skill_service.by_student(student.id)
            data["performances"] = container.performance_service.by_student(student.id)
            data["documents"] = container.document_service.by_student(student.id)
        return ok("Student dashboard", data)

    @app.get("/hr/dashboard", endpoint="hr_dashboard")
    def hr_dashboard():
        user = current_user()
        if not can_access(user.role if user else None, "hr"):
            return _deny(user)

        students = container.student_service
        return ok(
            "HR dashboard",
            {
                "user": user,
                "total_students": students.count_all(),
                "active_students": students.count_by_status(StudentStatus.ACTIVE),
                "unverified_skills": len(container.skill_service.all_unverified()),
                "pending_documents": len(container.document_service.pending()),
                "expiring_documents": len(container.document_service.expiring_soon()),
                "pending_reviews": len(container.performance_service.pending_reviews()),
            },
        )

    @app.get("/admin/dashboard", endpoint="admin_dashboard")
    def admin_dashboard():
        user = current_user()
        if not can_access(user.role if user else None, "admin"):
            return _deny(user)

        users = container.user_service
        return ok(
            "Admin dashboard",
            {
                "user": user,
                "users_by_role": {role.value: users.count_by_role(role) for role in Role},
                "total_students": container.student_service.count_all(),
                "approved_reviews": len(container.performance_service.by_status(EvaluationStatus.APPROVED)),
                "pending_documents": len(container.document_service.pending()),
            },
        )

    @app.get("/api/admin/users", endpoint="admin_users_list")
    @roles_required(Role.ADMIN)
    def admin_users():
        role = request.args.get("role")
        active = request.args.get("active")
        name = request.args.get("name")
        if name:
            return listing("Users retrieved successfully", container.user_service.search_by_name(name))
        return listing(
            "Users retrieved successfully",
            container.user_service.list_users(
                role=parse_enum(Role, role, "role") if role else None,
                active=(active.lower() in {"1", "true", "yes"}) if active else None,
            ),
        )

    @app.post("/api/admin/users", endpoint="admin_users_create")
    @roles_required(Role.ADMIN)
    def add_user():
        payload = request_payload()
        role = pick(payload, "role")
        user = container.user_service.create_user(
            username=opt_str(payload, "username") or "",
            password=str(pick(payload, "password", "") or ""),
            email=opt_str(payload, "email") or "",
            full_name=opt_str(payload, "full_name") or "",
            role=parse_enum(Role, role, "role") if role else Role.STUDENT,
        )
        return created("User created successfully", user)

    @app.patch("/api/admin/users/<user_id>/activate", endpoint="admin_users_activate")
    @roles_required(Role.ADMIN)
    def activate_user(user_id: str):
        if not container.user_service.set_active(user_id, is_active=True):
            return fail(f"User not found with id: {user_id}", 404)
        return ok("User activated successfully", container.user_service.get(user_id))

    @app.patch("/api/admin/users/<user_id>/deactivate", endpoint="admin_users_deactivate")
    @roles_required(Role.ADMIN)
    def deactivate_user(user_id: str):
        if user_id == current_user().user_id:
            raise ValidationError("You cannot deactivate your own account")
        if not container.user_service.set_active(user_id, is_active=False):
            return fail(f"User not found with id: {user_id}", 404)
        return ok("User deactivated successfully", container.user_service.get(user_id))

    @app.patch("/api/admin/users/<user_id>/password", endpoint="admin_users_password")
    @roles_required(Role.ADMIN)
    def change_password(user_id: str):
        password = str(pick(request_payload(), "password", "") or "")
        if not container.user_service.update_password(user_id, password):
            return fail(f"User not found with id: {user_id}", 404)
        return ok("Password updated successfully")

    @app.delete("/api/admin/users/<user_id>", endpoint="admin_users_delete")
    @roles_required(Role.ADMIN)
    def delete_user(user_id: str):
        if user_id == current_user().user_id:
            raise ValidationError("You cannot delete your own account")
        if not container.user_service.get(user_id):
            return fail(f"User not found with id: {user_id}", 404)
        container.user_service.delete_user(user_id)
        return ok("User deleted successfully")
