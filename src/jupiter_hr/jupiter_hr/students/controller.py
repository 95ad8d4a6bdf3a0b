from __future__ import annotations

from typing import Optional

from flask import Flask, request

from ..common.guards import login_required, roles_required
from ..common.payload import opt_date, opt_int, opt_str, pick, request_payload
from ..common.responses import created, fail, listing, ok
from ..common.validators import parse_enum, parse_optional_float
from ..container import Container
from ..core.constants import DEFAULT_PAGE_SIZE
from ..core.enums import Role, StudentStatus
from ..core.exceptions import ValidationError
from .model import Address, Student

_WRITERS = (Role.HR, Role.ADMIN)


def student_from_payload(payload: dict, *, default_status: Optional[StudentStatus] = StudentStatus.ACTIVE) -> Student:
    status = pick(payload, "status")
    return Student(
        student_code=opt_str(payload, "student_code") or "",
        first_name=opt_str(payload, "first_name") or "",
        last_name=opt_str(payload, "last_name"),
        email=opt_str(payload, "email") or "",
        user_id=opt_str(payload, "user_id"),
        phone=opt_str(payload, "phone"),
        date_of_birth=opt_date(payload, "date_of_birth", "Date of birth"),
        gender=opt_str(payload, "gender"),
        address=Address.from_dict(pick(payload, "address")),
        department=opt_str(payload, "department"),
        course=opt_str(payload, "course"),
        semester=opt_int(payload, "semester", "Semester"),
        enrollment_date=opt_date(payload, "enrollment_date", "Enrollment date"),
        graduation_date=opt_date(payload, "graduation_date", "Graduation date"),
        cgpa=parse_optional_float(pick(payload, "cgpa"), "CGPA"),
        status=parse_enum(StudentStatus, status, "status") if status else default_status,
    )


def register(app: Flask, container: Container) -> None:
    students = container.student_service

    @app.get("/api/students/ping", endpoint="students_ping")
    def ping():
        return ok("Student service is running", "pong")

    @app.get("/api/students/status", endpoint="students_status")
    def service_status():
        return ok("Student service status", {"service": "students", "status": "UP", "total_students": students.count_all()})

    @app.post("/api/students", endpoint="students_create")
    @roles_required(*_WRITERS)
    def create_student():
        student = students.create_student(student_from_payload(request_payload()))
        return created("Student created successfully", student)

    @app.get("/api/students", endpoint="students_list")
    @login_required
    def list_students():
        args = request.args
        if "page" in args or "size" in args:
            try:
                page_no = int(args.get("page", 0))
                size = int(args.get("size", DEFAULT_PAGE_SIZE))
            except ValueError:
                raise ValidationError("page and size must be integers")
            page = students.page(page_no, size)
            return ok(
                "Students retrieved successfully",
                list(page.items),
                current_page=page.page,
                total_items=page.total_items,
                total_pages=page.total_pages,
            )
        if args.get("course"):
            return listing("Students retrieved successfully", students.by_course(args["course"]))
        if args.get("semester"):
            semester = opt_int(args.to_dict(), "semester", "Semester")
            return listing("Students retrieved successfully", students.by_semester(semester))
        if args.get("min_cgpa"):
            min_cgpa = parse_optional_float(args["min_cgpa"], "min_cgpa")
            return listing("Students retrieved successfully", students.with_min_cgpa(min_cgpa))
        return listing("Students retrieved successfully", students.list_all())

    @app.get("/api/students/stats", endpoint="students_stats")
    @login_required
    def student_stats():
        return ok("Student statistics", students.stats())

    @app.get("/api/students/search", endpoint="students_search")
    @login_required
    def search_students():
        return listing("Search results", students.search_by_name(request.args.get("name", "")))

    @app.get("/api/students/department/<department>", endpoint="students_by_department")
    @login_required
    def by_department(department: str):
        return listing("Students retrieved successfully", students.by_department(department))

    @app.get("/api/students/status/<status>", endpoint="students_by_status")
    @login_required
    def by_status(status: str):
        return listing("Students retrieved successfully", students.by_status(parse_enum(StudentStatus, status, "status")))

    @app.get("/api/students/code/<student_code>", endpoint="students_by_code")
    @login_required
    def by_code(student_code: str):
        student = students.get_by_code(student_code)
        if not student:
            return fail(f"Student not found with code: {student_code}", 404)
        return ok("Student found", student)

    @app.get("/api/students/<student_id>", endpoint="students_get")
    @login_required
    def get_student(student_id: str):
        student = students.get(student_id)
        if not student:
            return fail(f"Student not found with id: {student_id}", 404)
        return ok("Student found", student)

    @app.put("/api/students/<student_id>", endpoint="students_update")
    @roles_required(*_WRITERS)
    def update_student(student_id: str):
        student = students.update_student(student_id, student_from_payload(request_payload(), default_status=None))
        if not student:
            return fail(f"Student not found with id: {student_id}", 404)
        return ok("Student updated successfully", student)

    @app.patch("/api/students/<student_id>/status", endpoint="students_update_status")
    @roles_required(*_WRITERS)
    def update_status(student_id: str):
        raw = request.args.get("status") or pick(request_payload(), "status")
        student = students.update_status(student_id, parse_enum(StudentStatus, raw, "status"))
        if not student:
            return fail(f"Student not found with id: {student_id}", 404)
        return ok("Student status updated successfully", student)

    @app.patch("/api/students/<student_id>/cgpa", endpoint="students_update_cgpa")
    @roles_required(*_WRITERS)
    def update_cgpa(student_id: str):
        raw = request.args.get("cgpa") or pick(request_payload(), "cgpa")
        cgpa = parse_optional_float(raw, "CGPA")
        if cgpa is None:
            raise ValidationError("CGPA is required")
        student = students.update_cgpa(student_id, cgpa)
        if not student:
            return fail(f"Student not found with id: {student_id}", 404)
        return ok("Student CGPA updated successfully", student)

    @app.post("/api/students/<student_id>/skills/<skill_id>", endpoint="students_add_skill")
    @roles_required(*_WRITERS)
    def add_skill(student_id: str, skill_id: str):
        student = students.add_skill(student_id, skill_id)
        if not student:
            return fail(f"Student not found with id: {student_id}", 404)
        return ok("Skill added to student successfully", student)

    @app.post("/api/students/<student_id>/documents/<document_id>", endpoint="students_add_document")
    @roles_required(*_WRITERS)
    def add_document(student_id: str, document_id: str):
        student = students.add_document(student_id, document_id)
        if not student:
            return fail(f"Student not found with id: {student_id}", 404)
        return ok("Document added to student successfully", student)

    @app.delete("/api/students/<student_id>", endpoint="students_delete")
    @roles_required(*_WRITERS)
    def delete_student(student_id: str):
        if not students.get(student_id):
            return fail(f"Student not found with id: {student_id}", 404)
        students.delete_student(student_id)
        return ok("Student deleted successfully")
