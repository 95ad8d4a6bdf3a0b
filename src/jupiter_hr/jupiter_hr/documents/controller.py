from __future__ import annotations

from flask import Flask, request

from ..common.guards import current_user, roles_required
from ..common.payload import opt_bool, opt_datetime, opt_int, opt_str, pick, request_payload, str_list
from ..common.responses import created, fail, listing, ok
from ..common.validators import parse_enum
from ..container import Container
from ..core.enums import DocumentType, Role
from .model import Document

_REVIEWERS = (Role.HR, Role.ADMIN)


def document_from_payload(payload: dict) -> Document:
    document_type = pick(payload, "document_type")
    return Document(
        student_id=opt_str(payload, "student_id") or "",
        document_name=opt_str(payload, "document_name") or "",
        document_type=parse_enum(DocumentType, document_type, "document type") if document_type else None,
        file_name=opt_str(payload, "file_name"),
        file_path=opt_str(payload, "file_path"),
        file_size=opt_int(payload, "file_size", "File size"),
        mime_type=opt_str(payload, "mime_type"),
        description=opt_str(payload, "description"),
        expiry_date=opt_datetime(payload, "expiry_date", "Expiry date"),
        confidential=opt_bool(payload, "confidential") or opt_bool(payload, "is_confidential"),
        tags=str_list(payload, "tags"),
    )


def register(app: Flask, container: Container) -> None:
    documents = container.document_service

    def review(document_id: str, verify: bool):
        payload = request_payload()
        reviewer = current_user()
        remarks = opt_str(payload, "remarks") or request.args.get("remarks")
        action = documents.verify if verify else documents.reject
        if not action(document_id, reviewer.user_id, reviewer.full_name or reviewer.username, remarks):
            return fail(f"Document not found with id: {document_id}", 404)
        message = "Document verified successfully" if verify else "Document rejected successfully"
        return ok(message, documents.get(document_id))

    @app.post("/api/hr/document", endpoint="hr_document_create")
    @roles_required(*_REVIEWERS)
    def create_document():
        document = documents.create_document(document_from_payload(request_payload()))
        return created("Document uploaded successfully", document)

    @app.get("/api/hr/document/pending", endpoint="hr_document_pending")
    @roles_required(*_REVIEWERS)
    def pending_documents():
        return listing("Pending documents retrieved", documents.pending())

    @app.get("/api/hr/document/expired", endpoint="hr_document_expired")
    @roles_required(*_REVIEWERS)
    def expired_documents():
        return listing("Expired documents retrieved", documents.expired())

    @app.get("/api/hr/document/expiring", endpoint="hr_document_expiring")
    @roles_required(*_REVIEWERS)
    def expiring_documents():
        return listing("Documents expiring soon retrieved", documents.expiring_soon())

    @app.get("/api/hr/document/search", endpoint="hr_document_search")
    @roles_required(*_REVIEWERS)
    def search_documents():
        return listing("Search results", documents.search_by_name(request.args.get("name", "")))

    @app.get("/api/hr/document/type/<document_type>", endpoint="hr_document_by_type")
    @roles_required(*_REVIEWERS)
    def documents_by_type(document_type: str):
        return listing(
            "Documents retrieved successfully",
            documents.by_type(parse_enum(DocumentType, document_type, "document type")),
        )

    @app.get("/api/hr/document/student/<student_id>", endpoint="hr_document_by_student")
    @roles_required(*_REVIEWERS)
    def documents_by_student(student_id: str):
        if request.args.get("verified", "").lower() in {"1", "true", "yes"}:
            return listing("Verified documents retrieved", documents.verified_by_student(student_id))
        return listing("Documents retrieved successfully", documents.by_student(student_id))

    @app.get("/api/hr/document/<document_id>", endpoint="hr_document_get")
    @roles_required(*_REVIEWERS)
    def get_document(document_id: str):
        document = documents.get(document_id)
        if not document:
            return fail(f"Document not found with id: {document_id}", 404)
        return ok("Document found", document)

    @app.put("/api/hr/document/<document_id>", endpoint="hr_document_update")
    @roles_required(*_REVIEWERS)
    def update_document(document_id: str):
        document = documents.update_document(document_id, document_from_payload(request_payload()))
        if not document:
            return fail(f"Document not found with id: {document_id}", 404)
        return ok("Document updated successfully", document)

    @app.put("/api/hr/document/<document_id>/verify", endpoint="hr_document_verify")
    @roles_required(*_REVIEWERS)
    def verify_document(document_id: str):
        return review(document_id, verify=True)

    @app.put("/api/hr/document/<document_id>/reject", endpoint="hr_document_reject")
    @roles_required(*_REVIEWERS)
    def reject_document(document_id: str):
        return review(document_id, verify=False)

    @app.delete("/api/hr/document/<document_id>", endpoint="hr_document_delete")
    @roles_required(*_REVIEWERS)
    def delete_document(document_id: str):
        if not documents.get(document_id):
            return fail(f"Document not found with id: {document_id}", 404)
        documents.delete_document(document_id)
        return ok("Document deleted successfully")
