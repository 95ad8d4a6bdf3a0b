from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.validators import check_range, require_non_empty
from ..core.constants import DEFAULT_EXPIRY_WARNING_DAYS
from ..core.enums import DocumentStatus, DocumentType, ReviewAction
from ..workflow.transitions import DocumentState, next_document_state
from .model import Document
from .repository import DocumentRepository

logger = logging.getLogger(__name__)


class DocumentService:
    def __init__(self, documents: DocumentRepository, *, expiry_warning_days: int = DEFAULT_EXPIRY_WARNING_DAYS):
        self._documents = documents
        self._expiry_warning_days = int(expiry_warning_days)

    def create_document(self, document: Document, *, now: Optional[datetime] = None) -> Document:
        document.student_id = require_non_empty(document.student_id, "Student ID")
        document.document_name = require_non_empty(document.document_name, "Document name")
        check_range(document.file_size, "File size", low=0)
        logger.info("creating document '%s' for student %s", document.document_name, document.student_id)

        now = now or now_local()
        document.id = None
        document.upload_date = now
        document.created_at = now
        document.updated_at = now
        document.status = DocumentStatus.PENDING
        document.verified = False
        saved = self._documents.save(document)
        logger.info("document created: %s", saved.id)
        return saved

    def get(self, document_id: str) -> Optional[Document]:
        return self._documents.get_by_id(document_id)

    def by_student(self, student_id: str) -> Sequence[Document]:
        return self._documents.list_by_student(student_id)

    def verified_by_student(self, student_id: str) -> Sequence[Document]:
        return self._documents.list_by_student(student_id, verified=True)

    def pending(self) -> Sequence[Document]:
        return self._documents.list_by_status(DocumentStatus.PENDING)

    def by_type(self, document_type: DocumentType) -> Sequence[Document]:
        return self._documents.list_by_type(document_type)

    def verify(
        self,
        document_id: str,
        hr_id: str,
        hr_name: Optional[str] = None,
        remarks: Optional[str] = None,
        *,
        now: Optional[datetime] = None,
    ) -> bool:
        return self._review(document_id, ReviewAction.VERIFY, hr_id, hr_name, remarks, now)

    def reject(
        self,
        document_id: str,
        hr_id: str,
        hr_name: Optional[str] = None,
        remarks: Optional[str] = None,
        *,
        now: Optional[datetime] = None,
    ) -> bool:
        return self._review(document_id, ReviewAction.REJECT, hr_id, hr_name, remarks, now)

    def _review(
        self,
        document_id: str,
        action: ReviewAction,
        hr_id: str,
        hr_name: Optional[str],
        remarks: Optional[str],
        now: Optional[datetime],
    ) -> bool:
        logger.info("%s document %s by HR %s", action.value.lower(), document_id, hr_id)
        document = self._documents.get_by_id(document_id)
        if not document:
            logger.warning("document not found for %s: %s", action.value.lower(), document_id)
            return False

        now = now or now_local()
        state = next_document_state(DocumentState(document.status, document.verified), action)
        document.status = state.status
        document.verified = state.verified
        document.verified_by_id = hr_id
        document.verified_by_name = hr_name
        document.verification_date = now
        document.verification_remarks = remarks
        document.updated_at = now
        self._documents.save(document)
        logger.info("document %s -> %s", document_id, document.status.value)
        return True

    def update_document(self, document_id: str, changes: Document, *, now: Optional[datetime] = None) -> Optional[Document]:
        """Overwrite descriptive fields; the review outcome is left alone."""
        existing = self._documents.get_by_id(document_id)
        if not existing:
            logger.warning("document not found for update: %s", document_id)
            return None

        existing.document_name = require_non_empty(changes.document_name, "Document name")
        existing.document_type = changes.document_type
        existing.file_name = changes.file_name
        existing.file_path = changes.file_path
        existing.file_size = check_range(changes.file_size, "File size", low=0)
        existing.mime_type = changes.mime_type
        existing.description = changes.description
        existing.expiry_date = changes.expiry_date
        existing.confidential = changes.confidential
        existing.tags = list(changes.tags)
        existing.updated_at = now or now_local()
        saved = self._documents.save(existing)
        logger.info("document updated: %s", document_id)
        return saved

    def delete_document(self, document_id: str) -> None:
        logger.info("deleting document %s", document_id)
        self._documents.delete_by_id(document_id)

    def expired(self, *, now: Optional[datetime] = None) -> Sequence[Document]:
        return self._documents.list_expired(now or now_local())

    def expiring_soon(self, *, now: Optional[datetime] = None) -> Sequence[Document]:
        now = now or now_local()
        return self._documents.list_expiring_between(now, now + timedelta(days=self._expiry_warning_days))

    def search_by_name(self, name: str) -> Sequence[Document]:
        name = require_non_empty(name, "Name")
        return self._documents.search_by_name(name)

    def count_by_student(self, student_id: str) -> int:
        return self._documents.count_by_student(student_id)

    def count_verified_by_student(self, student_id: str) -> int:
        return self._documents.count_by_student(student_id, verified=True)
