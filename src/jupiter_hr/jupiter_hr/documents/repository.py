from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import DocumentStatus, DocumentType
from .model import Document


class DocumentRepository(Protocol):
    def save(self, document: Document) -> Document:
        raise NotImplementedError

    def get_by_id(self, document_id: str) -> Optional[Document]:
        raise NotImplementedError

    def list_by_student(self, student_id: str, *, verified: Optional[bool] = None) -> Sequence[Document]:
        """Newest upload first."""

        raise NotImplementedError

    def list_by_status(self, status: DocumentStatus) -> Sequence[Document]:
        raise NotImplementedError

    def list_by_type(self, document_type: DocumentType) -> Sequence[Document]:
        raise NotImplementedError

    def list_expired(self, now: datetime) -> Sequence[Document]:
        """Documents whose expiry_date is strictly before `now`."""

        raise NotImplementedError

    def list_expiring_between(self, start: datetime, end: datetime) -> Sequence[Document]:
        raise NotImplementedError

    def search_by_name(self, name: str) -> Sequence[Document]:
        raise NotImplementedError

    def count_by_student(self, student_id: str, *, verified: Optional[bool] = None) -> int:
        raise NotImplementedError

    def delete_by_id(self, document_id: str) -> None:
        raise NotImplementedError
