from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import now_local
from ..core.enums import DocumentStatus, DocumentType


@dataclass
class Document:
    """Metadata of a file a student uploaded (the file itself lives elsewhere)."""

    __json_extras__ = ("expired",)

    student_id: str
    document_name: str
    document_type: Optional[DocumentType] = None
    file_name: Optional[str] = None
    file_path: Optional[str] = None
    file_size: Optional[int] = None
    mime_type: Optional[str] = None
    description: Optional[str] = None
    upload_date: Optional[datetime] = None
    expiry_date: Optional[datetime] = None

    # HR verification; verified mirrors status == VERIFIED after a review.
    verified: bool = False
    verified_by_id: Optional[str] = None
    verified_by_name: Optional[str] = None
    verification_date: Optional[datetime] = None
    verification_remarks: Optional[str] = None

    status: DocumentStatus = DocumentStatus.PENDING
    confidential: bool = False
    tags: list[str] = field(default_factory=list)

    id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def is_expired(self, now: datetime) -> bool:
        return self.expiry_date is not None and self.expiry_date < now

    @property
    def expired(self) -> bool:
        """Derived from expiry_date; status is never changed by expiry."""
        return self.is_expired(now_local())
