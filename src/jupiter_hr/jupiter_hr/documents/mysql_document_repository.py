from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..core.enums import DocumentStatus, DocumentType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, dump_json, fetchall, fetchone, like_pattern, load_json, new_id
from .model import Document
from .repository import DocumentRepository

_COLUMNS = (
    "id, student_id, document_name, document_type, file_name, file_path, file_size, mime_type, "
    "description, upload_date, expiry_date, is_verified, verified_by_id, verified_by_name, "
    "verification_date, verification_remarks, status, is_confidential, tags, created_at, updated_at"
)


def _row_to_document(row: dict) -> Document:
    return Document(
        id=row["id"],
        student_id=row["student_id"],
        document_name=row["document_name"],
        document_type=DocumentType(row["document_type"]) if row.get("document_type") else None,
        file_name=row.get("file_name"),
        file_path=row.get("file_path"),
        file_size=int(row["file_size"]) if row.get("file_size") is not None else None,
        mime_type=row.get("mime_type"),
        description=row.get("description"),
        upload_date=row.get("upload_date"),
        expiry_date=row.get("expiry_date"),
        verified=bool(row.get("is_verified")),
        verified_by_id=row.get("verified_by_id"),
        verified_by_name=row.get("verified_by_name"),
        verification_date=row.get("verification_date"),
        verification_remarks=row.get("verification_remarks"),
        status=DocumentStatus(row.get("status") or DocumentStatus.PENDING.value),
        confidential=bool(row.get("is_confidential")),
        tags=list(load_json(row.get("tags"), [])),
        created_at=row.get("created_at"),
        updated_at=row.get("updated_at"),
    )


class MySQLDocumentRepository(DocumentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def save(self, document: Document) -> Document:
        if not document.id:
            document.id = new_id()
        d = document
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                INSERT INTO documents({_COLUMNS})
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    student_id=VALUES(student_id),
                    document_name=VALUES(document_name),
                    document_type=VALUES(document_type),
                    file_name=VALUES(file_name),
                    file_path=VALUES(file_path),
                    file_size=VALUES(file_size),
                    mime_type=VALUES(mime_type),
                    description=VALUES(description),
                    upload_date=VALUES(upload_date),
                    expiry_date=VALUES(expiry_date),
                    is_verified=VALUES(is_verified),
                    verified_by_id=VALUES(verified_by_id),
                    verified_by_name=VALUES(verified_by_name),
                    verification_date=VALUES(verification_date),
                    verification_remarks=VALUES(verification_remarks),
                    status=VALUES(status),
                    is_confidential=VALUES(is_confidential),
                    tags=VALUES(tags),
                    updated_at=VALUES(updated_at)
                """,
                (
                    d.id,
                    d.student_id,
                    d.document_name,
                    d.document_type.value if d.document_type else None,
                    d.file_name,
                    d.file_path,
                    d.file_size,
                    d.mime_type,
                    d.description,
                    d.upload_date,
                    d.expiry_date,
                    1 if d.verified else 0,
                    d.verified_by_id,
                    d.verified_by_name,
                    d.verification_date,
                    d.verification_remarks,
                    d.status.value,
                    1 if d.confidential else 0,
                    dump_json(list(d.tags)),
                    d.created_at,
                    d.updated_at,
                ),
            )
        return document

    def _select(self, where: str, params: tuple, order: str = "ORDER BY upload_date DESC") -> Sequence[Document]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM documents WHERE {where} {order}", params)
            return [_row_to_document(r) for r in fetchall(cur)]

    def get_by_id(self, document_id: str) -> Optional[Document]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM documents WHERE id=%s", (document_id,))
            row = fetchone(cur)
            return _row_to_document(row) if row else None

    def list_by_student(self, student_id: str, *, verified: Optional[bool] = None) -> Sequence[Document]:
        if verified is None:
            return self._select("student_id=%s", (student_id,))
        return self._select("student_id=%s AND is_verified=%s", (student_id, 1 if verified else 0))

    def list_by_status(self, status: DocumentStatus) -> Sequence[Document]:
        return self._select("status=%s", (status.value,), order="ORDER BY upload_date")

    def list_by_type(self, document_type: DocumentType) -> Sequence[Document]:
        return self._select("document_type=%s", (document_type.value,))

    def list_expired(self, now: datetime) -> Sequence[Document]:
        return self._select("expiry_date IS NOT NULL AND expiry_date < %s", (now,), order="ORDER BY expiry_date")

    def list_expiring_between(self, start: datetime, end: datetime) -> Sequence[Document]:
        return self._select("expiry_date > %s AND expiry_date < %s", (start, end), order="ORDER BY expiry_date")

    def search_by_name(self, name: str) -> Sequence[Document]:
        return self._select("LOWER(document_name) LIKE %s", (like_pattern(name),), order="ORDER BY document_name")

    def count_by_student(self, student_id: str, *, verified: Optional[bool] = None) -> int:
        sql = "SELECT COUNT(*) AS n FROM documents WHERE student_id=%s"
        params: list[object] = [student_id]
        if verified is not None:
            sql += " AND is_verified=%s"
            params.append(1 if verified else 0)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            row = fetchone(cur)
            return int(row["n"]) if row else 0

    def delete_by_id(self, document_id: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM documents WHERE id=%s", (document_id,))
