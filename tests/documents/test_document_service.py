from datetime import timedelta

import pytest

from src.jupiter_hr.jupiter_hr.common.responses import to_jsonable
from src.jupiter_hr.jupiter_hr.core.enums import DocumentStatus, DocumentType
from src.jupiter_hr.jupiter_hr.core.exceptions import ValidationError
from src.jupiter_hr.jupiter_hr.documents import model
from src.jupiter_hr.jupiter_hr.documents.model import Document


def _doc(name="Transcript", student_id="s1", **kw):
    return Document(student_id=student_id, document_name=name, **kw)


def test_create_sets_pending_and_upload_date(container, fixed_now):
    doc = container.document_service.create_document(
        _doc(status=DocumentStatus.VERIFIED, verified=True), now=fixed_now
    )

    assert doc.id
    assert doc.status == DocumentStatus.PENDING
    assert doc.verified is False
    assert doc.upload_date == fixed_now


@pytest.mark.parametrize("student_id,name", [("", "CV"), ("s1", "")])
def test_create_requires_student_and_name(container, student_id, name):
    with pytest.raises(ValidationError):
        container.document_service.create_document(_doc(name=name, student_id=student_id))


def test_verify_records_reviewer(container, fixed_now):
    service = container.document_service
    doc = service.create_document(_doc(), now=fixed_now)

    assert service.verify(doc.id, "hr-1", "HR Manager", "looks good", now=fixed_now) is True

    stored = service.get(doc.id)
    assert stored.status == DocumentStatus.VERIFIED
    assert stored.verified is True
    assert stored.verified_by_id == "hr-1"
    assert stored.verified_by_name == "HR Manager"
    assert stored.verification_remarks == "looks good"
    assert stored.verification_date == fixed_now


def test_verify_then_reject_ends_rejected(container):
    service = container.document_service
    doc = service.create_document(_doc())

    service.verify(doc.id, "hr-1", "HR Manager", "ok")
    service.reject(doc.id, "hr-2", "HR Assistant", "blurry scan")

    stored = service.get(doc.id)
    assert stored.status == DocumentStatus.REJECTED
    assert stored.verified is False
    assert stored.verified_by_id == "hr-2"
    assert stored.verification_remarks == "blurry scan"


def test_review_unknown_document_is_not_found(container):
    assert container.document_service.verify("missing", "hr-1") is False
    assert container.document_service.reject("missing", "hr-1") is False


def test_by_student_newest_upload_first(container, fixed_now):
    service = container.document_service
    service.create_document(_doc("Old"), now=fixed_now)
    newer = service.create_document(_doc("New"), now=fixed_now + timedelta(days=1))
    service.create_document(_doc("Other", student_id="s2"), now=fixed_now)
    service.verify(newer.id, "hr-1")

    assert [d.document_name for d in service.by_student("s1")] == ["New", "Old"]
    assert [d.document_name for d in service.verified_by_student("s1")] == ["New"]
    assert [d.document_name for d in service.pending()] == ["Old", "Other"]
    assert service.count_by_student("s1") == 2
    assert service.count_verified_by_student("s1") == 1


def test_expired_and_expiring_are_computed_not_stored(container, fixed_now):
    service = container.document_service
    expired = service.create_document(_doc("Visa", expiry_date=fixed_now - timedelta(days=1)), now=fixed_now)
    soon = service.create_document(_doc("Passport", expiry_date=fixed_now + timedelta(days=10)), now=fixed_now)
    service.create_document(_doc("ID", expiry_date=fixed_now + timedelta(days=45)), now=fixed_now)
    service.create_document(_doc("Resume"), now=fixed_now)

    assert [d.id for d in service.expired(now=fixed_now)] == [expired.id]
    assert [d.id for d in service.expiring_soon(now=fixed_now)] == [soon.id]
    assert service.get(expired.id).status == DocumentStatus.PENDING
    assert service.get(expired.id).is_expired(fixed_now)
    assert not service.get(soon.id).is_expired(fixed_now)


def test_update_keeps_review_outcome(container, fixed_now):
    service = container.document_service
    doc = service.create_document(_doc(), now=fixed_now)
    service.verify(doc.id, "hr-1")

    updated = service.update_document(
        doc.id, _doc("Final transcript", document_type=DocumentType.TRANSCRIPT, tags=["2025"])
    )

    assert updated.document_name == "Final transcript"
    assert updated.document_type == DocumentType.TRANSCRIPT
    assert updated.tags == ["2025"]
    assert updated.status == DocumentStatus.VERIFIED
    assert updated.verified is True
    assert service.update_document("missing", _doc()) is None


def test_search_type_and_delete(container):
    service = container.document_service
    cv = service.create_document(_doc("My CV", document_type=DocumentType.RESUME))
    service.create_document(_doc("Offer", document_type=DocumentType.OFFER_LETTER))

    assert [d.id for d in service.search_by_name("cv")] == [cv.id]
    assert [d.id for d in service.by_type(DocumentType.RESUME)] == [cv.id]

    service.delete_document(cv.id)
    assert service.get(cv.id) is None


def test_negative_file_size_rejected(container):
    service = container.document_service
    with pytest.raises(ValidationError):
        service.create_document(_doc(file_size=-1))

    doc = service.create_document(_doc(file_size=0))
    with pytest.raises(ValidationError):
        service.update_document(doc.id, _doc(file_size=-10))
    assert service.get(doc.id).file_size == 0


def test_expired_flag_serialized_from_expiry_date(monkeypatch, fixed_now):
    monkeypatch.setattr(model, "now_local", lambda: fixed_now)
    past = to_jsonable(_doc(expiry_date=fixed_now - timedelta(seconds=1)))
    future = to_jsonable(_doc(expiry_date=fixed_now + timedelta(days=1)))

    assert past["expired"] is True
    assert past["status"] == "PENDING"
    assert future["expired"] is False
    assert to_jsonable(_doc())["expired"] is False
