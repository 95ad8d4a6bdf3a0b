from __future__ import annotations

import copy
import itertools
from datetime import date, datetime
from typing import Optional

import pytest

from src.jupiter_hr.jupiter_hr.container import wire
from src.jupiter_hr.jupiter_hr.core.enums import Role
from src.jupiter_hr.jupiter_hr.main import create_app
from src.jupiter_hr.jupiter_hr.users.service import UserService

_DT_MIN = datetime.min
_D_MIN = date.min


class _Store:
    """dict-backed table; records are copied in and out like a real store."""

    def __init__(self, prefix: str):
        self._rows: dict[str, object] = {}
        self._ids = itertools.count(1)
        self._prefix = prefix
        self.saves = 0

    def save(self, record):
        if not record.id:
            record.id = f"{self._prefix}{next(self._ids)}"
        self._rows[record.id] = copy.deepcopy(record)
        self.saves += 1
        return record

    def get_by_id(self, record_id):
        row = self._rows.get(record_id)
        return copy.deepcopy(row) if row else None

    def delete_by_id(self, record_id) -> None:
        self._rows.pop(record_id, None)

    def _all(self):
        return [copy.deepcopy(r) for r in self._rows.values()]

    def __len__(self):
        return len(self._rows)


def _contains(haystack: Optional[str], needle: str) -> bool:
    return needle.lower() in (haystack or "").lower()


class InMemoryUsers(_Store):
    def __init__(self):
        super().__init__("u")

    def get_by_username(self, username):
        return next((u for u in self._all() if u.username == username), None)

    def get_by_email(self, email):
        return next((u for u in self._all() if u.email == email), None)

    def exists_by_username(self, username):
        return self.get_by_username(username) is not None

    def exists_by_email(self, email):
        return self.get_by_email(email) is not None

    def list_all(self, *, role=None, active=None):
        return [u for u in self._all() if (role is None or u.role == role) and (active is None or u.is_active == active)]

    def search_by_full_name(self, name):
        return [u for u in self._all() if _contains(u.full_name, name)]

    def count_by_role(self, role):
        return len(self.list_all(role=role))


class InMemoryStudents(_Store):
    def __init__(self):
        super().__init__("s")

    def _first(self, **match):
        return next((s for s in self._all() if all(getattr(s, k) == v for k, v in match.items())), None)

    def get_by_student_code(self, student_code):
        return self._first(student_code=student_code)

    def get_by_email(self, email):
        return self._first(email=email)

    def get_by_user_id(self, user_id):
        return self._first(user_id=user_id)

    def exists_by_student_code(self, student_code):
        return self.get_by_student_code(student_code) is not None

    def exists_by_email(self, email):
        return self.get_by_email(email) is not None

    def list_filtered(self, *, department=None, course=None, status=None, semester=None, min_cgpa=None):
        out = [
            s
            for s in self._all()
            if (department is None or s.department == department)
            and (course is None or s.course == course)
            and (status is None or s.status == status)
            and (semester is None or s.semester == semester)
            and (min_cgpa is None or (s.cgpa is not None and s.cgpa >= min_cgpa))
        ]
        return sorted(out, key=lambda s: s.student_code)

    def list_page(self, *, offset, limit):
        newest = sorted(self._all(), key=lambda s: s.created_at or _DT_MIN, reverse=True)
        return newest[offset : offset + limit]

    def search_by_name(self, name):
        return [s for s in self._all() if _contains(s.first_name, name) or _contains(s.last_name, name)]

    def count(self, *, department=None, status=None):
        return len(self.list_filtered(department=department, status=status))


class InMemorySkills(_Store):
    def __init__(self):
        super().__init__("k")

    def list_by_student(self, student_id, *, verified=None):
        out = [
            s for s in self._all() if s.student_id == student_id and (verified is None or s.verified_by_hr == verified)
        ]
        return sorted(out, key=lambda s: s.skill_name)

    def list_unverified(self):
        return sorted((s for s in self._all() if not s.verified_by_hr), key=lambda s: s.created_at or _DT_MIN)

    def list_by_category(self, category):
        return [s for s in self._all() if s.category == category]

    def search_by_name(self, name):
        return [s for s in self._all() if _contains(s.skill_name, name)]

    def count_by_student(self, student_id, *, verified=None):
        return len(self.list_by_student(student_id, verified=verified))


class InMemoryPerformances(_Store):
    def __init__(self):
        super().__init__("p")

    @staticmethod
    def _newest_first(rows):
        return sorted(rows, key=lambda p: (p.evaluation_date or _D_MIN, p.created_at or _DT_MIN), reverse=True)

    def list_by_student(self, student_id):
        return self._newest_first(p for p in self._all() if p.student_id == student_id)

    def latest_for_student(self, student_id):
        rows = self.list_by_student(student_id)
        return rows[0] if rows else None

    def list_by_evaluator(self, evaluator_id):
        return self._newest_first(p for p in self._all() if p.evaluator_id == evaluator_id)

    def list_by_status(self, status):
        return self._newest_first(p for p in self._all() if p.status == status)

    def count_by_student(self, student_id):
        return len(self.list_by_student(student_id))


class InMemoryDocuments(_Store):
    def __init__(self):
        super().__init__("d")

    def list_by_student(self, student_id, *, verified=None):
        rows = [d for d in self._all() if d.student_id == student_id and (verified is None or d.verified == verified)]
        return sorted(rows, key=lambda d: d.upload_date or _DT_MIN, reverse=True)

    def list_by_status(self, status):
        return sorted((d for d in self._all() if d.status == status), key=lambda d: d.upload_date or _DT_MIN)

    def list_by_type(self, document_type):
        return [d for d in self._all() if d.document_type == document_type]

    def list_expired(self, now):
        return [d for d in self._all() if d.expiry_date is not None and d.expiry_date < now]

    def list_expiring_between(self, start, end):
        return [d for d in self._all() if d.expiry_date is not None and start < d.expiry_date < end]

    def search_by_name(self, name):
        return [d for d in self._all() if _contains(d.document_name, name)]

    def count_by_student(self, student_id, *, verified=None):
        return len(self.list_by_student(student_id, verified=verified))


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 3, 2, 9, 30, 0)


@pytest.fixture
def container():
    return wire(
        users_repo=InMemoryUsers(),
        students_repo=InMemoryStudents(),
        skills_repo=InMemorySkills(),
        performances_repo=InMemoryPerformances(),
        documents_repo=InMemoryDocuments(),
    )


@pytest.fixture
def app(container):
    app = create_app(container, settings_module="config.testing")
    app.config.update(TESTING=True)
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def accounts(container):
    """One active account per role, password 'secret1'."""
    service = UserService(container.users_repo)
    return {
        role: service.create_user(
            username=role.value.lower(),
            password="secret1",
            email=f"{role.value.lower()}@jupiter.edu",
            full_name=f"{role.value.title()} User",
            role=role,
        )
        for role in Role
    }


@pytest.fixture
def login(client, accounts):
    def _login(role: Role):
        resp = client.post("/login", json={"username": role.value.lower(), "password": "secret1"})
        assert resp.status_code == 200, resp.get_json()
        return accounts[role]

    return _login
