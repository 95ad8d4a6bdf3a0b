from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional, Sequence

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.datetime_utils import now_local
from ..common.validators import require_min_length, require_non_empty
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, DuplicateRecordError
from .model import SessionUser, User
from .repository import UserRepository

logger = logging.getLogger(__name__)


class AuthService:
    """Use case: authenticate user (login)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def authenticate(self, username: str, password: str, *, now: Optional[datetime] = None) -> SessionUser:
        username = (username or "").strip()
        if not username or not (password or "").strip():
            raise AuthenticationError("Username and password are required")

        user = self._users.get_by_username(username)
        if not user or not user.is_active:
            logger.warning("login rejected for %s (unknown or inactive)", username)
            raise AuthenticationError("Invalid username or password")

        try:
            ok = check_password_hash(user.password_hash, password)
        except Exception:
            # e.g. placeholder hashes or corrupted values
            ok = False

        if not ok:
            logger.warning("login rejected for %s (bad password)", username)
            raise AuthenticationError("Invalid username or password")

        user.last_login = now or now_local()
        self._users.save(user)
        logger.info("user %s logged in with role %s", username, user.role.value)
        return SessionUser.from_user(user)


class UserService:
    """Use case: manage users (admin)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def create_user(
        self,
        *,
        username: str,
        password: str,
        email: str,
        full_name: str = "",
        role: Role = Role.STUDENT,
        now: Optional[datetime] = None,
    ) -> User:
        username = require_non_empty(username, "Username")
        email = require_non_empty(email, "Email")
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)

        if self._users.exists_by_username(username):
            raise DuplicateRecordError(f"Username already exists: {username}")
        if self._users.exists_by_email(email):
            raise DuplicateRecordError(f"Email already exists: {email}")

        now = now or now_local()
        user = User(
            username=username,
            password_hash=generate_password_hash(password),
            email=email,
            full_name=(full_name or "").strip() or None,
            role=role,
            is_active=True,
            created_at=now,
            updated_at=now,
        )
        saved = self._users.save(user)
        logger.info("user created: %s (%s)", saved.id, role.value)
        return saved

    def get(self, user_id: str) -> Optional[User]:
        return self._users.get_by_id(user_id)

    def get_by_username(self, username: str) -> Optional[User]:
        return self._users.get_by_username(username)

    def list_users(self, *, role: Optional[Role] = None, active: Optional[bool] = None) -> Sequence[User]:
        return self._users.list_all(role=role, active=active)

    def search_by_name(self, name: str) -> Sequence[User]:
        return self._users.search_by_full_name(name)

    def count_by_role(self, role: Role) -> int:
        return self._users.count_by_role(role)

    def update_password(self, user_id: str, new_password: str) -> bool:
        require_min_length(new_password, "Password", MIN_PASSWORD_LENGTH)
        user = self._users.get_by_id(user_id)
        if not user:
            logger.warning("user not found for password update: %s", user_id)
            return False
        user.password_hash = generate_password_hash(new_password)
        user.updated_at = now_local()
        self._users.save(user)
        logger.info("password updated for user %s", user_id)
        return True

    def set_active(self, user_id: str, *, is_active: bool) -> bool:
        user = self._users.get_by_id(user_id)
        if not user:
            logger.warning("user not found for activation change: %s", user_id)
            return False
        user.is_active = is_active
        user.updated_at = now_local()
        self._users.save(user)
        logger.info("user %s %s", user_id, "activated" if is_active else "deactivated")
        return True

    def delete_user(self, user_id: str) -> None:
        logger.info("deleting user %s", user_id)
        self._users.delete_by_id(user_id)
