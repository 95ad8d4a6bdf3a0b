from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import Role


@dataclass
class User:
    """Domain entity: User (credential holder).

    Note: Plain data object, no DB access code here.
    """

    __json_exclude__ = ("password_hash",)

    username: str
    password_hash: str
    email: str
    role: Role
    full_name: Optional[str] = None
    is_active: bool = True
    id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    last_login: Optional[datetime] = None


@dataclass(frozen=True)
class SessionUser:
    """Request-scoped identity of the authenticated caller.

    Built from the Flask session once per request and passed by parameter.
    """

    user_id: str
    username: str
    full_name: str
    role: Role

    @classmethod
    def from_user(cls, user: User) -> "SessionUser":
        return cls(
            user_id=str(user.id),
            username=user.username,
            full_name=user.full_name or user.username,
            role=user.role,
        )
