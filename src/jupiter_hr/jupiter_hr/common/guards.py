from __future__ import annotations

from functools import wraps
from typing import Optional

from flask import session

from ..core.enums import Role
from ..users.model import SessionUser
from .responses import fail

SESSION_KEYS = ("user_id", "username", "name", "role")


def store_identity(user: SessionUser) -> None:
    session["user_id"] = user.user_id
    session["username"] = user.username
    session["name"] = user.full_name
    session["role"] = user.role.value


def current_user() -> Optional[SessionUser]:
    """Read the caller identity out of the session (None when anonymous)."""
    if "user_id" not in session:
        return None
    try:
        role = Role(session.get("role"))
    except ValueError:
        return None
    return SessionUser(
        user_id=str(session["user_id"]),
        username=session.get("username") or "",
        full_name=session.get("name") or "",
        role=role,
    )


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if current_user() is None:
            return fail("Please log in to continue", 401)
        return view(*args, **kwargs)

    return wrapper


def roles_required(*roles: Role):
    allowed = frozenset(roles)

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            user = current_user()
            if user is None:
                return fail("Please log in to continue", 401)
            if user.role not in allowed:
                return fail("You do not have permission to access this resource", 403)
            return view(*args, **kwargs)

        return wrapper

    return decorator
