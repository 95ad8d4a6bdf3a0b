"""Role based dispatch.

Pure functions over Role: no session or request access in here.
"""

from __future__ import annotations

from typing import Optional

from ..core.enums import Role

LOGIN_PATH = "/login"

DASHBOARD_PATHS = {
    Role.STUDENT: "/student/dashboard",
    Role.HR: "/hr/dashboard",
    Role.ADMIN: "/admin/dashboard",
}

# Which roles may open each area. Admin sees everything.
AREA_ROLES = {
    "student": frozenset({Role.STUDENT, Role.ADMIN}),
    "hr": frozenset({Role.HR, Role.ADMIN}),
    "admin": frozenset({Role.ADMIN}),
}


def dashboard_path_for(role: Optional[Role]) -> str:
    if role is None:
        return LOGIN_PATH
    return DASHBOARD_PATHS.get(role, LOGIN_PATH)


def can_access(role: Optional[Role], area: str) -> bool:
    if role is None:
        return False
    return role in AREA_ROLES.get(area, frozenset())
