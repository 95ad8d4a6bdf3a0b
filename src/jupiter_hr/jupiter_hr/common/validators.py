from __future__ import annotations

import math
import re
from enum import Enum
from typing import Optional, Type, TypeVar

from ..core.exceptions import ValidationError

E = TypeVar("E", bound=Enum)

_EMAIL = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_min_length(value: Optional[str], field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def parse_enum(enum_cls: Type[E], value, field_name: str) -> E:
    """Accept an enum member or its (case-insensitive) string value."""
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(str(value or "").strip().upper())
    except ValueError:
        valid = ", ".join(m.value for m in enum_cls)
        raise ValidationError(f"Invalid {field_name}. Valid values: {valid}")


def parse_optional_float(value, field_name: str) -> Optional[float]:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number")
    if not math.isfinite(number):
        raise ValidationError(f"{field_name} must be a finite number")
    return number


def require_email(value: Optional[str], field_name: str = "Email") -> str:
    email = require_non_empty(value, field_name)
    if not _EMAIL.match(email):
        raise ValidationError(f"Invalid {field_name.lower()} format")
    return email


def check_range(value, field_name: str, low=None, high=None):
    """Inclusive bounds check; None passes through, NaN/inf never do."""
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        raise ValidationError(f"{field_name} must be a finite number")
    if low is not None and high is not None and not low <= value <= high:
        raise ValidationError(f"{field_name} must be between {low:g} and {high:g}")
    if low is not None and value < low:
        raise ValidationError(f"{field_name} must be at least {low:g}")
    if high is not None and value > high:
        raise ValidationError(f"{field_name} must be at most {high:g}")
    return value
