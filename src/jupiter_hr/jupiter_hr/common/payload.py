"""Helpers for reading JSON/form request bodies.

Clients send either snake_case or camelCase keys; both are accepted.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Optional

from flask import request

from ..core.exceptions import ValidationError
from .datetime_utils import parse_iso_datetime, parse_optional_date


def request_payload() -> dict:
    """JSON body when present, otherwise the submitted form."""
    data = request.get_json(silent=True)
    if isinstance(data, dict):
        return data
    return request.form.to_dict()


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def pick(payload: dict, name: str, default: Any = None) -> Any:
    if name in payload:
        return payload[name]
    return payload.get(_camel(name), default)


def has(payload: dict, name: str) -> bool:
    return name in payload or _camel(name) in payload


def opt_str(payload: dict, name: str) -> Optional[str]:
    value = pick(payload, name)
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def opt_int(payload: dict, name: str, label: str) -> Optional[int]:
    value = pick(payload, name)
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{label} must be an integer")


def opt_bool(payload: dict, name: str, default: bool = False) -> bool:
    value = pick(payload, name)
    if value is None or value == "":
        return default
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in {"1", "true", "yes", "on"}


def opt_date(payload: dict, name: str, label: str) -> Optional[date]:
    try:
        return parse_optional_date(pick(payload, name))
    except ValueError:
        raise ValidationError(f"{label} must be a date (YYYY-MM-DD)")


def opt_datetime(payload: dict, name: str, label: str) -> Optional[datetime]:
    try:
        return parse_iso_datetime(pick(payload, name))
    except ValueError:
        raise ValidationError(f"{label} must be an ISO date or date-time")


def str_list(payload: dict, name: str) -> list[str]:
    value = pick(payload, name)
    if value is None or value == "":
        return []
    if isinstance(value, str):
        return [part.strip() for part in value.split(",") if part.strip()]
    return [str(v) for v in value]
