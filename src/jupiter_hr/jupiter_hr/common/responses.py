"""Uniform JSON envelope for every API answer.

Shape: {"success": bool, "message": str, "data": ...} plus optional extras
such as "count" or pagination fields.
"""

from __future__ import annotations

from dataclasses import fields, is_dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any

from flask import jsonify


def to_jsonable(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if is_dataclass(value) and not isinstance(value, type):
        hidden = set(getattr(value, "__json_exclude__", ()))
        out = {
            f.name: to_jsonable(getattr(value, f.name))
            for f in fields(value)
            if not f.name.startswith("_") and f.name not in hidden
        }
        # Derived read-only properties the UI relies on.
        for extra in getattr(value, "__json_extras__", ()):
            out[extra] = to_jsonable(getattr(value, extra))
        return out
    if isinstance(value, dict):
        return {str(k): to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set)):
        return [to_jsonable(v) for v in value]
    return str(value)


def envelope(success: bool, message: str, data: Any = None, **extra: Any) -> dict:
    body = {"success": success, "message": message, "data": to_jsonable(data)}
    for key, val in extra.items():
        body[key] = to_jsonable(val)
    return body


def ok(message: str, data: Any = None, status: int = 200, **extra: Any):
    return jsonify(envelope(True, message, data, **extra)), status


def created(message: str, data: Any = None):
    return ok(message, data, status=201)


def listing(message: str, items) -> tuple:
    items = list(items)
    return ok(message, items, count=len(items))


def fail(message: str, status: int = 400, data: Any = None):
    return jsonify(envelope(False, message, data)), status
