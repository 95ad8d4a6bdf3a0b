from __future__ import annotations

import logging

from flask import Flask
from werkzeug.exceptions import HTTPException

from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DuplicateRecordError,
    ValidationError,
)
from .responses import fail

logger = logging.getLogger("jupiter_hr.api")


def init_error_handlers(app: Flask) -> None:
    """Map domain exceptions raised by services onto JSON envelopes."""

    @app.errorhandler(DuplicateRecordError)
    def _duplicate(e: DuplicateRecordError):
        logger.warning("duplicate record: %s", e)
        return fail(str(e), 409)

    @app.errorhandler(ValidationError)
    def _validation(e: ValidationError):
        return fail(str(e), 400)

    @app.errorhandler(AuthenticationError)
    def _authentication(e: AuthenticationError):
        return fail(str(e), 401)

    @app.errorhandler(AuthorizationError)
    def _authorization(e: AuthorizationError):
        return fail(str(e), 403)

    @app.errorhandler(HTTPException)
    def _http(e: HTTPException):
        return fail(e.description or e.name, e.code or 500)

    @app.errorhandler(Exception)
    def _unexpected(e: Exception):
        logger.exception("unhandled error: %s", e)
        if app.config.get("DEBUG"):
            return fail(f"An unexpected error occurred: {e}", 500)
        return fail("An unexpected error occurred", 500)
