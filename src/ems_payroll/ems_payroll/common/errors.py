"""Exception -> JSON response mapping.

Body shape: {timestamp, status, error, message}. Stack traces are logged,
never returned.
"""
from __future__ import annotations

import logging

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from ..core.exceptions import (
    AuthenticationError,
    DuplicateResourceError,
    PayrollProcessingError,
    ResourceNotFoundError,
    TokenError,
    UnauthorizedAccessError,
    ValidationError,
)
from .datetime_utils import now_utc

logger = logging.getLogger(__name__)


def error_response(status: int, error: str, message: str):
    body = {
        "timestamp": now_utc().isoformat(),
        "status": status,
        "error": error,
        "message": message,
    }
    return jsonify(body), status


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(ValidationError)
    def _validation(exc: ValidationError):
        return error_response(400, "Validation Failed", str(exc))

    @app.errorhandler(TokenError)
    def _token(exc: TokenError):
        # Do not tell the client which check failed.
        return error_response(401, "Authentication Failed", "Invalid or expired token")

    @app.errorhandler(AuthenticationError)
    def _authentication(exc: AuthenticationError):
        return error_response(401, "Authentication Failed", str(exc))

    @app.errorhandler(UnauthorizedAccessError)
    def _forbidden(exc: UnauthorizedAccessError):
        return error_response(403, "Access Denied", str(exc))

    @app.errorhandler(ResourceNotFoundError)
    def _not_found(exc: ResourceNotFoundError):
        return error_response(404, "Not Found", str(exc))

    @app.errorhandler(DuplicateResourceError)
    def _conflict(exc: DuplicateResourceError):
        return error_response(409, "Conflict", str(exc))

    @app.errorhandler(PayrollProcessingError)
    def _payroll(exc: PayrollProcessingError):
        status = 403 if exc.access_denied else 422
        return error_response(status, "Payroll Processing Error", str(exc))

    @app.errorhandler(HTTPException)
    def _http(exc: HTTPException):
        return error_response(exc.code or 500, exc.name, exc.description or exc.name)

    @app.errorhandler(Exception)
    def _unhandled(exc: Exception):
        logger.exception("Unhandled error")
        return error_response(500, "Internal Server Error", "An unexpected error occurred")
