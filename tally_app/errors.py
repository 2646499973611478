"""Error types raised by the stores and their JSON rendering."""
from __future__ import annotations

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from .logger import get_logger


logger = get_logger(__name__)


class TallyError(RuntimeError):
    """Base error for store and request failures."""

    status_code = 500

    def __init__(self, message: str, *, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class UnauthorizedError(TallyError):
    """Raised for missing or unknown tokens and failed logins."""

    status_code = 401


class ConflictError(TallyError):
    """Raised when a username or counter name is already taken."""

    status_code = 400


class NotFoundError(TallyError):
    """Raised when a counter does not exist."""

    status_code = 404


class StorageFailure(TallyError):
    """Raised when the database could not be read or written."""

    status_code = 500


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(TallyError)
    def handle_tally_error(exc: TallyError):
        if isinstance(exc, StorageFailure):
            logger.error("Storage failure: %s", exc, exc_info=exc.__cause__ or exc)
        return jsonify({"message": exc.message}), exc.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(exc: HTTPException):
        return jsonify({"message": exc.description}), exc.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(exc: Exception):
        logger.exception("Unhandled error: %s", exc)
        return jsonify({"message": "Internal server error"}), 500
