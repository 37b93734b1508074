"""Error handlers rendering every failure as ``{"error": message}``."""

import logging

from flask import Flask, jsonify
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException

from ..errors import BookArtError, InternalError

logger = logging.getLogger(__name__)


def _error(message: str, status: int):
    return jsonify({"error": message}), status


def _validation_message(exc: ValidationError) -> str:
    first = exc.errors()[0]
    field = ".".join(str(part) for part in first.get("loc", ())) or "body"
    if first.get("type") == "missing":
        return f"{field} is required"
    return f"{field}: {first.get('msg', 'invalid value')}"


def register_error_handlers(app: Flask) -> None:
    """Install the error handlers on ``app``."""

    @app.errorhandler(BookArtError)
    def handle_bookart_error(exc: BookArtError):
        if exc.status_code >= 500:
            logger.error("Internal error: %s", exc.message)
            return _error(InternalError.default_message, exc.status_code)
        return _error(exc.message, exc.status_code)

    @app.errorhandler(ValidationError)
    def handle_validation_error(exc: ValidationError):
        return _error(_validation_message(exc), 400)

    @app.errorhandler(HTTPException)
    def handle_http_exception(exc: HTTPException):
        return _error(exc.description or exc.name, exc.code or 500)

    @app.errorhandler(SQLAlchemyError)
    def handle_database_error(exc: SQLAlchemyError):
        logger.exception("Database error")
        return _error(InternalError.default_message, 500)

    @app.errorhandler(Exception)
    def handle_unexpected(exc: Exception):
        logger.exception("Unhandled error")
        return _error(InternalError.default_message, 500)
