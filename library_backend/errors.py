"""Error taxonomy shared by services and controllers.

Services raise these; the handlers registered by :func:`register_error_handlers`
turn them into ``{"message": ...}`` JSON responses with the matching status.
"""

from flask import jsonify
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from werkzeug.exceptions import HTTPException

from library_backend.extensions import jwt


class LibraryError(Exception):
    """Base class for every error the API reports to callers."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(LibraryError):
    """Missing or malformed input."""

    status_code = 400


class ConflictError(LibraryError):
    """Business rule violation: unavailable book, lent-out copies, duplicates."""

    status_code = 400


class NotFoundError(LibraryError):
    status_code = 404


class AuthError(LibraryError):
    status_code = 401


class ForbiddenError(LibraryError):
    status_code = 403


class StoreError(LibraryError):
    """Unexpected storage failure."""

    status_code = 500


def _json_error(message, code=400):
    return jsonify({"message": message}), code


def register_error_handlers(app):
    @app.errorhandler(LibraryError)
    def handle_library_error(e: LibraryError):
        if e.status_code >= 500:
            app.logger.error(f"[errors] {e.message}")
        return _json_error(e.message, e.status_code)

    @app.errorhandler(IntegrityError)
    def handle_integrity_error(e: IntegrityError):
        app.logger.warning(f"[errors] Integrity violation: {e.orig}")
        return _json_error(f"Duplicate or invalid reference: {e.orig}", ConflictError.status_code)

    @app.errorhandler(SQLAlchemyError)
    def handle_store_error(e: SQLAlchemyError):
        app.logger.exception(f"[errors] Storage failure: {e}")
        err = StoreError(str(e))
        return _json_error(err.message, err.status_code)

    @app.errorhandler(HTTPException)
    def handle_http_error(e: HTTPException):
        return _json_error(e.description, e.code)

    @app.errorhandler(Exception)
    def handle_unexpected_error(e: Exception):
        app.logger.exception(f"[errors] Unhandled error: {e}")
        return _json_error(str(e), 500)

    register_jwt_handlers()


def register_jwt_handlers():
    @jwt.unauthorized_loader
    def missing_token(reason):
        return _json_error(reason, AuthError.status_code)

    @jwt.invalid_token_loader
    def invalid_token(reason):
        return _json_error(f"Invalid token: {reason}", AuthError.status_code)

    @jwt.expired_token_loader
    def expired_token(_jwt_header, _jwt_payload):
        return _json_error("Token has expired.", AuthError.status_code)
