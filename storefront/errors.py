# storefront/errors.py
"""
Error taxonomy shared by the services and the HTTP layer.

Services raise these; `register_error_handlers` turns them into the
`{"ok": False, "error": ...}` envelope the API uses everywhere.
"""
from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException


class StorefrontError(Exception):
    status_code = 500

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(StorefrontError):
    status_code = 400


class AuthError(StorefrontError):
    status_code = 401


class ForbiddenError(StorefrontError):
    status_code = 403


class NotFoundError(StorefrontError):
    status_code = 404


class StorageError(StorefrontError):
    """Connection failure, constraint violation or aborted transaction."""
    status_code = 500


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(StorefrontError)
    def _storefront_error(exc: StorefrontError):
        if isinstance(exc, StorageError):
            app.logger.exception("storage failure: %s", exc.message)
        else:
            app.logger.info("%s: %s", type(exc).__name__, exc.message)
        return jsonify({"ok": False, "error": exc.message}), exc.status_code

    @app.errorhandler(HTTPException)
    def _http_error(exc: HTTPException):
        if not request.path.startswith("/api"):
            return exc
        return jsonify({"ok": False, "error": exc.description}), exc.code
