from flask import jsonify, current_app
from werkzeug.exceptions import HTTPException
import logging

from services.errors import DomainError, ErrorKind

logger = logging.getLogger(__name__)

# Domain error kind -> HTTP status
STATUS_BY_KIND = {
    ErrorKind.VALIDATION: 422,
    ErrorKind.MISSING_FIELD: 422,
    ErrorKind.DUPLICATE: 409,
    ErrorKind.REFERENCE: 400,
    ErrorKind.INELIGIBLE_REFERENCE: 400,
    ErrorKind.INVARIANT: 409,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.STORAGE: 500,
}


def error_response(error: str, message: str, status: int, details: dict | None = None):
    payload = {"error": error, "message": message, "status": status}
    if details:
        payload["details"] = details
    return jsonify(payload), status


def register_error_handlers(app):
    @app.errorhandler(DomainError)
    def handle_domain_error(err: DomainError):
        status = STATUS_BY_KIND[err.kind]
        if status >= 500:
            logger.error("Storage failure: %s", err.message, exc_info=err)
            return error_response(err.kind.value, "An unexpected error occurred", status)

        details = err.to_dict()
        details.pop("kind")
        details.pop("message")
        return error_response(err.kind.value, err.message, status, details=details)

    # 404 Not Found
    @app.errorhandler(404)
    def not_found(e):
        return error_response("NOT_FOUND", "Resource not found", 404)

    # Werkzeug HTTPExceptions map to their status codes
    @app.errorhandler(HTTPException)
    def handle_http_exception(err: HTTPException):
        return error_response("BAD_REQUEST", err.description, err.code or 400)

    # 500 Internal Error (catch-all)
    @app.errorhandler(Exception)
    def internal_error(err: Exception):
        logger.exception("Unhandled exception", exc_info=err)
        details = None
        # In dev, include exception details to speed up debugging
        if current_app and current_app.debug:
            details = {"type": err.__class__.__name__, "message": str(err)}
        return error_response("INTERNAL_ERROR", "An unexpected error occurred", 500, details=details)
