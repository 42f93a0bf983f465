"""JSON error handlers and the route-boundary error translator."""

from functools import wraps

from flask import Blueprint, current_app, jsonify
from werkzeug.exceptions import HTTPException

from .errors import AppError, UpstreamError

error_handlers_bp = Blueprint("error_handlers", __name__)


def translate_errors(message):
    """Convert unexpected exceptions raised by a route into an UpstreamError.

    AppError subclasses pass through untouched. Anything else is logged with
    its traceback and replaced by ``message``, so store or provider details
    never reach the client.

    Usage:
    @bp.route("/")
    @translate_errors("Gagal memuat timeline")
    def list_posts():
        ...
    """

    def decorator(func):
        @wraps(func)
        def decorated_function(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except (AppError, HTTPException):
                raise
            except Exception as e:
                current_app.logger.exception(f"{message}: {e}")
                raise UpstreamError(message) from e

        return decorated_function

    return decorator


@error_handlers_bp.app_errorhandler(AppError)
def handle_app_error(error):
    """Render application errors as ``{"error": message}``."""
    if error.status_code >= 500:
        current_app.logger.error(f"Application Error: {error.message}")
    else:
        current_app.logger.warning(
            f"{type(error).__name__} ({error.status_code}): {error.message}"
        )
    return jsonify({"error": error.message}), error.status_code


@error_handlers_bp.app_errorhandler(HTTPException)
def handle_http_exception(e):
    """Render werkzeug HTTP errors (404, 405, 413...) as JSON."""
    return jsonify({"error": e.name}), e.code


@error_handlers_bp.app_errorhandler(Exception)
def handle_unexpected_error(e):
    """Handle unexpected server errors."""
    current_app.logger.exception(f"Internal Server Error: {e}")
    return jsonify({"error": "Terjadi kesalahan pada server"}), 500
