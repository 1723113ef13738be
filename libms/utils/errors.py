from flask import jsonify
from werkzeug.exceptions import HTTPException

from libms.exceptions import LibraryError
from libms.extensions import db


def json_error(error: str, message: str, code: int, details=None):
    return jsonify({
        "success": False,
        "error": error,
        "message": message,
        "details": details or [],
    }), code


def register_error_handlers(app):
    @app.errorhandler(LibraryError)
    def _library_error(e: LibraryError):
        return jsonify(e.to_dict()), e.status_code

    @app.errorhandler(HTTPException)
    def _http_error(e: HTTPException):
        return json_error(
            (e.name or "http_error").lower().replace(" ", "_"),
            e.description or e.name,
            e.code or 500,
        )

    @app.errorhandler(Exception)
    def _unexpected(e: Exception):
        db.session.rollback()
        app.logger.exception(f"[errors] unhandled exception: {e}")
        return json_error("internal_error", "An unexpected error occurred.", 500)
