# reset_api/errors.py
"""
Exceptions and JSON error handlers.

Every error leaving the API uses the same envelope the frontend expects:
    {"success": false, "error": "<message>", "error_code": <status>}
"""

from flask import jsonify
from werkzeug.exceptions import HTTPException


class CorsOriginRejected(Exception):
    """Raised when a cross-origin request comes from an origin we do not allow."""
    def __init__(self, origin, status_code=403):
        self.origin = origin
        self.status_code = status_code
        self.message = f"CORS blocked: {origin}"
        super().__init__(self.message)


def error_response(message, status_code):
    """Builds the JSON error envelope and its status code."""
    return jsonify({
        "success": False,
        "error": message,
        "error_code": status_code,
    }), status_code


def register_error_handlers(app):

    @app.errorhandler(CorsOriginRejected)
    def handle_cors_rejected(error):
        # Already logged by the policy
        return error_response(error.message, error.status_code)

    @app.errorhandler(HTTPException)
    def handle_http_exception(error):
        # Covers malformed JSON bodies (400), unknown routes (404),
        # wrong methods (405) and oversized bodies (413)
        response, status_code = error_response(error.description, error.code)
        if error.code == 405 and getattr(error, 'valid_methods', None):
            response.headers['Allow'] = ', '.join(error.valid_methods)
        return response, status_code

    @app.errorhandler(Exception)
    def handle_unexpected_exception(error):
        app.logger.exception(f"Unhandled error: {error}")
        return error_response("Internal server error.", 500)
