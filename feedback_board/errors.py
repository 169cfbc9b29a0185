from flask import jsonify
from werkzeug.exceptions import HTTPException


class FeedbackBoardError(Exception):
    """Base for failures that map onto an HTTP status and a short message."""

    status_code = 500
    message = "Internal Server Error"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)
        if message:
            self.message = message


class ValidationError(FeedbackBoardError):
    status_code = 400
    message = "Invalid request"


class Unauthorized(FeedbackBoardError):
    status_code = 401
    message = "Unauthorized"


class NotFound(FeedbackBoardError):
    status_code = 404
    message = "Feedback not found"


class Conflict(FeedbackBoardError):
    status_code = 409
    message = "Conflict"


class StorageFailure(FeedbackBoardError):
    status_code = 500
    message = "Storage failure"


def _error(message: str, code: int):
    return jsonify({"error": message}), code


def register_error_handlers(app):
    @app.errorhandler(FeedbackBoardError)
    def handle_feedback_error(e):
        return _error(e.message, e.status_code)

    # Everything else renders in the same JSON shape
    @app.errorhandler(HTTPException)
    def handle_http_error(e):
        return _error(e.name, e.code or 500)

    @app.errorhandler(Exception)
    def handle_unexpected(e):
        app.logger.exception("Unhandled error")
        return _error("Internal Server Error", 500)
