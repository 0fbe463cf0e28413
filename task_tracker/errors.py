"""Domain errors raised by the service layer.

Each error carries the HTTP status it maps to. The exception handlers in
``task_tracker.main`` turn them into ``{"message": ...}`` JSON responses.
"""

from typing import Optional


class TaskTrackerError(Exception):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(TaskTrackerError):
    status_code = 400
    default_message = "Invalid request"


class AuthenticationError(TaskTrackerError):
    status_code = 401
    default_message = "Could not validate credentials"


class AuthorizationError(TaskTrackerError):
    status_code = 403
    default_message = "Forbidden"


class NotFoundError(TaskTrackerError):
    status_code = 404
    default_message = "Not found"


class ConflictError(TaskTrackerError):
    status_code = 409
    default_message = "Conflict"
