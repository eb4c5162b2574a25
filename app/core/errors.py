"""HTTP-facing error taxonomy. Every subclass renders as {error, message}."""

from typing import Any


class AppError(Exception):
    """Base for errors that map onto a client-visible HTTP response."""

    status_code = 500
    error = "Internal server error"

    def __init__(self, message: str, error: str | None = None) -> None:
        self.message = message
        if error is not None:
            self.error = error
        super().__init__(message)

    def to_content(self) -> dict[str, Any]:
        return {"error": self.error, "message": self.message}


class RequestValidationFailed(AppError):
    """Malformed or out-of-range input; carries the per-field issue list."""

    status_code = 400
    error = "Validation failed"

    def __init__(self, issues: list[dict[str, str]]) -> None:
        self.issues = issues
        super().__init__(format_validation_error(issues))

    def to_content(self) -> dict[str, Any]:
        return {"error": self.error, "details": self.message, "issues": self.issues}


class Unauthenticated(AppError):
    status_code = 401
    error = "Access denied"


class Forbidden(AppError):
    status_code = 403
    error = "Forbidden"


class NotFound(AppError):
    status_code = 404
    error = "Not found"


class Conflict(AppError):
    status_code = 409
    error = "Conflict"


def format_validation_error(issues: list[dict[str, str]]) -> str:
    """Join issue messages into one human-readable line."""
    if not issues:
        return "Validation failed"
    return "Invalid input: " + ", ".join(issue["message"] for issue in issues)
