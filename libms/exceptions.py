from __future__ import annotations


class LibraryError(ValueError):
    """Base for every client-facing failure; rendered as a 4xx JSON body."""

    error = "library_error"
    status_code = 400

    def __init__(self, message: str, details: list[str] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or []

    def to_dict(self) -> dict:
        return {
            "success": False,
            "error": self.error,
            "message": self.message,
            "details": self.details,
        }


class ValidationError(LibraryError):
    error = "validation_error"
    status_code = 400


class QuotaExceeded(LibraryError):
    error = "quota_exceeded"
    status_code = 400


class NotFound(LibraryError):
    error = "not_found"
    status_code = 404


class BookNotFound(NotFound):
    error = "book_not_found"

    def __init__(self, book_id: str):
        super().__init__(f"Book with ID {book_id} not found.")
        self.book_id = book_id


class BookUnavailable(LibraryError):
    error = "book_unavailable"
    status_code = 409

    def __init__(self, book_id: str, title: str | None = None):
        super().__init__(f"Book {title or book_id} is not available.")
        self.book_id = book_id


class InvalidTransition(LibraryError):
    error = "invalid_transition"
    status_code = 409


class BusinessRuleError(LibraryError):
    error = "business_rule"
    status_code = 400


class AuthenticationError(LibraryError):
    error = "authentication_failed"
    status_code = 401


class Forbidden(LibraryError):
    error = "forbidden"
    status_code = 403
