"""
Notes App Backend — Custom Exception Hierarchy
================================================

What:  Application-specific exceptions for the few ways a request can fail.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return either a JSON body (API routes) or an HTML page (web routes)
       with the matching HTTP status code.
Who:   Raised by the store, the body parser and the note service.

Exception Hierarchy:
    NotesAppError (base)
    ├── ValidationError    → 400 Bad Request (client can fix)
    ├── NotFoundError      → 404 Not Found
    └── FileStorageError   → 500 Internal Server Error
"""

from typing import Any, Dict, Optional


class NotesAppError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  User-facing error description (safe to return in a response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(NotesAppError):
    """
    Raised when client input fails validation.

    When:    Undecodable or non-object JSON body, undecodable form body,
             missing required form field, non-string title/content.
    HTTP:    400 Bad Request

    Example API response:
        {
            "error": "validation_error",
            "message": "Request body is not valid JSON",
            "details": {"field": "body"},
            "request_id": "a1b2c3d4"
        }
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class NotFoundError(NotesAppError):
    """
    Raised when a requested note does not exist.

    HTTP:    404 Not Found. The API body is always {"error": "Note not found"};
             the web surface renders the "Not Found" page.
    """

    def __init__(
        self,
        resource: str = "note",
        resource_id: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=f"{resource.capitalize()} not found", context=ctx)
        self.resource = resource
        self.resource_id = resource_id


class FileStorageError(NotesAppError):
    """
    Raised when the backing file cannot be read, parsed or written.

    When:    Permission denied, disk full, corrupt JSON, wrong top-level shape.
             A missing file is NOT an error (it reads as an empty collection).
    HTTP:    500 Internal Server Error

    The file path and OS error go into `context` for the server log; the
    client only sees a generic message.
    """

    def __init__(
        self,
        message: str = "Note storage operation failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
