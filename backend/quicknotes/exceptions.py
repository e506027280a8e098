"""
QuickNotes Backend — Custom Exception Hierarchy
=================================================

What:  Defines application-specific exceptions for each failure category.
Why:   Services raise domain errors; global handlers (registered in main.py)
       turn them into a fixed HTTP status and a short message. No route
       needs its own try/except.
How:   Each exception class carries a message and optional context dict.
       The message is safe to return to clients; the context is logged only.

Exception Hierarchy:
    QuickNotesError (base)
    ├── ValidationError      → 400 Bad Request (empty note)
    ├── NotFoundError        → 404 Not Found (delete of unknown id)
    ├── ConfigurationError   → 500 (summarization key missing)
    ├── SummarizationError   → 500 (Gemini call failed)
    └── DatabaseError        → 500 (store unreachable / query failed)
"""

from typing import Any, Dict, Optional


class QuickNotesError(Exception):
    """
    Base exception for all QuickNotes application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
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


class ValidationError(QuickNotesError):
    """
    Raised when client input fails a business rule.

    HTTP: 400 Bad Request. Malformed bodies (e.g. a non-string title) also
    answer 400 via the RequestValidationError handler; this class covers rules
    the schema can't express, like "title or content must be present".
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


class NotFoundError(QuickNotesError):
    """
    Raised when a requested resource does not exist.

    SQLAlchemy reports a missing row as None / zero affected rows rather than
    an exception; the service layer converts that into this error so the
    route answers 404 instead of a generic failure.
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"{resource.capitalize()} not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class ConfigurationError(QuickNotesError):
    """
    Raised when an operation needs configuration that isn't present.

    When:  POST /api/notes/summarize with no GEMINI_API_KEY configured.
           Raised before any network call is attempted.
    HTTP:  500 Internal Server Error
    """

    def __init__(
        self,
        message: str = "AI API key is not configured.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class SummarizationError(QuickNotesError):
    """
    Raised when the Gemini call fails.

    Covers network errors, non-2xx responses and response bodies that don't
    have the candidates[0].content.parts[0].text shape. No retry is made.
    HTTP: 500 Internal Server Error
    """

    def __init__(
        self,
        message: str = "Failed to generate summary.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseError(QuickNotesError):
    """
    Raised when database operations fail unexpectedly.

    The message returned to the client is always generic; driver details
    (SQL, constraint names) go to the server log only.
    HTTP: 500 Internal Server Error
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
