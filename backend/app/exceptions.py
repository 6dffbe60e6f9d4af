"""
SpeakerDesk Backend — Custom Exception Hierarchy
=================================================

What:  Application-specific exceptions for each failure a request can hit.
Why:   Each exception maps to one HTTP status code and one user-facing message.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with correct HTTP status codes.
Who:   Raised by models, services and route dependencies; caught by global handlers.

Exception Hierarchy:
    SpeakerDeskError (base)
    ├── ValidationError          → 400 Bad Request (client can fix)
    ├── UnauthorizedError        → 401 Unauthorized (no session)
    ├── ForbiddenError           → 403 Forbidden (session present, not the owner)
    ├── NotFoundError            → 404 Not Found
    └── DatabaseError            → 500 Internal Server Error

Every store call either returns its value or raises one of these; callers
that need to translate a failure catch the specific type explicitly.
"""

from typing import Any, Dict, Optional


class SpeakerDeskError(Exception):
    """
    Base exception for all SpeakerDesk application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info
    """

    status_code = 500
    error_code = "server_error"

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(SpeakerDeskError):
    """
    Raised when a payload fails entity constraints.

    When:    Empty or missing Speaker name, malformed request body,
             duplicate username on sign-up, bad credentials on sign-in.
    HTTP:    400 Bad Request

    Example response:
        {
            "error": "validation_error",
            "message": "Please fill Speaker name",
            "details": {"field": "name"}
        }
    """

    status_code = 400
    error_code = "validation_error"

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


class UnauthorizedError(SpeakerDeskError):
    """
    Raised when a route requires a session and none exists.

    HTTP:    401 Unauthorized
    Message: Fixed literal, independent of the route.
    """

    status_code = 401
    error_code = "unauthorized"

    def __init__(
        self,
        message: str = "User is not logged in",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class ForbiddenError(SpeakerDeskError):
    """
    Raised when the acting user does not own the entity being mutated.

    HTTP:    403 Forbidden
    """

    status_code = 403
    error_code = "forbidden"

    def __init__(
        self,
        message: str = "User is not authorized",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(SpeakerDeskError):
    """
    Raised when a path identifier does not resolve to a record.

    When:    GET/PUT/DELETE /speakers/{id} with an unknown or malformed id.
    HTTP:    404 Not Found
    """

    status_code = 404
    error_code = "not_found"

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"Failed to load {resource}"
        if resource_id:
            message = f"Failed to load {resource} {resource_id}"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class DatabaseError(SpeakerDeskError):
    """
    Raised when database operations fail unexpectedly.

    When:    Connection lost mid-query, deadlock, constraint violation.
    HTTP:    500 Internal Server Error

    Security Note:
        The message returned to the client is always generic.
        Detailed error info is logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
