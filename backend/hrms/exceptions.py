"""
HRMS Backend — Custom Exception Hierarchy
===========================================

What:  Application-specific exceptions for the employee API's failure modes.
How:   Each exception carries a message and an optional context dict, plus the
       machine-readable `code` used in the error envelope. Global exception
       handlers (registered in main.py) map them to HTTP status codes.
Who:   Raised by the employee service and the connection bootstrap.

Exception Hierarchy:
    HRMSError (base)
    ├── ValidationError              → 400 Bad Request
    │   └── InvalidEmployeeIdError   → 400 Bad Request (path id is not an ObjectId)
    ├── NotFoundError                → 404 Not Found
    └── DatabaseError                → 500 Internal Server Error

Every handler renders the same envelope:
    {"error": {"code": "...", "message": "...", "request_id": "..."}}
"""

from typing import Any, Dict, Optional


class HRMSError(Exception):
    """
    Base exception for all HRMS application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    code = "server_error"

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(HRMSError):
    """
    Raised when client input cannot be decoded.

    When:    Malformed JSON body, wrong field types, unparseable identifier.
    HTTP:    400 Bad Request
    """

    code = "validation_error"

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


class InvalidEmployeeIdError(ValidationError):
    """
    Raised when a path identifier is not a valid MongoDB ObjectId.

    Raised before any database call is made, so a malformed id never
    reaches the collection.
    """

    code = "invalid_id"

    def __init__(self, raw_id: str, context: Optional[Dict[str, Any]] = None):
        ctx = context or {}
        ctx["employee_id"] = raw_id
        super().__init__(
            message=f"'{raw_id}' is not a valid employee ID",
            field="id",
            context=ctx,
        )
        self.raw_id = raw_id


class NotFoundError(HRMSError):
    """
    Raised when an update or delete targets an identifier with no document.

    HTTP:    404 Not Found
    """

    code = "not_found"

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class DatabaseError(HRMSError):
    """
    Raised when a MongoDB operation fails or the database is unreachable.

    HTTP:    500 Internal Server Error

    Security Note:
        The client always receives a generic message. The driver's error text
        is kept in `context` and logged server-side only.
    """

    code = "database_error"

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
