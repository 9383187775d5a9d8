"""
Portfolio API - Custom Exception Hierarchy
==========================================

What:  Application-specific exceptions for every failure a route can report.
How:   Each exception carries a message and an optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with the matching status code.
Who:   Raised by services and the auth dependency; caught by global handlers.

Exception Hierarchy:
    PortfolioError (base)
    ├── InvalidInputError      → 400 Bad Request
    ├── AuthenticationError    → 401 Unauthorized
    ├── NotFoundError          → 404 Not Found
    └── UpstreamFailureError   → 500 Internal Server Error
"""

from typing import Any, Dict, Optional


class PortfolioError(Exception):
    """
    Base exception for all Portfolio API errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged, only returned for 4xx errors)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class InvalidInputError(PortfolioError):
    """
    Raised when client input fails validation.

    When:    Malformed ObjectId in the path, empty update, empty bulk insert,
             token claims that are not a JSON object.
    HTTP:    400 Bad Request

    Example response:
        {
            "error": "invalid_input",
            "message": "'abc' is not a valid document id",
            "details": {"field": "id"}
        }
    """

    def __init__(
        self,
        message: str = "Invalid input",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class AuthenticationError(PortfolioError):
    """
    Raised when a protected route is called without a valid bearer token.

    When:    Missing Authorization header, bad signature, expired token.
    HTTP:    401 Unauthorized, body message is always "forbidden access"
             so callers cannot tell the failure modes apart.
    """

    def __init__(
        self,
        reason: str = "missing token",
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["reason"] = reason
        super().__init__(message="forbidden access", context=ctx)
        self.reason = reason


class NotFoundError(PortfolioError):
    """
    Raised when a requested resource does not exist.

    When:    GET /projects on an empty collection, GET /blogs/{id} for an
             unknown id.
    HTTP:    404 Not Found
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        message: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        if message is None:
            message = f"The requested {resource} was not found"
            if resource_id:
                message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class UpstreamFailureError(PortfolioError):
    """
    Raised when the database rejects or fails an operation.

    When:    Any PyMongoError: server selection timeout, auth failure against
             the cluster, write errors.
    HTTP:    500 Internal Server Error

    The message returned to the client is always generic; the driver error
    is kept in `context` and logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
