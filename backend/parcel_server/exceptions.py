"""
Parcel Server — Custom Exception Hierarchy
===========================================

What:  Application-specific exceptions for the different failure scenarios.
Why:   Each exception maps to one HTTP status code. Services and auth
       dependencies raise them; the global handlers registered in main.py
       turn them into structured JSON error responses.
How:   Each exception class carries a message and optional context dict.
       The message is safe to return to the client; the context is logged only.

Exception Hierarchy:
    ParcelServerError (base)
    ├── ValidationError         → 400 Bad Request (malformed id, bad field, bad enum)
    ├── UnauthorizedError       → 401 Unauthorized (missing/malformed credential)
    ├── ForbiddenError          → 403 Forbidden (invalid credential, wrong role)
    ├── NotFoundError           → 404 Not Found (no document matched)
    ├── DatabaseError           → 500 Internal Server Error
    └── PaymentProcessorError   → 500 Internal Server Error (processor message passed through)
"""

from typing import Any, Dict, Optional


class ParcelServerError(Exception):
    """
    Base exception for all Parcel Server application errors.

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


class ValidationError(ParcelServerError):
    """
    Raised when client input fails validation.

    When:    Malformed identifier, missing required field, value outside a closed set.
    HTTP:    400 Bad Request

    Example response:
        {
            "error": "validation_error",
            "message": "Invalid role 'owner'. Allowed: admin, rider, user",
            "details": {"field": "role"}
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


class UnauthorizedError(ParcelServerError):
    """
    Raised when a request carries no usable bearer credential.

    When:    Authorization header missing, not "Bearer <token>", or empty token.
    HTTP:    401 Unauthorized
    """

    def __init__(
        self,
        message: str = "unauthorized access",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class ForbiddenError(ParcelServerError):
    """
    Raised when a credential is present but not acceptable.

    When:    The identity provider rejected the token, or the caller's stored
             role does not match the role the route requires.
    HTTP:    403 Forbidden
    """

    def __init__(
        self,
        message: str = "forbidden access",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(ParcelServerError):
    """
    Raised when a requested resource does not exist.

    When:    Lookup by id found nothing, or an update/delete matched zero documents.
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


class DatabaseError(ParcelServerError):
    """
    Raised when a document store operation fails unexpectedly.

    HTTP:    500 Internal Server Error

    The message names the failed operation ("Failed to find parcels");
    driver-level details (SQL, constraint names) stay in the server log.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class PaymentProcessorError(ParcelServerError):
    """
    Raised when the payment processor refuses or fails a request.

    HTTP:    500 Internal Server Error
    The processor's own message is returned to the client so the checkout
    form can show it (e.g. "Amount must be at least $0.50 usd").
    """

    def __init__(
        self,
        message: str = "Payment processor request failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
