"""
Custom Exceptions for the TechFest backend
==========================================

Services raise these instead of HTTPException so the same code paths can be
exercised without a request. Global handlers in ``app.main`` turn them into
JSON responses.

Usage:
    from app.core.exceptions import EventNotFoundError, InvalidRequestError

    if not event:
        raise EventNotFoundError(event_id)

Response shapes differ per endpoint family and are kept as clients expect
them: payment routes answer ``{"success": false, "message": ...}``, every
other route answers ``{"message": ...}``.
"""

from typing import Optional, Any, Dict


class TechfestError(Exception):
    """Base exception for all TechFest errors"""

    status_code: int = 500

    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details
        }


# ============================================
# Validation Errors (400-type)
# ============================================

class InvalidRequestError(TechfestError):
    """Missing or malformed request fields"""

    status_code = 400

    def __init__(self, message: str, field: Optional[str] = None):
        details = {"field": field} if field else {}
        super().__init__(message, code="INVALID_REQUEST", details=details)


class InvalidSignatureError(TechfestError):
    """Payment signature did not match the one computed with our secret"""

    status_code = 400

    def __init__(self, message: str = "Invalid payment signature"):
        super().__init__(message, code="INVALID_SIGNATURE")


# ============================================
# Authentication & Authorization Errors
# ============================================

class UnauthorizedError(TechfestError):
    """Caller is not authenticated"""

    status_code = 401

    def __init__(self, message: str = "Not authorized"):
        super().__init__(message, code="UNAUTHORIZED")


class ForbiddenError(TechfestError):
    """Caller is authenticated but lacks the required role"""

    status_code = 403

    def __init__(self, message: str = "Not authorized for this role"):
        super().__init__(message, code="FORBIDDEN")


# ============================================
# Resource Errors (404-type)
# ============================================

class NotFoundError(TechfestError):
    """Base class for not found errors"""

    status_code = 404

    def __init__(self, resource_type: str, resource_id: str):
        super().__init__(
            f"{resource_type} not found",
            code=f"{resource_type.upper()}_NOT_FOUND",
            details={"resource_type": resource_type, "resource_id": resource_id}
        )


class EventNotFoundError(NotFoundError):
    def __init__(self, event_id: str):
        super().__init__("Event", event_id)


class RegistrationNotFoundError(NotFoundError):
    def __init__(self, registration_id: str, message: Optional[str] = None):
        super().__init__("Registration", registration_id)
        if message:
            self.message = message


class UserNotFoundError(NotFoundError):
    def __init__(self, user_id: str):
        super().__init__("User", user_id)


# ============================================
# Conflict / availability
# ============================================

class ConflictError(TechfestError):
    """Row changed under us (optimistic version check failed)"""

    status_code = 409

    def __init__(self, message: str = "Event was modified by another request, please retry"):
        super().__init__(message, code="CONFLICT")


class PaymentUnavailableError(TechfestError):
    """Payment gateway credentials are not configured"""

    status_code = 503

    def __init__(self, message: str = "Payment service not configured. Please contact support."):
        super().__init__(message, code="PAYMENT_UNAVAILABLE")


class ServerError(TechfestError):
    """Anything else, including database and gateway faults"""

    status_code = 500

    def __init__(self, message: str = "Server error"):
        super().__init__(message, code="SERVER_ERROR")


# ============================================
# Helper function for API responses
# ============================================

def error_response(error: TechfestError, envelope: bool = False) -> Dict[str, Any]:
    """Convert exception to API error body.

    ``envelope`` selects the ``{success, message}`` shape used by payment
    and admin routes; the bare ``{message}`` shape is used everywhere else.
    """
    if envelope:
        return {"success": False, "message": error.message}
    return {"message": error.message}
