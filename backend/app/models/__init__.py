# Re-export all models for convenient imports
from app.models.user import User, UserRole, Branch, ADMIN_ROLES
from app.models.event import Event, EventKind, EventTiming
from app.models.event_registration import EventRegistration, RegistrationStatus, PaymentStatus

__all__ = [
    # User
    "User",
    "UserRole",
    "Branch",
    "ADMIN_ROLES",
    # Event catalog
    "Event",
    "EventKind",
    "EventTiming",
    # Registration ledger
    "EventRegistration",
    "RegistrationStatus",
    "PaymentStatus",
]
