# API endpoints
from . import auth, events, registrations, payments, health, admin

__all__ = ["auth", "events", "registrations", "payments", "health", "admin"]
