# Pydantic schemas
from app.schemas.auth import (
    UserRegister,
    UserLogin,
    UserResponse,
    AuthResponse,
    FcmTokenUpdate,
    UserRoleUpdate,
    UserRoleResponse,
)
from app.schemas.event import EventCreate, EventUpdate, EventResponse
from app.schemas.registration import (
    Registrant,
    GroupRegistrationRequest,
    IndividualRegistrationRequest,
    UpdateRegistrationStatusRequest,
    RegistrationResponse,
    GroupRegistrationResponse,
    IndividualRegistrationResponse,
)
from app.schemas.payment import (
    CreateOrderRequest,
    CreateOrderResponse,
    VerifyPaymentRequest,
    VerifyPaymentResponse,
)

__all__ = [
    # Auth
    "UserRegister",
    "UserLogin",
    "UserResponse",
    "AuthResponse",
    "FcmTokenUpdate",
    "UserRoleUpdate",
    "UserRoleResponse",
    # Events
    "EventCreate",
    "EventUpdate",
    "EventResponse",
    # Registrations
    "Registrant",
    "GroupRegistrationRequest",
    "IndividualRegistrationRequest",
    "UpdateRegistrationStatusRequest",
    "RegistrationResponse",
    "GroupRegistrationResponse",
    "IndividualRegistrationResponse",
    # Payments
    "CreateOrderRequest",
    "CreateOrderResponse",
    "VerifyPaymentRequest",
    "VerifyPaymentResponse",
]
