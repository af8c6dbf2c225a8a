# Business logic services
# The registration_service singleton is imported from its own module
from app.services.registration_service import RegistrationService
from app.services.payment_gateway import PaymentGateway, RazorpayGateway, get_payment_gateway
from app.services.payment_service import PaymentService, get_payment_service

__all__ = [
    "RegistrationService",
    "PaymentGateway",
    "RazorpayGateway",
    "get_payment_gateway",
    "PaymentService",
    "get_payment_service",
]
