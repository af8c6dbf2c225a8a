from pydantic import AliasChoices, BaseModel, Field
from typing import Optional, Dict, Any


class CreateOrderRequest(BaseModel):
    """Request to create a payment order (amount in rupees)"""
    event_id: Optional[str] = Field(None, validation_alias=AliasChoices("eventId", "event_id"))
    amount: Optional[float] = None
    registration_id: Optional[str] = Field(
        None, validation_alias=AliasChoices("registrationId", "registration_id")
    )


class CreateOrderResponse(BaseModel):
    success: bool = True
    order: Dict[str, Any]


class VerifyPaymentRequest(BaseModel):
    """Signed payload returned by the gateway checkout.

    Accepts both our field names and the gateway's ``razorpay_*`` names.
    All fields are optional here; missing ones are reported as a 400 by the
    verification service.
    """
    order_id: Optional[str] = Field(None, validation_alias=AliasChoices("orderId", "razorpay_order_id"))
    payment_id: Optional[str] = Field(None, validation_alias=AliasChoices("paymentId", "razorpay_payment_id"))
    signature: Optional[str] = Field(None, validation_alias=AliasChoices("signature", "razorpay_signature"))
    event_id: Optional[str] = Field(None, validation_alias=AliasChoices("eventId", "event_id"))
    registration_id: Optional[str] = Field(
        None, validation_alias=AliasChoices("registrationId", "registration_id")
    )


class VerifyPaymentResponse(BaseModel):
    success: bool
    message: str
    payment_status: str = Field(..., serialization_alias="paymentStatus")
