"""
RAZORPAY PAYMENT INTEGRATION
============================
Order creation, checkout verification and webhooks for event fees.

Flow:
1. Client registers → /registrations/group (entries start pending)
2. Client calls /payments/create-order → Razorpay order
3. Frontend opens Razorpay checkout with the order id
4. Frontend calls /payments/verify → signature checked, entry marked completed
5. Webhook /payments/webhook → Backup verification for failed redirects

Errors on these routes use the ``{success: false, message}`` body.
"""

from fastapi import APIRouter, Depends, Request, Header
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional

from app.core.database import get_db
from app.core.exceptions import TechfestError, ServerError
from app.core.logging_config import logger
from app.models.user import User
from app.models.event_registration import PaymentStatus
from app.modules.auth.dependencies import get_current_user
from app.schemas.payment import (
    CreateOrderRequest,
    CreateOrderResponse,
    VerifyPaymentRequest,
    VerifyPaymentResponse,
)
from app.services.payment_service import PaymentService, get_payment_service


router = APIRouter()


@router.post("/create-order", response_model=CreateOrderResponse)
async def create_order(
    payload: CreateOrderRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    service: PaymentService = Depends(get_payment_service),
):
    """Create a Razorpay order for an event fee (amount in rupees)"""
    try:
        order = await service.create_order(
            db,
            event_id=payload.event_id,
            amount=payload.amount,
            registration_id=payload.registration_id,
        )
        logger.log_payment_event(
            event="create_order",
            success=True,
            order_id=order.get("id"),
            registration_id=payload.registration_id,
            user_email=current_user.email,
        )
        return CreateOrderResponse(order=order)

    except TechfestError as e:
        logger.log_payment_event(
            event="create_order",
            success=False,
            registration_id=payload.registration_id,
            reason=e.message,
        )
        raise
    except Exception as e:
        logger.log_error_with_context(e, "create_order")
        raise ServerError("Error creating payment order")


@router.post("/verify", response_model=VerifyPaymentResponse)
async def verify_payment(
    payload: VerifyPaymentRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    service: PaymentService = Depends(get_payment_service),
):
    """Verify the checkout signature and mark the registration paid"""
    try:
        result = await service.verify_payment(
            db,
            order_id=payload.order_id,
            payment_id=payload.payment_id,
            signature=payload.signature,
            event_id=payload.event_id,
            registration_id=payload.registration_id,
        )
        logger.log_payment_event(
            event="verify",
            success=True,
            order_id=payload.order_id,
            registration_id=payload.registration_id,
            already_completed=result.already_completed,
        )
        return VerifyPaymentResponse(
            success=True,
            message=result.message,
            payment_status=PaymentStatus.COMPLETED.value,
        )

    except TechfestError as e:
        logger.log_payment_event(
            event="verify",
            success=False,
            order_id=payload.order_id,
            registration_id=payload.registration_id,
            reason=e.message,
        )
        raise
    except Exception as e:
        logger.log_error_with_context(e, "verify_payment")
        raise ServerError("Error verifying payment")


@router.post("/webhook")
async def razorpay_webhook(
    request: Request,
    x_razorpay_signature: Optional[str] = Header(None),
    db: AsyncSession = Depends(get_db),
    service: PaymentService = Depends(get_payment_service),
):
    """
    Razorpay webhook handler.

    Configure in the Razorpay dashboard:
    - URL: https://your-domain/api/v1/payments/webhook
    - Events: payment.captured, payment.failed, order.paid
    """
    body = await request.body()
    try:
        return await service.handle_webhook(db, body, x_razorpay_signature)

    except TechfestError:
        raise
    except Exception as e:
        logger.log_error_with_context(e, "razorpay_webhook")
        raise ServerError("Webhook processing failed")
