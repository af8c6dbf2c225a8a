"""
Payment Service - order creation and payment reconciliation

Flow:
1. Client calls /payments/create-order -> gateway order (nothing stored)
2. Client completes checkout in the gateway UI
3. Client calls /payments/verify with the signed payload -> signature is
   recomputed with our key secret and the ledger entry is marked completed
4. Gateway webhook -> backup reconciliation for checkouts whose redirect
   never reached us

Payment status on the ledger is one of pending | completed | failed. The
same vocabulary is used on the wire.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool
from fastapi import Depends
from dataclasses import dataclass
from typing import Optional, Dict, Any
import json
import logging
import time

from app.core.config import Settings, get_settings
from app.core.exceptions import (
    InvalidRequestError,
    InvalidSignatureError,
    PaymentUnavailableError,
    RegistrationNotFoundError,
    UnauthorizedError,
)
from app.core.security import compute_hmac_sha256, signatures_match
from app.core.types import is_valid_uuid
from app.models.event_registration import EventRegistration, PaymentStatus, RegistrationStatus
from app.services.payment_gateway import PaymentGateway, get_payment_gateway

logger = logging.getLogger(__name__)


@dataclass
class VerificationResult:
    registration: EventRegistration
    already_completed: bool = False

    @property
    def message(self) -> str:
        if self.already_completed:
            return "Payment already verified for this registration"
        return "Payment verified and registration confirmed successfully"


class PaymentService:
    """Creates gateway orders and reconciles signed payment confirmations"""

    def __init__(self, settings: Settings, gateway: Optional[PaymentGateway]):
        self.settings = settings
        self.gateway = gateway

    # ==================== ORDERS ====================

    async def create_order(
        self,
        db: AsyncSession,
        event_id: Optional[str],
        amount: Optional[float],
        registration_id: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Mint a gateway order for ``amount`` rupees.

        The order is returned as the gateway produced it. When a
        registration id is given it must belong to the event and still be
        awaiting payment; it is recorded in the order notes so webhooks can
        find it.
        """
        if not event_id or amount is None:
            raise InvalidRequestError("Event ID and amount are required")

        if amount <= 0:
            raise InvalidRequestError("Amount must be greater than zero", field="amount")

        if self.gateway is None:
            raise PaymentUnavailableError()

        notes: Dict[str, Any] = {"eventId": event_id}
        if registration_id:
            entry = await self._find_registration(db, registration_id, event_id)
            if entry is None or entry.payment_status == PaymentStatus.COMPLETED:
                raise RegistrationNotFoundError(
                    registration_id,
                    "Registration not found or payment already completed",
                )
            notes["registrationId"] = registration_id
            # Gateway receipts are capped at 40 characters
            receipt = f"rcpt_{registration_id.replace('-', '')[:32]}"
        else:
            receipt = f"evt_{event_id.replace('-', '')[:16]}_{int(time.time())}"

        amount_minor = int(round(amount * 100))
        order = await run_in_threadpool(
            self.gateway.create_order,
            amount_minor,
            self.settings.PAYMENT_CURRENCY,
            receipt,
            notes,
        )

        logger.info(
            f"[Payment] Created order {order.get('id')} for event {event_id} "
            f"({amount_minor} {self.settings.PAYMENT_CURRENCY} minor units)"
        )
        return order

    # ==================== VERIFICATION ====================

    def compute_signature(self, order_id: str, payment_id: str) -> str:
        """Signature the gateway produces for a completed checkout"""
        return compute_hmac_sha256(self.settings.RAZORPAY_KEY_SECRET, f"{order_id}|{payment_id}")

    async def verify_payment(
        self,
        db: AsyncSession,
        order_id: Optional[str],
        payment_id: Optional[str],
        signature: Optional[str],
        event_id: Optional[str],
        registration_id: Optional[str],
    ) -> VerificationResult:
        """
        Check a checkout signature and mark the registration paid.

        - any field missing -> InvalidRequestError, nothing touched
        - signature mismatch -> InvalidSignatureError, nothing touched
        - registration unknown or of another event -> RegistrationNotFoundError
        - registration already completed -> success, stored ids kept
        - otherwise payment ids are stored, payment_status=completed and a
          pending registration becomes confirmed
        """
        if not all((order_id, payment_id, signature, event_id, registration_id)):
            raise InvalidRequestError("Missing required payment verification parameters")

        if not self.settings.RAZORPAY_KEY_SECRET:
            raise PaymentUnavailableError()

        expected = self.compute_signature(order_id, payment_id)
        if not signatures_match(expected, signature):
            logger.warning(f"[Payment] Invalid signature for order {order_id}")
            raise InvalidSignatureError()

        entry = await self._find_registration(db, registration_id, event_id)
        if entry is None:
            raise RegistrationNotFoundError(registration_id)

        if entry.payment_status == PaymentStatus.COMPLETED:
            logger.info(f"[Payment] Registration {registration_id} already paid (order {entry.order_id})")
            return VerificationResult(registration=entry, already_completed=True)

        self._mark_completed(entry, order_id, payment_id)
        await db.commit()

        logger.info(f"[Payment] Verified payment {payment_id} for registration {registration_id}")
        return VerificationResult(registration=entry)

    # ==================== WEBHOOK ====================

    async def handle_webhook(
        self,
        db: AsyncSession,
        body: bytes,
        signature: Optional[str],
    ) -> Dict[str, Any]:
        """
        Process a gateway webhook.

        Handles payment.captured / order.paid (mark completed) and
        payment.failed (mark failed while still pending). The registration is
        located through the ``registrationId`` note set at order creation.
        """
        secret = self.settings.RAZORPAY_WEBHOOK_SECRET
        if not secret:
            logger.warning("[Webhook] Webhook secret not configured")
            return {"status": "skipped", "reason": "webhook not configured"}

        if not signatures_match(compute_hmac_sha256(secret, body), signature):
            logger.warning("[Webhook] Invalid webhook signature")
            raise UnauthorizedError("Invalid webhook signature")

        try:
            payload = json.loads(body)
        except ValueError:
            raise InvalidRequestError("Malformed webhook payload")

        event = payload.get("event")
        entities = payload.get("payload") or {}
        payment = (entities.get("payment") or {}).get("entity") or {}
        order = (entities.get("order") or {}).get("entity") or {}
        notes = payment.get("notes") or order.get("notes") or {}

        registration_id = notes.get("registrationId")
        order_id = payment.get("order_id") or order.get("id")
        payment_id = payment.get("id")

        logger.info(f"[Webhook] Received event: {event} (order {order_id})")

        if event not in ("payment.captured", "order.paid", "payment.failed"):
            return {"status": "ignored", "event": event}

        if not registration_id:
            logger.warning(f"[Webhook] No registrationId in notes for order {order_id}")
            return {"status": "ignored", "event": event}

        entry = await self._find_registration(db, registration_id, notes.get("eventId"))
        if entry is None:
            logger.warning(f"[Webhook] Registration {registration_id} not found")
            return {"status": "ignored", "event": event}

        if event == "payment.failed":
            if entry.payment_status == PaymentStatus.PENDING:
                entry.payment_status = PaymentStatus.FAILED
                await db.commit()
                logger.info(f"[Webhook] Registration {registration_id} payment failed")
        elif entry.payment_status != PaymentStatus.COMPLETED and order_id and payment_id:
            self._mark_completed(entry, order_id, payment_id)
            await db.commit()
            logger.info(f"[Webhook] Registration {registration_id} marked paid via webhook")

        return {"status": "ok"}

    # ==================== HELPERS ====================

    async def _find_registration(
        self,
        db: AsyncSession,
        registration_id: str,
        event_id: Optional[str],
    ) -> Optional[EventRegistration]:
        if not is_valid_uuid(registration_id):
            return None
        entry = await db.get(EventRegistration, str(registration_id))
        if entry is None:
            return None
        if event_id and str(entry.event_id) != str(event_id):
            return None
        return entry

    @staticmethod
    def _mark_completed(entry: EventRegistration, order_id: str, payment_id: str) -> None:
        entry.payment_status = PaymentStatus.COMPLETED
        entry.payment_id = payment_id
        entry.order_id = order_id
        if entry.status == RegistrationStatus.PENDING:
            entry.status = RegistrationStatus.CONFIRMED


def get_payment_service(
    settings: Settings = Depends(get_settings),
    gateway: Optional[PaymentGateway] = Depends(get_payment_gateway),
) -> PaymentService:
    """Request-scoped service built from the startup settings"""
    return PaymentService(settings=settings, gateway=gateway)
