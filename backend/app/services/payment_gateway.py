"""
Razorpay gateway adapter

The only operation the backend needs from the gateway is minting an order.
Payment completion comes back to us signed and is checked locally
(see payment_service).
"""

from typing import Any, Dict, Optional, Protocol
from functools import lru_cache

import razorpay
from fastapi import Depends

from app.core.config import Settings, get_settings


class PaymentGateway(Protocol):
    key_id: str

    def create_order(
        self,
        amount: int,
        currency: str,
        receipt: str,
        notes: Dict[str, Any],
    ) -> Dict[str, Any]:
        ...


class RazorpayGateway:
    """Thin wrapper over ``razorpay.Client`` (blocking HTTP calls)"""

    def __init__(self, key_id: str, key_secret: str):
        self.key_id = key_id
        self.client = razorpay.Client(auth=(key_id, key_secret))

    def create_order(
        self,
        amount: int,
        currency: str,
        receipt: str,
        notes: Dict[str, Any],
    ) -> Dict[str, Any]:
        """Create an order; ``amount`` is in minor units (paise)"""
        return self.client.order.create(data={
            "amount": amount,
            "currency": currency,
            "receipt": receipt,
            "payment_capture": 1,
            "notes": notes,
        })


@lru_cache(maxsize=4)
def _build_gateway(key_id: str, key_secret: str) -> RazorpayGateway:
    return RazorpayGateway(key_id, key_secret)


def get_payment_gateway(settings: Settings = Depends(get_settings)) -> Optional[PaymentGateway]:
    """Gateway dependency; None when Razorpay keys are not configured"""
    if not settings.payments_configured:
        return None
    return _build_gateway(settings.RAZORPAY_KEY_ID, settings.RAZORPAY_KEY_SECRET)
