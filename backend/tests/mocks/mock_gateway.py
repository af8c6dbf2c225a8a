"""
Mock payment gateway for testing
Records order requests and returns Razorpay-shaped order objects
"""
from typing import Any, Dict, List, Optional
import uuid


class FakeGateway:
    """Stands in for RazorpayGateway without network calls"""

    def __init__(self, key_id: str = "rzp_test_key"):
        self.key_id = key_id
        self.orders: List[Dict[str, Any]] = []
        self.fail_with: Optional[Exception] = None

    def create_order(
        self,
        amount: int,
        currency: str,
        receipt: str,
        notes: Dict[str, Any],
    ) -> Dict[str, Any]:
        if self.fail_with:
            raise self.fail_with

        order = {
            "id": f"order_{uuid.uuid4().hex[:14]}",
            "entity": "order",
            "amount": amount,
            "amount_paid": 0,
            "amount_due": amount,
            "currency": currency,
            "receipt": receipt,
            "status": "created",
            "attempts": 0,
            "notes": notes,
        }
        self.orders.append(order)
        return order

    @property
    def last_order(self) -> Optional[Dict[str, Any]]:
        return self.orders[-1] if self.orders else None

    def reset(self):
        """Reset mock state"""
        self.orders = []
        self.fail_with = None
