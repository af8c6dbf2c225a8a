"""
Unit Tests for registration and payment request schemas
"""
from datetime import datetime

import pytest
from pydantic import ValidationError

from app.models.event_registration import EventRegistration, PaymentStatus, RegistrationStatus
from app.schemas.payment import CreateOrderRequest, VerifyPaymentRequest
from app.schemas.registration import (
    GroupRegistrationRequest,
    IndividualRegistrationRequest,
    Registrant,
    serialize_registration,
)


def _person(**overrides):
    person = {
        "name": "Asha Rao",
        "email": "asha@example.com",
        "registration_no": "21CSE1001",
        "mobile_no": "9876543210",
        "semester": "5",
    }
    person.update(overrides)
    return person


class TestRegistrant:

    @pytest.mark.parametrize("mobile", ["9876543210", "919876543210", "+919876543210", "+19876543210"])
    def test_valid_mobile_numbers(self, mobile):
        assert Registrant(**_person(mobile_no=mobile)).mobile_no == mobile

    @pytest.mark.parametrize("mobile", ["98765", "98765432101234", "98765abcde", "+"])
    def test_invalid_mobile_numbers(self, mobile):
        with pytest.raises(ValidationError):
            Registrant(**_person(mobile_no=mobile))

    def test_invalid_email(self):
        with pytest.raises(ValidationError):
            Registrant(**_person(email="not-an-email"))

    def test_missing_field(self):
        data = _person()
        del data["semester"]

        with pytest.raises(ValidationError):
            Registrant(**data)


class TestGroupRegistrationRequest:

    def test_camel_case_fields(self):
        request = GroupRegistrationRequest.model_validate({
            "eventId": "e1",
            "teamName": "Byte Club",
            "leader": _person(),
            "teamMembers": [_person(email="b@example.com"), _person(email="c@example.com")],
        })

        assert request.event_id == "e1"
        assert request.team_name == "Byte Club"
        assert len(request.team_members) == 2

    def test_snake_case_fields(self):
        request = GroupRegistrationRequest.model_validate({
            "event_id": "e1",
            "team_name": "Byte Club",
            "leader": _person(),
            "team_members": [],
        })

        assert request.team_members == []

    def test_individual_request_is_a_registrant(self):
        request = IndividualRegistrationRequest.model_validate({"eventId": "e1", **_person()})

        assert isinstance(request, Registrant)
        assert request.event_id == "e1"


class TestSerializeRegistration:

    def test_wire_field_names(self):
        entry = EventRegistration(
            id="11111111-1111-1111-1111-111111111111",
            event_id="22222222-2222-2222-2222-222222222222",
            name="Asha Rao",
            email="asha@example.com",
            registration_no="21CSE1001",
            mobile_no="9876543210",
            semester="5",
            team_name="Byte Club",
            is_leader=True,
            status=RegistrationStatus.PENDING,
            payment_status=PaymentStatus.PENDING,
            created_at=datetime(2026, 1, 5, 9, 30),
        )

        data = serialize_registration(entry)

        assert data["event"] == "22222222-2222-2222-2222-222222222222"
        assert data["teamName"] == "Byte Club"
        assert data["isLeader"] is True
        assert data["status"] == "pending"
        assert data["paymentStatus"] == "pending"
        assert data["paymentId"] is None
        assert data["orderId"] is None
        assert "team_name" not in data


class TestPaymentSchemas:

    def test_verify_accepts_gateway_field_names(self):
        request = VerifyPaymentRequest.model_validate({
            "razorpay_order_id": "order_1",
            "razorpay_payment_id": "pay_1",
            "razorpay_signature": "sig",
            "eventId": "e1",
            "registrationId": "r1",
        })

        assert (request.order_id, request.payment_id, request.signature) == ("order_1", "pay_1", "sig")

    def test_verify_fields_optional(self):
        request = VerifyPaymentRequest.model_validate({"orderId": "order_1"})

        assert request.order_id == "order_1"
        assert request.signature is None

    def test_create_order_amount_in_rupees(self):
        request = CreateOrderRequest.model_validate({"eventId": "e1", "amount": 147})

        assert request.amount == 147.0
        assert request.registration_id is None
