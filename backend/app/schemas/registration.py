from pydantic import BaseModel, EmailStr, Field
from typing import Optional, List, Dict, Any
from datetime import datetime

from app.models.event_registration import RegistrationStatus, PaymentStatus

# 10 digits, or 11-12 digits when a 1-2 digit country code is prefixed
MOBILE_NO_PATTERN = r'^(?:\+?\d{1,2})?\d{10}$'


class Registrant(BaseModel):
    """Identity fields submitted for one person (leader, member or individual)"""
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    registration_no: str = Field(..., min_length=1, max_length=50)
    mobile_no: str = Field(..., pattern=MOBILE_NO_PATTERN, description="10-digit mobile number, optional country code")
    semester: str = Field(..., min_length=1, max_length=10)


class GroupRegistrationRequest(BaseModel):
    event_id: str = Field(..., alias="eventId")
    team_name: str = Field(..., alias="teamName", min_length=1, max_length=100)
    leader: Registrant
    team_members: List[Registrant] = Field(..., alias="teamMembers")

    class Config:
        populate_by_name = True


class IndividualRegistrationRequest(Registrant):
    event_id: str = Field(..., alias="eventId")

    class Config:
        populate_by_name = True


class UpdateRegistrationStatusRequest(BaseModel):
    # Checked against RegistrationStatus in the service so a bad value is a 400
    status: Optional[str] = None


class RegistrationResponse(BaseModel):
    """Wire shape of one ledger entry"""
    id: str
    event: str = Field(..., validation_alias="event_id")
    name: str
    email: str
    registration_no: str
    mobile_no: str
    semester: str
    team_name: Optional[str] = Field(None, serialization_alias="teamName")
    is_leader: bool = Field(False, serialization_alias="isLeader")
    status: RegistrationStatus
    payment_status: PaymentStatus = Field(..., serialization_alias="paymentStatus")
    payment_id: Optional[str] = Field(None, serialization_alias="paymentId")
    order_id: Optional[str] = Field(None, serialization_alias="orderId")
    created_at: datetime

    class Config:
        from_attributes = True


def serialize_registration(entry: Any) -> Dict[str, Any]:
    """ORM entry -> JSON-ready dict with wire field names"""
    return RegistrationResponse.model_validate(entry).model_dump(by_alias=True, mode="json")


class GroupRegistrationResponse(BaseModel):
    message: str
    registrations: List[Dict[str, Any]]
    total_fee: float = Field(..., serialization_alias="totalFee")


class IndividualRegistrationResponse(BaseModel):
    message: str
    registration: Dict[str, Any]
    total_fee: float = Field(..., serialization_alias="totalFee")
