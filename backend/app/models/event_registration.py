"""
Event Registration Model - the registration ledger

One row per person per event. Team members share ``team_name``; exactly one
of them carries ``is_leader``. Payment references stay null until a payment
is verified and are written once.
"""

from sqlalchemy import Column, String, Boolean, DateTime, Enum as SQLEnum, ForeignKey, Index

import enum

from app.core.database import Base
from app.core.types import GUID, generate_uuid, utcnow


class RegistrationStatus(str, enum.Enum):
    """Business-level approval state"""
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


class PaymentStatus(str, enum.Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"


class EventRegistration(Base):
    __tablename__ = "event_registrations"

    id = Column(GUID, primary_key=True, default=generate_uuid)
    event_id = Column(GUID, ForeignKey("events.id", ondelete="CASCADE"), nullable=False)

    # Registrant
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False)
    registration_no = Column(String(50), nullable=False)
    mobile_no = Column(String(20), nullable=False)
    semester = Column(String(10), nullable=False)

    # Team linkage (team_name is null for individual registrations)
    team_name = Column(String(100), nullable=True)
    is_leader = Column(Boolean, default=False, nullable=False)

    status = Column(SQLEnum(RegistrationStatus), default=RegistrationStatus.PENDING, nullable=False)

    # Payment
    payment_status = Column(SQLEnum(PaymentStatus), default=PaymentStatus.PENDING, nullable=False)
    order_id = Column(String(100), nullable=True)
    payment_id = Column(String(100), nullable=True)

    # Account that submitted the registration
    registered_by = Column(GUID, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)

    created_at = Column(DateTime, default=utcnow, nullable=False)

    __table_args__ = (
        Index("ix_event_registrations_event_email", "event_id", "email"),
        Index("ix_event_registrations_team_name", "team_name"),
        Index("ix_event_registrations_created_at", "created_at"),
    )

    def __repr__(self):
        return f"<EventRegistration {self.name} - {self.email}>"
