"""
Event Model - the event catalog

Each event keeps a denormalized, append-only list of the ledger entries
created for it (``registrations``). The ``version`` column is an optimistic
concurrency counter: every flush that touches the row (including an append
to ``registrations``) bumps it, and a flush against a stale version fails.
"""

from sqlalchemy import Column, String, DateTime, Enum as SQLEnum, Float, Integer, Text, JSON
from sqlalchemy.ext.mutable import MutableList
import enum

from app.core.database import Base
from app.core.types import GUID, generate_uuid, utcnow


class EventTiming(str, enum.Enum):
    UPCOMING = "upcoming"
    PAST = "past"


class EventKind(str, enum.Enum):
    """Whether people register alone or as a team"""
    INDIVIDUAL = "individual"
    GROUP = "group"


class Event(Base):
    __tablename__ = "events"

    id = Column(GUID, primary_key=True, default=generate_uuid)
    title = Column(String(100), nullable=False)
    description = Column(Text, nullable=False)
    date = Column(DateTime, nullable=False, index=True)
    end_date = Column(DateTime, nullable=False)
    venue = Column(String(255), nullable=False)
    type = Column(SQLEnum(EventTiming), default=EventTiming.UPCOMING, nullable=False)

    event_type = Column(SQLEnum(EventKind), default=EventKind.INDIVIDUAL, nullable=False)
    fee = Column(Float, default=0, nullable=False)  # 0 = free
    max_team_size = Column(Integer, default=1, nullable=False)

    # [{registrationRef, registeredAt, status}]
    registrations = Column(MutableList.as_mutable(JSON), default=list, nullable=False)

    version = Column(Integer, nullable=False, default=1)

    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    __mapper_args__ = {"version_id_col": version}

    @property
    def registration_count(self) -> int:
        return len(self.registrations or [])

    def __repr__(self):
        return f"<Event {self.title}>"
