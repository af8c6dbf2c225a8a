from pydantic import BaseModel, Field, field_validator, model_validator
from typing import Optional, List, Dict, Any
from datetime import datetime, timezone

from app.models.event import EventKind, EventTiming


def to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Event dates are stored as naive UTC"""
    if value is not None and value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


class EventCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=100)
    description: str = Field(..., min_length=1)
    date: datetime
    end_date: datetime
    venue: str = Field(..., min_length=1)
    type: EventTiming = EventTiming.UPCOMING
    event_type: EventKind = Field(EventKind.INDIVIDUAL, alias="eventType")
    fee: float = Field(0, ge=0)
    max_team_size: int = Field(1, ge=1, alias="maxTeamSize")

    class Config:
        populate_by_name = True

    @field_validator('date', 'end_date')
    @classmethod
    def normalize_dates(cls, v: datetime) -> datetime:
        return to_naive_utc(v)

    @model_validator(mode='after')
    def check_dates(self):
        if self.end_date < self.date:
            raise ValueError("End date cannot be before the start date")
        return self


class EventUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = None
    date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    venue: Optional[str] = None
    type: Optional[EventTiming] = None
    event_type: Optional[EventKind] = Field(None, alias="eventType")
    fee: Optional[float] = Field(None, ge=0)
    max_team_size: Optional[int] = Field(None, ge=1, alias="maxTeamSize")

    class Config:
        populate_by_name = True

    @field_validator('date', 'end_date')
    @classmethod
    def normalize_dates(cls, v: Optional[datetime]) -> Optional[datetime]:
        return to_naive_utc(v)


class EventResponse(BaseModel):
    id: str
    title: str
    description: str
    date: datetime
    end_date: datetime
    venue: str
    type: EventTiming
    event_type: EventKind = Field(..., serialization_alias="eventType")
    fee: float
    max_team_size: int = Field(..., serialization_alias="maxTeamSize")
    registrations: List[Dict[str, Any]] = Field(default_factory=list)
    registration_count: int = Field(0, serialization_alias="registrationCount")
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
