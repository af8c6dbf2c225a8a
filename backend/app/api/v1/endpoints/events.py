"""
Event catalog endpoints

Public listing, authenticated detail, admin create/update/delete.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete
from sqlalchemy.orm.exc import StaleDataError
from typing import List

from app.core.database import get_db
from app.core.exceptions import TechfestError, ConflictError, InvalidRequestError, ServerError
from app.core.logging_config import logger
from app.models.user import User
from app.models.event import Event
from app.models.event_registration import EventRegistration
from app.modules.auth.dependencies import get_current_user, get_current_admin
from app.schemas.event import EventCreate, EventUpdate, EventResponse
from app.services.registration_service import registration_service


router = APIRouter()


@router.get("", response_model=List[EventResponse])
async def list_events(db: AsyncSession = Depends(get_db)):
    """All events, latest date first (public)"""
    try:
        result = await db.execute(select(Event).order_by(Event.date.desc()))
        return result.scalars().all()
    except Exception as e:
        logger.log_error_with_context(e, "list_events")
        raise ServerError("Error fetching events")


@router.get("/{event_id}", response_model=EventResponse)
async def get_event(
    event_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await registration_service.get_event(db, event_id)


@router.post("", response_model=EventResponse, status_code=status.HTTP_201_CREATED)
async def create_event(
    payload: EventCreate,
    admin: User = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db),
):
    """Create event (Admin only)"""
    try:
        event = Event(**payload.model_dump(), registrations=[])
        db.add(event)
        await db.commit()
        await db.refresh(event)

        logger.info(f"[Events] Created '{event.title}' ({event.id}) by {admin.email}")
        return event

    except TechfestError:
        raise
    except Exception as e:
        await db.rollback()
        logger.log_error_with_context(e, "create_event")
        raise ServerError("Error creating event")


@router.put("/{event_id}", response_model=EventResponse)
async def update_event(
    event_id: str,
    payload: EventUpdate,
    admin: User = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db),
):
    """Update event fields (Admin only); the registration list is not editable here"""
    event = await registration_service.get_event(db, event_id)

    changes = payload.model_dump(exclude_unset=True)
    for field in ("title", "description", "date", "end_date", "venue", "type", "event_type", "fee", "max_team_size"):
        if field in changes and changes[field] is None:
            raise InvalidRequestError(f"{field} cannot be empty", field=field)

    start = changes.get("date", event.date)
    end = changes.get("end_date", event.end_date)
    if end < start:
        raise InvalidRequestError("End date cannot be before the start date", field="end_date")

    try:
        for field, value in changes.items():
            setattr(event, field, value)
        await db.commit()
        await db.refresh(event)

        logger.info(f"[Events] Updated {event.id}: {', '.join(changes) or 'no changes'}")
        return event

    except StaleDataError:
        await db.rollback()
        raise ConflictError()
    except Exception as e:
        await db.rollback()
        logger.log_error_with_context(e, "update_event", event_id=event_id)
        raise ServerError("Error updating event")


@router.delete("/{event_id}")
async def delete_event(
    event_id: str,
    admin: User = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db),
):
    """Delete event and every registration made for it (Admin only)"""
    event = await registration_service.get_event(db, event_id)

    try:
        await db.execute(
            delete(EventRegistration).where(EventRegistration.event_id == event.id)
        )
        await db.delete(event)
        await db.commit()

        logger.info(f"[Events] Deleted {event_id} by {admin.email}")
        return {"message": "Event deleted"}

    except StaleDataError:
        await db.rollback()
        raise ConflictError()
    except Exception as e:
        await db.rollback()
        logger.log_error_with_context(e, "delete_event", event_id=event_id)
        raise ServerError("Error deleting event")
