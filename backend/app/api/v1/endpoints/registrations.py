"""
Event registration endpoints

- POST  /registrations/group           team registration (leader + members)
- POST  /registrations/individual      single-person registration
- GET   /registrations/me              caller's registrations
- GET   /registrations/event/{id}      admin listing grouped by team
- PATCH /registrations/{id}            admin lifecycle status update
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Dict, Any

from app.core.database import get_db
from app.core.exceptions import TechfestError, ServerError
from app.core.logging_config import logger, set_event_id
from app.models.user import User
from app.modules.auth.dependencies import get_current_user, get_current_admin
from app.schemas.registration import (
    GroupRegistrationRequest,
    GroupRegistrationResponse,
    IndividualRegistrationRequest,
    IndividualRegistrationResponse,
    UpdateRegistrationStatusRequest,
    serialize_registration,
)
from app.services.registration_service import registration_service


router = APIRouter()


@router.post("/group", response_model=GroupRegistrationResponse, status_code=status.HTTP_201_CREATED)
async def register_group(
    payload: GroupRegistrationRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Register a team; every member (leader included) gets a ledger entry"""
    set_event_id(payload.event_id)
    try:
        result = await registration_service.register_team(
            db,
            event_id=payload.event_id,
            team_name=payload.team_name,
            leader=payload.leader,
            members=payload.team_members,
            registered_by=str(current_user.id),
        )
        return GroupRegistrationResponse(
            message="Team registration successful",
            registrations=[serialize_registration(entry) for entry in result.registrations],
            total_fee=result.total_fee,
        )

    except TechfestError:
        raise
    except Exception as e:
        logger.log_error_with_context(e, "register_group", team_name=payload.team_name)
        raise ServerError("Error registering team")


@router.post("/individual", response_model=IndividualRegistrationResponse, status_code=status.HTTP_201_CREATED)
async def register_individual(
    payload: IndividualRegistrationRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    set_event_id(payload.event_id)
    try:
        result = await registration_service.register_individual(
            db,
            event_id=payload.event_id,
            person=payload,
            registered_by=str(current_user.id),
        )
        return IndividualRegistrationResponse(
            message="Registered successfully",
            registration=serialize_registration(result.registrations[0]),
            total_fee=result.total_fee,
        )

    except TechfestError:
        raise
    except Exception as e:
        logger.log_error_with_context(e, "register_individual")
        raise ServerError("Error registering for event")


@router.get("/me")
async def my_registrations(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> List[Dict[str, Any]]:
    entries = await registration_service.list_for_user(db, current_user)
    return [serialize_registration(entry) for entry in entries]


@router.get("/event/{event_id}")
async def event_registrations(
    event_id: str,
    admin: User = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db),
) -> Dict[str, Any]:
    """Registrations of an event grouped by team (individuals under their own key)"""
    try:
        return await registration_service.list_for_event(db, event_id)
    except Exception as e:
        logger.log_error_with_context(e, "event_registrations", event_id=event_id)
        raise ServerError("Error fetching registrations")


@router.patch("/{registration_id}")
async def update_registration_status(
    registration_id: str,
    payload: UpdateRegistrationStatusRequest,
    admin: User = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db),
) -> Dict[str, Any]:
    try:
        entry = await registration_service.update_status(db, registration_id, payload.status)
        return serialize_registration(entry)

    except TechfestError:
        raise
    except Exception as e:
        logger.log_error_with_context(e, "update_registration_status", registration_id=registration_id)
        raise ServerError("Error updating registration")
