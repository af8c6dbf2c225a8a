"""
Registration Service - Business logic for the registration ledger

Handles:
- Team registration (leader + members created as one unit)
- Individual registration
- Admin listing grouped by team, and lifecycle status updates
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, or_
from sqlalchemy.orm.exc import StaleDataError
from dataclasses import dataclass
from typing import Optional, List, Dict, Any
import logging

from app.core.exceptions import (
    ConflictError,
    EventNotFoundError,
    InvalidRequestError,
    RegistrationNotFoundError,
)
from app.core.types import generate_uuid, is_valid_uuid, utcnow
from app.models.event import Event, EventKind
from app.models.event_registration import EventRegistration, RegistrationStatus
from app.models.user import User
from app.schemas.registration import Registrant, serialize_registration

logger = logging.getLogger(__name__)

MIN_TEAM_MEMBERS = 2  # excluding the leader

# Key under which solo registrations are grouped in the admin listing
INDIVIDUALS_KEY = "individuals"


@dataclass
class RegistrationResult:
    registrations: List[EventRegistration]
    total_fee: float


class RegistrationService:
    """Service for creating and querying ledger entries"""

    # ==================== LOOKUPS ====================

    async def get_event(self, db: AsyncSession, event_id: Optional[str]) -> Event:
        """Load an event or raise EventNotFoundError"""
        event = None
        if event_id and is_valid_uuid(event_id):
            event = await db.get(Event, str(event_id))
        if not event:
            raise EventNotFoundError(str(event_id))
        return event

    async def get_registration(self, db: AsyncSession, registration_id: Optional[str]) -> EventRegistration:
        """Load a ledger entry or raise RegistrationNotFoundError"""
        entry = None
        if registration_id and is_valid_uuid(registration_id):
            entry = await db.get(EventRegistration, str(registration_id))
        if not entry:
            raise RegistrationNotFoundError(str(registration_id))
        return entry

    # ==================== CREATION ====================

    async def register_team(
        self,
        db: AsyncSession,
        event_id: str,
        team_name: str,
        leader: Registrant,
        members: List[Registrant],
        registered_by: Optional[str] = None,
    ) -> RegistrationResult:
        """
        Register a team: one entry for the leader, one per member.

        Checks run in order and the first failure wins:
        event exists, event is a group event, at least two members,
        at most ``max_team_size`` members, team name free for this event.

        All inserts and the append to the event's registration list are
        committed together; any failure rolls the whole team back.

        Returns:
            The created entries (leader first) and the fee for the whole
            team, ``event.fee * (members + 1)``. The fee is not stored.
        """
        event = await self.get_event(db, event_id)

        if event.event_type != EventKind.GROUP:
            raise InvalidRequestError("This is not a group event")

        if len(members) < MIN_TEAM_MEMBERS:
            raise InvalidRequestError(f"At least {MIN_TEAM_MEMBERS} team members are required")

        if len(members) > event.max_team_size:
            raise InvalidRequestError(f"Maximum team size is {event.max_team_size}")

        team_name = team_name.strip()
        if not team_name or team_name.lower() == INDIVIDUALS_KEY:
            raise InvalidRequestError("Please choose a different team name", field="teamName")

        if await self._team_name_taken(db, event.id, team_name):
            raise InvalidRequestError(
                f"Team name '{team_name}' is already registered for this event",
                field="teamName",
            )

        total_fee = event.fee * (len(members) + 1)  # +1 for leader

        entries = [self._new_entry(event.id, leader, team_name, True, registered_by)]
        entries.extend(
            self._new_entry(event.id, member, team_name, False, registered_by)
            for member in members
        )

        await self._persist(db, event, entries)

        logger.info(
            f"Team '{team_name}' registered for event {event.id} "
            f"({len(entries)} people, total fee {total_fee})"
        )
        return RegistrationResult(registrations=entries, total_fee=total_fee)

    async def register_individual(
        self,
        db: AsyncSession,
        event_id: str,
        person: Registrant,
        registered_by: Optional[str] = None,
    ) -> RegistrationResult:
        """Register one person for an individual event"""
        event = await self.get_event(db, event_id)

        if event.event_type != EventKind.INDIVIDUAL:
            raise InvalidRequestError("This is not an individual event")

        existing = await db.execute(
            select(EventRegistration.id).where(
                EventRegistration.event_id == event.id,
                EventRegistration.email == person.email,
            )
        )
        if existing.first():
            raise InvalidRequestError("Already registered for this event")

        entry = self._new_entry(event.id, person, None, False, registered_by)
        await self._persist(db, event, [entry])

        logger.info(f"Individual registration {entry.id} for event {event.id}")
        return RegistrationResult(registrations=[entry], total_fee=event.fee)

    # ==================== QUERIES ====================

    async def list_for_event(self, db: AsyncSession, event_id: str) -> Dict[str, Any]:
        """
        All entries of an event, newest first, grouped by team.

        Shape: ``{"individuals": [...], "<team>": {"teamName", "members", "totalFee"}}``.
        ``totalFee`` adds the event fee once per entry in ``members``; the
        leader is one of the members.
        """
        if not is_valid_uuid(event_id):
            return {}

        event = await db.get(Event, str(event_id))
        fee = event.fee if event else 0

        result = await db.execute(
            select(EventRegistration)
            .where(EventRegistration.event_id == str(event_id))
            .order_by(EventRegistration.created_at.desc())
        )

        grouped: Dict[str, Any] = {}
        for entry in result.scalars().all():
            data = serialize_registration(entry)
            if entry.team_name:
                team = grouped.setdefault(
                    entry.team_name,
                    {"teamName": entry.team_name, "members": [], "totalFee": 0},
                )
                team["members"].append(data)
                team["totalFee"] += fee
            else:
                grouped.setdefault(INDIVIDUALS_KEY, []).append(data)

        return grouped

    async def list_for_user(self, db: AsyncSession, user: User) -> List[EventRegistration]:
        """Entries the user submitted or is named in, newest first"""
        result = await db.execute(
            select(EventRegistration)
            .where(
                or_(
                    EventRegistration.registered_by == str(user.id),
                    EventRegistration.email == user.email,
                )
            )
            .order_by(EventRegistration.created_at.desc())
        )
        return list(result.scalars().all())

    async def update_status(
        self,
        db: AsyncSession,
        registration_id: str,
        status: Optional[str],
    ) -> EventRegistration:
        """Set the lifecycle status (pending | confirmed | cancelled)"""
        try:
            new_status = RegistrationStatus(status)
        except ValueError:
            allowed = ", ".join(s.value for s in RegistrationStatus)
            raise InvalidRequestError(f"Status must be one of: {allowed}", field="status")

        entry = await self.get_registration(db, registration_id)
        entry.status = new_status
        await db.commit()

        logger.info(f"Registration {entry.id} status -> {new_status.value}")
        return entry

    # ==================== HELPERS ====================

    async def _team_name_taken(self, db: AsyncSession, event_id: str, team_name: str) -> bool:
        result = await db.execute(
            select(EventRegistration.id).where(
                EventRegistration.event_id == event_id,
                EventRegistration.team_name == team_name,
            ).limit(1)
        )
        return result.first() is not None

    def _new_entry(
        self,
        event_id: str,
        person: Registrant,
        team_name: Optional[str],
        is_leader: bool,
        registered_by: Optional[str],
    ) -> EventRegistration:
        return EventRegistration(
            id=generate_uuid(),
            event_id=event_id,
            name=person.name,
            email=person.email,
            registration_no=person.registration_no,
            mobile_no=person.mobile_no,
            semester=person.semester,
            team_name=team_name,
            is_leader=is_leader,
            status=RegistrationStatus.PENDING,
            registered_by=registered_by,
        )

    async def _persist(
        self,
        db: AsyncSession,
        event: Event,
        entries: List[EventRegistration],
    ) -> None:
        """Insert entries and append their references to the event in one commit"""
        event_id = event.id
        try:
            db.add_all(entries)
            await db.flush()

            registered_at = utcnow().isoformat()
            if event.registrations is None:
                event.registrations = []
            event.registrations.extend(
                {
                    "registrationRef": entry.id,
                    "registeredAt": registered_at,
                    "status": RegistrationStatus.PENDING.value,
                }
                for entry in entries
            )

            await db.commit()
        except StaleDataError:
            await db.rollback()
            logger.warning(f"Concurrent registration on event {event_id}, rolled back")
            raise ConflictError()
        except Exception:
            await db.rollback()
            raise


# Singleton instance
registration_service = RegistrationService()
