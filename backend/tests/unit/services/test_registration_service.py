"""
Unit Tests for the registration service
Tests for: team size bounds, fee arithmetic, grouping, rollback, status updates
"""
import uuid

import pytest
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import (
    ConflictError,
    EventNotFoundError,
    InvalidRequestError,
    RegistrationNotFoundError,
)
from app.models.event import Event
from app.models.event_registration import EventRegistration, RegistrationStatus, PaymentStatus
from app.schemas.registration import Registrant
from app.services.registration_service import registration_service
from conftest import TestSessionLocal, make_person


def people(count: int):
    return [Registrant(**make_person()) for _ in range(count)]


async def count_entries(db: AsyncSession, event_id: str) -> int:
    result = await db.execute(
        select(func.count(EventRegistration.id)).where(EventRegistration.event_id == event_id)
    )
    return result.scalar_one()


class TestRegisterTeam:
    """Team registration"""

    @pytest.mark.asyncio
    async def test_leader_and_two_members(self, db_session, group_event, test_user):
        leader = Registrant(**make_person())
        result = await registration_service.register_team(
            db_session, group_event.id, "Byte Club", leader, people(2), registered_by=test_user.id
        )

        assert len(result.registrations) == 3
        assert result.total_fee == 147

        first, *members = result.registrations
        assert first.is_leader is True
        assert first.email == leader.email
        assert all(not m.is_leader for m in members)
        assert {e.team_name for e in result.registrations} == {"Byte Club"}
        assert {e.status for e in result.registrations} == {RegistrationStatus.PENDING}
        assert {e.payment_status for e in result.registrations} == {PaymentStatus.PENDING}
        assert all(e.payment_id is None and e.order_id is None for e in result.registrations)
        assert await count_entries(db_session, group_event.id) == 3

    @pytest.mark.asyncio
    async def test_event_keeps_one_reference_per_entry(self, db_session, group_event):
        result = await registration_service.register_team(
            db_session, group_event.id, "Byte Club", Registrant(**make_person()), people(3)
        )

        event = await db_session.get(Event, group_event.id)
        refs = [item["registrationRef"] for item in event.registrations]
        assert refs == [entry.id for entry in result.registrations]
        assert {item["status"] for item in event.registrations} == {"pending"}
        assert event.registration_count == 4

    @pytest.mark.asyncio
    async def test_one_member_rejected(self, db_session, group_event):
        with pytest.raises(InvalidRequestError) as exc_info:
            await registration_service.register_team(
                db_session, group_event.id, "Solo", Registrant(**make_person()), people(1)
            )

        assert exc_info.value.message == "At least 2 team members are required"
        assert await count_entries(db_session, group_event.id) == 0

    @pytest.mark.asyncio
    async def test_too_many_members_rejected(self, db_session, group_event):
        with pytest.raises(InvalidRequestError) as exc_info:
            await registration_service.register_team(
                db_session, group_event.id, "Crowd", Registrant(**make_person()), people(4)
            )

        assert exc_info.value.message == "Maximum team size is 3"
        assert await count_entries(db_session, group_event.id) == 0

    @pytest.mark.asyncio
    async def test_max_team_size_accepted(self, db_session, group_event):
        result = await registration_service.register_team(
            db_session, group_event.id, "Full House", Registrant(**make_person()), people(3)
        )

        assert len(result.registrations) == 4
        assert result.total_fee == 196

    @pytest.mark.asyncio
    async def test_unknown_event(self, db_session):
        with pytest.raises(EventNotFoundError):
            await registration_service.register_team(
                db_session, str(uuid.uuid4()), "Ghosts", Registrant(**make_person()), people(2)
            )

    @pytest.mark.asyncio
    async def test_malformed_event_id(self, db_session):
        with pytest.raises(EventNotFoundError):
            await registration_service.register_team(
                db_session, "not-an-id", "Ghosts", Registrant(**make_person()), people(2)
            )

    @pytest.mark.asyncio
    async def test_individual_event_rejected(self, db_session, individual_event):
        with pytest.raises(InvalidRequestError) as exc_info:
            await registration_service.register_team(
                db_session, individual_event.id, "Byte Club", Registrant(**make_person()), people(2)
            )

        assert exc_info.value.message == "This is not a group event"

    @pytest.mark.asyncio
    async def test_event_checked_before_team_size(self, db_session, individual_event):
        """An individual event with too few members reports the event type"""
        with pytest.raises(InvalidRequestError) as exc_info:
            await registration_service.register_team(
                db_session, individual_event.id, "Byte Club", Registrant(**make_person()), []
            )

        assert exc_info.value.message == "This is not a group event"

    @pytest.mark.asyncio
    async def test_duplicate_team_name_rejected(self, db_session, group_event):
        await registration_service.register_team(
            db_session, group_event.id, "Byte Club", Registrant(**make_person()), people(2)
        )

        with pytest.raises(InvalidRequestError):
            await registration_service.register_team(
                db_session, group_event.id, "Byte Club", Registrant(**make_person()), people(2)
            )

        assert await count_entries(db_session, group_event.id) == 3

    @pytest.mark.asyncio
    @pytest.mark.parametrize("team_name", ["individuals", "Individuals", "   "])
    async def test_reserved_or_blank_team_name(self, db_session, group_event, team_name):
        with pytest.raises(InvalidRequestError):
            await registration_service.register_team(
                db_session, group_event.id, team_name, Registrant(**make_person()), people(2)
            )

    @pytest.mark.asyncio
    async def test_failure_during_append_rolls_back_inserts(self, db_session, group_event, monkeypatch):
        event_id = group_event.id

        def broken_clock():
            raise RuntimeError("clock unavailable")

        monkeypatch.setattr("app.services.registration_service.utcnow", broken_clock)

        with pytest.raises(RuntimeError):
            await registration_service.register_team(
                db_session, event_id, "Byte Club", Registrant(**make_person()), people(2)
            )

        async with TestSessionLocal() as fresh:
            assert await count_entries(fresh, event_id) == 0
            event = await fresh.get(Event, event_id)
            assert event.registrations == []

    @pytest.mark.asyncio
    async def test_concurrent_registration_conflicts(self, db_session, group_event):
        async with TestSessionLocal() as first, TestSessionLocal() as second:
            # Both requests read the event before either writes; the identity
            # map holds objects weakly, so keep the loaded rows referenced
            seen_first = await first.get(Event, group_event.id)
            seen_second = await second.get(Event, group_event.id)
            assert seen_first.version == seen_second.version

            await registration_service.register_team(
                first, group_event.id, "Alpha", Registrant(**make_person()), people(2)
            )

            with pytest.raises(ConflictError):
                await registration_service.register_team(
                    second, group_event.id, "Beta", Registrant(**make_person()), people(2)
                )

        async with TestSessionLocal() as fresh:
            assert await count_entries(fresh, group_event.id) == 3
            event = await fresh.get(Event, group_event.id)
            assert len(event.registrations) == 3


class TestRegisterIndividual:

    @pytest.mark.asyncio
    async def test_register(self, db_session, individual_event):
        person = Registrant(**make_person())
        result = await registration_service.register_individual(db_session, individual_event.id, person)

        entry = result.registrations[0]
        assert entry.team_name is None
        assert entry.is_leader is False
        assert result.total_fee == 100

    @pytest.mark.asyncio
    async def test_same_email_twice_rejected(self, db_session, individual_event):
        person = Registrant(**make_person())
        await registration_service.register_individual(db_session, individual_event.id, person)

        with pytest.raises(InvalidRequestError) as exc_info:
            await registration_service.register_individual(db_session, individual_event.id, person)

        assert exc_info.value.message == "Already registered for this event"

    @pytest.mark.asyncio
    async def test_group_event_rejected(self, db_session, group_event):
        with pytest.raises(InvalidRequestError):
            await registration_service.register_individual(
                db_session, group_event.id, Registrant(**make_person())
            )


class TestListForEvent:

    @pytest.mark.asyncio
    async def test_grouping(self, db_session, group_event):
        await registration_service.register_team(
            db_session, group_event.id, "Alpha", Registrant(**make_person()), people(2)
        )
        await registration_service.register_team(
            db_session, group_event.id, "Beta", Registrant(**make_person()), people(3)
        )

        grouped = await registration_service.list_for_event(db_session, group_event.id)

        assert set(grouped) == {"Alpha", "Beta"}
        assert grouped["Alpha"]["teamName"] == "Alpha"
        assert len(grouped["Alpha"]["members"]) == 3
        assert grouped["Alpha"]["totalFee"] == 147
        assert len(grouped["Beta"]["members"]) == 4
        assert grouped["Beta"]["totalFee"] == 196
        assert sum(1 for m in grouped["Alpha"]["members"] if m["isLeader"]) == 1

    @pytest.mark.asyncio
    async def test_individuals_bucket(self, db_session, individual_event):
        for _ in range(2):
            await registration_service.register_individual(
                db_session, individual_event.id, Registrant(**make_person())
            )

        grouped = await registration_service.list_for_event(db_session, individual_event.id)

        assert list(grouped) == ["individuals"]
        assert len(grouped["individuals"]) == 2

    @pytest.mark.asyncio
    async def test_team_and_solo_entries_in_one_event(self, db_session, group_event):
        for team_name, is_leader in (("A", True), ("A", False), (None, False)):
            person = make_person()
            db_session.add(EventRegistration(
                event_id=group_event.id,
                name=person["name"],
                email=person["email"],
                registration_no=person["registration_no"],
                mobile_no=person["mobile_no"],
                semester=person["semester"],
                team_name=team_name,
                is_leader=is_leader,
            ))
        await db_session.commit()

        grouped = await registration_service.list_for_event(db_session, group_event.id)

        assert set(grouped) == {"A", "individuals"}
        assert len(grouped["A"]["members"]) == 2
        assert grouped["A"]["totalFee"] == 98
        assert len(grouped["individuals"]) == 1
        assert grouped["individuals"][0]["teamName"] is None

    @pytest.mark.asyncio
    async def test_empty_and_unknown_event(self, db_session, group_event):
        assert await registration_service.list_for_event(db_session, group_event.id) == {}
        assert await registration_service.list_for_event(db_session, str(uuid.uuid4())) == {}
        assert await registration_service.list_for_event(db_session, "garbage") == {}


class TestListForUser:

    @pytest.mark.asyncio
    async def test_submitted_and_named_entries(self, db_session, group_event, individual_event, test_user):
        await registration_service.register_team(
            db_session, group_event.id, "Alpha", Registrant(**make_person()), people(2),
            registered_by=test_user.id,
        )
        await registration_service.register_individual(
            db_session, individual_event.id, Registrant(**make_person(email=test_user.email)),
        )
        await registration_service.register_individual(
            db_session, individual_event.id, Registrant(**make_person()),
        )

        entries = await registration_service.list_for_user(db_session, test_user)

        assert len(entries) == 4


class TestUpdateStatus:

    @pytest.mark.asyncio
    async def test_update(self, db_session, individual_event):
        result = await registration_service.register_individual(
            db_session, individual_event.id, Registrant(**make_person())
        )
        entry_id = result.registrations[0].id

        updated = await registration_service.update_status(db_session, entry_id, "confirmed")

        assert updated.status == RegistrationStatus.CONFIRMED
        assert updated.payment_status == PaymentStatus.PENDING

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", ["approved", "", None, "CONFIRMED"])
    async def test_invalid_status(self, db_session, individual_event, status):
        result = await registration_service.register_individual(
            db_session, individual_event.id, Registrant(**make_person())
        )

        with pytest.raises(InvalidRequestError):
            await registration_service.update_status(db_session, result.registrations[0].id, status)

    @pytest.mark.asyncio
    async def test_unknown_registration(self, db_session):
        with pytest.raises(RegistrationNotFoundError):
            await registration_service.update_status(db_session, str(uuid.uuid4()), "cancelled")
