"""
Seed the Tech-Fest Event Catalog

Creates (or refreshes) the fest's events so the registration pages have
something to show. Events are matched by title, so re-running is safe;
existing registrations are left untouched.

Run with: python seed_events.py
List with: python seed_events.py list
"""
import asyncio
import sys
import os
from datetime import datetime

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from sqlalchemy import select

from app.core.database import get_session_local, init_db
from app.models.event import Event, EventKind, EventTiming


TECH_EVENTS = [
    # Robotics & Engineering
    {
        "title": "Line Follower – TrailBlazer Bot",
        "description": "Build an autonomous robot that follows a winding path of black/white lines, "
                       "tackling curves and junctions. Only autonomous bots allowed.",
        "date": datetime(2026, 5, 7, 10, 0),
        "end_date": datetime(2026, 5, 7, 16, 0),
        "venue": "Robotics Lab, Main Building",
        "event_type": EventKind.INDIVIDUAL,
        "max_team_size": 1,
    },
    {
        "title": "Robo Kickoff – Mecha Soccer",
        "description": "Robots battle in a mini soccer match, pushing a soft ball to score goals. "
                       "Match time: 3 minutes.",
        "date": datetime(2026, 5, 7, 10, 0),
        "end_date": datetime(2026, 5, 7, 16, 0),
        "venue": "Robotics Lab, Main Building",
        "event_type": EventKind.GROUP,
        "max_team_size": 2,
    },
    {
        "title": "Bridge Making – StickStruct",
        "description": "Build a creative and strong bridge using ice cream sticks and glue. "
                       "Heaviest load carried wins.",
        "date": datetime(2026, 5, 9, 10, 0),
        "end_date": datetime(2026, 5, 9, 15, 0),
        "venue": "Engineering Lab, Main Building",
        "event_type": EventKind.GROUP,
        "max_team_size": 3,
    },
    # Coding
    {
        "title": "Code Clash – DSA Arena",
        "description": "Timed data structures and algorithms contest on an online judge.",
        "date": datetime(2026, 5, 8, 11, 0),
        "end_date": datetime(2026, 5, 8, 14, 0),
        "venue": "Computer Lab 1, Main Building",
        "event_type": EventKind.INDIVIDUAL,
        "max_team_size": 1,
    },
    {
        "title": "CTF – Capture The Flag",
        "description": "Jeopardy-style security challenges: web, crypto, forensics and reversing.",
        "date": datetime(2026, 5, 8, 10, 0),
        "end_date": datetime(2026, 5, 8, 18, 0),
        "venue": "Computer Lab 2, Main Building",
        "event_type": EventKind.GROUP,
        "max_team_size": 4,
    },
    {
        "title": "Web Dev Showdown",
        "description": "Design and ship a working web app around a theme announced on the day.",
        "date": datetime(2026, 5, 9, 9, 0),
        "end_date": datetime(2026, 5, 9, 17, 0),
        "venue": "Computer Lab 2, Main Building",
        "event_type": EventKind.GROUP,
        "max_team_size": 2,
    },
    # Fun
    {
        "title": "Quiz Quest",
        "description": "Tech and general knowledge quiz with a written prelim and a stage final.",
        "date": datetime(2026, 5, 9, 14, 0),
        "end_date": datetime(2026, 5, 9, 17, 0),
        "venue": "Auditorium, Main Building",
        "event_type": EventKind.GROUP,
        "max_team_size": 2,
    },
    {
        "title": "Rubik's Cube Sprint",
        "description": "Solve a scrambled 3x3 cube as fast as you can. Best of three attempts.",
        "date": datetime(2026, 5, 7, 15, 0),
        "end_date": datetime(2026, 5, 7, 17, 0),
        "venue": "Auditorium, Main Building",
        "event_type": EventKind.INDIVIDUAL,
        "max_team_size": 1,
    },
]

EVENT_FEE = 49


async def seed_events():
    """Create or update the catalog"""
    print("=" * 50)
    print("Seeding Tech-Fest Events...")
    print("=" * 50)

    await init_db()

    async with get_session_local()() as db:
        created_count = 0
        updated_count = 0

        for event_data in TECH_EVENTS:
            title = event_data["title"]

            result = await db.execute(select(Event).where(Event.title == title))
            existing_event = result.scalar_one_or_none()

            if existing_event:
                # Keep registrations, refresh everything else
                for field, value in event_data.items():
                    setattr(existing_event, field, value)
                existing_event.fee = EVENT_FEE
                updated_count += 1
                print(f"  Updated: {title}")
            else:
                event = Event(
                    **event_data,
                    type=EventTiming.UPCOMING,
                    fee=EVENT_FEE,
                    registrations=[],
                )
                db.add(event)
                created_count += 1
                print(f"  Created: {title} ({event_data['event_type'].value})")

        await db.commit()

        print("=" * 50)
        print("Events Seeded Successfully!")
        print(f"  Created: {created_count}")
        print(f"  Updated: {updated_count}")
        print("=" * 50)


async def list_events():
    """List the catalog with registration counts"""
    await init_db()

    async with get_session_local()() as db:
        result = await db.execute(select(Event).order_by(Event.date))
        events = result.scalars().all()

        print("\nEvents in Database:")
        print("-" * 80)
        print(f"{'Title':<40} {'Kind':<12} {'Team':<6} {'Fee':<8} {'Entries':<8}")
        print("-" * 80)

        for event in events:
            print(
                f"{event.title[:39]:<40} {event.event_type.value:<12} "
                f"{event.max_team_size:<6} {event.fee:<8g} {event.registration_count:<8}"
            )

        if not events:
            print("No events found. Run 'python seed_events.py' to create them.")


if __name__ == "__main__":
    if len(sys.argv) > 1 and sys.argv[1] == "list":
        asyncio.run(list_events())
    else:
        asyncio.run(seed_events())
