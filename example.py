#!/usr/bin/env python3
"""
Quick example demonstrating leave-behind basic usage.

Run with: PYTHONPATH=src python3 example.py
"""

import logging
from datetime import datetime, UTC, timedelta
from typing import Sequence

from leave_behind import TrackingSession
from leave_behind.modules.recovery import format_suggestions, latest_sightings
from leave_behind.modules.reminders import ReminderSink

logging.basicConfig(level=logging.WARNING)


class PrintSink(ReminderSink):
    """Print reminders instead of sending push notifications."""

    def deliver(self, place_name: str, item_names: Sequence[str]) -> None:
        print(f"   🔔 Leaving {place_name}: {', '.join(item_names) or 'did you take everything?'}")


print("=" * 60)
print("leave-behind Example")
print("=" * 60)

# 1. Session
print("\n1. Creating tracking session...")
session = TrackingSession(reminder_sink=PrintSink())
print(f"   ✓ Session created (min session {session.min_session_seconds}s)")

# 2. Places
print("\n2. Registering places...")
office = session.registry.create_place("Office", 37.0, -122.0, 50)
print(f"   ✓ Created: {office.name} (id={office.id}, r={office.radius_meters:.0f}m)")
gym = session.registry.create_place("Gym", 37.05, -122.0)
print(f"   ✓ Created: {gym.name} (id={gym.id}, r={gym.radius_meters:.0f}m)")

# 3. Items
print("\n3. Adding items...")
for name in ("Keys", "Laptop"):
    session.ledger.add(name)
session.ledger.add("Umbrella", always_take=False)
print(f"   ✓ Always take: {session.ledger.candidates_always()}")

# 4. A day of samples
print("\n4. Feeding position samples...")
session.start()
t0 = datetime(2025, 1, 15, 9, 0, tzinfo=UTC)
samples = [
    (37.0, -122.0, t0),
    (37.0001, -122.0, t0 + timedelta(minutes=30)),
    (37.02, -122.0, t0 + timedelta(hours=8)),
    (37.05, -122.0, t0 + timedelta(hours=9)),
    (37.05, -122.0005, t0 + timedelta(hours=9, seconds=10)),
    (37.02, -122.0, t0 + timedelta(hours=9, seconds=20)),
]
for lat, lng, ts in samples:
    transition = session.handle_sample(lat, lng, ts)
    if transition:
        print(f"   → {transition.kind.value} {transition.place.name} at {ts:%H:%M:%S}")
print(f"   ✓ Status: {session.status.value}, {len(session.history)} events logged")

# 5. Recovery
print("\n5. Where did I leave my keys?")
now = t0 + timedelta(hours=10)
print("   " + format_suggestions(session.recover("Keys", now=now), now).replace("\n", "\n   "))
for item, event in latest_sightings(session.history.all_events()).items():
    print(f"   ✓ {item} last seen at {event.place_name}")

# 6. Manual test
print("\n6. Simulating leaving...")
reminder = session.simulate_leaving(now=now)
print(f"   ✓ {reminder.title}: {reminder.subtitle}")

session.stop()

print("\n" + "=" * 60)
print("Example complete!")
print("=" * 60)
