# building_access/services/aggregator.py
"""
Report aggregation over an already-fetched list of access events.

Pure functions — no DB access. Events are Access rows (or anything with the
same attributes: person_id, room_id, entry_datetime, exit_datetime, state,
and person/room relationships where names are needed).

  - completed : exit_datetime set and not cancelled
  - cancelled : state == "cancelled" (counts as an absence, never as usage)
"""

from dataclasses import dataclass, field, asdict
from typing import Iterable, Optional

from building_access.config import settings
from building_access.models.access import STATE_CANCELLED
from building_access.utils.periods import ReportPeriod

SECONDS_PER_HOUR = 60 * 60


@dataclass
class PersonFrequency:
    person_id: int
    name: str
    access_count: int

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class FrequencyCohorts:
    frequent: list = field(default_factory=list)
    infrequent: list = field(default_factory=list)


@dataclass
class RoomUsage:
    room_id: int
    room_name: str
    total_accesses: int
    completed_accesses: int
    cancelled_accesses: int
    total_hours_used: float
    average_duration: float

    def to_dict(self) -> dict:
        return asdict(self)


def is_cancelled(event) -> bool:
    return event.state == STATE_CANCELLED


def is_completed(event) -> bool:
    return event.exit_datetime is not None and not is_cancelled(event)


def in_period(events: Iterable, period: Optional[ReportPeriod]) -> list:
    """Events whose entry falls inside the period (all events if period is None)."""
    if period is None:
        return list(events)
    return [e for e in events if period.contains(e.entry_datetime)]


def duration_hours(event) -> float:
    return (event.exit_datetime - event.entry_datetime).total_seconds() / SECONDS_PER_HOUR


def count_completed(events: Iterable, period: Optional[ReportPeriod] = None) -> int:
    return sum(1 for e in in_period(events, period) if is_completed(e))


def count_cancelled(events: Iterable, period: Optional[ReportPeriod] = None) -> int:
    return sum(1 for e in in_period(events, period) if is_cancelled(e))


def frequency_by_person(
    events: Iterable,
    period: Optional[ReportPeriod] = None,
    threshold: Optional[int] = None,
) -> FrequencyCohorts:
    """
    Count completed accesses per person and split into cohorts:
    frequent (count > threshold) and infrequent (count <= threshold).
    Both cohorts are sorted by count descending; ties keep first-seen order.
    """
    if threshold is None:
        threshold = settings.FREQUENT_ACCESS_THRESHOLD

    counts: dict[int, PersonFrequency] = {}
    for e in in_period(events, period):
        if not is_completed(e):
            continue
        entry = counts.get(e.person_id)
        if entry is None:
            counts[e.person_id] = PersonFrequency(e.person_id, e.person.full_name, 1)
        else:
            entry.access_count += 1

    ranked = sorted(counts.values(), key=lambda p: p.access_count, reverse=True)
    cohorts = FrequencyCohorts()
    for person in ranked:
        if person.access_count > threshold:
            cohorts.frequent.append(person)
        else:
            cohorts.infrequent.append(person)
    return cohorts


def room_usage(events: Iterable, rooms: Iterable, period: Optional[ReportPeriod] = None) -> list:
    """Per-room usage statistics, one RoomUsage per room in `rooms` order."""
    by_room: dict[int, list] = {}
    for e in in_period(events, period):
        by_room.setdefault(e.room_id, []).append(e)

    stats = []
    for room in rooms:
        room_events = by_room.get(room.id, [])
        completed = [e for e in room_events if is_completed(e)]
        cancelled = sum(1 for e in room_events if is_cancelled(e))
        total_hours = sum(duration_hours(e) for e in completed)
        average = total_hours / len(completed) if completed else 0

        stats.append(RoomUsage(
            room_id=room.id,
            room_name=room.room_name,
            total_accesses=len(room_events) - cancelled,
            completed_accesses=len(completed),
            cancelled_accesses=cancelled,
            total_hours_used=round(total_hours, 2),
            average_duration=round(average, 2),
        ))
    return stats


def usage_totals(stats: Iterable[RoomUsage]) -> dict:
    stats = list(stats)
    return {
        "total_accesses": sum(s.total_accesses for s in stats),
        "total_cancellations": sum(s.cancelled_accesses for s in stats),
        "total_hours_used": round(sum(s.total_hours_used for s in stats), 2),
    }
