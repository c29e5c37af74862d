"""Service for detecting scheduling conflicts between bookings."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from camp.domain.models import ScheduleEntry
from camp.repos.base import ScheduleStore
from camp.services.intervals import TimeInterval


@dataclass(frozen=True)
class Candidate:
    """A proposed booking slot: one location on one calendar day."""

    date: date
    location: str
    interval: TimeInterval


def find_conflict(
    schedule_repo: ScheduleStore,
    candidate: Candidate,
    exclude_id: str | None = None,
) -> ScheduleEntry | None:
    """Return the first stored entry overlapping *candidate*, or None.

    Only entries on the same day and at the same location are considered.
    *exclude_id* lets an entry being updated ignore its own prior state.
    Store failures propagate; an overlap is a normal return value.
    """
    same_slot = schedule_repo.find(
        candidate.date,
        candidate.date,
        location=candidate.location,
        exclude_id=exclude_id,
    )
    for entry in same_slot:
        if candidate.interval.overlaps(TimeInterval(entry.start_time, entry.end_time)):
            return entry
    return None
