"""Booking service: create, update and delete schedule entries.

Every write that can move a booking in time or space passes through
``find_conflict`` first. The read-decide-write sequence runs under a lock
keyed by (date, location), so two callers in this process cannot both book
the same slot. Separate processes sharing one document store are not
coordinated.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import date
from threading import Lock
from typing import Any

from camp.domain.errors import Conflict, NotFound, ValidationError
from camp.domain.models import Identity, ScheduleCreate, ScheduleEntry
from camp.repos.base import ActivityStore, ScheduleStore
from camp.services.conflicts import Candidate, find_conflict
from camp.services.intervals import TimeInterval

logger = logging.getLogger(__name__)

PROTECTED_FIELDS = ("activity_id", "created_at", "created_by", "id")
SLOT_FIELDS = ("date", "start_time", "end_time", "location")
NULLABLE_FIELDS = ("notes",)


class _SlotLocks:
    """One lock per (date, location), held only while some caller needs it.

    An entry is dropped when its last holder leaves, so the table stays as
    small as the number of slots being written concurrently.
    """

    def __init__(self) -> None:
        self._guard = Lock()
        self._locks: dict[tuple[date, str], list] = {}

    @contextmanager
    def hold(self, day: date, location: str):
        key = (day, location)
        with self._guard:
            slot = self._locks.setdefault(key, [Lock(), 0])
            slot[1] += 1
        try:
            with slot[0]:
                yield
        finally:
            with self._guard:
                slot[1] -= 1
                if slot[1] == 0:
                    del self._locks[key]


class BookingService:
    def __init__(self, schedule_repo: ScheduleStore, activity_repo: ActivityStore) -> None:
        self._schedules = schedule_repo
        self._activities = activity_repo
        self._slot_locks = _SlotLocks()

    def get(self, entry_id: str) -> ScheduleEntry:
        entry = self._schedules.get(entry_id)
        if entry is None:
            raise NotFound("Scheduled activity", entry_id)
        return entry

    def create(self, payload: ScheduleCreate, user: Identity) -> ScheduleEntry:
        if self._activities.get(payload.activity_id) is None:
            raise NotFound("Activity", payload.activity_id)

        candidate = Candidate(
            date=payload.date,
            location=payload.location,
            interval=TimeInterval(payload.start_time, payload.end_time),
        )
        with self._slot_locks.hold(candidate.date, candidate.location):
            conflict = find_conflict(self._schedules, candidate)
            if conflict is not None:
                logger.info(
                    "booking rejected: %s %s %s-%s overlaps %s",
                    payload.location,
                    payload.date,
                    payload.start_time,
                    payload.end_time,
                    conflict.id,
                )
                raise Conflict(conflict.id)

            entry = ScheduleEntry(
                **payload.model_dump(),
                created_by=user.username,
            )
            self._schedules.add(entry)

        logger.info("booking %s created by %s", entry.id, user.username)
        return entry

    def update(self, entry_id: str, patch: dict[str, Any], user: Identity) -> ScheduleEntry:
        """Apply a partial update given as snake_case field names.

        Protected fields are dropped from *patch* without error. The conflict
        check only runs when a slot field (date, times, location) is present.
        """
        current = self.get(entry_id)
        changes = {
            k: v
            for k, v in patch.items()
            if k not in PROTECTED_FIELDS and (v is not None or k in NULLABLE_FIELDS)
        }

        # dict(current) keeps stored values as-is; model_dump would format times
        merged = ScheduleEntry.model_validate({**dict(current), **changes})
        if not TimeInterval(merged.start_time, merged.end_time).is_valid:
            raise ValidationError("endTime", "must be after startTime")

        if not any(field in changes for field in SLOT_FIELDS):
            self._schedules.update(merged)
            logger.info("booking %s updated by %s", entry_id, user.username)
            return merged

        candidate = Candidate(
            date=merged.date,
            location=merged.location,
            interval=TimeInterval(merged.start_time, merged.end_time),
        )
        with self._slot_locks.hold(candidate.date, candidate.location):
            conflict = find_conflict(self._schedules, candidate, exclude_id=entry_id)
            if conflict is not None:
                logger.info("update of %s rejected: overlaps %s", entry_id, conflict.id)
                raise Conflict(conflict.id)
            self._schedules.update(merged)

        logger.info("booking %s updated by %s", entry_id, user.username)
        return merged

    def delete(self, entry_id: str, user: Identity) -> None:
        if not self._schedules.delete(entry_id):
            raise NotFound("Scheduled activity", entry_id)
        logger.info("booking %s deleted by %s", entry_id, user.username)
