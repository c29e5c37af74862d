"""Store interfaces shared by the in-memory and MongoDB backends."""

from __future__ import annotations

from datetime import date
from typing import Protocol

from camp.domain.models import Activity, ScheduleEntry


class ActivityStore(Protocol):
    def add(self, activity: Activity) -> None: ...

    def get(self, activity_id: str) -> Activity | None: ...

    def list_all(self) -> list[Activity]:
        """Return every activity ordered by name."""
        ...

    def update(self, activity: Activity) -> None: ...

    def delete(self, activity_id: str) -> bool: ...

    def count(self) -> int: ...


class ScheduleStore(Protocol):
    def add(self, entry: ScheduleEntry) -> None: ...

    def get(self, entry_id: str) -> ScheduleEntry | None: ...

    def find(
        self,
        start_date: date,
        end_date: date,
        location: str | None = None,
        exclude_id: str | None = None,
    ) -> list[ScheduleEntry]:
        """Entries dated within [start_date, end_date], by date then start time.

        ``location`` narrows to one location; ``exclude_id`` drops a single entry.
        """
        ...

    def update(self, entry: ScheduleEntry) -> None: ...

    def delete(self, entry_id: str) -> bool: ...

    def count(self, start_date: date, end_date: date) -> int: ...

    def count_for_activity(self, activity_id: str) -> int: ...
