"""In-memory repositories for activities and schedule entries."""

from __future__ import annotations

from datetime import date, time
from threading import Lock

from dateutil.relativedelta import MO, relativedelta

from camp.domain.models import Activity, ScheduleEntry


class ActivityRepository:
    """Dict-backed store for Activity instances, keyed by id."""

    def __init__(self) -> None:
        self._store: dict[str, Activity] = {}
        self._lock = Lock()

    def add(self, activity: Activity) -> None:
        with self._lock:
            self._store[activity.id] = activity

    def get(self, activity_id: str) -> Activity | None:
        with self._lock:
            return self._store.get(activity_id)

    def list_all(self) -> list[Activity]:
        with self._lock:
            return sorted(self._store.values(), key=lambda a: a.name)

    def update(self, activity: Activity) -> None:
        with self._lock:
            self._store[activity.id] = activity

    def delete(self, activity_id: str) -> bool:
        with self._lock:
            return self._store.pop(activity_id, None) is not None

    def count(self) -> int:
        with self._lock:
            return len(self._store)


class ScheduleRepository:
    """Dict-backed store for ScheduleEntry instances, keyed by id."""

    def __init__(self) -> None:
        self._store: dict[str, ScheduleEntry] = {}
        self._lock = Lock()

    def add(self, entry: ScheduleEntry) -> None:
        with self._lock:
            self._store[entry.id] = entry

    def get(self, entry_id: str) -> ScheduleEntry | None:
        with self._lock:
            return self._store.get(entry_id)

    def find(
        self,
        start_date: date,
        end_date: date,
        location: str | None = None,
        exclude_id: str | None = None,
    ) -> list[ScheduleEntry]:
        with self._lock:
            matches = [
                e
                for e in self._store.values()
                if start_date <= e.date <= end_date
                and (location is None or e.location == location)
                and e.id != exclude_id
            ]
        return sorted(matches, key=lambda e: (e.date, e.start_time))

    def update(self, entry: ScheduleEntry) -> None:
        with self._lock:
            self._store[entry.id] = entry

    def delete(self, entry_id: str) -> bool:
        with self._lock:
            return self._store.pop(entry_id, None) is not None

    def count(self, start_date: date, end_date: date) -> int:
        with self._lock:
            return sum(1 for e in self._store.values() if start_date <= e.date <= end_date)

    def count_for_activity(self, activity_id: str) -> int:
        with self._lock:
            return sum(1 for e in self._store.values() if e.activity_id == activity_id)


# ---------------------------------------------------------------------------
# Seed data – one sample camp week
# ---------------------------------------------------------------------------

SAMPLE_REFERENCE_DATE = date(2025, 4, 21)

_SAMPLE_ACTIVITIES = [
    ("Soccer Practice", "Basic soccer skills and mini-games for all skill levels",
     ["Soccer balls", "Cones", "Pinnies"]),
    ("Swimming Lessons", "Learn to swim with certified instructors",
     ["Kickboards", "Pool noodles", "Goggles"]),
    ("Arts & Crafts", "Creative art projects for campers to express themselves",
     ["Construction paper", "Glue", "Markers", "Scissors", "Beads"]),
    ("Nature Hike", "Guided hike through the camp grounds to learn about local flora and fauna",
     ["Field guides", "Magnifying glasses", "Collection jars"]),
    ("Basketball", "Learn basketball fundamentals and play mini-games",
     ["Basketballs", "Cones", "Whistles"]),
    ("Campfire Stories", "Gather around the campfire for storytelling and s'mores",
     ["Fire wood", "Marshmallows", "Chocolate", "Graham crackers"]),
    ("Team Building Games", "Fun activities designed to foster teamwork and communication",
     ["Rope", "Blindfolds", "Obstacle course items"]),
    ("Archery", "Learn proper archery technique with certified instructors",
     ["Bows", "Arrows", "Targets", "Arm guards"]),
]

# (activity, weekday offset from Monday, start, end, age group, location, coach, notes)
_SAMPLE_BOOKINGS = [
    ("Soccer Practice", 0, "10:00", "11:00", "7-9", "Field A", "Coach Mike", "Bring water bottles"),
    ("Arts & Crafts", 0, "11:00", "12:00", "10-12", "Arts Room", "Ms. Sarah", "All materials provided"),
    ("Swimming Lessons", 0, "13:00", "14:30", "13-15", "Pool", "Coach Lisa", "Bring swimsuits and towels"),
    ("Basketball", 1, "10:00", "11:30", "10-12", "Basketball Court", "Coach James", "Indoor activity"),
    ("Nature Hike", 1, "13:00", "14:00", "7-9", "Nature Trail", "Mr. Robert",
     "Wear comfortable shoes and bring water"),
    ("Team Building Games", 2, "10:00", "11:00", "13-15", "Field B", "Coach Alex", "Team-based activities"),
    ("Archery", 2, "14:00", "15:30", "10-12", "Archery Range", "Ms. Diana", "Safety briefing first"),
    ("Arts & Crafts", 3, "09:30", "11:00", "7-9", "Arts Room", "Ms. Sarah", "Special project day"),
    ("Soccer Practice", 3, "13:00", "14:00", "10-12", "Field A", "Coach Mike", "Bring water bottles"),
    ("Team Building Games", 4, "10:00", "12:00", "All Ages", "Main Hall", "All Staff", "Fun Friday games"),
    ("Campfire Stories", 4, "19:00", "21:00", "All Ages", "Campfire Pit", "Mr. Robert",
     "Bring jackets for evening chill"),
]


def seed_sample_week(
    activity_repo,
    schedule_repo,
    reference: date = SAMPLE_REFERENCE_DATE,
) -> None:
    """Load the sample activities and a Monday to Friday of bookings around *reference*.

    Works against any store implementing the add() half of the store protocols.
    """
    monday = reference + relativedelta(weekday=MO(-1))
    by_name: dict[str, Activity] = {}
    for name, description, materials in _SAMPLE_ACTIVITIES:
        activity = Activity(name=name, description=description, materials=materials)
        activity_repo.add(activity)
        by_name[name] = activity

    for name, offset, start, end, age_group, location, coach, notes in _SAMPLE_BOOKINGS:
        schedule_repo.add(
            ScheduleEntry(
                activity_id=by_name[name].id,
                date=monday + relativedelta(days=offset),
                start_time=time.fromisoformat(start),
                end_time=time.fromisoformat(end),
                age_group=age_group,
                location=location,
                assigned_coach=coach,
                notes=notes,
                created_by="system",
            )
        )

