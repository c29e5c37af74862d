"""Tests for the materials aggregation service."""

from datetime import date, time

from camp.domain.models import Activity, MaterialRequirement, ScheduleEntry
from camp.repos.memory import ActivityRepository, ScheduleRepository
from camp.services.materials import LOW_STOCK_THRESHOLD, materials_needed, resolve_span


def _entry(activity_id: str, day: date, start: str, end: str, materials=None) -> ScheduleEntry:
    return ScheduleEntry(
        activity_id=activity_id,
        date=day,
        start_time=time.fromisoformat(start),
        end_time=time.fromisoformat(end),
        age_group="7-9",
        location="Field A",
        assigned_coach="Coach Mike",
        materials_required=materials or [],
        created_by="system",
    )


def test_default_materials_count_once_per_booking():
    activities = ActivityRepository()
    schedules = ScheduleRepository()
    soccer = Activity(name="Soccer Practice", materials=["Cones"])
    activities.add(soccer)
    schedules.add(_entry(soccer.id, date(2025, 4, 21), "10:00", "11:00"))
    schedules.add(_entry(soccer.id, date(2025, 4, 24), "13:00", "14:00"))

    needs = materials_needed(schedules, activities, date(2025, 4, 21), date(2025, 4, 25))

    assert [(n.name, n.quantity) for n in needs] == [("Cones", 2)]
    assert needs[0].low_threshold == LOW_STOCK_THRESHOLD


def test_booking_materials_use_explicit_quantity():
    activities = ActivityRepository()
    schedules = ScheduleRepository()
    soccer = Activity(name="Soccer Practice", materials=["Cones", "Soccer balls"])
    activities.add(soccer)
    schedules.add(
        _entry(
            soccer.id,
            date(2025, 4, 21),
            "10:00",
            "11:00",
            materials=[MaterialRequirement(item="Cones", quantity=10)],
        )
    )

    needs = {n.name: n.quantity for n in materials_needed(
        schedules, activities, date(2025, 4, 21), date(2025, 4, 21)
    )}

    assert needs == {"Cones": 11, "Soccer balls": 1}


def test_bookings_outside_span_are_ignored():
    activities = ActivityRepository()
    schedules = ScheduleRepository()
    soccer = Activity(name="Soccer Practice", materials=["Cones"])
    activities.add(soccer)
    schedules.add(_entry(soccer.id, date(2025, 4, 28), "10:00", "11:00"))

    assert materials_needed(schedules, activities, date(2025, 4, 21), date(2025, 4, 25)) == []


def test_resolve_span_defaults():
    wednesday = date(2025, 4, 23)
    assert resolve_span(None, None, today=wednesday) == (date(2025, 4, 21), date(2025, 4, 25))
    assert resolve_span(wednesday, None, today=wednesday) == (wednesday, date(2025, 4, 27))
    assert resolve_span(None, date(2025, 4, 30), today=wednesday) == (wednesday, date(2025, 4, 30))
    assert resolve_span(date(2025, 4, 1), date(2025, 4, 2)) == (date(2025, 4, 1), date(2025, 4, 2))
