"""Tests for the MongoDB document mapping and error translation."""

from datetime import date, datetime, time

import pytest
from pymongo.errors import ServerSelectionTimeoutError

from camp.domain.errors import StoreUnavailable
from camp.domain.models import Activity, MaterialRequirement, ScheduleEntry
from camp.repos.mongo import (
    MongoActivityRepository,
    MongoScheduleRepository,
    activity_from_doc,
    activity_to_doc,
    entry_from_doc,
    entry_to_doc,
    range_filter,
)


class _DownCollection:
    def __getattr__(self, name):
        def _fail(*args, **kwargs):
            raise ServerSelectionTimeoutError("no servers available")

        return _fail


class _DownDB:
    activities = _DownCollection()
    schedules = _DownCollection()


def _entry() -> ScheduleEntry:
    return ScheduleEntry(
        activity_id="soccer",
        date=date(2025, 4, 21),
        start_time=time(10, 0),
        end_time=time(11, 0),
        age_group="7-9",
        location="Field A",
        assigned_coach="Coach Mike",
        materials_required=[MaterialRequirement(item="Cones", quantity=4)],
        created_by="camp_director",
    )


def test_entry_document_shape():
    entry = _entry()
    doc = entry_to_doc(entry)

    assert doc["_id"] == entry.id
    assert "id" not in doc
    assert doc["date"] == datetime(2025, 4, 21)
    assert doc["startTime"] == "10:00"
    assert doc["activityId"] == "soccer"
    assert doc["materialsRequired"] == [{"item": "Cones", "quantity": 4}]
    assert "dayOfWeek" not in doc


def test_entry_read_back_from_document():
    entry = _entry()
    restored = entry_from_doc(entry_to_doc(entry))
    assert restored.id == entry.id
    assert restored.date == date(2025, 4, 21)
    assert restored.end_time == time(11, 0)


def test_activity_document_shape():
    activity = Activity(name="Archery", materials=["Bows"], duration_minutes=60)
    doc = activity_to_doc(activity)
    assert doc["_id"] == activity.id
    assert doc["durationMinutes"] == 60
    assert activity_from_doc(doc).name == "Archery"


def test_range_filter_for_conflict_query():
    filt = range_filter(date(2025, 4, 21), date(2025, 4, 21), location="Field A", exclude_id="x")
    assert filt["date"]["$gte"] == datetime(2025, 4, 21, 0, 0)
    assert filt["date"]["$lte"].date() == date(2025, 4, 21)
    assert filt["date"]["$lte"].hour == 23
    assert filt["location"] == "Field A"
    assert filt["_id"] == {"$ne": "x"}


def test_range_filter_without_optional_parts():
    filt = range_filter(date(2025, 4, 21), date(2025, 4, 25))
    assert set(filt) == {"date"}


def test_driver_errors_become_store_unavailable():
    schedules = MongoScheduleRepository(_DownDB())
    activities = MongoActivityRepository(_DownDB())

    with pytest.raises(StoreUnavailable):
        schedules.find(date(2025, 4, 21), date(2025, 4, 21), location="Field A")
    with pytest.raises(StoreUnavailable):
        schedules.add(_entry())
    with pytest.raises(StoreUnavailable):
        activities.get("soccer")
