"""Tests for the conflict-detection service."""

from datetime import date, time

from camp.domain.models import ScheduleEntry
from camp.repos.memory import ScheduleRepository
from camp.services.conflicts import Candidate, find_conflict
from camp.services.intervals import TimeInterval

_DAY = date(2025, 4, 21)


def _entry(start: str, end: str, location: str = "Field A", day: date = _DAY) -> ScheduleEntry:
    return ScheduleEntry(
        activity_id="soccer",
        date=day,
        start_time=time.fromisoformat(start),
        end_time=time.fromisoformat(end),
        age_group="7-9",
        location=location,
        assigned_coach="Coach Mike",
        created_by="camp_director",
    )


def _candidate(start: str, end: str, location: str = "Field A", day: date = _DAY) -> Candidate:
    return Candidate(
        date=day,
        location=location,
        interval=TimeInterval(time.fromisoformat(start), time.fromisoformat(end)),
    )


def test_no_overlap():
    repo = ScheduleRepository()
    repo.add(_entry("08:00", "09:00"))
    assert find_conflict(repo, _candidate("10:00", "11:00")) is None


def test_partial_overlap():
    repo = ScheduleRepository()
    existing = _entry("09:00", "10:30")
    repo.add(existing)
    conflict = find_conflict(repo, _candidate("10:00", "11:00"))
    assert conflict is not None
    assert conflict.id == existing.id


def test_exact_boundary_no_conflict():
    """When existing.end_time == new start there is no conflict."""
    repo = ScheduleRepository()
    repo.add(_entry("09:00", "10:00"))
    assert find_conflict(repo, _candidate("10:00", "11:00")) is None


def test_other_location_is_ignored():
    repo = ScheduleRepository()
    repo.add(_entry("10:00", "11:00", location="Pool"))
    assert find_conflict(repo, _candidate("10:00", "11:00")) is None


def test_other_day_is_ignored():
    repo = ScheduleRepository()
    repo.add(_entry("10:00", "11:00", day=date(2025, 4, 22)))
    assert find_conflict(repo, _candidate("10:00", "11:00")) is None


def test_excluded_entry_does_not_conflict_with_itself():
    repo = ScheduleRepository()
    existing = _entry("10:00", "11:00")
    repo.add(existing)
    assert find_conflict(repo, _candidate("10:00", "11:00"), exclude_id=existing.id) is None


def test_only_overlapping_entry_is_returned():
    repo = ScheduleRepository()
    repo.add(_entry("08:00", "09:00"))
    clash = _entry("12:00", "13:00")
    repo.add(clash)
    conflict = find_conflict(repo, _candidate("12:30", "14:00"))
    assert conflict.id == clash.id
