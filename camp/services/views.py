"""Week and day views over stored schedule entries."""

from __future__ import annotations

from datetime import date

from dateutil.relativedelta import MO, relativedelta

from camp.domain.models import DayItem, DayView, ScheduleEntry, WeekItem, WeekView
from camp.repos.base import ActivityStore, ScheduleStore

WORK_WEEK_DAYS = 5


def week_bounds(reference: date) -> tuple[date, date]:
    """Return (Monday, Friday) of the week containing *reference*.

    Sunday belongs to the week that started six days earlier.
    """
    monday = reference + relativedelta(weekday=MO(-1))
    return monday, monday + relativedelta(days=WORK_WEEK_DAYS - 1)


def js_day_of_week(day: date) -> int:
    """0 = Sunday ... 6 = Saturday."""
    return day.isoweekday() % 7


def _activity_lookup(activity_repo: ActivityStore, entries: list[ScheduleEntry]):
    cache = {}
    for entry in entries:
        if entry.activity_id not in cache:
            cache[entry.activity_id] = activity_repo.get(entry.activity_id)
    return cache


def week_view(
    schedule_repo: ScheduleStore,
    activity_repo: ActivityStore,
    reference: date | None = None,
) -> WeekView:
    start, end = week_bounds(reference or date.today())
    entries = schedule_repo.find(start, end)
    activities = _activity_lookup(activity_repo, entries)

    items = []
    for entry in entries:
        activity = activities.get(entry.activity_id)
        items.append(
            WeekItem(
                id=entry.id,
                name=activity.name if activity else None,
                description=activity.description if activity else None,
                date=entry.date,
                day_of_week=entry.day_of_week,
                start_time=entry.start_time,
                end_time=entry.end_time,
                age_group=entry.age_group,
                location=entry.location,
                assigned_coach=entry.assigned_coach,
                notes=entry.notes,
                materials_required=entry.materials_required,
            )
        )
    return WeekView(start_date=start, end_date=end, activities=items)


def day_view(
    schedule_repo: ScheduleStore,
    activity_repo: ActivityStore,
    day: date | None = None,
) -> DayView:
    """Entries on one day grouped by age group, each group in start-time order."""
    day = day or date.today()
    entries = sorted(schedule_repo.find(day, day), key=lambda e: e.start_time)
    activities = _activity_lookup(activity_repo, entries)

    grouped: dict[str, list[DayItem]] = {}
    for entry in entries:
        activity = activities.get(entry.activity_id)
        grouped.setdefault(entry.age_group, []).append(
            DayItem(
                id=entry.id,
                name=activity.name if activity else None,
                start_time=entry.start_time,
                end_time=entry.end_time,
                location=entry.location,
                assigned_coach=entry.assigned_coach,
                materials_required=entry.materials_required,
                notes=entry.notes,
            )
        )
    return DayView(date=day, day_of_week=js_day_of_week(day), schedules=grouped)


def count_for_day(schedule_repo: ScheduleStore, day: date) -> int:
    return schedule_repo.count(day, day)
