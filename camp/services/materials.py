"""Service for totalling the materials needed by bookings in a date span."""

from __future__ import annotations

from datetime import date

from dateutil.relativedelta import relativedelta

from camp.domain.models import MaterialNeed
from camp.repos.base import ActivityStore, ScheduleStore
from camp.services.views import WORK_WEEK_DAYS, week_bounds

LOW_STOCK_THRESHOLD = 5  # placeholder until inventory levels are tracked


def resolve_span(
    start_date: date | None,
    end_date: date | None,
    today: date | None = None,
) -> tuple[date, date]:
    """Fill in a missing side of the span.

    With neither side given, the current Monday to Friday is used. A lone start
    runs for a work week; a lone end starts today.
    """
    today = today or date.today()
    if start_date is None and end_date is None:
        return week_bounds(today)
    start = start_date or today
    end = end_date or start + relativedelta(days=WORK_WEEK_DAYS - 1)
    return start, end


def materials_needed(
    schedule_repo: ScheduleStore,
    activity_repo: ActivityStore,
    start_date: date,
    end_date: date,
) -> list[MaterialNeed]:
    """Sum material quantities over every booking dated in [start_date, end_date].

    Booking-level materials count their explicit quantity. Each of the
    activity's default materials counts once per booking.
    """
    totals: dict[str, int] = {}
    for entry in schedule_repo.find(start_date, end_date):
        for req in entry.materials_required:
            totals[req.item] = totals.get(req.item, 0) + req.quantity

        activity = activity_repo.get(entry.activity_id)
        if activity is None:
            continue
        for name in activity.materials:
            totals[name] = totals.get(name, 0) + 1

    return [
        MaterialNeed(name=name, quantity=qty, low_threshold=LOW_STOCK_THRESHOLD)
        for name, qty in totals.items()
    ]
