"""Service for managing activity templates."""

from __future__ import annotations

import logging

from camp.domain.errors import ActivityInUse, NotFound
from camp.domain.models import Activity, ActivityCreate, ActivityUpdate
from camp.repos.base import ActivityStore, ScheduleStore

logger = logging.getLogger(__name__)


class ActivityService:
    def __init__(self, activity_repo: ActivityStore, schedule_repo: ScheduleStore) -> None:
        self._activities = activity_repo
        self._schedules = schedule_repo

    def create(self, payload: ActivityCreate) -> Activity:
        activity = Activity(**payload.model_dump())
        self._activities.add(activity)
        logger.info("activity %s created: %s", activity.id, activity.name)
        return activity

    def get(self, activity_id: str) -> Activity:
        activity = self._activities.get(activity_id)
        if activity is None:
            raise NotFound("Activity", activity_id)
        return activity

    def list_all(self) -> list[Activity]:
        return self._activities.list_all()

    def count(self) -> int:
        return self._activities.count()

    def update(self, activity_id: str, payload: ActivityUpdate) -> Activity:
        current = self.get(activity_id)
        changes = payload.model_dump(exclude_unset=True)
        for required in ("name", "materials"):
            if required in changes and changes[required] is None:
                del changes[required]
        updated = Activity.model_validate({**current.model_dump(), **changes})
        self._activities.update(updated)
        return updated

    def delete(self, activity_id: str) -> None:
        """Delete an activity that no schedule entry references."""
        self.get(activity_id)
        in_use = self._schedules.count_for_activity(activity_id)
        if in_use:
            logger.warning(
                "refusing to delete activity %s: %d bookings reference it",
                activity_id,
                in_use,
            )
            raise ActivityInUse(activity_id, in_use)
        self._activities.delete(activity_id)
        logger.info("activity %s deleted", activity_id)
