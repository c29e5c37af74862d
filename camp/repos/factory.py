"""Choose the activity/schedule store backend from settings."""

from __future__ import annotations

from typing import Any, NamedTuple

from camp.config import Settings
from camp.repos.base import ActivityStore, ScheduleStore
from camp.repos.memory import ActivityRepository, ScheduleRepository


class Stores(NamedTuple):
    activities: ActivityStore
    schedules: ScheduleStore
    db: Any = None  # pymongo Database when STORE_BACKEND=mongo


def create_repositories(settings: Settings) -> Stores:
    if settings.STORE_BACKEND == "mongo":
        from camp.repos.mongo import MongoActivityRepository, MongoScheduleRepository, get_db

        db = get_db(settings)
        return Stores(MongoActivityRepository(db), MongoScheduleRepository(db), db)
    if settings.STORE_BACKEND != "memory":
        raise ValueError(f"unknown STORE_BACKEND: {settings.STORE_BACKEND!r}")
    return Stores(ActivityRepository(), ScheduleRepository())
