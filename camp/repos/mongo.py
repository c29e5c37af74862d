"""MongoDB-backed stores for activities and schedule entries."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import date, datetime, time
from typing import Any, Dict

from pymongo import ASCENDING, MongoClient
from pymongo.errors import PyMongoError

from camp.config import Settings
from camp.domain.errors import StoreUnavailable
from camp.domain.models import Activity, ScheduleEntry

logger = logging.getLogger(__name__)


@contextmanager
def _store_call(op: str):
    try:
        yield
    except PyMongoError as e:
        logger.error("mongo %s failed: %s", op, e)
        raise StoreUnavailable(f"Store unavailable during {op}") from e


def get_db(settings: Settings):
    client = MongoClient(
        settings.MONGODB_URI, serverSelectionTimeoutMS=settings.MONGODB_TIMEOUT_MS
    )
    return client[settings.MONGODB_DB]


def init_indexes(db) -> None:
    with _store_call("init_indexes"):
        db.schedules.create_index([("date", ASCENDING), ("startTime", ASCENDING)])
        db.schedules.create_index([("date", ASCENDING), ("location", ASCENDING)])
        db.schedules.create_index([("activityId", ASCENDING)])
        db.activities.create_index([("name", ASCENDING)])


# ---------------------------------------------------------------------------
# Document mapping
# ---------------------------------------------------------------------------


def _day_start(d: date) -> datetime:
    # BSON has no date-only type
    return datetime.combine(d, time.min)


def _day_end(d: date) -> datetime:
    return datetime.combine(d, time.max)


def range_filter(
    start_date: date,
    end_date: date,
    location: str | None = None,
    exclude_id: str | None = None,
) -> Dict[str, Any]:
    filt: Dict[str, Any] = {
        "date": {"$gte": _day_start(start_date), "$lte": _day_end(end_date)}
    }
    if location is not None:
        filt["location"] = location
    if exclude_id is not None:
        filt["_id"] = {"$ne": exclude_id}
    return filt


def activity_to_doc(activity: Activity) -> Dict[str, Any]:
    doc = activity.model_dump(by_alias=True)
    doc["_id"] = doc.pop("id")
    return doc


def activity_from_doc(doc: Dict[str, Any]) -> Activity:
    doc = dict(doc)
    doc["id"] = str(doc.pop("_id"))
    return Activity.model_validate(doc)


def entry_to_doc(entry: ScheduleEntry) -> Dict[str, Any]:
    doc = entry.model_dump(by_alias=True, exclude={"day_of_week"})
    doc["_id"] = doc.pop("id")
    doc["date"] = _day_start(entry.date)
    return doc


def entry_from_doc(doc: Dict[str, Any]) -> ScheduleEntry:
    doc = dict(doc)
    doc["id"] = str(doc.pop("_id"))
    return ScheduleEntry.model_validate(doc)


# ---------------------------------------------------------------------------
# Stores
# ---------------------------------------------------------------------------


class MongoActivityRepository:
    def __init__(self, db) -> None:
        self._col = db.activities

    def add(self, activity: Activity) -> None:
        with _store_call("activity insert"):
            self._col.insert_one(activity_to_doc(activity))

    def get(self, activity_id: str) -> Activity | None:
        with _store_call("activity find"):
            doc = self._col.find_one({"_id": activity_id})
        return activity_from_doc(doc) if doc else None

    def list_all(self) -> list[Activity]:
        with _store_call("activity list"):
            docs = list(self._col.find({}).sort("name", ASCENDING))
        return [activity_from_doc(d) for d in docs]

    def update(self, activity: Activity) -> None:
        with _store_call("activity update"):
            self._col.replace_one({"_id": activity.id}, activity_to_doc(activity))

    def delete(self, activity_id: str) -> bool:
        with _store_call("activity delete"):
            res = self._col.delete_one({"_id": activity_id})
        return res.deleted_count > 0

    def count(self) -> int:
        with _store_call("activity count"):
            return self._col.count_documents({})


class MongoScheduleRepository:
    def __init__(self, db) -> None:
        self._col = db.schedules

    def add(self, entry: ScheduleEntry) -> None:
        with _store_call("schedule insert"):
            self._col.insert_one(entry_to_doc(entry))

    def get(self, entry_id: str) -> ScheduleEntry | None:
        with _store_call("schedule find"):
            doc = self._col.find_one({"_id": entry_id})
        return entry_from_doc(doc) if doc else None

    def find(
        self,
        start_date: date,
        end_date: date,
        location: str | None = None,
        exclude_id: str | None = None,
    ) -> list[ScheduleEntry]:
        filt = range_filter(start_date, end_date, location, exclude_id)
        with _store_call("schedule query"):
            docs = list(
                self._col.find(filt).sort([("date", ASCENDING), ("startTime", ASCENDING)])
            )
        return [entry_from_doc(d) for d in docs]

    def update(self, entry: ScheduleEntry) -> None:
        with _store_call("schedule update"):
            self._col.replace_one({"_id": entry.id}, entry_to_doc(entry))

    def delete(self, entry_id: str) -> bool:
        with _store_call("schedule delete"):
            res = self._col.delete_one({"_id": entry_id})
        return res.deleted_count > 0

    def count(self, start_date: date, end_date: date) -> int:
        with _store_call("schedule count"):
            return self._col.count_documents(range_filter(start_date, end_date))

    def count_for_activity(self, activity_id: str) -> int:
        with _store_call("schedule count"):
            return self._col.count_documents({"activityId": activity_id})
