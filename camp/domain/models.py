"""Domain models for the camp scheduling system."""

from __future__ import annotations

import uuid
from datetime import date as date_type, datetime, time as time_type, timezone
from enum import StrEnum

from dateutil.parser import isoparse
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    computed_field,
    field_serializer,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel


class Role(StrEnum):
    DIRECTOR = "director"
    COACH = "coach"


class Identity(BaseModel):
    """The caller on whose behalf an operation runs."""

    username: str
    role: Role = Role.DIRECTOR


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return str(uuid.uuid4())


def _calendar_day(value):
    """Accept ``YYYY-MM-DD`` or a full ISO timestamp and keep only the day."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, str) and len(value.strip()) > 10:
        return isoparse(value.strip()).date()
    return value


def _hhmm(value: time_type) -> str:
    return value.strftime("%H:%M")


def _whole_minute(value: time_type | None) -> time_type | None:
    if value is not None and (value.second or value.microsecond):
        raise ValueError("times must be HH:MM")
    return value


class CampModel(BaseModel):
    """Base model: snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# Core domain models
# ---------------------------------------------------------------------------


class Activity(CampModel):
    id: str = Field(default_factory=_new_id)
    name: str = Field(min_length=1)
    description: str | None = None
    duration_minutes: int | None = Field(default=None, gt=0)
    age_group: str | None = None
    location: str | None = None
    materials: list[str] = Field(default_factory=list)


class MaterialRequirement(CampModel):
    item: str
    quantity: int = Field(default=1, ge=0)


class ScheduleEntry(CampModel):
    id: str = Field(default_factory=_new_id)
    activity_id: str
    date: date_type
    start_time: time_type
    end_time: time_type
    age_group: str
    location: str
    assigned_coach: str
    notes: str | None = None
    materials_required: list[MaterialRequirement] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=_utcnow)
    created_by: str

    @field_validator("date", mode="before")
    @classmethod
    def _normalize_date(cls, value):
        return _calendar_day(value)

    @field_serializer("start_time", "end_time")
    def _serialize_time(self, value: time_type) -> str:
        return _hhmm(value)

    @computed_field(alias="dayOfWeek")
    @property
    def day_of_week(self) -> int:
        """1 = Monday ... 7 = Sunday."""
        return self.date.isoweekday()


# ---------------------------------------------------------------------------
# Request DTOs
# ---------------------------------------------------------------------------


class ActivityCreate(CampModel):
    name: str = Field(min_length=1)
    description: str | None = None
    duration_minutes: int | None = Field(default=None, gt=0)
    age_group: str | None = None
    location: str | None = None
    materials: list[str] = Field(default_factory=list)


class ActivityUpdate(CampModel):
    name: str | None = Field(default=None, min_length=1)
    description: str | None = None
    duration_minutes: int | None = Field(default=None, gt=0)
    age_group: str | None = None
    location: str | None = None
    materials: list[str] | None = None


class ScheduleCreate(CampModel):
    activity_id: str
    date: date_type
    start_time: time_type
    end_time: time_type
    age_group: str
    location: str
    assigned_coach: str
    notes: str | None = None
    materials_required: list[MaterialRequirement] = Field(default_factory=list)

    @field_validator("date", mode="before")
    @classmethod
    def _normalize_date(cls, value):
        return _calendar_day(value)

    @field_validator("start_time", "end_time")
    @classmethod
    def _check_minutes(cls, value):
        return _whole_minute(value)

    @model_validator(mode="after")
    def _end_after_start(self) -> ScheduleCreate:
        if self.end_time <= self.start_time:
            raise ValueError("endTime must be after startTime")
        return self


class ScheduleUpdate(CampModel):
    """Partial update. Unknown keys (activityId, createdAt, createdBy) are ignored."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="ignore"
    )

    date: date_type | None = None
    start_time: time_type | None = None
    end_time: time_type | None = None
    age_group: str | None = None
    location: str | None = None
    assigned_coach: str | None = None
    notes: str | None = None
    materials_required: list[MaterialRequirement] | None = None

    @field_validator("date", mode="before")
    @classmethod
    def _normalize_date(cls, value):
        return _calendar_day(value)

    @field_validator("start_time", "end_time")
    @classmethod
    def _check_minutes(cls, value):
        return _whole_minute(value)


# ---------------------------------------------------------------------------
# View / response shapes
# ---------------------------------------------------------------------------


class WeekItem(CampModel):
    id: str
    name: str | None = None
    description: str | None = None
    date: date_type
    day_of_week: int
    start_time: time_type
    end_time: time_type
    age_group: str
    location: str
    assigned_coach: str
    notes: str | None = None
    materials_required: list[MaterialRequirement] = Field(default_factory=list)

    @field_serializer("start_time", "end_time")
    def _serialize_time(self, value: time_type) -> str:
        return _hhmm(value)


class WeekView(CampModel):
    start_date: date_type
    end_date: date_type
    activities: list[WeekItem] = Field(default_factory=list)


class DayItem(CampModel):
    id: str
    name: str | None = None
    start_time: time_type
    end_time: time_type
    location: str
    assigned_coach: str
    materials_required: list[MaterialRequirement] = Field(default_factory=list)
    notes: str | None = None

    @field_serializer("start_time", "end_time")
    def _serialize_time(self, value: time_type) -> str:
        return _hhmm(value)


class DayView(CampModel):
    date: date_type
    day_of_week: int
    schedules: dict[str, list[DayItem]] = Field(default_factory=dict)


class MaterialNeed(CampModel):
    name: str
    quantity: int
    low_threshold: int


class CountResponse(BaseModel):
    count: int
