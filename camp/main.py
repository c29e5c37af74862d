"""FastAPI application: entry point for the camp scheduling service."""

from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from datetime import date
from logging.handlers import RotatingFileHandler

from fastapi import APIRouter, Depends, FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from camp.auth import get_current_user, require_roles
from camp.config import settings
from camp.domain.errors import (
    ActivityInUse,
    Conflict,
    Forbidden,
    NotFound,
    StoreUnavailable,
    Unauthorized,
    ValidationError,
)
from camp.domain.models import (
    ActivityCreate,
    ActivityUpdate,
    CountResponse,
    DayView,
    Identity,
    MaterialNeed,
    Role,
    ScheduleCreate,
    ScheduleEntry,
    ScheduleUpdate,
    WeekView,
)
from camp.repos.factory import create_repositories
from camp.repos.memory import seed_sample_week
from camp.services.activities import ActivityService
from camp.services.booking import BookingService
from camp.services.materials import materials_needed, resolve_span
from camp.services.views import count_for_day, day_view, week_view

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    root = logging.getLogger()
    root.setLevel(settings.LOG_LEVEL)
    if settings.LOG_TO_FILE:
        os.makedirs(os.path.dirname(settings.LOG_FILE) or ".", exist_ok=True)
        # avoid duplicate handlers on reload
        if not any(
            isinstance(h, RotatingFileHandler)
            and getattr(h, "baseFilename", None) == os.path.abspath(settings.LOG_FILE)
            for h in root.handlers
        ):
            handler = RotatingFileHandler(
                settings.LOG_FILE, maxBytes=10 * 1024 * 1024, backupCount=3, encoding="utf-8"
            )
            handler.setFormatter(
                logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
            )
            root.addHandler(handler)


configure_logging()

# ── Singletons (created at import time for simplicity) ────────────────
stores = create_repositories(settings)
activity_repo, schedule_repo = stores.activities, stores.schedules
activity_service = ActivityService(activity_repo, schedule_repo)
booking_service = BookingService(schedule_repo, activity_repo)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if stores.db is not None:
        from camp.repos.mongo import init_indexes

        init_indexes(stores.db)
    if settings.SEED_DATA and activity_repo.count() == 0:
        seed_sample_week(activity_repo, schedule_repo)
        logger.info("loaded sample camp week")
    yield


app = FastAPI(title="Camp Commander", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["Content-Type", "Authorization", "X-Camp-User", "X-Camp-Role"],
)

# ── Error mapping ─────────────────────────────────────────────────────


@app.exception_handler(NotFound)
def _not_found(request: Request, exc: NotFound) -> JSONResponse:
    return JSONResponse(status_code=404, content={"error": str(exc)})


@app.exception_handler(Conflict)
def _conflict(request: Request, exc: Conflict) -> JSONResponse:
    return JSONResponse(
        status_code=409,
        content={"error": str(exc), "conflictingSchedule": exc.conflicting_id},
    )


@app.exception_handler(ActivityInUse)
def _activity_in_use(request: Request, exc: ActivityInUse) -> JSONResponse:
    return JSONResponse(
        status_code=409,
        content={"error": str(exc), "scheduleCount": exc.schedule_count},
    )


@app.exception_handler(ValidationError)
def _invalid(request: Request, exc: ValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=422, content={"error": exc.reason, "field": exc.field}
    )


@app.exception_handler(Unauthorized)
def _unauthorized(request: Request, exc: Unauthorized) -> JSONResponse:
    return JSONResponse(status_code=401, content={"error": str(exc)})


@app.exception_handler(Forbidden)
def _forbidden(request: Request, exc: Forbidden) -> JSONResponse:
    return JSONResponse(status_code=403, content={"error": str(exc)})


@app.exception_handler(StoreUnavailable)
def _store_down(request: Request, exc: StoreUnavailable) -> JSONResponse:
    logger.error("store unavailable on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=500, content={"error": str(exc)})


# ── Activity routes ───────────────────────────────────────────────────

activities = APIRouter(prefix="/activities", tags=["activities"])
director_only = require_roles(Role.DIRECTOR)


def _dump(model) -> dict:
    return model.model_dump(mode="json", by_alias=True)


@activities.get("")
def list_activities(user: Identity = Depends(get_current_user)) -> dict:
    """Return all activities ordered by name."""
    items = activity_service.list_all()
    return {"success": True, "count": len(items), "data": [_dump(a) for a in items]}


@activities.post("", status_code=201)
def create_activity(payload: ActivityCreate, user: Identity = Depends(director_only)) -> dict:
    return {"success": True, "data": _dump(activity_service.create(payload))}


@activities.get("/count", response_model=CountResponse)
def activity_count(user: Identity = Depends(get_current_user)) -> CountResponse:
    return CountResponse(count=activity_service.count())


@activities.get("/{activity_id}")
def get_activity(activity_id: str, user: Identity = Depends(get_current_user)) -> dict:
    return {"success": True, "data": _dump(activity_service.get(activity_id))}


@activities.put("/{activity_id}")
def update_activity(
    activity_id: str, payload: ActivityUpdate, user: Identity = Depends(director_only)
) -> dict:
    return {"success": True, "data": _dump(activity_service.update(activity_id, payload))}


@activities.delete("/{activity_id}")
def delete_activity(activity_id: str, user: Identity = Depends(director_only)) -> dict:
    """Delete an activity; refused with 409 while bookings still reference it."""
    activity_service.delete(activity_id)
    return {"success": True, "data": {}}


# ── Schedule routes ───────────────────────────────────────────────────

schedule = APIRouter(prefix="/schedule", tags=["schedule"])


@schedule.get("/week", response_model=WeekView)
@schedule.get("/week/{start_date}", response_model=WeekView)
def get_week(start_date: date | None = None, user: Identity = Depends(get_current_user)) -> WeekView:
    """Monday to Friday of the week containing *start_date* (default: today)."""
    return week_view(schedule_repo, activity_repo, start_date)


@schedule.get("/day", response_model=DayView)
@schedule.get("/day/{day}", response_model=DayView)
def get_day(day: date | None = None, user: Identity = Depends(get_current_user)) -> DayView:
    """One day's bookings grouped by age group (default: today)."""
    return day_view(schedule_repo, activity_repo, day)


@schedule.get("/day/{day}/count", response_model=CountResponse)
def get_day_count(day: date, user: Identity = Depends(get_current_user)) -> CountResponse:
    return CountResponse(count=count_for_day(schedule_repo, day))


@schedule.get("/materials/needed", response_model=list[MaterialNeed])
def get_materials_needed(
    start_date: date | None = Query(default=None, alias="startDate"),
    end_date: date | None = Query(default=None, alias="endDate"),
    user: Identity = Depends(get_current_user),
) -> list[MaterialNeed]:
    start, end = resolve_span(start_date, end_date)
    return materials_needed(schedule_repo, activity_repo, start, end)


@schedule.post("", status_code=201, response_model=ScheduleEntry)
def create_schedule(
    payload: ScheduleCreate, user: Identity = Depends(get_current_user)
) -> ScheduleEntry:
    """Book an activity; 404 for an unknown activity, 409 on an overlapping booking."""
    return booking_service.create(payload, user)


@schedule.get("/{entry_id}", response_model=ScheduleEntry)
def get_schedule(entry_id: str, user: Identity = Depends(get_current_user)) -> ScheduleEntry:
    return booking_service.get(entry_id)


@schedule.put("/{entry_id}", response_model=ScheduleEntry)
def update_schedule(
    entry_id: str, payload: ScheduleUpdate, user: Identity = Depends(get_current_user)
) -> ScheduleEntry:
    return booking_service.update(entry_id, payload.model_dump(exclude_unset=True), user)


@schedule.delete("/{entry_id}")
def delete_schedule(entry_id: str, user: Identity = Depends(get_current_user)) -> dict:
    booking_service.delete(entry_id, user)
    return {"message": "Scheduled activity removed"}


for router in (activities, schedule):
    app.include_router(router)
    app.include_router(router, prefix="/api")


@app.get("/health")
def health() -> dict:
    return {"ok": True}


def run() -> None:
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=settings.PORT)
