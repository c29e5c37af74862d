"""Domain errors raised by services and stores, mapped to HTTP in ``camp.main``."""

from __future__ import annotations


class CampError(Exception):
    """Base class for domain/service errors."""


class NotFound(CampError):
    def __init__(self, kind: str, entity_id: str) -> None:
        super().__init__(f"{kind} not found")
        self.kind = kind
        self.entity_id = entity_id


class Conflict(CampError):
    """A booking would overlap an existing one at the same location and date."""

    def __init__(self, conflicting_id: str) -> None:
        super().__init__("Scheduling conflict detected")
        self.conflicting_id = conflicting_id


class ValidationError(CampError):
    def __init__(self, field: str, reason: str) -> None:
        super().__init__(f"{field}: {reason}")
        self.field = field
        self.reason = reason


class ActivityInUse(CampError):
    """Activity deletion refused while schedule entries still reference it."""

    def __init__(self, activity_id: str, schedule_count: int) -> None:
        super().__init__(
            f"Activity is referenced by {schedule_count} scheduled "
            f"{'entry' if schedule_count == 1 else 'entries'}"
        )
        self.activity_id = activity_id
        self.schedule_count = schedule_count


class StoreUnavailable(CampError):
    """The backing store could not be reached or failed mid-operation."""


class Unauthorized(CampError):
    """The caller could not be identified."""

    def __init__(self) -> None:
        super().__init__("Not authorized to access this route")


class Forbidden(CampError):
    """The caller is known but lacks the role an operation needs."""

    def __init__(self) -> None:
        super().__init__("Not authorized to perform this action")
