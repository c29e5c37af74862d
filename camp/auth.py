"""Caller identity for request handlers.

There is no real authentication yet: callers may name themselves via headers
and otherwise act as the configured default (the camp director).
"""

from __future__ import annotations

from typing import Callable

from fastapi import Depends, Header

from camp.config import settings
from camp.domain.errors import Forbidden, Unauthorized
from camp.domain.models import Identity, Role


def get_current_user(
    x_camp_user: str | None = Header(default=None),
    x_camp_role: str | None = Header(default=None),
) -> Identity:
    role = (x_camp_role or settings.DEFAULT_ROLE).lower()
    if role not in {r.value for r in Role}:
        raise Unauthorized()
    return Identity(username=x_camp_user or settings.DEFAULT_USERNAME, role=Role(role))


def require_roles(*roles: Role) -> Callable[..., Identity]:
    """Build a dependency that only lets the given roles through."""

    def _check(user: Identity = Depends(get_current_user)) -> Identity:
        if user.role not in roles:
            raise Forbidden()
        return user

    return _check
