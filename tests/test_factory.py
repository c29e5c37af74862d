"""Tests for store backend selection."""

import pytest

from camp.config import Settings
from camp.repos.factory import create_repositories
from camp.repos.memory import ActivityRepository, ScheduleRepository


def test_memory_backend_gives_dict_stores(monkeypatch):
    monkeypatch.setenv("STORE_BACKEND", "memory")
    stores = create_repositories(Settings())
    assert isinstance(stores.activities, ActivityRepository)
    assert isinstance(stores.schedules, ScheduleRepository)
    assert stores.db is None


def test_unknown_backend_rejected(monkeypatch):
    monkeypatch.setenv("STORE_BACKEND", "sqlite")
    with pytest.raises(ValueError):
        create_repositories(Settings())
