from __future__ import annotations

from datetime import datetime, timezone

import pytest

from homectl.config import Settings, get_settings
from homectl.context import HomeContext
from homectl.core.scheduling import ManualScheduler
from homectl.storage import Database, sample_home

START = datetime(2026, 1, 1, 9, 0, tzinfo=timezone.utc)


@pytest.fixture(autouse=True)
def _isolate_settings_env(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delenv("HOMECTL_CONFIG", raising=False)
    monkeypatch.delenv("LOGLEVEL", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def database(tmp_path) -> Database:
    db = Database(tmp_path / "data")
    db.init(sample_home())
    return db


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler(start=START)


@pytest.fixture
def home(database: Database, scheduler: ManualScheduler):
    context = HomeContext(Settings(), database=database, scheduler=scheduler)
    yield context
    context.close()
