from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest

from weatherrec.records import MemoryRecordStore, RecordService
from weatherrec.settings import UserSettings


class FakeClock:
    """Controllable clock for deterministic timestamps."""

    def __init__(self, start: datetime = datetime(2024, 1, 1, 12, 0, tzinfo=UTC)) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float = 1.0) -> None:
        self.now += timedelta(seconds=seconds)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store() -> MemoryRecordStore:
    return MemoryRecordStore()


@pytest.fixture
def service(store: MemoryRecordStore, clock: FakeClock) -> RecordService:
    return RecordService(store, clock=clock)


@pytest.fixture
def demo_settings(tmp_path: Path) -> UserSettings:
    return UserSettings(api_key=None, database_path=tmp_path / "database.json")


@pytest.fixture
def live_settings(tmp_path: Path) -> UserSettings:
    return UserSettings(
        api_key="fake-api-key-123",
        units="metric",
        database_path=tmp_path / "database.json",
    )
