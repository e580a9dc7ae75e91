"""Shared fixtures."""
import os
import time
from datetime import datetime, timedelta, timezone

import pytest

from studyai.tools.plan_store import StudyPlanStore
from studyai.tools.storage import MemoryStore


class FakeClock:
    """Clock that advances one second per call unless told otherwise."""

    def __init__(self, start: datetime, step: timedelta = timedelta(seconds=1)):
        self.now = start
        self.step = step

    def __call__(self) -> datetime:
        current = self.now
        self.now = self.now + self.step
        return current


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2025, 1, 1, 12, 0, 0, tzinfo=timezone.utc))


@pytest.fixture
def storage() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def store(storage: MemoryStore, clock: FakeClock) -> StudyPlanStore:
    return StudyPlanStore(storage, clock=clock)


@pytest.fixture
def new_york_tz():
    """Run the test with the local timezone set behind UTC."""
    if not hasattr(time, "tzset"):
        pytest.skip("time.tzset is not available on this platform")

    original = os.environ.get("TZ")
    os.environ["TZ"] = "America/New_York"
    time.tzset()
    yield
    if original is None:
        del os.environ["TZ"]
    else:
        os.environ["TZ"] = original
    time.tzset()
