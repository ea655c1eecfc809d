"""Pytest configuration and shared fixtures."""

import pytest

import database
from cache import AssetCache

START_TIME = 1_700_000_000


class FakeClock:
    """Stand-in for the wall clock; tests move it forward explicitly."""

    def __init__(self, now: int = START_TIME):
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, seconds: int):
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache(clock: FakeClock) -> AssetCache:
    """An empty cache driven by the fake clock."""
    return AssetCache(clock=clock)


@pytest.fixture(autouse=True)
def store(clock: FakeClock):
    """Replaces the process-wide cache with a fresh one per test."""
    database.reset()
    database.asset_cache = AssetCache(clock=clock)
    yield database
    database.reset()
