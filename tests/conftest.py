"""
Shared fixtures for storekit tests.
"""

import pytest

from storekit import StorageHost, StorageManager, StorageManagerOptions
from storekit.common.utils import now_ms


class FakeClock:
    """Millisecond clock that only moves when told to."""

    def __init__(self, start: int = None):
        self.now = now_ms() if start is None else start

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


@pytest.fixture
def clock():
    """A controllable clock starting at the current time"""
    return FakeClock()


@pytest.fixture
def host(clock):
    """A host offering every primitive, all in process memory"""
    return StorageHost.in_memory(clock=clock)


@pytest.fixture
def manager(host, clock):
    """A manager over the in-memory host"""
    return StorageManager(StorageManagerOptions(), host=host, clock=clock)
