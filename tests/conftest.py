import hashlib

import pytest

from pixels_daily.config import CanvasConfig
from pixels_daily.models import Block, ChangeEvent


class FakeFeed:
    """In-memory event feed: block timestamps, a head and a list of events."""

    def __init__(self, timestamps: dict[int, int], head: int, events: list[ChangeEvent] = ()):
        self.timestamps = timestamps
        self.head = head
        self.events = list(events)
        self.queries: list[tuple[int, int]] = []

    def get_block_number(self) -> int:
        return self.head

    def get_block(self, number: int) -> Block:
        return Block(number=number, timestamp=self.timestamps[number])

    def query_events(self, from_block: int, to_block: int) -> list[ChangeEvent]:
        self.queries.append((from_block, to_block))
        return [e for e in self.events if from_block <= e.block_number <= to_block]

    def close(self):
        pass


class FakePublisher:
    """Content-addressed publisher; optionally fails on the Nth call."""

    def __init__(self, fail_on_call: int | None = None):
        self.blobs: list[bytes] = []
        self.fail_on_call = fail_on_call

    def store_blob(self, data: bytes) -> str:
        if self.fail_on_call is not None and len(self.blobs) + 1 == self.fail_on_call:
            raise ConnectionError("publisher unavailable")
        self.blobs.append(data)
        return "bafy" + hashlib.sha256(data).hexdigest()[:16]

    def close(self):
        pass


@pytest.fixture
def config() -> CanvasConfig:
    # 4x4 canvas, days of 100 seconds starting at t=1000
    return CanvasConfig(width=4, height=4, epoch=1000, day_length_seconds=100)


def event(block_number: int, *changes: tuple[int, int], removed: bool = False) -> ChangeEvent:
    return ChangeEvent(block_number=block_number, changes=tuple(changes), removed=removed)
