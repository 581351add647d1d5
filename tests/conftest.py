"""Shared fakes: a controllable clock, a manual scheduler and stub sources."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

import pytest

from golf_pool.services.cache import MemoryStorage, ScoreCache
from golf_pool.services.normalize import from_records
from golf_pool.services.sources import ScoreSource, SourceError


class FakeClock:
    def __init__(self, start: int = 1_700_000_000_000) -> None:
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += int(seconds * 1000)


class FakeHandle:
    def __init__(self, delay: float, callback) -> None:
        self.delay = delay
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class FakeScheduler:
    """Records timers instead of arming them; tests fire them by hand."""

    def __init__(self) -> None:
        self.handles: List[FakeHandle] = []
        self.shut_down = False

    def call_later(self, delay: float, callback) -> FakeHandle:
        handle = FakeHandle(delay, callback)
        self.handles.append(handle)
        return handle

    def cancel(self, handle: Optional[FakeHandle]) -> None:
        if handle is not None:
            handle.cancel()

    def shutdown(self) -> None:
        self.shut_down = True
        for handle in self.handles:
            handle.cancel()

    @property
    def pending(self) -> List[FakeHandle]:
        return [handle for handle in self.handles if not handle.cancelled]

    async def fire(self, handle: FakeHandle) -> None:
        handle.cancelled = True
        await handle.callback()


class StubSource(ScoreSource):
    """Returns queued outcomes in order; the last one repeats."""

    def __init__(self, name: str, *outcomes: Any) -> None:
        self.name = name
        self._outcomes = list(outcomes)
        self.calls = 0

    async def fetch(self):
        self.calls += 1
        outcome = self._outcomes[0] if len(self._outcomes) == 1 else self._outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return from_records(outcome)


def rows(*pairs: Sequence[Any]) -> List[Dict[str, Any]]:
    """Leaderboard rows from ``(name, score)`` pairs, positioned in order."""

    return [
        {"position": index + 1, "name": name, "score": score}
        for index, (name, score) in enumerate(pairs)
    ]


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def scheduler() -> FakeScheduler:
    return FakeScheduler()


@pytest.fixture
def cache(clock: FakeClock) -> ScoreCache:
    return ScoreCache(MemoryStorage(), clock=clock)


def failing(name: str, message: str = "boom") -> StubSource:
    return StubSource(name, SourceError(message))
