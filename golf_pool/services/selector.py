"""Priority-ordered source fallback with retry and backoff.

Tiers, best first:

1. a fresh cache entry (skipped on forced refreshes)
2. each live source in priority order
3. the cache at any age, tagged ``cached-data``
4. the static emergency dataset, tagged ``mock-data``

Paths 3 and 4 count as failures. They bump ``consecutive_failures`` and
schedule a forced retry using the configured escalating delays.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

import httpx

from ..core import CACHE_FRESHNESS_SECONDS, RETRY_DELAYS_SECONDS, iso_from_ms, now_ms
from ..models import GolferScore
from .cache import IGNORE_AGE, ScoreCache
from .normalize import from_records, to_payload
from .scheduler import Scheduler
from .sources import CACHED_DATA_TAG, MOCK_DATA_TAG, ScoreSource, SourceError

logger = logging.getLogger(__name__)

LEADERBOARD_CACHE_KEY = "leaderboardData"


class SourcesExhaustedError(Exception):
    """Every tier, including the emergency dataset, came back empty."""


class SelectorState(str, Enum):
    IDLE = "idle"
    FETCHING = "fetching"
    SCHEDULED = "scheduled"


@dataclass(frozen=True)
class FetchResult:
    records: Tuple[GolferScore, ...]
    source_tag: str
    fetched_at: int
    from_cache: bool = False

    @property
    def is_synthetic(self) -> bool:
        return self.source_tag == MOCK_DATA_TAG

    @property
    def is_live(self) -> bool:
        return self.source_tag not in (CACHED_DATA_TAG, MOCK_DATA_TAG)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "leaderboard": to_payload(self.records),
            "source": self.source_tag,
            "last_updated": iso_from_ms(self.fetched_at),
            "from_cache": self.from_cache,
            "has_live_data": self.is_live,
            "is_synthetic": self.is_synthetic,
        }


class SourceSelector:
    """Resolves the current leaderboard snapshot for one cache key."""

    def __init__(
        self,
        sources: Sequence[ScoreSource],
        cache: ScoreCache,
        scheduler: Scheduler,
        *,
        emergency: Optional[ScoreSource] = None,
        cache_key: str = LEADERBOARD_CACHE_KEY,
        freshness_ms: int = CACHE_FRESHNESS_SECONDS * 1000,
        retry_delays: Sequence[float] = RETRY_DELAYS_SECONDS,
        force_mock: bool = False,
        clock: Callable[[], int] = now_ms,
    ) -> None:
        self._sources: List[ScoreSource] = list(sources)
        self._cache = cache
        self._scheduler = scheduler
        self._emergency = emergency
        self._cache_key = cache_key
        self._freshness_ms = freshness_ms
        self._retry_delays = tuple(retry_delays)
        self._force_mock = force_mock
        self._clock = clock

        self.latest: Optional[FetchResult] = None
        self.consecutive_failures = 0
        self.retry_count = 0
        self.retry_at: Optional[int] = None
        self._retry_handle = None

        self._seq = 0
        self._applied_seq = 0
        self._active_fetches = 0
        self._inflight: Optional[asyncio.Task] = None
        self._inflight_forced = False

    @property
    def state(self) -> SelectorState:
        if self._active_fetches:
            return SelectorState.FETCHING
        if self._retry_handle is not None:
            return SelectorState.SCHEDULED
        return SelectorState.IDLE

    @property
    def source_names(self) -> List[str]:
        return [source.name for source in self._sources]

    async def fetch_scores(self, force_refresh: bool = False) -> FetchResult:
        """Return the best available snapshot, falling back tier by tier.

        A call made while another fetch is running joins it, unless this
        call forces a refresh and the running one does not.
        """

        inflight = self._inflight
        if inflight is not None and not inflight.done():
            if self._inflight_forced or not force_refresh:
                logger.debug("Joining in-flight fetch for %s", self._cache_key)
                return await asyncio.shield(inflight)

        self._seq += 1
        task = asyncio.ensure_future(self._fetch(self._seq, force_refresh))
        self._inflight = task
        self._inflight_forced = force_refresh
        return await asyncio.shield(task)

    async def _fetch(self, seq: int, force_refresh: bool) -> FetchResult:
        self._active_fetches += 1
        try:
            if self._force_mock:
                return self._accept(seq, await self._emergency_result())

            # A non-positive window disables the fresh tier; max_age=0 would mean "any age".
            if not force_refresh and self._freshness_ms > 0:
                fresh = self._read_cache(self._freshness_ms)
                if fresh is not None:
                    logger.info("Using fresh cached leaderboard from %s", fresh.source_tag)
                    return self._accept(seq, fresh)

            for source in self._sources:
                records = await self._attempt(source)
                if records:
                    result = FetchResult(tuple(records), source.name, self._clock())
                    return self._accept(seq, result, live=True)

            try:
                fallback = await self._fallback()
            except SourcesExhaustedError:
                if seq >= self._applied_seq:
                    self._register_failure()
                raise
            return self._accept(seq, fallback, failed=True)
        finally:
            self._active_fetches -= 1
            if self._inflight is asyncio.current_task():
                self._inflight = None

    async def _attempt(self, source: ScoreSource) -> List[GolferScore]:
        try:
            records = await source.fetch()
        except (SourceError, httpx.HTTPError) as exc:
            logger.warning("Score source %s failed: %s", source.name, exc)
            return []
        except Exception:
            logger.warning("Score source %s raised unexpectedly", source.name, exc_info=True)
            return []
        if not records:
            logger.warning("Score source %s returned no golfers", source.name)
            return []
        logger.info("Fetched %s golfers from %s", len(records), source.name)
        return records

    def _read_cache(self, max_age: float, tag: Optional[str] = None) -> Optional[FetchResult]:
        hit = self._cache.get(self._cache_key, max_age)
        if hit is None:
            return None
        records = from_records(hit.data if isinstance(hit.data, list) else [])
        if not records:
            return None
        return FetchResult(tuple(records), tag or hit.source, hit.timestamp, from_cache=True)

    async def _fallback(self) -> FetchResult:
        cached = self._read_cache(IGNORE_AGE, tag=CACHED_DATA_TAG)
        if cached is not None:
            age_minutes = round((self._clock() - cached.fetched_at) / 60000)
            logger.warning(
                "All live sources failed. Using cached leaderboard as last resort (%sm old)",
                age_minutes,
            )
            return cached
        logger.error("All live sources failed and no cached leaderboard is available")
        return await self._emergency_result()

    async def _emergency_result(self) -> FetchResult:
        if self._emergency is None:
            raise SourcesExhaustedError("No score source, cache or emergency data available")
        try:
            records = await self._emergency.fetch()
        except SourceError as exc:
            raise SourcesExhaustedError(str(exc)) from exc
        logger.warning("Serving synthetic emergency leaderboard (%s golfers)", len(records))
        return FetchResult(tuple(records), MOCK_DATA_TAG, self._clock())

    def _accept(
        self, seq: int, result: FetchResult, *, live: bool = False, failed: bool = False
    ) -> FetchResult:
        if seq < self._applied_seq and self.latest is not None:
            logger.info(
                "Discarding result %s from %s; request %s already applied",
                seq,
                result.source_tag,
                self._applied_seq,
            )
            return self.latest

        self._applied_seq = seq
        if live:
            self._cache.set(self._cache_key, to_payload(result.records), result.source_tag)
            self.consecutive_failures = 0
            self.retry_count = 0
            self._cancel_retry()
        elif failed:
            self._register_failure()

        self.latest = result
        return result

    def _register_failure(self) -> None:
        self.consecutive_failures += 1
        self._schedule_retry()

    def _schedule_retry(self) -> None:
        if self._retry_handle is not None:
            return
        if self.retry_count >= len(self._retry_delays):
            logger.warning(
                "Retry limit reached after %s attempts; waiting for the next poll",
                self.retry_count,
            )
            return

        delay = self._retry_delays[self.retry_count]
        self.retry_count += 1
        self.retry_at = self._clock() + int(delay * 1000)
        logger.info("Scheduling retry in %s seconds (attempt %s)", delay, self.retry_count)
        self._retry_handle = self._scheduler.call_later(delay, self._retry)

    async def _retry(self) -> None:
        self._retry_handle = None
        self.retry_at = None
        try:
            await self.fetch_scores(force_refresh=True)
        except SourcesExhaustedError as exc:
            logger.error("Retry failed: %s", exc)

    def _cancel_retry(self) -> None:
        if self._retry_handle is not None:
            self._scheduler.cancel(self._retry_handle)
        self._retry_handle = None
        self.retry_at = None

    def status(self) -> Dict[str, Any]:
        return {
            "state": self.state.value,
            "source": self.latest.source_tag if self.latest else None,
            "last_updated": iso_from_ms(self.latest.fetched_at) if self.latest else None,
            "consecutive_failures": self.consecutive_failures,
            "retry_count": self.retry_count,
            "retry_at": iso_from_ms(self.retry_at) if self.retry_at else None,
            "sources": self.source_names,
        }

    def shutdown(self) -> None:
        self._cancel_retry()
        if self._inflight is not None and not self._inflight.done():
            self._inflight.cancel()
        self._inflight = None


__all__ = [
    "FetchResult",
    "LEADERBOARD_CACHE_KEY",
    "SelectorState",
    "SourceSelector",
    "SourcesExhaustedError",
]
