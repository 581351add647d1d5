"""Tournament schedule helpers: active window and current round."""

from __future__ import annotations

import logging
from datetime import date, datetime, time
from typing import Any, Callable, Dict, Optional

from ..core import (
    FORCE_TOURNAMENT_ACTIVE,
    FORCE_TOURNAMENT_ROUND,
    TOURNAMENT_COURSE,
    TOURNAMENT_END,
    TOURNAMENT_NAME,
    TOURNAMENT_START,
    TOURNAMENT_STATUS_CHECK_SECONDS,
    TOURNAMENT_YEAR,
)
from .cache import ScoreCache

logger = logging.getLogger(__name__)

TOURNAMENT_STATUS_CACHE_KEY = "tournamentStatus"


class TournamentCalendar:
    """Knows when the tournament runs; the active flag is cached between checks."""

    def __init__(
        self,
        cache: ScoreCache,
        *,
        start: str = TOURNAMENT_START,
        end: str = TOURNAMENT_END,
        name: str = TOURNAMENT_NAME,
        course: str = TOURNAMENT_COURSE,
        year: int = TOURNAMENT_YEAR,
        force_active: Optional[bool] = FORCE_TOURNAMENT_ACTIVE,
        force_round: Optional[int] = FORCE_TOURNAMENT_ROUND,
        status_max_age_ms: int = TOURNAMENT_STATUS_CHECK_SECONDS * 1000,
        now: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._cache = cache
        self.start = datetime.combine(date.fromisoformat(start), time.min)
        # The final round finishes in the evening.
        self.end = datetime.combine(date.fromisoformat(end), time(23, 59, 59))
        self.name = name
        self.course = course
        self.year = year
        self._force_active = force_active
        self._force_round = force_round
        self._status_max_age_ms = status_max_age_ms
        self._now = now

    def is_active(self) -> bool:
        cached = self._cache.get(TOURNAMENT_STATUS_CACHE_KEY, self._status_max_age_ms)
        if cached is not None and isinstance(cached.data, bool):
            return cached.data

        if self._force_active is not None:
            active, source = self._force_active, "env-override"
        else:
            now = self._now()
            active, source = self.start <= now <= self.end, "date-calculation"

        self._cache.set(TOURNAMENT_STATUS_CACHE_KEY, active, source)
        logger.info("Tournament active status: %s (%s)", active, source)
        return active

    def current_round(self) -> int:
        if self._force_round:
            return self._force_round
        now = self._now()
        if now < self.start:
            return 1
        days = (now.date() - self.start.date()).days
        return min(max(days + 1, 1), 4)

    def info(self) -> Dict[str, Any]:
        now = self._now()
        return {
            "name": f"{self.year} {self.name}",
            "course": self.course,
            "year": self.year,
            "start_date": self.start.date().isoformat(),
            "end_date": self.end.date().isoformat(),
            "is_active": self.is_active(),
            "is_upcoming": now < self.start,
            "is_past": now > self.end,
            "current_round": self.current_round(),
        }


__all__ = ["TOURNAMENT_STATUS_CACHE_KEY", "TournamentCalendar"]
