"""Refresh cadence for the leaderboard.

One interval timer drives background refreshes: short while the tournament
is live, long otherwise. A second, slower timer re-checks whether the
tournament is live and re-arms the interval timer when that changes.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from ..core import POLL_ACTIVE_SECONDS, POLL_IDLE_SECONDS, TOURNAMENT_STATUS_CHECK_SECONDS
from .scheduler import Scheduler
from .selector import FetchResult, SourceSelector, SourcesExhaustedError
from .tournament import TournamentCalendar

logger = logging.getLogger(__name__)


class PollingController:
    def __init__(
        self,
        selector: SourceSelector,
        calendar: TournamentCalendar,
        scheduler: Scheduler,
        *,
        active_interval: float = POLL_ACTIVE_SECONDS,
        idle_interval: float = POLL_IDLE_SECONDS,
        status_interval: float = TOURNAMENT_STATUS_CHECK_SECONDS,
    ) -> None:
        self._selector = selector
        self._calendar = calendar
        self._scheduler = scheduler
        self.active_interval = active_interval
        self.idle_interval = idle_interval
        self.status_interval = status_interval

        self.visible = True
        self.tournament_active = False
        self.running = False
        self._poll_handle = None
        self._status_handle = None

    @property
    def interval(self) -> float:
        return self.active_interval if self.tournament_active else self.idle_interval

    async def start(self) -> None:
        self.running = True
        self.tournament_active = self._calendar.is_active()
        self._arm_polling()
        self._arm_status_check()
        await self.refresh()

    def stop(self) -> None:
        self.running = False
        self._scheduler.cancel(self._poll_handle)
        self._scheduler.cancel(self._status_handle)
        self._poll_handle = None
        self._status_handle = None
        self._selector.shutdown()
        logger.info("Polling stopped")

    def set_visible(self, visible: bool) -> None:
        self.visible = visible
        logger.debug("Client visibility changed: %s", visible)

    async def on_focus(self) -> Optional[FetchResult]:
        if not self.visible:
            return None
        return await self.refresh()

    async def manual_refresh(self) -> FetchResult:
        """Force a live fetch now, regardless of timer phase or visibility."""

        logger.info("Manual refresh requested")
        return await self._selector.fetch_scores(force_refresh=True)

    async def refresh(self, force: bool = False) -> Optional[FetchResult]:
        try:
            return await self._selector.fetch_scores(force_refresh=force)
        except SourcesExhaustedError as exc:
            logger.error("Leaderboard refresh failed: %s", exc)
            return None

    def _arm_polling(self) -> None:
        # Only one interval timer may exist at a time.
        self._scheduler.cancel(self._poll_handle)
        self._poll_handle = None
        if not self.running:
            return
        logger.info(
            "Polling every %ss (tournament %s)",
            self.interval,
            "active" if self.tournament_active else "idle",
        )
        self._poll_handle = self._scheduler.call_later(self.interval, self._tick)

    def _arm_status_check(self) -> None:
        self._scheduler.cancel(self._status_handle)
        self._status_handle = None
        if self.running:
            self._status_handle = self._scheduler.call_later(
                self.status_interval, self._check_status
            )

    async def _tick(self) -> None:
        self._poll_handle = None
        self._arm_polling()
        if not self.visible:
            logger.debug("Skipping refresh while the client is hidden")
            return
        await self.refresh()

    async def _check_status(self) -> None:
        self._status_handle = None
        active = self._calendar.is_active()
        if active != self.tournament_active:
            logger.info("Tournament active status changed to %s", active)
            self.tournament_active = active
            self._arm_polling()
        self._arm_status_check()

    def status(self) -> Dict[str, Any]:
        return {
            "running": self.running,
            "visible": self.visible,
            "tournament_active": self.tournament_active,
            "interval_seconds": self.interval,
        }


__all__ = ["PollingController"]
