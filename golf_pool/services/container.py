"""Wiring for the long-lived service objects shared by the API."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.engine import Engine

from ..core import (
    CACHE_BACKEND,
    EMERGENCY_DATA_ENABLED,
    PAYMENTS_FILE,
    PICKS_FILE,
    SCORE_SOURCES,
    USE_MOCK_DATA,
    make_engine,
)
from .cache import MemoryStorage, ScoreCache, SqlStorage
from .emergency import EMERGENCY_LEADERBOARD
from .picks import PaymentRoster, PickRegistry, PickRegistryError
from .polling import PollingController
from .pool import StandingsService
from .scheduler import Scheduler
from .selector import SourceSelector
from .sources import StaticSource, build_sources
from .tournament import TournamentCalendar

logger = logging.getLogger(__name__)


@dataclass
class PoolServices:
    cache: ScoreCache
    scheduler: Scheduler
    selector: SourceSelector
    standings: StandingsService
    calendar: TournamentCalendar
    polling: PollingController
    engine: Optional[Engine] = None


def load_registry(path=PICKS_FILE) -> PickRegistry:
    try:
        return PickRegistry.from_file(path)
    except PickRegistryError as exc:
        logger.error("Pool entries unavailable: %s", exc)
        return PickRegistry([])


def load_roster(path=PAYMENTS_FILE) -> PaymentRoster:
    try:
        return PaymentRoster.from_file(path)
    except PickRegistryError as exc:
        logger.error("Payment roster unavailable: %s", exc)
        return PaymentRoster()


def build_services(cache_backend: str = CACHE_BACKEND) -> PoolServices:
    """Assemble services from the environment configuration."""

    engine = None
    if cache_backend == "memory":
        storage = MemoryStorage()
    else:
        engine = make_engine()
        storage = SqlStorage(engine)

    cache = ScoreCache(storage)
    scheduler = Scheduler()
    emergency = StaticSource(EMERGENCY_LEADERBOARD) if EMERGENCY_DATA_ENABLED else None
    selector = SourceSelector(
        build_sources(SCORE_SOURCES),
        cache,
        scheduler,
        emergency=emergency,
        force_mock=USE_MOCK_DATA,
    )
    if USE_MOCK_DATA:
        logger.warning("USE_MOCK_DATA is set; serving the synthetic leaderboard only")

    calendar = TournamentCalendar(cache)
    standings = StandingsService(load_registry(), load_roster(), selector, cache)
    polling = PollingController(selector, calendar, scheduler)
    logger.info("Score sources in priority order: %s", ", ".join(selector.source_names) or "none")

    return PoolServices(
        cache=cache,
        scheduler=scheduler,
        selector=selector,
        standings=standings,
        calendar=calendar,
        polling=polling,
        engine=engine,
    )


__all__ = ["PoolServices", "build_services", "load_registry", "load_roster"]
