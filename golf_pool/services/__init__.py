"""Service layer: score sources, selection, caching, standings and polling."""

from .cache import IGNORE_AGE, CacheHit, MemoryStorage, ScoreCache, SqlStorage
from .emergency import EMERGENCY_LEADERBOARD
from .picks import PaymentRoster, PickRegistry, PickRegistryError
from .polling import PollingController
from .pool import StandingsService, StandingsSnapshot
from .scheduler import Scheduler
from .selector import FetchResult, SelectorState, SourceSelector, SourcesExhaustedError
from .sources import (
    CACHED_DATA_TAG,
    MOCK_DATA_TAG,
    ScoreSource,
    SourceError,
    StaticSource,
    build_sources,
)
from .standings import StandingsError, best_n_of_m, compute_standings
from .tournament import TournamentCalendar

__all__ = [
    "CACHED_DATA_TAG",
    "CacheHit",
    "EMERGENCY_LEADERBOARD",
    "FetchResult",
    "IGNORE_AGE",
    "MOCK_DATA_TAG",
    "MemoryStorage",
    "PaymentRoster",
    "PickRegistry",
    "PickRegistryError",
    "PollingController",
    "Scheduler",
    "ScoreCache",
    "ScoreSource",
    "SelectorState",
    "SourceError",
    "SourceSelector",
    "SourcesExhaustedError",
    "SqlStorage",
    "StandingsError",
    "StandingsService",
    "StandingsSnapshot",
    "StaticSource",
    "TournamentCalendar",
    "best_n_of_m",
    "build_sources",
    "compute_standings",
]
