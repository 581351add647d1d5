"""Core configuration and infrastructure helpers."""

from .config import (
    ALLOWED_CORS_ORIGINS,
    CACHE_BACKEND,
    CACHE_FRESHNESS_SECONDS,
    DATABASE_URL,
    EMERGENCY_DATA_ENABLED,
    ESPN_LEADERBOARD_URL,
    FORCE_TOURNAMENT_ACTIVE,
    FORCE_TOURNAMENT_ROUND,
    GOOGLE_SHEETS_API_KEY,
    GOOGLE_SHEETS_DOC_ID,
    GOOGLE_SHEETS_LEADERBOARD_TAB,
    HTTP_TIMEOUT_SECONDS,
    LOG_FILE,
    LOG_LEVEL,
    MASTERS_LEADERBOARD_URL,
    PAYMENTS_FILE,
    PGATOUR_LEADERBOARD_URL,
    PICKS_FILE,
    POLLING_ENABLED,
    POLL_ACTIVE_SECONDS,
    POLL_IDLE_SECONDS,
    RETRY_DELAYS_SECONDS,
    SCORE_SOURCES,
    SPORTS_API_KEY,
    SPORTS_API_URL,
    TIEBREAKER1_TARGET,
    TIEBREAKER2_TARGET,
    TOURNAMENT_COURSE,
    TOURNAMENT_END,
    TOURNAMENT_NAME,
    TOURNAMENT_START,
    TOURNAMENT_STATUS_CHECK_SECONDS,
    TOURNAMENT_YEAR,
    USE_MOCK_DATA,
)
from .database import init_db, make_engine
from .logging_setup import setup_logging
from .time import iso_from_ms, now_ms, utcnow

__all__ = [
    "ALLOWED_CORS_ORIGINS",
    "CACHE_BACKEND",
    "CACHE_FRESHNESS_SECONDS",
    "DATABASE_URL",
    "EMERGENCY_DATA_ENABLED",
    "ESPN_LEADERBOARD_URL",
    "FORCE_TOURNAMENT_ACTIVE",
    "FORCE_TOURNAMENT_ROUND",
    "GOOGLE_SHEETS_API_KEY",
    "GOOGLE_SHEETS_DOC_ID",
    "GOOGLE_SHEETS_LEADERBOARD_TAB",
    "HTTP_TIMEOUT_SECONDS",
    "LOG_FILE",
    "LOG_LEVEL",
    "MASTERS_LEADERBOARD_URL",
    "PAYMENTS_FILE",
    "PGATOUR_LEADERBOARD_URL",
    "PICKS_FILE",
    "POLLING_ENABLED",
    "POLL_ACTIVE_SECONDS",
    "POLL_IDLE_SECONDS",
    "RETRY_DELAYS_SECONDS",
    "SCORE_SOURCES",
    "SPORTS_API_KEY",
    "SPORTS_API_URL",
    "TIEBREAKER1_TARGET",
    "TIEBREAKER2_TARGET",
    "TOURNAMENT_COURSE",
    "TOURNAMENT_END",
    "TOURNAMENT_NAME",
    "TOURNAMENT_START",
    "TOURNAMENT_STATUS_CHECK_SECONDS",
    "TOURNAMENT_YEAR",
    "USE_MOCK_DATA",
    "init_db",
    "iso_from_ms",
    "make_engine",
    "now_ms",
    "setup_logging",
    "utcnow",
]
