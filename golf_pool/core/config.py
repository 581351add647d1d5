"""Application settings and environment helpers."""

from __future__ import annotations

import os
from datetime import date
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from dotenv import load_dotenv

load_dotenv(override=False)

_PACKAGE_DIR = Path(__file__).resolve().parents[1]
_PROJECT_ROOT = _PACKAGE_DIR.parent


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_optional_bool(name: str) -> Optional[bool]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise RuntimeError(f"{name} must be an integer") from exc


def _env_optional_int(name: str) -> Optional[int]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    return _env_int(name, 0)


def _split_csv(raw: str | None) -> List[str]:
    if not raw:
        return []
    return [item.strip() for item in raw.split(",") if item.strip()]


def _unique(values: Iterable[str]) -> List[str]:
    seen = set()
    ordered: List[str] = []
    for value in values:
        if value not in seen:
            seen.add(value)
            ordered.append(value)
    return ordered


def _delays(raw: str | None, default: Tuple[float, ...]) -> Tuple[float, ...]:
    items = _split_csv(raw)
    if not items:
        return default
    try:
        return tuple(float(item) for item in items)
    except ValueError as exc:
        raise RuntimeError("RETRY_DELAYS_SECONDS must be a comma-separated list of numbers") from exc


# Tournament -----------------------------------------------------------------
TOURNAMENT_YEAR = _env_int("TOURNAMENT_YEAR", date.today().year)
TOURNAMENT_NAME = os.getenv("TOURNAMENT_NAME", "Masters Tournament")
TOURNAMENT_COURSE = os.getenv("TOURNAMENT_COURSE", "Augusta National Golf Club")
TOURNAMENT_START = os.getenv("TOURNAMENT_START", f"{TOURNAMENT_YEAR}-04-10")
TOURNAMENT_END = os.getenv("TOURNAMENT_END", f"{TOURNAMENT_YEAR}-04-13")
FORCE_TOURNAMENT_ACTIVE = _env_optional_bool("FORCE_TOURNAMENT_ACTIVE")
FORCE_TOURNAMENT_ROUND = _env_optional_int("FORCE_TOURNAMENT_ROUND")


# Score sources --------------------------------------------------------------
# Live tiers in priority order; the first entry is the primary source.
SCORE_SOURCES = _split_csv(os.getenv("SCORE_SOURCES")) or ["masters-scraper", "espn-api"]

MASTERS_LEADERBOARD_URL = os.getenv(
    "MASTERS_LEADERBOARD_URL", "https://www.masters.com/en_US/scores/index.html"
)
ESPN_LEADERBOARD_URL = os.getenv(
    "ESPN_LEADERBOARD_URL",
    "https://site.api.espn.com/apis/site/v2/sports/golf/pga/leaderboard",
)
PGATOUR_LEADERBOARD_URL = os.getenv(
    "PGATOUR_LEADERBOARD_URL",
    "https://statdata.pgatour.com/r/current/leaderboard-v2mini.json",
)
SPORTS_API_URL = os.getenv(
    "SPORTS_API_URL",
    f"https://golf-live-data.p.rapidapi.com/leaderboard/masters/{TOURNAMENT_YEAR}",
)
SPORTS_API_KEY = os.getenv("SPORTS_API_KEY", "")
GOOGLE_SHEETS_DOC_ID = os.getenv("GOOGLE_SHEETS_DOC_ID", "")
GOOGLE_SHEETS_API_KEY = os.getenv("GOOGLE_SHEETS_API_KEY", "")
GOOGLE_SHEETS_LEADERBOARD_TAB = os.getenv("GOOGLE_SHEETS_LEADERBOARD_TAB", "Leaderboard")
HTTP_TIMEOUT_SECONDS = _env_int("HTTP_TIMEOUT_SECONDS", 20)


# Cache ----------------------------------------------------------------------
CACHE_BACKEND = os.getenv("CACHE_BACKEND", "sql").strip().lower()
DATABASE_URL = os.getenv("DATABASE_URL", f"sqlite:///{_PROJECT_ROOT / 'data' / 'cache.db'}")
# Must stay below POLL_ACTIVE_SECONDS or active ticks never reach live sources.
CACHE_FRESHNESS_SECONDS = _env_int("CACHE_FRESHNESS_SECONDS", 45)
RETRY_DELAYS_SECONDS = _delays(os.getenv("RETRY_DELAYS_SECONDS"), (3.0, 5.0, 10.0))


# Polling --------------------------------------------------------------------
POLLING_ENABLED = _env_bool("POLLING_ENABLED", True)
POLL_ACTIVE_SECONDS = _env_int("POLL_ACTIVE_SECONDS", 60)
POLL_IDLE_SECONDS = _env_int("POLL_IDLE_SECONDS", 300)
TOURNAMENT_STATUS_CHECK_SECONDS = _env_int("TOURNAMENT_STATUS_CHECK_SECONDS", 60 * 60)


# Scoring --------------------------------------------------------------------
TIEBREAKER1_TARGET = _env_int("TIEBREAKER1_TARGET", 280)
TIEBREAKER2_TARGET = _env_int("TIEBREAKER2_TARGET", 140)
PICKS_FILE = Path(os.getenv("PICKS_FILE", str(_PACKAGE_DIR / "data" / "picks.json")))
PAYMENTS_FILE = Path(os.getenv("PAYMENTS_FILE", str(_PACKAGE_DIR / "data" / "payments.json")))


# Emergency data -------------------------------------------------------------
EMERGENCY_DATA_ENABLED = _env_bool("EMERGENCY_DATA_ENABLED", True)
USE_MOCK_DATA = _env_bool("USE_MOCK_DATA", False)


# CORS -----------------------------------------------------------------------
# FRONTEND_ORIGIN can contain a comma-separated list for multi-domain deploys.
_frontend_origins = _split_csv(os.getenv("FRONTEND_ORIGIN"))
_additional_origins = _split_csv(os.getenv("ADDITIONAL_ALLOWED_ORIGINS"))

_local_dev_origins = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]

ALLOWED_CORS_ORIGINS = _unique(
    [
        *_frontend_origins,
        *_additional_origins,
        *_local_dev_origins,
    ]
)


# Logging --------------------------------------------------------------------
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FILE = os.getenv("LOG_FILE") or None


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
]
