"""System-level API endpoints."""

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter

from ...core import (
    POLL_ACTIVE_SECONDS,
    POLL_IDLE_SECONDS,
    SCORE_SOURCES,
    TIEBREAKER1_TARGET,
    TIEBREAKER2_TARGET,
    TOURNAMENT_NAME,
    TOURNAMENT_YEAR,
    USE_MOCK_DATA,
)
from ...services.standings import BEST_OF

router = APIRouter(tags=["system"])


@router.get("/health")
def health() -> Dict[str, bool]:
    """Simple readiness probe."""

    return {"ok": True}


@router.get("/config")
def get_config() -> Dict[str, Any]:
    """Expose frontend configuration values."""

    return {
        "tournament": f"{TOURNAMENT_YEAR} {TOURNAMENT_NAME}",
        "score_sources": SCORE_SOURCES,
        "best_of": BEST_OF,
        "tiebreaker_targets": [TIEBREAKER1_TARGET, TIEBREAKER2_TARGET],
        "poll_active_seconds": POLL_ACTIVE_SECONDS,
        "poll_idle_seconds": POLL_IDLE_SECONDS,
        "use_mock_data": USE_MOCK_DATA,
    }


__all__ = ["router"]
