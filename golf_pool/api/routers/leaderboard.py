"""Tournament leaderboard endpoints."""

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException

from ...services.container import PoolServices
from ...services.selector import FetchResult, SourcesExhaustedError
from ..deps import get_services

router = APIRouter(prefix="/api", tags=["leaderboard"])


def _payload(result: FetchResult, services: PoolServices) -> Dict[str, Any]:
    return {**result.to_dict(), "status": services.selector.status()}


@router.get("/leaderboard")
async def get_leaderboard(services: PoolServices = Depends(get_services)):
    """Current leaderboard snapshot, fetched on first use."""

    selector = services.selector
    try:
        result = selector.latest or await selector.fetch_scores()
    except SourcesExhaustedError as exc:
        raise HTTPException(503, f"No leaderboard data available: {exc}") from exc
    return _payload(result, services)


@router.post("/leaderboard/refresh")
async def refresh_leaderboard(services: PoolServices = Depends(get_services)):
    """Force a live fetch right now."""

    try:
        result = await services.polling.manual_refresh()
    except SourcesExhaustedError as exc:
        raise HTTPException(503, f"No leaderboard data available: {exc}") from exc
    return _payload(result, services)


__all__ = ["router"]
