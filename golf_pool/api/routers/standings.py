"""Pool standings endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from ...services.container import PoolServices
from ...services.selector import SourcesExhaustedError
from ..deps import get_services

router = APIRouter(prefix="/api", tags=["standings"])


@router.get("/standings")
async def get_standings(services: PoolServices = Depends(get_services)):
    """Ranked pool participants against the current leaderboard."""

    try:
        snapshot = await services.standings.current()
    except SourcesExhaustedError as exc:
        raise HTTPException(503, f"No leaderboard data available: {exc}") from exc
    return snapshot.to_dict()


__all__ = ["router"]
