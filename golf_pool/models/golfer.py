"""Leaderboard record models."""

from __future__ import annotations

from enum import Enum
from typing import Optional, Union

from sqlmodel import SQLModel


class GolferStatus(str, Enum):
    ACTIVE = "active"
    CUT = "cut"
    WITHDRAWN = "withdrawn"


class GolferScore(SQLModel):
    """One golfer's line on the tournament leaderboard.

    ``score`` is relative to par, so lower is better. Cut and withdrawn
    golfers keep the last score they posted.
    """

    position: int = 0
    name: str
    score: int = 0
    today: int = 0
    thru: Union[int, str] = "F"
    status: GolferStatus = GolferStatus.ACTIVE
    strokes: Optional[int] = None


__all__ = ["GolferScore", "GolferStatus"]
