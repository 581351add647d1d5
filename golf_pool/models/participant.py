"""Pool entry and standings models."""

from __future__ import annotations

from typing import Dict, List, Optional

from sqlmodel import Field, SQLModel


class ParticipantPicks(SQLModel):
    """A pool entry as submitted: golfer picks plus two tiebreaker guesses."""

    name: str
    picks: List[str]
    tiebreaker1: Optional[int] = None
    tiebreaker2: Optional[int] = None


class PoolParticipant(SQLModel):
    """Derived standings row, rebuilt on every calculation."""

    name: str
    position: int
    total_score: int
    picks: List[str]
    pick_scores: Dict[str, int] = Field(default_factory=dict)
    counting_picks: List[str] = Field(default_factory=list)
    tiebreaker1: Optional[int] = None
    tiebreaker2: Optional[int] = None
    paid: bool = False


__all__ = ["ParticipantPicks", "PoolParticipant"]
