"""Model exports."""

from .cache import CacheRecord
from .golfer import GolferScore, GolferStatus
from .participant import ParticipantPicks, PoolParticipant

__all__ = [
    "CacheRecord",
    "GolferScore",
    "GolferStatus",
    "ParticipantPicks",
    "PoolParticipant",
]
