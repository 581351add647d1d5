"""Pool standings assembled from the current leaderboard snapshot."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from pydantic import ValidationError

from ..core import TIEBREAKER1_TARGET, TIEBREAKER2_TARGET, iso_from_ms
from ..models import PoolParticipant
from .cache import IGNORE_AGE, ScoreCache
from .picks import PaymentRoster, PickRegistry
from .selector import SourceSelector
from .standings import StandingsError, compute_standings

logger = logging.getLogger(__name__)

POOL_STANDINGS_CACHE_KEY = "poolStandings"


@dataclass(frozen=True)
class StandingsSnapshot:
    participants: List[PoolParticipant] = field(default_factory=list)
    source_tag: Optional[str] = None
    last_updated: Optional[str] = None
    stale: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "standings": [participant.model_dump(mode="json") for participant in self.participants],
            "source": self.source_tag,
            "last_updated": self.last_updated,
            "stale": self.stale,
        }


class StandingsService:
    """Joins picks, scores and the payment roster into ranked standings.

    Totals are recomputed from the selector's latest snapshot on every
    call. When the pick table is unusable the last good standings are
    served instead, marked ``stale``.
    """

    def __init__(
        self,
        registry: PickRegistry,
        roster: PaymentRoster,
        selector: SourceSelector,
        cache: ScoreCache,
        *,
        targets: Tuple[int, int] = (TIEBREAKER1_TARGET, TIEBREAKER2_TARGET),
    ) -> None:
        self._registry = registry
        self._roster = roster
        self._selector = selector
        self._cache = cache
        self._targets = targets
        self._last_good: Optional[StandingsSnapshot] = None

    async def current(self) -> StandingsSnapshot:
        result = self._selector.latest or await self._selector.fetch_scores()
        try:
            participants = compute_standings(
                self._registry.entries(),
                result.records,
                targets=self._targets,
                paid=self._roster.is_paid,
            )
        except StandingsError as exc:
            logger.error("Could not compute pool standings: %s", exc)
            return self._previous()

        snapshot = StandingsSnapshot(
            participants=participants,
            source_tag=result.source_tag,
            last_updated=iso_from_ms(result.fetched_at),
        )
        self._last_good = snapshot
        self._cache.set(
            POOL_STANDINGS_CACHE_KEY,
            [participant.model_dump(mode="json") for participant in participants],
            result.source_tag,
        )
        return snapshot

    def _previous(self) -> StandingsSnapshot:
        if self._last_good is not None:
            return StandingsSnapshot(
                participants=self._last_good.participants,
                source_tag=self._last_good.source_tag,
                last_updated=self._last_good.last_updated,
                stale=True,
            )

        hit = self._cache.get(POOL_STANDINGS_CACHE_KEY, IGNORE_AGE)
        if hit is None or not isinstance(hit.data, list):
            return StandingsSnapshot(stale=True)
        try:
            participants = [PoolParticipant.model_validate(row) for row in hit.data]
        except ValidationError as exc:
            logger.warning("Ignoring unusable cached standings: %s", exc)
            return StandingsSnapshot(stale=True)
        logger.info("Serving cached pool standings from %s", iso_from_ms(hit.timestamp))
        return StandingsSnapshot(
            participants=participants,
            source_tag=hit.source,
            last_updated=iso_from_ms(hit.timestamp),
            stale=True,
        )


__all__ = ["POOL_STANDINGS_CACHE_KEY", "StandingsService", "StandingsSnapshot"]
