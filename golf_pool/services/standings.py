"""Pool standings: best-N-of-M team totals and tie-break ranking."""

from __future__ import annotations

import math
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from ..core import TIEBREAKER1_TARGET, TIEBREAKER2_TARGET
from ..models import GolferScore, ParticipantPicks, PoolParticipant

BEST_OF = 4


class StandingsError(ValueError):
    """Standings cannot be computed from the given pick table."""


def best_n_of_m(values: Iterable[int], n: int = BEST_OF) -> int:
    """Sum the ``n`` lowest values; everything is summed when there are ``n`` or fewer."""

    return sum(sorted(values)[:n])


def counting_picks(pick_scores: Sequence[Tuple[str, int]], n: int = BEST_OF) -> List[str]:
    """Names behind ``best_n_of_m``, ties resolved by pick order."""

    ordered = sorted(enumerate(pick_scores), key=lambda item: (item[1][1], item[0]))
    return [name for _, (name, _) in ordered[:n]]


def score_lookup(scores: Iterable[GolferScore]) -> Dict[str, int]:
    return {record.name: record.score for record in scores}


def tiebreaker_distance(guess: Optional[int], target: int) -> float:
    # A missing guess loses to any submitted one.
    if guess is None:
        return math.inf
    return abs(guess - target)


def competition_ranks(totals: Sequence[int]) -> List[int]:
    """Standard competition ranking ("1224") over an already sorted sequence."""

    ranks: List[int] = []
    for index, total in enumerate(totals):
        if index and total == totals[index - 1]:
            ranks.append(ranks[-1])
        else:
            ranks.append(index + 1)
    return ranks


def compute_standings(
    picks: Sequence[ParticipantPicks],
    scores: Iterable[GolferScore],
    *,
    targets: Tuple[int, int] = (TIEBREAKER1_TARGET, TIEBREAKER2_TARGET),
    paid: Optional[Callable[[str], bool]] = None,
    best_of: int = BEST_OF,
) -> List[PoolParticipant]:
    """Rank every participant against the given leaderboard snapshot.

    Golfers missing from the snapshot score 0. Order is total ascending,
    then closeness of each tiebreaker to its target, then name. Positions
    only look at the total, so participants split by a tiebreaker still
    share a position.
    """

    if not picks:
        raise StandingsError("No pool entries to rank")

    lookup = score_lookup(scores)
    target1, target2 = targets

    rows = []
    for entry in picks:
        if not isinstance(entry, ParticipantPicks) or not entry.name or not entry.picks:
            raise StandingsError(f"Malformed pool entry: {entry!r}")
        pick_scores = [(golfer, lookup.get(golfer, 0)) for golfer in entry.picks]
        total = best_n_of_m((score for _, score in pick_scores), best_of)
        rows.append((entry, pick_scores, total))

    rows.sort(
        key=lambda row: (
            row[2],
            tiebreaker_distance(row[0].tiebreaker1, target1),
            tiebreaker_distance(row[0].tiebreaker2, target2),
            row[0].name.casefold(),
            row[0].name,
        )
    )

    positions = competition_ranks([total for _, _, total in rows])
    return [
        PoolParticipant(
            name=entry.name,
            position=position,
            total_score=total,
            picks=list(entry.picks),
            pick_scores=dict(pick_scores),
            counting_picks=counting_picks(pick_scores, best_of),
            tiebreaker1=entry.tiebreaker1,
            tiebreaker2=entry.tiebreaker2,
            paid=paid(entry.name) if paid else False,
        )
        for (entry, pick_scores, total), position in zip(rows, positions)
    ]


__all__ = [
    "BEST_OF",
    "StandingsError",
    "best_n_of_m",
    "competition_ranks",
    "compute_standings",
    "counting_picks",
    "score_lookup",
    "tiebreaker_distance",
]
