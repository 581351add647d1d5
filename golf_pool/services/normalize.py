"""Adapters that turn raw provider payloads into ``GolferScore`` records.

Every provider names and formats its fields differently. All lenient
parsing lives here so the rest of the pipeline only ever sees the
canonical record shape.
"""

from __future__ import annotations

import logging
import math
import re
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Union

from bs4 import BeautifulSoup

from ..models import GolferScore, GolferStatus

logger = logging.getLogger(__name__)

_SCORE_RE = re.compile(r"[+-]?\d+")
_POSITION_RE = re.compile(r"\d+")


def parse_score(value: Any) -> int:
    """Parse a to-par score; even par, blanks and garbage all count as 0."""

    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else 0
    text = str(value).strip()
    if not text or text.upper() == "E":
        return 0
    match = _SCORE_RE.search(text)
    return int(match.group(0)) if match else 0


def parse_position(value: Any) -> int:
    """Parse a leaderboard position such as ``3``, ``"T3"`` or ``"3"``."""

    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    match = _POSITION_RE.search(str(value))
    return int(match.group(0)) if match else 0


def parse_thru(value: Any) -> Union[int, str]:
    if value is None or isinstance(value, bool):
        return "F"
    if isinstance(value, int):
        return value
    text = str(value).strip()
    if not text:
        return "F"
    if text.isdigit():
        return int(text)
    return text


def parse_status(value: Any) -> GolferStatus:
    text = str(value or "").strip().lower()
    if text == "cut":
        return GolferStatus.CUT
    if text in {"wd", "withdrawn"}:
        return GolferStatus.WITHDRAWN
    return GolferStatus.ACTIVE


def _optional_int(value: Any) -> Optional[int]:
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (OverflowError, TypeError, ValueError):
        return None


def _finalize(records: Iterable[GolferScore]) -> List[GolferScore]:
    """Drop nameless and duplicate golfers, then order by position."""

    seen = set()
    unique: List[GolferScore] = []
    for record in records:
        if not record.name or record.name in seen:
            continue
        seen.add(record.name)
        unique.append(record)
    unique.sort(key=lambda record: record.position)
    return unique


def from_records(rows: Sequence[Mapping[str, Any]]) -> List[GolferScore]:
    """Rebuild records from our own serialized shape (cache, static data)."""

    records: List[GolferScore] = []
    for row in rows or []:
        if not isinstance(row, Mapping):
            continue
        records.append(
            GolferScore(
                position=parse_position(row.get("position")),
                name=str(row.get("name") or "").strip(),
                score=parse_score(row.get("score")),
                today=parse_score(row.get("today")),
                thru=parse_thru(row.get("thru")),
                status=parse_status(row.get("status")),
                strokes=_optional_int(row.get("strokes")),
            )
        )
    return _finalize(records)


def from_espn(payload: Mapping[str, Any]) -> List[GolferScore]:
    """ESPN scoreboard: ``events[0].competitions[0].competitors``."""

    event = (payload.get("events") or [{}])[0] or {}
    competition = (event.get("competitions") or [{}])[0] or {}
    period = ((event.get("status") or {}).get("period")) or 0

    records: List[GolferScore] = []
    for player in competition.get("competitors") or []:
        status_block = player.get("status") or {}
        description = (status_block.get("type") or {}).get("description")
        linescores = player.get("linescores") or []
        if period and len(linescores) >= period:
            today = linescores[period - 1].get("value")
        elif linescores:
            today = linescores[-1].get("value")
        else:
            today = None

        records.append(
            GolferScore(
                position=parse_position(
                    (status_block.get("position") or {}).get("id") or player.get("rankOrder")
                ),
                name=str((player.get("athlete") or {}).get("displayName") or "").strip(),
                score=parse_score(player.get("score")),
                today=parse_score(today),
                thru=parse_thru(
                    status_block.get("thru") or (status_block.get("type") or {}).get("shortDetail")
                ),
                status=parse_status(description),
            )
        )
    return _finalize(records)


def from_pga_tour(payload: Mapping[str, Any]) -> List[GolferScore]:
    """PGA Tour mini leaderboard feed: ``leaderboard.players``."""

    board = payload.get("leaderboard") or {}
    players = board.get("players")
    if not isinstance(players, list):
        raise ValueError("PGA Tour payload has no player list")

    records: List[GolferScore] = []
    for player in players:
        bio = player.get("player_bio") or {}
        name = " ".join(
            part for part in (bio.get("first_name"), bio.get("last_name")) if part
        )
        records.append(
            GolferScore(
                position=parse_position(player.get("current_position")),
                name=name.strip(),
                score=parse_score(player.get("total")),
                today=parse_score(player.get("today")),
                thru=parse_thru(player.get("thru")),
                status=parse_status(player.get("status")),
                strokes=_optional_int(player.get("total_strokes")),
            )
        )
    return _finalize(records)


def from_sportsdata(payload: Mapping[str, Any]) -> List[GolferScore]:
    """RapidAPI live golf data: ``leaderboard.players`` with ``total_to_par``."""

    players = (payload.get("leaderboard") or {}).get("players") or []
    records = [
        GolferScore(
            position=parse_position(player.get("position")),
            name=str(player.get("player_name") or "").strip(),
            score=parse_score(player.get("total_to_par")),
            today=parse_score(player.get("today")),
            thru=parse_thru(player.get("thru")),
            status=parse_status(player.get("status")),
            strokes=_optional_int(player.get("strokes")),
        )
        for player in players
    ]
    return _finalize(records)


def from_sheet_rows(rows: Sequence[Sequence[Any]]) -> List[GolferScore]:
    """Spreadsheet values: a header row followed by one row per golfer."""

    if not rows or len(rows) < 2:
        return []

    headers = [str(header).strip().lower() for header in rows[0]]

    def cell(row: Sequence[Any], column: str) -> Any:
        try:
            index = headers.index(column)
        except ValueError:
            return None
        return row[index] if index < len(row) else None

    records = [
        GolferScore(
            position=parse_position(cell(row, "position")),
            name=str(cell(row, "name") or "").strip(),
            score=parse_score(cell(row, "score")),
            today=parse_score(cell(row, "today")),
            thru=parse_thru(cell(row, "thru")),
            status=parse_status(cell(row, "status")),
            strokes=_optional_int(cell(row, "strokes")),
        )
        for row in rows[1:]
    ]
    return _finalize(records)


def _text(node) -> str:
    return node.get_text(" ", strip=True) if node is not None else ""


def _first(node, *selectors: str):
    for selector in selectors:
        found = node.select_one(selector)
        if found is not None:
            return found
    return None


def _from_alt_row(row) -> Optional[GolferScore]:
    position_text = _text(_first(row, ".position", "[data-position]")) or row.get("data-position", "")
    position = parse_position(position_text)
    if not position:
        return None
    name = _text(_first(row, ".player-name", ".name", "[data-player-name]")) or row.get(
        "data-player-name", ""
    )
    score = _text(_first(row, ".score", ".total-score", "[data-score]")) or row.get("data-score")
    today = _text(_first(row, ".today", ".round-score", "[data-today]")) or row.get("data-today")
    thru = _text(_first(row, ".thru", ".hole", "[data-thru]")) or row.get("data-thru")
    return GolferScore(
        position=position,
        name=name.strip(),
        score=parse_score(score),
        today=parse_score(today),
        thru=parse_thru(thru),
    )


def from_masters_html(html: str) -> List[GolferScore]:
    """Scrape the masters.com scores page.

    Table rows are read as position, name, total, today and thru cells.
    Pages rendered without a table fall back to ``.player-row`` elements.
    """

    soup = BeautifulSoup(html, "html.parser")
    records: List[GolferScore] = []

    table = _first(soup, ".leaderboard-table", ".leaderboard", "table")
    if table is not None:
        for row in table.select("tr"):
            if "header" in (row.get("class") or []):
                continue
            cells = row.find_all("td")
            if len(cells) < 4:
                continue
            position = parse_position(_text(cells[0]))
            if not position:
                continue
            name_node = cells[1].select_one(".player-name") or cells[1]
            records.append(
                GolferScore(
                    position=position,
                    name=_text(name_node),
                    score=parse_score(_text(cells[2])),
                    today=parse_score(_text(cells[3])),
                    thru=parse_thru(_text(cells[4]) if len(cells) > 4 else None),
                )
            )

    if not records:
        for row in soup.select(".player-row, .player-data"):
            record = _from_alt_row(row)
            if record is not None:
                records.append(record)

    logger.debug("Extracted %s players from masters.com markup", len(records))
    return _finalize(records)


def to_payload(records: Iterable[GolferScore]) -> List[Dict[str, Any]]:
    """Serialize records to plain JSON-compatible dicts."""

    return [record.model_dump(mode="json") for record in records]


__all__ = [
    "from_espn",
    "from_masters_html",
    "from_pga_tour",
    "from_records",
    "from_sheet_rows",
    "from_sportsdata",
    "parse_position",
    "parse_score",
    "parse_status",
    "parse_thru",
    "to_payload",
]
