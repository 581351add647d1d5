"""Read-only pool entry tables: participant picks and the payment roster."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence

from ..models import ParticipantPicks

logger = logging.getLogger(__name__)

MIN_PICKS = 4
MAX_PICKS = 5


class PickRegistryError(ValueError):
    """The pick table is missing, unreadable or has an invalid entry."""


def _tiebreaker(value: Any) -> Optional[int]:
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise PickRegistryError(f"Tiebreaker must be a whole number, got {value!r}") from exc


def validate_entry(name: str, picks: Sequence[Any], tiebreakers: Sequence[Any] = ()) -> ParticipantPicks:
    """Build a ``ParticipantPicks`` or raise ``PickRegistryError``."""

    name = str(name or "").strip()
    if not name:
        raise PickRegistryError("Participant name is required")

    cleaned = [str(pick).strip() for pick in picks or [] if str(pick or "").strip()]
    if not MIN_PICKS <= len(cleaned) <= MAX_PICKS:
        raise PickRegistryError(
            f"{name} has {len(cleaned)} picks; expected {MIN_PICKS} to {MAX_PICKS}"
        )
    if len(set(cleaned)) != len(cleaned):
        raise PickRegistryError(f"{name} picked the same golfer more than once")

    tiebreakers = list(tiebreakers or [])
    return ParticipantPicks(
        name=name,
        picks=cleaned,
        tiebreaker1=_tiebreaker(tiebreakers[0]) if len(tiebreakers) > 0 else None,
        tiebreaker2=_tiebreaker(tiebreakers[1]) if len(tiebreakers) > 1 else None,
    )


class PickRegistry:
    """Participant name -> picks and tiebreakers, in load order."""

    def __init__(self, entries: Sequence[ParticipantPicks]) -> None:
        seen = set()
        for entry in entries:
            if entry.name in seen:
                raise PickRegistryError(f"Duplicate participant: {entry.name}")
            seen.add(entry.name)
        self._entries = list(entries)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Mapping[str, Any]]) -> "PickRegistry":
        """Load the ``{name: {"picks": [...], "tiebreakers": [t1, t2]}}`` shape."""

        if not isinstance(data, Mapping):
            raise PickRegistryError("Pick table must be a JSON object keyed by participant")
        entries = []
        for name, entry in data.items():
            if not isinstance(entry, Mapping):
                raise PickRegistryError(f"Entry for {name} must be an object")
            entries.append(
                validate_entry(name, entry.get("picks") or [], entry.get("tiebreakers") or [])
            )
        return cls(entries)

    @classmethod
    def from_file(cls, path: Path) -> "PickRegistry":
        try:
            data = json.loads(Path(path).read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise PickRegistryError(f"Could not read pick table {path}: {exc}") from exc
        registry = cls.from_mapping(data)
        logger.info("Loaded %s pool entries from %s", len(registry), path)
        return registry

    @classmethod
    def from_sheet_rows(cls, rows: Sequence[Sequence[Any]]) -> "PickRegistry":
        """Load a sheet export with ``name``, ``pick 1``.. and ``tiebreaker 1/2`` columns."""

        if not rows:
            raise PickRegistryError("Pick sheet is empty")
        headers = [str(header).strip().lower() for header in rows[0]]

        def cell(row: Sequence[Any], column: str) -> Any:
            if column not in headers:
                return None
            index = headers.index(column)
            return row[index] if index < len(row) else None

        entries = [
            validate_entry(
                cell(row, "name"),
                [cell(row, f"pick {n}") for n in range(1, MAX_PICKS + 1)],
                [cell(row, "tiebreaker 1"), cell(row, "tiebreaker 2")],
            )
            for row in rows[1:]
            if any(str(value).strip() for value in row)
        ]
        return cls(entries)

    def entries(self) -> List[ParticipantPicks]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)


def _truthy(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value or "").strip().lower() in {"true", "yes", "y", "1", "paid"}


class PaymentRoster:
    """Who has paid their entry fee. Unknown names count as unpaid."""

    def __init__(self, paid: Optional[Mapping[str, Any]] = None) -> None:
        self._paid: Dict[str, bool] = {
            str(name).strip(): _truthy(value) for name, value in (paid or {}).items()
        }

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "PaymentRoster":
        if not isinstance(data, Mapping):
            raise PickRegistryError("Payment roster must be a JSON object keyed by participant")
        return cls(data)

    @classmethod
    def from_file(cls, path: Path) -> "PaymentRoster":
        path = Path(path)
        if not path.exists():
            logger.warning("Payment roster %s not found; treating everyone as unpaid", path)
            return cls()
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except ValueError as exc:
            raise PickRegistryError(f"Could not parse payment roster {path}: {exc}") from exc
        return cls.from_mapping(data)

    def is_paid(self, name: str) -> bool:
        return self._paid.get(name, False)

    def as_dict(self) -> Dict[str, bool]:
        return dict(self._paid)


__all__ = ["PaymentRoster", "PickRegistry", "PickRegistryError", "validate_entry"]
