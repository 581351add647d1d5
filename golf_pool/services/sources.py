"""Upstream providers of golfer scores.

Each source either returns a non-empty list of ``GolferScore`` records or
raises. The selector decides what to do about failures.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence
from urllib.parse import quote

import httpx

from ..core import (
    ESPN_LEADERBOARD_URL,
    GOOGLE_SHEETS_API_KEY,
    GOOGLE_SHEETS_DOC_ID,
    GOOGLE_SHEETS_LEADERBOARD_TAB,
    HTTP_TIMEOUT_SECONDS,
    MASTERS_LEADERBOARD_URL,
    PGATOUR_LEADERBOARD_URL,
    SPORTS_API_KEY,
    SPORTS_API_URL,
)
from ..models import GolferScore
from . import normalize

logger = logging.getLogger(__name__)

SHEETS_API_BASE = "https://sheets.googleapis.com/v4/spreadsheets"

MOCK_DATA_TAG = "mock-data"
CACHED_DATA_TAG = "cached-data"


class SourceError(Exception):
    """Raised when a source cannot produce a usable leaderboard."""


def looks_like_html(response: httpx.Response) -> bool:
    content_type = response.headers.get("content-type", "").lower()
    if "html" in content_type:
        return True
    return response.text[:256].lstrip().startswith("<")


class ScoreSource:
    """Base class for one upstream provider."""

    name = "source"

    async def fetch(self) -> List[GolferScore]:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"


class HttpSource(ScoreSource):
    """Shared plumbing for sources reached over HTTP."""

    def __init__(
        self,
        name: str,
        url: str,
        *,
        headers: Optional[Dict[str, str]] = None,
        params: Optional[Dict[str, Any]] = None,
        timeout: float = HTTP_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.name = name
        self.url = url
        self.headers = {"Cache-Control": "no-cache", **(headers or {})}
        self.params = params or {}
        self.timeout = timeout
        self._transport = transport

    async def _get(self) -> httpx.Response:
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            response = await client.get(self.url, headers=self.headers, params=self.params)
            response.raise_for_status()
            return response

    def _require_records(self, records: List[GolferScore]) -> List[GolferScore]:
        if not records:
            raise SourceError(f"{self.name} returned an empty leaderboard")
        return records


class JsonApiSource(HttpSource):
    """A JSON API whose payload is mapped by one normalization adapter."""

    def __init__(
        self,
        name: str,
        url: str,
        adapter: Callable[[Any], List[GolferScore]],
        **kwargs: Any,
    ) -> None:
        super().__init__(name, url, **kwargs)
        self._adapter = adapter

    async def fetch(self) -> List[GolferScore]:
        response = await self._get()
        if looks_like_html(response):
            raise SourceError(f"{self.name} returned markup instead of JSON")
        try:
            payload = response.json()
        except ValueError as exc:
            raise SourceError(f"{self.name} returned unparsable JSON") from exc
        try:
            records = self._adapter(payload)
        except (ArithmeticError, AttributeError, KeyError, IndexError, TypeError, ValueError) as exc:
            raise SourceError(f"{self.name} payload has an unexpected shape: {exc}") from exc
        return self._require_records(records)


class MastersScrapeSource(HttpSource):
    """Scrapes the official scores page."""

    def __init__(self, url: str = MASTERS_LEADERBOARD_URL, **kwargs: Any) -> None:
        super().__init__("masters-scraper", url, **kwargs)

    async def fetch(self) -> List[GolferScore]:
        response = await self._get()
        records = normalize.from_masters_html(response.text)
        return self._require_records(records)


class GoogleSheetSource(JsonApiSource):
    """Hand-maintained backup leaderboard in a Google Sheet tab."""

    def __init__(
        self,
        doc_id: str = GOOGLE_SHEETS_DOC_ID,
        api_key: str = GOOGLE_SHEETS_API_KEY,
        tab: str = GOOGLE_SHEETS_LEADERBOARD_TAB,
        **kwargs: Any,
    ) -> None:
        url = f"{SHEETS_API_BASE}/{doc_id}/values/{quote(tab)}"
        super().__init__(
            "google-sheets",
            url,
            lambda payload: normalize.from_sheet_rows(payload.get("values") or []),
            params={"key": api_key},
            **kwargs,
        )


class StaticSource(ScoreSource):
    """Fixed in-memory dataset; backs the emergency tier."""

    def __init__(self, rows: Sequence[Mapping[str, Any]], name: str = MOCK_DATA_TAG) -> None:
        self.name = name
        self._records = normalize.from_records(rows)

    async def fetch(self) -> List[GolferScore]:
        if not self._records:
            raise SourceError(f"{self.name} has no records")
        return list(self._records)


def espn_source(**kwargs: Any) -> JsonApiSource:
    return JsonApiSource("espn-api", ESPN_LEADERBOARD_URL, normalize.from_espn, **kwargs)


def pga_tour_source(**kwargs: Any) -> JsonApiSource:
    return JsonApiSource("pgatour-api", PGATOUR_LEADERBOARD_URL, normalize.from_pga_tour, **kwargs)


def sportsdata_source(api_key: str = SPORTS_API_KEY, **kwargs: Any) -> JsonApiSource:
    headers = {
        "X-RapidAPI-Key": api_key,
        "X-RapidAPI-Host": httpx.URL(SPORTS_API_URL).host,
    }
    return JsonApiSource(
        "sportsdata-api", SPORTS_API_URL, normalize.from_sportsdata, headers=headers, **kwargs
    )


SOURCE_FACTORIES: Dict[str, Callable[..., ScoreSource]] = {
    "masters-scraper": MastersScrapeSource,
    "espn-api": espn_source,
    "pgatour-api": pga_tour_source,
    "sportsdata-api": sportsdata_source,
    "google-sheets": GoogleSheetSource,
}


def build_sources(names: Sequence[str], **kwargs: Any) -> List[ScoreSource]:
    """Instantiate live sources in the given priority order."""

    sources: List[ScoreSource] = []
    for name in names:
        factory = SOURCE_FACTORIES.get(name)
        if factory is None:
            logger.warning("Unknown score source '%s' in SCORE_SOURCES, skipping", name)
            continue
        if name == "sportsdata-api" and not SPORTS_API_KEY:
            logger.info("Skipping sportsdata-api: SPORTS_API_KEY is not set")
            continue
        if name == "google-sheets" and not (GOOGLE_SHEETS_DOC_ID and GOOGLE_SHEETS_API_KEY):
            logger.info("Skipping google-sheets: sheet id or API key is not set")
            continue
        sources.append(factory(**kwargs))
    return sources


__all__ = [
    "CACHED_DATA_TAG",
    "GoogleSheetSource",
    "HttpSource",
    "JsonApiSource",
    "MOCK_DATA_TAG",
    "MastersScrapeSource",
    "ScoreSource",
    "SourceError",
    "StaticSource",
    "build_sources",
    "espn_source",
    "looks_like_html",
    "pga_tour_source",
    "sportsdata_source",
]
