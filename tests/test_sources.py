import httpx
import pytest

from golf_pool.services import sources
from golf_pool.services.emergency import EMERGENCY_LEADERBOARD
from golf_pool.services.sources import (
    JsonApiSource,
    MastersScrapeSource,
    SourceError,
    StaticSource,
    build_sources,
)

from payloads import ESPN_PAYLOAD, MASTERS_TABLE


def transport(handler):
    return httpx.MockTransport(handler)


def espn(handler) -> JsonApiSource:
    return sources.espn_source(transport=transport(handler))


async def test_json_source_returns_normalized_records():
    source = espn(lambda request: httpx.Response(200, json=ESPN_PAYLOAD))

    records = await source.fetch()

    assert [record.name for record in records] == ["Ludvig Aberg", "Jon Rahm"]


async def test_json_source_sends_no_cache_header():
    seen = {}

    def handler(request):
        seen.update(request.headers)
        return httpx.Response(200, json=ESPN_PAYLOAD)

    await espn(handler).fetch()

    assert seen["cache-control"] == "no-cache"


async def test_html_instead_of_json_is_a_failure():
    source = espn(
        lambda request: httpx.Response(
            200, text="<!DOCTYPE html><html>Access denied</html>", headers={"content-type": "text/html"}
        )
    )

    with pytest.raises(SourceError, match="markup"):
        await source.fetch()


async def test_html_body_with_json_content_type_is_a_failure():
    source = espn(
        lambda request: httpx.Response(
            200, text="  <html>maintenance</html>", headers={"content-type": "application/json"}
        )
    )

    with pytest.raises(SourceError):
        await source.fetch()


async def test_empty_leaderboard_is_a_failure():
    source = espn(lambda request: httpx.Response(200, json={"events": []}))

    with pytest.raises(SourceError, match="empty"):
        await source.fetch()


async def test_server_error_raises_http_error():
    source = espn(lambda request: httpx.Response(500, text="oops"))

    with pytest.raises(httpx.HTTPStatusError):
        await source.fetch()


async def test_unexpected_shape_is_a_failure():
    source = sources.pga_tour_source(
        transport=transport(lambda request: httpx.Response(200, json={"unexpected": True}))
    )

    with pytest.raises(SourceError, match="unexpected shape"):
        await source.fetch()


async def test_non_finite_score_does_not_break_the_payload():
    body = '{"leaderboard":{"players":[{"player_name":"A","position":1,"total_to_par":Infinity}]}}'
    source = sources.sportsdata_source(
        api_key="k",
        transport=transport(
            lambda request: httpx.Response(200, text=body, headers={"content-type": "application/json"})
        ),
    )

    records = await source.fetch()

    assert [(record.name, record.score) for record in records] == [("A", 0)]


async def test_masters_scraper_parses_page():
    source = MastersScrapeSource(
        transport=transport(lambda request: httpx.Response(200, text=MASTERS_TABLE))
    )

    records = await source.fetch()

    assert source.name == "masters-scraper"
    assert records[0].name == "Scottie Scheffler"


async def test_static_source_serves_emergency_rows():
    records = await StaticSource(EMERGENCY_LEADERBOARD).fetch()

    assert len(records) == len(EMERGENCY_LEADERBOARD)


async def test_static_source_without_rows_fails():
    with pytest.raises(SourceError):
        await StaticSource([]).fetch()


def test_build_sources_keeps_priority_and_skips_unknown_or_unconfigured(monkeypatch):
    monkeypatch.setattr(sources, "SPORTS_API_KEY", "")

    built = build_sources(["espn-api", "nope", "masters-scraper", "sportsdata-api"])

    assert [source.name for source in built] == ["espn-api", "masters-scraper"]
