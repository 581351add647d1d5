from golf_pool.services.cache import IGNORE_AGE
from golf_pool.services.picks import PaymentRoster, PickRegistry, validate_entry
from golf_pool.services.pool import POOL_STANDINGS_CACHE_KEY, StandingsService
from golf_pool.services.selector import SourceSelector
from golf_pool.services.sources import MOCK_DATA_TAG, StaticSource

from conftest import StubSource, failing, rows

BOARD = rows(("A", -5), ("B", 2), ("C", -3), ("D", 0), ("E", -1), ("F", 4))


def registry(*entries):
    return PickRegistry([validate_entry(name, picks, tbs) for name, picks, tbs in entries])


def selector_for(source, cache, scheduler, clock, **kwargs):
    return SourceSelector([source], cache, scheduler, clock=clock, **kwargs)


async def test_standings_rank_against_latest_snapshot(cache, scheduler, clock):
    selector = selector_for(StubSource("espn-api", BOARD), cache, scheduler, clock)
    service = StandingsService(
        registry(
            ("Alice", ["A", "B", "C", "D", "E"], [280, 140]),
            ("Bob", ["B", "C", "D", "E", "F"], [281, 140]),
        ),
        PaymentRoster({"Alice": "yes"}),
        selector,
        cache,
    )

    snapshot = await service.current()

    assert [(p.name, p.total_score, p.position) for p in snapshot.participants] == [
        ("Alice", -9, 1),
        ("Bob", -2, 2),
    ]
    assert snapshot.participants[0].paid
    assert snapshot.source_tag == "espn-api"
    assert not snapshot.stale
    assert cache.get(POOL_STANDINGS_CACHE_KEY, IGNORE_AGE).data[0]["name"] == "Alice"


async def test_standings_follow_a_new_snapshot(cache, scheduler, clock):
    source = StubSource("espn-api", BOARD, rows(("A", -10), ("B", 2), ("C", -3), ("D", 0), ("E", -1)))
    selector = selector_for(source, cache, scheduler, clock)
    service = StandingsService(
        registry(("Alice", ["A", "B", "C", "D", "E"], [])), PaymentRoster(), selector, cache
    )

    first = await service.current()
    await selector.fetch_scores(force_refresh=True)
    second = await service.current()

    assert first.participants[0].total_score == -9
    assert second.participants[0].total_score == -14


async def test_mock_snapshot_is_labelled(cache, scheduler, clock):
    selector = selector_for(
        failing("espn-api"), cache, scheduler, clock, emergency=StaticSource(BOARD)
    )
    service = StandingsService(
        registry(("Alice", ["A", "B", "C", "D", "E"], [])), PaymentRoster(), selector, cache
    )

    snapshot = await service.current()

    assert snapshot.source_tag == MOCK_DATA_TAG
    assert snapshot.to_dict()["source"] == MOCK_DATA_TAG


async def test_empty_registry_serves_last_good_standings(cache, scheduler, clock):
    selector = selector_for(StubSource("espn-api", BOARD), cache, scheduler, clock)
    good = StandingsService(
        registry(("Alice", ["A", "B", "C", "D", "E"], [])), PaymentRoster(), selector, cache
    )
    await good.current()
    good._registry = PickRegistry([])

    snapshot = await good.current()

    assert snapshot.stale
    assert [p.name for p in snapshot.participants] == ["Alice"]


async def test_empty_registry_falls_back_to_cached_standings(cache, scheduler, clock):
    selector = selector_for(StubSource("espn-api", BOARD), cache, scheduler, clock)
    await StandingsService(
        registry(("Alice", ["A", "B", "C", "D", "E"], [])), PaymentRoster(), selector, cache
    ).current()

    fresh_process = StandingsService(PickRegistry([]), PaymentRoster(), selector, cache)
    snapshot = await fresh_process.current()

    assert snapshot.stale
    assert snapshot.participants[0].total_score == -9
    assert snapshot.last_updated.endswith("Z")


async def test_no_standings_anywhere_is_an_empty_stale_result(cache, scheduler, clock):
    selector = selector_for(StubSource("espn-api", BOARD), cache, scheduler, clock)
    service = StandingsService(PickRegistry([]), PaymentRoster(), selector, cache)

    snapshot = await service.current()

    assert snapshot.stale
    assert snapshot.participants == []
    assert snapshot.to_dict()["standings"] == []
