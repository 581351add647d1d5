import math

from sqlmodel import Session

from golf_pool.core import init_db, make_engine
from golf_pool.models import CacheRecord
from golf_pool.services.cache import IGNORE_AGE, MemoryStorage, ScoreCache, SqlStorage


def test_round_trip_with_unbounded_age(cache):
    cache.set("leaderboardData", [{"name": "Rory McIlroy", "score": -7}], "espn-api")

    hit = cache.get("leaderboardData", math.inf)

    assert hit.data == [{"name": "Rory McIlroy", "score": -7}]
    assert hit.source == "espn-api"
    assert hit.age == 0


def test_missing_key_is_a_miss(cache):
    assert cache.get("leaderboardData", 60_000) is None


def test_entries_expire_after_max_age(cache, clock):
    cache.set("leaderboardData", [1, 2, 3], "masters-scraper")
    clock.advance(30)
    assert cache.get("leaderboardData", 45_000) is not None

    clock.advance(16)
    assert cache.get("leaderboardData", 45_000) is None


def test_zero_max_age_ignores_age(cache, clock):
    cache.set("leaderboardData", {"ok": True}, "masters-scraper")
    clock.advance(60 * 60 * 24 * 365)

    hit = cache.get("leaderboardData", IGNORE_AGE)

    assert hit.data == {"ok": True}
    assert hit.age == 365 * 24 * 60 * 60 * 1000


def test_corrupt_entry_is_a_miss(clock, caplog):
    storage = MemoryStorage()
    storage.write("leaderboardData", "{not json")
    storage.write("poolStandings", '{"timestamp": 1}')
    storage.write("tournamentStatus", '{"data": [], "timestamp": Infinity, "source": "x"}')
    cache = ScoreCache(storage, clock=clock)

    assert cache.get("leaderboardData", IGNORE_AGE) is None
    assert cache.get("poolStandings", IGNORE_AGE) is None
    assert cache.get("tournamentStatus", IGNORE_AGE) is None
    assert "corrupt cache entry" in caplog.text


def test_clear_removes_entry(cache):
    cache.set("tournamentStatus", True, "date-calculation")
    cache.clear("tournamentStatus")

    assert cache.get("tournamentStatus", IGNORE_AGE) is None


def test_sql_storage_persists_envelopes(clock):
    engine = make_engine("sqlite://")
    init_db(engine)
    cache = ScoreCache(SqlStorage(engine), clock=clock)

    cache.set("leaderboardData", [{"name": "Jon Rahm"}], "espn-api")
    cache.set("leaderboardData", [{"name": "Xander Schauffele"}], "masters-scraper")

    reopened = ScoreCache(SqlStorage(engine), clock=clock)
    hit = reopened.get("leaderboardData", IGNORE_AGE)
    assert hit.data == [{"name": "Xander Schauffele"}]
    assert hit.source == "masters-scraper"

    with Session(engine) as session:
        assert session.get(CacheRecord, "leaderboardData") is not None

    reopened.clear("leaderboardData")
    assert reopened.get("leaderboardData", IGNORE_AGE) is None
