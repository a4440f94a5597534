"""
PostgreSQL integration tests for thpt-ranking.

These tests verify:
- Migrations create the score table, catalog views and lookup function
- get_closest_scores returns the bracketing records in score order
- End-to-end interpolation through RankingService
"""

import asyncio
import os

import pytest

pytestmark = pytest.mark.skipif(
    not os.getenv("DATABASE_URL"),
    reason="DATABASE_URL environment variable not set",
)

TEST_COMBINATION = "ZZ_TEST"

ROWS = [
    (1999, TEST_COMBINATION, 8.00, 1000),
    (1999, TEST_COMBINATION, 8.50, 800),
    (1999, TEST_COMBINATION, 9.00, 500),
]


async def _with_db(func):
    from thpt_ranking.pg_async import AsyncPostgresDB
    from thpt_ranking.schema import run_migrations

    db = AsyncPostgresDB(os.environ["DATABASE_URL"])
    await db.initialize()
    try:
        await run_migrations(db)
        await db.execute(
            "DELETE FROM diem_thpt_quoc_gia WHERE combination = %s", (TEST_COMBINATION,)
        )
        for row in ROWS:
            await db.execute(
                """
                INSERT INTO diem_thpt_quoc_gia (year, combination, score, ranking_in_combination)
                VALUES (%s, %s, %s, %s)
                """,
                row,
            )
        return await func(db)
    finally:
        await db.execute(
            "DELETE FROM diem_thpt_quoc_gia WHERE combination = %s", (TEST_COMBINATION,)
        )
        await db.close()


def test_requires_url(monkeypatch):
    from thpt_ranking.core.config import get_settings
    from thpt_ranking.pg_async import AsyncPostgresDB

    settings = get_settings()
    monkeypatch.setattr(settings, "database_url", None)
    with pytest.raises(ValueError, match="DATABASE_URL"):
        AsyncPostgresDB()


class TestClosestScores:
    def _lookup(self, score):
        from thpt_ranking.cache import TTLCache
        from thpt_ranking.queries import LookupProvider

        async def run(db):
            provider = LookupProvider(db, cache=TTLCache())
            return await provider.get_closest_scores(1999, TEST_COMBINATION, score)

        return asyncio.run(_with_db(run))

    def test_brackets_target(self):
        records = self._lookup(8.25)
        assert [(r.score, r.ranking) for r in records] == [(8.0, 1000.0), (8.5, 800.0)]

    def test_exact_score_is_lower_bound(self):
        records = self._lookup(8.5)
        assert [r.score for r in records] == [8.5, 9.0]

    def test_above_table_returns_one_record(self):
        assert len(self._lookup(9.5)) == 1

    def test_unknown_year_returns_nothing(self):
        from thpt_ranking.cache import TTLCache
        from thpt_ranking.queries import LookupProvider

        async def run(db):
            provider = LookupProvider(db, cache=TTLCache())
            return await provider.get_closest_scores(1900, TEST_COMBINATION, 8.0)

        assert asyncio.run(_with_db(run)) == []


def test_end_to_end_estimate():
    from thpt_ranking.cache import TTLCache
    from thpt_ranking.core.models import Entry
    from thpt_ranking.queries import LookupProvider
    from thpt_ranking.services.ranking import RankingService

    async def run(db):
        service = RankingService(LookupProvider(db, cache=TTLCache()))
        return await service.resolve([Entry(year=1999, combination=TEST_COMBINATION, score=8.25)])

    batch = asyncio.run(_with_db(run))
    assert batch.results[0].percentage == pytest.approx(990)
