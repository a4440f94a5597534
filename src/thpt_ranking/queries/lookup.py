"""
Read-only lookups against the exam score tables.

Catalog reads are cached for ``cache_ttl_catalog`` seconds. Closest-score
lookups are never cached and never raise: a database error is logged and
reported as "no data".
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Optional

from ..cache import TTLCache, get_cache
from ..core.models import BracketRecord, CatalogOption

if TYPE_CHECKING:
    from ..pg_async import AsyncPostgresDB

logger = logging.getLogger(__name__)

UNIQUE_YEARS_QUERY = "SELECT year AS value FROM unique_years ORDER BY year DESC"

UNIQUE_COMBINATIONS_QUERY = (
    "SELECT combination AS value FROM unique_combinations ORDER BY combination ASC"
)

CLOSEST_SCORES_QUERY = """
    SELECT year, combination, score, ranking_in_combination
    FROM get_closest_scores(
        input_combination => %s,
        input_score => %s,
        input_year => %s
    )
"""


class LookupProvider:
    """Catalog and bracketing-record queries."""

    def __init__(self, db: "AsyncPostgresDB", cache: Optional[TTLCache] = None):
        self.db = db
        self.cache = cache or get_cache()

    async def _cached_catalog(self, name: str, query: str) -> list[CatalogOption]:
        cached = self.cache.get(name)
        if cached is not None:
            return cached

        try:
            rows = await self.db.fetchall(query)
        except Exception as e:
            logger.warning("Catalog query %s failed: %s", name, e)
            return []

        options = [CatalogOption.from_value(row["value"]) for row in rows]
        self.cache.set(options, name)
        logger.info("Loaded %d %s entries", len(options), name)
        return options

    async def get_unique_years(self) -> list[CatalogOption]:
        """Distinct exam years, newest first."""
        return await self._cached_catalog("unique_years", UNIQUE_YEARS_QUERY)

    async def get_unique_combinations(self) -> list[CatalogOption]:
        """Distinct combination identifiers, alphabetical."""
        return await self._cached_catalog("unique_combinations", UNIQUE_COMBINATIONS_QUERY)

    async def get_closest_scores(
        self,
        year: int,
        combination: str,
        score: float,
    ) -> list[BracketRecord]:
        """
        Records whose scores bracket ``score`` for one year and combination.

        Args:
            year: Exam year
            combination: Combination identifier
            score: Target score

        Returns:
            At most two records ordered by score, or an empty list on error
        """
        try:
            rows = await self.db.fetchall(CLOSEST_SCORES_QUERY, (combination, score, year))
        except Exception as e:
            logger.warning(
                "get_closest_scores failed for %s/%s/%s: %s", year, combination, score, e
            )
            return []

        return [_to_record(row) for row in rows]


def _to_record(row: dict[str, Any]) -> BracketRecord:
    return BracketRecord(
        year=row["year"],
        combination=row["combination"],
        score=float(row["score"]),
        ranking_in_combination=float(row["ranking_in_combination"]),
    )
