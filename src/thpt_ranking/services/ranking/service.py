"""
Ranking Service implementation.

Resolves a batch of entries into ranking estimates: incomplete entries are
skipped, the remaining lookups run concurrently, and every entry whose
lookup returns exactly two bracketing records yields one result.
"""

import asyncio
import logging
from typing import Any, Optional, Protocol

from ...core.models import BatchResult, BracketPair, BracketRecord, Entry, PercentileResult
from ...form.score_input import parse_score
from ...form.validation import complete_entries, validate_submission
from ...percentiles import estimate_pair

logger = logging.getLogger(__name__)


class ClosestScoresProvider(Protocol):
    """Anything that can look up the records bracketing a score."""

    async def get_closest_scores(
        self, year: int, combination: str, score: float
    ) -> list[BracketRecord]: ...


def group_by_year(results: list[PercentileResult]) -> dict[int, list[PercentileResult]]:
    """Group results per year, newest year first, keeping entry order within a year."""
    grouped: dict[int, list[PercentileResult]] = {}
    for result in sorted(results, key=lambda r: r.year, reverse=True):
        grouped.setdefault(result.year, []).append(result)
    return grouped


class RankingService:
    """
    Batch ranking estimation.

    Features:
    - Concurrent lookups via asyncio.gather
    - Results keyed by entry position, so entries sharing a year stay distinct
    - Ambiguous or failed lookups are dropped without failing the batch
    """

    def __init__(self, provider: ClosestScoresProvider):
        """
        Initialize ranking service.

        Args:
            provider: Source of bracketing records
        """
        self._provider = provider

    async def _resolve_one(self, index: int, entry: Entry) -> Optional[PercentileResult]:
        score = parse_score(entry.score)
        if score is None:
            logger.debug("Entry %d has unparseable score %r", index, entry.score)
            return None

        records = await self._provider.get_closest_scores(entry.year, entry.combination, score)
        pair = BracketPair.from_records(records)
        if pair is None:
            logger.debug(
                "Entry %d (%s/%s/%s): %d bracketing records, skipping",
                index,
                entry.year,
                entry.combination,
                score,
                len(records),
            )
            return None

        return PercentileResult(
            index=index,
            year=entry.year,
            combination=entry.combination,
            score=score,
            percentage=estimate_pair(score, pair),
        )

    async def resolve(self, entries: list[Entry]) -> BatchResult:
        """
        Estimate rankings for a batch of entries.

        Args:
            entries: Entries in submission order

        Returns:
            BatchResult with results in entry order and grouped by year

        Raises:
            EmptyBatchError: If no entry is complete (no lookups are made)
        """
        indexed = complete_entries(entries)

        resolved = await asyncio.gather(
            *[self._resolve_one(index, entry) for index, entry in indexed]
        )
        results = [result for result in resolved if result is not None]

        logger.info(
            "Resolved %d of %d complete entries (%d submitted)",
            len(results),
            len(indexed),
            len(entries),
        )

        return BatchResult(
            results=results,
            by_year=group_by_year(results),
            submitted=len(entries),
            resolved=len(results),
        )

    async def resolve_payload(self, payload: dict[str, Any]) -> BatchResult:
        """
        Validate a raw form payload, then resolve it.

        Raises:
            SubmissionError: If any field fails validation
            EmptyBatchError: If no entry is complete
        """
        entries = validate_submission(payload)
        return await self.resolve(entries)
