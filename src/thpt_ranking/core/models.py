"""
Pydantic models for exam score records and ranking estimates.

These models are used for:
- Type-safe rows read from ``diem_thpt_quoc_gia``
- Batch resolution inputs and outputs
- API response serialization
"""

from __future__ import annotations

from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field

ScoreValue = Union[float, str, None]


# =============================================================================
# Database Records
# =============================================================================


class BracketRecord(BaseModel):
    """One known (score, cumulative ranking) point for a year and combination."""

    model_config = ConfigDict(frozen=True)

    year: int
    combination: str
    score: float
    ranking_in_combination: float

    @property
    def ranking(self) -> float:
        return self.ranking_in_combination


class BracketPair(BaseModel):
    """
    Two records that straddle a target score, lower score first.

    Build through ``from_records`` so the ordering and distinct-score
    invariants always hold.
    """

    model_config = ConfigDict(frozen=True)

    lower: BracketRecord
    higher: BracketRecord

    @classmethod
    def from_records(cls, records: list[BracketRecord]) -> Optional["BracketPair"]:
        """
        Build a pair from a lookup result.

        Returns None unless there are exactly two records with distinct scores.
        """
        if len(records) != 2:
            return None
        first, second = sorted(records, key=lambda r: r.score)
        if first.score == second.score:
            return None
        return cls(lower=first, higher=second)


# =============================================================================
# Batch Models
# =============================================================================


class Entry(BaseModel):
    """A user-submitted (year, combination, score) triple."""

    year: Optional[int] = None
    combination: Optional[str] = None
    score: ScoreValue = None

    @property
    def is_complete(self) -> bool:
        return bool(self.year) and bool(self.combination) and self.score is not None


class PercentileResult(BaseModel):
    """Estimated ranking for one resolved entry."""

    index: int = Field(description="Position of the originating entry in the batch")
    year: int
    combination: str
    score: float
    percentage: float


class BatchResult(BaseModel):
    """Results of one batch, flat and grouped by year (descending)."""

    results: list[PercentileResult] = Field(default_factory=list)
    by_year: dict[int, list[PercentileResult]] = Field(default_factory=dict)
    submitted: int = 0
    resolved: int = 0


# =============================================================================
# Catalog Models
# =============================================================================


class CatalogOption(BaseModel):
    """Label/value pair consumed by selector widgets."""

    label: str
    value: Union[int, str]

    @classmethod
    def from_value(cls, value: Union[int, str]) -> "CatalogOption":
        return cls(label=str(value), value=value)
