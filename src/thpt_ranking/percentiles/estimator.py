"""
Ranking estimation by linear interpolation between bracketing records.

Scores sit on a 0-10 scale per subject while the source data publishes
cumulative rankings per 0.1 point, hence the factor of 10 in the step.
"""

from __future__ import annotations

from ..core.models import BracketPair, BracketRecord

SCORE_GRANULARITY = 10


def ranking_step_per_tenth(lower: BracketRecord, higher: BracketRecord) -> float:
    """
    Ranking change per unit of target score between two records.

    Raises:
        ValueError: If both records carry the same score
    """
    score_step = higher.score - lower.score
    if score_step == 0:
        raise ValueError(
            f"Bracketing records share score {lower.score}; cannot interpolate"
        )
    return (higher.ranking - lower.ranking) / (SCORE_GRANULARITY * score_step)


def estimate(target_score: float, lower: BracketRecord, higher: BracketRecord) -> float:
    """
    Estimate the ranking of ``target_score``.

    The target need not lie between the two scores; values outside the
    bracket are extrapolated along the same line.

    Args:
        target_score: Score being ranked
        lower: Record with the lower score
        higher: Record with the higher score

    Returns:
        Estimated ranking position (not rounded, not bounded)
    """
    step = ranking_step_per_tenth(lower, higher)
    return lower.ranking + (target_score - lower.score) * step


def estimate_pair(target_score: float, pair: BracketPair) -> float:
    """Estimate against an already validated pair."""
    return estimate(target_score, pair.lower, pair.higher)
