"""
Percentile estimation for THPT exam scores.

Usage:
    from thpt_ranking.percentiles import estimate

    ranking = estimate(20.25, lower, higher)
"""

from .estimator import SCORE_GRANULARITY, estimate, estimate_pair, ranking_step_per_tenth

__all__ = [
    "SCORE_GRANULARITY",
    "estimate",
    "estimate_pair",
    "ranking_step_per_tenth",
]
