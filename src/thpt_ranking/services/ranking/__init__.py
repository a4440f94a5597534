"""
Ranking Service for THPT Ranking.

Usage:
    from thpt_ranking.services.ranking import RankingService

    service = RankingService(LookupProvider(db))
    batch = await service.resolve(entries)
"""

from .service import ClosestScoresProvider, RankingService, group_by_year

__all__ = [
    "ClosestScoresProvider",
    "RankingService",
    "group_by_year",
]
