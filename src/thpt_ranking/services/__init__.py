"""Service layer for THPT Ranking."""

from .ranking import RankingService

__all__ = ["RankingService"]
