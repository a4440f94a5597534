"""Core configuration and models for THPT Ranking."""

from .config import Settings, configure_logging, get_settings
from .models import (
    BatchResult,
    BracketPair,
    BracketRecord,
    CatalogOption,
    Entry,
    PercentileResult,
    ScoreValue,
)

__all__ = [
    "Settings",
    "configure_logging",
    "get_settings",
    "BatchResult",
    "BracketPair",
    "BracketRecord",
    "CatalogOption",
    "Entry",
    "PercentileResult",
    "ScoreValue",
]
