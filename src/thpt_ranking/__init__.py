"""
THPT Ranking Estimator

Estimates where a THPT exam score ranks within its subject combination by
interpolating between the two nearest published (score, ranking) records.

Key Features:
- Linear interpolation between bracketing records
- Concurrent batch lookups over an async PostgreSQL pool
- Keystroke-level score normalization and submission validation
- Cached year/combination catalogs

Usage:
    from thpt_ranking import RankingService, LookupProvider, get_async_db

    db = await get_async_db()
    service = RankingService(LookupProvider(db))
    batch = await service.resolve_payload(
        {"entries": [{"year": 2024, "combination": "A00", "score": 8.5}]}
    )
"""

from .cache import TTLCache, get_cache
from .core.models import (
    BatchResult,
    BracketPair,
    BracketRecord,
    CatalogOption,
    Entry,
    PercentileResult,
)
from .form import (
    EmptyBatchError,
    EntryForm,
    FormError,
    SubmissionError,
    normalize_score_input,
    validate_submission,
)
from .percentiles import estimate
from .pg_async import AsyncPostgresDB, get_async_db
from .queries import LookupProvider
from .services.ranking import RankingService

__all__ = [
    # Cache
    "TTLCache",
    "get_cache",
    # Models
    "BatchResult",
    "BracketPair",
    "BracketRecord",
    "CatalogOption",
    "Entry",
    "PercentileResult",
    # Form
    "EmptyBatchError",
    "EntryForm",
    "FormError",
    "SubmissionError",
    "normalize_score_input",
    "validate_submission",
    # Estimation
    "estimate",
    "RankingService",
    # Database
    "AsyncPostgresDB",
    "get_async_db",
    "LookupProvider",
]
