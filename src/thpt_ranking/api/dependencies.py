"""
Dependency injection for API endpoints.

Routes depend on ``get_lookup_provider`` rather than on the database
directly, so tests can swap in an in-memory provider through
``app.dependency_overrides``.
"""

import logging
from typing import Annotated

from fastapi import Depends

from ..pg_async import AsyncPostgresDB, get_async_db
from ..queries import LookupProvider
from ..services.ranking import RankingService
from .errors import ServiceUnavailableError

logger = logging.getLogger(__name__)


async def get_db() -> AsyncPostgresDB:
    """
    Dependency that provides the async database connection.

    Raises:
        ServiceUnavailableError: If the database is not configured or unreachable
    """
    try:
        return await get_async_db()
    except Exception as e:
        logger.error("Database unavailable: %s", e)
        raise ServiceUnavailableError("database") from e


DBDependency = Annotated[AsyncPostgresDB, Depends(get_db)]


async def get_lookup_provider(db: DBDependency) -> LookupProvider:
    return LookupProvider(db)


LookupDependency = Annotated[LookupProvider, Depends(get_lookup_provider)]


async def get_ranking_service(provider: LookupDependency) -> RankingService:
    return RankingService(provider)


RankingDependency = Annotated[RankingService, Depends(get_ranking_service)]
