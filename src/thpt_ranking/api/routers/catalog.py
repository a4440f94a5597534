"""
Catalog router - serves selector options for the entry form.

Endpoints:
- GET /years - Distinct exam years, newest first
- GET /combinations - Distinct combination identifiers, alphabetical
- GET /form - Everything a client needs to render an empty form
"""

import logging
from typing import Any

from fastapi import APIRouter, Response

from ..dependencies import LookupDependency
from ..errors import ServiceUnavailableError
from ...cache import get_cache

logger = logging.getLogger(__name__)

router = APIRouter()


def _set_cache_headers(response: Response) -> None:
    ttl = get_cache().default_ttl
    response.headers["Cache-Control"] = f"public, max-age={ttl}, stale-while-revalidate={ttl // 2}"


@router.get("/years")
async def get_years(provider: LookupDependency, response: Response) -> dict[str, Any]:
    years = await provider.get_unique_years()
    _set_cache_headers(response)
    return {"years": [option.model_dump() for option in years], "count": len(years)}


@router.get("/combinations")
async def get_combinations(provider: LookupDependency, response: Response) -> dict[str, Any]:
    combinations = await provider.get_unique_combinations()
    _set_cache_headers(response)
    return {
        "combinations": [option.model_dump() for option in combinations],
        "count": len(combinations),
    }


@router.get("/form")
async def get_form_defaults(provider: LookupDependency) -> dict[str, Any]:
    """
    Catalogs plus the default first row.

    ``max_entries`` bounds the add-entry control: one row per available year.
    """
    years = await provider.get_unique_years()
    combinations = await provider.get_unique_combinations()
    if not years or not combinations:
        raise ServiceUnavailableError("catalog", "No years or combinations available")

    return {
        "years": [option.model_dump() for option in years],
        "combinations": [option.model_dump() for option in combinations],
        "default_entry": {
            "year": years[0].value,
            "combination": combinations[0].value,
            "score": None,
        },
        "max_entries": len(years),
    }
