"""
Ranking router - turns submitted entries into ranking estimates.

Endpoints:
- POST /estimate - Validate a batch of entries and estimate each ranking
- POST /score-input - Apply one keystroke to a score field
"""

import logging
from typing import Annotated, Any, Union

from fastapi import APIRouter, Body
from pydantic import BaseModel

from ..dependencies import RankingDependency
from ..errors import from_empty_batch, from_submission_error
from ...form import (
    EmptyBatchError,
    SubmissionError,
    display_score,
    normalize_score_input,
)

logger = logging.getLogger(__name__)

router = APIRouter()


class ScoreInputRequest(BaseModel):
    raw: str
    current: Union[float, str, None] = None


@router.post("/estimate")
async def estimate_batch(
    payload: Annotated[dict[str, Any], Body(description="{'entries': [{year, combination, score}]}")],
    service: RankingDependency,
) -> dict[str, Any]:
    """
    Estimate rankings for every complete entry.

    Entries whose lookup does not return exactly two bracketing records
    are omitted from ``results``.
    """
    try:
        batch = await service.resolve_payload(payload)
    except SubmissionError as e:
        logger.info("Rejected submission: %s", e.messages)
        raise from_submission_error(e) from e
    except EmptyBatchError as e:
        raise from_empty_batch(e) from e

    return batch.model_dump()


@router.post("/score-input")
async def score_input(request: ScoreInputRequest) -> dict[str, Any]:
    value = normalize_score_input(request.raw, current=request.current)
    return {
        "value": value,
        "display": display_score(value),
        "final": isinstance(value, float),
    }
