"""
Submission-time validation of the entry form.

Field errors are flattened into an ordered list of human-readable
messages so the caller can join them for a single notification.
"""

from __future__ import annotations

import math
import re
from typing import Any, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..core.models import Entry
from .score_input import SCORE_MAX, SCORE_MIN

SCORE_FORMAT = re.compile(r"^\d+\.?\d*$", re.ASCII)

EMPTY_BATCH_MESSAGE = "Please fill in at least one valid entry."


class SubmissionError(Exception):
    """Raised when a submitted form fails validation."""

    def __init__(self, messages: list[str]):
        self.messages = messages
        super().__init__(self.description)

    @property
    def description(self) -> str:
        return "\n".join(self.messages)


class EmptyBatchError(Exception):
    """Raised when no entry is complete enough to look up."""

    def __init__(self, message: str = EMPTY_BATCH_MESSAGE):
        self.message = message
        super().__init__(message)


def _check_score_range(value: float) -> None:
    if value < SCORE_MIN:
        raise ValueError(f"Score must be at least {SCORE_MIN:g}")
    if value > SCORE_MAX:
        raise ValueError(f"Score must be at most {SCORE_MAX:g}")


class EntrySchema(BaseModel):
    model_config = ConfigDict(validate_default=True)

    year: Any = None
    combination: Any = None
    score: Union[float, str, None] = None

    @field_validator("year", mode="before")
    @classmethod
    def check_year(cls, value: Any) -> int:
        if value is None:
            raise ValueError("Year is required")
        if isinstance(value, float) and value.is_integer():
            return int(value)
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError("Year must be a number")
        return value

    @field_validator("combination", mode="before")
    @classmethod
    def check_combination(cls, value: Any) -> str:
        if value is None or not isinstance(value, str):
            raise ValueError("Combination is required")
        return value

    @field_validator("score", mode="before")
    @classmethod
    def check_score(cls, value: Any) -> Union[float, str, None]:
        if value is None:
            return None
        if isinstance(value, bool):
            raise ValueError("Score must be a number")
        if isinstance(value, (int, float)):
            if not math.isfinite(value):
                raise ValueError("Score must be a number")
            _check_score_range(float(value))
            return float(value)
        if isinstance(value, str):
            if not SCORE_FORMAT.match(value):
                raise ValueError("Invalid score format")
            _check_score_range(float(value))
            return value
        raise ValueError("Score must be a number")


class FormSchema(BaseModel):
    model_config = ConfigDict(validate_default=True)

    entries: list[EntrySchema] = Field(default_factory=list)

    @field_validator("entries")
    @classmethod
    def check_entries(cls, value: list[EntrySchema]) -> list[EntrySchema]:
        if len(value) < 1:
            raise ValueError("At least one entry is required")
        return value


def collect_messages(error: ValidationError) -> list[str]:
    """Ordered, de-duplicated messages from a pydantic validation error."""
    messages: list[str] = []
    for item in error.errors():
        message = item.get("ctx", {}).get("error")
        text = str(message) if message is not None else item["msg"]
        if text not in messages:
            messages.append(text)
    return messages


def validate_submission(payload: dict[str, Any]) -> list[Entry]:
    """
    Validate a raw form payload.

    Args:
        payload: ``{"entries": [{"year": ..., "combination": ..., "score": ...}]}``

    Returns:
        Entries in submission order

    Raises:
        SubmissionError: With every field-level message, in order
    """
    try:
        form = FormSchema.model_validate(payload)
    except ValidationError as e:
        raise SubmissionError(collect_messages(e)) from e

    return [
        Entry(year=item.year, combination=item.combination, score=item.score)
        for item in form.entries
    ]


def complete_entries(entries: list[Entry]) -> list[tuple[int, Entry]]:
    """
    Entries with year, combination and score all present, with their positions.

    Raises:
        EmptyBatchError: If no entry is complete
    """
    indexed = [(index, entry) for index, entry in enumerate(entries) if entry.is_complete]
    if not indexed:
        raise EmptyBatchError()
    return indexed

