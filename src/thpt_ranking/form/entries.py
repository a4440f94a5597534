"""
State of the multi-entry form.

Mirrors the controls a client renders: one row per entry, an add button
bounded by the number of available years and a remove button that is
disabled for the last remaining row.
"""

from __future__ import annotations

import logging
from typing import Any, Union

from ..core.models import CatalogOption, Entry, ScoreValue
from .score_input import display_score, normalize_score_input

logger = logging.getLogger(__name__)


class FormError(Exception):
    """Raised when a form control is used while disabled."""


class EntryForm:
    """Editable list of entries backed by the year/combination catalogs."""

    def __init__(self, years: list[CatalogOption], combinations: list[CatalogOption]):
        if not years or not combinations:
            raise FormError("Year and combination catalogs must not be empty")

        self.years = years
        self.combinations = combinations
        self.entries: list[Entry] = [self._new_entry(0)]

    def _new_entry(self, position: int) -> Entry:
        return Entry(
            year=self.years[position].value,
            combination=str(self.combinations[0].value),
            score=None,
        )

    # =========================================================================
    # Row controls
    # =========================================================================

    @property
    def max_entries(self) -> int:
        return len(self.years)

    @property
    def can_add(self) -> bool:
        return len(self.entries) < self.max_entries

    @property
    def can_remove(self) -> bool:
        return len(self.entries) > 1

    def add_entry(self) -> Entry:
        """Append a row defaulting to the next unused year and the first combination."""
        if not self.can_add:
            raise FormError(f"At most {self.max_entries} entries are allowed")
        entry = self._new_entry(len(self.entries))
        self.entries.append(entry)
        return entry

    def remove_entry(self, index: int) -> Entry:
        if not self.can_remove:
            raise FormError("At least one entry is required")
        return self.entries.pop(index)

    # =========================================================================
    # Field edits
    # =========================================================================

    def set_year(self, index: int, value: Union[int, str]) -> None:
        self.entries[index] = self.entries[index].model_copy(update={"year": int(value)})

    def set_combination(self, index: int, value: Union[int, str]) -> None:
        self.entries[index] = self.entries[index].model_copy(update={"combination": str(value)})

    def set_score(self, index: int, raw: str) -> ScoreValue:
        """Apply a keystroke to the score box of one row and return the stored value."""
        entry = self.entries[index]
        score = normalize_score_input(raw, current=entry.score)
        self.entries[index] = entry.model_copy(update={"score": score})
        logger.debug("Score field %d: %r -> %r", index, raw, score)
        return score

    def score_text(self, index: int) -> str:
        return display_score(self.entries[index].score)

    def to_payload(self) -> dict[str, Any]:
        """Submission payload in the shape accepted by ``validate_submission``."""
        return {"entries": [entry.model_dump() for entry in self.entries]}
