"""Entry form: keystroke normalization, row state and submission validation."""

from .entries import EntryForm, FormError
from .score_input import display_score, normalize_score_input, parse_score
from .validation import (
    EMPTY_BATCH_MESSAGE,
    EmptyBatchError,
    SubmissionError,
    complete_entries,
    validate_submission,
)

__all__ = [
    "EntryForm",
    "FormError",
    "display_score",
    "normalize_score_input",
    "parse_score",
    "EMPTY_BATCH_MESSAGE",
    "EmptyBatchError",
    "SubmissionError",
    "complete_entries",
    "validate_submission",
]
