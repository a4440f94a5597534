"""
Keystroke normalization for the score text field.

A field value is in one of three states:

- ``None``: the box is empty
- ``str``: a partially typed number such as ``"1."`` or ``"15"``
- ``float``: a finished number within the score bounds

Range checks on partial strings are left to submission validation.
"""

from __future__ import annotations

import re
from typing import Optional

from ..core.models import ScoreValue

DIGITS = frozenset("0123456789")

COMPLETE_SCORE = re.compile(r"[0-9]+\.[0-9]+")
PARTIAL_SCORE = re.compile(r"[0-9]+\.?[0-9]*")

SCORE_MIN = 0.0
SCORE_MAX = 10.0


def filter_score_chars(value: str) -> str:
    """
    Drop everything except digits and a single decimal point.

    The point is kept only when it is not the first character and no
    earlier point appears in ``value``.
    """
    kept = []
    for index, char in enumerate(value):
        if char in DIGITS:
            kept.append(char)
        elif char == "." and index > 0 and "." not in value[:index]:
            kept.append(char)
    return "".join(kept)


def normalize_score_input(
    raw: str,
    current: ScoreValue = None,
    score_min: float = SCORE_MIN,
    score_max: float = SCORE_MAX,
) -> ScoreValue:
    """
    Apply one edit of the score box and return the new field value.

    Args:
        raw: Full text of the box after the edit
        current: Field value before the edit, returned when the edit is rejected
        score_min: Lowest finished score accepted
        score_max: Highest finished score accepted

    Returns:
        None, a partial string, or a finished float
    """
    value = raw.replace(",", ".", 1)

    if value == "":
        return None

    filtered = filter_score_chars(value)

    if COMPLETE_SCORE.fullmatch(filtered):
        number = float(filtered)
        if score_min <= number <= score_max:
            return number

    if PARTIAL_SCORE.fullmatch(filtered):
        return filtered

    return current


def display_score(value: ScoreValue) -> str:
    """
    Text shown in the score box for a stored field value.

    Finalized whole numbers keep one decimal place: typing ``7.0`` leaves
    ``7.0`` in the box, not ``7``, and 10.0 shows as ``10.0``.
    """
    if value is None:
        return ""
    if isinstance(value, float):
        return _format_number(value)
    return str(value)


def _format_number(value: float) -> str:
    if value.is_integer():
        return f"{value:.1f}"
    return repr(value)


def parse_score(value: ScoreValue) -> Optional[float]:
    """Numeric value of a field, or None when empty or unparseable."""
    if value is None:
        return None
    if isinstance(value, (int, float)):
        return float(value)
    try:
        return float(value)
    except ValueError:
        return None
