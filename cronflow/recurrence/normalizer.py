"""Lexical normalization of schedule text.

Number words become digits first, so that "every five minutes" reads as "every 5 minutes"
before any synonym folding or interval pattern sees it.
"""

from __future__ import annotations

import re
from typing import Tuple

from cronflow.models.constants import WORD_NUMBERS

_WORD_NUMBER_PATTERNS: Tuple[Tuple[re.Pattern, str], ...] = tuple(
    (re.compile(rf"\b{word}\b", re.I), str(number)) for word, number in WORD_NUMBERS.items()
)

# Applied in order after number words.
_PHRASE_FOLDS: Tuple[Tuple[re.Pattern, str], ...] = (
    (re.compile(r"\bbusiness\s+days?\b", re.I), "weekdays"),
    (re.compile(r"\bwork\s+days?\b", re.I), "weekdays"),
    (re.compile(r"\bweek\s+days?\b", re.I), "weekdays"),
    (re.compile(r"\bmon-fri\b", re.I), "monday to friday"),
    (re.compile(r"\bdaily\b", re.I), "every day"),
    (re.compile(r"\bhourly\b", re.I), "every hour"),
    (re.compile(r"\bevery\s+other\b", re.I), "every 2"),
    # "a couple of hours" -> "a couple hours"
    (re.compile(r"\bof\s+(minutes?|hours?|days?|weeks?|months?)\b", re.I), r"\1"),
)


def replace_number_words(text: str) -> str:
    for pattern, digits in _WORD_NUMBER_PATTERNS:
        text = pattern.sub(digits, text)
    return text


def normalize_text(text: str) -> str:
    """Canonicalize free text for intent extraction.

    Args:
        text: Raw user text

    Returns:
        Lower-cased, trimmed text with number words as digits and synonyms folded
    """
    normalized = (text or "").lower().strip()
    normalized = replace_number_words(normalized)
    for pattern, replacement in _PHRASE_FOLDS:
        normalized = pattern.sub(replacement, normalized)
    return normalized
