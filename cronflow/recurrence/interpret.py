"""High-level translation of free text into a grammar string.

This module is the single entrypoint used by the /translate API.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Optional

from cronflow.recurrence.extractor import extract_intent
from cronflow.recurrence.fallback_parser import parse_with_regex
from cronflow.recurrence.synthesis import intent_to_grammar

logger = logging.getLogger(__name__)


class TranslationSource(str, Enum):
    """Which path produced the last grammar string."""

    EXTRACTOR = "extractor"
    FALLBACK = "fallback"


class HybridTranslator:
    """Intent extraction first, pattern fallback second.

    The fallback only runs when the extraction path produced no grammar string.
    """

    def __init__(self) -> None:
        self._last_source: Optional[TranslationSource] = None

    @property
    def last_source(self) -> Optional[TranslationSource]:
        return self._last_source

    def _translate_with_intent(self, text: str) -> Optional[str]:
        try:
            intent = extract_intent(text)
            return intent_to_grammar(intent) if intent is not None else None
        except Exception as e:
            logger.warning(f"Intent translation failed, using fallback: {type(e).__name__}: {str(e)}")
            return None

    def translate(self, text: str) -> Optional[str]:
        """Translate free text into a grammar string.

        Args:
            text: Schedule description, e.g. "every monday at 10am"

        Returns:
            Grammar string, or None when neither path understands the text
        """
        if not isinstance(text, str) or not text.strip():
            self._last_source = None
            return None

        expression = self._translate_with_intent(text)
        if expression:
            self._last_source = TranslationSource.EXTRACTOR
            return expression

        expression = parse_with_regex(text)
        if expression:
            self._last_source = TranslationSource.FALLBACK
            return expression

        logger.debug(f"Could not translate '{text}'")
        self._last_source = None
        return None
