"""Tests for lexical normalization of schedule text."""

import pytest

from cronflow.recurrence.normalizer import normalize_text, replace_number_words


class TestReplaceNumberWords:
    """Test number-word substitution."""

    def test_whole_words_only(self):
        assert replace_number_words("every five minutes") == "every 5 minutes"
        assert replace_number_words("someone often") == "someone often"

    def test_quantity_words(self):
        assert replace_number_words("a couple hours") == "a 2 hours"
        assert replace_number_words("a few days") == "a 3 days"
        assert replace_number_words("several weeks") == "5 weeks"

    def test_tens(self):
        assert replace_number_words("every thirty minutes") == "every 30 minutes"


class TestNormalizeText:
    """Test normalize_text() end to end."""

    def test_lowercases_and_trims(self):
        assert normalize_text("  Every Monday  ") == "every monday"

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("business days at 9am", "weekdays at 9am"),
            ("every work day", "every weekdays"),
            ("week days", "weekdays"),
            ("Mon-Fri at 8", "monday to friday at 8"),
            ("daily at noon", "every day at noon"),
            ("hourly", "every hour"),
            ("every other week", "every 2 week"),
        ],
    )
    def test_phrase_folding(self, text, expected):
        assert normalize_text(text) == expected

    def test_numbers_fold_before_units(self):
        """Test "of" is dropped once the number word became a digit."""
        assert normalize_text("every couple of hours") == "every 2 hours"

    def test_empty(self):
        assert normalize_text("") == ""
