"""Tests for timestamp matching against compiled grammars."""

import pytest
from datetime import datetime

from cronflow.grammar.compiler import compile_field, compile_grammar
from cronflow.grammar.matcher import field_matches, matches, python_weekday_to_grammar
from cronflow.models.grammar import GrammarField

MONDAY = datetime(2024, 1, 1, 14, 30)
FRIDAY = datetime(2024, 1, 5, 14, 30)
SATURDAY = datetime(2024, 1, 6, 14, 30)
SUNDAY = datetime(2024, 1, 7, 14, 30)


class TestWeekdayNumbering:
    """Test conversion to Sunday=0 weekday numbers."""

    @pytest.mark.parametrize(
        "moment,expected",
        [(SUNDAY, 0), (MONDAY, 1), (FRIDAY, 5), (SATURDAY, 6)],
    )
    def test_python_weekday_to_grammar(self, moment, expected):
        assert python_weekday_to_grammar(moment) == expected


class TestFieldMatches:
    """Test field_matches() per field variant."""

    def test_any(self):
        assert field_matches(17, compile_field("*", GrammarField.MINUTE), GrammarField.MINUTE)

    def test_value(self):
        spec = compile_field("5", GrammarField.HOUR)
        assert field_matches(5, spec, GrammarField.HOUR)
        assert not field_matches(6, spec, GrammarField.HOUR)

    def test_range_is_inclusive(self):
        spec = compile_field("9-17", GrammarField.HOUR)
        assert field_matches(9, spec, GrammarField.HOUR)
        assert field_matches(17, spec, GrammarField.HOUR)
        assert not field_matches(18, spec, GrammarField.HOUR)

    def test_step_counts_from_domain_start(self):
        spec = compile_field("*/15", GrammarField.MINUTE)
        assert [m for m in range(60) if field_matches(m, spec, GrammarField.MINUTE)] == [0, 15, 30, 45]

    def test_month_step_counts_from_january(self):
        spec = compile_field("*/3", GrammarField.MONTH)
        assert [m for m in range(1, 13) if field_matches(m, spec, GrammarField.MONTH)] == [1, 4, 7, 10]

    def test_range_step(self):
        spec = compile_field("9-17/4", GrammarField.HOUR)
        assert [h for h in range(24) if field_matches(h, spec, GrammarField.HOUR)] == [9, 13, 17]

    def test_range_step_past_domain_only_hits_real_values(self):
        spec = compile_field("0-99/20", GrammarField.MINUTE)
        assert [m for m in range(60) if field_matches(m, spec, GrammarField.MINUTE)] == [0, 20, 40]

    def test_inverted_range_step_never_matches(self):
        spec = compile_field("17-9/2", GrammarField.HOUR)
        assert not any(field_matches(h, spec, GrammarField.HOUR) for h in range(24))

    def test_list(self):
        spec = compile_field("1,15", GrammarField.DAY_OF_MONTH)
        assert field_matches(15, spec, GrammarField.DAY_OF_MONTH)
        assert not field_matches(14, spec, GrammarField.DAY_OF_MONTH)


class TestSundayAlias:
    """Test weekday 0 and 7 both mean Sunday for values and lists only."""

    @pytest.mark.parametrize("token", ["0", "7", "7,3", "0,3"])
    def test_value_and_list_alias(self, token):
        spec = compile_grammar(f"30 14 * * {token}")
        assert matches(SUNDAY, spec)

    def test_seven_does_not_match_other_days(self):
        spec = compile_grammar("30 14 * * 7")
        assert not matches(SATURDAY, spec)
        assert not matches(MONDAY, spec)

    def test_range_does_not_alias(self):
        """Test '5-7' covers Friday and Saturday but not Sunday (weekday 0)."""
        spec = compile_grammar("30 14 * * 5-7")
        assert matches(FRIDAY, spec)
        assert matches(SATURDAY, spec)
        assert not matches(SUNDAY, spec)


class TestMatches:
    """Test matches() on whole grammars."""

    def test_monday_and_friday_afternoon(self):
        spec = compile_grammar("30 14 * * 1,5")
        assert matches(MONDAY, spec)
        assert matches(FRIDAY, spec)
        assert not matches(SATURDAY, spec)
        assert not matches(datetime(2024, 1, 2, 14, 30), spec)
        assert not matches(datetime(2024, 1, 1, 14, 31), spec)
        assert not matches(datetime(2024, 1, 1, 15, 30), spec)

    def test_seconds_are_ignored(self):
        spec = compile_grammar("30 14 * * 1,5")
        assert matches(datetime(2024, 1, 1, 14, 30, 59, 999), spec)

    def test_day_and_month(self):
        spec = compile_grammar("0 0 1 */3 *")
        assert matches(datetime(2024, 4, 1, 0, 0), spec)
        assert not matches(datetime(2024, 5, 1, 0, 0), spec)
        assert not matches(datetime(2024, 4, 2, 0, 0), spec)

    def test_every_minute(self):
        spec = compile_grammar("* * * * *")
        assert matches(datetime(2031, 7, 19, 3, 7), spec)
