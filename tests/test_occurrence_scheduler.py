"""Tests for next-occurrence search (deterministic behavior).

The reference instant is always injected, so results depend only on the inputs.
"""

import pytest
from datetime import datetime, timedelta, timezone

from cronflow.engine.scheduler import format_relative, next_occurrences
from cronflow.grammar.compiler import compile_grammar
from cronflow.grammar.matcher import matches


class TestNextOccurrences:
    """Test next_occurrences() search phases and bounds."""

    def test_every_five_minutes_from_fast_scan(self, fixed_now):
        """Test the minute scan finds near-term runs, excluding `now` itself."""
        spec = compile_grammar("*/5 * * * *")
        result = next_occurrences(spec, fixed_now)
        assert result == [fixed_now + timedelta(minutes=m) for m in (5, 10, 15, 20, 25)]

    def test_seconds_in_now_are_not_a_match(self, fixed_now):
        now = fixed_now.replace(second=30)
        spec = compile_grammar("*/5 * * * *")
        assert next_occurrences(spec, now, count=1) == [datetime(2024, 1, 1, 10, 5)]

    def test_weekday_mornings_fill_from_exhaustive_scan(self, fixed_now, weekday_morning_spec):
        """Test runs beyond the fast-scan window come from the 7-day scan."""
        result = next_occurrences(weekday_morning_spec, fixed_now)
        # Monday 09:30 has already passed; the weekend has no runs.
        assert result == [datetime(2024, 1, d, 9, 30) for d in (2, 3, 4, 5)]

    def test_results_are_ascending_after_now_and_matching(self, fixed_now):
        spec = compile_grammar("0,30 */6 * * *")
        result = next_occurrences(spec, fixed_now, count=10)
        assert len(result) == 10
        assert result == sorted(set(result))
        assert all(moment > fixed_now for moment in result)
        assert all(matches(moment, spec) for moment in result)

    def test_monday_and_friday(self, fixed_now):
        spec = compile_grammar("30 14 * * 1,5")
        assert next_occurrences(spec, fixed_now) == [
            datetime(2024, 1, 1, 14, 30),
            datetime(2024, 1, 5, 14, 30),
        ]

    def test_no_match_within_horizon_is_empty(self, fixed_now):
        spec = compile_grammar("0 0 1 */3 *")
        assert next_occurrences(spec, fixed_now) == []

    def test_count_limits_results(self, fixed_now):
        spec = compile_grammar("* * * * *")
        assert len(next_occurrences(spec, fixed_now, count=3)) == 3

    def test_zero_count(self, fixed_now):
        assert next_occurrences(compile_grammar("* * * * *"), fixed_now, count=0) == []

    def test_sunday_alias_in_search(self, fixed_now):
        spec = compile_grammar("0 12 * * 7")
        assert next_occurrences(spec, fixed_now) == [datetime(2024, 1, 7, 12, 0)]

    def test_keeps_timezone_of_now(self):
        now = datetime(2024, 1, 1, 10, 0, tzinfo=timezone.utc)
        result = next_occurrences(compile_grammar("0 12 * * *"), now, count=2)
        assert result == [
            datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc),
            datetime(2024, 1, 2, 12, 0, tzinfo=timezone.utc),
        ]

    def test_is_deterministic(self, fixed_now, weekday_morning_spec):
        first = next_occurrences(weekday_morning_spec, fixed_now)
        second = next_occurrences(weekday_morning_spec, fixed_now)
        assert first == second
        assert first is not second


class TestFormatRelative:
    """Test format_relative() wording."""

    @pytest.mark.parametrize(
        "delta,expected",
        [
            (timedelta(seconds=30), "in less than a minute"),
            (timedelta(minutes=1), "in 1 minute"),
            (timedelta(minutes=45), "in 45 minutes"),
            (timedelta(hours=1), "in 1 hour"),
            (timedelta(hours=5), "in 5 hours"),
            (timedelta(hours=2, minutes=30), "in 2h 30m"),
            (timedelta(days=1), "in 1 day"),
            (timedelta(days=2), "in 2 days"),
            (timedelta(days=3, hours=4), "in 3d 4h"),
        ],
    )
    def test_format_relative(self, fixed_now, delta, expected):
        assert format_relative(fixed_now + delta, fixed_now) == expected
