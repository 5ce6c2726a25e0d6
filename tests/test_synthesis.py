"""Tests for intent -> grammar synthesis rules and their precedence."""

import pytest

from cronflow.grammar.compiler import is_valid_grammar
from cronflow.models.intent import (
    Frequency,
    FrequencyKind,
    FrequencyUnit,
    Ordinal,
    OrdinalKind,
    RecurrenceClass,
    ScheduleIntent,
    TimeOfDay,
    TimeSource,
)
from cronflow.recurrence.synthesis import SYNTHESIS_RULES, format_weekdays, intent_to_grammar


def _time(hour, minute=0):
    return TimeOfDay(hour=hour, minute=minute, source=TimeSource.REGEX)


def _interval(value, unit):
    return Frequency(kind=FrequencyKind.INTERVAL, value=value, unit=unit)


def _times_per(value, unit):
    return Frequency(kind=FrequencyKind.TIMES_PER, value=value, unit=unit)


class TestFormatWeekdays:
    """Test weekday token rendering."""

    @pytest.mark.parametrize(
        "weekdays,expected",
        [
            (None, "*"),
            ([], "*"),
            ([3], "3"),
            ([1, 2], "1,2"),
            ([1, 2, 3, 4, 5], "1-5"),
            ([0, 6], "0,6"),
            ([5, 1, 3], "1,3,5"),
            ([1, 2, 3, 5], "1,2,3,5"),
        ],
    )
    def test_format_weekdays(self, weekdays, expected):
        assert format_weekdays(weekdays) == expected


class TestRulePrecedence:
    """Test the first applicable rule decides."""

    def test_rule_table_order(self):
        assert [rule.name for rule in SYNTHESIS_RULES] == [
            "weekdays_time_months",
            "interval",
            "times_per",
            "weekly",
            "monthly",
            "daily",
            "yearly",
            "quarterly",
            "ordinal_weekday",
            "time_only",
            "weekdays_only",
        ]

    def test_weekdays_time_months_beats_interval(self):
        intent = ScheduleIntent(
            frequency=_interval(5, FrequencyUnit.MINUTE),
            weekdays=[1, 4],
            months=[1, 2, 3, 4],
            time=_time(10),
        )
        assert intent_to_grammar(intent) == "0 10 * 1,2,3,4 1,4"

    def test_deciding_rule_may_return_none(self):
        """Test an unmapped times-per count stops the search instead of falling through."""
        intent = ScheduleIntent(frequency=_times_per(4, FrequencyUnit.DAY), time=_time(8))
        assert intent_to_grammar(intent) is None

    def test_no_rule_applies(self):
        intent = ScheduleIntent(ordinal=Ordinal(value=1, kind=OrdinalKind.DAY))
        assert intent_to_grammar(intent) is None

    def test_none_intent(self):
        assert intent_to_grammar(None) is None


class TestIntervalRule:
    """Test the interval rule per unit."""

    def test_minutes(self):
        assert intent_to_grammar(ScheduleIntent(frequency=_interval(5, FrequencyUnit.MINUTE))) == "*/5 * * * *"

    def test_hours_keep_minute(self):
        intent = ScheduleIntent(frequency=_interval(2, FrequencyUnit.HOUR), time=_time(9, 15))
        assert intent_to_grammar(intent) == "15 */2 * * *"
        assert intent_to_grammar(ScheduleIntent(frequency=_interval(2, FrequencyUnit.HOUR))) == "0 */2 * * *"

    def test_days_default_to_midnight(self):
        assert intent_to_grammar(ScheduleIntent(frequency=_interval(3, FrequencyUnit.DAY))) == "0 0 */3 * *"

    def test_weeks_ignore_count(self):
        """Test "every N weeks" pins to a single weekday at 09:00 by default."""
        assert intent_to_grammar(ScheduleIntent(frequency=_interval(2, FrequencyUnit.WEEK))) == "0 9 * * 1"
        intent = ScheduleIntent(frequency=_interval(3, FrequencyUnit.WEEK), weekdays=[3, 5], time=_time(8, 30))
        assert intent_to_grammar(intent) == "30 8 * * 3"

    def test_months_use_day_of_month(self):
        intent = ScheduleIntent(frequency=_interval(2, FrequencyUnit.MONTH), day_of_month=15)
        assert intent_to_grammar(intent) == "0 0 15 */2 *"

    def test_year_interval_has_no_mapping(self):
        assert intent_to_grammar(ScheduleIntent(frequency=_interval(1, FrequencyUnit.YEAR))) is None


class TestTimesPerRule:
    """Test the fixed times-per lookup tables."""

    @pytest.mark.parametrize(
        "value,unit,expected",
        [
            (1, FrequencyUnit.DAY, "0 9 * * *"),
            (2, FrequencyUnit.DAY, "0 9,17 * * *"),
            (3, FrequencyUnit.DAY, "0 9,13,17 * * *"),
            (2, FrequencyUnit.WEEK, "0 9 * * 1,4"),
            (3, FrequencyUnit.WEEK, "0 9 * * 1,3,5"),
            (2, FrequencyUnit.MONTH, "0 9 1,15 * *"),
        ],
    )
    def test_default_morning(self, value, unit, expected):
        assert intent_to_grammar(ScheduleIntent(frequency=_times_per(value, unit))) == expected

    def test_hours_wrap_and_sort(self):
        intent = ScheduleIntent(frequency=_times_per(2, FrequencyUnit.DAY), time=_time(20, 30))
        assert intent_to_grammar(intent) == "30 4,20 * * *"
        intent = ScheduleIntent(frequency=_times_per(3, FrequencyUnit.DAY), time=_time(18))
        assert intent_to_grammar(intent) == "0 2,18,22 * * *"

    @pytest.mark.parametrize(
        "value,unit",
        [(1, FrequencyUnit.MONTH), (4, FrequencyUnit.WEEK), (1, FrequencyUnit.YEAR)],
    )
    def test_unmapped(self, value, unit):
        assert intent_to_grammar(ScheduleIntent(frequency=_times_per(value, unit))) is None


class TestCalendarRules:
    """Test the weekday, day-of-month and recurrence rules."""

    def test_weekly(self):
        intent = ScheduleIntent(weekdays=[1, 2, 3, 4, 5], time=_time(9, 30))
        assert intent_to_grammar(intent) == "30 9 * * 1-5"

    def test_monthly_with_and_without_months(self):
        assert intent_to_grammar(ScheduleIntent(day_of_month=15, time=_time(10))) == "0 10 15 * *"
        intent = ScheduleIntent(day_of_month=15, time=_time(10), months=[3, 6])
        assert intent_to_grammar(intent) == "0 10 15 3,6 *"

    def test_daily(self):
        intent = ScheduleIntent(recurring=RecurrenceClass.DAILY, time=_time(7))
        assert intent_to_grammar(intent) == "0 7 * * *"

    def test_yearly(self):
        intent = ScheduleIntent(recurring=RecurrenceClass.YEARLY, months=[3, 9], day_of_month=15)
        assert intent_to_grammar(intent) == "0 0 15 3 *"

    def test_yearly_needs_months(self):
        """Test yearly without months falls through to the time-only rule."""
        intent = ScheduleIntent(recurring=RecurrenceClass.YEARLY, time=_time(6))
        assert intent_to_grammar(intent) == "0 6 * * *"

    def test_quarterly(self):
        assert intent_to_grammar(ScheduleIntent(recurring=RecurrenceClass.QUARTERLY)) == "0 0 1 */3 *"
        intent = ScheduleIntent(recurring=RecurrenceClass.QUARTERLY, time=_time(12), day_of_month=5)
        assert intent_to_grammar(intent) == "0 12 5 */3 *"

    def test_ordinal_weekday(self):
        intent = ScheduleIntent(ordinal=Ordinal(value=1, kind=OrdinalKind.WEEKDAY), weekdays=[1])
        assert intent_to_grammar(intent) == "0 9 1-7 * 1"

    def test_time_only(self):
        assert intent_to_grammar(ScheduleIntent(time=_time(6, 45))) == "45 6 * * *"

    def test_weekdays_only(self):
        assert intent_to_grammar(ScheduleIntent(weekdays=[1, 2, 3])) == "0 9 * * 1-3"

    def test_monthly_recurrence_without_day_is_daily(self):
        """Test recurring=monthly with only the default time has no dedicated rule."""
        intent = ScheduleIntent(
            recurring=RecurrenceClass.MONTHLY,
            time=TimeOfDay(hour=0, minute=0, source=TimeSource.DEFAULT),
        )
        assert intent_to_grammar(intent) == "0 0 * * *"


class TestOutputIsValidGrammar:
    """Test every rule renders something the compiler accepts."""

    @pytest.mark.parametrize(
        "intent",
        [
            ScheduleIntent(frequency=_interval(15, FrequencyUnit.MINUTE)),
            ScheduleIntent(frequency=_times_per(3, FrequencyUnit.DAY), time=_time(22)),
            ScheduleIntent(weekdays=[0, 6], time=_time(10)),
            ScheduleIntent(day_of_month=31, time=_time(23, 59)),
            ScheduleIntent(ordinal=Ordinal(value=-1, kind=OrdinalKind.WEEKDAY), weekdays=[5]),
        ],
    )
    def test_valid(self, intent):
        assert is_valid_grammar(intent_to_grammar(intent))
