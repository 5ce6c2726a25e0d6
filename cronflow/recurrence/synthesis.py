"""Intent -> grammar string synthesis.

Rules are evaluated in priority order; the first rule whose predicate holds decides the result,
even when its builder returns None.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable, NamedTuple, Optional, Tuple

from cronflow.models.constants import DEFAULT_HOUR, DEFAULT_MINUTE, DEFAULT_WEEKDAY_HOUR
from cronflow.models.intent import (
    FrequencyKind,
    FrequencyUnit,
    RecurrenceClass,
    ScheduleIntent,
    TimeOfDay,
    TimeSource,
)

logger = logging.getLogger(__name__)

_MIDNIGHT = TimeOfDay(hour=DEFAULT_HOUR, minute=DEFAULT_MINUTE, source=TimeSource.DEFAULT)
_MORNING = TimeOfDay(hour=DEFAULT_WEEKDAY_HOUR, minute=DEFAULT_MINUTE, source=TimeSource.DEFAULT)


class SynthesisRule(NamedTuple):
    name: str
    applies: Callable[[ScheduleIntent], bool]
    build: Callable[[ScheduleIntent], Optional[str]]


def format_weekdays(weekdays: Optional[Iterable[int]]) -> str:
    """Render weekdays as a grammar token.

    Three or more strictly consecutive days collapse to "a-b"; anything else is a comma list.
    """
    if not weekdays:
        return "*"
    days = sorted(weekdays)
    if len(days) == 1:
        return str(days[0])
    consecutive = all(b == a + 1 for a, b in zip(days, days[1:]))
    if consecutive and len(days) > 2:
        return f"{days[0]}-{days[-1]}"
    return ",".join(str(d) for d in days)


def _join(values: Iterable[int]) -> str:
    return ",".join(str(v) for v in values)


def _hours(*hours: int) -> str:
    return _join(sorted({h % 24 for h in hours}))


def _build_complex(intent: ScheduleIntent) -> str:
    t = intent.time
    return f"{t.minute} {t.hour} * {_join(intent.months)} {format_weekdays(intent.weekdays)}"


def _build_interval(intent: ScheduleIntent) -> Optional[str]:
    freq = intent.frequency
    if freq.unit == FrequencyUnit.MINUTE:
        return f"*/{freq.value} * * * *"
    if freq.unit == FrequencyUnit.HOUR:
        minute = intent.time.minute if intent.time else DEFAULT_MINUTE
        return f"{minute} */{freq.value} * * *"
    if freq.unit == FrequencyUnit.DAY:
        t = intent.time or _MIDNIGHT
        return f"{t.minute} {t.hour} */{freq.value} * *"
    if freq.unit == FrequencyUnit.WEEK:
        # N is not representable; pinned to a weekly schedule.
        t = intent.time or _MORNING
        weekday = intent.weekdays[0] if intent.weekdays else 1
        return f"{t.minute} {t.hour} * * {weekday}"
    if freq.unit == FrequencyUnit.MONTH:
        t = intent.time or _MIDNIGHT
        return f"{t.minute} {t.hour} {intent.day_of_month or 1} */{freq.value} *"
    return None


def _build_times_per(intent: ScheduleIntent) -> Optional[str]:
    freq = intent.frequency
    t = intent.time or _MORNING
    m, h = t.minute, t.hour

    if freq.unit == FrequencyUnit.DAY:
        if freq.value == 1:
            return f"{m} {h} * * *"
        if freq.value == 2:
            return f"{m} {_hours(h, h + 8)} * * *"
        if freq.value == 3:
            return f"{m} {_hours(h, h + 4, h + 8)} * * *"
    elif freq.unit == FrequencyUnit.WEEK:
        if freq.value == 2:
            return f"{m} {h} * * 1,4"
        if freq.value == 3:
            return f"{m} {h} * * 1,3,5"
    elif freq.unit == FrequencyUnit.MONTH:
        if freq.value == 2:
            return f"{m} {h} 1,15 * *"
    return None


def _build_weekly(intent: ScheduleIntent) -> str:
    t = intent.time
    return f"{t.minute} {t.hour} * * {format_weekdays(intent.weekdays)}"


def _build_monthly(intent: ScheduleIntent) -> str:
    t = intent.time
    months = _join(intent.months) if intent.months else "*"
    return f"{t.minute} {t.hour} {intent.day_of_month} {months} *"


def _build_daily(intent: ScheduleIntent) -> str:
    t = intent.time
    return f"{t.minute} {t.hour} * * {format_weekdays(intent.weekdays)}"


def _build_yearly(intent: ScheduleIntent) -> str:
    t = intent.time or _MIDNIGHT
    return f"{t.minute} {t.hour} {intent.day_of_month or 1} {intent.months[0]} *"


def _build_quarterly(intent: ScheduleIntent) -> str:
    t = intent.time or _MIDNIGHT
    return f"{t.minute} {t.hour} {intent.day_of_month or 1} */3 *"


def _build_ordinal(intent: ScheduleIntent) -> str:
    # Approximation: "first Monday" becomes "a Monday within days 1-7".
    t = intent.time or _MORNING
    return f"{t.minute} {t.hour} 1-7 * {intent.weekdays[0]}"


def _build_simple_time(intent: ScheduleIntent) -> str:
    return f"{intent.time.minute} {intent.time.hour} * * *"


def _build_simple_weekdays(intent: ScheduleIntent) -> str:
    return f"{DEFAULT_MINUTE} {DEFAULT_WEEKDAY_HOUR} * * {format_weekdays(intent.weekdays)}"


SYNTHESIS_RULES: Tuple[SynthesisRule, ...] = (
    SynthesisRule(
        "weekdays_time_months",
        lambda i: bool(i.weekdays and i.time and i.months),
        _build_complex,
    ),
    SynthesisRule(
        "interval",
        lambda i: i.frequency is not None and i.frequency.kind == FrequencyKind.INTERVAL,
        _build_interval,
    ),
    SynthesisRule(
        "times_per",
        lambda i: i.frequency is not None and i.frequency.kind == FrequencyKind.TIMES_PER,
        _build_times_per,
    ),
    SynthesisRule("weekly", lambda i: bool(i.weekdays and i.time), _build_weekly),
    SynthesisRule("monthly", lambda i: bool(i.day_of_month and i.time), _build_monthly),
    SynthesisRule(
        "daily",
        lambda i: i.time is not None and i.recurring == RecurrenceClass.DAILY,
        _build_daily,
    ),
    SynthesisRule(
        "yearly",
        lambda i: i.recurring == RecurrenceClass.YEARLY and bool(i.months),
        _build_yearly,
    ),
    SynthesisRule("quarterly", lambda i: i.recurring == RecurrenceClass.QUARTERLY, _build_quarterly),
    SynthesisRule("ordinal_weekday", lambda i: bool(i.ordinal and i.weekdays), _build_ordinal),
    SynthesisRule("time_only", lambda i: i.time is not None, _build_simple_time),
    SynthesisRule("weekdays_only", lambda i: bool(i.weekdays), _build_simple_weekdays),
)


def intent_to_grammar(intent: Optional[ScheduleIntent]) -> Optional[str]:
    """Synthesize a grammar string from an intent.

    Args:
        intent: Extracted intent, or None

    Returns:
        Grammar string, or None when no rule applies or the deciding rule has no mapping
    """
    if intent is None:
        return None

    for rule in SYNTHESIS_RULES:
        if rule.applies(intent):
            expression = rule.build(intent)
            logger.debug(f"Synthesis rule '{rule.name}' produced {expression!r}")
            return expression

    logger.debug("No synthesis rule applied")
    return None
