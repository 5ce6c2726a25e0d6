"""Pattern-based fallback: free text straight to a grammar string.

Used when intent extraction produces nothing. Supported phrasings, in precedence order:
- yearly / annually / once a year [on <month> <day>]
- <N>th of each month, every month on the <N>, once a month / monthly,
  start of each month, end of each month (28-31)
- every N days / weeks / months, quarterly, bi-weekly, bi-monthly / twice a month
- "<day> and <day>" combinations
- every N minutes / hours, every minute, every hour / hourly
- weekdays (09:00 default), weekends (10:00 default)
- a single weekday with or without a time (09:00 default)
- every day [at <time>]
- bare "<H>[:MM] am|pm", midnight, noon
"""

from __future__ import annotations

import logging
import re
from typing import Callable, List, NamedTuple, Optional, Tuple

from cronflow.models.constants import (
    DEFAULT_HOUR,
    DEFAULT_MINUTE,
    DEFAULT_WEEKDAY_HOUR,
    DEFAULT_WEEKEND_HOUR,
    MONTH_MAP,
    WEEKDAY_ALTERNATION,
    WEEKDAY_MAP,
)

logger = logging.getLogger(__name__)

Handler = Callable[[re.Match, str], Optional[str]]


class FallbackRule(NamedTuple):
    name: str
    pattern: re.Pattern
    handler: Handler


_TIME_PATTERNS: Tuple[re.Pattern, ...] = (
    re.compile(r"(\d+):(\d+)\s*(am|pm)\b"),
    re.compile(r"(\d+)\s*(am|pm)\b"),
    re.compile(r"\bat\s+(\d+):(\d+)"),
    re.compile(r"\bat\s+(\d+)"),
)


def parse_time(text: str) -> Optional[Tuple[int, int]]:
    """Read a clock time from text as (hour, minute).

    Values are returned as read (after am/pm adjustment) and are not range-checked.
    """
    for pattern in _TIME_PATTERNS:
        m = pattern.search(text)
        if not m:
            continue
        groups = [g for g in m.groups() if g is not None]
        hour = int(groups[0])
        minute = int(groups[1]) if len(groups) > 1 and groups[1].isdigit() else 0
        period = groups[-1] if groups[-1] in ("am", "pm") else None
        if period == "pm" and hour != 12:
            hour += 12
        if period == "am" and hour == 12:
            hour = 0
        return hour, minute

    if re.search(r"\bmidnight\b", text):
        return 0, 0
    if re.search(r"\bnoon\b", text):
        return 12, 0
    return None


def parse_weekdays(text: str) -> List[int]:
    """All weekday names mentioned in text, as sorted day numbers (Sunday=0)."""
    days = {num for name, num in WEEKDAY_MAP.items() if re.search(rf"\b{name}s?\b", text)}
    return sorted(days)


def _valid(hour: int, minute: int) -> bool:
    return 0 <= hour <= 23 and 0 <= minute <= 59


def _time_or_default(text: str, default_hour: int) -> Optional[Tuple[int, int]]:
    parsed = parse_time(text)
    if parsed is None:
        return default_hour, DEFAULT_MINUTE
    return parsed if _valid(*parsed) else None


def _with_time(text: str, default_hour: int, fields: str) -> Optional[str]:
    clock = _time_or_default(text, default_hour)
    if clock is None:
        return None
    hour, minute = clock
    return f"{minute} {hour} {fields}"


def _positive(value: str) -> Optional[int]:
    n = int(value)
    return n if n >= 1 else None


def _meridiem_clock(hour: str, minute: Optional[str], period: str) -> Optional[Tuple[int, int]]:
    h = int(hour)
    mins = int(minute) if minute else 0
    if period == "pm" and h != 12:
        h += 12
    if period == "am" and h == 12:
        h = 0
    return (h, mins) if _valid(h, mins) else None


# Handlers

def _yearly(m: re.Match, text: str) -> Optional[str]:
    month = MONTH_MAP[m.group(1)] if m.group(1) else 1
    day = int(m.group(2)) if m.group(2) else 1
    if not 1 <= day <= 31:
        return None
    return _with_time(text, DEFAULT_HOUR, f"{day} {month} *")


def _day_of_each_month(m: re.Match, text: str) -> Optional[str]:
    day = int(m.group(1))
    if not 1 <= day <= 31:
        return None
    return _with_time(text, DEFAULT_HOUR, f"{day} * *")


def _first_of_month(m: re.Match, text: str) -> Optional[str]:
    return _with_time(text, DEFAULT_HOUR, "1 * *")


def _end_of_month(m: re.Match, text: str) -> Optional[str]:
    return _with_time(text, DEFAULT_HOUR, "28-31 * *")


def _every_n_days(m: re.Match, text: str) -> Optional[str]:
    n = _positive(m.group(1))
    return _with_time(text, DEFAULT_HOUR, f"*/{n} * *") if n else None


def _every_n_weeks(m: re.Match, text: str) -> Optional[str]:
    # N is not representable; pinned to Mondays.
    return _with_time(text, DEFAULT_HOUR, "* * 1")


def _every_n_months(m: re.Match, text: str) -> Optional[str]:
    n = _positive(m.group(1))
    return _with_time(text, DEFAULT_HOUR, f"1 */{n} *") if n else None


def _quarterly(m: re.Match, text: str) -> Optional[str]:
    return _with_time(text, DEFAULT_HOUR, "1 */3 *")


def _biweekly(m: re.Match, text: str) -> Optional[str]:
    return _with_time(text, DEFAULT_HOUR, "* * 1")


def _bimonthly(m: re.Match, text: str) -> Optional[str]:
    return _with_time(text, DEFAULT_HOUR, "1,15 * *")


def _multiple_days(m: re.Match, text: str) -> Optional[str]:
    days = parse_weekdays(text)
    if not days:
        return None
    return _with_time(text, DEFAULT_WEEKDAY_HOUR, "* * " + ",".join(str(d) for d in days))


def _every_n_minutes(m: re.Match, text: str) -> Optional[str]:
    n = _positive(m.group(1))
    return f"*/{n} * * * *" if n else None


def _every_n_hours(m: re.Match, text: str) -> Optional[str]:
    n = _positive(m.group(1))
    return f"0 */{n} * * *" if n else None


def _weekdays(m: re.Match, text: str) -> Optional[str]:
    return _with_time(text, DEFAULT_WEEKDAY_HOUR, "* * 1-5")


def _weekends(m: re.Match, text: str) -> Optional[str]:
    return _with_time(text, DEFAULT_WEEKEND_HOUR, "* * 6,0")


def _day_at_meridiem(m: re.Match, text: str, weekday: str = "*") -> Optional[str]:
    clock = _meridiem_clock(m.group("h"), m.group("m"), m.group("ampm"))
    if clock is None:
        return None
    hour, minute = clock
    return f"{minute} {hour} * * {weekday}"


def _single_day_rules() -> List[FallbackRule]:
    by_number = {}
    for name, num in WEEKDAY_MAP.items():
        by_number.setdefault(num, []).append(name)
    order = (1, 2, 3, 4, 5, 6, 0)

    with_time = []
    without_time = []
    for num in order:
        names = "|".join(sorted(by_number[num], key=len, reverse=True))
        with_time.append(
            FallbackRule(
                f"weekday_{num}_at_time",
                re.compile(rf"\b(?:{names})s?\s+at\s+(?P<h>\d+)(?::(?P<m>\d+))?\s*(?P<ampm>am|pm)\b"),
                lambda m, text, day=str(num): _day_at_meridiem(m, text, day),
            )
        )
        without_time.append(
            FallbackRule(
                f"weekday_{num}",
                re.compile(rf"\b(?:{names})s?\b(?!\s+and)(?!\s*,)"),
                lambda m, text, day=num: f"{DEFAULT_MINUTE} {DEFAULT_WEEKDAY_HOUR} * * {day}",
            )
        )
    return with_time + without_time


FALLBACK_RULES: Tuple[FallbackRule, ...] = (
    # Yearly
    FallbackRule(
        "yearly",
        re.compile(
            r"\b(?:once\s+a\s+year|annually|yearly)(?:\s+(?:on|in))?\s*"
            r"(january|february|march|april|may|june|july|august|september|october|november|december)?"
            r"\s*(\d+)?(?:st|nd|rd|th)?"
        ),
        _yearly,
    ),
    # Monthly
    FallbackRule(
        "nth_of_each_month",
        re.compile(r"(?:on\s+the\s+)?\b(\d+)(?:st|nd|rd|th)\s+(?:day\s+)?of\s+(?:each|every)\s+month"),
        _day_of_each_month,
    ),
    FallbackRule(
        "every_month_on_nth",
        re.compile(r"\b(?:every|each)\s+month\s+on\s+(?:the\s+)?(\d+)(?:st|nd|rd|th)?"),
        _day_of_each_month,
    ),
    FallbackRule("once_a_month", re.compile(r"\b(?:once\s+a\s+month|(?<!bi-)monthly)\b"), _first_of_month),
    FallbackRule(
        "start_of_month",
        re.compile(r"\b(?:start|beginning)\s+of\s+(?:each|every)\s+month"),
        _first_of_month,
    ),
    FallbackRule("end_of_month", re.compile(r"\bend\s+of\s+(?:each|every)\s+month"), _end_of_month),
    # Periodic
    FallbackRule("every_n_days", re.compile(r"\bevery\s+(\d+)\s+days?\b"), _every_n_days),
    FallbackRule("every_n_weeks", re.compile(r"\bevery\s+(\d+)\s+weeks?\b"), _every_n_weeks),
    FallbackRule("every_n_months", re.compile(r"\bevery\s+(\d+)\s+months?\b"), _every_n_months),
    FallbackRule("quarterly", re.compile(r"\b(?:every\s+)?quarter(?:ly)?\b"), _quarterly),
    FallbackRule("biweekly", re.compile(r"\b(?:bi-?weekly|every\s+other\s+week)\b"), _biweekly),
    FallbackRule("bimonthly", re.compile(r"\b(?:bi-?monthly|twice\s+a\s+month)\b"), _bimonthly),
    # "monday and friday", "mon, wed"
    FallbackRule(
        "multiple_days",
        re.compile(
            rf"\b(?:{WEEKDAY_ALTERNATION})s?(?:\s*,\s*|\s+and\s+)(?:and\s+)?(?:{WEEKDAY_ALTERNATION})s?\b"
        ),
        _multiple_days,
    ),
    # Intervals
    FallbackRule(
        "every_n_minutes",
        re.compile(r"\bevery\s+(\d+)\s+(?:minutes|minute|mins|min)\b"),
        _every_n_minutes,
    ),
    FallbackRule(
        "every_n_hours",
        re.compile(r"\bevery\s+(\d+)\s+(?:hours|hour|hrs|hr)\b"),
        _every_n_hours,
    ),
    FallbackRule("every_minute", re.compile(r"\bevery\s+minute\b"), lambda m, text: "* * * * *"),
    FallbackRule("every_hour", re.compile(r"\b(?:every\s+hour|hourly)\b"), lambda m, text: "0 * * * *"),
    # Weekdays / weekends
    FallbackRule(
        "weekdays",
        re.compile(r"\b(?:weekdays?|monday\s+through\s+friday|mon-fri)\b"),
        _weekdays,
    ),
    FallbackRule(
        "weekends",
        re.compile(r"\b(?:weekends?|saturday\s+and\s+sunday|sat\s+and\s+sun)\b"),
        _weekends,
    ),
    # Single weekdays
    *_single_day_rules(),
    # Daily
    FallbackRule(
        "day_at_time",
        re.compile(
            r"\b(?:(?:every\s*)?day|daily)\s+at\s+(?P<h>\d+)(?::(?P<m>\d+))?\s*(?P<ampm>am|pm)\b"
        ),
        _day_at_meridiem,
    ),
    FallbackRule("every_day", re.compile(r"\b(?:(?:every\s*)?day|daily)\b"), lambda m, text: "0 0 * * *"),
    # Special times
    FallbackRule(
        "meridiem_time",
        re.compile(r"\b(?P<h>\d+)(?::(?P<m>\d+))?\s*(?P<ampm>am|pm)\b"),
        _day_at_meridiem,
    ),
    FallbackRule("midnight", re.compile(r"\bmidnight\b"), lambda m, text: "0 0 * * *"),
    FallbackRule("noon", re.compile(r"\bnoon\b"), lambda m, text: "0 12 * * *"),
)


def parse_with_regex(text: str) -> Optional[str]:
    """Translate text with the first fallback rule that yields a grammar string.

    A rule whose handler returns None (or fails) does not stop the search; later rules still run.
    """
    if not text or not isinstance(text, str):
        return None

    lowered = " ".join(text.lower().split())
    if not lowered:
        return None

    for rule in FALLBACK_RULES:
        m = rule.pattern.search(lowered)
        if not m:
            continue
        try:
            expression = rule.handler(m, lowered)
        except (ValueError, KeyError) as e:
            logger.warning(f"Fallback rule '{rule.name}' failed: {type(e).__name__}: {str(e)}")
            continue
        if expression is not None:
            logger.debug(f"Fallback rule '{rule.name}' matched '{lowered}' -> {expression!r}")
            return expression

    return None
