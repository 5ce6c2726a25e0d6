"""Intent extraction from normalized schedule text.

Each extractor looks at the text independently; one failing (returning None) never stops the
others. The combined result is rejected only when nothing schedulable was found at all.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime
from typing import List, Optional, Tuple

from dateparser.search import search_dates

from cronflow.models.constants import (
    MONTH_ALTERNATION,
    MONTH_MAP,
    MONTH_NAMES,
    ORDINAL_WORDS,
    WEEKDAY_ALTERNATION,
    WEEKDAY_MAP,
    WEEKDAY_NAMES,
)
from cronflow.models.intent import (
    MIDNIGHT_DEFAULT,
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
from cronflow.recurrence.normalizer import normalize_text

logger = logging.getLogger(__name__)

# Frequency
_INTERVAL_RE = re.compile(
    r"\bevery\s+(\d+)\s+(minutes|minute|mins|min|hours|hour|hrs|hr|days|day|weeks|week|months|month)"
)
_TIMES_PER_RE = re.compile(r"\b(\d+)\s+times?\s+(?:a|an|per|every)\s+(day|week|month|year)\b")
_ONCE_PER_RE = re.compile(r"\bonce\s+(?:a|an|per|every)\s+(day|week|month|year)\b")
_TWICE_PER_RE = re.compile(r"\btwice\s+(?:a|an|per|every)\s+(day|week|month|year)\b")
_ONCE_RE = re.compile(r"\bonce\b")
_TWICE_RE = re.compile(r"\btwice\b")

# Time of day
_MIDNIGHT_RE = re.compile(r"\bmidnight\b")
_NOON_RE = re.compile(r"\bnoon\b")
_CLOCK_PATTERNS: Tuple[re.Pattern, ...] = (
    re.compile(r"\b(?P<h>\d{1,2}):(?P<m>\d{2})\s*(?P<ampm>am|pm)\b"),
    re.compile(r"\b(?P<h>\d{1,2})\s*(?P<ampm>am|pm)\b"),
    re.compile(r"\bat\s+(?P<h>\d{1,2}):(?P<m>\d{2})\s*(?P<ampm>am|pm)?\b"),
    re.compile(r"\bat\s+(?P<h>\d{1,2})\s*(?P<ampm>am|pm)?\b"),
)
_TIME_INDICATOR_RE = re.compile(r"\bat\b|\btime\b|\bo'clock\b|\bclock\b")
# Fixed base keeps the natural-date tier deterministic.
_DATEPARSER_SETTINGS = {
    "RELATIVE_BASE": datetime(2000, 1, 1),
    "PREFER_DATES_FROM": "future",
    "RETURN_AS_TIMEZONE_AWARE": False,
}

# Weekdays / months
_WEEKDAYS_LITERAL_RE = re.compile(r"\bweekdays?\b")
_WEEKENDS_LITERAL_RE = re.compile(r"\bweekends?\b")
_DAY_RANGE_RE = re.compile(rf"\b({WEEKDAY_ALTERNATION})s?(?:\s+(?:to|through|thru)\s+|\s*-\s*)({WEEKDAY_ALTERNATION})s?\b")
_DAY_RE = re.compile(rf"\b({WEEKDAY_ALTERNATION})s?\b")
_MONTH_RANGE_RE = re.compile(rf"\b({MONTH_ALTERNATION})(?:\s+(?:to|through|thru)\s+|\s*-\s*)({MONTH_ALTERNATION})\b")
_MONTH_RE = re.compile(rf"\b({MONTH_ALTERNATION})\b")

# Day of month
_START_OF_MONTH_RE = re.compile(
    r"\b(?:start|beginning|first\s+day)\s+(?:of\s+)?(?:the\s+)?(?:every\s+|each\s+)?month\b"
)
_END_OF_MONTH_RE = re.compile(
    r"\b(?:end|last\s+day)\s+(?:of\s+)?(?:the\s+)?(?:every\s+|each\s+)?month\b"
)
_DAY_OF_MONTH_PATTERNS: Tuple[re.Pattern, ...] = (
    re.compile(r"\b(\d{1,2})(?:st|nd|rd|th)\s+(?:day|of)\b"),
    re.compile(r"\b(\d{1,2})(?:st|nd|rd|th)\b"),
    re.compile(r"\bday\s+(\d{1,2})\b(?!\s*(?:am|pm|:))"),
    re.compile(r"\bon\s+(?:the\s+)?(\d{1,2})\b(?!\s*(?:am|pm|:))"),
)

_ORDINAL_RE = re.compile(
    r"\b(" + "|".join(ORDINAL_WORDS) + rf")\s+({WEEKDAY_ALTERNATION}|day|week)s?\b"
)

_RECURRING_PATTERNS: Tuple[Tuple[re.Pattern, RecurrenceClass], ...] = (
    (re.compile(r"\byearly\b|\bevery\s+year\b|\bannually\b"), RecurrenceClass.YEARLY),
    (re.compile(r"\bmonthly\b|\bevery\s+month\b"), RecurrenceClass.MONTHLY),
    (re.compile(r"\bweekly\b|\bevery\s+week\b"), RecurrenceClass.WEEKLY),
    (re.compile(r"\bdaily\b|\bevery\s+day\b"), RecurrenceClass.DAILY),
    (re.compile(r"\bquarterly\b|\bevery\s+quarter\b"), RecurrenceClass.QUARTERLY),
)


def _unit_from_token(token: str) -> FrequencyUnit:
    if token.startswith("min"):
        return FrequencyUnit.MINUTE
    if token.startswith("h"):
        return FrequencyUnit.HOUR
    if token.startswith("d"):
        return FrequencyUnit.DAY
    if token.startswith("w"):
        return FrequencyUnit.WEEK
    return FrequencyUnit.MONTH


def extract_frequency(text: str) -> Optional[Frequency]:
    """Extract "every N <unit>" intervals or "N times per <period>" counts."""
    m = _INTERVAL_RE.search(text)
    if m:
        value = int(m.group(1))
        if value >= 1:
            return Frequency(kind=FrequencyKind.INTERVAL, value=value, unit=_unit_from_token(m.group(2)))

    m = _TIMES_PER_RE.search(text)
    if m and int(m.group(1)) >= 1:
        return Frequency(kind=FrequencyKind.TIMES_PER, value=int(m.group(1)), unit=FrequencyUnit(m.group(2)))

    m = _ONCE_PER_RE.search(text)
    if m:
        return Frequency(kind=FrequencyKind.TIMES_PER, value=1, unit=FrequencyUnit(m.group(1)))
    m = _TWICE_PER_RE.search(text)
    if m:
        return Frequency(kind=FrequencyKind.TIMES_PER, value=2, unit=FrequencyUnit(m.group(1)))

    # Bare "once" / "twice" mean per day
    if _ONCE_RE.search(text):
        return Frequency(kind=FrequencyKind.TIMES_PER, value=1, unit=FrequencyUnit.DAY)
    if _TWICE_RE.search(text):
        return Frequency(kind=FrequencyKind.TIMES_PER, value=2, unit=FrequencyUnit.DAY)

    return None


def to_24_hour(hour: int, minute: int, period: Optional[str]) -> Optional[Tuple[int, int]]:
    """Normalize an optional am/pm clock reading; None if it is not a valid time."""
    if period:
        period = period.lower()
        if period == "pm" and hour != 12:
            hour += 12
        if period == "am" and hour == 12:
            hour = 0
    if not (0 <= hour <= 23 and 0 <= minute <= 59):
        return None
    return hour, minute


def _time_from_dateparser(text: str) -> Optional[TimeOfDay]:
    try:
        found = search_dates(text, languages=["en"], settings=_DATEPARSER_SETTINGS)
    except Exception as e:
        logger.debug(f"dateparser failed for '{text}': {type(e).__name__}: {str(e)}")
        return None

    for matched, parsed in found or []:
        # Only trust matches that name a clock reading; bare day names carry no time.
        if any(ch.isdigit() for ch in matched):
            return TimeOfDay(hour=parsed.hour, minute=parsed.minute, source=TimeSource.EXTERNAL)
    return None


def extract_time(text: str) -> Optional[TimeOfDay]:
    """Extract a time of day.

    Tiers, first success wins:
    1. midnight / noon keywords
    2. explicit clock patterns ("9:30am", "3pm", "at 14:00", "at 7")
    3. natural-date parser, only when the text has a time indicator word
    """
    if _MIDNIGHT_RE.search(text):
        return TimeOfDay(hour=0, minute=0, source=TimeSource.KEYWORD)
    if _NOON_RE.search(text):
        return TimeOfDay(hour=12, minute=0, source=TimeSource.KEYWORD)

    for pattern in _CLOCK_PATTERNS:
        m = pattern.search(text)
        if not m:
            continue
        clock = to_24_hour(int(m.group("h")), int(m.groupdict().get("m") or 0), m.group("ampm"))
        if clock is None:
            continue
        return TimeOfDay(hour=clock[0], minute=clock[1], source=TimeSource.REGEX)

    if _TIME_INDICATOR_RE.search(text):
        return _time_from_dateparser(text)

    return None


def _inclusive_wrapping(start: int, end: int, low: int, high: int) -> List[int]:
    if start <= end:
        return list(range(start, end + 1))
    return list(range(start, high + 1)) + list(range(low, end + 1))


def extract_weekdays(text: str) -> Optional[List[int]]:
    """Extract weekdays (Sunday=0), sorted ascending."""
    if _WEEKDAYS_LITERAL_RE.search(text):
        return [1, 2, 3, 4, 5]
    if _WEEKENDS_LITERAL_RE.search(text):
        return [0, 6]

    m = _DAY_RANGE_RE.search(text)
    if m:
        start, end = WEEKDAY_MAP[m.group(1)], WEEKDAY_MAP[m.group(2)]
        return sorted(_inclusive_wrapping(start, end, 0, 6))

    days: List[int] = []
    for m in _DAY_RE.finditer(text):
        day = WEEKDAY_MAP[m.group(1)]
        if day not in days:
            days.append(day)
    return sorted(days) if days else None


def extract_months(text: str) -> Optional[List[int]]:
    """Extract months (1-12), sorted ascending."""
    m = _MONTH_RANGE_RE.search(text)
    if m:
        start, end = MONTH_MAP[m.group(1)], MONTH_MAP[m.group(2)]
        return sorted(_inclusive_wrapping(start, end, 1, 12))

    months: List[int] = []
    for m in _MONTH_RE.finditer(text):
        month = MONTH_MAP[m.group(1)]
        if month not in months:
            months.append(month)
    return sorted(months) if months else None


def extract_day_of_month(text: str) -> Optional[int]:
    if _START_OF_MONTH_RE.search(text):
        return 1
    if _END_OF_MONTH_RE.search(text):
        # Approximation: the grammar has no "last day" token.
        return 31

    for pattern in _DAY_OF_MONTH_PATTERNS:
        m = pattern.search(text)
        if m:
            day = int(m.group(1))
            if 1 <= day <= 31:
                return day
    return None


def extract_ordinal(text: str) -> Optional[Ordinal]:
    m = _ORDINAL_RE.search(text)
    if not m:
        return None
    kind = OrdinalKind.WEEKDAY if m.group(2) in WEEKDAY_MAP else OrdinalKind.DAY
    return Ordinal(value=ORDINAL_WORDS[m.group(1)], kind=kind)


def extract_recurring(text: str) -> Optional[RecurrenceClass]:
    for pattern, recurring in _RECURRING_PATTERNS:
        if pattern.search(text):
            return recurring
    return None


def extract_intent(text: str) -> Optional[ScheduleIntent]:
    """Extract a ScheduleIntent from free text.

    Returns None when nothing schedulable was found. When a day, month or recurrence is
    present without a time, the time defaults to midnight (source=default).
    """
    if not text or not isinstance(text, str):
        return None

    normalized = normalize_text(text)
    intent = ScheduleIntent(
        frequency=extract_frequency(normalized),
        time=extract_time(normalized),
        weekdays=extract_weekdays(normalized),
        months=extract_months(normalized),
        day_of_month=extract_day_of_month(normalized),
        ordinal=extract_ordinal(normalized),
        recurring=extract_recurring(normalized),
        raw_text=text,
        normalized_text=normalized,
    )

    if not intent.has_schedule():
        logger.debug(f"No schedulable intent in '{normalized}'")
        return None

    if intent.needs_default_time():
        intent = intent.model_copy(update={"time": MIDNIGHT_DEFAULT})
    return intent


def describe_intent(intent: Optional[ScheduleIntent]) -> str:
    """One-line summary of an extracted intent."""
    if intent is None:
        return "Unable to parse"

    parts: List[str] = []
    if intent.frequency:
        if intent.frequency.kind == FrequencyKind.INTERVAL:
            parts.append(f"Every {intent.frequency.value} {intent.frequency.unit.value}(s)")
        else:
            parts.append(f"{intent.frequency.value} times per {intent.frequency.unit.value}")

    if intent.weekdays:
        parts.append("on " + ", ".join(WEEKDAY_NAMES[d] for d in intent.weekdays))

    if intent.time:
        hour, minute = intent.time.hour, intent.time.minute
        ampm = "PM" if hour >= 12 else "AM"
        parts.append(f"at {hour % 12 or 12}:{minute:02d} {ampm}")

    if intent.months:
        parts.append("in " + ", ".join(MONTH_NAMES[m] for m in intent.months))

    if intent.recurring:
        parts.append(intent.recurring.value)

    return " ".join(parts) or "Parsed successfully"
