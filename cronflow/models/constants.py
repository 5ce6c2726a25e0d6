"""Constants for CronFlow.

This module centralizes the lookup tables and default values used throughout the application.
All tables are read-only; they are built once at import time.
"""

from types import MappingProxyType


# Default times for synthesized expressions (when the text gives none)
DEFAULT_WEEKDAY_HOUR = 9
DEFAULT_WEEKEND_HOUR = 10
DEFAULT_MINUTE = 0
DEFAULT_HOUR = 0

# Occurrence search
NEXT_OCCURRENCES_COUNT = 5
LOOKAHEAD_MINUTES = 100
LOOKAHEAD_DAYS = 7

WEEKDAY_NAMES = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")

MONTH_NAMES = (
    "", "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)

# Weekday name -> number (Sunday=0)
WEEKDAY_MAP = MappingProxyType({
    "sunday": 0, "sun": 0,
    "monday": 1, "mon": 1,
    "tuesday": 2, "tue": 2, "tues": 2,
    "wednesday": 3, "wed": 3,
    "thursday": 4, "thu": 4, "thur": 4, "thurs": 4,
    "friday": 5, "fri": 5,
    "saturday": 6, "sat": 6,
})

MONTH_MAP = MappingProxyType({
    "january": 1, "jan": 1,
    "february": 2, "feb": 2,
    "march": 3, "mar": 3,
    "april": 4, "apr": 4,
    "may": 5,
    "june": 6, "jun": 6,
    "july": 7, "jul": 7,
    "august": 8, "aug": 8,
    "september": 9, "sep": 9, "sept": 9,
    "october": 10, "oct": 10,
    "november": 11, "nov": 11,
    "december": 12, "dec": 12,
})

# Word numbers folded to digits before any pattern matching.
# 'a' and 'an' are deliberately absent: they are articles far more often than numbers.
WORD_NUMBERS = MappingProxyType({
    "zero": 0, "one": 1, "two": 2, "three": 3, "four": 4,
    "five": 5, "six": 6, "seven": 7, "eight": 8, "nine": 9,
    "ten": 10, "eleven": 11, "twelve": 12, "thirteen": 13,
    "fourteen": 14, "fifteen": 15, "sixteen": 16, "seventeen": 17,
    "eighteen": 18, "nineteen": 19, "twenty": 20, "thirty": 30,
    "forty": 40, "fifty": 50, "sixty": 60,
    "couple": 2, "few": 3, "several": 5,
})

ORDINAL_WORDS = MappingProxyType({
    "first": 1, "1st": 1,
    "second": 2, "2nd": 2,
    "third": 3, "3rd": 3,
    "fourth": 4, "4th": 4,
    "fifth": 5, "5th": 5,
    "last": -1,
})

# Error message templates for grammar validation
ERROR_MESSAGES = MappingProxyType({
    "INVALID_FIELD_COUNT": "Cron expression must have exactly 5 fields: minute hour day month weekday",
    "EMPTY_FIELD": "{field} field cannot be empty",
    "INVALID_CHARACTERS": "{field} field contains invalid characters",
    "INVALID_STEP": "Invalid step value: {value}",
    "INVALID_RANGE_FORMAT": "Invalid range format: {value}",
    "INVALID_RANGE_VALUES": "Invalid range values: {value}",
    "INVALID_RANGE_ORDER": "Invalid range: {min} is greater than {max}",
    "INVALID_LIST_VALUE": "Invalid list value: {value}",
    "INVALID_VALUE": "Invalid value: {value}",
    "OUT_OF_RANGE": "Value {value} is out of range ({min}-{max})",
    "NATURAL_LANGUAGE_FAILED": (
        'Could not understand that expression. Try: "once a month", "15th of each month", '
        '"quarterly", "weekdays at 9am", "every Monday and Friday"'
    ),
})

# Regex alternations over the name tables, longest names first
WEEKDAY_ALTERNATION = "|".join(sorted(WEEKDAY_MAP, key=len, reverse=True))
MONTH_ALTERNATION = "|".join(sorted(MONTH_MAP, key=len, reverse=True))
