"""Schedule intent models for CronFlow.

Language-independent representation of a schedule extracted from free text.
Intents are created per call and compiled into a grammar string; they are never persisted.
"""

from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


class FrequencyKind(str, Enum):
    INTERVAL = "interval"
    TIMES_PER = "times_per"


class FrequencyUnit(str, Enum):
    MINUTE = "minute"
    HOUR = "hour"
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"


class TimeSource(str, Enum):
    """Where an extracted time of day came from."""

    KEYWORD = "keyword"
    REGEX = "regex"
    EXTERNAL = "external"  # natural-date parser
    DEFAULT = "default"


class OrdinalKind(str, Enum):
    WEEKDAY = "weekday"
    DAY = "day"


class RecurrenceClass(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    YEARLY = "yearly"


class Frequency(BaseModel):
    kind: FrequencyKind
    value: int = Field(..., ge=1, description="Every N units, or N times per unit")
    unit: FrequencyUnit


class TimeOfDay(BaseModel):
    hour: int = Field(..., ge=0, le=23)
    minute: int = Field(..., ge=0, le=59)
    source: TimeSource


MIDNIGHT_DEFAULT = TimeOfDay(hour=0, minute=0, source=TimeSource.DEFAULT)


class Ordinal(BaseModel):
    value: int = Field(..., description="1..5, or -1 for 'last'")
    kind: OrdinalKind


class ScheduleIntent(BaseModel):
    """Structured scheduling intent.

    Notes:
    - `weekdays` use Sunday=0 .. Saturday=6; `months` use 1..12.
    - Both are kept as sorted, de-duplicated lists.
    """

    frequency: Optional[Frequency] = None
    time: Optional[TimeOfDay] = None
    weekdays: Optional[List[int]] = None
    months: Optional[List[int]] = None
    day_of_month: Optional[int] = Field(None, ge=1, le=31)
    ordinal: Optional[Ordinal] = None
    recurring: Optional[RecurrenceClass] = None

    # Diagnostics
    raw_text: Optional[str] = None
    normalized_text: Optional[str] = None

    @field_validator("weekdays")
    @classmethod
    def _validate_weekdays(cls, v):
        if not v:
            return None
        for day in v:
            if not 0 <= day <= 6:
                raise ValueError(f"weekday {day} out of range 0-6")
        return sorted(set(v))

    @field_validator("months")
    @classmethod
    def _validate_months(cls, v):
        if not v:
            return None
        for month in v:
            if not 1 <= month <= 12:
                raise ValueError(f"month {month} out of range 1-12")
        return sorted(set(v))

    def has_schedule(self) -> bool:
        """True if at least one scheduling field is populated."""
        return any(
            (
                self.frequency,
                self.time,
                self.weekdays,
                self.months,
                self.day_of_month,
                self.recurring,
            )
        )

    def needs_default_time(self) -> bool:
        return self.time is None and bool(
            self.weekdays or self.months or self.day_of_month or self.recurring
        )
