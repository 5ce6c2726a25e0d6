"""Data models for CronFlow."""

from cronflow.models.grammar import (
    ANY_FIELD,
    FIELD_DOMAINS,
    FIELD_ORDER,
    FieldKind,
    FieldSpec,
    GrammarField,
    GrammarSpec,
)
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

__all__ = [
    "ANY_FIELD",
    "FIELD_DOMAINS",
    "FIELD_ORDER",
    "FieldKind",
    "FieldSpec",
    "GrammarField",
    "GrammarSpec",
    "Frequency",
    "FrequencyKind",
    "FrequencyUnit",
    "Ordinal",
    "OrdinalKind",
    "RecurrenceClass",
    "ScheduleIntent",
    "TimeOfDay",
    "TimeSource",
]
