"""Predicate matching of calendar timestamps against a compiled grammar."""

from __future__ import annotations

from datetime import datetime

from cronflow.models.grammar import FieldKind, FieldSpec, GrammarField, GrammarSpec


def python_weekday_to_grammar(moment: datetime) -> int:
    # Python weekday: Monday=0 ... Sunday=6; grammar weekday: Sunday=0 ... Saturday=6
    return (moment.weekday() + 1) % 7


def _is_sunday_alias(expected: int, actual: int) -> bool:
    return (expected == 7 and actual == 0) or (expected == 0 and actual == 7)


def field_matches(value: int, spec: FieldSpec, field: GrammarField) -> bool:
    """Check one timestamp component against one compiled field.

    The weekday 0/7 Sunday alias applies to `value` and `list` only; ranges and steps
    compare the raw number.
    """
    is_weekday = GrammarField(field) == GrammarField.WEEKDAY

    if spec.kind == FieldKind.ANY:
        return True
    if spec.kind == FieldKind.VALUE:
        return value == spec.value or (is_weekday and _is_sunday_alias(spec.value, value))
    if spec.kind == FieldKind.RANGE:
        return spec.min <= value <= spec.max
    if spec.kind == FieldKind.LIST:
        if value in spec.values:
            return True
        return is_weekday and any(_is_sunday_alias(v, value) for v in spec.values)
    if spec.kind in (FieldKind.STEP, FieldKind.RANGE_STEP):
        return spec.min <= value <= spec.max and (value - spec.min) % spec.step == 0
    return False


def matches(moment: datetime, spec: GrammarSpec) -> bool:
    """True iff all five fields of `spec` match `moment` (seconds are ignored)."""
    return (
        field_matches(moment.minute, spec.minute, GrammarField.MINUTE)
        and field_matches(moment.hour, spec.hour, GrammarField.HOUR)
        and field_matches(moment.day, spec.day_of_month, GrammarField.DAY_OF_MONTH)
        and field_matches(moment.month, spec.month, GrammarField.MONTH)
        and field_matches(python_weekday_to_grammar(moment), spec.weekday, GrammarField.WEEKDAY)
    )
