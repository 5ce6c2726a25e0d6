"""Human-readable descriptions of compiled grammars."""

from __future__ import annotations

from typing import Dict, List

from cronflow.models.constants import MONTH_NAMES, WEEKDAY_NAMES
from cronflow.models.grammar import FIELD_ORDER, FieldKind, FieldSpec, GrammarSpec


def describe_field(field: FieldSpec) -> str:
    if field.kind == FieldKind.VALUE:
        return str(field.value)
    if field.kind == FieldKind.RANGE:
        return f"{field.min}-{field.max}"
    if field.kind == FieldKind.LIST:
        return ", ".join(str(v) for v in field.values)
    if field.kind == FieldKind.STEP:
        return f"every {field.step}"
    if field.kind == FieldKind.RANGE_STEP:
        return f"every {field.step} from {field.min} to {field.max}"
    return "any"


def describe_fields(spec: GrammarSpec) -> Dict[str, str]:
    """Per-field breakdown keyed by field name."""
    return {name.value: describe_field(spec.field(name)) for name in FIELD_ORDER}


def format_hour(field: FieldSpec) -> str:
    """Format an hour field with AM/PM notation."""
    if field.kind == FieldKind.VALUE:
        hour = field.value
        if hour == 0:
            return "12:00 AM"
        if hour < 12:
            return f"{hour}:00 AM"
        if hour == 12:
            return "12:00 PM"
        return f"{hour - 12}:00 PM"
    return f"hour {describe_field(field)}"


def format_month(field: FieldSpec) -> str:
    if field.kind == FieldKind.VALUE:
        return MONTH_NAMES[field.value]
    if field.kind == FieldKind.LIST:
        return ", ".join(MONTH_NAMES[m] for m in field.values)
    if field.kind == FieldKind.RANGE:
        return f"{MONTH_NAMES[field.min]} to {MONTH_NAMES[field.max]}"
    return f"month {describe_field(field)}"


def _weekday_name(day: int) -> str:
    # 7 is Sunday too
    return WEEKDAY_NAMES[day % 7]


def format_weekday(field: FieldSpec) -> str:
    if field.kind == FieldKind.VALUE:
        return _weekday_name(field.value)
    if field.kind == FieldKind.LIST:
        return ", ".join(_weekday_name(d) for d in field.values)
    if field.kind == FieldKind.RANGE:
        return f"{_weekday_name(field.min)} to {_weekday_name(field.max)}"
    return f"weekday {describe_field(field)}"


def _plural(count: int, unit: str) -> str:
    return f"every {count} {unit}{'s' if count > 1 else ''}"


def explain(spec: GrammarSpec) -> str:
    """Generate a complete human-readable explanation.

    Example:
        "0 9 * * 1-5" -> "Runs at minute 0 at 9:00 AM on Monday to Friday"
    """
    parts: List[str] = []

    if spec.minute.kind == FieldKind.ANY:
        parts.append("every minute")
    elif spec.minute.kind == FieldKind.STEP:
        parts.append(_plural(spec.minute.step, "minute"))
    else:
        parts.append(f"at minute {describe_field(spec.minute)}")

    if spec.hour.kind != FieldKind.ANY:
        if spec.hour.kind == FieldKind.STEP:
            parts.append(_plural(spec.hour.step, "hour"))
        else:
            parts.append(f"at {format_hour(spec.hour)}")

    if spec.day_of_month.kind != FieldKind.ANY:
        parts.append(f"on day {describe_field(spec.day_of_month)} of the month")

    if spec.month.kind != FieldKind.ANY:
        parts.append(f"in {format_month(spec.month)}")

    if spec.weekday.kind != FieldKind.ANY:
        parts.append(f"on {format_weekday(spec.weekday)}")

    explanation = "Runs " + " ".join(parts)
    return explanation[0].upper() + explanation[1:]
