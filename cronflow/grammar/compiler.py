"""Field-grammar compiler.

Parses and validates a five-field grammar string into a GrammarSpec.
Pure: the same input always yields the same spec (or the same error).
"""

from __future__ import annotations

import logging
import re
from typing import List, Optional

from cronflow.grammar.errors import (
    EmptyFieldError,
    FieldCountError,
    GrammarError,
    InvalidCharacterError,
    InvalidListValueError,
    InvalidRangeFormatError,
    InvalidRangeOrderError,
    InvalidRangeValuesError,
    InvalidStepError,
    InvalidValueError,
    OutOfRangeError,
)
from cronflow.models.grammar import (
    ANY_FIELD,
    FIELD_DOMAINS,
    FIELD_ORDER,
    FieldKind,
    FieldSpec,
    GrammarField,
    GrammarSpec,
)

logger = logging.getLogger(__name__)

_ALLOWED_CHARS = re.compile(r"^[0-9,\-*/]+$")


def _to_int(text: str) -> Optional[int]:
    text = text.strip()
    if not text.isdigit():
        return None
    return int(text)


def _check_domain(field: GrammarField, value: int) -> None:
    low, high = FIELD_DOMAINS[field]
    if value < low or value > high:
        raise OutOfRangeError(field.value, value, low, high)


def _split_bounds(field: GrammarField, text: str) -> tuple[int, int]:
    parts = text.split("-")
    if len(parts) != 2:
        raise InvalidRangeFormatError(field.value, text)
    low, high = _to_int(parts[0]), _to_int(parts[1])
    if low is None or high is None:
        raise InvalidRangeValuesError(field.value, text)
    return low, high


def _parse_bounds(field: GrammarField, text: str) -> tuple[int, int]:
    """Parse `min-max` into a validated (min, max) pair."""
    low, high = _split_bounds(field, text)
    if low > high:
        raise InvalidRangeOrderError(field.value, text, low, high)
    _check_domain(field, low)
    _check_domain(field, high)
    return low, high


def _compile_step(field: GrammarField, token: str) -> FieldSpec:
    left, _, right = token.partition("/")
    step = _to_int(right)
    if step is None or step <= 0:
        raise InvalidStepError(field.value, right)

    if left == "*":
        low, high = FIELD_DOMAINS[field]
        return FieldSpec(kind=FieldKind.STEP, min=low, max=high, step=step)

    # Stepped ranges keep their bounds as written; only the shape is checked.
    low, high = _split_bounds(field, left)
    return FieldSpec(kind=FieldKind.RANGE_STEP, min=low, max=high, step=step)


def _compile_list(field: GrammarField, token: str) -> FieldSpec:
    values: List[int] = []
    for part in token.split(","):
        value = _to_int(part)
        if value is None:
            raise InvalidListValueError(field.value, token)
        _check_domain(field, value)
        values.append(value)
    return FieldSpec(kind=FieldKind.LIST, values=tuple(values))


def compile_field(token: str, field: GrammarField) -> FieldSpec:
    """Compile one grammar token for the given field."""
    field = GrammarField(field)
    if token is None or token.strip() == "":
        raise EmptyFieldError(field.value)
    token = token.strip()
    if not _ALLOWED_CHARS.match(token):
        raise InvalidCharacterError(field.value, token)

    if token == "*":
        return ANY_FIELD

    # Step values (*/5, 0-23/2)
    if "/" in token:
        return _compile_step(field, token)

    # Ranges (1-5)
    if "-" in token:
        low, high = _parse_bounds(field, token)
        return FieldSpec(kind=FieldKind.RANGE, min=low, max=high)

    # Lists (1,3,5)
    if "," in token:
        return _compile_list(field, token)

    value = _to_int(token)
    if value is None:
        raise InvalidValueError(field.value, token)
    _check_domain(field, value)
    return FieldSpec(kind=FieldKind.VALUE, value=value)


def compile_grammar(expression: str) -> GrammarSpec:
    """Compile a five-field grammar string.

    Args:
        expression: e.g. "30 9 * * 1-5" (minute hour day-of-month month weekday)

    Returns:
        GrammarSpec with one FieldSpec per field

    Raises:
        GrammarError: one of its subclasses, naming the offending field and value
    """
    tokens = (expression or "").split()
    if len(tokens) != len(FIELD_ORDER):
        raise FieldCountError(expression or "")

    fields = {name.value: compile_field(token, name) for token, name in zip(tokens, FIELD_ORDER)}
    logger.debug(f"Compiled grammar '{expression}'")
    return GrammarSpec(**fields)


def is_valid_grammar(expression: str) -> bool:
    try:
        compile_grammar(expression)
    except GrammarError:
        return False
    return True
