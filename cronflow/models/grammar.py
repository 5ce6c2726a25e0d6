"""Compiled field-grammar models for CronFlow.

A grammar string has five whitespace-separated fields (minute hour day-of-month month weekday).
Each compiled field is an immutable FieldSpec; the five together form a GrammarSpec.
"""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class GrammarField(str, Enum):
    """Grammar positions, in wire order."""

    MINUTE = "minute"
    HOUR = "hour"
    DAY_OF_MONTH = "day_of_month"
    MONTH = "month"
    WEEKDAY = "weekday"


FIELD_ORDER: Tuple[GrammarField, ...] = (
    GrammarField.MINUTE,
    GrammarField.HOUR,
    GrammarField.DAY_OF_MONTH,
    GrammarField.MONTH,
    GrammarField.WEEKDAY,
)

# Declared (min, max) domain per field. Weekday 7 is an alias for Sunday (0).
FIELD_DOMAINS = MappingProxyType({
    GrammarField.MINUTE: (0, 59),
    GrammarField.HOUR: (0, 23),
    GrammarField.DAY_OF_MONTH: (1, 31),
    GrammarField.MONTH: (1, 12),
    GrammarField.WEEKDAY: (0, 7),
})


class FieldKind(str, Enum):
    """FieldSpec variants."""

    ANY = "any"
    VALUE = "value"
    RANGE = "range"
    LIST = "list"
    STEP = "step"
    RANGE_STEP = "rangeStep"


class FieldSpec(BaseModel):
    """One compiled grammar field.

    Which attributes are populated depends on `kind`:
    - value: `value`
    - range: `min`, `max`
    - list: `values`
    - step / rangeStep: `min`, `max`, `step`
    """

    model_config = ConfigDict(frozen=True)

    kind: FieldKind
    value: Optional[int] = None
    values: Optional[Tuple[int, ...]] = None
    min: Optional[int] = None
    max: Optional[int] = None
    step: Optional[int] = Field(None, ge=1)

    def to_token(self) -> str:
        """Format the field back into grammar text."""
        if self.kind == FieldKind.ANY:
            return "*"
        if self.kind == FieldKind.VALUE:
            return str(self.value)
        if self.kind == FieldKind.RANGE:
            return f"{self.min}-{self.max}"
        if self.kind == FieldKind.LIST:
            return ",".join(str(v) for v in self.values or ())
        if self.kind == FieldKind.STEP:
            # Boundaries are canonicalized to the domain, so `*` is enough.
            return f"*/{self.step}"
        return f"{self.min}-{self.max}/{self.step}"


ANY_FIELD = FieldSpec(kind=FieldKind.ANY)


class GrammarSpec(BaseModel):
    """A compiled five-field grammar."""

    model_config = ConfigDict(frozen=True)

    minute: FieldSpec
    hour: FieldSpec
    day_of_month: FieldSpec
    month: FieldSpec
    weekday: FieldSpec

    def field(self, name: GrammarField) -> FieldSpec:
        return getattr(self, GrammarField(name).value)

    def to_expression(self) -> str:
        return " ".join(self.field(name).to_token() for name in FIELD_ORDER)
