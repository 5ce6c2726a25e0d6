"""Grammar compilation errors.

Every error carries the offending field name and value so callers can build their own
message; `str(error)` is already a user-presentable message.
"""

from __future__ import annotations

from typing import Optional

from cronflow.models.constants import ERROR_MESSAGES


class GrammarError(ValueError):
    """Structured grammar error that can be surfaced as a 400."""

    def __init__(self, message: str, *, field: Optional[str] = None, value: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.field = field
        self.value = value


class FieldCountError(GrammarError):
    def __init__(self, value: str):
        super().__init__(ERROR_MESSAGES["INVALID_FIELD_COUNT"], value=value)


class EmptyFieldError(GrammarError):
    def __init__(self, field: str):
        super().__init__(ERROR_MESSAGES["EMPTY_FIELD"].format(field=field), field=field, value="")


class InvalidCharacterError(GrammarError):
    def __init__(self, field: str, value: str):
        super().__init__(ERROR_MESSAGES["INVALID_CHARACTERS"].format(field=field), field=field, value=value)


class InvalidStepError(GrammarError):
    def __init__(self, field: str, value: str):
        super().__init__(ERROR_MESSAGES["INVALID_STEP"].format(value=value), field=field, value=value)


class InvalidRangeFormatError(GrammarError):
    def __init__(self, field: str, value: str):
        super().__init__(ERROR_MESSAGES["INVALID_RANGE_FORMAT"].format(value=value), field=field, value=value)


class InvalidRangeValuesError(GrammarError):
    def __init__(self, field: str, value: str):
        super().__init__(ERROR_MESSAGES["INVALID_RANGE_VALUES"].format(value=value), field=field, value=value)


class InvalidRangeOrderError(GrammarError):
    def __init__(self, field: str, value: str, low: int, high: int):
        super().__init__(
            ERROR_MESSAGES["INVALID_RANGE_ORDER"].format(min=low, max=high), field=field, value=value
        )
        self.low = low
        self.high = high


class InvalidListValueError(GrammarError):
    def __init__(self, field: str, value: str):
        super().__init__(ERROR_MESSAGES["INVALID_LIST_VALUE"].format(value=value), field=field, value=value)


class InvalidValueError(GrammarError):
    def __init__(self, field: str, value: str):
        super().__init__(ERROR_MESSAGES["INVALID_VALUE"].format(value=value), field=field, value=value)


class OutOfRangeError(GrammarError):
    def __init__(self, field: str, value: int, low: int, high: int):
        super().__init__(
            ERROR_MESSAGES["OUT_OF_RANGE"].format(value=value, min=low, max=high),
            field=field,
            value=str(value),
        )
        self.low = low
        self.high = high
