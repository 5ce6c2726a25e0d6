"""Field grammar: compile, match and describe five-field schedule expressions."""

from cronflow.grammar.compiler import compile_field, compile_grammar, is_valid_grammar
from cronflow.grammar.describe import describe_field, describe_fields, explain
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
from cronflow.grammar.matcher import field_matches, matches

__all__ = [
    "compile_field",
    "compile_grammar",
    "is_valid_grammar",
    "describe_field",
    "describe_fields",
    "explain",
    "field_matches",
    "matches",
    "GrammarError",
    "FieldCountError",
    "EmptyFieldError",
    "InvalidCharacterError",
    "InvalidStepError",
    "InvalidRangeFormatError",
    "InvalidRangeValuesError",
    "InvalidRangeOrderError",
    "InvalidListValueError",
    "InvalidValueError",
    "OutOfRangeError",
]
