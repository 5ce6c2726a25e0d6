"""Occurrence engine for CronFlow."""

from cronflow.engine.scheduler import format_relative, next_occurrences

__all__ = [
    "format_relative",
    "next_occurrences",
]
