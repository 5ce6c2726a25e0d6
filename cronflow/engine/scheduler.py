"""Occurrence search for CronFlow.

Finds the next timestamps matching a compiled grammar.
The search is bounded (a short minute-by-minute scan, then at most one week of minutes),
so it may return fewer occurrences than requested; that is a valid result, not an error.
"""

import logging
from datetime import datetime, time, timedelta
from typing import List

from cronflow.grammar.matcher import matches
from cronflow.models.constants import LOOKAHEAD_DAYS, LOOKAHEAD_MINUTES, NEXT_OCCURRENCES_COUNT
from cronflow.models.grammar import GrammarSpec

logger = logging.getLogger(__name__)


def next_occurrences(
    spec: GrammarSpec,
    now: datetime,
    count: int = NEXT_OCCURRENCES_COUNT,
) -> List[datetime]:
    """Find the next `count` timestamps matching `spec`.

    Two phases, stopping as soon as `count` occurrences are collected:
    - Fast scan: each of the next LOOKAHEAD_MINUTES minutes from `now`
    - Exhaustive scan: every minute of today and the following LOOKAHEAD_DAYS - 1 days

    Args:
        spec: Compiled grammar
        now: Reference instant (injected by the caller; never read from the system clock here)
        count: Maximum number of occurrences to return

    Returns:
        Ascending list of at most `count` timestamps, each strictly after `now`
    """
    occurrences: List[datetime] = []
    if count <= 0:
        return occurrences

    # Quick scan, minute granularity
    base = now.replace(second=0, microsecond=0)
    for i in range(LOOKAHEAD_MINUTES):
        if len(occurrences) >= count:
            break
        candidate = base + timedelta(minutes=i)
        if candidate > now and matches(candidate, spec):
            occurrences.append(candidate)

    # Thorough scan over the lookahead window
    if len(occurrences) < count:
        seen = set(occurrences)
        for day_offset in range(LOOKAHEAD_DAYS):
            day = now.date() + timedelta(days=day_offset)
            for hour in range(24):
                for minute in range(60):
                    if len(occurrences) >= count:
                        break
                    candidate = datetime.combine(day, time(hour, minute), tzinfo=now.tzinfo)
                    if candidate <= now or candidate in seen:
                        continue
                    if matches(candidate, spec):
                        occurrences.append(candidate)
                        seen.add(candidate)

    occurrences.sort()
    logger.debug(f"Found {len(occurrences)} of {count} requested occurrences after {now.isoformat()}")
    return occurrences


def format_relative(moment: datetime, now: datetime) -> str:
    """Format the distance from `now` to a future `moment`.

    Examples: "in less than a minute", "in 5 minutes", "in 2h 30m", "in 1 day", "in 3d 4h"
    """
    diff_minutes = int((moment - now).total_seconds() // 60)
    diff_hours = diff_minutes // 60
    diff_days = diff_hours // 24

    if diff_minutes < 1:
        return "in less than a minute"
    if diff_minutes < 60:
        return f"in {diff_minutes} minute{'s' if diff_minutes != 1 else ''}"
    if diff_hours < 24:
        remaining_minutes = diff_minutes % 60
        if remaining_minutes == 0:
            return f"in {diff_hours} hour{'s' if diff_hours != 1 else ''}"
        return f"in {diff_hours}h {remaining_minutes}m"
    remaining_hours = diff_hours % 24
    if remaining_hours == 0:
        return f"in {diff_days} day{'s' if diff_days != 1 else ''}"
    return f"in {diff_days}d {remaining_hours}h"
