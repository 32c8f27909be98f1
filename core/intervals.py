"""
Parse human interval strings ("2 hours", "1day", "3 weeks") into milliseconds.
"""
from __future__ import annotations

import re

from core.errors import InvalidInterval

MINUTE_MS = 60 * 1000
HOUR_MS = 60 * MINUTE_MS
DAY_MS = 24 * HOUR_MS
WEEK_MS = 7 * DAY_MS

# Checked in order; the first unit found anywhere in the text wins.
UNIT_MS = (
    ("min", MINUTE_MS),
    ("hour", HOUR_MS),
    ("day", DAY_MS),
    ("week", WEEK_MS),
)

LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def parse_interval(text: str | None) -> int:
    """
    Return the interval in milliseconds.

    Raises InvalidInterval when there is no leading integer, no recognised unit,
    or the result is not a positive duration.
    """
    if not isinstance(text, str):
        raise InvalidInterval(text)

    match = LEADING_INT.match(text)
    if not match:
        raise InvalidInterval(text)
    amount = int(match.group(1))

    for unit, unit_ms in UNIT_MS:
        if unit in text:
            total = amount * unit_ms
            if total <= 0:
                raise InvalidInterval(text)
            return total

    raise InvalidInterval(text)
