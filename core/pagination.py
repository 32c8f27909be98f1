"""
Pagination helpers for the on-demand search endpoint.
"""
from __future__ import annotations

import math
from typing import List, Sequence, Tuple, TypeVar

from core.intervals import LEADING_INT

T = TypeVar("T")

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 15


def parse_positive_int(raw, default: int) -> int:
    """
    Best-effort integer parse of a query value ("2", "15abc", 3).
    Missing, non-numeric, zero or negative values fall back to `default`.
    """
    if raw is None:
        return default
    if isinstance(raw, bool):
        return default
    if isinstance(raw, int):
        value = raw
    else:
        match = LEADING_INT.match(str(raw))
        if not match:
            return default
        value = int(match.group(1))
    return value if value > 0 else default


def paginate(items: Sequence[T], page: int, limit: int) -> Tuple[List[T], int]:
    """Return (slice for page, total pages). Pages past the end are empty."""
    total_pages = math.ceil(len(items) / limit)
    start = (page - 1) * limit
    return list(items[start:start + limit]), total_pages
