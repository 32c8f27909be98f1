"""
Turn raw planner table rows into JobListing records.

A raw row is the dict produced in-page by `worker.engine.ROWS_SCRIPT`:
{"cells": [cell innerText, ...], "link": first anchor href or ""}.
"""
from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from core.models import JobListing

MIN_CELLS = 19

# field -> cell index
COLUMNS = {
    "serial_number": 0,
    "post_name": 1,
    "department": 2,
    "case_number": 3,
    "advertisement_number": 4,
    "closing_date": 7,
    "status": 18,
}


def _clean(value) -> str:
    if value is None:
        return ""
    return str(value).strip()


def extract_listing(row: Dict) -> Optional[JobListing]:
    """Return a JobListing, or None when the row has fewer than 19 cells."""
    cells = row.get("cells") if isinstance(row, dict) else None
    if not isinstance(cells, (list, tuple)) or len(cells) < MIN_CELLS:
        return None

    fields = {name: _clean(cells[idx]) for name, idx in COLUMNS.items()}
    return JobListing(detail_link=_clean(row.get("link")), **fields)


def extract_listings(rows: Iterable[Dict]) -> List[JobListing]:
    listings: List[JobListing] = []
    for row in rows or []:
        listing = extract_listing(row)
        if listing is not None:
            listings.append(listing)
    return listings
