"""
Keyword and closing-date predicates applied to scraped listings.
"""
from __future__ import annotations

from datetime import date, datetime
from typing import Iterable, List, Optional, Sequence, Tuple

from core.errors import ValidationError
from core.models import JobListing


def normalize_keywords(raw) -> Tuple[str, ...]:
    """
    Strip caller keywords and drop blanks.

    Raises ValidationError when the input is not a list of strings or nothing
    usable remains.
    """
    if not raw or not isinstance(raw, (list, tuple)):
        raise ValidationError("Keywords are required")
    keywords = [k.strip() for k in raw if isinstance(k, str) and k.strip()]
    if not keywords:
        raise ValidationError("Keywords are required")
    return tuple(keywords)


def matches_keywords(job: JobListing, keywords: Sequence[str]) -> bool:
    """Case-insensitive OR match against "postName department"."""
    if not keywords:
        return False
    text = f"{job.post_name} {job.department}".lower()
    return any(k.lower() in text for k in keywords)


def parse_closing_date(raw: str) -> Optional[date]:
    """Parse a day-month-year date ("15-06-2024"). Returns None when unparsable."""
    parts = [p.strip() for p in (raw or "").split("-")]
    if len(parts) != 3:
        return None
    try:
        return datetime.strptime("-".join(parts), "%d-%m-%Y").date()
    except ValueError:
        return None


def is_open(job: JobListing, today: date) -> bool:
    """
    True unless the closing date parses and lies before today.
    Empty or unparsable dates keep the listing.
    """
    closing = parse_closing_date(job.closing_date)
    if closing is None:
        return True
    return closing >= today


def filter_listings(
    jobs: Iterable[JobListing],
    keywords: Sequence[str],
    today: Optional[date] = None,
) -> List[JobListing]:
    today = today or date.today()
    return [job for job in jobs if matches_keywords(job, keywords) and is_open(job, today)]
