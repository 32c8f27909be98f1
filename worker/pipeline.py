"""
One pipeline run: fetch the planner table, extract listings, filter them.

Shared by the on-demand search and by every scheduled tick.
"""
from __future__ import annotations

import logging
from datetime import date
from typing import Callable, List, Optional, Protocol, Sequence

from core.config import Settings, get_settings
from core.filtering import filter_listings
from core.models import JobListing
from worker.engine import DriverFactory, fetch_raw_rows, open_page_driver
from worker.extractor import extract_listings

log = logging.getLogger("worker.pipeline")


class Pipeline(Protocol):
    async def run(self, keywords: Sequence[str]) -> List[JobListing]: ...


class ListingPipeline:
    def __init__(
        self,
        settings: Optional[Settings] = None,
        driver_factory: DriverFactory = open_page_driver,
        today: Callable[[], date] = date.today,
    ):
        self.settings = settings or get_settings()
        self._driver_factory = driver_factory
        self._today = today

    async def run(self, keywords: Sequence[str]) -> List[JobListing]:
        """
        Run fetch -> extract -> filter once with a fresh browser session.
        Raises FetchError when the page cannot be loaded or read.
        """
        log.info("Searching for keywords: %s", ", ".join(keywords))
        async with self._driver_factory(self.settings) as driver:
            rows = await fetch_raw_rows(driver, self.settings)

        jobs = extract_listings(rows)
        log.info("Found %d jobs. Filtering...", len(jobs), extra={"rows": len(rows)})

        matches = filter_listings(jobs, keywords, today=self._today())
        log.info("Found %d matches (after date filter).", len(matches))
        return matches
