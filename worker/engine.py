"""
Browser side of the scraper.

`PageDriver` is the small surface the pipeline needs from a browser page.
`open_page_driver` launches an isolated Playwright Chromium session for one
pipeline run and always closes it, whichever step fails.
"""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager, contextmanager
from typing import Any, AsyncContextManager, AsyncIterator, Callable, Dict, List, Protocol

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import async_playwright

from core.config import Settings
from core.errors import FetchError

log = logging.getLogger("worker.engine")

TABLE_SELECTOR = "table.dataTable"
# DataTables names the page-size select "<table id>_length".
PAGE_SIZE_SELECTOR = 'select[name*="_length"]'

BROWSER_ARGS = ["--no-sandbox", "--disable-setuid-sandbox"]

ROWS_SCRIPT = """
() => {
    const table = document.querySelector('table.dataTable');
    if (!table) return [];
    return Array.from(table.querySelectorAll('tbody tr')).map(row => ({
        cells: Array.from(row.querySelectorAll('td')).map(td => td.innerText),
        link: (row.querySelector('a') && row.querySelector('a').href) || ''
    }));
}
"""


class PageDriver(Protocol):
    async def goto(self, url: str, timeout_ms: int) -> None: ...

    async def wait_for_selector(self, selector: str, timeout_ms: int) -> None: ...

    async def has_selector(self, selector: str) -> bool: ...

    async def select_option(self, selector: str, value: str, timeout_ms: int) -> None: ...

    async def wait(self, ms: int) -> None: ...

    async def evaluate(self, script: str) -> Any: ...

    async def close(self) -> None: ...


DriverFactory = Callable[[Settings], AsyncContextManager[PageDriver]]


@contextmanager
def _step(name: str):
    try:
        yield
    except PlaywrightError as exc:
        raise FetchError(f"{name} failed: {exc}") from exc


class PlaywrightPageDriver:
    def __init__(self, playwright, browser, page):
        self._playwright = playwright
        self._browser = browser
        self._page = page

    @classmethod
    async def launch(cls, settings: Settings) -> "PlaywrightPageDriver":
        with _step("Playwright start"):
            playwright = await async_playwright().start()
        try:
            with _step("Browser launch"):
                browser = await playwright.chromium.launch(
                    headless=settings.headless,
                    args=BROWSER_ARGS,
                    timeout=settings.navigation_timeout_ms,
                )
                page = await browser.new_page()
        except BaseException:
            await playwright.stop()
            raise
        return cls(playwright, browser, page)

    async def goto(self, url: str, timeout_ms: int) -> None:
        with _step("Navigation"):
            response = await self._page.goto(url, timeout=timeout_ms)
        status = response.status if response else "no-response"
        log.info("Page loaded", extra={"url": url, "status": status})

    async def wait_for_selector(self, selector: str, timeout_ms: int) -> None:
        with _step(f"Waiting for {selector}"):
            await self._page.wait_for_selector(selector, timeout=timeout_ms)

    async def has_selector(self, selector: str) -> bool:
        with _step(f"Looking up {selector}"):
            return await self._page.query_selector(selector) is not None

    async def select_option(self, selector: str, value: str, timeout_ms: int) -> None:
        with _step(f"Selecting {value} in {selector}"):
            await self._page.select_option(selector, value, timeout=timeout_ms)

    async def wait(self, ms: int) -> None:
        if ms > 0:
            with _step("Waiting for table to settle"):
                await self._page.wait_for_timeout(ms)

    async def evaluate(self, script: str) -> Any:
        with _step("Table extraction"):
            return await self._page.evaluate(script)

    async def close(self) -> None:
        try:
            await self._browser.close()
        except PlaywrightError as exc:
            log.warning("Browser close failed", extra={"error": str(exc)})
        finally:
            await self._playwright.stop()


@asynccontextmanager
async def open_page_driver(settings: Settings) -> AsyncIterator[PageDriver]:
    """Yield a fresh browser page; the session is closed on every exit path."""
    driver = await PlaywrightPageDriver.launch(settings)
    try:
        yield driver
    finally:
        await driver.close()


async def fetch_raw_rows(driver: PageDriver, settings: Settings) -> List[Dict]:
    """Load the planner, show `page_size` rows per page and read the table body."""
    log.info("Navigating to listing page", extra={"url": settings.source_url})
    await driver.goto(settings.source_url, timeout_ms=settings.navigation_timeout_ms)

    log.info("Waiting for table...")
    await driver.wait_for_selector(TABLE_SELECTOR, timeout_ms=settings.selector_timeout_ms)

    if await driver.has_selector(PAGE_SIZE_SELECTOR):
        log.info("Changing entries to %s", settings.page_size)
        await driver.select_option(
            PAGE_SIZE_SELECTOR, settings.page_size, timeout_ms=settings.selector_timeout_ms
        )
        await driver.wait(settings.table_settle_ms)
    else:
        log.warning("Page-size selector not found; reading default page")

    rows = await driver.evaluate(ROWS_SCRIPT)
    if not isinstance(rows, list):
        return []
    return rows
