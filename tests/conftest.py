from contextlib import asynccontextmanager
from datetime import date

import pytest

from core.errors import FetchError
from core.models import JobListing


TODAY = date(2024, 6, 15)


def _listing(post_name="Assistant", department="Health Department", closing_date="30-06-2024", **extra):
    return JobListing(post_name=post_name, department=department, closing_date=closing_date, **extra)


def _row(cells=19, link="https://example.com/advt/1", **values):
    """Raw table row as returned by the in-page script. `values` maps index -> text."""
    texts = [f"cell {i}" for i in range(cells)]
    for key, text in values.items():
        texts[int(key.lstrip("c"))] = text
    return {"cells": texts, "link": link}


class FakePageDriver:
    def __init__(self, rows=None, fail_on=None, has_page_size=True):
        self.rows = rows if rows is not None else []
        self.fail_on = fail_on
        self.has_page_size = has_page_size
        self.calls = []
        self.closed = False

    def _record(self, name, *args):
        self.calls.append((name,) + args)
        if self.fail_on == name:
            raise FetchError(f"{name} failed")

    async def goto(self, url, timeout_ms):
        self._record("goto", url, timeout_ms)

    async def wait_for_selector(self, selector, timeout_ms):
        self._record("wait_for_selector", selector, timeout_ms)

    async def has_selector(self, selector):
        self._record("has_selector", selector)
        return self.has_page_size

    async def select_option(self, selector, value, timeout_ms):
        self._record("select_option", selector, value, timeout_ms)

    async def wait(self, ms):
        self._record("wait", ms)

    async def evaluate(self, script):
        self._record("evaluate")
        return self.rows

    async def close(self):
        self.closed = True


class FakeDriverFactory:
    """Stands in for `open_page_driver`; keeps every driver it hands out."""

    def __init__(self, **driver_kwargs):
        self.driver_kwargs = driver_kwargs
        self.drivers = []

    @asynccontextmanager
    async def __call__(self, settings):
        driver = FakePageDriver(**self.driver_kwargs)
        self.drivers.append(driver)
        try:
            yield driver
        finally:
            await driver.close()


class FakeTimerHandle:
    def __init__(self, interval_ms, callback, now_ms):
        self.interval_ms = interval_ms
        self.callback = callback
        self.next_at = now_ms + interval_ms
        self.cancelled = False

    def cancel(self):
        self.cancelled = True


class FakeTimer:
    """Timer whose clock only moves when a test calls `advance`."""

    def __init__(self):
        self.now_ms = 0
        self.handles = []

    def call_every(self, seconds, callback):
        handle = FakeTimerHandle(round(seconds * 1000), callback, self.now_ms)
        self.handles.append(handle)
        return handle

    @property
    def active(self):
        return [h for h in self.handles if not h.cancelled]

    def advance(self, ms):
        target = self.now_ms + ms
        while True:
            due = [h for h in self.active if h.next_at <= target]
            if not due:
                break
            handle = min(due, key=lambda h: h.next_at)
            self.now_ms = handle.next_at
            handle.next_at += handle.interval_ms
            handle.callback()
        self.now_ms = target


class FakePipeline:
    def __init__(self, results=None, error=None, gate=None):
        self.results = results if results is not None else []
        self.error = error
        self.gate = gate
        self.calls = []

    async def run(self, keywords):
        self.calls.append(tuple(keywords))
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return list(self.results)


class RecordingNotifier:
    def __init__(self, error=None):
        self.error = error
        self.deliveries = []

    def deliver(self, recipient, matches):
        if self.error is not None:
            raise self.error
        self.deliveries.append((recipient, list(matches)))


@pytest.fixture
def make_listing():
    return _listing


@pytest.fixture
def make_row():
    return _row


@pytest.fixture
def driver_factory_cls():
    return FakeDriverFactory


@pytest.fixture
def fake_timer():
    return FakeTimer()


@pytest.fixture
def pipeline_cls():
    return FakePipeline


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def notifier_cls():
    return RecordingNotifier


@pytest.fixture
def today():
    return TODAY
