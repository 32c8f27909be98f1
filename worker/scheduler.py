"""
Recurring alert job.

A JobScheduler holds at most one active schedule. Starting a new schedule
cancels the previous timer first. Each tick spawns an independent pipeline
run as an asyncio task; ticks do not wait for earlier runs unless the
overlap policy is "skip".
"""
from __future__ import annotations

import asyncio
import logging
from typing import Callable, Optional, Protocol, Set

from core.errors import InvalidInterval, ValidationError
from core.filtering import normalize_keywords
from core.intervals import parse_interval
from core.models import ScheduleSpec
from worker.notifier import Notifier
from worker.pipeline import Pipeline

log = logging.getLogger("worker.scheduler")


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Timer(Protocol):
    def call_every(self, seconds: float, callback: Callable[[], None]) -> TimerHandle: ...


class _RepeatingHandle:
    def __init__(self, loop: asyncio.AbstractEventLoop, seconds: float, callback: Callable[[], None]):
        self._loop = loop
        self._seconds = seconds
        self._callback = callback
        self._next_at = loop.time() + seconds
        self._handle = loop.call_at(self._next_at, self._fire)

    def _fire(self) -> None:
        # Re-arm from the scheduled time, not from now, so ticks do not drift.
        self._next_at += self._seconds
        self._handle = self._loop.call_at(self._next_at, self._fire)
        self._callback()

    def cancel(self) -> None:
        self._handle.cancel()


class AsyncioTimer:
    """Repeating timer on the running event loop."""

    def call_every(self, seconds: float, callback: Callable[[], None]) -> TimerHandle:
        return _RepeatingHandle(asyncio.get_running_loop(), seconds, callback)


def build_schedule(keywords, interval, recipient) -> ScheduleSpec:
    """
    Validate raw start-job input.
    Raises ValidationError (or InvalidInterval) without side effects.
    """
    if not keywords or not interval or not recipient:
        raise ValidationError("Missing required fields")
    if not isinstance(interval, str) or not isinstance(recipient, str) or not recipient.strip():
        raise ValidationError("Missing required fields")

    clean_keywords = normalize_keywords(keywords)
    interval_ms = parse_interval(interval)
    return ScheduleSpec(
        keywords=clean_keywords,
        recipient=recipient.strip(),
        interval=interval,
        interval_ms=interval_ms,
    )


class JobScheduler:
    def __init__(
        self,
        pipeline: Pipeline,
        notifier: Notifier,
        timer: Optional[Timer] = None,
        overlap_policy: str = "allow",
    ):
        self._pipeline = pipeline
        self._notifier = notifier
        self._timer = timer or AsyncioTimer()
        self._overlap_policy = overlap_policy
        self._spec: Optional[ScheduleSpec] = None
        self._handle: Optional[TimerHandle] = None
        self._inflight: Set[asyncio.Task] = set()

    @property
    def running(self) -> bool:
        return self._handle is not None

    def status(self) -> Optional[ScheduleSpec]:
        return self._spec

    def start(self, spec: ScheduleSpec) -> int:
        """
        Replace any active schedule with `spec`, run once now and then every
        interval. Must be called from a running event loop. Returns the
        interval in milliseconds.
        """
        if spec.interval_ms <= 0:
            raise InvalidInterval(spec.interval)

        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
            log.info("[Scheduler] Replacing active schedule")

        log.info(
            "[Scheduler] Started. Interval: %s (%dms). Phone: %s",
            spec.interval,
            spec.interval_ms,
            spec.recipient,
        )
        self._spec = spec
        self._spawn_run(spec)
        self._handle = self._timer.call_every(spec.interval_seconds, lambda: self._tick(spec))
        return spec.interval_ms

    def stop(self) -> bool:
        """Cancel the timer. Returns False when there was nothing to stop."""
        if self._handle is None:
            return False
        self._handle.cancel()
        self._handle = None
        self._spec = None
        log.info("[Scheduler] Stopped.")
        return True

    async def shutdown(self) -> None:
        """Stop the timer and cancel runs still in flight."""
        self.stop()
        tasks = list(self._inflight)
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)

    async def wait_for_runs(self) -> None:
        """Wait until no pipeline run is in flight."""
        while self._inflight:
            await asyncio.gather(*list(self._inflight), return_exceptions=True)

    def _tick(self, spec: ScheduleSpec) -> None:
        if self._overlap_policy == "skip" and self._inflight:
            log.warning(
                "[Scheduler] Previous run still in progress, skipping tick",
                extra={"inflight": len(self._inflight)},
            )
            return
        self._spawn_run(spec)

    def _spawn_run(self, spec: ScheduleSpec) -> None:
        task = asyncio.get_running_loop().create_task(self.run_once(spec))
        self._inflight.add(task)
        task.add_done_callback(self._inflight.discard)

    async def run_once(self, spec: ScheduleSpec) -> int:
        """
        One pipeline run for `spec`. Failures are logged, never raised, so the
        schedule keeps ticking. Returns the number of listings delivered.
        """
        log.info("[Scheduler] Running task for keywords: %s", ", ".join(spec.keywords))
        try:
            matches = await self._pipeline.run(spec.keywords)
        except Exception as e:
            log.exception("[Scheduler] Error during run", extra={"error": str(e)})
            return 0

        if not matches:
            log.info("[Scheduler] No matching jobs found.")
            return 0

        try:
            self._notifier.deliver(spec.recipient, matches)
        except Exception as e:
            log.error("Failed to deliver alert", extra={"to": spec.recipient, "error": str(e)})
            return 0
        return len(matches)
