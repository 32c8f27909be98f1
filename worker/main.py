"""
Run the alert schedule from the command line, without the HTTP API.

  python -m worker.main --keywords Assistant Clerk --interval "1 hour" --phone +15550100
  python -m worker.main --keywords Assistant --interval "1 min" --phone +15550100 --once
"""
import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from dotenv import load_dotenv

from core.config import configure_logging, get_settings
from core.errors import FetchError, ValidationError
from core.models import ScheduleSpec
from worker.notifier import ConsoleNotifier, Notifier
from worker.pipeline import ListingPipeline, Pipeline
from worker.scheduler import JobScheduler, build_schedule

# Load `.env` for local/dev runs (override=True so updates take effect after restart).
load_dotenv(override=True)

log = logging.getLogger("worker")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Watch the planner for matching jobs.")
    parser.add_argument("--keywords", nargs="+", required=True, help="Keywords matched against post name and department.")
    parser.add_argument("--interval", required=True, help='e.g. "30 min", "2 hours", "1 day", "1 week".')
    parser.add_argument("--phone", required=True, help="Recipient for alerts.")
    parser.add_argument("--once", action="store_true", help="Run the pipeline once and exit.")
    args = parser.parse_args(argv)

    try:
        args.spec = build_schedule(args.keywords, args.interval, args.phone)
    except ValidationError as e:
        parser.error(e.message)
    return args


async def run_single(pipeline: Pipeline, notifier: Notifier, spec: ScheduleSpec) -> int:
    """One run with errors propagated. Returns the number of matches."""
    matches = await pipeline.run(spec.keywords)
    if matches:
        notifier.deliver(spec.recipient, matches)
    else:
        log.info("No matching jobs found.")
    return len(matches)


async def run_forever(scheduler: JobScheduler, spec: ScheduleSpec) -> None:
    scheduler.start(spec)
    try:
        await asyncio.Event().wait()
    finally:
        await scheduler.shutdown()


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    settings = get_settings()
    configure_logging(settings.log_level)

    pipeline = ListingPipeline(settings)
    notifier = ConsoleNotifier()

    if args.once:
        try:
            asyncio.run(run_single(pipeline, notifier, args.spec))
        except FetchError as e:
            log.error("Scraping failed", extra={"error": str(e)})
            return 1
        return 0

    scheduler = JobScheduler(pipeline, notifier, overlap_policy=settings.overlap_policy)
    try:
        asyncio.run(run_forever(scheduler, args.spec))
    except KeyboardInterrupt:
        log.info("Interrupted, exiting.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
