"""
Alert delivery.

Only a console simulation of the WhatsApp message exists today; anything
with a `deliver(recipient, matches)` method can stand in for it.
"""
from __future__ import annotations

import logging
from typing import List, Protocol, Sequence

from core.models import JobListing

log = logging.getLogger("worker.notifier")

DIVIDER = "-" * 50


class Notifier(Protocol):
    def deliver(self, recipient: str, matches: Sequence[JobListing]) -> None: ...


def format_alert_message(matches: Sequence[JobListing]) -> str:
    lines: List[str] = []
    lines.append(f"Found {len(matches)} new jobs matching your criteria:\n")

    for idx, job in enumerate(matches, start=1):
        lines.append(f"{idx}. {job.post_name} ({job.department}) - Closing: {job.closing_date}")
        lines.append(f"   Link: {job.detail_link}")

    return "\n".join(lines)


class ConsoleNotifier:
    """Writes the message that would be sent over WhatsApp to the log."""

    def deliver(self, recipient: str, matches: Sequence[JobListing]) -> None:
        body = format_alert_message(matches)
        log.info(
            "[WHATSAPP SIMULATION] Sending message to %s:\n%s\n%s\n%s",
            recipient,
            DIVIDER,
            body,
            DIVIDER,
            extra={"to": recipient, "count": len(matches)},
        )
