"""
Error types shared by the API, the scheduler and the scraping engine.
"""
from __future__ import annotations


class ValidationError(ValueError):
    """Caller supplied bad input. Surfaced as a 400 response."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidInterval(ValidationError):
    def __init__(self, raw: str | None = None):
        super().__init__("Invalid interval format")
        self.raw = raw


class FetchError(RuntimeError):
    """The browser session failed to load or read the listing table."""


__all__ = ["ValidationError", "InvalidInterval", "FetchError"]
