"""
Environment-driven settings and logging setup.

Entry points call `load_dotenv(override=True)` before reading settings, so
values from `.env` take effect after a restart.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass

DEFAULT_SOURCE_URL = "https://ppsc.gop.pk/planner/showdata.aspx"
OVERLAP_POLICIES = ("allow", "skip")

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def _env_int(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, str(default)))
    except ValueError:
        return default


def _env_bool(name: str, default: bool) -> bool:
    return os.getenv(name, str(default)).lower() in ("1", "true", "yes")


@dataclass(frozen=True)
class Settings:
    source_url: str = DEFAULT_SOURCE_URL
    headless: bool = True
    navigation_timeout_ms: int = 60000
    selector_timeout_ms: int = 30000
    table_settle_ms: int = 3000
    page_size: str = "100"
    overlap_policy: str = "allow"
    log_level: str = "INFO"
    port: int = 3000


def get_settings() -> Settings:
    overlap_policy = os.getenv("OVERLAP_POLICY", "allow").strip().lower()
    if overlap_policy not in OVERLAP_POLICIES:
        overlap_policy = "allow"

    return Settings(
        source_url=os.getenv("SOURCE_URL") or DEFAULT_SOURCE_URL,
        headless=_env_bool("PLAYWRIGHT_HEADLESS", True),
        navigation_timeout_ms=_env_int("NAVIGATION_TIMEOUT_MS", 60000),
        selector_timeout_ms=_env_int("SELECTOR_TIMEOUT_MS", 30000),
        table_settle_ms=_env_int("TABLE_SETTLE_MS", 3000),
        page_size=os.getenv("PAGE_SIZE") or "100",
        overlap_policy=overlap_policy,
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
        port=_env_int("PORT", 3000),
    )


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT)
