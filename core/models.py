"""
Data models for scraped listings, schedules and search results.

JobListing uses Pydantic v2 so that it serialises with the camelCase field
names the web client expects (serialNumber, postName, ...).
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class JobListing(BaseModel):
    """One row of the source planner table. Immutable once extracted."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)

    serial_number: str = ""
    post_name: str = ""
    department: str = ""
    case_number: str = ""
    advertisement_number: str = ""
    closing_date: str = ""
    status: str = ""
    detail_link: str = ""

    def to_dict(self) -> Dict[str, str]:
        return self.model_dump(by_alias=True)


@dataclass(frozen=True)
class ScheduleSpec:
    keywords: Tuple[str, ...]
    recipient: str
    interval: str
    interval_ms: int

    @property
    def interval_seconds(self) -> float:
        return self.interval_ms / 1000


@dataclass
class SearchPage:
    count: int
    page: int
    total_pages: int
    data: List[JobListing] = field(default_factory=list)

    def to_dict(self) -> Dict:
        return {
            "success": True,
            "count": self.count,
            "page": self.page,
            "totalPages": self.total_pages,
            "data": [job.to_dict() for job in self.data],
        }
