"""On-demand search over the shared listing pipeline."""
from __future__ import annotations

from core.filtering import normalize_keywords
from core.models import SearchPage
from core.pagination import DEFAULT_LIMIT, DEFAULT_PAGE, paginate, parse_positive_int
from worker.pipeline import Pipeline


class SearchService:
    """On-demand search: one pipeline run, then a page of the matches."""

    def __init__(self, pipeline: Pipeline):
        self._pipeline = pipeline

    async def search(self, keywords, page=None, limit=None) -> SearchPage:
        clean_keywords = normalize_keywords(keywords)
        page_num = parse_positive_int(page, DEFAULT_PAGE)
        page_size = parse_positive_int(limit, DEFAULT_LIMIT)

        matches = await self._pipeline.run(clean_keywords)
        data, total_pages = paginate(matches, page_num, page_size)
        return SearchPage(count=len(matches), page=page_num, total_pages=total_pages, data=data)
