import logging
from typing import List, Optional

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from core.config import get_settings
from core.errors import FetchError, ValidationError
from worker.notifier import ConsoleNotifier
from worker.pipeline import ListingPipeline
from worker.scheduler import JobScheduler, build_schedule
from worker.search import SearchService

log = logging.getLogger("app.jobs")

router = APIRouter()

settings = get_settings()
pipeline = ListingPipeline(settings)
scheduler = JobScheduler(pipeline, ConsoleNotifier(), overlap_policy=settings.overlap_policy)
search_service = SearchService(pipeline)


class SearchRequest(BaseModel):
    keywords: Optional[List[str]] = None


class StartJobRequest(BaseModel):
    keywords: Optional[List[str]] = None
    interval: Optional[str] = None
    phoneNo: Optional[str] = None


def _error(status_code: int, message: str, details: Optional[str] = None) -> JSONResponse:
    content = {"error": message}
    if details is not None:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content)


@router.get("/health")
def health():
    return {"status": "ok"}


@router.post("/api/search")
async def search(payload: SearchRequest, page: Optional[str] = None, limit: Optional[str] = None):
    try:
        result = await search_service.search(payload.keywords, page=page, limit=limit)
    except ValidationError as e:
        return _error(400, e.message)
    except FetchError as e:
        log.error("Scraping error", extra={"error": str(e)})
        return _error(500, "Failed to scrape data", details=str(e))
    return result.to_dict()


@router.post("/api/start-job")
async def start_job(payload: StartJobRequest):
    try:
        spec = build_schedule(payload.keywords, payload.interval, payload.phoneNo)
    except ValidationError as e:
        return _error(400, e.message)

    scheduler.start(spec)
    return {"success": True, "message": "Scheduler started"}


@router.post("/api/stop-job")
async def stop_job():
    if scheduler.stop():
        return {"success": True, "message": "Scheduler stopped"}
    return {"success": False, "message": "No active scheduler"}


@router.get("/api/job-status")
async def job_status():
    spec = scheduler.status()
    if spec is None:
        return {"running": False, "keywords": None, "interval": None, "intervalMs": None, "phoneNo": None}
    return {
        "running": True,
        "keywords": list(spec.keywords),
        "interval": spec.interval,
        "intervalMs": spec.interval_ms,
        "phoneNo": spec.recipient,
    }
