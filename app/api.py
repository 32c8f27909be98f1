from contextlib import asynccontextmanager

from dotenv import load_dotenv

# Load `.env` before the routes read settings. override=True so edits to `.env`
# take effect on restart even if older values exist in the environment.
load_dotenv(override=True)

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.routes import jobs
from core.config import configure_logging, get_settings


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(get_settings().log_level)
    yield
    await jobs.scheduler.shutdown()


app = FastAPI(lifespan=lifespan)


app.include_router(jobs.router)


@app.exception_handler(RequestValidationError)
async def invalid_body_handler(request: Request, exc: RequestValidationError):
    details = [err.get("msg", "") for err in exc.errors()]
    return JSONResponse(status_code=400, content={"error": "Invalid request body", "details": details})


@app.middleware("http")
async def add_security_headers(request: Request, call_next):
    response = await call_next(request)
    response.headers.setdefault("X-Content-Type-Options", "nosniff")
    response.headers.setdefault("X-Frame-Options", "SAMEORIGIN")
    response.headers.setdefault(
        "Content-Security-Policy",
        "default-src 'self'; img-src 'self' data:; style-src 'self' 'unsafe-inline'; script-src 'self' 'unsafe-inline'; "
        "font-src 'self' data:; connect-src 'self';",
    )
    return response
