"""
Talent Match API - Main Application Entry Point

This module initializes the FastAPI application with:
- Database connection and schema initialization
- CORS middleware (origins from CORS_ORIGINS)
- Prometheus metrics middleware
- Error handlers rendering {"error": ..., "details": ...} bodies
- API router registration

Architecture:
    FastAPI App
    ├── Lifespan Management (logging + database tables)
    ├── CORS Middleware
    ├── Prometheus Middleware (/metrics)
    └── API Router
        ├── /match-jobs - Candidate → jobs matching
        └── /search-candidates - Employer candidate search
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from talentmatch.api import api_router
from talentmatch.config import get_settings
from talentmatch.database import init_db
from talentmatch.exceptions import MatchingAPIError
from talentmatch.middleware.metrics import setup_metrics

settings = get_settings()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifecycle events.

    Startup:
        1. Configure log level
        2. Initialize database tables

    Yields:
        Control to the application during its runtime
    """
    logging.basicConfig(level=settings.log_level.upper())
    await init_db()
    logger.info("Talent Match API started")
    yield


app = FastAPI(
    title="Talent Match API",
    description="Candidate and job matching API",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials="*" not in settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

if settings.metrics_enabled:
    setup_metrics(app)

app.include_router(api_router)


@app.exception_handler(MatchingAPIError)
async def matching_error_handler(request: Request, exc: MatchingAPIError):
    if exc.status_code >= 500:
        logger.error(f"{request.url.path}: {exc.error} ({exc.details})")
    return JSONResponse(status_code=exc.status_code, content=jsonable_encoder(exc.to_dict()))


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid request body", "details": jsonable_encoder(exc.errors())},
    )


@app.get("/health")
async def health_check():
    return {"status": "healthy"}
