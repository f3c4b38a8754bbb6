"""
Resume Builder API - Main Application Entry Point

This module initializes the FastAPI application with:
- Database schema initialization
- CORS middleware for the editor frontend
- Prometheus metrics
- Store error -> HTTP response mapping
- API router registration

Architecture:
    FastAPI App
    ├── Lifespan Management (create tables on startup)
    ├── CORS Middleware (client_origin)
    ├── Prometheus Middleware (/metrics)
    └── API Router (/api)
        ├── /auth - Password login, session cookie
        ├── /resumes - Resume aggregates, HTML preview, PDF export
        ├── /skills, /skill-categories - Skill library
        ├── /experiences, /education, /projects, /contacts, /socials - Library
        └── /db - Raw table browser
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from resume_builder.config import get_settings
from resume_builder.database import init_db
from resume_builder.api import api_router
from resume_builder.middleware import setup_metrics
from resume_builder.services.errors import StoreError

settings = get_settings()

logging.basicConfig(level=settings.log_level, format='%(asctime)s - %(levelname)s - %(name)s - %(message)s')
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifecycle events.

    Startup:
        1. Create any missing tables

    Yields:
        Control to the application during its runtime
    """
    await init_db()
    logger.info("Database ready")
    yield


app = FastAPI(
    title="Resume Builder API",
    description="Reusable resume component library and resume composer",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.client_origin],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

setup_metrics(app)


@app.exception_handler(StoreError)
async def store_error_handler(request: Request, exc: StoreError):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


app.include_router(api_router, prefix="/api")


@app.get("/health")
async def health_check():
    return {"status": "healthy"}
