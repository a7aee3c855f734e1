"""Teacher Portal API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map TeacherPortalError → structured JSON responses
    - CORS configured from settings (not hardcoded), credentials allowed for the
      auth cookie
    - Database initialized on startup via lifespan context manager

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Error handlers live in api/error_handlers.py; this module only wires things up
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from teacher_api.infrastructure import database
from teacher_api.infrastructure.observability import log_requests, setup_logging
from teacher_api.config import get_settings
from teacher_api.api.error_handlers import register_error_handlers
from teacher_api.api.routes import (
    assessments, attendance, communication, course, evaluations, filters,
    health, notifications, observations, schedule, teacher_main,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    database.init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    logger.info("Teacher Portal API started")
    yield
    if database.db_manager:
        await database.db_manager.dispose()
    logger.info("Teacher Portal API shutting down")


app = FastAPI(
    title="Teacher Portal API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.middleware("http")(log_requests)

app.include_router(health.router)
app.include_router(teacher_main.router)
app.include_router(schedule.router)
app.include_router(attendance.router)
app.include_router(assessments.router)
app.include_router(course.router)
app.include_router(observations.router)
app.include_router(notifications.router)
app.include_router(communication.router)
app.include_router(filters.router)
app.include_router(evaluations.router)

register_error_handlers(app)
