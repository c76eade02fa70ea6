"""Task Board API - FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Store and change broadcaster exist exactly for the lifespan of the app
    - Static client mounted AFTER the API routes so /graphql and /api/v1/* win
    - CORS configured from settings (not hardcoded)
"""

import logging
import os
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from taskboard.api.error_handlers import register_error_handlers
from taskboard.api.routes import health
from taskboard.api.routes.graphql import create_graphql_router
from taskboard.config import get_settings
from taskboard.infrastructure.database import init_db, close_db
from taskboard.infrastructure.notifications import (
    init_broadcaster, close_broadcaster,
)
from taskboard.infrastructure.observability import setup_logging
from taskboard.services.seed_data import seed_demo_tasks

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    await manager.create_schema()
    if settings.seed_demo_data:
        async with manager.session() as db:
            await seed_demo_tasks(db)
    init_broadcaster(settings.notification_queue_size)
    logger.info(
        f"Task board API started on http://{settings.host}:{settings.port}/graphql",
    )
    yield
    logger.info("Task board API shutting down")
    close_broadcaster()
    await close_db()


app = FastAPI(
    title="Task Board API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

app.include_router(health.router)
app.include_router(create_graphql_router(), prefix="/graphql")

# html=True serves index.html at /
if os.path.isdir(settings.static_dir):
    app.mount(
        "/", StaticFiles(directory=settings.static_dir, html=True), name="static",
    )


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    settings = get_settings()
    uvicorn.run(
        "taskboard.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
