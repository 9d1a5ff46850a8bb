"""SupportHub routing — FastAPI application factory."""

import asyncio
import contextlib
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from sqlalchemy.exc import SQLAlchemyError

from supporthub.adapters.persistence.database import engine
from supporthub.config import settings
from supporthub.infrastructure.api.routes_health import router as health_router
from supporthub.infrastructure.api.routes_polling import router as polling_router
from supporthub.infrastructure.api.routes_queues import router as queues_router
from supporthub.infrastructure.api.routes_routing import router as routing_router
from supporthub.infrastructure.jobs.mailbox_polling import polling_loop

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    try:
        async with engine.begin():
            pass  # Connection pool warmed up
        logger.info("Database connection established")
    except (SQLAlchemyError, OSError) as e:
        logger.warning("Database not available on startup: %s", e)

    polling_task = None
    if settings.polling_job_enabled:
        polling_task = asyncio.create_task(polling_loop(settings.polling_tick_seconds))

    yield

    if polling_task is not None:
        polling_task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await polling_task
    await engine.dispose()


def create_app() -> FastAPI:
    app = FastAPI(
        title="SupportHub — Ticket Routing Engine",
        description="Rule-based queue, agent, priority and tag routing for support tickets",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.include_router(health_router, prefix="/api")
    app.include_router(routing_router, prefix="/api")
    app.include_router(queues_router, prefix="/api")
    app.include_router(polling_router, prefix="/api")

    return app


app = create_app()
