from __future__ import annotations

import asyncio
import contextlib
import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI

from pto_accrual.api.health import router as health_router
from pto_accrual.api.router import api_router
from pto_accrual.config import get_settings
from pto_accrual.db import dispose_engine, init_models
from pto_accrual.exceptions import setup_exception_handlers
from pto_accrual.log import configure_logging
from pto_accrual.middleware import setup_middleware
from pto_accrual.worker import run_accrual_loop

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    """Create tables and, when enabled, run the accrual loop alongside the API."""
    settings = get_settings()
    logger.info("Starting %s v%s [%s]", settings.app_name, settings.app_version, settings.environment)

    if settings.create_tables_on_startup:
        await init_models()

    worker: asyncio.Task[None] | None = None
    if settings.run_accrual_worker:
        worker = asyncio.create_task(run_accrual_loop(), name="pto-accrual-worker")

    yield

    if worker is not None:
        worker.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await worker
    await dispose_engine()
    logger.info("Shut down %s", settings.app_name)


def create_app() -> FastAPI:
    """Application factory."""
    settings = get_settings()
    configure_logging(settings.log_level)

    application = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Pay-period PTO accrual with worked-hours banking.",
        debug=settings.debug,
        lifespan=lifespan,
        docs_url=None if settings.environment == "production" else "/docs",
        redoc_url=None,
    )

    setup_middleware(application, settings)
    setup_exception_handlers(application)

    application.include_router(health_router)
    application.include_router(api_router)

    return application


app = create_app()
