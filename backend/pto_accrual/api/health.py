import logging
from typing import Literal

from fastapi import APIRouter
from pydantic import BaseModel
from sqlalchemy import text

from pto_accrual.config import get_settings
from pto_accrual.db import SessionDep

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Service status plus the schedule the accrual job runs on."""

    status: Literal["ok", "degraded"]
    version: str
    environment: str
    database: Literal["reachable", "unreachable"]
    accrual_timezone: str
    accrual_run_time: str
    worker_in_process: bool


@router.get("/health", response_model=HealthResponse)
async def health(session: SessionDep) -> HealthResponse:
    """Report version, store connectivity and accrual schedule."""
    settings = get_settings()
    database: Literal["reachable", "unreachable"] = "reachable"

    try:
        await session.execute(text("SELECT 1"))
    except Exception:
        logger.exception("Health check: database connectivity failed")
        database = "unreachable"

    return HealthResponse(
        status="ok" if database == "reachable" else "degraded",
        version=settings.app_version,
        environment=settings.environment,
        database=database,
        accrual_timezone=settings.accrual_timezone,
        accrual_run_time=settings.accrual_run_time.strftime("%H:%M"),
        worker_in_process=settings.run_accrual_worker,
    )
