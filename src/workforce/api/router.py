"""Root API router: liveness, readiness and build info."""

from typing import Any

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from sqlalchemy import inspect, text
from sqlalchemy.ext.asyncio import AsyncSession

from workforce import __version__
from workforce.api.dependencies import DBSession
from workforce.config import settings
from workforce.modules.employees.models import employees_table


class HealthResponse(BaseModel):
    status: str


class ReadinessResponse(BaseModel):
    """Overall state plus one entry per dependency checked."""

    status: str
    checks: dict[str, str]


api_router = APIRouter()
health_router = APIRouter(tags=["health"])


async def _check_database(db: AsyncSession) -> str:
    try:
        await db.execute(text("SELECT 1"))
    except Exception as e:
        return str(e)
    return "ok"


async def _check_employees_table(db: AsyncSession) -> str:
    # The master only carries the table when the initializer runs for_master
    connection = await db.connection()
    exists = await connection.run_sync(
        lambda sync_conn: inspect(sync_conn).has_table(employees_table.name)
    )
    return "ok" if exists else "missing"


@health_router.get(
    "/health/live",
    response_model=HealthResponse,
    summary="Liveness probe",
)
async def liveness() -> HealthResponse:
    return HealthResponse(status="alive")


@health_router.get(
    "/health/ready",
    response_model=ReadinessResponse,
    summary="Readiness probe",
    description="Checks master database connectivity and the Employees table.",
)
async def readiness(db: DBSession) -> JSONResponse:
    """Return 503 when the master database cannot be reached.

    A missing Employees table is reported but does not fail readiness.
    """
    checks = {"database": await _check_database(db)}
    if checks["database"] == "ok":
        checks["employees_table"] = await _check_employees_table(db)

    ready = checks["database"] == "ok"
    return JSONResponse(
        status_code=status.HTTP_200_OK if ready else status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"status": "ready" if ready else "degraded", "checks": checks},
    )


@health_router.get("/info", summary="Application info")
async def info() -> dict[str, Any]:
    initializers = [section.name for section in settings.database_initializers]
    return {
        "app": settings.app_name,
        "version": __version__,
        "environment": settings.environment,
        "debug": settings.debug,
        "initializers": initializers,
    }


api_router.include_router(health_router)
