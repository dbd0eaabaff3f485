"""Health check endpoints; used for liveness and readiness probes."""

from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import get_settings
from app.domain.exceptions import PersistenceException
from app.infrastructure.persistence.database import bounded, get_db
from app.schemas.health import (
    HealthResponse,
    ReadinessErrorResponse,
    ReadinessResponse,
)

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Return simple ok status for liveness."""
    settings = get_settings()
    return HealthResponse(environment=settings.environment, version=settings.app_version)


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    responses={503: {"description": "Database unreachable", "model": ReadinessErrorResponse}},
)
async def readiness_check(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ReadinessResponse | JSONResponse:
    """Return 200 if the relational store answers; 503 otherwise."""
    try:
        await bounded(db.execute(text("SELECT 1")))
    except (PersistenceException, SQLAlchemyError, OSError) as e:
        return JSONResponse(
            status_code=503,
            content=ReadinessErrorResponse(message=type(e).__name__).model_dump(),
        )
    return ReadinessResponse()
