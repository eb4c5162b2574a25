"""Discovery, liveness and status endpoints (no authentication)."""

import time
from datetime import UTC, datetime
from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from app.core.database import AppContext, check_db_connected, get_context, get_db
from app.schemas.health import HealthResponse, RootResponse, StatusResponse

router = APIRouter()

ENDPOINTS = {
    "health": "/health",
    "api": "/api",
    "auth": "/auth",
    "users": "/users",
}


@router.get("/", response_model=RootResponse)
def root() -> RootResponse:
    """Root route; lists the endpoint groups."""
    return RootResponse(message="Hello from User Records API!", endpoints=ENDPOINTS)


@router.get("/health", response_model=HealthResponse)
def get_health(
    request: Request,
    ctx: Annotated[AppContext, Depends(get_context)],
    db: Annotated[Session, Depends(get_db)],
) -> HealthResponse:
    """
    Return service health status and database connectivity.
    Used by load balancers and monitoring.
    """
    db_status = "connected" if check_db_connected(db) else "disconnected"
    uptime = time.monotonic() - request.app.state.started_at

    return HealthResponse(
        status="ok",
        environment=ctx.settings.APP_ENV,
        timestamp=datetime.now(UTC),
        uptime=round(uptime, 3),
        database=db_status,
    )


@router.get("/api", response_model=StatusResponse)
def api_status() -> StatusResponse:
    return StatusResponse(message="User Records API is running!")
