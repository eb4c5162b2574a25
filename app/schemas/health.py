"""Pydantic schemas for health check and discovery responses."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response body for the health check endpoint."""

    status: Literal["ok"] = Field(default="ok", description="Service status")
    environment: str = Field(description="Current app environment (e.g. dev, prod)")
    timestamp: datetime = Field(description="Server time (UTC) when the check ran")
    uptime: float = Field(description="Seconds since the app was created")
    database: Literal["connected", "disconnected"] | None = Field(
        default=None,
        description="Database connectivity status when check is performed",
    )


class RootResponse(BaseModel):
    """Discovery payload for GET /."""

    message: str
    endpoints: dict[str, str]


class StatusResponse(BaseModel):
    message: str
