# Response shapes for the operational endpoints.

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str
    service_name: str
    environment: str
    request_id: str
    timestamp: datetime


class ReadinessResponse(BaseModel):
    """Order store readiness; `tables` maps each store role to its configured table name."""

    ready: bool
    database: str
    tables: dict[str, str]
    missing_tables: list[str]
    request_id: str
    timestamp: datetime


class VersionResponse(BaseModel):
    api_version: str
    schema_version: str
    service_name: str
    app_version: str
    request_id: str
    timestamp: datetime
