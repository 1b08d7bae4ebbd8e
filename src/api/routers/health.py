# This file defines liveness, readiness, and version endpoints for the order API.
# Readiness answers whether the order store can serve requests: the database answers and
# the configured orders and users tables exist. A store that is not ready returns 503.

from __future__ import annotations

from datetime import UTC, datetime
from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response, status

from src.api.api_config import ApiConfig
from src.api.dependencies import get_config, get_database_client
from src.api.schema_versions import build_version_fields
from src.api.schemas.health_schemas import HealthResponse, ReadinessResponse, VersionResponse
from src.common.db import DatabaseClient

router = APIRouter(tags=["health"])
ConfigDep = Annotated[ApiConfig, Depends(get_config)]
DBDep = Annotated[DatabaseClient, Depends(get_database_client)]


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


def _store_tables(config: ApiConfig) -> dict[str, str]:
    return {"orders": config.orders_table_name, "users": config.users_table_name}


@router.get("/health", response_model=HealthResponse)
def health(request: Request, config: ConfigDep) -> dict[str, object]:
    return {
        "status": "ok",
        "service_name": config.api_name,
        "environment": config.environment,
        "request_id": request.state.request_id,
        "timestamp": _utc_now(),
    }


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    responses={status.HTTP_503_SERVICE_UNAVAILABLE: {"model": ReadinessResponse}},
)
def ready(request: Request, response: Response, config: ConfigDep, db: DBDep) -> dict[str, object]:
    tables = _store_tables(config)
    reachable = db.can_connect()
    # An unreachable database reports every table as missing.
    missing = [role for role, table in tables.items() if not (reachable and db.table_exists(table))]
    is_ready = reachable and not missing
    if not is_ready:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return {
        "ready": is_ready,
        "database": "reachable" if reachable else "unreachable",
        "tables": tables,
        "missing_tables": missing,
        "request_id": request.state.request_id,
        "timestamp": _utc_now(),
    }


@router.get("/version", response_model=VersionResponse)
def version(request: Request, config: ConfigDep) -> dict[str, object]:
    return {
        **build_version_fields(
            api_version_path=config.api_version_path,
            schema_version=config.schema_version,
        ),
        "service_name": config.api_name,
        "app_version": config.app_version,
        "request_id": request.state.request_id,
        "timestamp": _utc_now(),
    }
