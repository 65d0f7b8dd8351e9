# This file defines liveness, readiness, and version endpoints for API operations.
# It exists so orchestration and monitoring systems can verify service health quickly.
# Readiness reports the datastore and every optional integration; without a datastore the API
# still serves bundled listings, so `ready` only requires a reachable database when one is configured.

from __future__ import annotations

import subprocess
from datetime import UTC, datetime
from typing import Annotated

from fastapi import APIRouter, Depends, Request

from src.api.api_config import ApiConfig
from src.api.db_access import DatabaseClient
from src.api.dependencies import get_config, get_database_client
from src.api.schemas.health_schemas import HealthResponse, ReadinessResponse, VersionResponse

router = APIRouter(tags=["health"])
ConfigDep = Annotated[ApiConfig, Depends(get_config)]
DBDep = Annotated[DatabaseClient | None, Depends(get_database_client)]


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


def _git_commit() -> str | None:
    try:
        completed = subprocess.run(
            ["git", "rev-parse", "--short", "HEAD"],
            check=True,
            capture_output=True,
            text=True,
        )
    except (OSError, subprocess.CalledProcessError):
        return None
    return completed.stdout.strip() or None


@router.get("/health", response_model=HealthResponse)
def health(
    request: Request,
    config: ConfigDep,
) -> dict[str, object]:
    return {
        "schema_version": config.schema_version,
        "request_id": request.state.request_id,
        "status": "ok",
        "environment": config.environment,
        "service_name": config.api_name,
        "timestamp": _utc_now(),
    }


@router.get("/ready", response_model=ReadinessResponse)
def ready(
    request: Request,
    config: ConfigDep,
    db: DBDep,
) -> dict[str, object]:
    db_connected = db is not None and db.can_connect()
    listings_source_ready = db_connected and db.table_exists("companies")
    if config.database_configured:
        is_ready = db_connected and listings_source_ready
        database = "reachable" if db_connected else "unreachable"
    else:
        is_ready = True
        database = "not_configured"

    return {
        "schema_version": config.schema_version,
        "request_id": request.state.request_id,
        "database_configured": config.database_configured,
        "db_connected": db_connected,
        "listings_source_ready": listings_source_ready,
        "payments_configured": config.payments_configured,
        "geocoding_configured": config.geocoding_configured,
        "email_configured": config.email_configured,
        "ready": is_ready,
        "database": database,
        "timestamp": _utc_now(),
    }


@router.get("/version", response_model=VersionResponse)
def version(
    request: Request,
    config: ConfigDep,
) -> dict[str, object]:
    return {
        "schema_version": config.schema_version,
        "request_id": request.state.request_id,
        "api_prefix": config.api_prefix,
        "app_version": config.app_version,
        "git_commit": _git_commit(),
        "project": config.api_name,
        "version": config.app_version,
        "timestamp": _utc_now(),
    }
