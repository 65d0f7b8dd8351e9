# This file defines response schemas for health, readiness, and version endpoints.
# Readiness reports the datastore and each optional integration separately, because the
# directory keeps serving reads from bundled data when the datastore is absent.

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


class HealthResponse(BaseModel):
    schema_version: str
    request_id: str
    status: str
    environment: str
    service_name: str
    timestamp: datetime


class ReadinessResponse(BaseModel):
    schema_version: str
    request_id: str
    database_configured: bool
    db_connected: bool
    listings_source_ready: bool
    payments_configured: bool
    geocoding_configured: bool
    email_configured: bool
    ready: bool
    database: str
    timestamp: datetime


class VersionResponse(BaseModel):
    schema_version: str
    request_id: str
    api_prefix: str
    app_version: str
    git_commit: str | None = None
    project: str
    version: str
    timestamp: datetime
