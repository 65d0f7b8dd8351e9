# This file defines shared schema pieces reused by multiple API endpoints.
# Every read and write response is wrapped in the same envelope so clients can always find
# the request id, generation time and whether the data came from the live datastore or the bundled set.

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel

DataSource = Literal["database", "fallback"]


class EnvelopeFields(BaseModel):
    request_id: str
    generated_at: datetime
    source: DataSource
    warnings: list[str] | None = None


class ErrorResponse(BaseModel):
    error: str
    message: str
    details: Any | None = None
    request_id: str
    timestamp: datetime


class DeleteResult(BaseModel):
    success: bool
    id: int


class DeleteResponse(EnvelopeFields):
    data: DeleteResult
