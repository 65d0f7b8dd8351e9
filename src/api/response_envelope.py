# This file builds response envelopes for API endpoints in a consistent format.
# Every envelope names its data source, so a client can tell live listings from the bundled set
# while the `data` payload keeps the same shape either way.

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from src.api.fallback import SOURCE_DATABASE, Resolved


def utc_now_iso() -> datetime:
    """Return timezone-aware UTC timestamp for response generation."""

    return datetime.now(tz=UTC)


def build_envelope(
    *,
    request_id: str,
    data: Any,
    source: str = SOURCE_DATABASE,
    warnings: list[str] | None = None,
) -> dict[str, Any]:
    """Build the standard response envelope."""

    return {
        "request_id": request_id,
        "generated_at": utc_now_iso(),
        "source": source,
        "data": data,
        "warnings": warnings,
    }


def build_resolved_envelope(*, request_id: str, resolved: Resolved[Any]) -> dict[str, Any]:
    """Envelope a resolver result, warning when the bundled dataset was served."""

    warnings = None
    if resolved.from_fallback:
        warnings = ["Showing bundled directory data; live data is unavailable."]
    return build_envelope(
        request_id=request_id,
        data=resolved.value,
        source=resolved.source,
        warnings=warnings,
    )
