"""
Per-request choice between the live datastore and the bundled static dataset.

Reads try the database (one retry on SQLAlchemy errors) and substitute the fallback value
when the datastore is unconfigured or keeps failing. Writes never fall back: an unconfigured
datastore is reported as NotConfiguredError so callers cannot mistake a no-op for a save.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

from prometheus_client import Counter
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from src.api.db_access import DatabaseClient
from src.api.error_handlers import NotConfiguredError, UpstreamError

logger = logging.getLogger(__name__)

T = TypeVar("T")

SOURCE_DATABASE = "database"
SOURCE_FALLBACK = "fallback"
READ_ATTEMPTS = 2

FALLBACK_READS_TOTAL = Counter(
    "directory_fallback_reads_total",
    "Reads answered from the static fallback dataset.",
    ["resource", "reason"],
)


@dataclass(frozen=True)
class Resolved(Generic[T]):
    value: T
    source: str

    @property
    def from_fallback(self) -> bool:
        return self.source == SOURCE_FALLBACK


class FallbackResolver:
    """Routes reads and writes to the datastore according to an explicit configuration flag."""

    def __init__(self, *, database_configured: bool, db: DatabaseClient | None) -> None:
        self.database_configured = database_configured and db is not None
        self.db = db

    def read(
        self,
        resource: str,
        query: Callable[[Session], T],
        fallback: Callable[[], T] | None = None,
    ) -> Resolved[T]:
        if not self.database_configured:
            if fallback is None:
                raise NotConfiguredError(
                    f"The datastore is not configured; {resource} is unavailable."
                )
            logger.info("Datastore not configured; using fallback data for %s", resource)
            FALLBACK_READS_TOTAL.labels(resource=resource, reason="not_configured").inc()
            return Resolved(value=fallback(), source=SOURCE_FALLBACK)

        last_error: SQLAlchemyError | None = None
        for attempt in range(1, READ_ATTEMPTS + 1):
            try:
                with self.db.session() as session:
                    return Resolved(value=query(session), source=SOURCE_DATABASE)
            except SQLAlchemyError as exc:
                last_error = exc
                logger.warning(
                    "Datastore read for %s failed (attempt %d/%d): %s",
                    resource,
                    attempt,
                    READ_ATTEMPTS,
                    exc,
                )

        if fallback is None:
            raise UpstreamError(
                f"Failed to read {resource} from the datastore.",
                error_code="DATASTORE_ERROR",
            ) from last_error
        logger.warning("Using fallback data for %s after datastore failure", resource)
        FALLBACK_READS_TOTAL.labels(resource=resource, reason="query_failed").inc()
        return Resolved(value=fallback(), source=SOURCE_FALLBACK)

    def write(self, resource: str, operation: Callable[[Session], T]) -> T:
        if not self.database_configured:
            raise NotConfiguredError(
                f"The datastore is not configured; cannot modify {resource}."
            )
        try:
            with self.db.session() as session:
                return operation(session)
        except SQLAlchemyError as exc:
            logger.error("Datastore write for %s failed: %s", resource, exc)
            raise UpstreamError(
                f"Failed to save {resource}.",
                error_code="DATASTORE_ERROR",
            ) from exc
