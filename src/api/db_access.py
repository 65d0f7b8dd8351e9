# This file wraps the SQLAlchemy engine and ORM session factory used by API services.
# The engine is created lazily on first use so an unreachable database never blocks startup.
# Sessions commit on success and roll back on any exception raised inside the `with` block.

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from sqlalchemy import create_engine, inspect, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from src.directory.models import Base


class DatabaseClient:
    """Minimal SQLAlchemy wrapper for ORM read/write access."""

    def __init__(self, *, database_url: str, connect_timeout_seconds: int = 5) -> None:
        self._database_url = database_url
        self._connect_timeout_seconds = connect_timeout_seconds
        self._engine: Engine | None = None
        self._session_factory: sessionmaker[Session] | None = None

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            self._engine = create_engine(
                self._database_url,
                pool_pre_ping=True,
                future=True,
                connect_args=self._connect_args(),
            )
        return self._engine

    def _connect_args(self) -> dict[str, Any]:
        if self._database_url.startswith("postgresql"):
            return {"connect_timeout": self._connect_timeout_seconds}
        if self._database_url.startswith("sqlite"):
            return {"timeout": self._connect_timeout_seconds, "check_same_thread": False}
        return {}

    @contextmanager
    def session(self) -> Iterator[Session]:
        if self._session_factory is None:
            self._session_factory = sessionmaker(
                bind=self.engine, autoflush=False, expire_on_commit=False, class_=Session
            )
        session = self._session_factory()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def can_connect(self) -> bool:
        try:
            with self.engine.connect() as connection:
                connection.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError:
            return False

    def table_exists(self, table_name: str) -> bool:
        return inspect(self.engine).has_table(table_name)

    def create_schema(self) -> None:
        Base.metadata.create_all(self.engine)
