# src/dataitem/db/client.py
"""Database engine ownership and the FastAPI connection dependency."""

from typing import Iterator, Optional

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.pool import StaticPool

from dataitem.core.config import DbConfig
from dataitem.core.logging import log


class DbClient:
    """Owns the SQLAlchemy engine and hands out connections."""

    def __init__(self, config: DbConfig, engine: Optional[Engine] = None):
        self.config = config
        self.engine = engine or self._create_engine()

    def _create_engine(self) -> Engine:
        kwargs = {"echo": self.config.echo, "pool_pre_ping": self.config.pool_pre_ping}
        if self.config.url.startswith("sqlite"):
            # A single shared connection keeps an in-memory database alive.
            kwargs.update(connect_args={"check_same_thread": False}, poolclass=StaticPool)
        return create_engine(self.config.url, **kwargs)

    def get_db(self) -> Iterator[Connection]:
        """FastAPI dependency yielding a connection for one request."""
        with self.engine.connect() as connection:
            yield connection

    def test_connection(self) -> None:
        with self.engine.connect() as connection:
            connection.execute(text("SELECT 1"))
        log.success(f"Connected to {self.engine.url.render_as_string(hide_password=True)}")
