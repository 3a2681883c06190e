"""Database management - engine factory and the single-connection handle."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import Connection, Table, create_engine
from sqlalchemy.pool import StaticPool

from metacatalog.models.metadata import build_metadata_table


class Database:
    """Engine holder used by the facade and the CLI."""

    def __init__(self, url: str, echo: bool = False):
        kwargs = {}
        if url in ("sqlite://", "sqlite:///:memory:"):
            # An in-memory database only exists on the connection that made it.
            kwargs = {
                "poolclass": StaticPool,
                "connect_args": {"check_same_thread": False},
            }
        self.url = url
        self.engine = create_engine(url, echo=echo, **kwargs)

    def connect(self) -> Connection:
        """Open a new connection. The caller owns it."""
        return self.engine.connect()

    def close(self) -> None:
        """Dispose engine and release all connections."""
        self.engine.dispose()


class ConnectionHandle:
    """One live connection plus the metadata table it is bound to.

    The handle never opens or closes the connection; a dead connection shows
    up as failures from every component using it.
    """

    def __init__(self, conn: Connection, table_name: str):
        if not table_name:
            raise ValueError("table_name is required")
        self.conn = conn
        self.table_name = table_name
        self.table: Table = build_metadata_table(table_name)

    @contextmanager
    def transaction(self) -> Iterator[Connection]:
        """Yield the connection; commit on success, rollback and re-raise on error."""
        try:
            yield self.conn
            self.conn.commit()
        except Exception:
            self.conn.rollback()
            raise
