"""Test configuration and fixtures for metacatalog tests."""

from collections.abc import Generator

import pytest
from sqlalchemy import Connection, create_engine
from sqlalchemy.pool import StaticPool

from metacatalog.db import ConnectionHandle
from metacatalog.events import EventListener
from metacatalog.services.partitions import PartitionCatalog
from metacatalog.services.rows import RowStore
from metacatalog.services.schema import SchemaBootstrapper

TEST_DATABASE_URL = "sqlite://"
TEST_TABLE = "test_metadata"


class RecordingListener(EventListener):
    """Listener that keeps every event it is notified of."""

    def __init__(self):
        self.events = []

    def notify(self, event) -> None:
        self.events.append(event)


@pytest.fixture(scope="function")
def db_engine():
    """In-memory SQLite engine; one shared connection per test."""
    engine = create_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    yield engine
    engine.dispose()


@pytest.fixture(scope="function")
def db_conn(db_engine) -> Generator[Connection]:
    conn = db_engine.connect()
    yield conn
    conn.close()


@pytest.fixture
def handle(db_conn) -> ConnectionHandle:
    return ConnectionHandle(db_conn, TEST_TABLE)


@pytest.fixture
def schema(handle) -> SchemaBootstrapper:
    return SchemaBootstrapper(handle)


@pytest.fixture
def rows(handle, schema) -> RowStore:
    """Row store over a freshly created table."""
    schema.ensure_table()
    return RowStore(handle)


@pytest.fixture
def catalog(rows) -> PartitionCatalog:
    return PartitionCatalog(rows)


@pytest.fixture
def listener() -> RecordingListener:
    return RecordingListener()
