"""MetaCatalog main class (facade pattern)."""

from __future__ import annotations

import logging

from sqlalchemy import Connection

from metacatalog.config import CatalogConfig
from metacatalog.db import ConnectionHandle, Database
from metacatalog.services.partitions import PartitionCatalog
from metacatalog.services.rows import RowStore
from metacatalog.services.schema import SchemaBootstrapper

logger = logging.getLogger(__name__)


class MetaCatalog:
    """Wires handle, bootstrapper, row store and partition catalog together.

    Usage::

        with MetaCatalog("sqlite:///meta.db") as mc:
            mc.partitions.add_partition(Partition(1, "train"))
            mc.rows.insert("run", "owner", "train", "alice")

    Settings not passed explicitly come from CatalogConfig (env / .env).
    """

    def __init__(
        self,
        database_url: str | None = None,
        table_name: str | None = None,
        config: CatalogConfig | None = None,
        echo: bool | None = None,
    ):
        config = config or CatalogConfig()
        self.database_url = database_url or config.database_url
        self.table_name = table_name or config.table_name
        self._echo = config.echo if echo is None else echo
        self._db: Database | None = None
        self._conn: Connection | None = None
        self._owns_connection = True

        self.handle: ConnectionHandle | None = None
        self.schema: SchemaBootstrapper | None = None
        self.rows: RowStore | None = None
        self.partitions: PartitionCatalog | None = None

    @classmethod
    def from_connection(cls, conn: Connection, table_name: str) -> MetaCatalog:
        """Wrap a connection owned by the caller. close() will not close it."""
        mc = cls(database_url=str(conn.engine.url), table_name=table_name)
        mc._conn = conn
        mc._owns_connection = False
        return mc

    def init(self) -> MetaCatalog:
        """Connect, create the table if needed and warm the partition cache."""
        if self._conn is None:
            self._db = Database(self.database_url, echo=self._echo)
            self._conn = self._db.connect()
        self.handle = ConnectionHandle(self._conn, self.table_name)
        self.schema = SchemaBootstrapper(self.handle)
        self.rows = RowStore(self.handle)
        self.partitions = PartitionCatalog(self.rows)

        self.schema.ensure_table()
        self.partitions.load_partition_names()
        logger.debug(f"MetaCatalog ready on table {self.table_name}")
        return self

    def close(self) -> None:
        if self._owns_connection and self._conn is not None:
            self._conn.close()
        if self._db is not None:
            self._db.close()
        self._conn = None
        self._db = None

    def __enter__(self) -> MetaCatalog:
        if self.handle is None:
            self.init()
        return self

    def __exit__(self, *exc) -> None:
        self.close()
