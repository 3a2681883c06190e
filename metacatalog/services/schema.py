"""Idempotent check-and-create of the metadata table."""

from __future__ import annotations

import logging

from sqlalchemy import inspect
from sqlalchemy.exc import SQLAlchemyError

from metacatalog.db import ConnectionHandle

logger = logging.getLogger(__name__)


class SchemaBootstrapper:
    """Creates the metadata table on first use.

    Failures are logged and swallowed. Two processes racing to create the
    table both survive; a genuine DDL problem only surfaces when the first
    row operation fails.
    """

    def __init__(self, handle: ConnectionHandle):
        self.handle = handle
        self._exists = False

    def table_exists(self) -> bool:
        """Check the store catalog for the table.

        A positive answer is remembered; tables are assumed not to disappear
        while the process runs. A negative answer is re-checked every call.
        """
        if self._exists:
            return True
        try:
            with self.handle.transaction() as conn:
                exists = inspect(conn).has_table(self.handle.table_name)
        except SQLAlchemyError as e:
            logger.error(f"Could not determine if metadata table exists: {e}")
            return False
        if exists:
            self._exists = True
        return exists

    def ensure_table(self) -> None:
        if self.table_exists():
            return
        try:
            with self.handle.transaction() as conn:
                self.handle.table.create(conn)
        except SQLAlchemyError as e:
            logger.error(f"Error while creating metadata table {self.handle.table_name}: {e}")
            return
        logger.debug(f"Created metadata table {self.handle.table_name}")
