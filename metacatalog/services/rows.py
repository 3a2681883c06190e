"""Row store - namespaced key/value access over the metadata table."""

from __future__ import annotations

import logging

from sqlalchemy import delete, insert, select
from sqlalchemy.exc import SQLAlchemyError

from metacatalog.db import ConnectionHandle
from metacatalog.models.metadata import MetadataRow

logger = logging.getLogger(__name__)


class RowStore:
    """Generic ``(namespace, keytype, key) -> value`` access.

    Failures never raise: writes report ``False`` and reads report ``None``,
    so a missing row and a failed query look the same to the caller.
    """

    def __init__(self, handle: ConnectionHandle):
        self.handle = handle
        self.table = handle.table

    @property
    def table_name(self) -> str:
        return self.handle.table_name

    def _match(self, namespace: str, keytype: str, key: str):
        c = self.table.c
        return (c.namespace == namespace, c.keytype == keytype, c.key == key)

    def insert(self, namespace: str, keytype: str, key: str, value: str) -> bool:
        """Insert one row. A duplicate key is a failure like any other."""
        stmt = insert(self.table).values(
            namespace=namespace, keytype=keytype, key=key, value=value,
        )
        try:
            with self.handle.transaction() as conn:
                conn.execute(stmt)
        except SQLAlchemyError as e:
            logger.info(f"Error adding row {namespace}/{keytype}/{key} to metadata: {e}")
            return False
        logger.debug(f"Added metadata row {namespace}/{keytype}/{key}")
        return True

    def lookup(self, namespace: str, keytype: str, key: str) -> str | None:
        stmt = select(self.table.c.value).where(*self._match(namespace, keytype, key))
        try:
            with self.handle.transaction() as conn:
                return conn.execute(stmt).scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.info(f"Error getting value for key {key}: {e}")
            return None

    def delete(self, namespace: str, keytype: str, key: str) -> bool:
        """Delete a row. Deleting a row that is not there still succeeds."""
        stmt = delete(self.table).where(*self._match(namespace, keytype, key))
        try:
            with self.handle.transaction() as conn:
                conn.execute(stmt)
        except SQLAlchemyError as e:
            logger.info(f"Error removing row {namespace}/{keytype}/{key}: {e}")
            return False
        logger.debug(f"Removed metadata row {namespace}/{keytype}/{key}")
        return True

    def list_by_type(self, namespace: str, keytype: str) -> dict[str, str] | None:
        """All ``key -> value`` pairs for one namespace/keytype.

        Returns an empty dict when nothing matches and ``None`` when the query
        failed; callers must keep the two apart.
        """
        c = self.table.c
        stmt = select(c.key, c.value).where(
            c.namespace == namespace, c.keytype == keytype,
        )
        try:
            with self.handle.transaction() as conn:
                rows = conn.execute(stmt).all()
        except SQLAlchemyError as e:
            logger.error(f"Error getting all values for type {namespace}/{keytype}: {e}")
            return None
        return {key: value for key, value in rows}

    def list_namespace(self, namespace: str) -> list[MetadataRow] | None:
        """Every row in a namespace, ordered by keytype then key."""
        c = self.table.c
        stmt = (
            select(c.namespace, c.keytype, c.key, c.value)
            .where(c.namespace == namespace)
            .order_by(c.keytype, c.key)
        )
        try:
            with self.handle.transaction() as conn:
                rows = conn.execute(stmt).all()
        except SQLAlchemyError as e:
            logger.error(f"Error listing namespace {namespace}: {e}")
            return None
        return [MetadataRow(*row) for row in rows]
