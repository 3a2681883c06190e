"""Partition catalog built on the row store."""

from __future__ import annotations

import logging

from sqlalchemy import Integer, cast, func, select
from sqlalchemy.exc import SQLAlchemyError

from metacatalog.events import (
    EventDispatcher,
    EventListener,
    PartitionEvent,
    PartitionEventKind,
)
from metacatalog.models.metadata import PARTITION_KEYTYPE, PARTITION_NAMESPACE
from metacatalog.models.partition import Partition
from metacatalog.services.rows import RowStore

logger = logging.getLogger(__name__)


def _parse_id(name: str, value: str | None) -> int | None:
    """Plain ASCII decimal digits only; anything else is skipped."""
    if value is None or not (value.isascii() and value.isdigit()):
        logger.warning(f"Ignoring partition {name!r} with invalid id {value!r}")
        return None
    return int(value)


class PartitionCatalog:
    """Add, remove and look up partitions.

    Keeps a name -> id cache that mirrors this instance's own successful
    writes plus whatever load_partition_names() last read. Lookups always go
    to the store; the cache is only for collaborators that want it.
    """

    def __init__(self, rows: RowStore):
        self.rows = rows
        self._names: dict[str, int] = {}
        self._events = EventDispatcher()

    # -- cache -----------------------------------------------------------

    @property
    def cached_names(self) -> dict[str, int]:
        return dict(self._names)

    def cached_id(self, name: str) -> int | None:
        return self._names.get(name)

    def load_partition_names(self) -> None:
        """Refresh the cache from the store. A failed read leaves it as is."""
        vals = self.rows.list_by_type(PARTITION_NAMESPACE, PARTITION_KEYTYPE)
        if vals is None:
            return
        for name, value in vals.items():
            pid = _parse_id(name, value)
            if pid is not None:
                self._names[name] = pid

    # -- listeners -------------------------------------------------------

    def add_listener(self, listener: EventListener) -> None:
        self._events.add_listener(listener)

    def remove_listener(self, listener: EventListener) -> None:
        self._events.remove_listener(listener)

    # -- queries ---------------------------------------------------------

    def get_partition_by_name(self, name: str) -> Partition | None:
        value = self.rows.lookup(PARTITION_NAMESPACE, PARTITION_KEYTYPE, name)
        if value is None:
            return None
        pid = _parse_id(name, value)
        if pid is None:
            return None
        return Partition(pid, name)

    def get_all_partitions(self) -> set[Partition] | None:
        vals = self.rows.list_by_type(PARTITION_NAMESPACE, PARTITION_KEYTYPE)
        if vals is None:
            return None
        partitions = set()
        for name, value in vals.items():
            pid = _parse_id(name, value)
            if pid is not None:
                partitions.add(Partition(pid, name))
        return partitions

    def get_max_partition(self) -> int:
        """Largest partition id, or 0 when there are none or the query failed."""
        c = self.rows.table.c
        stmt = select(func.max(cast(c.value, Integer))).where(
            c.namespace == PARTITION_NAMESPACE, c.keytype == PARTITION_KEYTYPE,
        )
        try:
            with self.rows.handle.transaction() as conn:
                result = conn.execute(stmt).scalar()
        except SQLAlchemyError as e:
            logger.error(f"Could not get max partition: {e}")
            return 0
        return int(result) if result is not None else 0

    # -- writes ----------------------------------------------------------

    def add_partition(self, p: Partition) -> bool:
        """Record a new partition.

        Not atomic: another session can insert the same name between the
        existence check and the insert. The primary key rejects the second
        insert and that failure is reported like the pre-check rejection.
        """
        if self.get_partition_by_name(p.name) is not None:
            logger.error(f"Partition named {p.name} already exists")
            return False
        if not self.rows.insert(PARTITION_NAMESPACE, PARTITION_KEYTYPE, p.name, str(p.id)):
            logger.error(f"Could not add partition {p.name}")
            return False
        self._names[p.name] = p.id
        self._events.dispatch(PartitionEvent(PartitionEventKind.ADDED, p, self))
        return True

    def remove_partition(self, p: Partition) -> bool:
        """Delete a partition by name; the id is not checked."""
        if not self.rows.delete(PARTITION_NAMESPACE, PARTITION_KEYTYPE, p.name):
            return False
        self._names.pop(p.name, None)
        self._events.dispatch(PartitionEvent(PartitionEventKind.REMOVED, p, self))
        return True
