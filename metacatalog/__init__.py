"""
metacatalog - partition metadata catalog over one relational table.

Stores named, identifier-tagged partitions and arbitrary namespaced
key/value metadata, with an in-memory name -> id cache.
"""

from metacatalog._core import MetaCatalog
from metacatalog.config import CatalogConfig, load_config
from metacatalog.db import ConnectionHandle, Database
from metacatalog.events import (
    AtomEvent,
    AtomEventKind,
    EventDispatcher,
    EventListener,
    PartitionEvent,
    PartitionEventKind,
)
from metacatalog.models import MetadataRow, Partition
from metacatalog.services.partitions import PartitionCatalog
from metacatalog.services.rows import RowStore
from metacatalog.services.schema import SchemaBootstrapper

__all__ = [
    "AtomEvent",
    "AtomEventKind",
    "CatalogConfig",
    "ConnectionHandle",
    "Database",
    "EventDispatcher",
    "EventListener",
    "MetaCatalog",
    "MetadataRow",
    "Partition",
    "PartitionCatalog",
    "PartitionEvent",
    "PartitionEventKind",
    "RowStore",
    "SchemaBootstrapper",
    "load_config",
]
