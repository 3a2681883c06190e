"""Storage models for metacatalog.

The metadata table name is chosen at runtime, so the table is built per name
by build_metadata_table() rather than declared once.
"""

from metacatalog.models.metadata import (
    PARTITION_KEYTYPE,
    PARTITION_NAMESPACE,
    MetadataRow,
    build_metadata_table,
)
from metacatalog.models.partition import Partition

__all__ = [
    "PARTITION_KEYTYPE",
    "PARTITION_NAMESPACE",
    "MetadataRow",
    "Partition",
    "build_metadata_table",
]
