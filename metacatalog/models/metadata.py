"""Namespaced key/value metadata table."""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy import Column, MetaData, PrimaryKeyConstraint, String, Table

# Reserved slice holding partition records.
PARTITION_NAMESPACE = "Partition"
PARTITION_KEYTYPE = "name"


@dataclass(frozen=True)
class MetadataRow:
    namespace: str
    keytype: str
    key: str
    value: str


def build_metadata_table(name: str, metadata: MetaData | None = None) -> Table:
    """Build the Table for a metadata table called ``name``.

    Column widths and the composite primary key are a persisted contract
    shared with other processes using the same table.
    """
    return Table(
        name,
        metadata if metadata is not None else MetaData(),
        Column("namespace", String(20), nullable=False),
        Column("keytype", String(20), nullable=False),
        Column("key", String(255), nullable=False),
        Column("value", String(255)),
        PrimaryKeyConstraint("namespace", "keytype", "key"),
    )
