"""Partition value type."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Partition:
    """A named, identifier-tagged subdivision of stored data.

    Identifiers are assigned by the caller; the catalog only enforces that
    names are unique.
    """

    id: int
    name: str

    def __post_init__(self) -> None:
        if self.id < 0:
            raise ValueError(f"partition id must be >= 0, got {self.id}")
