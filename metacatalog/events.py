"""Event types and synchronous listener dispatch.

AtomEvent is the contract shared with a grounding/inference layer; this
package never emits it. PartitionEvent is what PartitionCatalog emits after a
successful add or remove.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Union

from metacatalog.models.partition import Partition

if TYPE_CHECKING:
    from metacatalog.services.partitions import PartitionCatalog

logger = logging.getLogger(__name__)


class AtomEventKind(str, Enum):
    CONSIDERED = "considered"
    ACTIVATED_RANDOM_VARIABLE = "activated-random-variable"
    ACTIVATED_OBSERVED = "activated-observed"
    ACTIVATED_RANDOM_VARIABLE_ONLINE = "activated-random-variable-online"


CONSIDERED_KINDS = frozenset({AtomEventKind.CONSIDERED})
ACTIVATED_KINDS = frozenset({
    AtomEventKind.ACTIVATED_RANDOM_VARIABLE,
    AtomEventKind.ACTIVATED_OBSERVED,
    AtomEventKind.ACTIVATED_RANDOM_VARIABLE_ONLINE,
})
ALL_KINDS = CONSIDERED_KINDS | ACTIVATED_KINDS


@dataclass(frozen=True)
class AtomEvent:
    """Something happened to an atom.

    Args:
        kind: What happened.
        atom: The affected atom.
        framework: The event framework that created the event.
    """

    kind: AtomEventKind
    atom: Any
    framework: Any


class PartitionEventKind(str, Enum):
    ADDED = "added"
    REMOVED = "removed"


@dataclass(frozen=True)
class PartitionEvent:
    """A partition was added to or removed from a catalog."""

    kind: PartitionEventKind
    partition: Partition
    catalog: PartitionCatalog


Event = Union[AtomEvent, PartitionEvent]


class EventListener(ABC):
    """Abstract listener interface."""

    @abstractmethod
    def notify(self, event: Event) -> None:
        """Receive one event."""
        ...


class EventDispatcher:
    """Delivers events to registered listeners in registration order."""

    def __init__(self):
        self._listeners: list[EventListener] = []

    @property
    def listeners(self) -> list[EventListener]:
        return list(self._listeners)

    def add_listener(self, listener: EventListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_listener(self, listener: EventListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def dispatch(self, event: Event) -> None:
        """Notify every listener; one failing listener does not stop the rest."""
        for listener in list(self._listeners):
            try:
                listener.notify(event)
            except Exception as e:
                logger.error(f"Listener {listener!r} failed on {event!r}: {e}", exc_info=True)
