"""Record and item value types.

Records are frozen dataclasses: a decoded ``Record`` is a snapshot of the
persisted arena at the moment it was read.  Mutation happens only through
``Appender``, which writes a new arena image, never by editing these
objects.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Final

from liststore.model.identity import Identity

DEFAULT_CAPACITY: Final[int] = 10_000


@dataclass(frozen=True, slots=True)
class Item:
    """One stored entry.

    Parameters
    ----------
    content:
        String payload, typically a resource link.
    owner:
        Identity of the principal that appended the item.
    """

    content: str
    owner: Identity


@dataclass(frozen=True, slots=True)
class Record:
    """An append-only list of items within a fixed byte budget.

    Parameters
    ----------
    capacity:
        Size in bytes of the arena reserved at creation.
    items:
        Items in insertion order.
    """

    capacity: int
    items: tuple[Item, ...] = field(default_factory=tuple)

    @property
    def total_items(self) -> int:
        """Number of items stored; always equal to ``len(items)``."""
        return len(self.items)

    def with_item(self, item: Item) -> "Record":
        """Return a copy of this record with ``item`` appended."""
        return Record(capacity=self.capacity, items=self.items + (item,))

    def __len__(self) -> int:
        return len(self.items)


@dataclass(frozen=True, slots=True)
class RecordRef:
    """Reference to a persisted record.

    Parameters
    ----------
    address:
        The storage address the record was allocated at.
    capacity:
        The capacity the record was allocated with.
    """

    address: Identity
    capacity: int = DEFAULT_CAPACITY

    def __str__(self) -> str:
        return str(self.address)
