"""Capacity guard: rejects mutations that would overflow a record's arena."""
from __future__ import annotations

import logging

from liststore.errors import CapacityExceeded
from liststore.model.layout import item_size, record_size
from liststore.model.record import Item, Record

logger = logging.getLogger(__name__)


class CapacityGuard:
    """Computes the prospective serialized size of a record before mutation."""

    def check(self, record: Record, item: Item) -> int:
        """Return the size ``record`` would have after appending ``item``.

        Raises
        ------
        CapacityExceeded
            If that size is larger than ``record.capacity``.
        SerializationError
            If ``item`` cannot be encoded at all.
        """
        required = record_size(record) + item_size(item)
        if required > record.capacity:
            logger.warning(
                "Rejected append of %d-byte record into %d-byte arena",
                required,
                record.capacity,
            )
            raise CapacityExceeded(required=required, capacity=record.capacity)
        return required
