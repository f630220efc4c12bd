"""Appending items to a record.

``Appender.append`` runs, in order:

1. the ``AuthorizationGuard`` on the caller,
2. a load of the current arena,
3. the ``CapacityGuard`` on the prospective record,
4. a single write of the new arena image.

Steps 2-4 run under the address lock, so concurrent appends to the same
record are applied one at a time and none is lost.  The counter and the
item sequence live in the same image and change in the same write.
"""
from __future__ import annotations

import logging

from liststore.guards.authorization import AuthorizationGuard
from liststore.guards.capacity import CapacityGuard
from liststore.model import layout
from liststore.model.identity import Principal
from liststore.model.record import Item, RecordRef
from liststore.storage.base import StorageBackend

logger = logging.getLogger(__name__)


class Appender:
    """Adds one item per call to an existing record.

    Parameters
    ----------
    backend:
        Where the record arenas live.
    auth_guard:
        Rejects unauthenticated callers.  Defaults to accepting any signer.
    capacity_guard:
        Rejects appends that would overflow the arena.
    """

    def __init__(
        self,
        backend: StorageBackend,
        auth_guard: AuthorizationGuard | None = None,
        capacity_guard: CapacityGuard | None = None,
    ) -> None:
        self._backend = backend
        self._auth_guard = auth_guard or AuthorizationGuard()
        self._capacity_guard = capacity_guard or CapacityGuard()

    def append(self, ref: RecordRef, caller: Principal, content: str) -> None:
        """Append ``Item(content, caller.identity)`` to the record at ``ref``.

        Raises
        ------
        AuthorizationError
            If ``caller`` is not authenticated.
        RecordNotFoundError
            If no record exists at ``ref.address``.
        CapacityExceeded
            If the record would grow past its capacity.
        SerializationError
            If ``content`` cannot be encoded, or the stored arena is corrupt.
        """
        self._auth_guard.check(caller, "append")
        item = Item(content=content, owner=caller.identity)

        with self._backend.lock(ref.address):
            record = layout.decode(self._backend.read(ref.address))
            size = self._capacity_guard.check(record, item)
            updated = record.with_item(item)
            self._backend.write(ref.address, layout.encode(updated))

        logger.debug(
            "Appended item #%d to %s (%d/%d bytes)",
            updated.total_items,
            ref.address,
            size,
            updated.capacity,
        )
