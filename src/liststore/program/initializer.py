"""Record creation.

The ``Initializer`` allocates a zeroed arena of fixed capacity at a fresh
(or caller-designated) address, charged to a paying principal.  A zeroed
arena decodes as ``total_items == 0`` with no items, so allocation and
initialization are one write.
"""
from __future__ import annotations

import logging

from liststore.errors import AllocationError
from liststore.guards.authorization import AuthorizationGuard
from liststore.model.identity import Identity, Principal
from liststore.model.layout import HEADER_SIZE
from liststore.model.record import DEFAULT_CAPACITY, RecordRef
from liststore.storage.base import StorageBackend

logger = logging.getLogger(__name__)


class Initializer:
    """Creates new empty records.

    Parameters
    ----------
    backend:
        Where arenas are allocated.
    capacity:
        Bytes reserved for every record this initializer creates.
    guard:
        Decides whether the payer may authorize the allocation.  Defaults
        to an ``AuthorizationGuard`` that accepts any signer.
    """

    def __init__(
        self,
        backend: StorageBackend,
        capacity: int = DEFAULT_CAPACITY,
        guard: AuthorizationGuard | None = None,
    ) -> None:
        self._backend = backend
        self._capacity = capacity
        self._guard = guard or AuthorizationGuard()

    @property
    def capacity(self) -> int:
        return self._capacity

    def create(self, payer: Principal, address: Identity | None = None) -> RecordRef:
        """Allocate an empty record and return a reference to it.

        Parameters
        ----------
        payer:
            Principal authorizing and funding the allocation.
        address:
            Target address; a fresh random one is designated if omitted.

        Returns
        -------
        RecordRef
            Reference usable with ``Appender.append`` and ``Reader.fetch``.

        Raises
        ------
        AllocationError
            If the payer is not an authenticated signer, the capacity cannot
            hold the record header, or the address is already occupied.
        """
        target = address if address is not None else Identity.generate()

        if not self._guard.authenticator.authenticate(payer):
            logger.warning("Payer %s cannot authorize allocation at %s", payer, target)
            raise AllocationError(
                f"Payer {payer} cannot authorize the allocation", str(target)
            )
        if self._capacity < HEADER_SIZE:
            raise AllocationError(
                f"Capacity {self._capacity} cannot hold the {HEADER_SIZE}-byte header",
                str(target),
            )

        with self._backend.lock(target):
            self._backend.allocate(target, self._capacity)

        logger.debug("Created record at %s paid by %s", target, payer)
        return RecordRef(address=target, capacity=self._capacity)
