"""liststore: a fixed-capacity, append-only persistent list of items.

Public API
----------
The stable public surface is everything exported from this module.
Anything inside submodules not re-exported here is considered private
and may change without notice.

Example
-------
::

    import liststore
    from liststore import Principal

    alice = Principal.from_seed("alice")

    # Allocate an empty 10,000-byte record
    ref = liststore.initialize(alice)

    # Append an item owned by the caller
    liststore.append(ref, alice, "ipfs://abc")

    # Read it back
    record = liststore.fetch(ref)
    record.total_items
    1

    liststore.__version__
    '0.1.0'
"""
from __future__ import annotations

from typing import TYPE_CHECKING

from liststore.convenience import ListStore
from liststore.errors import (
    AllocationError,
    AuthorizationError,
    CapacityExceeded,
    ListStoreError,
    RecordNotFoundError,
    SerializationError,
)
from liststore.model.identity import Identity, Principal
from liststore.model.record import Item, Record, RecordRef

__version__: str = "0.1.0"

if TYPE_CHECKING:
    from liststore.storage.base import StorageBackend


def initialize(
    payer: Principal,
    backend: "StorageBackend | None" = None,
    address: Identity | None = None,
) -> RecordRef:
    """Create an empty record paid for by ``payer``.

    Parameters
    ----------
    payer:
        Principal authorizing and funding the allocation.
    backend:
        Storage to allocate in.  Defaults to the process-wide in-memory
        backend.
    address:
        Target address; a fresh random one is designated if omitted.

    Returns
    -------
    RecordRef
        Reference to the new record.

    Raises
    ------
    liststore.AllocationError
        If the address is occupied or the payer is not a signer.
    """
    return _store(backend).initialize(payer, address)


def append(
    ref: RecordRef,
    caller: Principal,
    content: str,
    backend: "StorageBackend | None" = None,
) -> None:
    """Append ``content`` owned by ``caller`` to the record at ``ref``.

    Raises
    ------
    liststore.AuthorizationError
        If ``caller`` is not authenticated.
    liststore.CapacityExceeded
        If the record would grow past its capacity.
    liststore.SerializationError
        If ``content`` cannot be encoded.
    liststore.RecordNotFoundError
        If nothing was allocated at ``ref``.
    """
    _store(backend).append(ref, caller, content)


def fetch(ref: RecordRef, backend: "StorageBackend | None" = None) -> Record:
    """Return a snapshot of the record at ``ref``.

    Raises
    ------
    liststore.RecordNotFoundError
        If nothing was allocated at ``ref``.
    """
    return _store(backend).fetch(ref)


def _store(backend: "StorageBackend | None") -> ListStore:
    from liststore.convenience import default_backend

    return ListStore(backend if backend is not None else default_backend())


__all__ = [
    "__version__",
    "initialize",
    "append",
    "fetch",
    "ListStore",
    "Identity",
    "Principal",
    "Item",
    "Record",
    "RecordRef",
    "ListStoreError",
    "AllocationError",
    "AuthorizationError",
    "CapacityExceeded",
    "SerializationError",
    "RecordNotFoundError",
]
