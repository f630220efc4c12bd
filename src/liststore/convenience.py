"""Convenience API for liststore: a single object bundling a backend,
its guards and the three record operations.

Example
-------
::

    from liststore import ListStore, Principal

    store = ListStore()
    alice = Principal.from_seed("alice")
    ref = store.initialize(alice)
    store.append(ref, alice, "ipfs://abc")
    store.fetch(ref).items
"""
from __future__ import annotations

import functools
from typing import TYPE_CHECKING

from liststore.config import ListStoreConfig
from liststore.guards.authorization import Authenticator, AuthorizationGuard
from liststore.guards.capacity import CapacityGuard
from liststore.program.appender import Appender
from liststore.program.initializer import Initializer
from liststore.program.reader import Reader

if TYPE_CHECKING:
    from liststore.model.identity import Identity, Principal
    from liststore.model.record import Record, RecordRef
    from liststore.storage.base import StorageBackend


@functools.lru_cache(maxsize=None)
def default_backend() -> "StorageBackend":
    """Return the process-wide in-memory backend used when none is given."""
    from liststore.storage.memory import MemoryBackend

    return MemoryBackend()


class ListStore:
    """Zero-config record store.

    Parameters
    ----------
    backend:
        Storage for record arenas.  Built from ``config`` when omitted.
    config:
        Settings; defaults to ``ListStoreConfig()`` (in-memory, 10,000-byte
        records).
    authenticator:
        Decides which principals are authenticated.  Defaults to accepting
        any signer.
    """

    def __init__(
        self,
        backend: "StorageBackend | None" = None,
        config: ListStoreConfig | None = None,
        authenticator: Authenticator | None = None,
    ) -> None:
        self._config = config or ListStoreConfig()
        self._backend = backend if backend is not None else self._config.make_backend()
        guard = AuthorizationGuard(authenticator)
        self._initializer = Initializer(self._backend, self._config.capacity, guard)
        self._appender = Appender(self._backend, guard, CapacityGuard())
        self._reader = Reader(self._backend)

    @property
    def backend(self) -> "StorageBackend":
        return self._backend

    @property
    def config(self) -> ListStoreConfig:
        return self._config

    def initialize(self, payer: "Principal", address: "Identity | None" = None) -> "RecordRef":
        """Create an empty record paid for by ``payer``."""
        return self._initializer.create(payer, address)

    def append(self, ref: "RecordRef", caller: "Principal", content: str) -> None:
        """Append ``content`` owned by ``caller`` to the record at ``ref``."""
        self._appender.append(ref, caller, content)

    def resolve(self, address: "Identity") -> "RecordRef":
        """Return a reference to the existing record at ``address``."""
        return self._reader.resolve(address)

    def fetch(self, ref: "RecordRef") -> "Record":
        """Return a snapshot of the record at ``ref``."""
        return self._reader.fetch(ref)

    def __repr__(self) -> str:
        return (
            f"ListStore(backend={type(self._backend).__name__}, "
            f"capacity={self._config.capacity})"
        )
