"""Abstract storage backend: address-keyed, fixed-size byte arenas.

A backend stores one arena per address.  The arena length is fixed at
allocation and every later write must keep it, which is what makes a
record's capacity immutable.

Operations on the same address are serialized through a per-address
``threading.Lock`` handed out by :meth:`StorageBackend.lock`; callers
that read, check and write hold that lock across all three steps.  A
lock is dropped from the map once nobody holds or waits on it.
Backends shared between processes extend :meth:`StorageBackend.lock`
with an inter-process lock.
"""
from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from collections.abc import Iterator
from contextlib import contextmanager

from liststore.errors import AllocationError, RecordNotFoundError
from liststore.model.identity import Identity

logger = logging.getLogger(__name__)


class _AddressLock:
    """A lock plus the number of threads holding or waiting on it."""

    __slots__ = ("lock", "users")

    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.users = 0


class StorageBackend(ABC):
    """Base class for record storage.

    Subclasses implement the four primitive ``_load`` / ``_store`` /
    ``_contains`` / ``_addresses`` hooks; this class layers locking,
    allocation and the fixed-size write check on top.
    """

    def __init__(self) -> None:
        self._locks: dict[Identity, _AddressLock] = {}
        self._locks_guard = threading.Lock()

    # ------------------------------------------------------------------
    # Hooks
    # ------------------------------------------------------------------

    @abstractmethod
    def _contains(self, address: Identity) -> bool: ...

    @abstractmethod
    def _load(self, address: Identity) -> bytes: ...

    @abstractmethod
    def _store(self, address: Identity, arena: bytes) -> None: ...

    @abstractmethod
    def _addresses(self) -> list[Identity]: ...

    # ------------------------------------------------------------------
    # Locking
    # ------------------------------------------------------------------

    @contextmanager
    def lock(self, address: Identity) -> Iterator[None]:
        """Hold the exclusive lock for ``address`` for the ``with`` block."""
        with self._locks_guard:
            entry = self._locks.setdefault(address, _AddressLock())
            entry.users += 1
        try:
            with entry.lock:
                yield
        finally:
            with self._locks_guard:
                entry.users -= 1
                if entry.users == 0:
                    del self._locks[address]

    def held_locks(self) -> int:
        """Return how many addresses currently have a lock holder or waiter."""
        with self._locks_guard:
            return len(self._locks)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def exists(self, address: Identity) -> bool:
        """Return ``True`` if a record has been allocated at ``address``."""
        return self._contains(address)

    def allocate(self, address: Identity, capacity: int) -> None:
        """Reserve a zeroed arena of ``capacity`` bytes at ``address``.

        The caller must hold ``lock(address)``.

        Raises
        ------
        AllocationError
            If the address is already occupied.
        """
        if self._contains(address):
            raise AllocationError("Address is already occupied", str(address))
        self._store(address, bytes(capacity))
        logger.debug("Allocated %d-byte arena at %s", capacity, address)

    def read(self, address: Identity) -> bytes:
        """Return the full arena stored at ``address``.

        Raises
        ------
        RecordNotFoundError
            If nothing was allocated at ``address``.
        """
        if not self._contains(address):
            raise RecordNotFoundError(str(address))
        return self._load(address)

    def write(self, address: Identity, arena: bytes) -> None:
        """Replace the arena at ``address`` in one step.

        The caller must hold ``lock(address)``.

        Raises
        ------
        RecordNotFoundError
            If nothing was allocated at ``address``.
        ValueError
            If ``arena`` differs in length from the allocated arena.
        """
        current = self.read(address)
        if len(arena) != len(current):
            raise ValueError(
                f"Arena at {address} is {len(current)} bytes; "
                f"refusing a {len(arena)}-byte write"
            )
        self._store(address, arena)

    def addresses(self) -> list[Identity]:
        """Return every allocated address, sorted by hex form."""
        return sorted(self._addresses(), key=lambda a: a.key)

    def __contains__(self, address: object) -> bool:
        return isinstance(address, Identity) and self._contains(address)

    def __len__(self) -> int:
        return len(self._addresses())
