"""In-process storage backend."""
from __future__ import annotations

from liststore.model.identity import Identity
from liststore.storage.base import StorageBackend
from liststore.storage.registry import backend_registry


@backend_registry.register("memory")
class MemoryBackend(StorageBackend):
    """Keeps arenas in a dict; contents are lost when the process exits."""

    def __init__(self) -> None:
        super().__init__()
        self._arenas: dict[Identity, bytes] = {}

    def _contains(self, address: Identity) -> bool:
        return address in self._arenas

    def _load(self, address: Identity) -> bytes:
        return self._arenas[address]

    def _store(self, address: Identity, arena: bytes) -> None:
        self._arenas[address] = bytes(arena)

    def _addresses(self) -> list[Identity]:
        return list(self._arenas)
