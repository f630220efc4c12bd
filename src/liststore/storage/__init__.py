"""Storage backends for record arenas.

Importing this package registers the built-in ``memory`` and ``file``
backends in ``backend_registry``.
"""
from __future__ import annotations

from liststore.storage.base import StorageBackend
from liststore.storage.file import FileBackend
from liststore.storage.memory import MemoryBackend
from liststore.storage.registry import (
    BackendAlreadyRegisteredError,
    BackendNotFoundError,
    BackendRegistry,
    backend_registry,
)

__all__ = [
    "StorageBackend",
    "MemoryBackend",
    "FileBackend",
    "BackendRegistry",
    "BackendNotFoundError",
    "BackendAlreadyRegisteredError",
    "backend_registry",
]
