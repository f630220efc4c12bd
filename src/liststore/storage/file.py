"""File-backed storage: one ``<address>.rec`` file per record.

Writes go to a temporary file in the same directory which is then moved
over the target with ``os.replace``, so a reader sees either the old
arena or the new one, never a partial write.

Several processes may share one ``data_dir``.  :meth:`FileBackend.lock`
takes an exclusive ``fcntl.flock`` on ``<address>.lock`` on top of the
in-process lock, so a read-check-write in one process never interleaves
with another's.
"""
from __future__ import annotations

import fcntl
import logging
import os
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from liststore.errors import AllocationError
from liststore.model.identity import Identity
from liststore.storage.base import StorageBackend
from liststore.storage.registry import backend_registry

logger = logging.getLogger(__name__)

_SUFFIX = ".rec"
_LOCK_SUFFIX = ".lock"


@backend_registry.register("file")
class FileBackend(StorageBackend):
    """Persists arenas as files under ``data_dir``.

    Parameters
    ----------
    data_dir:
        Directory holding the record files; created if missing.
    """

    def __init__(self, data_dir: str | os.PathLike[str] = ".liststore") -> None:
        super().__init__()
        self._data_dir = Path(data_dir)
        self._data_dir.mkdir(parents=True, exist_ok=True)

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    def _path(self, address: Identity) -> Path:
        return self._data_dir / f"{address.hex()}{_SUFFIX}"

    def _lock_path(self, address: Identity) -> Path:
        return self._data_dir / f"{address.hex()}{_LOCK_SUFFIX}"

    @contextmanager
    def lock(self, address: Identity) -> Iterator[None]:
        """Hold the address lock against this process and every other one."""
        with super().lock(address):
            with open(self._lock_path(address), "a+b") as lock_file:
                fcntl.flock(lock_file.fileno(), fcntl.LOCK_EX)
                try:
                    yield
                finally:
                    fcntl.flock(lock_file.fileno(), fcntl.LOCK_UN)

    def _contains(self, address: Identity) -> bool:
        return self._path(address).is_file()

    def _load(self, address: Identity) -> bytes:
        return self._path(address).read_bytes()

    def _store(self, address: Identity, arena: bytes) -> None:
        target = self._path(address)
        fd, tmp_name = tempfile.mkstemp(dir=self._data_dir, suffix=".tmp")
        try:
            with os.fdopen(fd, "wb") as tmp_file:
                tmp_file.write(arena)
                tmp_file.flush()
                os.fsync(tmp_file.fileno())
            os.replace(tmp_name, target)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        logger.debug("Wrote %d bytes to %s", len(arena), target)

    def allocate(self, address: Identity, capacity: int) -> None:
        """Reserve a zeroed arena, failing if the file already exists.

        The zeroed arena is written to a temporary file and hard-linked
        into place, so allocation stays exclusive even against another
        process sharing ``data_dir``.

        Raises
        ------
        AllocationError
            If the address is occupied, or the arena cannot be created.
        """
        target = self._path(address)
        try:
            fd, tmp_name = tempfile.mkstemp(dir=self._data_dir, suffix=".tmp")
        except OSError as exc:
            raise AllocationError(f"Cannot create arena: {exc}", str(address)) from exc
        try:
            with os.fdopen(fd, "wb") as tmp_file:
                tmp_file.write(bytes(capacity))
                tmp_file.flush()
                os.fsync(tmp_file.fileno())
            os.link(tmp_name, target)
        except FileExistsError:
            raise AllocationError("Address is already occupied", str(address)) from None
        except OSError as exc:
            logger.warning("Allocation at %s failed: %s", target, exc)
            raise AllocationError(f"Cannot create arena: {exc}", str(address)) from exc
        finally:
            Path(tmp_name).unlink(missing_ok=True)
        logger.debug("Allocated %d-byte arena at %s", capacity, target)

    def _addresses(self) -> list[Identity]:
        found: list[Identity] = []
        for path in self._data_dir.glob(f"*{_SUFFIX}"):
            try:
                found.append(Identity.from_hex(path.stem))
            except ValueError:
                logger.debug("Ignoring stray file %s", path)
        return found
