"""Storage backend registry.

Backends register under a short name with a decorator, and the CLI and
``ListStoreConfig`` select them by that name.  Third-party backends can
be exposed through ``importlib.metadata`` entry-points in the
"liststore.backends" group.

Example
-------
Register a backend::

    from liststore.storage.base import StorageBackend
    from liststore.storage.registry import backend_registry

    @backend_registry.register("sqlite")
    class SqliteBackend(StorageBackend):
        ...

Declare it from another distribution's ``pyproject.toml``::

    [project.entry-points."liststore.backends"]
    sqlite = "my_package.backends:SqliteBackend"

Build an instance by name::

    backend = backend_registry.create("file", data_dir="/var/lib/liststore")
"""
from __future__ import annotations

import importlib.metadata
import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from liststore.storage.base import StorageBackend

logger = logging.getLogger(__name__)

ENTRYPOINT_GROUP = "liststore.backends"


class BackendNotFoundError(KeyError):
    """Raised when a requested backend name is not in the registry."""

    def __init__(self, name: str, available: list[str]) -> None:
        self.backend_name = name
        self.available = available
        super().__init__(
            f"Storage backend {name!r} is not registered. "
            f"Available backends: {', '.join(available) or '(none)'}."
        )

    def __str__(self) -> str:
        return str(self.args[0])


class BackendAlreadyRegisteredError(ValueError):
    """Raised when attempting to register a name that already exists."""

    def __init__(self, name: str) -> None:
        self.backend_name = name
        super().__init__(
            f"Storage backend {name!r} is already registered. "
            "Use a unique name or deregister the existing entry first."
        )


class BackendRegistry:
    """Name-to-class registry of ``StorageBackend`` implementations."""

    def __init__(self) -> None:
        self._backends: dict[str, type[StorageBackend]] = {}

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register(self, name: str) -> Callable[[type["StorageBackend"]], type["StorageBackend"]]:
        """Return a class decorator that registers the decorated backend.

        Raises
        ------
        BackendAlreadyRegisteredError
            If ``name`` is already in use.
        TypeError
            If the decorated class does not subclass ``StorageBackend``.
        """

        def decorator(cls: type[StorageBackend]) -> type[StorageBackend]:
            self.register_class(name, cls)
            return cls

        return decorator

    def register_class(self, name: str, cls: type["StorageBackend"]) -> None:
        """Register ``cls`` under ``name`` without decorator syntax."""
        from liststore.storage.base import StorageBackend

        if name in self._backends:
            raise BackendAlreadyRegisteredError(name)
        if not (isinstance(cls, type) and issubclass(cls, StorageBackend)):
            raise TypeError(
                f"Cannot register {cls!r} under {name!r}: "
                "it must be a subclass of StorageBackend."
            )
        self._backends[name] = cls
        logger.debug("Registered storage backend %r -> %s", name, cls.__qualname__)

    def deregister(self, name: str) -> None:
        """Remove a backend from the registry.

        Raises
        ------
        BackendNotFoundError
            If ``name`` is not currently registered.
        """
        if name not in self._backends:
            raise BackendNotFoundError(name, self.list_backends())
        del self._backends[name]
        logger.debug("Deregistered storage backend %r", name)

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def get(self, name: str) -> type["StorageBackend"]:
        """Return the class registered under ``name``."""
        try:
            return self._backends[name]
        except KeyError:
            raise BackendNotFoundError(name, self.list_backends()) from None

    def create(self, name: str, **options: Any) -> "StorageBackend":
        """Instantiate the backend registered under ``name`` with ``options``."""
        return self.get(name)(**options)

    def list_backends(self) -> list[str]:
        """Return all registered backend names in alphabetical order."""
        return sorted(self._backends)

    def __contains__(self, name: object) -> bool:
        return name in self._backends

    def __len__(self) -> int:
        return len(self._backends)

    def __repr__(self) -> str:
        return f"BackendRegistry(backends={self.list_backends()})"

    # ------------------------------------------------------------------
    # Entry-point loading
    # ------------------------------------------------------------------

    def load_entrypoints(self, group: str = ENTRYPOINT_GROUP) -> None:
        """Register backends declared as package entry-points in ``group``.

        Names that are already registered are skipped, which makes repeated
        calls idempotent.  Entry-points that fail to import or do not name a
        ``StorageBackend`` subclass are logged and skipped.
        """
        for ep in importlib.metadata.entry_points(group=group):
            if ep.name in self._backends:
                logger.debug("Entry-point %r already registered; skipping.", ep.name)
                continue
            try:
                cls = ep.load()
            except Exception:
                logger.exception(
                    "Failed to load entry-point %r from group %r; skipping.",
                    ep.name,
                    group,
                )
                continue
            try:
                self.register_class(ep.name, cls)
            except (BackendAlreadyRegisteredError, TypeError):
                logger.warning(
                    "Entry-point %r loaded but could not be registered; skipping.",
                    ep.name,
                )


backend_registry = BackendRegistry()
