"""Configuration for liststore.

Settings come from, in increasing priority: built-in defaults, an
optional YAML file, and ``LISTSTORE_*`` environment variables.

Example YAML file::

    capacity: 10000
    backend: file
    data_dir: /var/lib/liststore
"""
from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml

from liststore.model.layout import HEADER_SIZE
from liststore.model.record import DEFAULT_CAPACITY

if TYPE_CHECKING:
    from liststore.storage.base import StorageBackend

_ENV_PREFIX = "LISTSTORE_"


@dataclass(frozen=True)
class ListStoreConfig:
    """Store settings.

    Parameters
    ----------
    capacity:
        Bytes reserved for each new record.
    backend:
        Registered storage backend name.
    data_dir:
        Directory used by the ``file`` backend.
    """

    capacity: int = DEFAULT_CAPACITY
    backend: str = "memory"
    data_dir: str = ".liststore"

    def __post_init__(self) -> None:
        if not isinstance(self.capacity, int) or self.capacity < HEADER_SIZE:
            raise ValueError(
                f"capacity must be an integer >= {HEADER_SIZE}, got {self.capacity!r}"
            )
        if not self.backend:
            raise ValueError("backend must be a non-empty name")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ListStoreConfig":
        """Build a config from a mapping, rejecting unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown configuration key(s): {', '.join(unknown)}")
        return cls(**dict(data))

    @classmethod
    def from_yaml(cls, path: str | os.PathLike[str]) -> "ListStoreConfig":
        """Load a config from a YAML file."""
        return cls.from_mapping(_read_yaml(path))

    def with_env(self, environ: Mapping[str, str] | None = None) -> "ListStoreConfig":
        """Return a copy with ``LISTSTORE_*`` environment overrides applied."""
        env = os.environ if environ is None else environ
        overrides: dict[str, Any] = {}
        if f"{_ENV_PREFIX}CAPACITY" in env:
            try:
                overrides["capacity"] = int(env[f"{_ENV_PREFIX}CAPACITY"])
            except ValueError:
                raise ValueError(
                    f"{_ENV_PREFIX}CAPACITY must be an integer, "
                    f"got {env[f'{_ENV_PREFIX}CAPACITY']!r}"
                ) from None
        if f"{_ENV_PREFIX}BACKEND" in env:
            overrides["backend"] = env[f"{_ENV_PREFIX}BACKEND"]
        if f"{_ENV_PREFIX}DATA_DIR" in env:
            overrides["data_dir"] = env[f"{_ENV_PREFIX}DATA_DIR"]
        return replace(self, **overrides)

    def backend_options(self) -> dict[str, Any]:
        """Constructor options for the configured backend."""
        if self.backend == "file":
            return {"data_dir": self.data_dir}
        return {}

    def make_backend(self) -> "StorageBackend":
        """Instantiate the configured storage backend."""
        from liststore.storage import backend_registry

        return backend_registry.create(self.backend, **self.backend_options())


def load_config(
    path: str | os.PathLike[str] | None = None,
    environ: Mapping[str, str] | None = None,
    **defaults: Any,
) -> ListStoreConfig:
    """Load settings from defaults, an optional YAML file and the environment.

    Parameters
    ----------
    path:
        Optional YAML file.
    environ:
        Environment mapping; ``os.environ`` when omitted.
    **defaults:
        Overrides for the built-in defaults, applied before the file.
    """
    merged: dict[str, Any] = dict(defaults)
    if path is not None:
        merged.update(_read_yaml(path))
    return ListStoreConfig.from_mapping(merged).with_env(environ)


def _read_yaml(path: str | os.PathLike[str]) -> dict[str, Any]:
    data = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a mapping at the top level")
    return data
