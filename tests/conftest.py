"""Shared test fixtures for liststore.

Fixtures defined here are available to all tests in the suite without
needing an explicit import. Add project-wide fixtures here; keep
domain-specific fixtures close to the tests that use them.
"""
from __future__ import annotations

import pytest

from liststore import Principal
from liststore.storage import MemoryBackend


@pytest.fixture()
def package_name() -> str:
    """Return the importable package name for assertions."""
    return "liststore"


@pytest.fixture()
def expected_version() -> str:
    """Return the current expected version string.

    Update this fixture when cutting a release so that the version
    test immediately catches stale ``__version__`` values.
    """
    return "0.1.0"


@pytest.fixture()
def alice() -> Principal:
    return Principal.from_seed("alice")


@pytest.fixture()
def bob() -> Principal:
    return Principal.from_seed("bob")


@pytest.fixture()
def intruder() -> Principal:
    """A principal whose signature the host did not verify."""
    return Principal.from_seed("mallory", is_signer=False)


@pytest.fixture()
def backend() -> MemoryBackend:
    return MemoryBackend()

