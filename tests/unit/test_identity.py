"""Unit tests for liststore.model.identity: Identity and Principal."""
from __future__ import annotations

import hashlib

import pytest

from liststore.model.identity import IDENTITY_SIZE, Identity, Principal


class TestIdentity:
    def test_requires_exact_size(self) -> None:
        with pytest.raises(ValueError, match="32 bytes"):
            Identity(b"\x01" * 31)
        with pytest.raises(ValueError):
            Identity(b"\x01" * 33)

    def test_hex_round_trip(self) -> None:
        identity = Identity(bytes(range(IDENTITY_SIZE)))
        assert Identity.from_hex(identity.hex()) == identity
        assert str(identity) == identity.hex()

    def test_from_hex_rejects_garbage(self) -> None:
        with pytest.raises(ValueError):
            Identity.from_hex("not-hex")
        with pytest.raises(ValueError):
            Identity.from_hex("ab" * 10)

    def test_from_seed_is_sha256(self) -> None:
        assert Identity.from_seed("alice").key == hashlib.sha256(b"alice").digest()

    def test_from_seed_is_deterministic(self) -> None:
        assert Identity.from_seed("alice") == Identity.from_seed("alice")
        assert Identity.from_seed("alice") != Identity.from_seed("bob")

    def test_generate_is_random(self) -> None:
        assert Identity.generate() != Identity.generate()

    def test_hashable(self) -> None:
        assert len({Identity.from_seed("a"), Identity.from_seed("a")}) == 1

    def test_repr_is_abbreviated(self) -> None:
        identity = Identity.from_seed("alice")
        assert repr(identity) == f"Identity({identity.hex()[:8]}...)"


class TestPrincipal:
    def test_signer_by_default(self) -> None:
        assert Principal.from_seed("alice").is_signer is True

    def test_non_signer(self) -> None:
        principal = Principal.from_seed("mallory", is_signer=False)
        assert principal.is_signer is False
        assert principal.identity == Identity.from_seed("mallory")

    def test_str_is_identity_hex(self) -> None:
        principal = Principal.from_seed("alice")
        assert str(principal) == principal.identity.hex()

    def test_frozen(self) -> None:
        principal = Principal.from_seed("alice")
        with pytest.raises((AttributeError, TypeError)):
            principal.is_signer = False  # type: ignore[misc]
