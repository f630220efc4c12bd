"""Identities and principals.

An ``Identity`` is a fixed 32-byte identifier used both as a record
address and as the owner of an item.  A ``Principal`` pairs an identity
with the verdict of the host's signature check; liststore never verifies
signatures itself, it only consumes that verdict.
"""
from __future__ import annotations

import hashlib
import secrets
from dataclasses import dataclass
from typing import Final

IDENTITY_SIZE: Final[int] = 32


@dataclass(frozen=True, slots=True)
class Identity:
    """A 32-byte fixed identifier.

    Parameters
    ----------
    key:
        Exactly ``IDENTITY_SIZE`` raw bytes.
    """

    key: bytes

    def __post_init__(self) -> None:
        if len(self.key) != IDENTITY_SIZE:
            raise ValueError(
                f"Identity must be {IDENTITY_SIZE} bytes, got {len(self.key)}."
            )

    def __str__(self) -> str:
        return self.key.hex()

    def __repr__(self) -> str:
        return f"Identity({self.key.hex()[:8]}...)"

    def hex(self) -> str:
        """Return the lowercase hex form of the identifier."""
        return self.key.hex()

    @classmethod
    def from_hex(cls, text: str) -> "Identity":
        """Parse a 64-character hex string.

        Raises
        ------
        ValueError
            If ``text`` is not valid hex or has the wrong length.
        """
        return cls(bytes.fromhex(text.strip()))

    @classmethod
    def from_seed(cls, seed: str) -> "Identity":
        """Derive a deterministic identity from a seed string (SHA-256)."""
        return cls(hashlib.sha256(seed.encode("utf-8")).digest())

    @classmethod
    def generate(cls) -> "Identity":
        """Return a fresh random identity."""
        return cls(secrets.token_bytes(IDENTITY_SIZE))


@dataclass(frozen=True, slots=True)
class Principal:
    """An actor presenting an identity with an operation request.

    Parameters
    ----------
    identity:
        The actor's identifier.
    is_signer:
        ``True`` if the host verified the actor's signature for this
        request.
    """

    identity: Identity
    is_signer: bool = True

    def __str__(self) -> str:
        return str(self.identity)

    @classmethod
    def from_seed(cls, seed: str, is_signer: bool = True) -> "Principal":
        """Build a principal whose identity is derived from ``seed``."""
        return cls(identity=Identity.from_seed(seed), is_signer=is_signer)
