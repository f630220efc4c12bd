"""Authorization guard and authenticators.

Signature verification belongs to the host; liststore only consumes its
verdict.  The ``Authenticator`` protocol is the seam where that verdict
enters: the default ``SignerAuthenticator`` trusts the ``is_signer`` flag
the host set on the ``Principal``.

Usage
-----
::

    from liststore.guards.authorization import AuthorizationGuard

    guard = AuthorizationGuard()
    guard.check(caller, "append")   # raises AuthorizationError if rejected
"""
from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Protocol, runtime_checkable

from liststore.errors import AuthorizationError
from liststore.model.identity import Identity, Principal

logger = logging.getLogger(__name__)


@runtime_checkable
class Authenticator(Protocol):
    """Protocol for deciding whether a principal is authenticated.

    Implementations
    ---------------
    - :class:`SignerAuthenticator` accepts any principal whose signature
      the host verified.
    - :class:`AllowListAuthenticator` additionally restricts callers to a
      fixed set of identities.
    """

    def authenticate(self, principal: Principal) -> bool:
        """Return ``True`` if ``principal`` is validly authenticated."""
        ...  # pragma: no cover


class SignerAuthenticator:
    """Accepts any principal that presented a verified signature."""

    def authenticate(self, principal: Principal) -> bool:
        return principal.is_signer


class AllowListAuthenticator:
    """Accepts signers whose identity is in a fixed allow-list.

    Parameters
    ----------
    identities:
        The identities permitted to act.
    """

    def __init__(self, identities: Iterable[Identity]) -> None:
        self._allowed: frozenset[Identity] = frozenset(identities)

    def authenticate(self, principal: Principal) -> bool:
        return principal.is_signer and principal.identity in self._allowed


class AuthorizationGuard:
    """Rejects requests from principals the authenticator does not accept.

    The guard does not compare the caller with the record's creator: any
    authenticated principal may append.

    Parameters
    ----------
    authenticator:
        Decides who is authenticated.  Defaults to ``SignerAuthenticator``.
    """

    def __init__(self, authenticator: Authenticator | None = None) -> None:
        self._authenticator: Authenticator = authenticator or SignerAuthenticator()

    @property
    def authenticator(self) -> Authenticator:
        return self._authenticator

    def check(self, principal: Principal, operation: str) -> None:
        """Raise ``AuthorizationError`` unless ``principal`` is authenticated.

        Parameters
        ----------
        principal:
            The caller presenting the request.
        operation:
            Name of the operation, used in the error message.
        """
        if not self._authenticator.authenticate(principal):
            logger.warning("Rejected %s by unauthenticated principal %s", operation, principal)
            raise AuthorizationError(str(principal), operation)
