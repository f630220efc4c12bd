"""Precondition guards run before any record mutation.

Exports the ``AuthorizationGuard`` with its authenticators and the
``CapacityGuard``.
"""
from __future__ import annotations

from liststore.guards.authorization import (
    AllowListAuthenticator,
    Authenticator,
    AuthorizationGuard,
    SignerAuthenticator,
)
from liststore.guards.capacity import CapacityGuard

__all__ = [
    "Authenticator",
    "AuthorizationGuard",
    "AllowListAuthenticator",
    "SignerAuthenticator",
    "CapacityGuard",
]
