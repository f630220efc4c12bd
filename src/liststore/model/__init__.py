"""Record data model: identities, records, the binary layout and export.

Re-exports the value types and the ``RecordSerializer``.
"""
from __future__ import annotations

from liststore.model.identity import IDENTITY_SIZE, Identity, Principal
from liststore.model.record import DEFAULT_CAPACITY, Item, Record, RecordRef
from liststore.model.serializer import RecordSerializer

__all__ = [
    "IDENTITY_SIZE",
    "DEFAULT_CAPACITY",
    "Identity",
    "Principal",
    "Item",
    "Record",
    "RecordRef",
    "RecordSerializer",
]
