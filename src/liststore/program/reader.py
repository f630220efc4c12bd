"""Reading records back."""
from __future__ import annotations

from liststore.model import layout
from liststore.model.identity import Identity
from liststore.model.record import Record, RecordRef
from liststore.storage.base import StorageBackend


class Reader:
    """Fetches and decodes persisted records.

    Parameters
    ----------
    backend:
        Where the record arenas live.
    """

    def __init__(self, backend: StorageBackend) -> None:
        self._backend = backend

    def fetch(self, ref: RecordRef) -> Record:
        """Return a snapshot of the record at ``ref``.

        Raises
        ------
        RecordNotFoundError
            If no record exists at ``ref.address``.
        SerializationError
            If the stored arena cannot be decoded.
        """
        return layout.decode(self._backend.read(ref.address))

    def count(self, ref: RecordRef) -> int:
        """Return the record's ``total_items`` counter without decoding items."""
        return layout.read_counter(self._backend.read(ref.address))

    def resolve(self, address: Identity) -> RecordRef:
        """Return a reference to the existing record at ``address``.

        Raises
        ------
        RecordNotFoundError
            If no record exists at ``address``.
        """
        return RecordRef(address=address, capacity=len(self._backend.read(address)))
