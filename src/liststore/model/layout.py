"""Binary layout of a persisted record.

A record occupies a fixed arena of ``capacity`` bytes::

    offset 0   : total_items   u64, little-endian
    offset 8.. : items[0..n)   in insertion order
        each item: u32 little-endian length
                   + UTF-8 content bytes
                   + 32-byte owner identity
    remaining  : zero padding up to capacity

A freshly allocated, all-zero arena therefore decodes as an empty record.
"""
from __future__ import annotations

import struct
from typing import Final

from liststore.errors import SerializationError
from liststore.model.identity import IDENTITY_SIZE, Identity
from liststore.model.record import Item, Record

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

_COUNTER: Final[struct.Struct] = struct.Struct("<Q")
_LENGTH: Final[struct.Struct] = struct.Struct("<I")

HEADER_SIZE: Final[int] = _COUNTER.size
ITEM_OVERHEAD: Final[int] = _LENGTH.size + IDENTITY_SIZE
MAX_CONTENT_BYTES: Final[int] = 2**32 - 1


# ---------------------------------------------------------------------------
# Sizes
# ---------------------------------------------------------------------------


def encode_content(content: str) -> bytes:
    """Encode an item payload as UTF-8, checking it fits the length field.

    Raises
    ------
    SerializationError
        If the payload is not encodable or longer than ``MAX_CONTENT_BYTES``.
    """
    try:
        raw = content.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise SerializationError(f"Content is not encodable as UTF-8: {exc.reason}") from exc
    if len(raw) > MAX_CONTENT_BYTES:
        raise SerializationError(
            f"Content is {len(raw)} bytes; the length field addresses at most "
            f"{MAX_CONTENT_BYTES} bytes"
        )
    return raw


def item_size(item: Item) -> int:
    """Return the serialized size of a single item in bytes."""
    return ITEM_OVERHEAD + len(encode_content(item.content))


def record_size(record: Record) -> int:
    """Return the serialized size of ``record`` excluding padding."""
    return HEADER_SIZE + sum(item_size(item) for item in record.items)


# ---------------------------------------------------------------------------
# Encoding
# ---------------------------------------------------------------------------


def _encode_item(item: Item) -> bytes:
    raw = encode_content(item.content)
    return _LENGTH.pack(len(raw)) + raw + item.owner.key


def encode(record: Record) -> bytes:
    """Encode ``record`` into an arena of exactly ``record.capacity`` bytes.

    Raises
    ------
    SerializationError
        If an item cannot be encoded, or the encoded record is larger than
        its capacity.
    """
    body = b"".join(_encode_item(item) for item in record.items)
    image = _COUNTER.pack(record.total_items) + body
    if len(image) > record.capacity:
        raise SerializationError(
            f"Encoded record is {len(image)} bytes, larger than its "
            f"{record.capacity}-byte arena"
        )
    return image + bytes(record.capacity - len(image))


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------


def decode(arena: bytes) -> Record:
    """Decode a persisted arena into a ``Record``.

    The record's capacity is the arena length.

    Raises
    ------
    SerializationError
        If the arena is shorter than the header, an item runs past the end
        of the arena, or content is not valid UTF-8.
    """
    capacity = len(arena)
    if capacity < HEADER_SIZE:
        raise SerializationError(
            f"Arena is {capacity} bytes, smaller than the {HEADER_SIZE}-byte header"
        )
    (count,) = _COUNTER.unpack_from(arena, 0)
    # every item needs at least ITEM_OVERHEAD bytes
    if count > (capacity - HEADER_SIZE) // ITEM_OVERHEAD:
        raise SerializationError(
            f"Counter claims {count} items but the arena cannot hold that many", 0
        )

    items: list[Item] = []
    offset = HEADER_SIZE
    view = memoryview(arena)
    for _ in range(count):
        if offset + ITEM_OVERHEAD > capacity:
            raise SerializationError("Truncated item header", offset)
        (length,) = _LENGTH.unpack_from(arena, offset)
        start = offset + _LENGTH.size
        end = start + length
        if end + IDENTITY_SIZE > capacity:
            raise SerializationError("Item runs past the end of the arena", offset)
        try:
            content = bytes(view[start:end]).decode("utf-8")
        except UnicodeDecodeError as exc:
            raise SerializationError(f"Item content is not valid UTF-8: {exc.reason}", start) from exc
        owner = Identity(bytes(view[end : end + IDENTITY_SIZE]))
        items.append(Item(content=content, owner=owner))
        offset = end + IDENTITY_SIZE

    return Record(capacity=capacity, items=tuple(items))


def read_counter(arena: bytes) -> int:
    """Return the ``total_items`` counter without decoding the items."""
    if len(arena) < HEADER_SIZE:
        raise SerializationError(
            f"Arena is {len(arena)} bytes, smaller than the {HEADER_SIZE}-byte header"
        )
    (count,) = _COUNTER.unpack_from(arena, 0)
    return int(count)
