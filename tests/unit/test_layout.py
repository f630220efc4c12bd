"""Unit tests for liststore.model.layout: the persisted binary layout."""
from __future__ import annotations

import struct

import pytest

from liststore.errors import SerializationError
from liststore.model import layout
from liststore.model.identity import Identity
from liststore.model.record import DEFAULT_CAPACITY, Item, Record

_ALICE = Identity.from_seed("alice")
_BOB = Identity.from_seed("bob")


def _record(*contents: str, capacity: int = DEFAULT_CAPACITY) -> Record:
    owners = (_ALICE, _BOB)
    return Record(
        capacity=capacity,
        items=tuple(Item(content=c, owner=owners[i % 2]) for i, c in enumerate(contents)),
    )


# ===========================================================================
# Sizes
# ===========================================================================


class TestSizes:
    def test_header_and_overhead(self) -> None:
        assert layout.HEADER_SIZE == 8
        assert layout.ITEM_OVERHEAD == 4 + 32

    def test_empty_record_size(self) -> None:
        assert layout.record_size(_record()) == 8

    def test_item_size_counts_utf8_bytes(self) -> None:
        # "é" is two bytes in UTF-8
        assert layout.item_size(Item(content="é", owner=_ALICE)) == 36 + 2

    def test_record_size_sums_items(self) -> None:
        assert layout.record_size(_record("abc", "de")) == 8 + (36 + 3) + (36 + 2)

    def test_encode_content_rejects_lone_surrogate(self) -> None:
        with pytest.raises(SerializationError, match="UTF-8"):
            layout.encode_content("\ud800")


# ===========================================================================
# Encoding
# ===========================================================================


class TestEncode:
    def test_arena_has_exact_capacity(self) -> None:
        assert len(layout.encode(_record("x"))) == DEFAULT_CAPACITY

    def test_empty_record_is_all_zero(self) -> None:
        assert layout.encode(_record(capacity=64)) == bytes(64)

    def test_field_offsets(self) -> None:
        arena = layout.encode(_record("ipfs://abc", capacity=128))
        assert struct.unpack_from("<Q", arena, 0) == (1,)
        assert struct.unpack_from("<I", arena, 8) == (10,)
        assert arena[12:22] == b"ipfs://abc"
        assert arena[22:54] == _ALICE.key
        assert arena[54:] == bytes(128 - 54)

    def test_items_in_insertion_order(self) -> None:
        arena = layout.encode(_record("first", "second", capacity=256))
        assert arena.index(b"first") < arena.index(b"second")

    def test_oversized_record_rejected(self) -> None:
        with pytest.raises(SerializationError, match="larger than"):
            layout.encode(_record("x" * 100, capacity=50))


# ===========================================================================
# Decoding
# ===========================================================================


class TestDecode:
    def test_zeroed_arena_is_empty_record(self) -> None:
        record = layout.decode(bytes(DEFAULT_CAPACITY))
        assert record.total_items == 0
        assert record.items == ()
        assert record.capacity == DEFAULT_CAPACITY

    def test_decode_restores_encoded_record(self) -> None:
        original = _record("ipfs://abc", "https://example.com/é.gif", "")
        assert layout.decode(layout.encode(original)) == original

    def test_arena_smaller_than_header(self) -> None:
        with pytest.raises(SerializationError, match="header"):
            layout.decode(b"\x00" * 4)

    def test_counter_larger_than_arena_can_hold(self) -> None:
        arena = struct.pack("<Q", 10) + bytes(40)
        with pytest.raises(SerializationError, match="cannot hold"):
            layout.decode(arena)

    def test_item_running_past_end(self) -> None:
        arena = bytearray(64)
        struct.pack_into("<Q", arena, 0, 1)
        struct.pack_into("<I", arena, 8, 500)
        with pytest.raises(SerializationError, match="past the end") as excinfo:
            layout.decode(bytes(arena))
        assert excinfo.value.offset == 8

    def test_invalid_utf8(self) -> None:
        arena = bytearray(64)
        struct.pack_into("<Q", arena, 0, 1)
        struct.pack_into("<I", arena, 8, 1)
        arena[12] = 0xFF
        with pytest.raises(SerializationError, match="UTF-8"):
            layout.decode(bytes(arena))

    def test_read_counter(self) -> None:
        arena = layout.encode(_record("a", "b", "c", capacity=256))
        assert layout.read_counter(arena) == 3

    def test_read_counter_short_arena(self) -> None:
        with pytest.raises(SerializationError):
            layout.read_counter(b"\x01")
