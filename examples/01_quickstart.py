#!/usr/bin/env python3
"""Example: liststore quickstart

Minimal working example: create a record, append items from two
principals, read it back, and watch the capacity guard reject an
oversized append.

Usage:
    python examples/01_quickstart.py

Requirements:
    pip install liststore
"""
from __future__ import annotations

import liststore
from liststore import CapacityExceeded, Principal


def main() -> None:
    print(f"liststore version: {liststore.__version__}")

    alice = Principal.from_seed("alice")
    bob = Principal.from_seed("bob")

    # Step 1: Allocate an empty 10,000-byte record, paid for by alice
    ref = liststore.initialize(alice)
    print(f"Created record {ref.address} ({ref.capacity} bytes)")

    # Step 2: Any signer may append
    liststore.append(ref, alice, "ipfs://bafy-first")
    liststore.append(ref, bob, "https://example.com/second.gif")

    # Step 3: Read it back
    record = liststore.fetch(ref)
    print(f"total_items={record.total_items}")
    for index, item in enumerate(record.items):
        print(f"  {index}: {item.content}  (owner {item.owner.hex()[:8]}...)")

    # Step 4: An append that does not fit is rejected before anything changes
    try:
        liststore.append(ref, alice, "x" * 20_000)
    except CapacityExceeded as exc:
        print(f"Rejected: {exc}")
    print(f"Still {liststore.fetch(ref).total_items} items")


if __name__ == "__main__":
    main()
