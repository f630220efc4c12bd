#!/usr/bin/env python3
"""Example: file-backed store with a YAML export

Persists a record under ./example-data, reopens it with a second
``ListStore`` and dumps it as YAML.

Usage:
    python examples/02_file_store.py
"""
from __future__ import annotations

from liststore import ListStore, Principal
from liststore.config import ListStoreConfig
from liststore.model.serializer import RecordSerializer


def main() -> None:
    config = ListStoreConfig(backend="file", data_dir="example-data")
    operator = Principal.from_seed("operator")

    store = ListStore(config=config)
    ref = store.initialize(operator)
    store.append(ref, operator, "ipfs://bafy-persisted")

    reopened = ListStore(config=config)
    record = reopened.fetch(reopened.resolve(ref.address))
    print(RecordSerializer().to_yaml(record))


if __name__ == "__main__":
    main()
