"""Record export to and from JSON and YAML.

The binary layout in :mod:`liststore.model.layout` is what gets
persisted; this module produces a readable plain dict/list form of a
decoded ``Record`` that maps naturally to both JSON and YAML, for
inspection and export.

Usage
-----
::

    from liststore.model.serializer import RecordSerializer

    serializer = RecordSerializer()
    data = serializer.to_dict(record)
    json_text = serializer.to_json(record)
    record2 = serializer.from_json(json_text)
    assert record == record2
"""
from __future__ import annotations

import json

import yaml

from liststore.errors import SerializationError
from liststore.model.identity import Identity
from liststore.model.record import Item, Record


class RecordSerializer:
    """Converts between ``Record`` objects and plain Python dicts.

    Identities are rendered as lowercase hex strings.  ``total_items`` is
    emitted for readability and checked against the item list on the way
    back in.
    """

    # ------------------------------------------------------------------
    # Serialization (Record -> dict)
    # ------------------------------------------------------------------

    def to_dict(self, record: Record) -> dict[str, object]:
        """Serialize a ``Record`` to a JSON-compatible dict."""
        return {
            "kind": "Record",
            "capacity": record.capacity,
            "total_items": record.total_items,
            "items": [self._item_to_dict(i) for i in record.items],
        }

    def _item_to_dict(self, item: Item) -> dict[str, object]:
        return {"content": item.content, "owner": item.owner.hex()}

    # ------------------------------------------------------------------
    # Deserialization (dict -> Record)
    # ------------------------------------------------------------------

    def from_dict(self, data: dict[str, object]) -> Record:
        """Deserialize a ``Record`` from a dict produced by ``to_dict``.

        Raises
        ------
        SerializationError
            If ``data`` is not a mapping, required keys are missing, an
            owner is not a valid identity, or ``total_items`` disagrees
            with the item list.
        """
        if not isinstance(data, dict):
            raise SerializationError(
                f"Expected a mapping for a record, got {type(data).__name__}"
            )
        if data.get("kind") != "Record":
            raise SerializationError(f"Expected kind 'Record', got {data.get('kind')!r}")
        try:
            capacity = int(data["capacity"])  # type: ignore[call-overload]
            raw_items = data["items"]
        except (KeyError, TypeError, ValueError) as exc:
            raise SerializationError(f"Malformed record dict: {exc}") from exc
        if not isinstance(raw_items, list):
            raise SerializationError("'items' must be a list")

        items = tuple(self._item_from_dict(raw) for raw in raw_items)
        total = data.get("total_items", len(items))
        if total != len(items):
            raise SerializationError(
                f"total_items is {total} but {len(items)} item(s) are listed"
            )
        return Record(capacity=capacity, items=items)

    def _item_from_dict(self, raw: object) -> Item:
        if not isinstance(raw, dict):
            raise SerializationError(f"Item must be a mapping, got {type(raw).__name__}")
        try:
            return Item(content=str(raw["content"]), owner=Identity.from_hex(str(raw["owner"])))
        except (KeyError, ValueError) as exc:
            raise SerializationError(f"Malformed item {raw!r}: {exc}") from exc

    # ------------------------------------------------------------------
    # JSON helpers
    # ------------------------------------------------------------------

    def to_json(self, record: Record, indent: int = 2) -> str:
        """Serialize a ``Record`` to a JSON string."""
        return json.dumps(self.to_dict(record), indent=indent, ensure_ascii=False)

    def from_json(self, text: str) -> Record:
        """Deserialize a ``Record`` from a JSON string."""
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise SerializationError(f"Invalid JSON: {exc}") from exc
        return self.from_dict(data)

    # ------------------------------------------------------------------
    # YAML helpers
    # ------------------------------------------------------------------

    def to_yaml(self, record: Record) -> str:
        """Serialize a ``Record`` to a YAML string."""
        return yaml.dump(self.to_dict(record), default_flow_style=False, allow_unicode=True, sort_keys=False)

    def from_yaml(self, text: str) -> Record:
        """Deserialize a ``Record`` from a YAML string."""
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise SerializationError(f"Invalid YAML: {exc}") from exc
        return self.from_dict(data)
