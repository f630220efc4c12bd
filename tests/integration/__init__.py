"""Integration tests.

These exercise the ``ListStore`` facade over real on-disk backends and
multiple threads. Run only the fast suite with ``pytest tests/unit/``.
"""
from __future__ import annotations
