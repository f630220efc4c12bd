"""Record operations: create, append and fetch.

Exports the ``Initializer``, ``Appender`` and ``Reader`` classes.
"""
from __future__ import annotations

from liststore.program.appender import Appender
from liststore.program.initializer import Initializer
from liststore.program.reader import Reader

__all__ = ["Initializer", "Appender", "Reader"]
