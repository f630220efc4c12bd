"""CLI package.

The ``cli`` sub-package contains the Click application and all
command implementations. It builds stores through the public
``ListStore`` facade and the backend registry.
"""
from __future__ import annotations
