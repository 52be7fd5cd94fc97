"""Code generation from resource trees.

This module provides:
- KeyClassEmitter: Python module of key path constants
- CharsetEmitter: character inventory for font provisioning
- Atomic output and staleness helpers

Python 3.13+.
"""

from .charset import CharsetEmitter
from .keys import KeyClassEmitter, comment_text
from .output import content_hash, is_stale, read_embedded_hash, tree_hash, write_atomic

__all__ = [
    "CharsetEmitter",
    "KeyClassEmitter",
    "comment_text",
    "content_hash",
    "is_stale",
    "read_embedded_hash",
    "tree_hash",
    "write_atomic",
]
