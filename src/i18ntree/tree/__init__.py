"""Resource tree model and parser.

This module provides:
- ResourceNode / ResourceTree: immutable tree model
- TreeParser: JSON resource source -> ResourceTree
- TreeVisitor: depth-first traversal base class

Python 3.13+.
"""

from .nodes import ResourceNode, ResourceTree, join_key_path
from .parser import TreeParser, parse, parse_file
from .visitor import TreeVisitor

__all__ = [
    "ResourceNode",
    "ResourceTree",
    "TreeParser",
    "TreeVisitor",
    "join_key_path",
    "parse",
    "parse_file",
]
