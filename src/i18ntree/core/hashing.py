"""Content hashing for staleness detection.

Generated artifacts embed a hash of the resource source. Parsed trees
hash the raw source text; trees built in code hash a canonical form of
their nodes: one compact JSON record per node in depth-first order,
[depth, key, texts, branch], newline separated. Depth plus order fixes
the shape, so the form never needs nested JSON.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import hashlib
import json
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from i18ntree.tree.nodes import ResourceNode, ResourceTree

__all__ = ["content_hash", "tree_hash"]


def content_hash(text: str) -> str:
    """SHA-256 hex digest of UTF-8 encoded text."""
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def _record(depth: int, node: ResourceNode) -> bytes:
    record = [
        depth,
        node.key,
        [[code, text] for code, text in node.texts.items()],
        node.children is not None,
    ]
    return json.dumps(record, ensure_ascii=False, separators=(",", ":")).encode("utf-8") + b"\n"


def tree_hash(tree: ResourceTree) -> str:
    """Hash of the canonical per-node form of the tree.

    Node order and text order are significant; warnings and languages are not.
    """
    digest = hashlib.sha256()
    stack: list[tuple[int, ResourceNode]] = [(0, node) for node in reversed(tree.roots)]
    while stack:
        depth, node = stack.pop()
        digest.update(_record(depth, node))
        if node.children:
            stack.extend((depth + 1, child) for child in reversed(node.children))
    return digest.hexdigest()
