"""Core utilities shared across tree, runtime and generation layers.

By isolating these utilities here, we maintain a clean dependency graph:

    core <- tree <- runtime
                 <- generation

Exports:
    normalize_key: Map '-' and '.' to '_'
    is_valid_key: Key grammar check shared by parser and emitter
    to_title_case: Grouping-name conversion
    to_python_identifier: Identifier sanitization for generated code
    content_hash / tree_hash: Staleness hashes for generated artifacts

Python 3.13+.
"""

from .hashing import content_hash, tree_hash
from .identifiers import is_valid_key, normalize_key, to_python_identifier, to_title_case

__all__ = [
    "content_hash",
    "is_valid_key",
    "normalize_key",
    "to_python_identifier",
    "to_title_case",
    "tree_hash",
]
