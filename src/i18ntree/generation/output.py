"""Content hashing and atomic output for generated artifacts.

Generated files embed a hash of the resource source (see core.hashing) so
tooling can detect stale output. Writes go to a sibling temporary file
that replaces the target only once complete, so a failed generation run
never corrupts a previously generated file.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING

from i18ntree.constants import HASH_HEADER_PREFIX
from i18ntree.core.hashing import content_hash, tree_hash

if TYPE_CHECKING:
    from i18ntree.tree.nodes import ResourceTree

__all__ = [
    "content_hash",
    "is_stale",
    "read_embedded_hash",
    "tree_hash",
    "write_atomic",
]

logger = logging.getLogger(__name__)

# Only the first lines of a generated file are scanned for the hash header.
_HEADER_SCAN_LINES: int = 10


def write_atomic(path: str | Path, text: str) -> None:
    """Write text to path via temp file + rename.

    The parent directory is created if needed. On any failure the temp
    file is removed and the previous target (if any) is left untouched.
    """
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_path = tempfile.mkstemp(
        dir=target.parent, prefix=f".{target.name}.", suffix=".tmp", text=True
    )
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as f:
            f.write(text)
        # Atomic rename (POSIX guarantees atomicity)
        os.replace(tmp_path, target)
    except BaseException:
        Path(tmp_path).unlink(missing_ok=True)
        raise
    logger.debug("Wrote %d characters to %s", len(text), target)


def read_embedded_hash(path: str | Path) -> str | None:
    """Read the resource hash recorded in a generated file header.

    Returns:
        The hash, or None if the file does not exist or has no hash header
    """
    target = Path(path)
    if not target.is_file():
        return None
    with target.open(encoding="utf-8") as f:
        for line_number, line in enumerate(f):
            if line_number >= _HEADER_SCAN_LINES:
                break
            if line.startswith(HASH_HEADER_PREFIX):
                return line[len(HASH_HEADER_PREFIX) :].strip() or None
    return None


def is_stale(path: str | Path, tree: ResourceTree) -> bool:
    """Check whether a generated file was produced from a different source.

    Missing files and files without a hash header count as stale.
    """
    return read_embedded_hash(path) != tree.source_hash
