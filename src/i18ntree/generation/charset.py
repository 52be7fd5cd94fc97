"""Character inventory emitter.

Collects every distinct character used by a tree's texts so fonts can be
subset or glyph atlases baked with exactly the glyphs the strings need.

Python 3.13+.
"""

from __future__ import annotations

import logging
from pathlib import Path

from i18ntree.constants import COMPATIBILITY_CHARSET, NUMERIC_CHARSET
from i18ntree.languages import LanguageRegistry
from i18ntree.tree import ResourceTree

from .output import write_atomic

__all__ = ["CharsetEmitter"]

logger = logging.getLogger(__name__)


class CharsetEmitter:
    """Extracts the set of characters a tree needs.

    The inventory is built from the stored text (escape sequences such as
    a literal backslash-n contribute their characters), excluding real
    newlines. The compatibility characters '()_' are always included.

    Example:
        >>> emitter = CharsetEmitter(include_numeric_set=True)
        >>> chars = emitter.emit(tree)
        >>> set("0123456789") <= chars
        True
    """

    __slots__ = ("_include_numeric_set", "_registry")

    def __init__(
        self,
        include_numeric_set: bool = False,
        registry: LanguageRegistry | None = None,
    ) -> None:
        """Initialize emitter.

        Args:
            include_numeric_set: Add digits and number punctuation ('0123456789+-.,')
            registry: When given, language display names are added so a
                language selector can be rendered
        """
        self._include_numeric_set = include_numeric_set
        self._registry = registry

    def emit(self, tree: ResourceTree) -> frozenset[str]:
        """Collect the character set for a tree."""
        chars: set[str] = set()
        for _, node in tree.walk():
            for text in node.texts.values():
                chars.update(text)
        chars.discard("\n")

        if self._include_numeric_set:
            chars.update(NUMERIC_CHARSET)
        if self._registry is not None:
            for name in self._registry.display_names:
                chars.update(name)
        chars.update(COMPATIBILITY_CHARSET)
        return frozenset(chars)

    def render(self, tree: ResourceTree) -> str:
        """Character set as one string, sorted by code point."""
        return "".join(sorted(self.emit(tree)))

    def write(self, tree: ResourceTree, path: str | Path) -> None:
        """Render and atomically replace the file at path."""
        text = self.render(tree)
        write_atomic(path, text)
        logger.info("Wrote %d character(s) to %s", len(text), path)
