"""Enumerations for i18ntree type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, eliminating boilerplate __str__ methods.

Python 3.13+.
"""

from enum import StrEnum


class NodeKind(StrEnum):
    """Shape of a resource node.

    StrEnum provides automatic string conversion: str(NodeKind.LEAF) == "leaf"
    """

    LEAF = "leaf"
    """Node with per-language text and no children."""

    BRANCH = "branch"
    """Node with children and no text of its own."""

    BRANCH_WITH_TEXT = "branch_with_text"
    """Node with children that is also an addressable string."""


class WarningCode(StrEnum):
    """Codes for non-fatal findings collected while parsing.

    StrEnum provides automatic string conversion: str(WarningCode.DUPLICATE_KEY) == "duplicate-key"
    """

    TITLE_CASE_KEY = "title-case-key"
    """Key equals its own TitleCase form; clashes with generated class names."""

    DUPLICATE_KEY = "duplicate-key"
    """Two siblings share a key; only the first one is addressable."""


__all__ = [
    "NodeKind",
    "WarningCode",
]
