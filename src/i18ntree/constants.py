"""Shared constants for i18ntree.

Centralized configuration constants used across the tree, runtime and
generation packages. Placing constants here avoids circular imports and
provides a single source of truth.

Constants are grouped by domain:
- Input limits: size constraints on raw resource sources
- Resource format: field names of the JSON resource format
- Fallback strings: sentinels returned by permissive resolution
- Generation: key module and character set emission settings

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Input limits
    "MAX_SOURCE_SIZE",
    # Resource format
    "KEY_FIELD",
    "CHILDREN_FIELD",
    "EXCLUDE_NEWLINE_FIELD",
    "LONG_SUFFIX",
    # Language defaults
    "DEFAULT_LANGUAGES",
    "DEFAULT_FALLBACK_LANGUAGE",
    # Fallback strings
    "FALLBACK_NOT_LOCALIZED",
    "FALLBACK_NO_KEY",
    # Generation
    "DEFAULT_INDENT_WIDTH",
    "DEFAULT_ROOT_CLASS",
    "MAX_CLASS_NESTING",
    "COMMENT_TRUNCATE_LENGTH",
    "COMMENT_ELLIPSIS",
    "NUMERIC_CHARSET",
    "COMPATIBILITY_CHARSET",
    "HASH_HEADER_PREFIX",
]

# ============================================================================
# INPUT LIMITS
# ============================================================================

# Default maximum source size in characters (10 MB of text).
# Prevents unbounded memory allocation from runaway resource files.
MAX_SOURCE_SIZE: int = 10 * 1024 * 1024

# ============================================================================
# RESOURCE FORMAT
# ============================================================================

KEY_FIELD: str = "key"
CHILDREN_FIELD: str = "strings"
EXCLUDE_NEWLINE_FIELD: str = "exclude_newline"

# Multi-line text lives under "<code>_long" as an array of lines.
LONG_SUFFIX: str = "_long"

# ============================================================================
# LANGUAGE DEFAULTS
# ============================================================================

# Built-in registry used when no language configuration exists.
# (id, code, display name) in configuration order.
DEFAULT_LANGUAGES: tuple[tuple[int, str, str], ...] = (
    (0, "ja", "日本語"),
    (1, "en", "English"),
)

DEFAULT_FALLBACK_LANGUAGE: str = "en"

# ============================================================================
# FALLBACK STRINGS
# ============================================================================

# Visibly wrong output so a broken key degrades one label instead of crashing.
# Format string - use .format(key=...)
FALLBACK_NOT_LOCALIZED: str = "String {key} not localized!!!!!"

FALLBACK_NO_KEY: str = "No localization key specified!!!!!"

# ============================================================================
# GENERATION
# ============================================================================

DEFAULT_INDENT_WIDTH: int = 4

DEFAULT_ROOT_CLASS: str = "I18nKeys"

# Python's tokenizer rejects more than 99 nested indentation levels, so a
# generated module can hold at most this many nested class bodies
# (namespace wrappers and the root class included).
MAX_CLASS_NESTING: int = 99

# Documentation comments show at most this many characters per language.
COMMENT_TRUNCATE_LENGTH: int = 30
COMMENT_ELLIPSIS: str = "..."

# Digits and the characters that appear in formatted numbers.
NUMERIC_CHARSET: str = "0123456789+-.,"

# Glyphs text renderers need regardless of content.
COMPATIBILITY_CHARSET: str = "()_"

HASH_HEADER_PREFIX: str = "# String resource hash: "
