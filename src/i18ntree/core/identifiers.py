"""Unified key and identifier rules.

This module is the single source of truth for resource key grammar,
ensuring the parser and the key class emitter validate keys identically.

Key Grammar:
    [\\p{Letter}\\p{Number}_]+ after normalizing '-' and '.' to '_'

    - Letters and numbers of any script are allowed
    - '-', '.' and '_' are allowed; '-' and '.' become '_' in identifiers
    - Empty keys are invalid

Thread Safety:
    All functions in this module are pure functions with no shared state.
    Safe for concurrent use across multiple threads.

Python 3.13+.
"""

from __future__ import annotations

import keyword
import unicodedata

__all__ = [
    "is_key_char",
    "is_valid_key",
    "normalize_key",
    "to_python_identifier",
    "to_title_case",
]

# Characters replaced with '_' before validation and identifier generation.
_NORMALIZED_SEPARATORS: tuple[str, ...] = ("-", ".")


def normalize_key(key: str) -> str:
    """Replace '-' and '.' with '_'.

    Example:
        >>> normalize_key("menu-item.title")
        'menu_item_title'
    """
    for separator in _NORMALIZED_SEPARATORS:
        key = key.replace(separator, "_")
    return key


def is_key_char(ch: str) -> bool:
    """Check if a (normalized) character may appear in a key.

    Accepts any Unicode letter (L*) or number (N*) category and underscore.

    Example:
        >>> is_key_char("あ")
        True
        >>> is_key_char("!")
        False
    """
    return ch == "_" or unicodedata.category(ch)[0] in ("L", "N")


def is_valid_key(key: object) -> bool:
    """Validate a complete key.

    Args:
        key: Candidate key (any type; non-strings are invalid)

    Returns:
        True if key is a non-empty string made of key characters
        after normalization

    Example:
        >>> is_valid_key("valid.key")
        True
        >>> is_valid_key("bad key!")
        False
        >>> is_valid_key("")
        False
    """
    if not isinstance(key, str) or not key:
        return False
    return all(is_key_char(ch) for ch in normalize_key(key))


def _is_word_separator(ch: str) -> bool:
    return unicodedata.category(ch)[0] not in ("L", "N", "M")


def to_title_case(text: str) -> str:
    """Convert text to TitleCase word by word.

    A word starts at a letter and runs until the next character that is
    not a letter, number or mark. The first letter of each word is
    uppercased and the rest lowercased, except that words written entirely
    in uppercase are kept as they are (treated as acronyms).

    Example:
        >>> to_title_case("main_menu")
        'Main_Menu'
        >>> to_title_case("HUD_overlay")
        'HUD_Overlay'
        >>> to_title_case("level2boss")
        'Level2boss'
    """
    parts: list[str] = []
    index = 0
    length = len(text)
    while index < length:
        ch = text[index]
        if not ch.isalpha():
            parts.append(ch)
            index += 1
            continue
        end = index
        while end < length and not _is_word_separator(text[end]):
            end += 1
        word = text[index:end]
        parts.append(word if word.isupper() else word[0].upper() + word[1:].lower())
        index = end
    return "".join(parts)


def to_python_identifier(name: str) -> str | None:
    """Turn a normalized key into a Python identifier.

    A leading number gets a '_' prefix and hard keywords get a '_' suffix
    (PEP 8 convention). Returns None when no valid identifier results,
    for example for numbers that are not decimal digits.

    Example:
        >>> to_python_identifier("404")
        '_404'
        >>> to_python_identifier("continue")
        'continue_'
        >>> to_python_identifier("①") is None
        True
    """
    if not name:
        return None
    if not name.isidentifier() and f"_{name}".isidentifier():
        name = f"_{name}"
    if keyword.iskeyword(name):
        name = f"{name}_"
    return name if name.isidentifier() else None
