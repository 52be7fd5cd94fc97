"""Locale utilities backed by Babel's CLDR data.

Centralizes locale code normalization and language display names used by
the language registry, plus system locale detection for command-line use.

Python 3.13+.
"""

from __future__ import annotations

import functools
import logging
import os
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from babel import Locale

__all__ = [
    "clear_locale_cache",
    "get_babel_locale",
    "get_display_name",
    "get_system_locale",
    "normalize_locale",
]

logger = logging.getLogger(__name__)


def normalize_locale(locale_code: str) -> str:
    """Convert BCP-47 locale code to POSIX format for Babel.

    BCP-47 uses hyphens (en-US), while Babel/POSIX uses underscores (en_US).

    Example:
        >>> normalize_locale("pt-BR")
        'pt_BR'
        >>> normalize_locale("en")
        'en'
    """
    return locale_code.replace("-", "_")


@functools.lru_cache(maxsize=128)
def get_babel_locale(locale_code: str) -> Locale:
    """Get a Babel Locale object with caching.

    Thread-safe via lru_cache internal locking.

    Args:
        locale_code: Locale code (BCP-47 or POSIX format accepted)

    Returns:
        Babel Locale object

    Raises:
        babel.core.UnknownLocaleError: If locale is not recognized
        ValueError: If locale format is invalid
    """
    # Lazy import: Babel loads CLDR data at import time; defer until needed
    from babel import Locale  # noqa: PLC0415

    return Locale.parse(normalize_locale(locale_code))


def clear_locale_cache() -> None:
    """Clear the Babel Locale cache."""
    get_babel_locale.cache_clear()


def get_display_name(locale_code: str) -> str:
    """Return a language's name for itself (e.g. 'ja' -> '日本語').

    Language selectors show every language in its own script, so the name
    is rendered in the language being named. Unknown or malformed codes
    fall back to the code itself with a logged warning.

    Example:
        >>> get_display_name("en")
        'English'
        >>> get_display_name("ja")
        '日本語'
    """
    from babel.core import UnknownLocaleError  # noqa: PLC0415

    try:
        locale = get_babel_locale(locale_code)
    except (UnknownLocaleError, ValueError) as e:
        logger.warning("Unknown locale '%s': %s. Using the code as display name", locale_code, e)
        return locale_code
    name = locale.get_display_name(locale)
    if not name:
        return locale_code
    # CLDR lowercases language names in many locales ("français").
    return name[0].upper() + name[1:]


def get_system_locale() -> str | None:
    """Detect system locale from OS and environment variables.

    Detection order:
    1. Python locale.getlocale() (OS-level locale)
    2. LC_ALL, LC_MESSAGES, LANG environment variables

    Filters out "C" and "POSIX" pseudo-locales and strips encodings.

    Returns:
        Locale code in POSIX format, or None if not determinable.

    Example:
        >>> os.environ['LANG'] = 'de_DE.UTF-8'
        >>> get_system_locale()
        'de_DE'
    """
    import locale as locale_module  # noqa: PLC0415

    try:
        system_locale, _ = locale_module.getlocale()
        if system_locale and system_locale not in ("C", "POSIX"):
            return normalize_locale(system_locale.split(".")[0])
    except (ValueError, AttributeError):
        pass

    for var in ("LC_ALL", "LC_MESSAGES", "LANG"):
        value = os.environ.get(var)
        if value and value not in ("C", "POSIX"):
            return normalize_locale(value.split(".")[0])

    return None
