"""Language registry: the fixed, ordered set of supported languages.

The registry is loaded once per process (or per test) and never mutated.
Language codes are validated at load time so that lookups with a typo fail
fast instead of silently resolving nothing.

Configuration format (JSON):

    [
        {"id": 0, "code": "ja", "display": "日本語"},
        {"id": 1, "code": "en", "display": "English"}
    ]

or, to name the fallback language explicitly:

    {"languages": [...], "fallback": "en"}

"id" defaults to the configuration position and "display" to the CLDR
name of the language in its own script (via Babel).

Python 3.13+.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from i18ntree.constants import (
    CHILDREN_FIELD,
    DEFAULT_FALLBACK_LANGUAGE,
    DEFAULT_LANGUAGES,
    EXCLUDE_NEWLINE_FIELD,
    KEY_FIELD,
    LONG_SUFFIX,
)
from i18ntree.diagnostics import ErrorTemplate, MalformedSourceError, UnknownLanguageError
from i18ntree.locale_utils import get_display_name

__all__ = [
    "DEFAULT_REGISTRY",
    "Language",
    "LanguageRegistry",
    "load_language_registry",
    "parse_language_registry",
]

logger = logging.getLogger(__name__)

# Resource object fields a language code (or its "_long" form) must not shadow.
_RESERVED_FIELDS: frozenset[str] = frozenset((KEY_FIELD, CHILDREN_FIELD, EXCLUDE_NEWLINE_FIELD))


@dataclass(frozen=True, slots=True)
class Language:
    """A supported language.

    Attributes:
        id: Stable integer id (configuration order unless given explicitly)
        code: Short code used as the field name in resource files (e.g. 'en')
        display_name: Name shown in language selectors (e.g. 'English')
    """

    id: int
    code: str
    display_name: str


@dataclass(frozen=True, slots=True)
class LanguageRegistry:
    """Ordered, immutable set of supported languages.

    Attributes:
        languages: Languages in configuration order
        fallback: Code of the language used when a node lacks the requested one

    Raises:
        MalformedSourceError: On empty registries, duplicate ids or codes,
            empty codes, codes that shadow resource fields ('key', 'strings',
            'exclude_newline' or another code's '_long' field), lone
            surrogates, or a fallback that is not registered

    Example:
        >>> registry = LanguageRegistry.from_entries([(0, "ja", "日本語"), (1, "en", "English")])
        >>> registry.get("en").display_name
        'English'
        >>> registry.fallback
        'ja'
    """

    languages: tuple[Language, ...]
    fallback: str = ""
    _by_code: Mapping[str, Language] = field(init=False, repr=False, compare=False)
    _by_id: Mapping[int, Language] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        """Validate uniqueness and index languages by code and id."""
        languages = tuple(self.languages)
        if not languages:
            raise MalformedSourceError(ErrorTemplate.invalid_registry("no languages configured"))

        by_code: dict[str, Language] = {}
        by_id: dict[int, Language] = {}
        for language in languages:
            if not isinstance(language.code, str) or not language.code.strip():
                raise MalformedSourceError(
                    ErrorTemplate.invalid_registry(f"empty language code for id {language.id}")
                )
            if language.code in by_code:
                raise MalformedSourceError(
                    ErrorTemplate.invalid_registry(f"duplicate language code '{language.code}'")
                )
            if language.id in by_id:
                raise MalformedSourceError(
                    ErrorTemplate.invalid_registry(f"duplicate language id {language.id}")
                )
            by_code[language.code] = language
            by_id[language.id] = language

        for code in by_code:
            if code in _RESERVED_FIELDS:
                raise MalformedSourceError(
                    ErrorTemplate.invalid_registry(
                        f"language code '{code}' is a reserved resource field"
                    )
                )
            if f"{code}{LONG_SUFFIX}" in by_code:
                raise MalformedSourceError(
                    ErrorTemplate.invalid_registry(
                        f"language code '{code}{LONG_SUFFIX}' is the multi-line field "
                        f"of '{code}'"
                    )
                )
        for language in languages:
            for value in (language.code, language.display_name):
                try:
                    value.encode("utf-8")
                except UnicodeEncodeError as e:
                    raise MalformedSourceError(
                        ErrorTemplate.invalid_registry(
                            f"language {language.id} contains a lone surrogate"
                        )
                    ) from e

        fallback = self.fallback or languages[0].code
        if fallback not in by_code:
            raise MalformedSourceError(
                ErrorTemplate.invalid_registry(f"fallback language '{fallback}' is not registered")
            )

        object.__setattr__(self, "languages", languages)
        object.__setattr__(self, "fallback", fallback)
        object.__setattr__(self, "_by_code", by_code)
        object.__setattr__(self, "_by_id", by_id)

    @classmethod
    def from_entries(
        cls,
        entries: Sequence[tuple[int, str, str]],
        fallback: str | None = None,
    ) -> LanguageRegistry:
        """Build a registry from (id, code, display name) triples."""
        return cls(
            tuple(Language(id_, code, display) for id_, code, display in entries),
            fallback or "",
        )

    @property
    def codes(self) -> tuple[str, ...]:
        """Language codes in configuration order."""
        return tuple(language.code for language in self.languages)

    @property
    def display_names(self) -> tuple[str, ...]:
        """Display names in configuration order."""
        return tuple(language.display_name for language in self.languages)

    @property
    def fallback_language(self) -> Language:
        """The fallback Language entry."""
        return self._by_code[self.fallback]

    def contains(self, code: str) -> bool:
        """Check whether a language code is registered."""
        return code in self._by_code

    def get(self, code: str) -> Language:
        """Look up a language by code.

        Raises:
            UnknownLanguageError: If the code is not registered
        """
        try:
            return self._by_code[code]
        except KeyError:
            raise UnknownLanguageError(ErrorTemplate.unknown_language(code, self.codes)) from None

    def by_id(self, language_id: int) -> Language:
        """Look up a language by id.

        Raises:
            UnknownLanguageError: If the id is not registered
        """
        try:
            return self._by_id[language_id]
        except KeyError:
            raise UnknownLanguageError(
                ErrorTemplate.unknown_language(language_id, self.codes)
            ) from None

    def match_locale(self, locale_code: str | None) -> Language:
        """Pick the registered language best matching a locale code.

        Tries the exact code, then the language subtag ('pt_BR' -> 'pt').
        Returns the fallback language when nothing matches.
        """
        if locale_code:
            for candidate in (locale_code, locale_code.replace("_", "-")):
                if candidate in self._by_code:
                    return self._by_code[candidate]
            base = locale_code.replace("-", "_").split("_")[0]
            if base in self._by_code:
                return self._by_code[base]
        return self.fallback_language

    def __iter__(self) -> Iterator[Language]:
        return iter(self.languages)

    def __len__(self) -> int:
        return len(self.languages)


DEFAULT_REGISTRY: LanguageRegistry = LanguageRegistry.from_entries(
    DEFAULT_LANGUAGES, DEFAULT_FALLBACK_LANGUAGE
)
"""Built-in registry (ja, en; fallback en) used when no configuration exists."""


def _language_from_entry(entry: object, position: int) -> Language:
    if not isinstance(entry, dict):
        raise MalformedSourceError(
            ErrorTemplate.invalid_registry(f"entry #{position} is not an object")
        )
    code = entry.get("code")
    if not isinstance(code, str) or not code.strip():
        raise MalformedSourceError(
            ErrorTemplate.invalid_registry(f"entry #{position} has no 'code' string")
        )
    language_id = entry.get("id", position)
    # bool is an int subclass; reject it explicitly
    if not isinstance(language_id, int) or isinstance(language_id, bool):
        raise MalformedSourceError(
            ErrorTemplate.invalid_registry(f"entry '{code}' has a non-integer id")
        )
    display = entry.get("display")
    if display is None:
        display = get_display_name(code)
    elif not isinstance(display, str):
        raise MalformedSourceError(
            ErrorTemplate.invalid_registry(f"entry '{code}' has a non-string display name")
        )
    return Language(language_id, code, display)


def parse_language_registry(text: str) -> LanguageRegistry:
    """Parse a registry from its JSON configuration text.

    Raises:
        MalformedSourceError: If the text is not a valid registry configuration
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedSourceError(ErrorTemplate.invalid_registry(f"invalid JSON: {e}")) from e

    fallback: object = None
    if isinstance(data, dict):
        fallback = data.get("fallback")
        data = data.get("languages")
        if fallback is not None and not isinstance(fallback, str):
            raise MalformedSourceError(
                ErrorTemplate.invalid_registry("'fallback' must be a string")
            )
    if not isinstance(data, list):
        raise MalformedSourceError(
            ErrorTemplate.invalid_registry("expected an array of language objects")
        )

    languages = tuple(_language_from_entry(entry, i) for i, entry in enumerate(data))
    return LanguageRegistry(languages, fallback or "")


def load_language_registry(path: str | Path | None = None) -> LanguageRegistry:
    """Load the registry from a configuration file.

    An absent path or missing file yields the built-in DEFAULT_REGISTRY.

    Raises:
        MalformedSourceError: If the file exists but is not a valid configuration
        OSError: If the file exists but cannot be read
    """
    if path is None:
        return DEFAULT_REGISTRY
    config_path = Path(path)
    if not config_path.is_file():
        logger.info("Language configuration %s not found, using built-in default", config_path)
        return DEFAULT_REGISTRY
    registry = parse_language_registry(config_path.read_text(encoding="utf-8"))
    logger.debug("Loaded %d language(s) from %s", len(registry), config_path)
    return registry
