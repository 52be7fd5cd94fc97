"""Key path resolution over an immutable ResourceTree.

Resolution of a dotted key path:
    1. Walk the tree segment by segment (first match wins among siblings)
    2. Pick the text for the requested language, falling back to the
       registry's fallback language when the node lacks only that language
    3. Unescape literal '\\n' sequences into newlines
    4. Substitute {name} tokens when substitutions are given

Two modes share one class: strict resolution raises ResolutionError
subclasses, permissive resolution returns a visibly wrong sentinel so that
a broken key degrades a single label instead of crashing the caller.
resolve_with_errors() returns the permissive result together with the
errors, python-fluent style.

Python 3.13+.
"""

from __future__ import annotations

import logging
import string
from collections.abc import Mapping

from i18ntree.constants import DEFAULT_FALLBACK_LANGUAGE, FALLBACK_NOT_LOCALIZED
from i18ntree.diagnostics import (
    ErrorTemplate,
    KeyNotFoundError,
    NotABranchError,
    ResolutionError,
    SubstitutionError,
)
from i18ntree.languages import LanguageRegistry
from i18ntree.tree import ResourceNode, ResourceTree

__all__ = [
    "KEY_PATH_SEPARATOR",
    "Resolver",
    "get_child_keys",
    "resolve",
    "substitute",
    "unescape_newlines",
]

logger = logging.getLogger(__name__)

KEY_PATH_SEPARATOR: str = "."

# Literal two-character escape stored in resource text.
_ESCAPED_NEWLINE: str = "\\n"

# Single shared instance; string.Formatter keeps no per-call state.
_FORMATTER = string.Formatter()


def unescape_newlines(text: str) -> str:
    """Replace the literal two-character sequence '\\n' with a newline."""
    return text.replace(_ESCAPED_NEWLINE, "\n")


def _is_plain_field(field_name: str) -> bool:
    """Accept named fields only: no positional, index or attribute access."""
    if not field_name or field_name.isdigit():
        return False
    return "." not in field_name and "[" not in field_name


def substitute(text: str, substitutions: Mapping[str, object], key_path: str = "") -> str:
    """Replace {name} tokens with substitution values.

    Follows str.format() syntax restricted to named fields: '{{' and '}}'
    are literal braces, format specs ('{count:,}') and conversions
    ('{name!r}') are honored.

    Args:
        text: Text containing replacement tokens
        substitutions: Token name -> value
        key_path: Key path reported in errors

    Returns:
        Text with every token replaced

    Raises:
        SubstitutionError: Unknown token, non-name field, unbalanced braces,
            or a value that rejects its format spec

    Example:
        >>> substitute("Hello, {name}!", {"name": "World"})
        'Hello, World!'
        >>> substitute("{count:,} items", {"count": 1200})
        '1,200 items'
    """
    try:
        parsed = list(_FORMATTER.parse(text))
    except ValueError as e:
        raise SubstitutionError(ErrorTemplate.substitution_invalid(str(e), key_path)) from e

    parts: list[str] = []
    for literal, field_name, format_spec, conversion in parsed:
        parts.append(literal)
        if field_name is None:
            continue
        if not _is_plain_field(field_name):
            raise SubstitutionError(
                ErrorTemplate.substitution_invalid(
                    f"'{{{field_name}}}' is not a plain token name", key_path
                )
            )
        if field_name not in substitutions:
            raise SubstitutionError(ErrorTemplate.substitution_missing(field_name, key_path))

        value = substitutions[field_name]
        try:
            if conversion:
                value = _FORMATTER.convert_field(value, conversion)
            parts.append(_FORMATTER.format_field(value, format_spec or ""))
        except (ValueError, TypeError) as e:
            raise SubstitutionError(
                ErrorTemplate.substitution_invalid(f"{{{field_name}}}: {e}", key_path)
            ) from e
    return "".join(parts)


class Resolver:
    """Resolves key paths against one tree.

    The tree and registry are immutable, so a Resolver holds no mutable
    state and may be shared freely between threads. The language is a
    parameter of every call; see LocalizationContext for a "current
    language" holder.

    Example:
        >>> resolver = Resolver(tree, DEFAULT_REGISTRY)
        >>> resolver.resolve("en", "menu.start")
        'Start'
        >>> Resolver(tree, strict=False).resolve("en", "menu.nope")
        'String menu.nope not localized!!!!!'
    """

    __slots__ = ("_fallback", "_registry", "_strict", "_tree")

    def __init__(
        self,
        tree: ResourceTree,
        registry: LanguageRegistry | None = None,
        *,
        strict: bool = True,
        fallback_language: str | None = None,
    ) -> None:
        """Initialize resolver.

        Args:
            tree: Tree to resolve against
            registry: When given, language codes are validated against it
                and its fallback language is used
            strict: Raise on failures (True) or return sentinels (False)
            fallback_language: Overrides the fallback language
                (default: registry fallback, else DEFAULT_FALLBACK_LANGUAGE)
        """
        self._tree = tree
        self._registry = registry
        self._strict = strict
        if fallback_language is not None:
            self._fallback = fallback_language
        elif registry is not None:
            self._fallback = registry.fallback
        else:
            self._fallback = DEFAULT_FALLBACK_LANGUAGE

    @property
    def tree(self) -> ResourceTree:
        """Tree this resolver reads."""
        return self._tree

    @property
    def registry(self) -> LanguageRegistry | None:
        """Registry used to validate language codes, if any."""
        return self._registry

    @property
    def strict(self) -> bool:
        """True if failures raise instead of returning sentinels."""
        return self._strict

    @property
    def fallback_language(self) -> str:
        """Language used when a node lacks the requested one."""
        return self._fallback

    def find_node(self, key_path: str) -> ResourceNode:
        """Find the node addressed by a dotted key path.

        Raises:
            KeyNotFoundError: If any segment matches no node
        """
        segments = key_path.split(KEY_PATH_SEPARATOR)
        node = self._tree.root(segments[0])
        if node is None:
            raise KeyNotFoundError(ErrorTemplate.key_not_found(key_path, segments[0]))
        for segment in segments[1:]:
            child = node.child(segment)
            if child is None:
                raise KeyNotFoundError(ErrorTemplate.key_not_found(key_path, segment))
            node = child
        return node

    def _lookup_text(self, language_code: str, key_path: str) -> str:
        """Raw text for the language, applying the fallback language."""
        if self._registry is not None:
            self._registry.get(language_code)

        node = self.find_node(key_path)
        text = node.text_for(language_code)
        if text is not None:
            return text

        if node.has_text:
            fallback_text = node.text_for(self._fallback)
            if fallback_text is not None:
                logger.warning(
                    "Key '%s' has no '%s' text; using fallback language '%s'",
                    key_path,
                    language_code,
                    self._fallback,
                )
                return fallback_text
        raise KeyNotFoundError(ErrorTemplate.text_not_found(key_path, language_code))

    def resolve_with_errors(
        self,
        language_code: str,
        key_path: str,
        substitutions: Mapping[str, object] | None = None,
    ) -> tuple[str, tuple[ResolutionError, ...]]:
        """Resolve without raising.

        Returns:
            Tuple of (text, errors)
            - text: Resolved text, the not-localized sentinel on a key miss,
              or the unsubstituted text when substitution fails
            - errors: Errors encountered (empty on success)
        """
        try:
            text = unescape_newlines(self._lookup_text(language_code, key_path))
        except KeyNotFoundError as e:
            return FALLBACK_NOT_LOCALIZED.format(key=key_path), (e,)

        if substitutions is None:
            return text, ()
        try:
            return substitute(text, substitutions, key_path), ()
        except SubstitutionError as e:
            return text, (e,)

    def resolve(
        self,
        language_code: str,
        key_path: str,
        substitutions: Mapping[str, object] | None = None,
    ) -> str:
        """Resolve a key path to display text.

        Args:
            language_code: Requested language
            key_path: Dotted key path
            substitutions: Token values; None leaves the text untouched

        Returns:
            Resolved text (a sentinel on failure in permissive mode)

        Raises:
            KeyNotFoundError: Key path or text missing (strict mode)
            UnknownLanguageError: Language not registered (strict mode)
            SubstitutionError: Tokens and values do not match (strict mode)
        """
        if self._strict:
            text = unescape_newlines(self._lookup_text(language_code, key_path))
            if substitutions is None:
                return text
            return substitute(text, substitutions, key_path)

        text, errors = self.resolve_with_errors(language_code, key_path, substitutions)
        for error in errors:
            logger.warning("Could not resolve '%s': %s", key_path, error)
        return text

    def get_child_keys(self, key_path: str) -> tuple[str, ...]:
        """Keys of the immediate children of a branch.

        Always strict: there is no meaningful sentinel for a key list.

        Raises:
            KeyNotFoundError: If the key path does not exist
            NotABranchError: If the node is a leaf
        """
        node = self.find_node(key_path)
        if not node.is_branch:
            raise NotABranchError(ErrorTemplate.not_a_branch(key_path))
        return node.child_keys()


def resolve(
    tree: ResourceTree,
    language_code: str,
    key_path: str,
    substitutions: Mapping[str, object] | None = None,
    *,
    fallback_language: str | None = None,
) -> str:
    """Resolve a key path strictly.

    Convenience wrapper around Resolver(tree).resolve(); no registry
    validation is performed on the language code.

    Example:
        >>> resolve(tree, "en", "greeting", {"name": "World"})
        'Hello, World!'
    """
    return Resolver(tree, fallback_language=fallback_language).resolve(
        language_code, key_path, substitutions
    )


def get_child_keys(tree: ResourceTree, key_path: str) -> tuple[str, ...]:
    """Keys of the immediate children of the node at key_path."""
    return Resolver(tree).get_child_keys(key_path)
