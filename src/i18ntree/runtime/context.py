"""Consumer-facing lookup API.

LocalizationContext owns the one piece of mutable state in the system:
the currently selected language. It is constructed explicitly and passed
to whoever displays text, so tests can run any number of independent
contexts side by side.

LocalizedString is a handle for one key path. Resolution is always an
explicit call (get_string / to_text); handles never turn into text
implicitly, so failures and substitution requirements stay visible.

LazyContext provides guarded single construction for hosts that want one
process-wide context.

Python 3.13+.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Mapping
from dataclasses import dataclass

from i18ntree.constants import FALLBACK_NO_KEY
from i18ntree.diagnostics import ErrorTemplate, KeyNotFoundError
from i18ntree.languages import Language, LanguageRegistry
from i18ntree.locale_utils import get_system_locale
from i18ntree.tree import ResourceTree, join_key_path

from .resolver import Resolver

__all__ = ["LazyContext", "LocalizationContext", "LocalizedString"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class LocalizedString:
    """Handle for the string at one key path.

    Obtained from LocalizationContext.for_key(). Resolves against the
    context's current language at call time, so a handle created before
    change_language() follows the new language.

    Attributes:
        key: Dotted key path ("" when no key was specified)
        context: Owning context
    """

    key: str
    context: LocalizationContext

    def get_string(self, substitutions: Mapping[str, object] | None = None) -> str:
        """Resolve this key in the context's current language.

        Args:
            substitutions: Token values; None leaves the text untouched

        Returns:
            Resolved text, or a sentinel in permissive mode

        Raises:
            ResolutionError: On failures when the context is strict
        """
        return self.context.resolve(self.key, substitutions)

    def to_text(self) -> str:
        """Resolve without substitutions."""
        return self.get_string()

    def get_children(self) -> tuple[LocalizedString, ...]:
        """Handles for the immediate children of this key.

        Raises:
            KeyNotFoundError: If the key does not exist
            NotABranchError: If the key addresses a leaf
        """
        return tuple(
            LocalizedString(join_key_path(self.key, child), self.context)
            for child in self.context.resolver.get_child_keys(self.key)
        )


class LocalizationContext:
    """Current language plus a resolver over one tree.

    Example:
        >>> context = LocalizationContext(tree, DEFAULT_REGISTRY, language="ja")
        >>> context.for_key("menu.start").get_string()
        'スタート'
        >>> context.change_language("en")
        >>> context.for_key("menu.start").to_text()
        'Start'
    """

    __slots__ = ("_language", "_registry", "_resolver")

    def __init__(
        self,
        tree: ResourceTree,
        registry: LanguageRegistry,
        language: str | None = None,
        strict: bool = False,
    ) -> None:
        """Initialize context.

        Args:
            tree: Tree to resolve against
            registry: Registry the language is validated against
            language: Initial language code (default: registry fallback)
            strict: Raise on resolution failures instead of returning sentinels

        Raises:
            UnknownLanguageError: If language is not registered
        """
        self._registry = registry
        self._resolver = Resolver(tree, registry, strict=strict)
        self._language: Language = (
            registry.get(language) if language is not None else registry.fallback_language
        )

    @classmethod
    def from_system_locale(
        cls, tree: ResourceTree, registry: LanguageRegistry, strict: bool = False
    ) -> LocalizationContext:
        """Create a context whose language matches the system locale.

        Falls back to the registry fallback language when the system locale
        is unknown or not registered.
        """
        language = registry.match_locale(get_system_locale())
        logger.debug("Selected language '%s' from system locale", language.code)
        return cls(tree, registry, language.code, strict)

    @property
    def language(self) -> Language:
        """Currently selected language."""
        return self._language

    @property
    def registry(self) -> LanguageRegistry:
        return self._registry

    @property
    def resolver(self) -> Resolver:
        return self._resolver

    @property
    def strict(self) -> bool:
        return self._resolver.strict

    def change_language(self, code: str) -> None:
        """Select another registered language.

        Raises:
            UnknownLanguageError: If code is not registered
        """
        self._language = self._registry.get(code)
        logger.debug("Language changed to '%s'", code)

    def for_key(self, key: str) -> LocalizedString:
        """Handle for the string at key."""
        return LocalizedString(key, self)

    def resolve(self, key: str, substitutions: Mapping[str, object] | None = None) -> str:
        """Resolve key in the current language.

        An empty key yields FALLBACK_NO_KEY (or KeyNotFoundError when strict).
        """
        if not key:
            if self._resolver.strict:
                raise KeyNotFoundError(ErrorTemplate.key_not_found(key, key))
            return FALLBACK_NO_KEY
        return self._resolver.resolve(self._language.code, key, substitutions)


class LazyContext:
    """Constructs a LocalizationContext on first access, at most once.

    Uses double-check locking so concurrent first accesses build a single
    instance and later reads take no lock.

    Example:
        >>> shared = LazyContext(lambda: LocalizationContext(load_tree(), DEFAULT_REGISTRY))
        >>> shared.get() is shared.get()
        True
    """

    __slots__ = ("_factory", "_instance", "_lock")

    def __init__(self, factory: Callable[[], LocalizationContext]) -> None:
        self._factory = factory
        self._instance: LocalizationContext | None = None
        self._lock = threading.Lock()

    def get(self) -> LocalizationContext:
        """Return the shared context, constructing it on first call."""
        instance = self._instance
        if instance is not None:
            return instance

        with self._lock:
            # Double-check after acquiring lock
            if self._instance is None:
                self._instance = self._factory()
                logger.debug("Constructed shared localization context")
            return self._instance

    def reset(self) -> None:
        """Drop the shared context; the next get() constructs a new one."""
        with self._lock:
            self._instance = None
