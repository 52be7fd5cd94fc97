"""Tests for LocalizationContext, LocalizedString and LazyContext.

Python 3.13+.
"""

import threading
from unittest.mock import patch

import pytest

from i18ntree import (
    DEFAULT_REGISTRY,
    KeyNotFoundError,
    LazyContext,
    LocalizationContext,
    LocalizedString,
    NotABranchError,
    ResourceTree,
    SubstitutionError,
    UnknownLanguageError,
)


class TestLocalizationContext:
    """Test the current-language holder."""

    def test_default_language_is_fallback(self, sample_tree: ResourceTree) -> None:
        """Without a language the registry fallback is selected."""
        context = LocalizationContext(sample_tree, DEFAULT_REGISTRY)
        assert context.language.code == "en"
        assert not context.strict

    def test_initial_language(self, sample_tree: ResourceTree) -> None:
        """An explicit language is validated and selected."""
        context = LocalizationContext(sample_tree, DEFAULT_REGISTRY, language="ja")
        assert context.language.display_name == "日本語"

    def test_initial_language_unknown(self, sample_tree: ResourceTree) -> None:
        """Unregistered initial languages are rejected."""
        with pytest.raises(UnknownLanguageError):
            LocalizationContext(sample_tree, DEFAULT_REGISTRY, language="fr")

    def test_change_language(self, sample_tree: ResourceTree) -> None:
        """Switching language changes subsequent results."""
        context = LocalizationContext(sample_tree, DEFAULT_REGISTRY, language="ja")
        handle = context.for_key("menu.start")
        assert handle.get_string() == "スタート"
        context.change_language("en")
        assert handle.get_string() == "Start"

    def test_change_language_unknown_keeps_current(self, sample_tree: ResourceTree) -> None:
        """A rejected code leaves the selection unchanged."""
        context = LocalizationContext(sample_tree, DEFAULT_REGISTRY, language="ja")
        with pytest.raises(UnknownLanguageError):
            context.change_language("fr")
        assert context.language.code == "ja"

    def test_contexts_are_independent(self, sample_tree: ResourceTree) -> None:
        """Two contexts over one tree keep separate languages."""
        japanese = LocalizationContext(sample_tree, DEFAULT_REGISTRY, language="ja")
        english = LocalizationContext(sample_tree, DEFAULT_REGISTRY, language="en")
        assert japanese.resolve("menu") == "メニュー"
        assert english.resolve("menu") == "Menu"

    def test_from_system_locale(self, sample_tree: ResourceTree) -> None:
        """The system locale selects the matching registered language."""
        with patch("i18ntree.runtime.context.get_system_locale", return_value="ja_JP"):
            context = LocalizationContext.from_system_locale(sample_tree, DEFAULT_REGISTRY)
        assert context.language.code == "ja"

    def test_from_system_locale_unmatched(self, sample_tree: ResourceTree) -> None:
        """Unknown or unregistered locales use the fallback."""
        with patch("i18ntree.runtime.context.get_system_locale", return_value=None):
            context = LocalizationContext.from_system_locale(sample_tree, DEFAULT_REGISTRY)
        assert context.language.code == "en"


class TestEmptyKey:
    """Test handles created without a key."""

    def test_permissive_sentinel(self, sample_tree: ResourceTree) -> None:
        """Empty keys resolve to the no-key sentinel."""
        context = LocalizationContext(sample_tree, DEFAULT_REGISTRY)
        assert context.for_key("").get_string() == "No localization key specified!!!!!"

    def test_strict_raises(self, sample_tree: ResourceTree) -> None:
        """Strict contexts raise instead."""
        context = LocalizationContext(sample_tree, DEFAULT_REGISTRY, strict=True)
        with pytest.raises(KeyNotFoundError):
            context.for_key("").to_text()


class TestLocalizedString:
    """Test key handles."""

    def test_get_string_with_substitutions(self, sample_tree: ResourceTree) -> None:
        """Substitutions pass through to the resolver."""
        context = LocalizationContext(sample_tree, DEFAULT_REGISTRY, language="en")
        assert context.for_key("greeting").get_string({"name": "World"}) == "Hello, World!"

    def test_to_text_unescapes(self, sample_tree: ResourceTree) -> None:
        """to_text resolves without substitutions."""
        context = LocalizationContext(sample_tree, DEFAULT_REGISTRY, language="en")
        assert context.for_key("tips.tip1").to_text() == "Tip\nTwo lines"

    def test_missing_key_permissive(self, sample_tree: ResourceTree) -> None:
        """Permissive contexts return the not-localized sentinel."""
        context = LocalizationContext(sample_tree, DEFAULT_REGISTRY)
        assert context.for_key("menu.nope").to_text() == "String menu.nope not localized!!!!!"

    def test_substitution_error_strict(self, sample_tree: ResourceTree) -> None:
        """Strict contexts surface substitution errors."""
        context = LocalizationContext(sample_tree, DEFAULT_REGISTRY, strict=True)
        with pytest.raises(SubstitutionError):
            context.for_key("greeting").get_string({"wrong": 1})

    def test_get_children(self, sample_tree: ResourceTree) -> None:
        """Children are handles with full key paths in declaration order."""
        context = LocalizationContext(sample_tree, DEFAULT_REGISTRY, language="en")
        children = context.for_key("menu").get_children()
        assert [child.key for child in children] == ["menu.start", "menu.quit-game", "menu.help"]
        texts = [child.to_text() for child in children]
        assert texts == ["Start", "Quit", "First line\nSecond line"]

    def test_get_children_of_leaf(self, sample_tree: ResourceTree) -> None:
        """Leaves have no children to list."""
        context = LocalizationContext(sample_tree, DEFAULT_REGISTRY)
        with pytest.raises(NotABranchError):
            context.for_key("greeting").get_children()

    def test_handle_is_value(self, sample_tree: ResourceTree) -> None:
        """Handles are immutable and compare by key and context."""
        context = LocalizationContext(sample_tree, DEFAULT_REGISTRY)
        assert context.for_key("menu") == LocalizedString("menu", context)
        with pytest.raises(AttributeError):
            context.for_key("menu").key = "tips"  # type: ignore[misc]


class TestLazyContext:
    """Test single construction of a shared context."""

    def test_constructs_once(self, sample_tree: ResourceTree) -> None:
        """Repeated get() returns the same instance."""
        calls: list[int] = []

        def factory() -> LocalizationContext:
            calls.append(1)
            return LocalizationContext(sample_tree, DEFAULT_REGISTRY)

        shared = LazyContext(factory)
        assert calls == []
        assert shared.get() is shared.get()
        assert len(calls) == 1

    def test_concurrent_first_access(self, sample_tree: ResourceTree) -> None:
        """Racing threads still construct a single instance."""
        calls: list[int] = []
        barrier = threading.Barrier(8)

        def factory() -> LocalizationContext:
            calls.append(1)
            return LocalizationContext(sample_tree, DEFAULT_REGISTRY)

        shared = LazyContext(factory)
        results: list[LocalizationContext] = []

        def worker() -> None:
            barrier.wait()
            results.append(shared.get())

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(calls) == 1
        assert len({id(result) for result in results}) == 1

    def test_reset(self, sample_tree: ResourceTree) -> None:
        """reset() makes the next get() construct again."""
        shared = LazyContext(lambda: LocalizationContext(sample_tree, DEFAULT_REGISTRY))
        first = shared.get()
        shared.reset()
        assert shared.get() is not first
