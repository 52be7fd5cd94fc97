"""Tests for the language registry.

Python 3.13+.
"""

import json
from pathlib import Path

import pytest

from i18ntree import (
    DEFAULT_REGISTRY,
    KeyNotFoundError,
    Language,
    LanguageRegistry,
    MalformedSourceError,
    UnknownLanguageError,
    load_language_registry,
    parse_language_registry,
)
from i18ntree.diagnostics import DiagnosticCode


class TestDefaultRegistry:
    """Test the built-in ja/en registry."""

    def test_codes_in_order(self) -> None:
        """Japanese first, English second."""
        assert DEFAULT_REGISTRY.codes == ("ja", "en")

    def test_display_names(self) -> None:
        """Display names are each language's own name."""
        assert DEFAULT_REGISTRY.display_names == ("日本語", "English")

    def test_fallback_is_english(self) -> None:
        """English is the substitute language."""
        assert DEFAULT_REGISTRY.fallback == "en"
        assert DEFAULT_REGISTRY.fallback_language == Language(1, "en", "English")

    def test_lookup_by_id(self) -> None:
        """Ids follow configuration order."""
        assert DEFAULT_REGISTRY.by_id(0).code == "ja"
        assert DEFAULT_REGISTRY.by_id(1).code == "en"

    def test_iteration_and_len(self) -> None:
        """Registry iterates languages in order."""
        assert [language.code for language in DEFAULT_REGISTRY] == ["ja", "en"]
        assert len(DEFAULT_REGISTRY) == 2


class TestRegistryLookups:
    """Test typed lookups failing fast."""

    def test_get_known(self) -> None:
        """Registered codes resolve to their Language."""
        assert DEFAULT_REGISTRY.get("ja").display_name == "日本語"

    def test_get_unknown_raises(self) -> None:
        """Unknown codes raise UnknownLanguageError."""
        with pytest.raises(UnknownLanguageError) as exc_info:
            DEFAULT_REGISTRY.get("fr")
        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code == DiagnosticCode.UNKNOWN_LANGUAGE

    def test_unknown_language_is_key_not_found(self) -> None:
        """Callers catching KeyNotFoundError also catch language typos."""
        with pytest.raises(KeyNotFoundError):
            DEFAULT_REGISTRY.get("EN")

    def test_by_id_unknown_raises(self) -> None:
        """Unknown ids raise UnknownLanguageError."""
        with pytest.raises(UnknownLanguageError):
            DEFAULT_REGISTRY.by_id(7)

    def test_contains(self) -> None:
        """contains() never raises."""
        assert DEFAULT_REGISTRY.contains("en")
        assert not DEFAULT_REGISTRY.contains("de")


class TestMatchLocale:
    """Test mapping system locales onto registered languages."""

    def test_exact(self) -> None:
        """Exact code match."""
        assert DEFAULT_REGISTRY.match_locale("ja").code == "ja"

    def test_language_subtag(self) -> None:
        """Region-qualified locales match their language."""
        assert DEFAULT_REGISTRY.match_locale("ja_JP").code == "ja"
        assert DEFAULT_REGISTRY.match_locale("en-GB").code == "en"

    def test_no_match_uses_fallback(self) -> None:
        """Unregistered locales and None map to the fallback."""
        assert DEFAULT_REGISTRY.match_locale("de_DE").code == "en"
        assert DEFAULT_REGISTRY.match_locale(None).code == "en"


class TestRegistryConstruction:
    """Test validation at construction."""

    def test_fallback_defaults_to_first(self) -> None:
        """Without an explicit fallback the first language is used."""
        registry = LanguageRegistry.from_entries([(0, "de", "Deutsch"), (1, "fr", "Français")])
        assert registry.fallback == "de"

    def test_empty_registry_rejected(self) -> None:
        """At least one language is required."""
        with pytest.raises(MalformedSourceError, match="no languages"):
            LanguageRegistry(())

    def test_duplicate_code_rejected(self) -> None:
        """Codes are unique."""
        with pytest.raises(MalformedSourceError, match="duplicate language code 'en'"):
            LanguageRegistry.from_entries([(0, "en", "English"), (1, "en", "English")])

    def test_duplicate_id_rejected(self) -> None:
        """Ids are unique."""
        with pytest.raises(MalformedSourceError, match="duplicate language id 0"):
            LanguageRegistry.from_entries([(0, "en", "English"), (0, "ja", "日本語")])

    def test_empty_code_rejected(self) -> None:
        """Codes are non-empty."""
        with pytest.raises(MalformedSourceError, match="empty language code"):
            LanguageRegistry.from_entries([(0, " ", "Blank")])

    @pytest.mark.parametrize("code", ["key", "strings", "exclude_newline"])
    def test_reserved_field_code_rejected(self, code: str) -> None:
        """Codes cannot shadow the resource object's own fields."""
        with pytest.raises(MalformedSourceError, match="reserved resource field") as exc_info:
            LanguageRegistry.from_entries([(0, code, "X"), (1, "en", "English")])
        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code == DiagnosticCode.INVALID_REGISTRY

    def test_long_field_code_rejected(self) -> None:
        """A code cannot be another code's multi-line field."""
        with pytest.raises(MalformedSourceError, match="'en_long' is the multi-line field"):
            LanguageRegistry.from_entries([(0, "en_long", "Long"), (1, "en", "English")])

    def test_lone_surrogate_rejected(self) -> None:
        """Codes and display names must be writable as UTF-8."""
        with pytest.raises(MalformedSourceError, match="lone surrogate"):
            LanguageRegistry.from_entries([(0, "en", "Eng\ud800")])

    def test_unregistered_fallback_rejected(self) -> None:
        """The fallback must be one of the languages."""
        with pytest.raises(MalformedSourceError, match="fallback language 'fr'"):
            LanguageRegistry.from_entries([(0, "en", "English")], fallback="fr")

    def test_immutable(self) -> None:
        """Registries are frozen."""
        with pytest.raises(AttributeError):
            DEFAULT_REGISTRY.fallback = "ja"  # type: ignore[misc]


class TestParseLanguageRegistry:
    """Test the JSON configuration format."""

    def test_array_form(self) -> None:
        """A plain array lists languages; the first is the fallback."""
        registry = parse_language_registry(
            '[{"id": 3, "code": "ko", "display": "한국어"},'
            ' {"id": 5, "code": "en", "display": "English"}]'
        )
        assert registry.codes == ("ko", "en")
        assert registry.by_id(5).code == "en"
        assert registry.fallback == "ko"

    def test_object_form_with_fallback(self) -> None:
        """The object form names the fallback explicitly."""
        registry = parse_language_registry(
            json.dumps(
                {
                    "languages": [
                        {"code": "ja", "display": "日本語"},
                        {"code": "en", "display": "English"},
                    ],
                    "fallback": "en",
                }
            )
        )
        assert registry.fallback == "en"

    def test_ids_default_to_position(self) -> None:
        """Missing ids are assigned by configuration order."""
        registry = parse_language_registry(
            '[{"code": "ja", "display": "J"}, {"code": "en", "display": "E"}]'
        )
        assert [language.id for language in registry] == [0, 1]

    def test_display_defaults_to_cldr_name(self) -> None:
        """Missing display names come from CLDR via Babel."""
        registry = parse_language_registry('[{"code": "de"}, {"code": "ja"}]')
        assert registry.display_names == ("Deutsch", "日本語")

    @pytest.mark.parametrize(
        ("text", "message"),
        [
            ("not json", "invalid JSON"),
            ('{"languages": 3}', "expected an array"),
            ('["en"]', "entry #0 is not an object"),
            ('[{"display": "English"}]', "has no 'code' string"),
            ('[{"code": "en", "id": true}]', "non-integer id"),
            ('[{"code": "en", "id": "1"}]', "non-integer id"),
            ('[{"code": "en", "display": 1}]', "non-string display name"),
            ('{"languages": [{"code": "en"}], "fallback": 1}', "'fallback' must be a string"),
            (
                '[{"code": "key", "display": "K"}, {"code": "en", "display": "E"}]',
                "reserved resource field",
            ),
        ],
    )
    def test_invalid_configuration(self, text: str, message: str) -> None:
        """Invalid configurations raise MalformedSourceError with INVALID_REGISTRY."""
        with pytest.raises(MalformedSourceError, match=message) as exc_info:
            parse_language_registry(text)
        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code == DiagnosticCode.INVALID_REGISTRY


class TestLoadLanguageRegistry:
    """Test loading from files."""

    def test_none_path_uses_default(self) -> None:
        """No path means the built-in registry."""
        assert load_language_registry(None) is DEFAULT_REGISTRY

    def test_missing_file_uses_default(self, tmp_path: Path) -> None:
        """A missing file falls back to the built-in registry."""
        assert load_language_registry(tmp_path / "absent.json") is DEFAULT_REGISTRY

    def test_file_loaded(self, tmp_path: Path) -> None:
        """Existing files are parsed."""
        path = tmp_path / "languages.json"
        path.write_text('[{"code": "en", "display": "English"}]', encoding="utf-8")
        registry = load_language_registry(path)
        assert registry.codes == ("en",)
