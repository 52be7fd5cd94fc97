"""Property-based tests across parser, resolver and emitters.

Python 3.13+.
"""

import json
from typing import Any

from hypothesis import event, given, settings

from i18ntree import CharsetEmitter, KeyClassEmitter, ResourceTree, Resolver, parse
from i18ntree.runtime import substitute, unescape_newlines
from tests.strategies import DEFAULT_CODES, resource_documents, substitution_templates


def _walk_data(
    nodes: list[dict[str, Any]], parent: str | None = None
) -> list[tuple[str, dict[str, Any]]]:
    found: list[tuple[str, dict[str, Any]]] = []
    for node in nodes:
        path = node["key"] if parent is None else f"{parent}.{node['key']}"
        found.append((path, node))
        found.extend(_walk_data(node.get("strings", []), path))
    return found


def _collect_constants(cls: type, found: set[str]) -> None:
    for name, value in vars(cls).items():
        if name.startswith("__"):
            continue
        if isinstance(value, str):
            found.add(value)
        elif isinstance(value, type):
            _collect_constants(value, found)


class TestParseProperties:
    """Parsing generated documents."""

    @given(resource_documents())
    def test_every_node_addressable(self, document: list[dict[str, Any]]) -> None:
        """Every node in the document is reachable by its key path."""
        tree = parse(json.dumps(document, ensure_ascii=False))
        expected = _walk_data(document)
        assert [path for path, _ in tree.walk()] == [path for path, _ in expected]
        assert tree.warnings == ()

    @given(resource_documents())
    def test_texts_resolve_unescaped(self, document: list[dict[str, Any]]) -> None:
        """Resolving returns the stored text with escapes expanded."""
        resolver = Resolver(parse(json.dumps(document, ensure_ascii=False)))
        for path, node in _walk_data(document):
            if "ja" not in node:
                continue
            for code in DEFAULT_CODES:
                assert resolver.resolve(code, path) == unescape_newlines(node[code])

    @given(resource_documents())
    def test_parse_deterministic(self, document: list[dict[str, Any]]) -> None:
        """Same source gives equal trees and equal hashes."""
        source = json.dumps(document, ensure_ascii=False)
        first, second = parse(source), parse(source)
        assert first == second
        assert first.source_hash == second.source_hash


class TestEmitterProperties:
    """Generated code and character sets for generated documents."""

    @settings(deadline=None)
    @given(resource_documents())
    def test_constants_match_addressable_paths(self, document: list[dict[str, Any]]) -> None:
        """The emitted constants are exactly the key paths that carry text."""
        tree = parse(json.dumps(document, ensure_ascii=False))
        namespace: dict[str, Any] = {}
        exec(compile(KeyClassEmitter().emit(tree), "<generated>", "exec"), namespace)

        constants: set[str] = set()
        _collect_constants(namespace["I18nKeys"], constants)
        expected = {path for path, node in tree.walk() if node.has_text}
        event(f"constants={len(constants)}")
        assert constants == expected

        resolver = Resolver(tree)
        for path in constants:
            for code in DEFAULT_CODES:
                resolver.resolve(code, path)

    @given(resource_documents())
    def test_emit_deterministic(self, document: list[dict[str, Any]]) -> None:
        """Emitting twice yields byte-identical source."""
        tree: ResourceTree = parse(json.dumps(document, ensure_ascii=False))
        assert KeyClassEmitter().emit(tree) == KeyClassEmitter().emit(tree)

    @given(resource_documents())
    def test_charset_covers_texts(self, document: list[dict[str, Any]]) -> None:
        """Every stored character except newline is in the set."""
        tree = parse(json.dumps(document, ensure_ascii=False))
        chars = CharsetEmitter().emit(tree)
        for _, node in tree.walk():
            for text in node.texts.values():
                assert set(text) - {"\n"} <= chars
        assert "\n" not in chars
        assert CharsetEmitter().emit(tree) == chars


class TestSubstitutionProperties:
    """Token substitution on generated templates."""

    @given(substitution_templates())
    def test_substitute_matches_expected(self, case: tuple[str, dict[str, object], str]) -> None:
        """Every token is replaced by its value's string form."""
        template, values, expected = case
        assert substitute(template, values) == expected
