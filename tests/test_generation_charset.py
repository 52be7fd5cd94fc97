"""Tests for the character inventory emitter.

Python 3.13+.
"""

from pathlib import Path

from i18ntree import DEFAULT_REGISTRY, CharsetEmitter, ResourceNode, ResourceTree


def _tree(*texts: str) -> ResourceTree:
    return ResourceTree(tuple(ResourceNode(f"k{i}", {"en": text}) for i, text in enumerate(texts)))


class TestCharsetEmitter:
    """Test character collection."""

    def test_collects_every_text(self, sample_tree: ResourceTree) -> None:
        """Characters from every language and nesting level are included."""
        chars = CharsetEmitter().emit(sample_tree)
        assert set("スタート終了") <= chars
        assert set("HelloQuit") <= chars
        assert set("一行目あい") <= chars

    def test_compatibility_chars_always_present(self) -> None:
        """'(', ')' and '_' are always part of the set."""
        assert CharsetEmitter().emit(_tree("a")) == frozenset("a()_")

    def test_newline_excluded(self) -> None:
        """Real newlines are not glyphs."""
        assert "\n" not in CharsetEmitter().emit(_tree("a\nb"))

    def test_escape_sequence_characters_included(self) -> None:
        """A stored backslash-n contributes both characters."""
        chars = CharsetEmitter().emit(_tree("a\\nb"))
        assert {"\\", "n"} <= chars

    def test_numeric_set(self) -> None:
        """The numeric set adds digits and number punctuation."""
        assert "7" not in CharsetEmitter().emit(_tree("a"))
        chars = CharsetEmitter(include_numeric_set=True).emit(_tree("a"))
        assert set("0123456789+-.,") <= chars

    def test_registry_display_names(self) -> None:
        """Display names are included when a registry is given."""
        chars = CharsetEmitter(registry=DEFAULT_REGISTRY).emit(_tree("a"))
        assert set("日本語English") <= chars

    def test_branch_texts_included(self) -> None:
        """Texts on branches count as well."""
        tree = ResourceTree((ResourceNode("menu", {"en": "Z"}, (ResourceNode("x", {"en": "y"}),)),))
        assert {"Z", "y"} <= CharsetEmitter().emit(tree)

    def test_deep_tree(self, deep_tree: ResourceTree) -> None:
        """Texts under nesting deeper than the recursion limit are collected."""
        assert CharsetEmitter().emit(deep_tree) == frozenset("深いdeep()_")

    def test_idempotent(self, sample_tree: ResourceTree) -> None:
        """Emitting twice yields the same set."""
        emitter = CharsetEmitter(include_numeric_set=True)
        assert emitter.emit(sample_tree) == emitter.emit(sample_tree)


class TestCharsetRender:
    """Test rendered and written output."""

    def test_sorted_by_code_point(self) -> None:
        """render() lists each character once in code point order."""
        assert CharsetEmitter().render(_tree("cba", "abc")) == "()_abc"

    def test_write(self, tmp_path: Path, sample_tree: ResourceTree) -> None:
        """write() stores the rendered text."""
        path = tmp_path / "charset.txt"
        emitter = CharsetEmitter()
        emitter.write(sample_tree, path)
        assert path.read_text(encoding="utf-8") == emitter.render(sample_tree)
