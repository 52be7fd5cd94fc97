"""Key class emitter.

Compiles a ResourceTree into a Python module of nested classes whose
attributes are the tree's key paths, so calling code can write
I18nKeys.Menu.start instead of the string "menu.start".

Output shape:

    # Auto-generated by i18ntree key class generator.
    # Any changes will be lost.
    # String resource hash: <sha256>
    # ruff: noqa
    \"\"\"Key paths for LocalizationContext.for_key().\"\"\"


    class I18nKeys:
        \"\"\"Members in this class can be supplied to LocalizationContext.for_key().\"\"\"

        #: en: Menu
        menu = "menu"

        class Menu:
            #: ja: スタート
            #: en: Start
            start = "menu.start"

Naming:
    Constants use the normalized key ('-' and '.' become '_').
    Classes use the TitleCase of the normalized key.
    A leading digit gets a '_' prefix, keywords a '_' suffix.

Nesting:
    Every branch adds one class body. Python accepts at most
    MAX_CLASS_NESTING nested bodies, so deeper trees raise GenerationError
    instead of producing a module that cannot be imported.

Output is a pure function of tree and options: identical input yields
byte-identical text.

Python 3.13+.
"""

from __future__ import annotations

import logging
from pathlib import Path

from i18ntree.constants import (
    COMMENT_ELLIPSIS,
    COMMENT_TRUNCATE_LENGTH,
    DEFAULT_INDENT_WIDTH,
    DEFAULT_ROOT_CLASS,
    HASH_HEADER_PREFIX,
    MAX_CLASS_NESTING,
)
from i18ntree.core.identifiers import (
    is_valid_key,
    normalize_key,
    to_python_identifier,
    to_title_case,
)
from i18ntree.diagnostics import ErrorTemplate, GenerationError, InvalidIdentifierError
from i18ntree.tree import ResourceNode, ResourceTree, TreeVisitor

from .output import write_atomic

__all__ = ["KeyClassEmitter", "comment_text"]

logger = logging.getLogger(__name__)

_HEADER_LINES: tuple[str, ...] = (
    "# Auto-generated by i18ntree key class generator.",
    "# Any changes will be lost.",
)

_MODULE_DOCSTRING: str = '"""Key paths for LocalizationContext.for_key()."""'
_ROOT_DOCSTRING: str = (
    '"""Members in this class can be supplied to LocalizationContext.for_key()."""'
)

# Characters that would end a comment line (or are illegal in source).
_COMMENT_BREAKS: dict[int, str] = {ord("\n"): " ", ord("\r"): " ", ord("\0"): " "}


def comment_text(text: str) -> str:
    """Shorten text for a one-line '#:' comment.

    Newlines become spaces, the result is cut at COMMENT_TRUNCATE_LENGTH
    characters (plus an ellipsis) and rich-text brackets are escaped.

    Example:
        >>> comment_text("<b>Welcome</b> to the\\ngame")
        '&lt;b&gt;Welcome&lt;/b&gt; to the game'
    """
    flat = text.translate(_COMMENT_BREAKS)
    if len(flat) > COMMENT_TRUNCATE_LENGTH:
        flat = flat[:COMMENT_TRUNCATE_LENGTH] + COMMENT_ELLIPSIS
    return flat.replace("<", "&lt;").replace(">", "&gt;")


class _ClassScope:
    """Members already emitted into one class body."""

    __slots__ = ("has_content", "names")

    def __init__(self, has_content: bool = False) -> None:
        self.names: set[str] = set()
        self.has_content = has_content


class _KeyClassWriter(TreeVisitor):
    """Visitor accumulating the class bodies for one emit() call."""

    def __init__(self, indent_width: int, base_depth: int) -> None:
        self._indent_width = indent_width
        self._depth = base_depth
        self._scopes: list[_ClassScope] = [_ClassScope(has_content=True)]
        self.lines: list[str] = []

    def _indent(self) -> str:
        return " " * (self._indent_width * self._depth)

    def _claim(self, name: str, key_path: str) -> None:
        """Register a member name in the current class body."""
        scope = self._scopes[-1]
        if name in scope.names:
            raise InvalidIdentifierError(ErrorTemplate.duplicate_identifier(name, key_path))
        scope.names.add(name)
        if scope.has_content:
            self.lines.append("")
        scope.has_content = True

    def _identifier(self, node: ResourceNode, key_path: str, *, title: bool) -> str:
        if not is_valid_key(node.key):
            raise InvalidIdentifierError(ErrorTemplate.invalid_identifier(node.key, key_path))
        normalized = normalize_key(node.key)
        name = to_python_identifier(to_title_case(normalized) if title else normalized)
        if name is None:
            raise InvalidIdentifierError(ErrorTemplate.invalid_identifier(node.key, key_path))
        return name

    def _constant(self, node: ResourceNode, key_path: str) -> None:
        name = self._identifier(node, key_path, title=False)
        self._claim(name, key_path)
        indent = self._indent()
        for code, text in node.texts.items():
            self.lines.append(f"{indent}#: {code}: {comment_text(text)}")
        self.lines.append(f'{indent}{name} = "{key_path}"')

    def _nested_class(self, node: ResourceNode, key_path: str) -> None:
        name = self._identifier(node, key_path, title=True)
        if self._depth + 1 > MAX_CLASS_NESTING:
            raise GenerationError(ErrorTemplate.nesting_too_deep(key_path, MAX_CLASS_NESTING))
        self._claim(name, key_path)
        self.lines.append(f"{self._indent()}class {name}:")
        self._depth += 1
        self._scopes.append(_ClassScope())

    def visit_leaf(self, node: ResourceNode, key_path: str) -> None:
        self._constant(node, key_path)

    def visit_branch(self, node: ResourceNode, key_path: str) -> None:
        self._nested_class(node, key_path)

    def visit_branch_with_text(self, node: ResourceNode, key_path: str) -> None:
        # Addressable branch: constant in the parent scope, then its class
        self._constant(node, key_path)
        self._nested_class(node, key_path)

    def leave_branch(self, node: ResourceNode, key_path: str) -> None:
        if not self._scopes.pop().names:
            self.lines.append(f"{self._indent()}pass")
        self._depth -= 1


class KeyClassEmitter:
    """Generates the key class module for a tree.

    Example:
        >>> emitter = KeyClassEmitter(namespace="Game.Text")
        >>> source = emitter.emit(tree)
        >>> namespace = {}
        >>> exec(source, namespace)
        >>> namespace["Game"].Text.I18nKeys.Menu.start
        'menu.start'
    """

    __slots__ = ("_indent_width", "_namespace", "_root_class")

    def __init__(
        self,
        namespace: str | None = None,
        indent_width: int = DEFAULT_INDENT_WIDTH,
        root_class: str = DEFAULT_ROOT_CLASS,
    ) -> None:
        """Initialize emitter.

        Args:
            namespace: Dotted wrapper path; each segment becomes an enclosing class
            indent_width: Spaces per indentation level
            root_class: Name of the class holding the top-level keys

        Raises:
            ValueError: If indent_width is not positive
            InvalidIdentifierError: If a namespace segment or root_class
                is not a valid identifier
            GenerationError: If the namespace nests deeper than a module allows
        """
        if indent_width < 1:
            msg = f"indent_width must be positive, got {indent_width}"
            raise ValueError(msg)

        segments = tuple(namespace.split(".")) if namespace else ()
        for name in (*segments, root_class):
            if not name.isidentifier() or to_python_identifier(name) != name:
                raise InvalidIdentifierError(
                    ErrorTemplate.invalid_identifier(name, namespace or root_class)
                )
        if len(segments) + 1 > MAX_CLASS_NESTING:
            raise GenerationError(
                ErrorTemplate.nesting_too_deep(namespace or root_class, MAX_CLASS_NESTING)
            )

        self._namespace = segments
        self._indent_width = indent_width
        self._root_class = root_class

    @property
    def namespace(self) -> str | None:
        return ".".join(self._namespace) or None

    def emit(self, tree: ResourceTree) -> str:
        """Render the key class module.

        Raises:
            InvalidIdentifierError: If a key cannot become an identifier or
                two members of one class collide
            GenerationError: If branches nest deeper than MAX_CLASS_NESTING
        """
        lines = [*_HEADER_LINES, f"{HASH_HEADER_PREFIX}{tree.source_hash}", "# ruff: noqa"]
        lines.extend((_MODULE_DOCSTRING, "", ""))

        unit = " " * self._indent_width
        depth = 0
        for segment in self._namespace:
            lines.append(f"{unit * depth}class {segment}:")
            depth += 1

        lines.append(f"{unit * depth}class {self._root_class}:")
        depth += 1
        lines.append(f"{unit * depth}{_ROOT_DOCSTRING}")

        writer = _KeyClassWriter(self._indent_width, depth)
        writer.visit_tree(tree)
        lines.extend(writer.lines)

        logger.debug("Emitted key classes for %d node(s)", tree.node_count)
        return "\n".join(lines) + "\n"

    def write(self, tree: ResourceTree, path: str | Path) -> None:
        """Emit and atomically replace the file at path.

        The module is rendered completely in memory first, so an emit
        failure leaves any previous file untouched.
        """
        source = self.emit(tree)
        write_atomic(path, source)
        logger.info("Wrote key classes to %s", path)
