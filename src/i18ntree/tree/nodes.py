"""Resource tree node types.

A ResourceTree is an ordered forest of ResourceNode objects. Nodes are
frozen: texts are exposed as read-only mappings and children as tuples, so
a node cannot be re-parented or mutated after construction. The tree
rejects node objects that appear in more than one position.

Node kinds:
    LEAF              texts, no children
    BRANCH            children, no texts
    BRANCH_WITH_TEXT  children and texts (addressable string with children)

Python 3.13+.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from i18ntree.core.hashing import tree_hash
from i18ntree.diagnostics import ErrorTemplate, MalformedSourceError, ValidationWarning
from i18ntree.enums import NodeKind

__all__ = [
    "ResourceNode",
    "ResourceTree",
    "join_key_path",
]


def join_key_path(parent: str | None, key: str) -> str:
    """Append a key to a dotted key path.

    Example:
        >>> join_key_path("menu", "start")
        'menu.start'
        >>> join_key_path(None, "menu")
        'menu'
    """
    return f"{parent}.{key}" if parent else key


@dataclass(frozen=True, slots=True)
class ResourceNode:
    """A keyed node carrying per-language text and/or children.

    Attributes:
        key: Key as written in the source (may contain '-' and '.')
        texts: Language code -> text, in registry order (read-only)
        children: Child nodes in declaration order, or None for leaves

    Example:
        >>> leaf = ResourceNode("start", {"en": "Start", "ja": "スタート"})
        >>> menu = ResourceNode("menu", children=(leaf,))
        >>> menu.kind
        <NodeKind.BRANCH: 'branch'>
        >>> menu.child("start").texts["en"]
        'Start'
    """

    key: str
    texts: Mapping[str, str] = field(default_factory=dict)
    children: tuple[ResourceNode, ...] | None = None

    def __post_init__(self) -> None:
        """Freeze texts and children into read-only containers."""
        object.__setattr__(self, "texts", MappingProxyType(dict(self.texts)))
        if self.children is not None:
            children = tuple(self.children)
            for child in children:
                if not isinstance(child, ResourceNode):
                    msg = (
                        f"Children of '{self.key}' must be ResourceNode, "
                        f"got {type(child).__name__}"
                    )
                    raise TypeError(msg)
            object.__setattr__(self, "children", children)

    @property
    def kind(self) -> NodeKind:
        """Shape of this node."""
        if self.children is None:
            return NodeKind.LEAF
        return NodeKind.BRANCH_WITH_TEXT if self.texts else NodeKind.BRANCH

    @property
    def is_branch(self) -> bool:
        """True if the node has a children sequence (possibly empty)."""
        return self.children is not None

    @property
    def has_text(self) -> bool:
        """True if the node carries text for at least one language."""
        return bool(self.texts)

    def text_for(self, language: str) -> str | None:
        """Stored (raw) text for a language, or None."""
        return self.texts.get(language)

    def child(self, key: str) -> ResourceNode | None:
        """First child whose key matches, or None."""
        if self.children is None:
            return None
        for node in self.children:
            if node.key == key:
                return node
        return None

    def child_keys(self) -> tuple[str, ...]:
        """Keys of the immediate children in declaration order."""
        return tuple(node.key for node in self.children or ())

    def __eq__(self, other: object) -> bool:
        # Explicit stack: subtree depth is not limited by the recursion limit
        if not isinstance(other, ResourceNode):
            return NotImplemented
        pending: list[tuple[ResourceNode, ResourceNode]] = [(self, other)]
        while pending:
            left, right = pending.pop()
            if left is right:
                continue
            if left.key != right.key or left.texts != right.texts:
                return False
            if left.children is None or right.children is None:
                if left.children is not right.children:
                    return False
                continue
            if len(left.children) != len(right.children):
                return False
            pending.extend(zip(left.children, right.children, strict=True))
        return True

    def __hash__(self) -> int:
        # MappingProxyType is unhashable; hash its items instead. Children
        # contribute their keys only, so hashing never descends the subtree.
        children = None if self.children is None else self.child_keys()
        return hash((self.key, tuple(self.texts.items()), children))


@dataclass(frozen=True, slots=True)
class ResourceTree:
    """Ordered forest of resource nodes, immutable after construction.

    Attributes:
        roots: Root nodes in declaration order
        languages: Language codes the tree was validated against
        source_hash: Content hash of the source (computed from the nodes if empty)
        warnings: Non-fatal findings collected while parsing

    Raises:
        MalformedSourceError: If one node object occupies two positions
    """

    roots: tuple[ResourceNode, ...]
    languages: tuple[str, ...] = ()
    source_hash: str = ""
    warnings: tuple[ValidationWarning, ...] = ()

    def __post_init__(self) -> None:
        """Freeze sequences, enforce tree shape and fill in the content hash."""
        object.__setattr__(self, "roots", tuple(self.roots))
        object.__setattr__(self, "languages", tuple(self.languages))
        object.__setattr__(self, "warnings", tuple(self.warnings))

        seen: set[int] = set()
        for _, node in self.walk():
            if id(node) in seen:
                raise MalformedSourceError(ErrorTemplate.shared_node(node.key))
            seen.add(id(node))

        if not self.source_hash:
            object.__setattr__(self, "source_hash", tree_hash(self))

    def root(self, key: str) -> ResourceNode | None:
        """First root node whose key matches, or None."""
        for node in self.roots:
            if node.key == key:
                return node
        return None

    def walk(self) -> Iterator[tuple[str, ResourceNode]]:
        """Yield (key_path, node) pairs depth-first in declaration order."""
        stack: list[tuple[str | None, ResourceNode]] = [
            (None, node) for node in reversed(self.roots)
        ]
        while stack:
            parent_path, node = stack.pop()
            path = join_key_path(parent_path, node.key)
            yield path, node
            if node.children:
                stack.extend((path, child) for child in reversed(node.children))

    @property
    def node_count(self) -> int:
        """Total number of nodes in the tree."""
        return sum(1 for _ in self.walk())

    def __len__(self) -> int:
        return len(self.roots)

    def __hash__(self) -> int:
        return hash(self.source_hash)
