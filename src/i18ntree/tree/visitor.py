"""Visitor pattern for resource tree traversal.

Enables tools (emitters, linters, exporters) to walk a ResourceTree
without modifying node classes.

Dispatch follows the node kind: visit() calls visit_leaf, visit_branch or
visit_branch_with_text. The default implementation of each delegates to
generic_visit(), which does nothing. Children are visited by visit_tree()
itself, after their parent's visit method returns; leave_branch() runs
once every child of a branch has been visited. Every visit method
receives the node and its full dotted key path.

Traversal keeps its own stack, so nesting depth is bounded by memory and
not by the interpreter's recursion limit.

Python 3.13+.
"""

from __future__ import annotations

from enum import Enum, auto
from typing import TYPE_CHECKING, ClassVar

from i18ntree.enums import NodeKind

from .nodes import join_key_path

if TYPE_CHECKING:
    from .nodes import ResourceNode, ResourceTree

__all__ = ["TreeVisitor"]


class _VisitState(Enum):
    """Traversal state of a stacked node."""

    ENTER = auto()  # Dispatch to the visit method
    EXIT = auto()  # All children visited


class TreeVisitor:
    """Base visitor for depth-first traversal of a ResourceTree.

    Example:
        >>> class LeafCounter(TreeVisitor):
        ...     def __init__(self):
        ...         self.count = 0
        ...
        ...     def visit_leaf(self, node, key_path):
        ...         self.count += 1
        ...
        >>> counter = LeafCounter()
        >>> counter.visit_tree(tree)
        >>> counter.count
    """

    # Method name per node kind
    _DISPATCH: ClassVar[dict[NodeKind, str]] = {
        NodeKind.LEAF: "visit_leaf",
        NodeKind.BRANCH: "visit_branch",
        NodeKind.BRANCH_WITH_TEXT: "visit_branch_with_text",
    }

    def visit_tree(self, tree: ResourceTree) -> None:
        """Visit every node depth-first in declaration order."""
        stack: list[tuple[ResourceNode, str, _VisitState]] = [
            (node, node.key, _VisitState.ENTER) for node in reversed(tree.roots)
        ]
        while stack:
            node, key_path, state = stack.pop()
            if state == _VisitState.EXIT:
                self.leave_branch(node, key_path)
                continue
            self.visit(node, key_path)
            if node.children is not None:
                # Exit marker runs after every child
                stack.append((node, key_path, _VisitState.EXIT))
                stack.extend(
                    (child, join_key_path(key_path, child.key), _VisitState.ENTER)
                    for child in reversed(node.children)
                )

    def visit(self, node: ResourceNode, key_path: str) -> None:
        """Dispatch to the visit method for the node's kind."""
        getattr(self, self._DISPATCH[node.kind])(node, key_path)

    def generic_visit(self, node: ResourceNode, key_path: str) -> None:
        """Called for every node whose kind method is not overridden."""

    def leave_branch(self, node: ResourceNode, key_path: str) -> None:
        """Called after the last child of a branch (including empty branches)."""

    def visit_leaf(self, node: ResourceNode, key_path: str) -> None:
        self.generic_visit(node, key_path)

    def visit_branch(self, node: ResourceNode, key_path: str) -> None:
        self.generic_visit(node, key_path)

    def visit_branch_with_text(self, node: ResourceNode, key_path: str) -> None:
        self.generic_visit(node, key_path)
