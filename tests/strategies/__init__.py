"""Hypothesis strategies for i18ntree property-based testing.

Strategies are organized by domain:

- tree: resource keys, texts and complete resource documents

Usage:
    from tests.strategies import resource_documents, resource_keys

Event-Emitting Strategies (HypoFuzz-Optimized):
    These strategies emit hypothesis.event() calls for coverage-guided fuzzing:
    - resource_keys, resource_texts, resource_documents
"""

from .tree import (
    DEFAULT_CODES,
    KEY_FIRST_CHARS,
    KEY_REST_CHARS,
    resource_documents,
    resource_keys,
    resource_node_lists,
    resource_texts,
    substitution_templates,
)

__all__ = [
    "DEFAULT_CODES",
    "KEY_FIRST_CHARS",
    "KEY_REST_CHARS",
    "resource_documents",
    "resource_keys",
    "resource_node_lists",
    "resource_texts",
    "substitution_templates",
]
