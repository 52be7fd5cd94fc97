"""Runtime lookup package.

Provides key path resolution (Resolver) and the consumer-facing
LocalizationContext / LocalizedString API. Depends on the tree package.

Python 3.13+.
"""

from .context import LazyContext, LocalizationContext, LocalizedString
from .resolver import Resolver, get_child_keys, resolve, substitute, unescape_newlines

__all__ = [
    "LazyContext",
    "LocalizationContext",
    "LocalizedString",
    "Resolver",
    "get_child_keys",
    "resolve",
    "substitute",
    "unescape_newlines",
]
