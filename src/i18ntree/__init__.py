"""i18ntree - hierarchical multi-language string resources.

Parses a JSON resource tree against a fixed language registry, resolves
dotted key paths (token substitution, newline unescaping, language
fallback) and compiles the tree into a key class module and a character
inventory.

Public API:
    parse / parse_file - Resource source -> ResourceTree
    resolve - Strict one-shot key path resolution
    Resolver - Reusable resolver with strict and permissive modes
    LocalizationContext - Current language + LocalizedString handles
    KeyClassEmitter - Python module of key path constants
    CharsetEmitter - Character set used by the texts
    LanguageRegistry / DEFAULT_REGISTRY - Supported languages

Exceptions:
    I18nTreeError - Base exception class
    TreeError - Resource source is invalid
    ResolutionError - Key path lookup or substitution failed
    GenerationError - Key class generation failed

Submodules:
    i18ntree.tree - Node types, parser, visitor
    i18ntree.runtime - Resolver and LocalizationContext
    i18ntree.generation - Emitters and atomic output
    i18ntree.diagnostics - Error types, codes and formatting
    i18ntree.config - [tool.i18ntree] settings
    i18ntree.cli - Command-line interface
"""

from .diagnostics import (
    GenerationError,
    I18nTreeError,
    IncompleteTranslationError,
    InvalidIdentifierError,
    InvalidKeyError,
    KeyNotFoundError,
    MalformedSourceError,
    MissingKeyError,
    NotABranchError,
    ResolutionError,
    SubstitutionError,
    TreeError,
    UnknownLanguageError,
)
from .generation import CharsetEmitter, KeyClassEmitter
from .languages import (
    DEFAULT_REGISTRY,
    Language,
    LanguageRegistry,
    load_language_registry,
    parse_language_registry,
)
from .runtime import LazyContext, LocalizationContext, LocalizedString, Resolver, resolve
from .tree import ResourceNode, ResourceTree, TreeParser, parse, parse_file

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("i18ntree")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "DEFAULT_REGISTRY",
    "CharsetEmitter",
    "GenerationError",
    "I18nTreeError",
    "IncompleteTranslationError",
    "InvalidIdentifierError",
    "InvalidKeyError",
    "KeyClassEmitter",
    "KeyNotFoundError",
    "Language",
    "LanguageRegistry",
    "LazyContext",
    "LocalizationContext",
    "LocalizedString",
    "MalformedSourceError",
    "MissingKeyError",
    "NotABranchError",
    "ResolutionError",
    "Resolver",
    "ResourceNode",
    "ResourceTree",
    "SubstitutionError",
    "TreeError",
    "TreeParser",
    "UnknownLanguageError",
    "__version__",
    "load_language_registry",
    "parse",
    "parse_file",
    "parse_language_registry",
    "resolve",
]
