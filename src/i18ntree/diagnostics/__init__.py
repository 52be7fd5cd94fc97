"""Diagnostic system for i18ntree errors.

Provides structured error diagnostics with codes, key paths and hints.
Inspired by Rust compiler diagnostics and Elm error messages.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode
from .errors import (
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
from .formatter import DiagnosticFormatter, OutputFormat
from .templates import ErrorTemplate
from .validation import ValidationWarning

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticFormatter",
    "ErrorTemplate",
    "GenerationError",
    "I18nTreeError",
    "IncompleteTranslationError",
    "InvalidIdentifierError",
    "InvalidKeyError",
    "KeyNotFoundError",
    "MalformedSourceError",
    "MissingKeyError",
    "NotABranchError",
    "OutputFormat",
    "ResolutionError",
    "SubstitutionError",
    "TreeError",
    "UnknownLanguageError",
    "ValidationWarning",
]
