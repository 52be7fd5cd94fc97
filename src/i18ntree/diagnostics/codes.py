"""Diagnostic codes and data structures.

Defines error codes and diagnostic messages.
Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
]


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        1000-1999: Tree errors (source structure, keys, translations)
        2000-2999: Resolution errors (lookups, substitution)
        3000-3999: Generation errors (identifier sanitization)
        4000-4999: Configuration errors (language registry)
    """

    # Tree errors (1000-1999)
    MALFORMED_SOURCE = 1001
    MISSING_KEY = 1002
    INVALID_KEY = 1003
    INCOMPLETE_TRANSLATION = 1004
    EMPTY_NODE = 1005
    SOURCE_TOO_LARGE = 1006
    SHARED_NODE = 1007

    # Resolution errors (2000-2999)
    KEY_NOT_FOUND = 2001
    TEXT_NOT_FOUND = 2002
    NOT_A_BRANCH = 2003
    SUBSTITUTION_MISSING = 2004
    SUBSTITUTION_INVALID = 2005
    UNKNOWN_LANGUAGE = 2006

    # Generation errors (3000-3999)
    INVALID_IDENTIFIER = 3001
    DUPLICATE_IDENTIFIER = 3002
    NESTING_TOO_DEEP = 3003

    # Configuration errors (4000-4999)
    INVALID_REGISTRY = 4001


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Inspired by Rust compiler diagnostics. Provides rich error information
    for both humans and tools.

    Attributes:
        code: Unique error code
        message: Human-readable error description
        hint: Suggestion for fixing the error
        key_path: Dotted key path of the node involved (if known)
        language: Language code involved (if any)
        severity: Error severity level
    """

    code: DiagnosticCode
    message: str
    hint: str | None = None
    key_path: str | None = None
    language: str | None = None
    severity: Literal["error", "warning"] = "error"

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic like Rust compiler.

        Example output:
            error[KEY_NOT_FOUND]: Key 'menu.missing' not found
              --> menu.missing
              = help: Check the key path against the resource file

        Returns:
            Formatted error message
        """
        from .formatter import DiagnosticFormatter  # noqa: PLC0415 - circular

        return DiagnosticFormatter().format(self)
