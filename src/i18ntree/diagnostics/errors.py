"""i18ntree exception hierarchy with structured diagnostics.

All exceptions optionally store Diagnostic objects for rich error information.

Hierarchy:
    I18nTreeError
    ├─ TreeError (fatal to tree construction)
    │  ├─ MalformedSourceError
    │  ├─ MissingKeyError
    │  ├─ InvalidKeyError
    │  └─ IncompleteTranslationError
    ├─ ResolutionError
    │  ├─ KeyNotFoundError
    │  │  └─ UnknownLanguageError
    │  ├─ NotABranchError
    │  └─ SubstitutionError
    └─ GenerationError
       └─ InvalidIdentifierError

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic

__all__ = [
    "GenerationError",
    "I18nTreeError",
    "IncompleteTranslationError",
    "InvalidIdentifierError",
    "InvalidKeyError",
    "KeyNotFoundError",
    "MalformedSourceError",
    "MissingKeyError",
    "NotABranchError",
    "ResolutionError",
    "SubstitutionError",
    "TreeError",
    "UnknownLanguageError",
]


class I18nTreeError(Exception):
    """Base exception for all i18ntree errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize I18nTreeError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.format_error())
        else:
            self.diagnostic = None
            super().__init__(message)

    @property
    def key_path(self) -> str | None:
        """Key path recorded in the diagnostic, if any."""
        return self.diagnostic.key_path if self.diagnostic is not None else None


class TreeError(I18nTreeError):
    """Resource source failed structural or translation validation.

    Fatal to tree construction: no partial tree is ever returned.
    """


class MalformedSourceError(TreeError):
    """Source is not a well-formed resource document.

    Examples:
    - Invalid JSON
    - Top level (or a 'strings' field) is not an array of objects
    - A language field has the wrong type
    - A node has neither children nor text
    """


class MissingKeyError(TreeError):
    """Resource object lacks a key (absent or null)."""


class InvalidKeyError(TreeError):
    """Key is empty, not a string, or contains disallowed characters."""


class IncompleteTranslationError(TreeError):
    """Some but not all registered languages have text for a node."""


class ResolutionError(I18nTreeError):
    """Runtime error while looking up or formatting a string."""


class KeyNotFoundError(ResolutionError):
    """Key path segment or terminal text could not be found.

    Recoverable by design: permissive resolution returns a sentinel string.
    """


class UnknownLanguageError(KeyNotFoundError):
    """Language code or id is not part of the registry.

    Subclasses KeyNotFoundError so callers handling lookup misses also
    catch typos in language codes.
    """


class NotABranchError(ResolutionError):
    """Children were requested from a node that has none."""


class SubstitutionError(ResolutionError):
    """Replacement tokens and substitution values do not match.

    Raised when a {token} has no entry, a field is not a plain name,
    braces are unbalanced, or a value rejects its format spec.
    """


class GenerationError(I18nTreeError):
    """Code generation failed; previously written output is untouched."""


class InvalidIdentifierError(GenerationError):
    """Key cannot be turned into a valid, unique Python identifier."""
