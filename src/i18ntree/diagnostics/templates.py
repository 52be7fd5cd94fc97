"""Error message templates.

Centralized error message templates for testable, consistent error messages.
Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode

__all__ = ["ErrorTemplate"]


class ErrorTemplate:
    """Centralized error message templates.

    All error messages are created here. NO f-strings in exception constructors!
    This keeps messages testable and documents every error case in one place.
    """

    # ------------------------------------------------------------------
    # Tree errors
    # ------------------------------------------------------------------

    @staticmethod
    def malformed_source(reason: str, key_path: str | None = None) -> Diagnostic:
        """Source does not have the expected structure.

        Args:
            reason: What was wrong with the source
            key_path: Key path of the enclosing node (None at top level)

        Returns:
            Diagnostic for MALFORMED_SOURCE
        """
        location = f" (in '{key_path}')" if key_path else ""
        return Diagnostic(
            code=DiagnosticCode.MALFORMED_SOURCE,
            message=f"Malformed resource source{location}: {reason}",
            hint="The resource file must be a JSON array of objects with a 'key' field",
            key_path=key_path,
        )

    @staticmethod
    def source_too_large(size: int, limit: int) -> Diagnostic:
        """Source exceeds the configured size limit.

        Args:
            size: Actual source length in characters
            limit: Configured maximum

        Returns:
            Diagnostic for SOURCE_TOO_LARGE
        """
        return Diagnostic(
            code=DiagnosticCode.SOURCE_TOO_LARGE,
            message=f"Resource source is {size} characters, limit is {limit}",
            hint="Split the resource file or raise max_source_size",
        )

    @staticmethod
    def missing_key(parent_path: str | None, index: int) -> Diagnostic:
        """Resource object has no key.

        Args:
            parent_path: Key path of the parent node (None for root objects)
            index: Position of the object within its array

        Returns:
            Diagnostic for MISSING_KEY
        """
        where = f"child #{index} of '{parent_path}'" if parent_path else f"root object #{index}"
        return Diagnostic(
            code=DiagnosticCode.MISSING_KEY,
            message=f"Key-less string is not allowed ({where})",
            hint="Add a 'key' field to every object",
            key_path=parent_path,
        )

    @staticmethod
    def invalid_key(key: object, key_path: str | None) -> Diagnostic:
        """Key fails the character-class check.

        Args:
            key: The offending key value
            key_path: Key path of the parent node (None for root objects)

        Returns:
            Diagnostic for INVALID_KEY
        """
        return Diagnostic(
            code=DiagnosticCode.INVALID_KEY,
            message=(
                f"{key!r} is not a valid key. A key cannot have non-alphanumeric characters "
                "except for -(dash), .(period), and _(underscore)"
            ),
            hint="Use letters, numbers, '_', '-' or '.' only",
            key_path=key_path,
        )

    @staticmethod
    def incomplete_translation(
        key_path: str, missing: tuple[str, ...], present: tuple[str, ...]
    ) -> Diagnostic:
        """Node has text for only part of the registered languages.

        Args:
            key_path: Key path of the node
            missing: Language codes without text
            present: Language codes with text

        Returns:
            Diagnostic for INCOMPLETE_TRANSLATION
        """
        return Diagnostic(
            code=DiagnosticCode.INCOMPLETE_TRANSLATION,
            message=(
                f"Localized string for key '{key_path}' is incomplete: "
                f"has {', '.join(present)} but lacks {', '.join(missing)}"
            ),
            hint="Provide text for every registered language, or none at all on a branch",
            key_path=key_path,
        )

    @staticmethod
    def empty_node(key_path: str, codes: tuple[str, ...]) -> Diagnostic:
        """Node has neither children nor text.

        Args:
            key_path: Key path of the node
            codes: Registered language codes

        Returns:
            Diagnostic for EMPTY_NODE
        """
        return Diagnostic(
            code=DiagnosticCode.EMPTY_NODE,
            message=f"Localized string for key '{key_path}' seems to be malformed",
            hint=f"Object must have 'strings', OR text for all of: {', '.join(codes)}",
            key_path=key_path,
        )

    @staticmethod
    def shared_node(key: str) -> Diagnostic:
        """The same node object appears twice in one tree.

        Args:
            key: Key of the shared node

        Returns:
            Diagnostic for SHARED_NODE
        """
        return Diagnostic(
            code=DiagnosticCode.SHARED_NODE,
            message=f"Node '{key}' is attached to more than one parent",
            hint="Build a separate node for every position in the tree",
        )

    # ------------------------------------------------------------------
    # Resolution errors
    # ------------------------------------------------------------------

    @staticmethod
    def key_not_found(key_path: str, segment: str) -> Diagnostic:
        """A key path segment matched no node.

        Args:
            key_path: Full key path requested
            segment: First segment that failed to match

        Returns:
            Diagnostic for KEY_NOT_FOUND
        """
        return Diagnostic(
            code=DiagnosticCode.KEY_NOT_FOUND,
            message=f"Key '{key_path}' not found (no node for segment '{segment}')",
            hint="Check the key path against the resource file, or regenerate the key module",
            key_path=key_path,
        )

    @staticmethod
    def text_not_found(key_path: str, language: str) -> Diagnostic:
        """Terminal node has no text for the language (nor its fallback).

        Args:
            key_path: Full key path requested
            language: Requested language code

        Returns:
            Diagnostic for TEXT_NOT_FOUND
        """
        return Diagnostic(
            code=DiagnosticCode.TEXT_NOT_FOUND,
            message=f"Key '{key_path}' has no text for language '{language}'",
            hint="Branches without text cannot be resolved; address one of their children",
            key_path=key_path,
            language=language,
        )

    @staticmethod
    def not_a_branch(key_path: str) -> Diagnostic:
        """Children requested on a leaf.

        Args:
            key_path: Key path of the leaf

        Returns:
            Diagnostic for NOT_A_BRANCH
        """
        return Diagnostic(
            code=DiagnosticCode.NOT_A_BRANCH,
            message=f"Key '{key_path}' has no children",
            key_path=key_path,
        )

    @staticmethod
    def substitution_missing(name: str, key_path: str) -> Diagnostic:
        """Replacement token has no matching substitution entry.

        Args:
            name: Token name (without braces)
            key_path: Key path being resolved

        Returns:
            Diagnostic for SUBSTITUTION_MISSING
        """
        return Diagnostic(
            code=DiagnosticCode.SUBSTITUTION_MISSING,
            message=f"Token '{{{name}}}' in '{key_path}' has no substitution value",
            hint=f"Pass '{name}' in the substitutions mapping",
            key_path=key_path,
        )

    @staticmethod
    def substitution_invalid(detail: str, key_path: str) -> Diagnostic:
        """Text cannot be formatted with the given substitutions.

        Args:
            detail: Underlying formatting failure
            key_path: Key path being resolved

        Returns:
            Diagnostic for SUBSTITUTION_INVALID
        """
        return Diagnostic(
            code=DiagnosticCode.SUBSTITUTION_INVALID,
            message=f"Cannot substitute tokens in '{key_path}': {detail}",
            hint="Tokens must be plain names like {name}; write {{ and }} for literal braces",
            key_path=key_path,
        )

    @staticmethod
    def unknown_language(language: str | int, known: tuple[str, ...]) -> Diagnostic:
        """Language code or id is not registered.

        Args:
            language: Requested code or id
            known: Registered language codes

        Returns:
            Diagnostic for UNKNOWN_LANGUAGE
        """
        return Diagnostic(
            code=DiagnosticCode.UNKNOWN_LANGUAGE,
            message=f"Unknown language {language!r}",
            hint=f"Registered languages: {', '.join(known)}",
        )

    # ------------------------------------------------------------------
    # Generation errors
    # ------------------------------------------------------------------

    @staticmethod
    def invalid_identifier(key: str, key_path: str) -> Diagnostic:
        """Key cannot become an identifier.

        Args:
            key: Original key
            key_path: Full key path of the node

        Returns:
            Diagnostic for INVALID_IDENTIFIER
        """
        return Diagnostic(
            code=DiagnosticCode.INVALID_IDENTIFIER,
            message=(
                f"There are keys ('{key}' is one of them) in the resource file "
                "that are not suited for key class generation"
            ),
            hint="Keys may only contain letters, numbers, '_', '-' and '.'",
            key_path=key_path,
        )

    @staticmethod
    def duplicate_identifier(name: str, key_path: str) -> Diagnostic:
        """Two members of one generated class share a name.

        Args:
            name: Generated identifier
            key_path: Key path of the second member

        Returns:
            Diagnostic for DUPLICATE_IDENTIFIER
        """
        return Diagnostic(
            code=DiagnosticCode.DUPLICATE_IDENTIFIER,
            message=f"Identifier '{name}' for '{key_path}' clashes with a sibling",
            hint="Avoid TitleCase keys and keys differing only in '-', '.' or '_'",
            key_path=key_path,
        )

    @staticmethod
    def nesting_too_deep(key_path: str, limit: int) -> Diagnostic:
        """Branch nesting exceeds what a Python module can express.

        Args:
            key_path: Key path of the first branch past the limit
            limit: Maximum number of nested class bodies

        Returns:
            Diagnostic for NESTING_TOO_DEEP
        """
        return Diagnostic(
            code=DiagnosticCode.NESTING_TOO_DEEP,
            message=f"Branch '{key_path}' would need more than {limit} nested classes",
            hint="Flatten the resource tree or shorten the namespace",
            key_path=key_path,
        )

    # ------------------------------------------------------------------
    # Configuration errors
    # ------------------------------------------------------------------

    @staticmethod
    def invalid_registry(reason: str) -> Diagnostic:
        """Language registry configuration is invalid.

        Args:
            reason: What was wrong

        Returns:
            Diagnostic for INVALID_REGISTRY
        """
        return Diagnostic(
            code=DiagnosticCode.INVALID_REGISTRY,
            message=f"Invalid language registry: {reason}",
            hint="Expected a JSON array of {id, code, display} objects",
        )
