"""Non-fatal validation findings collected while parsing.

Python 3.13+.
"""

from dataclasses import dataclass

from i18ntree.enums import WarningCode

__all__ = ["ValidationWarning"]


@dataclass(frozen=True, slots=True)
class ValidationWarning:
    """Structured warning from resource validation.

    Warnings never stop parsing; they are logged and stored on the
    resulting ResourceTree so tooling can report them.

    Attributes:
        code: Warning code (e.g., "title-case-key", "duplicate-key")
        message: Human-readable warning message
        key_path: Dotted key path of the node involved
    """

    code: WarningCode
    message: str
    key_path: str

    def format(self) -> str:
        """Format warning as human-readable string.

        Example:
            >>> ValidationWarning(WarningCode.DUPLICATE_KEY, "Duplicate key", "menu.a").format()
            "warning[duplicate-key] at 'menu.a': Duplicate key"
        """
        return f"warning[{self.code}] at '{self.key_path}': {self.message}"
