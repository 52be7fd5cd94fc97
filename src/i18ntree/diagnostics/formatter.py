"""Diagnostic formatting service.

Centralizes diagnostic output formatting with configurable options.
Python 3.13+. Zero external dependencies.
"""

import json
from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum

from .codes import Diagnostic
from .validation import ValidationWarning

__all__ = [
    "DiagnosticFormatter",
    "OutputFormat",
]


class OutputFormat(StrEnum):
    """Output format options for diagnostic formatting."""

    RUST = "rust"  # Rust compiler-style output (default)
    SIMPLE = "simple"  # Single-line format
    JSON = "json"  # JSON format for tooling integration


@dataclass(frozen=True, slots=True)
class DiagnosticFormatter:
    """Diagnostic formatting service.

    Centralizes formatting of Diagnostic objects into human-readable
    or machine-readable output.

    Attributes:
        output_format: Output style (rust, simple, json)
        color: Enable ANSI color codes (for terminal output)

    Example:
        >>> formatter = DiagnosticFormatter()
        >>> diagnostic = ErrorTemplate.not_a_branch("menu.start")
        >>> print(formatter.format(diagnostic))
        error[NOT_A_BRANCH]: Key 'menu.start' has no children
          --> menu.start

        >>> formatter = DiagnosticFormatter(output_format=OutputFormat.SIMPLE)
        >>> print(formatter.format(diagnostic))
        NOT_A_BRANCH: Key 'menu.start' has no children
    """

    output_format: OutputFormat = OutputFormat.RUST
    color: bool = False

    def format(self, diagnostic: Diagnostic) -> str:
        """Format a single diagnostic.

        Args:
            diagnostic: Diagnostic to format

        Returns:
            Formatted diagnostic string
        """
        match self.output_format:
            case OutputFormat.RUST:
                return self._format_rust(diagnostic)
            case OutputFormat.SIMPLE:
                return self._format_simple(diagnostic)
            case OutputFormat.JSON:
                return self._format_json(diagnostic)

    def format_all(self, diagnostics: Iterable[Diagnostic]) -> str:
        """Format multiple diagnostics separated by blank lines."""
        return "\n\n".join(self.format(d) for d in diagnostics)

    def format_warning(self, warning: ValidationWarning) -> str:
        """Format a parse warning in the configured style."""
        match self.output_format:
            case OutputFormat.JSON:
                return json.dumps(
                    {
                        "code": str(warning.code),
                        "message": warning.message,
                        "severity": "warning",
                        "key_path": warning.key_path,
                    },
                    ensure_ascii=False,
                )
            case OutputFormat.SIMPLE:
                return f"{warning.code}: {warning.message}"
            case _:
                return warning.format()

    def _format_rust(self, diagnostic: Diagnostic) -> str:
        """Format diagnostic in Rust compiler style.

        Example output:
            error[KEY_NOT_FOUND]: Key 'menu.x' not found (no node for segment 'x')
              --> menu.x
              = help: Check the key path against the resource file
        """
        severity = diagnostic.severity if diagnostic.severity == "warning" else "error"

        if self.color:
            if severity == "error":
                severity_str = f"\033[1;31m{severity}\033[0m"  # Bold red
            else:
                severity_str = f"\033[1;33m{severity}\033[0m"  # Bold yellow
        else:
            severity_str = severity

        parts = [f"{severity_str}[{diagnostic.code.name}]: {_escape_control(diagnostic.message)}"]

        if diagnostic.key_path:
            parts.append(f"  --> {_escape_control(diagnostic.key_path)}")

        if diagnostic.language:
            parts.append(f"  = language: {diagnostic.language}")

        if diagnostic.hint:
            parts.append(f"  = help: {_escape_control(diagnostic.hint)}")

        return "\n".join(parts)

    def _format_simple(self, diagnostic: Diagnostic) -> str:
        """Format diagnostic in single-line format.

        Example output:
            KEY_NOT_FOUND: Key 'menu.x' not found (no node for segment 'x')
        """
        return f"{diagnostic.code.name}: {_escape_control(diagnostic.message)}"

    def _format_json(self, diagnostic: Diagnostic) -> str:
        """Format diagnostic as JSON.

        Example output:
            {"code": "KEY_NOT_FOUND", "code_value": 2001, "message": "...", "severity": "error"}
        """
        data: dict[str, str | int | None] = {
            "code": diagnostic.code.name,
            "code_value": diagnostic.code.value,
            "message": diagnostic.message,
            "severity": diagnostic.severity,
        }

        if diagnostic.key_path:
            data["key_path"] = diagnostic.key_path

        if diagnostic.language:
            data["language"] = diagnostic.language

        if diagnostic.hint:
            data["hint"] = diagnostic.hint

        return json.dumps(data, ensure_ascii=False)


def _escape_control(text: str) -> str:
    """Escape line breaks so one diagnostic stays one logical record."""
    return text.replace("\r", "\\r").replace("\n", "\\n")
