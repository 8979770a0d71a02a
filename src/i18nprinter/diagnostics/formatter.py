"""Diagnostic formatting service.

Centralizes diagnostic output formatting with configurable options.
Python 3.13+. Zero external dependencies.
"""

import json
from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum

from .codes import Diagnostic

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

    Attributes:
        output_format: Output style (rust, simple, json)
        sanitize: Truncate content to prevent information leakage
        max_content_length: Maximum content length when sanitizing

    Example:
        >>> formatter = DiagnosticFormatter()
        >>> diagnostic = ErrorTemplate.printer_double_release()
        >>> print(formatter.format(diagnostic))
        error[PRINTER_DOUBLE_RELEASE]: Printer is already released
          = help: Release each acquired printer exactly once

        >>> formatter = DiagnosticFormatter(output_format=OutputFormat.SIMPLE)
        >>> print(formatter.format(diagnostic))
        PRINTER_DOUBLE_RELEASE: Printer is already released
    """

    output_format: OutputFormat = OutputFormat.RUST
    sanitize: bool = False
    max_content_length: int = 100

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

    def _format_rust(self, diagnostic: Diagnostic) -> str:
        parts = [f"{diagnostic.severity}[{diagnostic.code.name}]: {diagnostic.message}"]

        if diagnostic.locale_code:
            parts.append(f"  --> locale {diagnostic.locale_code}")

        if diagnostic.argument_position is not None:
            parts.append(f"  = argument: {diagnostic.argument_position}")

        if diagnostic.expected_type:
            parts.append(f"  = expected: {diagnostic.expected_type}")

        if diagnostic.received_type:
            parts.append(f"  = received: {diagnostic.received_type}")

        if diagnostic.hint:
            parts.append(f"  = help: {self._maybe_sanitize(diagnostic.hint)}")

        return "\n".join(parts)

    def _format_simple(self, diagnostic: Diagnostic) -> str:
        message = self._maybe_sanitize(diagnostic.message)
        return f"{diagnostic.code.name}: {message}"

    def _format_json(self, diagnostic: Diagnostic) -> str:
        data: dict[str, str | int | None] = {
            "code": diagnostic.code.name,
            "code_value": diagnostic.code.value,
            "category": str(diagnostic.code.category),
            "message": self._maybe_sanitize(diagnostic.message),
            "severity": diagnostic.severity,
        }

        # Optional fields only when present
        if diagnostic.locale_code:
            data["locale_code"] = diagnostic.locale_code
        if diagnostic.argument_position is not None:
            data["argument_position"] = diagnostic.argument_position
        if diagnostic.expected_type:
            data["expected_type"] = diagnostic.expected_type
        if diagnostic.received_type:
            data["received_type"] = diagnostic.received_type
        if diagnostic.hint:
            data["hint"] = self._maybe_sanitize(diagnostic.hint)

        return json.dumps(data, ensure_ascii=False)

    def _maybe_sanitize(self, text: str) -> str:
        if self.sanitize and len(text) > self.max_content_length:
            return text[: self.max_content_length] + "..."
        return text
