"""Diagnostic codes and data structures.

Defines error codes and diagnostic messages.
Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum, StrEnum
from typing import Literal

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "ErrorCategory",
]


class ErrorCategory(StrEnum):
    """Error categorization for printer errors.

    Categories:
        RULE: Plural rule evaluation failure (bad position or argument type)
        LIFECYCLE: Handle used outside its acquire/release window
        FORMATTING: Locale-aware formatting failure (numbers, dates)
    """

    RULE = "rule"
    LIFECYCLE = "lifecycle"
    FORMATTING = "formatting"


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        1000-1999: Rule evaluation errors
        2000-2999: Handle lifecycle errors
        3000-3999: Formatting errors
    """

    # Rule evaluation errors (1000-1999)
    RULE_POSITION_OUT_OF_RANGE = 1001
    RULE_ARGUMENT_NOT_INTEGER = 1002

    # Handle lifecycle errors (2000-2999)
    PRINTER_RELEASED = 2001
    PRINTER_DOUBLE_RELEASE = 2002

    # Formatting errors (3000-3999)
    FORMATTING_FAILED = 3001
    LOCALE_FALLBACK = 3002

    @property
    def category(self) -> ErrorCategory:
        """Category derived from the code's numeric range."""
        match self.value // 1000:
            case 1:
                return ErrorCategory.RULE
            case 2:
                return ErrorCategory.LIFECYCLE
            case _:
                return ErrorCategory.FORMATTING


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Inspired by Rust compiler diagnostics. Provides rich error information
    for both humans and tools.

    Attributes:
        code: Unique error code
        message: Human-readable error description
        hint: Suggestion for fixing the error
        argument_position: 1-indexed argument the error refers to
        expected_type: Expected type for argument
        received_type: Actual type received
        locale_code: Locale bound when the error occurred
        severity: Error severity level
    """

    code: DiagnosticCode
    message: str
    hint: str | None = None
    argument_position: int | None = None
    expected_type: str | None = None
    received_type: str | None = None
    locale_code: str | None = None
    severity: Literal["error", "warning"] = "error"

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic like Rust compiler.

        Example output:
            error[RULE_POSITION_OUT_OF_RANGE]: Plural rule references argument 3 ...
              = argument: 3
              = help: Rule positions are 1-indexed into the formatting arguments

        Returns:
            Formatted error message
        """
        from .formatter import DiagnosticFormatter  # noqa: PLC0415 - circular

        return DiagnosticFormatter().format(self)
