"""Printer exception hierarchy with structured diagnostics.

All exceptions may carry Diagnostic objects for rich error information.
Rule evaluation errors also subclass the builtin exception a plain Python
sequence access would raise, so callers can catch either.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic

__all__ = [
    "FormattingError",
    "PrinterError",
    "PrinterReleasedError",
    "RuleArgumentTypeError",
    "RuleEvaluationError",
    "RulePositionError",
]


class PrinterError(Exception):
    """Base exception for all printer errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize PrinterError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.format_error())
        else:
            self.diagnostic = None
            super().__init__(message)


class RuleEvaluationError(PrinterError):
    """Plural rule could not be evaluated against the call's arguments.

    These are caller bugs (the rule set does not fit the argument list) and
    abort the formatting call.
    """


class RulePositionError(RuleEvaluationError, IndexError):
    """Plural rule references an argument position that does not exist."""


class RuleArgumentTypeError(RuleEvaluationError, TypeError):
    """Plural rule references an argument that is not an integer."""


class PrinterReleasedError(PrinterError, RuntimeError):
    """Printer used (or released) after being returned to its pool.

    A released printer has no engine binding; it must be re-acquired from
    a pool before it can format again.
    """


class FormattingError(PrinterError):
    """Raised when locale-aware formatting fails.

    The error carries a fallback_value that should be used in the output
    when the formatting fails, so rendering can continue with usable
    content.

    Attributes:
        fallback_value: String to use in output when formatting fails
    """

    def __init__(self, message: str | Diagnostic, fallback_value: str) -> None:
        """Initialize FormattingError.

        Args:
            message: Error message string OR Diagnostic object
            fallback_value: Value to use in output when formatting fails
        """
        super().__init__(message)
        self.fallback_value = fallback_value
