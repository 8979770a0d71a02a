"""Error message templates.

Centralized error message templates for testable, consistent error messages.
Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode

__all__ = ["ErrorTemplate"]


class ErrorTemplate:
    """Centralized error message templates.

    All diagnostics raised by the package are created here. Keeping them in
    one place gives testable messages and consistent hints.
    """

    @staticmethod
    def rule_position_out_of_range(position: int, available: int) -> Diagnostic:
        """Plural rule points past the end of the argument list.

        Args:
            position: 1-indexed position named by the rule
            available: Number of positional arguments supplied

        Returns:
            Diagnostic for RULE_POSITION_OUT_OF_RANGE
        """
        msg = (
            f"Plural rule references argument {position} "
            f"but only {available} argument(s) were supplied"
        )
        return Diagnostic(
            code=DiagnosticCode.RULE_POSITION_OUT_OF_RANGE,
            message=msg,
            hint="Rule positions are 1-indexed into the formatting arguments",
            argument_position=position,
        )

    @staticmethod
    def rule_argument_not_integer(position: int, value: object) -> Diagnostic:
        """Plural rule compares an argument that is not an int.

        Args:
            position: 1-indexed position named by the rule
            value: The offending argument

        Returns:
            Diagnostic for RULE_ARGUMENT_NOT_INTEGER
        """
        received = type(value).__name__
        msg = f"Plural rule argument {position} must be an int, got {received}"
        return Diagnostic(
            code=DiagnosticCode.RULE_ARGUMENT_NOT_INTEGER,
            message=msg,
            hint="Pass counts as int; bool and float values are not compared",
            argument_position=position,
            expected_type="int",
            received_type=received,
        )

    @staticmethod
    def printer_released(operation: str) -> Diagnostic:
        """Render call issued on a released printer.

        Args:
            operation: Name of the attempted operation

        Returns:
            Diagnostic for PRINTER_RELEASED
        """
        msg = f"Cannot call {operation}() on a released printer"
        return Diagnostic(
            code=DiagnosticCode.PRINTER_RELEASED,
            message=msg,
            hint="Acquire a new printer from the pool",
        )

    @staticmethod
    def printer_double_release() -> Diagnostic:
        """Printer released twice without an intervening acquire.

        Returns:
            Diagnostic for PRINTER_DOUBLE_RELEASE
        """
        return Diagnostic(
            code=DiagnosticCode.PRINTER_DOUBLE_RELEASE,
            message="Printer is already released",
            hint="Release each acquired printer exactly once",
        )

    @staticmethod
    def formatting_failed(kind: str, value: object, reason: str, locale_code: str) -> Diagnostic:
        """Locale-aware formatting of a value failed.

        Args:
            kind: What was being formatted ("number", "datetime")
            value: The value that failed to format
            reason: Underlying error text
            locale_code: Locale bound to the formatter

        Returns:
            Diagnostic for FORMATTING_FAILED
        """
        msg = f"{kind.capitalize()} formatting failed for '{value}': {reason}"
        return Diagnostic(
            code=DiagnosticCode.FORMATTING_FAILED,
            message=msg,
            received_type=type(value).__name__,
            locale_code=locale_code,
        )

    @staticmethod
    def locale_fallback(locale_code: str, fallback: str, reason: str) -> Diagnostic:
        """Requested locale could not be loaded; fallback used.

        Args:
            locale_code: Locale identifier requested by the caller
            fallback: Locale identifier used instead
            reason: Underlying error text

        Returns:
            Diagnostic for LOCALE_FALLBACK (warning severity)
        """
        msg = f"Unknown locale '{locale_code}': {reason}. Falling back to {fallback}"
        return Diagnostic(
            code=DiagnosticCode.LOCALE_FALLBACK,
            message=msg,
            hint="Use a CLDR locale identifier such as 'en-US' or 'fr_CA'",
            locale_code=locale_code,
            severity="warning",
        )
