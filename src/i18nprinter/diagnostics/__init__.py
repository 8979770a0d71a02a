"""Diagnostic system for printer errors.

Provides structured error diagnostics with codes, hints and output formats.
Inspired by Rust compiler diagnostics.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode, ErrorCategory
from .errors import (
    FormattingError,
    PrinterError,
    PrinterReleasedError,
    RuleArgumentTypeError,
    RuleEvaluationError,
    RulePositionError,
)
from .formatter import DiagnosticFormatter, OutputFormat
from .templates import ErrorTemplate

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticFormatter",
    "ErrorCategory",
    "ErrorTemplate",
    "FormattingError",
    "OutputFormat",
    "PrinterError",
    "PrinterReleasedError",
    "RuleArgumentTypeError",
    "RuleEvaluationError",
    "RulePositionError",
]
