"""i18nprinter - locale-aware printf formatting with conditional plurals.

Selects among alternative format strings at call time by comparing argument
values against caller-written rules, then renders the chosen template with
CLDR-aware number and date formatting (via Babel).

Public API:
    plural - Compile "[N]d=M" / "[N]d>M" rule pairs into a RuleSet
    Printer - Locale-bound formatter (render_to_string, render_to_writer,
        render_in_place)
    PrinterPool - Thread-safe reuse pool for printers (acquire/release)
    PoolConfig - Pool configuration
    new_printer - Acquire a printer from the shared default pool
    preprocess - Resolve plural rules and truncate arguments

Exceptions:
    PrinterError - Base exception class
    RuleEvaluationError - Rule references a missing or non-int argument
    PrinterReleasedError - Printer used after release

Example:
    >>> from i18nprinter import PrinterPool, plural
    >>> pool = PrinterPool()
    >>> rules = plural("[1]d=1", "you have one item", "[1]d>1", "you have %d items")
    >>> with pool.acquire("en-US") as printer:
    ...     printer.render_to_string("you have no items", 2000, rules)
    'you have 2,000 items'
"""

from .diagnostics import (
    PrinterError,
    PrinterReleasedError,
    RuleArgumentTypeError,
    RuleEvaluationError,
    RulePositionError,
)
from .runtime import (
    PluralRule,
    PoolConfig,
    Printer,
    PrinterPool,
    RuleSet,
    get_default_pool,
    new_printer,
    plural,
    preprocess,
)

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("i18nprinter")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "PluralRule",
    "PoolConfig",
    "Printer",
    "PrinterError",
    "PrinterPool",
    "PrinterReleasedError",
    "RuleArgumentTypeError",
    "RuleEvaluationError",
    "RulePositionError",
    "RuleSet",
    "__version__",
    "get_default_pool",
    "new_printer",
    "plural",
    "preprocess",
]
