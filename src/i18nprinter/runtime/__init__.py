"""Printer runtime package.

Provides the plural rule compiler, the argument preprocessor, the
Babel-backed formatting engine and the poolable Printer API.

Python 3.13+.
"""

from .engine import FormatEngine, new_engine
from .locale_context import LocaleContext
from .plural_rules import PluralRule, RuleSet, plural
from .pool import PoolConfig, PrinterPool, get_default_pool, new_printer
from .preprocess import preprocess, select_template
from .printer import Printer

__all__ = [
    "FormatEngine",
    "LocaleContext",
    "PluralRule",
    "PoolConfig",
    "Printer",
    "PrinterPool",
    "RuleSet",
    "get_default_pool",
    "new_engine",
    "new_printer",
    "plural",
    "preprocess",
    "select_template",
]
