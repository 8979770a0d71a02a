"""Printer - locale-bound, poolable formatting handle.

A Printer runs every call through the argument preprocessor (plural rule
selection and argument truncation) and then through its FormatEngine.

Python 3.13+. External dependency: Babel (CLDR locale data).
"""

from __future__ import annotations

import logging
import sys
import threading
from typing import TYPE_CHECKING, Self

from i18nprinter.diagnostics import ErrorTemplate, PrinterReleasedError
from i18nprinter.locale_utils import locale_identifier

from .engine import FormatEngine, Writer, new_engine
from .preprocess import preprocess

if TYPE_CHECKING:
    from types import TracebackType

    from babel import Locale

    from .locale_context import LocaleContext
    from .plural_rules import RuleSet
    from .pool import PrinterPool

__all__ = ["Printer"]

logger = logging.getLogger(__name__)


class Printer:
    """Locale-aware formatter with plural rule support.

    Printers are normally obtained from a PrinterPool and released back to
    it when done. A directly constructed printer is unpooled; closing it
    simply unbinds its engine.

    Plural rules are passed either as the trailing positional argument (a
    RuleSet from plural()) or via the ``rules`` keyword.

    Thread Safety:
        Each printer carries a lock held for the duration of a render call,
        so overlapping calls on one printer are serialized. Distinct
        printers share no mutable state.

    Examples:
        >>> from i18nprinter import plural
        >>> printer = Printer("en-US")
        >>> rules = plural("[1]d=1", "you have one item", "[1]d>1", "you have %d items")
        >>> printer.render_to_string("you have no items", 1, rules)
        'you have one item'
        >>> printer.render_to_string("you have no items", 1500, rules)
        'you have 1,500 items'
        >>> printer.render_to_string("you have no items", 0, rules=rules)
        'you have no items'
    """

    __slots__ = ("_engine", "_lock", "_locale_code", "_pool")

    def __init__(
        self, locale: Locale | str | None = None, *, pool: PrinterPool | None = None
    ) -> None:
        """Initialize printer.

        Args:
            locale: Locale to bind immediately. None leaves the printer
                unbound (as a pooled printer is between uses).
            pool: Owning pool, used by close()
        """
        self._lock = threading.Lock()
        self._pool = pool
        self._engine: FormatEngine | None = None
        self._locale_code: str | None = None
        if locale is not None:
            self.bind(locale)

    def __repr__(self) -> str:
        if self._engine is None:
            return "Printer(<released>)"
        return f"Printer(locale={self._locale_code!r})"

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.close()

    @property
    def pool(self) -> PrinterPool | None:
        """Pool this printer is returned to on close(), if any."""
        return self._pool

    @property
    def is_bound(self) -> bool:
        """True while the printer holds an engine (acquired, not released)."""
        return self._engine is not None

    @property
    def locale(self) -> LocaleContext:
        """Locale context of the bound engine.

        Raises:
            PrinterReleasedError: If the printer is released
        """
        return self._require_engine("locale").locale

    @property
    def locale_code(self) -> str:
        """Locale identifier as requested at acquisition.

        Raises:
            PrinterReleasedError: If the printer is released
        """
        locale_code = self._locale_code
        if locale_code is None:
            raise PrinterReleasedError(ErrorTemplate.printer_released("locale_code"))
        return locale_code

    def bind(self, locale: Locale | str) -> None:
        """Replace the engine binding with a fresh engine for locale.

        Called by PrinterPool.acquire(). The previous engine (if any) is
        discarded entirely.
        """
        engine = new_engine(locale)
        locale_code = locale_identifier(locale)
        with self._lock:
            self._engine = engine
            self._locale_code = locale_code
        logger.debug("Bound printer to locale %s", locale_code)

    def unbind(self) -> None:
        """Discard the engine binding. Render calls fail until rebound."""
        with self._lock:
            self._engine = None
            self._locale_code = None

    def close(self) -> None:
        """Release the printer to its pool, or unbind it when unpooled.

        Raises:
            PrinterReleasedError: If the printer is already released
        """
        if self._pool is not None:
            self._pool.release(self)
            return
        if self._engine is None:
            raise PrinterReleasedError(ErrorTemplate.printer_double_release())
        self.unbind()

    def render_to_string(
        self, format: str, *args: object, rules: RuleSet | None = None  # noqa: A002
    ) -> str:
        """Render format with args and return the result.

        Args:
            format: Default format string
            *args: Positional arguments; may end with a RuleSet
            rules: Explicit plural rules

        Returns:
            Rendered string

        Raises:
            PrinterReleasedError: If the printer is released
            RulePositionError: If a rule references a missing argument
            RuleArgumentTypeError: If a rule references a non-int argument
        """
        with self._lock:
            engine = self._require_engine("render_to_string")
            resolved_format, resolved_args = preprocess(format, args, rules)
            return engine.format(resolved_format, resolved_args)

    def render_to_writer(
        self,
        destination: Writer,
        format: str,  # noqa: A002
        *args: object,
        rules: RuleSet | None = None,
    ) -> tuple[int, Exception | None]:
        """Render format with args and write the result to destination.

        Args:
            destination: Text or binary stream (any object with ``write``)
            format: Default format string
            *args: Positional arguments; may end with a RuleSet
            rules: Explicit plural rules

        Returns:
            Tuple of (count_written, error). Write failures are returned,
            not raised.

        Raises:
            PrinterReleasedError: If the printer is released
            RulePositionError: If a rule references a missing argument
            RuleArgumentTypeError: If a rule references a non-int argument
        """
        with self._lock:
            engine = self._require_engine("render_to_writer")
            resolved_format, resolved_args = preprocess(format, args, rules)
            return engine.write(destination, resolved_format, resolved_args)

    def render_in_place(
        self, format: str, *args: object, rules: RuleSet | None = None  # noqa: A002
    ) -> None:
        """Render format with args to standard output.

        ``sys.stdout`` is looked up at call time, so redirection (for
        example contextlib.redirect_stdout) is honored.

        Raises:
            PrinterReleasedError: If the printer is released
            RulePositionError: If a rule references a missing argument
            RuleArgumentTypeError: If a rule references a non-int argument
        """
        with self._lock:
            engine = self._require_engine("render_in_place")
            resolved_format, resolved_args = preprocess(format, args, rules)
            sys.stdout.write(engine.format(resolved_format, resolved_args))

    def _require_engine(self, operation: str) -> FormatEngine:
        engine = self._engine
        if engine is None:
            raise PrinterReleasedError(ErrorTemplate.printer_released(operation))
        return engine
