"""Reuse pool for Printer handles.

PrinterPool hands out printers exclusively: a printer leaves the free list
under the pool lock before it is returned, so two concurrent acquirers never
receive the same instance. Release unbinds the engine, so a released printer
cannot format again until it is re-acquired and bound to a new locale.

Pools are explicit objects. get_default_pool() provides a lazily created
process-wide pool for convenience; tests and libraries should construct
their own.

Python 3.13+. External dependency: Babel (CLDR locale data).
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import TYPE_CHECKING

from i18nprinter.diagnostics import ErrorTemplate, PrinterReleasedError
from i18nprinter.locale_utils import get_system_locale

from .printer import Printer

if TYPE_CHECKING:
    from babel import Locale

__all__ = ["PoolConfig", "PrinterPool", "get_default_pool", "new_printer"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class PoolConfig:
    """Immutable configuration for a PrinterPool.

    Attributes:
        max_idle: Maximum idle printers kept for reuse. None (default)
            keeps every released printer; 0 disables reuse. Printers
            released into a full free list are dropped.
        default_locale: Locale used by acquire() when called without one.
            None (default) detects the system locale at acquisition time.

    Example:
        >>> pool = PrinterPool(PoolConfig(max_idle=16, default_locale="en-US"))
        >>> with pool.acquire() as printer:
        ...     printer.render_to_string("%d", 1000)
        '1,000'
    """

    max_idle: int | None = None
    default_locale: str | None = None

    def __post_init__(self) -> None:
        """Validate configuration values at construction time.

        Raises:
            ValueError: If max_idle is negative or default_locale is empty
        """
        if self.max_idle is not None and self.max_idle < 0:
            msg = "max_idle must be non-negative"
            raise ValueError(msg)
        if self.default_locale is not None and not self.default_locale:
            msg = "default_locale cannot be empty"
            raise ValueError(msg)


class PrinterPool:
    """Thread-safe free list of reusable printers.

    Examples:
        >>> pool = PrinterPool()
        >>> printer = pool.acquire("fr")
        >>> pool.release(printer)
        >>> printer = pool.acquire("en-US")  # same handle, new engine
        >>> printer.render_to_string("%.1f", 1234.5)
        '1,234.5'
        >>> pool.release(printer)
    """

    __slots__ = ("_config", "_created", "_idle", "_lock")

    def __init__(self, config: PoolConfig | None = None) -> None:
        """Initialize an empty pool.

        Args:
            config: Pool configuration (default: unbounded, system locale)
        """
        self._config = config if config is not None else PoolConfig()
        self._lock = threading.Lock()
        self._idle: list[Printer] = []
        self._created = 0

    @property
    def config(self) -> PoolConfig:
        """Configuration this pool was created with."""
        return self._config

    @property
    def idle_count(self) -> int:
        """Number of released printers waiting for reuse."""
        with self._lock:
            return len(self._idle)

    @property
    def created_count(self) -> int:
        """Number of printers this pool has constructed."""
        with self._lock:
            return self._created

    def acquire(self, locale: Locale | str | None = None) -> Printer:
        """Take a printer from the pool and bind it to locale.

        Args:
            locale: babel.Locale or identifier. None uses the configured
                default locale, else the system locale.

        Returns:
            Printer owned exclusively by the caller until released

        Raises:
            TypeError: If locale is not a str or babel.Locale
        """
        if locale is None:
            locale = self._config.default_locale or get_system_locale()

        with self._lock:
            printer = self._idle.pop() if self._idle else None
            if printer is None:
                self._created += 1

        if printer is None:
            printer = Printer(pool=self)

        try:
            printer.bind(locale)
        except BaseException:
            with self._lock:
                self._keep_idle(printer)
            raise

        logger.debug("Acquired %r", printer)
        return printer

    def release(self, printer: Printer) -> None:
        """Return printer to the pool.

        The printer's engine binding is discarded immediately.

        Args:
            printer: Printer previously obtained from this pool

        Raises:
            ValueError: If printer belongs to another pool (or none)
            PrinterReleasedError: If printer is already released
        """
        if printer.pool is not self:
            msg = "Printer does not belong to this pool"
            raise ValueError(msg)

        with self._lock:
            if not printer.is_bound:
                raise PrinterReleasedError(ErrorTemplate.printer_double_release())
            printer.unbind()
            self._keep_idle(printer)

        logger.debug("Released printer to pool")

    def clear(self) -> None:
        """Drop every idle printer. Printers currently in use are unaffected."""
        with self._lock:
            self._idle.clear()

    def _keep_idle(self, printer: Printer) -> None:
        # Caller holds self._lock
        max_idle = self._config.max_idle
        if max_idle is None or len(self._idle) < max_idle:
            self._idle.append(printer)
        else:
            logger.debug("Pool full (%d idle); dropping printer", max_idle)


# Lazily created process-wide pool. Use PrinterPool() directly for isolation.
_DEFAULT_POOL: PrinterPool | None = None
_DEFAULT_POOL_LOCK = threading.Lock()


def get_default_pool() -> PrinterPool:
    """Get the shared process-wide PrinterPool (created on first use)."""
    global _DEFAULT_POOL  # noqa: PLW0603
    with _DEFAULT_POOL_LOCK:
        if _DEFAULT_POOL is None:
            _DEFAULT_POOL = PrinterPool()
        return _DEFAULT_POOL


def new_printer(locale: Locale | str | None = None) -> Printer:
    """Acquire a printer for locale from the shared default pool.

    Release it with ``printer.close()`` (or use it as a context manager).

    Example:
        >>> with new_printer("en-US") as printer:
        ...     printer.render_to_string("%d items", 1500)
        '1,500 items'
    """
    return get_default_pool().acquire(locale)
