"""Locale context for thread-safe, printer-scoped formatting.

This module provides locale-aware formatting without global state mutation.
Uses Babel for CLDR-compliant number and date formatting.

Architecture:
    - LocaleContext: Immutable locale configuration container
    - Formatters use Babel (thread-safe, CLDR-based)
    - No dependency on Python's locale module (avoids global state)
    - Each FormatEngine owns a reference to a shared LocaleContext

Python 3.13+. Uses Babel for i18n.
"""

import logging
from collections import OrderedDict
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from threading import RLock
from typing import ClassVar, Literal

from babel import Locale, UnknownLocaleError
from babel import dates as babel_dates
from babel import numbers as babel_numbers

from i18nprinter.constants import (
    FALLBACK_LOCALE,
    MAX_LOCALE_CACHE_SIZE,
)
from i18nprinter.diagnostics import ErrorTemplate, FormattingError
from i18nprinter.locale_utils import get_babel_locale, locale_identifier, normalize_locale

__all__ = ["LocaleContext"]

logger = logging.getLogger(__name__)

type DateStyle = Literal["short", "medium", "long", "full"]


@dataclass(frozen=True, slots=True)
class LocaleContext:
    """Immutable locale configuration for formatting operations.

    Use LocaleContext.create() factory to construct instances with proper
    validation. Direct construction bypasses validation and caching.

    Cache Management:
        LocaleContext keeps an internal LRU cache for instance reuse:
        - LocaleContext.clear_cache(): Clear all cached instances
        - LocaleContext.cache_size(): Get current cache size

    Examples:
        >>> ctx = LocaleContext.create('en-US')
        >>> ctx.format_integer(1234567)
        '1,234,567'

        >>> ctx = LocaleContext.create('de-DE')
        >>> ctx.format_number(1234.5)
        '1.234,5'

        >>> # Invalid locales fall back to en_US with warning logged
        >>> ctx = LocaleContext.create('invalid-locale')
        >>> ctx.locale_code  # Original code preserved
        'invalid-locale'
        >>> ctx.is_fallback
        True

    Thread Safety:
        LocaleContext is immutable and thread-safe. Cache operations are
        protected by RLock.
    """

    _cache: ClassVar[OrderedDict[str, "LocaleContext"]] = OrderedDict()
    _cache_lock: ClassVar[RLock] = RLock()

    locale_code: str
    _babel_locale: Locale
    is_fallback: bool = False

    @classmethod
    def clear_cache(cls) -> None:
        """Clear the locale context cache."""
        with cls._cache_lock:
            cls._cache.clear()

    @classmethod
    def cache_size(cls) -> int:
        """Get current number of cached LocaleContext instances."""
        with cls._cache_lock:
            return len(cls._cache)

    @classmethod
    def create(cls, locale: Locale | str) -> "LocaleContext":
        """Create LocaleContext with graceful fallback for invalid locales.

        Factory method that validates the locale before construction.
        For unknown or invalid locales, logs a warning and falls back to
        en_US. This method always succeeds.

        Args:
            locale: babel.Locale or locale identifier ('en-US', 'fr_CA')

        Returns:
            LocaleContext instance. For unknown/invalid locales, uses en_US
            rules while preserving the original locale_code for debugging.

        Raises:
            TypeError: If locale is neither a string nor a babel.Locale
        """
        locale_code = locale_identifier(locale)
        # "en-US", "en_US" map to the same cache entry
        cache_key = normalize_locale(locale_code)

        with cls._cache_lock:
            if cache_key in cls._cache:
                cls._cache.move_to_end(cache_key)
                return cls._cache[cache_key]

        used_fallback = False
        if isinstance(locale, Locale):
            babel_locale = locale
        else:
            try:
                babel_locale = get_babel_locale(cache_key)
            except (UnknownLocaleError, ValueError) as e:
                diagnostic = ErrorTemplate.locale_fallback(locale_code, FALLBACK_LOCALE, str(e))
                logger.warning("%s", diagnostic.message)
                babel_locale = get_babel_locale(FALLBACK_LOCALE)
                used_fallback = True

        ctx = cls(locale_code=locale_code, _babel_locale=babel_locale, is_fallback=used_fallback)

        # Double-check: another thread may have populated the entry
        with cls._cache_lock:
            if cache_key in cls._cache:
                return cls._cache[cache_key]

            if len(cls._cache) >= MAX_LOCALE_CACHE_SIZE:
                cls._cache.popitem(last=False)

            cls._cache[cache_key] = ctx
            return ctx

    @property
    def babel_locale(self) -> Locale:
        """Pre-validated Babel Locale object for this context."""
        return self._babel_locale

    @property
    def decimal_symbol(self) -> str:
        """Locale decimal separator ('.' for en, ',' for de)."""
        return str(babel_numbers.get_decimal_symbol(self._babel_locale))

    @property
    def plus_sign(self) -> str:
        """Locale plus sign symbol."""
        return str(babel_numbers.get_plus_sign_symbol(self._babel_locale))

    @property
    def minus_sign(self) -> str:
        """Locale minus sign symbol (may differ from ASCII '-')."""
        return str(babel_numbers.get_minus_sign_symbol(self._babel_locale))

    def format_integer(self, value: int) -> str:
        """Format an integer with locale digits and grouping.

        Examples:
            >>> LocaleContext.create('en-US').format_integer(1500)
            '1,500'
            >>> LocaleContext.create('de-DE').format_integer(1500)
            '1.500'
        """
        return self.format_number(value, maximum_fraction_digits=0)

    def format_number(
        self,
        value: int | float | Decimal,
        *,
        minimum_fraction_digits: int = 0,
        maximum_fraction_digits: int = 3,
    ) -> str:
        """Format number with locale-specific grouping and decimal symbol.

        Args:
            value: Number to format (int, float, or Decimal)
            minimum_fraction_digits: Minimum decimal places (default: 0)
            maximum_fraction_digits: Maximum decimal places (default: 3)

        Returns:
            Formatted number string according to locale rules

        Raises:
            FormattingError: If Babel cannot format the value; the error
                carries ``str(value)`` as its fallback

        Examples:
            >>> ctx = LocaleContext.create('en-US')
            >>> ctx.format_number(1234.5)
            '1,234.5'
            >>> ctx.format_number(2.5, minimum_fraction_digits=2, maximum_fraction_digits=2)
            '2.50'
        """
        try:
            if maximum_fraction_digits == 0:
                value = round(value)
                pattern = "#,##0"
            else:
                required = "0" * minimum_fraction_digits
                optional = "#" * (maximum_fraction_digits - minimum_fraction_digits)
                pattern = f"#,##0.{required}{optional}"

            return str(
                babel_numbers.format_decimal(
                    value,
                    format=pattern,
                    locale=self._babel_locale,
                )
            )
        except (ValueError, TypeError, InvalidOperation, AttributeError, KeyError) as e:
            diagnostic = ErrorTemplate.formatting_failed("number", value, str(e), self.locale_code)
            raise FormattingError(diagnostic, fallback_value=str(value)) from e

    def format_datetime(
        self,
        value: datetime | date,
        *,
        time_style: DateStyle | None = None,
    ) -> str:
        """Format a date or datetime with the locale's medium date style.

        Args:
            value: date or datetime
            time_style: Time format style appended for datetimes
                (default: None - date only)

        Returns:
            Formatted datetime string according to locale rules

        Raises:
            FormattingError: If Babel cannot format the value; the error
                carries the ISO 8601 form as its fallback

        Examples:
            >>> from datetime import date
            >>> LocaleContext.create('en-US').format_datetime(date(2025, 10, 27))
            'Oct 27, 2025'
        """
        try:
            date_str = str(
                babel_dates.format_date(value, format="medium", locale=self._babel_locale)
            )
            if time_style is None or not isinstance(value, datetime):
                return date_str

            time_str = babel_dates.format_time(value, format=time_style, locale=self._babel_locale)
            # CLDR dateTimeFormat: {0} is the time, {1} the date
            datetime_pattern = self._babel_locale.datetime_formats.get("medium") or "{1} {0}"
            if hasattr(datetime_pattern, "format"):
                return str(datetime_pattern.format(time_str, date_str))
            return str(datetime_pattern).format(time_str, date_str)

        except (ValueError, OverflowError, AttributeError, KeyError) as e:
            diagnostic = ErrorTemplate.formatting_failed(
                "datetime", value, str(e), self.locale_code
            )
            raise FormattingError(diagnostic, fallback_value=value.isoformat()) from e
