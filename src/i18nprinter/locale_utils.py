"""Locale utilities for BCP-47 to POSIX conversion.

Centralizes locale format normalization used throughout the codebase.
Provides canonical locale handling to ensure consistent cache keys and lookups.

Python 3.13+.
"""

from __future__ import annotations

import functools
import os
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from babel import Locale

__all__ = [
    "get_babel_locale",
    "get_system_locale",
    "locale_identifier",
    "normalize_locale",
]


def normalize_locale(locale_code: str) -> str:
    """Convert BCP-47 locale code to POSIX format for Babel.

    BCP-47 uses hyphens (en-US), while Babel/POSIX uses underscores (en_US).

    Args:
        locale_code: BCP-47 locale code (e.g., "en-US", "pt-BR")

    Returns:
        POSIX-formatted locale code (e.g., "en_US", "pt_BR")

    Example:
        >>> normalize_locale("en-US")
        'en_US'
        >>> normalize_locale("en")  # Already normalized
        'en'
    """
    return locale_code.replace("-", "_")


def locale_identifier(locale: Locale | str) -> str:
    """Return the string identifier for a locale input.

    Pre-parsed Babel locales are rendered with ``str()`` which yields the
    POSIX identifier (``fr_CA``). Strings are returned unchanged so the
    caller's spelling is preserved for logging and debugging.

    Args:
        locale: babel.Locale instance or raw identifier string

    Returns:
        Locale identifier string

    Raises:
        TypeError: If locale is neither a string nor a babel.Locale
    """
    if isinstance(locale, str):
        return locale

    # Lazy import: Babel loads CLDR data at import time; defer until needed
    from babel import Locale  # noqa: PLC0415

    if isinstance(locale, Locale):
        return str(locale)

    msg = f"Locale must be a babel.Locale or str, got {type(locale).__name__}"
    raise TypeError(msg)


@functools.lru_cache(maxsize=128)
def get_babel_locale(locale_code: str) -> Locale:
    """Get a Babel Locale object with caching.

    Thread-safe via lru_cache internal locking.

    Args:
        locale_code: Locale code (BCP-47 or POSIX format accepted)

    Returns:
        Babel Locale object

    Raises:
        babel.core.UnknownLocaleError: If locale is not recognized
        ValueError: If locale format is invalid
    """
    from babel import Locale  # noqa: PLC0415

    normalized = normalize_locale(locale_code)
    return Locale.parse(normalized)


def get_system_locale(*, raise_on_failure: bool = False) -> str:
    """Detect system locale from OS and environment variables.

    Detection order:
    1. Python locale.getlocale() (OS-level locale)
    2. LC_ALL environment variable (overrides all)
    3. LC_MESSAGES environment variable (for message catalogs)
    4. LANG environment variable (default locale)

    Normalizes the result to POSIX format for Babel compatibility.
    Filters out "C" and "POSIX" pseudo-locales.

    Args:
        raise_on_failure: If True, raise RuntimeError when locale cannot be
            determined. If False (default), return "en_US" as fallback.

    Returns:
        Detected locale code in POSIX format.

    Raises:
        RuntimeError: If raise_on_failure is True and locale cannot be determined.
    """
    import locale as locale_module  # noqa: PLC0415

    try:
        system_locale, _ = locale_module.getlocale()
        if system_locale and system_locale not in ("C", "POSIX"):
            # Strip encoding suffix if present
            if "." in system_locale:
                system_locale = system_locale.split(".")[0]
            return normalize_locale(system_locale)
    except (ValueError, AttributeError):
        pass

    for var in ("LC_ALL", "LC_MESSAGES", "LANG"):
        value = os.environ.get(var)
        if value and value not in ("C", "POSIX", ""):
            # Strip encoding suffix (e.g., ".UTF-8")
            locale_code = value.split(".")[0]
            return normalize_locale(locale_code)

    if raise_on_failure:
        msg = (
            "Could not determine system locale. "
            "Set LC_ALL, LC_MESSAGES, or LANG environment variable."
        )
        raise RuntimeError(msg)

    return "en_US"
