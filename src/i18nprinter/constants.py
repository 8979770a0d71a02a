"""Shared constants for i18nprinter.

This module provides centralized configuration constants used across the
runtime and diagnostics packages. Placing constants here avoids circular
imports and provides a single source of truth.

Constants are grouped by domain:
- Locale: Fallback and cache limits for locale resolution
- Verbs: Defaults for the printf-style formatting engine
- Markers: Inline markers rendered for template/argument mismatches

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Locale
    "FALLBACK_LOCALE",
    "MAX_LOCALE_CACHE_SIZE",
    # Verbs
    "DEFAULT_FLOAT_PRECISION",
    "PLACEHOLDER_MARKER",
    # Markers
    "MARKER_BAD_INDEX",
    "MARKER_BAD_TYPE",
    "MARKER_EXTRA",
    "MARKER_MISSING",
    "MARKER_NO_VERB",
]

# ============================================================================
# LOCALE
# ============================================================================

# Locale used when a requested identifier is unknown or malformed.
# Formatting still succeeds; LocaleContext.is_fallback reports the substitution.
FALLBACK_LOCALE: str = "en_US"

# Maximum cached LocaleContext instances.
# Prevents unbounded memory growth in multi-locale applications.
# 128 covers typical multi-region applications (major locales + variants).
MAX_LOCALE_CACHE_SIZE: int = 128

# ============================================================================
# VERBS
# ============================================================================

# Fraction digits rendered by %f, %e and %g when no precision is given.
DEFAULT_FLOAT_PRECISION: int = 6

# Character that introduces a verb. The argument preprocessor counts its
# occurrences in the selected template to size the argument list.
PLACEHOLDER_MARKER: str = "%"

# ============================================================================
# MARKERS
# ============================================================================

# Template patterns for inline error markers.
# These are format strings - use .format(verb=..., ...) to fill them in.
MARKER_MISSING: str = "%!{verb}(MISSING)"  # e.g., %!d(MISSING)
MARKER_BAD_TYPE: str = "%!{verb}({type}={value})"  # e.g., %!d(str=abc)
MARKER_BAD_INDEX: str = "%!{verb}(BADINDEX)"  # e.g., %!d(BADINDEX)
MARKER_NO_VERB: str = "%!(NOVERB)"
MARKER_EXTRA: str = "%!(EXTRA {items})"  # e.g., %!(EXTRA int=1, str=a)
