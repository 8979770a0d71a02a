"""Locale-aware printf-style formatting engine.

Renders verb templates such as ``"%d files in %s"`` with numbers and dates
localized through a LocaleContext (Babel/CLDR).

Template grammar:
    ``%[flags][width][.precision][[index]]verb``

    - flags: ``-`` left-justify, ``+`` always print a sign, ``0`` zero pad,
      space for a leading blank on non-negative numbers
    - index: 1-indexed explicit argument (``%[2]d``); following verbs
      continue from the next argument
    - ``%%`` is a literal percent sign and consumes no argument

Verbs:
    ============  ========================================================
    ``v``         default rendering (numbers localized, dates medium style)
    ``d``         int with locale digits and grouping
    ``f F``       fixed point, default precision 6
    ``e E g G``   scientific / general with the locale decimal symbol
    ``s``         ``str(value)``
    ``q``         double-quoted string
    ``t``         bool as ``true`` / ``false``
    ``x X``       hexadecimal for ints, strings and bytes
    ============  ========================================================

The engine never raises on template/argument mismatches. It renders inline
markers instead: ``%!d(MISSING)``, ``%!d(str=abc)`` (wrong type or unknown
verb), ``%!d(BADINDEX)``, ``%!(NOVERB)`` and ``%!(EXTRA int=1)``.

Python 3.13+. Uses Babel for i18n.
"""

import io
import json
import logging
import math
import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Protocol, TypeIs

from babel import Locale

from i18nprinter.constants import (
    DEFAULT_FLOAT_PRECISION,
    MARKER_BAD_INDEX,
    MARKER_BAD_TYPE,
    MARKER_EXTRA,
    MARKER_MISSING,
    MARKER_NO_VERB,
)
from i18nprinter.diagnostics import FormattingError

from .locale_context import LocaleContext

__all__ = ["FormatEngine", "Writer", "new_engine"]

logger = logging.getLogger(__name__)

_DIRECTIVE_RE = re.compile(
    r"%(?P<flags>[-+ 0]*)(?P<width>[0-9]+)?(?:\.(?P<precision>[0-9]*))?"
    r"(?:\[(?P<index>[0-9]+)\])?(?P<verb>.)?",
    re.DOTALL,
)


class Writer(Protocol):
    """Destination accepted by FormatEngine.write (files, sockets, buffers)."""

    def write(self, data: Any, /) -> int | None:  # noqa: ANN401 - str or bytes
        """Write data and return the count written (or None)."""
        ...


@dataclass(frozen=True, slots=True)
class _Directive:
    """One parsed ``%`` directive."""

    flags: str
    width: int | None
    precision: int | None
    verb: str


# A rendered argument: (sign, body). Sign is kept apart so zero padding can
# be inserted between the two.
type _Rendered = tuple[str, str]


def _is_int(value: object) -> TypeIs[int]:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_real(value: object) -> TypeIs[int | float | Decimal]:
    return isinstance(value, int | float | Decimal) and not isinstance(value, bool)


def _special_value(value: int | float | Decimal) -> str | None:
    """Return ``NaN`` / ``Inf`` for non-finite numbers, else None."""
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Inf"
    elif isinstance(value, Decimal):
        if value.is_nan():
            return "NaN"
        if value.is_infinite():
            return "Inf"
    return None


def _describe(value: object) -> str:
    return f"{type(value).__name__}={value}"


def _is_binary(destination: object) -> bool:
    if isinstance(destination, io.TextIOBase):
        return False
    if isinstance(destination, io.RawIOBase | io.BufferedIOBase):
        return True
    mode = getattr(destination, "mode", None)
    return isinstance(mode, str) and "b" in mode


class FormatEngine:
    """Render verb templates for one locale.

    Engines are stateless between calls and safe to share across threads.
    Construct them with new_engine().

    Examples:
        >>> engine = new_engine("en-US")
        >>> engine.format("%d flowers", [1500])
        '1,500 flowers'
        >>> new_engine("de-DE").format("%.2f km", [1234.5])
        '1.234,50 km'
        >>> engine.format("%d and %d", [1])
        '1 and %!d(MISSING)'
    """

    __slots__ = ("_context", "_verbs")

    def __init__(self, context: LocaleContext) -> None:
        """Initialize engine bound to a locale context.

        Args:
            context: Locale configuration used for every render
        """
        self._context = context
        self._verbs: dict[str, Callable[[_Directive, object], _Rendered | None]] = {
            "v": self._render_default,
            "d": self._render_integer,
            "f": self._render_fixed,
            "F": self._render_fixed,
            "e": self._render_scientific,
            "E": self._render_scientific,
            "g": self._render_scientific,
            "G": self._render_scientific,
            "s": self._render_string,
            "q": self._render_quoted,
            "t": self._render_bool,
            "x": self._render_hex,
            "X": self._render_hex,
        }

    @property
    def locale(self) -> LocaleContext:
        """Locale context this engine renders with."""
        return self._context

    def format(self, template: str, args: Sequence[object]) -> str:
        """Render template with args.

        Args:
            template: Verb template
            args: Positional arguments consumed by the verbs in order

        Returns:
            Rendered string (with inline markers for any mismatch)
        """
        parts: list[str] = []
        cursor = 0
        reordered = False
        last = 0

        for match in _DIRECTIVE_RE.finditer(template):
            parts.append(template[last : match.start()])
            last = match.end()

            verb = match.group("verb")
            if verb is None:
                parts.append(MARKER_NO_VERB)
                continue
            if verb == "%" and match.group("index") is None:
                parts.append("%")
                continue

            if match.group("index") is not None:
                reordered = True
                index = int(match.group("index"))
                if not 1 <= index <= len(args):
                    logger.debug("Bad argument index %d in %r", index, template)
                    parts.append(MARKER_BAD_INDEX.format(verb=verb))
                    continue
                cursor = index - 1

            if cursor >= len(args):
                logger.debug("Missing argument for %%%s in %r", verb, template)
                parts.append(MARKER_MISSING.format(verb=verb))
                continue

            value = args[cursor]
            cursor += 1
            directive = _Directive(
                flags=match.group("flags"),
                width=int(match.group("width")) if match.group("width") else None,
                precision=(
                    int(match.group("precision") or 0)
                    if match.group("precision") is not None
                    else None
                ),
                verb=verb,
            )
            parts.append(self._render(directive, value))

        parts.append(template[last:])

        if not reordered and cursor < len(args):
            extra = ", ".join(_describe(value) for value in args[cursor:])
            logger.debug("Extra arguments for %r: %s", template, extra)
            parts.append(MARKER_EXTRA.format(items=extra))

        return "".join(parts)

    def write(
        self, destination: Writer, template: str, args: Sequence[object]
    ) -> tuple[int, Exception | None]:
        """Render template and write it to destination.

        Text streams (``io.TextIOBase``) receive str. Binary streams, and
        file-like objects opened in a ``"b"`` mode, receive UTF-8 bytes.
        Other writers receive str.

        Args:
            destination: Object with a ``write`` method
            template: Verb template
            args: Positional arguments

        Returns:
            Tuple of (count_written, error). Count is bytes for binary
            streams and characters for text streams. Write failures
            (including a writer rejecting the data type) are returned as
            the error, never raised.
        """
        text = self.format(template, args)
        data: str | bytes = text.encode("utf-8") if _is_binary(destination) else text

        try:
            written = destination.write(data)
        except (OSError, ValueError, TypeError) as e:
            logger.debug("Write to %s failed: %s", type(destination).__name__, e)
            return 0, e

        return (written if isinstance(written, int) else len(data)), None

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def _render(self, directive: _Directive, value: object) -> str:
        renderer = self._verbs.get(directive.verb)
        try:
            rendered = renderer(directive, value) if renderer is not None else None
        except FormattingError as e:
            logger.warning("%s", e)
            rendered = ("", e.fallback_value)

        if rendered is None:
            logger.debug("Cannot render %s with %%%s", _describe(value), directive.verb)
            return MARKER_BAD_TYPE.format(
                verb=directive.verb, type=type(value).__name__, value=value
            )
        return self._pad(directive, *rendered)

    @staticmethod
    def _pad(directive: _Directive, sign: str, body: str) -> str:
        text = sign + body
        if directive.width is None or len(text) >= directive.width:
            return text
        fill = directive.width - len(text)
        if "-" in directive.flags:
            return text + " " * fill
        if "0" in directive.flags and directive.verb not in "sqt":
            return sign + "0" * fill + body
        return " " * fill + text

    def _sign(self, negative: bool, flags: str) -> str:
        if negative:
            return self._context.minus_sign
        if "+" in flags:
            return self._context.plus_sign
        if " " in flags:
            return " "
        return ""

    def _render_integer(self, directive: _Directive, value: object) -> _Rendered | None:
        if not _is_int(value):
            return None
        return self._sign(value < 0, directive.flags), self._context.format_integer(abs(value))

    def _render_fixed(self, directive: _Directive, value: object) -> _Rendered | None:
        if not _is_real(value):
            return None
        precision = (
            DEFAULT_FLOAT_PRECISION if directive.precision is None else directive.precision
        )
        return self._render_real(
            value,
            directive.flags,
            lambda magnitude: self._context.format_number(
                magnitude,
                minimum_fraction_digits=precision,
                maximum_fraction_digits=precision,
            ),
        )

    def _render_scientific(self, directive: _Directive, value: object) -> _Rendered | None:
        if not _is_real(value):
            return None
        precision = (
            DEFAULT_FLOAT_PRECISION if directive.precision is None else directive.precision
        )
        spec = f".{precision}{directive.verb}"

        def scientific(magnitude: int | float | Decimal) -> str:
            return format(magnitude, spec).replace(".", self._context.decimal_symbol)

        return self._render_real(value, directive.flags, scientific)

    def _render_real(
        self,
        value: int | float | Decimal,
        flags: str,
        render: Callable[[int | float | Decimal], str],
    ) -> _Rendered:
        special = _special_value(value)
        if special == "NaN":
            return "", special
        negative = value < 0
        if special is not None:
            return self._sign(negative, flags), special
        return self._sign(negative, flags), render(abs(value))

    def _render_default(self, directive: _Directive, value: object) -> _Rendered | None:
        if isinstance(value, bool):
            return "", "true" if value else "false"
        if _is_int(value):
            return self._render_integer(directive, value)
        if _is_real(value):
            if directive.precision is not None:
                return self._render_fixed(directive, value)
            return self._render_real(value, directive.flags, self._render_shortest)
        if isinstance(value, datetime):
            return "", self._context.format_datetime(value, time_style="short")
        if isinstance(value, date):
            return "", self._context.format_datetime(value)
        return self._render_string(directive, value)

    def _render_shortest(self, magnitude: int | float | Decimal) -> str:
        # Keep every digit of the shortest round-tripping representation
        exact = Decimal(repr(magnitude)) if isinstance(magnitude, float) else Decimal(magnitude)
        exponent = exact.as_tuple().exponent
        digits = -exponent if isinstance(exponent, int) and exponent < 0 else 0
        return self._context.format_number(exact, maximum_fraction_digits=digits)

    def _render_string(self, directive: _Directive, value: object) -> _Rendered:
        text = str(value)
        if directive.precision is not None:
            text = text[: directive.precision]
        return "", text

    @staticmethod
    def _render_quoted(directive: _Directive, value: object) -> _Rendered | None:
        if not isinstance(value, str):
            return None
        return "", json.dumps(value, ensure_ascii=False)

    @staticmethod
    def _render_bool(directive: _Directive, value: object) -> _Rendered | None:
        if not isinstance(value, bool):
            return None
        return "", "true" if value else "false"

    @staticmethod
    def _render_hex(directive: _Directive, value: object) -> _Rendered | None:
        if _is_int(value):
            text = format(abs(value), "x")
            sign = "-" if value < 0 else ("+" if "+" in directive.flags else "")
        elif isinstance(value, str):
            text, sign = value.encode("utf-8").hex(), ""
        elif isinstance(value, bytes):
            text, sign = value.hex(), ""
        else:
            return None
        return sign, text.upper() if directive.verb == "X" else text


def new_engine(locale: Locale | str) -> FormatEngine:
    """Construct a FormatEngine for a locale.

    Unknown or malformed locale identifiers fall back to en_US formatting
    (see LocaleContext.create).

    Args:
        locale: babel.Locale or identifier such as "en-US" or "fr_CA"

    Returns:
        Fresh FormatEngine bound to the locale
    """
    return FormatEngine(LocaleContext.create(locale))
