"""Tests for the Printer facade.

Covers the three render entry points, plural rule integration, the
released-handle contract and context manager support.
"""

from __future__ import annotations

import io
import threading

import pytest

from i18nprinter import Printer, PrinterReleasedError, RulePositionError, plural
from i18nprinter.diagnostics import DiagnosticCode

ITEM_RULES = plural("[1]d=1", "you have one item", "[1]d>1", "you have %d items")


@pytest.fixture
def printer() -> Printer:
    """Unpooled printer bound to en-US."""
    return Printer("en-US")


class TestRenderToString:
    """render_to_string with and without rules."""

    def test_one_item(self, printer: Printer) -> None:
        """Argument 1 selects the singular template."""
        assert printer.render_to_string("you have no items", 1, ITEM_RULES) == "you have one item"

    def test_many_items_localized(self, printer: Printer) -> None:
        """The plural template renders its count with grouping."""
        assert printer.render_to_string("no items", 1500, ITEM_RULES) == "you have 1,500 items"

    def test_no_match_renders_default_with_arguments(self, printer: Printer) -> None:
        """Without a match, the default format sees every argument."""
        assert printer.render_to_string("you have %d items", 0, ITEM_RULES) == "you have 0 items"

    def test_rules_keyword(self, printer: Printer) -> None:
        """Rules may be passed explicitly."""
        assert printer.render_to_string("none", 7, rules=ITEM_RULES) == "you have 7 items"

    def test_without_rules(self, printer: Printer) -> None:
        """Plain calls behave like the engine."""
        assert printer.render_to_string("%s: %.1f", "total", 1234.5) == "total: 1,234.5"

    def test_german_locale(self) -> None:
        """Printers format with their bound locale."""
        assert Printer("de-DE").render_to_string("%.2f", 1234.5) == "1.234,50"

    def test_rule_errors_propagate(self, printer: Printer) -> None:
        """Rule evaluation errors abort the call."""
        with pytest.raises(RulePositionError):
            printer.render_to_string("x", plural("[3]d=1", "y"))


class TestRenderToWriter:
    """render_to_writer returns (count, error)."""

    def test_text_destination(self, printer: Printer) -> None:
        """Text streams receive the rendered string."""
        buffer = io.StringIO()
        assert printer.render_to_writer(buffer, "none", 1, ITEM_RULES) == (17, None)
        assert buffer.getvalue() == "you have one item"

    def test_binary_destination(self, printer: Printer) -> None:
        """Binary streams receive UTF-8 bytes."""
        buffer = io.BytesIO()
        count, error = printer.render_to_writer(buffer, "%d", 2000)
        assert (count, error) == (5, None)
        assert buffer.getvalue() == b"2,000"

    def test_write_failure_returned(self, printer: Printer) -> None:
        """Write failures come back as the error element."""
        buffer = io.StringIO()
        buffer.close()
        count, error = printer.render_to_writer(buffer, "x")
        assert count == 0
        assert isinstance(error, ValueError)


class TestRenderInPlace:
    """render_in_place writes to standard output."""

    def test_writes_to_stdout(self, printer: Printer, capsys: pytest.CaptureFixture[str]) -> None:
        """Output goes to sys.stdout without a trailing newline."""
        printer.render_in_place("none", 3, ITEM_RULES)
        assert capsys.readouterr().out == "you have 3 items"


class TestLifecycle:
    """Released printers refuse to render."""

    def test_close_unbinds(self, printer: Printer) -> None:
        """An unpooled printer is unbound by close()."""
        printer.close()
        assert not printer.is_bound

    @pytest.mark.parametrize(
        "call",
        [
            lambda p: p.render_to_string("x"),
            lambda p: p.render_to_writer(io.StringIO(), "x"),
            lambda p: p.render_in_place("x"),
            lambda p: p.locale,
        ],
    )
    def test_released_printer_raises(self, printer: Printer, call: object) -> None:
        """Every operation on a released printer raises PrinterReleasedError."""
        printer.close()
        with pytest.raises(PrinterReleasedError) as exc_info:
            call(printer)  # type: ignore[operator]
        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code == DiagnosticCode.PRINTER_RELEASED

    def test_double_close_raises(self, printer: Printer) -> None:
        """Closing twice is a caller bug."""
        printer.close()
        with pytest.raises(PrinterReleasedError, match="already released"):
            printer.close()

    def test_rebind_after_close(self, printer: Printer) -> None:
        """bind() makes a released printer usable again."""
        printer.close()
        printer.bind("de-DE")
        assert printer.render_to_string("%d", 1000) == "1.000"

    def test_context_manager_closes(self) -> None:
        """Leaving the with block releases the printer."""
        with Printer("en-US") as printer:
            assert printer.render_to_string("%d", 1) == "1"
        assert not printer.is_bound

    def test_unbound_construction(self) -> None:
        """Printer() without a locale starts unbound."""
        assert not Printer().is_bound
        assert Printer().pool is None

    def test_locale_code_is_requested_spelling(self) -> None:
        """locale_code reports this printer's spelling, not the cached one."""
        assert Printer("en_US").locale_code == "en_US"
        assert Printer("en-US").locale_code == "en-US"

    def test_locale_code_after_close(self, printer: Printer) -> None:
        """A released printer has no locale code."""
        printer.close()
        with pytest.raises(PrinterReleasedError):
            _ = printer.locale_code

    def test_repr(self) -> None:
        """repr shows the locale or the released state."""
        printer = Printer("de-DE")
        assert repr(printer) == "Printer(locale='de-DE')"
        printer.close()
        assert repr(printer) == "Printer(<released>)"


class TestConcurrency:
    """Overlapping calls on one printer are serialized."""

    def test_concurrent_renders_are_consistent(self, printer: Printer) -> None:
        """Many threads rendering on one printer all get correct output."""
        results: list[str] = []
        results_lock = threading.Lock()

        def worker(count: int) -> None:
            rendered = printer.render_to_string("none", count, ITEM_RULES)
            with results_lock:
                results.append(rendered)

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(2, 42)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert sorted(results) == sorted(f"you have {n} items" for n in range(2, 42))
