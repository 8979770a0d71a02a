"""Tests for the plural rule compiler.

Covers the expression grammar, best-effort pair skipping, RuleSet behavior
and PluralRule invariants.
"""

from __future__ import annotations

import logging

import pytest
from hypothesis import given
from hypothesis import strategies as st

from i18nprinter.runtime.plural_rules import PluralRule, RuleSet, plural
from tests.strategies.plural import plural_rules, rule_expressions

# ============================================================================
# Grammar
# ============================================================================


class TestExpressionGrammar:
    """Recognized and rejected expression forms."""

    def test_equality_expression(self) -> None:
        """'[1]d=1' compiles to position 1, '=', threshold 1."""
        (rule,) = plural("[1]d=1", "one")
        assert rule == PluralRule(1, "=", 1, "one")

    def test_greater_than_expression(self) -> None:
        """'[2]d>3' compiles to position 2, '>', threshold 3."""
        (rule,) = plural("[2]d>3", "many")
        assert rule == PluralRule(2, ">", 3, "many")

    def test_whitespace_around_operator(self) -> None:
        """Whitespace on either side of the operator is tolerated."""
        (rule,) = plural("[1]d = 10", "ten")
        assert (rule.position, rule.operator, rule.threshold) == (1, "=", 10)

    def test_verb_prefix_is_allowed(self) -> None:
        """Text before the bracket (such as a '%') is ignored."""
        (rule,) = plural("%[3]d>0", "some")
        assert rule.position == 3

    def test_multi_digit_position_and_threshold(self) -> None:
        """Positions and thresholds may have several digits."""
        (rule,) = plural("[12]d>1000", "lots")
        assert (rule.position, rule.threshold) == (12, 1000)

    @pytest.mark.parametrize(
        "expression",
        [
            "bad-expr",
            "[1]d<1",  # unsupported operator
            "[1]d>=1",  # unsupported operator
            "[1]d=1 ",  # threshold not anchored at the end
            "[1]d=x",
            "[x]d=1",
            "[1]=1",  # missing placeholder character
            "[1]dd=1",  # two placeholder characters
            "1d=1",
            "",
            "[0]d=1",  # positions are 1-indexed
            "[1]d=-1",
            "[1]d=١",  # non-ASCII digit
        ],
    )
    def test_malformed_expression_produces_no_rule(self, expression: str) -> None:
        """Expressions outside the grammar are dropped silently."""
        assert len(plural(expression, "template")) == 0

    def test_non_string_expression_is_malformed(self) -> None:
        """Non-string expression values are skipped, not raised."""
        assert len(plural(1, "template", None, "other")) == 0


# ============================================================================
# Pair handling
# ============================================================================


class TestPairHandling:
    """Pairwise consumption and best-effort skipping."""

    def test_scenario_malformed_first_pair(self) -> None:
        """bad-expr/X dropped; [2]d=1/Y becomes the only rule."""
        rules = plural("bad-expr", "X", "[2]d=1", "Y")
        assert list(rules) == [PluralRule(2, "=", 1, "Y")]

    def test_template_after_malformed_expression_is_not_an_expression(self) -> None:
        """A template that looks like an expression is never re-read as one."""
        rules = plural("bad", "[1]d=1", "T")
        assert len(rules) == 0

    def test_order_is_preserved(self) -> None:
        """Rules appear in the order of their source pairs."""
        rules = plural("[1]d=1", "a", "[1]d>1", "b", "[2]d=0", "c")
        assert [rule.template for rule in rules] == ["a", "b", "c"]

    def test_empty_input(self) -> None:
        """No cases compile to an empty RuleSet."""
        rules = plural()
        assert isinstance(rules, RuleSet)
        assert len(rules) == 0

    def test_odd_trailing_item_ignored(self) -> None:
        """An unpaired trailing item is ignored without error."""
        rules = plural("[1]d=1", "one", "[1]d>1")
        assert len(rules) == 1

    def test_single_item_ignored(self) -> None:
        """A lone expression without template yields nothing."""
        assert len(plural("[1]d=1")) == 0

    def test_non_string_template_raises(self) -> None:
        """A well-formed expression paired with a non-string template is a caller bug."""
        with pytest.raises(TypeError, match="must be a str"):
            plural("[1]d=1", 42)

    def test_malformed_pair_logged_at_debug(self, caplog: pytest.LogCaptureFixture) -> None:
        """Dropped pairs are logged, not raised."""
        with caplog.at_level(logging.DEBUG, logger="i18nprinter.runtime.plural_rules"):
            plural("nope", "X")
        assert "Skipping malformed plural expression 'nope'" in caplog.text


# ============================================================================
# RuleSet and PluralRule
# ============================================================================


class TestRuleSet:
    """RuleSet sequence behavior."""

    def test_indexing_and_slicing(self) -> None:
        """Integer indexing returns rules; slicing returns RuleSet."""
        rules = plural("[1]d=1", "a", "[1]d>1", "b")
        assert rules[1].template == "b"
        assert isinstance(rules[:1], RuleSet)
        assert len(rules[:1]) == 1

    def test_equality_and_hash(self) -> None:
        """RuleSets with equal rules compare and hash equal."""
        first = plural("[1]d=1", "a")
        second = plural("[1]d=1", "a")
        assert first == second
        assert hash(first) == hash(second)

    def test_not_equal_to_list(self) -> None:
        """A RuleSet is not equal to a plain list of the same rules."""
        rules = plural("[1]d=1", "a")
        assert rules != list(rules)

    def test_repr_lists_rules(self) -> None:
        """repr shows the contained rules."""
        assert repr(plural("[1]d=1", "a")).startswith("RuleSet([PluralRule(")


class TestPluralRule:
    """PluralRule invariants and matching."""

    def test_equality_match(self) -> None:
        """'=' matches only the exact threshold."""
        rule = PluralRule(1, "=", 1, "one")
        assert rule.matches(1)
        assert not rule.matches(2)
        assert not rule.matches(0)

    def test_greater_than_match(self) -> None:
        """'>' is strictly greater."""
        rule = PluralRule(1, ">", 1, "many")
        assert rule.matches(2)
        assert not rule.matches(1)

    def test_frozen(self) -> None:
        """Rules are immutable."""
        rule = PluralRule(1, "=", 1, "one")
        with pytest.raises(AttributeError):
            rule.threshold = 2  # type: ignore[misc]

    @pytest.mark.parametrize(
        ("position", "operator", "threshold"),
        [(0, "=", 1), (1, "<", 1), (1, "=", -1)],
    )
    def test_invalid_construction(self, position: int, operator: str, threshold: int) -> None:
        """Direct construction enforces the compiler's invariants."""
        with pytest.raises(ValueError, match="PluralRule"):
            PluralRule(position, operator, threshold, "x")  # type: ignore[arg-type]


# ============================================================================
# Properties
# ============================================================================


class TestCompilerProperties:
    """Property-based checks of the compiler."""

    @given(st.data(), st.lists(plural_rules(), max_size=6))
    def test_one_rule_per_well_formed_pair(
        self, data: st.DataObject, rules: list[PluralRule]
    ) -> None:
        """Every well-formed pair yields exactly one rule, in order."""
        cases: list[str] = []
        for rule in rules:
            cases.extend((data.draw(rule_expressions(rule)), rule.template))

        assert list(plural(*cases)) == rules

    @given(st.lists(plural_rules(), max_size=4), st.text(max_size=20))
    def test_malformed_pairs_do_not_disturb_neighbors(
        self, rules: list[PluralRule], junk_template: str
    ) -> None:
        """Interleaving malformed pairs leaves the valid rules unchanged."""
        cases: list[object] = []
        for rule in rules:
            cases.extend(("not an expression", junk_template))
            cases.extend((f"[{rule.position}]d{rule.operator}{rule.threshold}", rule.template))

        assert list(plural(*cases)) == rules
