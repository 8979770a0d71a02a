"""Plural rule compiler.

Turns caller-supplied ``(expression, template)`` pairs into a RuleSet that
the argument preprocessor evaluates at formatting time.

Expression mini-language:
    ``[<position>]<c><op><threshold>``

    - position: 1-indexed argument to test
    - c: a single placeholder character (verb noise, usually ``d``)
    - op: ``=`` (equal) or ``>`` (strictly greater)
    - threshold: unsigned integer anchored at the end of the expression

    Whitespace is tolerated around the operator, and any text may precede
    the bracket, so ``"%[1]d = 1"`` and ``"[1]d=1"`` are equivalent.

Parsing is best-effort by contract: a pair whose expression does not match
the grammar is dropped whole and compilation continues with the next pair.
Templates may legitimately carry marker pairs that are not meant as rules.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from typing import Literal, overload

__all__ = ["PluralRule", "RuleSet", "plural"]

logger = logging.getLogger(__name__)

type Operator = Literal["=", ">"]

_EXPRESSION_RE = re.compile(r"\[([0-9]+)\][^=>]\s*([=>])\s*([0-9]+)\Z")


@dataclass(frozen=True, slots=True)
class PluralRule:
    """Select ``template`` when argument ``position`` satisfies the comparison.

    Attributes:
        position: 1-indexed position into the original argument list
        operator: ``"="`` for equality, ``">"`` for strictly greater
        threshold: Value the argument is compared against
        template: Format string used when the rule matches
    """

    position: int
    operator: Operator
    threshold: int
    template: str

    def __post_init__(self) -> None:
        """Validate rule invariants.

        Raises:
            ValueError: If position is not positive, threshold is negative,
                or operator is not one of ``=`` and ``>``.
        """
        if self.position < 1:
            msg = f"PluralRule.position must be >= 1 (1-indexed), got {self.position}"
            raise ValueError(msg)
        if self.threshold < 0:
            msg = f"PluralRule.threshold must be >= 0, got {self.threshold}"
            raise ValueError(msg)
        if self.operator not in ("=", ">"):
            msg = f"PluralRule.operator must be '=' or '>', got {self.operator!r}"
            raise ValueError(msg)

    def matches(self, value: int) -> bool:
        """Compare value against the threshold using the rule's operator."""
        if self.operator == "=":
            return value == self.threshold
        return value > self.threshold


class RuleSet(Sequence[PluralRule]):
    """Immutable, ordered collection of plural rules.

    Evaluated first-match-wins in sequence order. RuleSet is the only type
    the preprocessor recognizes as a trailing rule argument; plain lists and
    tuples passed as the last argument are ordinary formatting values.

    Example:
        >>> rules = plural("[1]d=1", "one item", "[1]d>1", "%d items")
        >>> len(rules)
        2
        >>> rules[0].template
        'one item'
    """

    __slots__ = ("_rules",)

    def __init__(self, rules: Sequence[PluralRule] = ()) -> None:
        self._rules: tuple[PluralRule, ...] = tuple(rules)

    @overload
    def __getitem__(self, index: int) -> PluralRule: ...

    @overload
    def __getitem__(self, index: slice) -> RuleSet: ...

    def __getitem__(self, index: int | slice) -> PluralRule | RuleSet:
        if isinstance(index, slice):
            return RuleSet(self._rules[index])
        return self._rules[index]

    def __len__(self) -> int:
        return len(self._rules)

    def __iter__(self) -> Iterator[PluralRule]:
        return iter(self._rules)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, RuleSet):
            return self._rules == other._rules
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._rules)

    def __repr__(self) -> str:
        return f"RuleSet({list(self._rules)!r})"


def _parse_expression(expression: object) -> tuple[int, Operator, int] | None:
    """Parse a plural expression into (position, operator, threshold).

    Returns None for anything outside the grammar, including non-string
    values and position 0.
    """
    if not isinstance(expression, str):
        return None
    match = _EXPRESSION_RE.search(expression)
    if match is None:
        return None
    position = int(match.group(1))
    if position < 1:
        return None
    operator: Operator = "=" if match.group(2) == "=" else ">"
    return position, operator, int(match.group(3))


def plural(*cases: object) -> RuleSet:
    """Compile interleaved ``(expression, template)`` pairs into a RuleSet.

    Pairs are consumed two at a time. A pair whose expression is malformed
    is skipped whole; its template is never reinterpreted as an expression.
    This departs from a sliding rescan that retries from the next item, so
    ``plural("bad", "[1]d=1", "T")`` yields no rules rather than one.
    A trailing unpaired item is ignored.

    Args:
        *cases: ``expression1, template1, expression2, template2, ...``

    Returns:
        RuleSet in source order (empty if no pair is well-formed)

    Raises:
        TypeError: If a well-formed expression is paired with a non-string
            template

    Examples:
        >>> rules = plural("[1]d=1", "you have one item", "[1]d>1", "you have %d items")
        >>> [(r.position, r.operator, r.threshold) for r in rules]
        [(1, '=', 1), (1, '>', 1)]

        >>> len(plural("bad-expr", "X", "[2]d=1", "Y"))
        1
    """
    rules: list[PluralRule] = []
    for index in range(0, len(cases) - 1, 2):
        expression, template = cases[index], cases[index + 1]
        parsed = _parse_expression(expression)
        if parsed is None:
            logger.debug("Skipping malformed plural expression %r", expression)
            continue
        if not isinstance(template, str):
            msg = (
                f"Plural template for {expression!r} must be a str, "
                f"got {type(template).__name__}"
            )
            raise TypeError(msg)
        position, operator, threshold = parsed
        rules.append(PluralRule(position, operator, threshold, template))

    if len(cases) % 2:
        logger.debug("Ignoring unpaired trailing plural case %r", cases[-1])

    return RuleSet(rules)
