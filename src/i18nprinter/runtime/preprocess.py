"""Argument preprocessing for plural-aware formatting.

Rewrites a ``(format, args)`` pair before it reaches the formatting engine:

1. Find the rule set: the explicit ``rules`` argument, or a RuleSet passed
   as the last positional argument.
2. Evaluate rules first-match-wins against the original arguments; a match
   replaces the format with the rule's template.
3. Truncate the arguments to as many leading values as the final format has
   ``%`` markers.

Without a rule set the inputs pass through unchanged.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from i18nprinter.constants import PLACEHOLDER_MARKER
from i18nprinter.diagnostics import ErrorTemplate, RuleArgumentTypeError, RulePositionError

from .plural_rules import RuleSet

__all__ = ["preprocess", "select_template"]

logger = logging.getLogger(__name__)


def select_template(default: str, rules: RuleSet, args: Sequence[object]) -> str:
    """Return the template of the first matching rule, else ``default``.

    Only rules that are actually evaluated read their argument; rules after
    the first match are never checked.

    Args:
        default: Format used when no rule matches
        rules: Rules in evaluation order
        args: Original positional arguments (rule set excluded)

    Returns:
        Selected template

    Raises:
        RulePositionError: If a rule references a position beyond ``args``
        RuleArgumentTypeError: If a referenced argument is not an int
    """
    for rule in rules:
        if rule.position > len(args):
            raise RulePositionError(
                ErrorTemplate.rule_position_out_of_range(rule.position, len(args))
            )
        value = args[rule.position - 1]
        # bool is an int subclass but never a count
        if not isinstance(value, int) or isinstance(value, bool):
            raise RuleArgumentTypeError(
                ErrorTemplate.rule_argument_not_integer(rule.position, value)
            )
        if rule.matches(value):
            logger.debug(
                "Plural rule [%d]%s%d matched value %d",
                rule.position,
                rule.operator,
                rule.threshold,
                value,
            )
            return rule.template
    return default


def preprocess(
    format: str,  # noqa: A002 - mirrors the engine's parameter name
    args: Sequence[object],
    rules: RuleSet | None = None,
) -> tuple[str, tuple[object, ...]]:
    """Resolve plural rules and size the argument list for the engine.

    Args:
        format: Default format string
        args: Positional arguments; a trailing RuleSet is consumed as the
            rule set when ``rules`` is not given
        rules: Explicit rule set. It takes precedence over a trailing
            RuleSet, which is still removed from the arguments

    Returns:
        Tuple of (resolved_format, resolved_args)

    Raises:
        RulePositionError: If an evaluated rule references a missing argument
        RuleArgumentTypeError: If an evaluated rule references a non-int

    Examples:
        >>> from i18nprinter.runtime.plural_rules import plural
        >>> rules = plural("[1]d=1", "one item", "[1]d>1", "%d items")
        >>> preprocess("no items", (1, rules))
        ('one item', ())
        >>> preprocess("no items", (5,), rules=rules)
        ('%d items', (5,))
        >>> preprocess("%d items", (0, rules))
        ('%d items', (0,))
    """
    values = tuple(args)
    tail = values[-1] if values else None
    if isinstance(tail, RuleSet):
        values = values[:-1]
        if rules is None:
            rules = tail

    if rules is None:
        return format, values

    selected = select_template(format, rules, values)
    return selected, values[: selected.count(PLACEHOLDER_MARKER)]
