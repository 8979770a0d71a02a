"""Hypothesis strategies for i18nprinter property-based testing.

Strategies are organized by domain:

- plural: PluralRule, RuleSet, expression syntax and template strategies

Usage:
    from tests.strategies import plural_rules, rule_sets
    from tests.strategies.plural import percent_templates
"""

from .plural import (
    operators,
    percent_templates,
    plain_args,
    plain_templates,
    plural_rules,
    positions,
    rule_expressions,
    rule_sets,
    thresholds,
)

__all__ = [
    "operators",
    "percent_templates",
    "plain_args",
    "plain_templates",
    "plural_rules",
    "positions",
    "rule_expressions",
    "rule_sets",
    "thresholds",
]
