"""
Per-class grading rules.

A class's rules are applied as an ordered fold: each rule object is a pure
``assignments -> assignments`` transform and later rules see the output of
earlier ones. New rule types only need an entry in ``RULE_TYPES``.
"""
from __future__ import annotations

import logging
import typing as t
from dataclasses import dataclass

from grade_engine.coercion import to_number
from grade_engine.models import Assignment, RuleConfig

logger = logging.getLogger(__name__)


class GradingRule(t.Protocol):
    def apply(self, assignments: list[Assignment]) -> list[Assignment]:
        ...


def score_ratio(assignment: Assignment) -> float:
    """``grade / total``, or 0 for an assignment worth no points."""
    if assignment.total == 0:
        return 0.0
    return assignment.grade / assignment.total


@dataclass(frozen=True)
class DropLowestRule:
    """Drops the ``count`` lowest-scoring assignments of one category."""
    category: str
    count: int = 1

    @classmethod
    def from_config(cls, config: RuleConfig) -> "DropLowestRule":
        count = int(to_number(config.count))
        # Unset, non-numeric and non-positive counts all mean "drop one".
        return cls(category=config.category, count=count if count >= 1 else 1)

    def apply(self, assignments: list[Assignment]) -> list[Assignment]:
        in_category = [a for a in assignments if a.category == self.category]
        if not in_category:
            return list(assignments)
        # sorted() is stable, so equal ratios keep their original order
        lowest = sorted(in_category, key=score_ratio)[:self.count]
        dropped = {id(a) for a in lowest}
        return [a for a in assignments if id(a) not in dropped]


RULE_TYPES: dict[str, t.Callable[[RuleConfig], GradingRule]] = {
    "DROP_LOWEST": DropLowestRule.from_config,
}


def build_rules(configs: t.Iterable[t.Union[GradingRule, RuleConfig]]) -> list[GradingRule]:
    """Turns stored rule configs into rule objects, skipping unknown types.

    Items that already are rule objects are passed through unchanged.
    """
    rules: list[GradingRule] = []
    for config in configs:
        if not isinstance(config, RuleConfig):
            rules.append(config)
            continue
        factory = RULE_TYPES.get(config.type)
        if factory is None:
            logger.debug("Skipping unknown grading rule type %r", config.type)
            continue
        rules.append(factory(config))
    return rules


def apply_rules(
        assignments: t.Iterable[Assignment],
        rules: t.Iterable[t.Union[GradingRule, RuleConfig]],
) -> list[Assignment]:
    """Applies rules in order, each to the output of the previous one.

    :param assignments: The countable assignments of one class.
    :param rules: Rule objects, or stored RuleConfigs to build them from.
    :return: The assignments that remain after every rule ran.
    """
    working = list(assignments)
    for rule in build_rules(rules):
        working = rule.apply(working)
    return working
