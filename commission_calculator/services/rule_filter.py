"""
Rule filter — decides whether a rule applies to an order.
"""

import logging
from decimal import Decimal
from typing import Any, Callable, Optional

from commission_calculator.models import InvalidRuleError, MatchType, Rule
from commission_calculator.services.condition_evaluator import evaluate_conditions

logger = logging.getLogger(__name__)

BeforeFilterHook = Callable[[Rule, Decimal], bool]


def _threshold(rule: Rule) -> Decimal:
    if rule.total is None:
        raise InvalidRuleError(f"match_type '{rule.match_type}' requires a total threshold")
    return rule.total


def rule_matches(
    rule: Rule,
    order_total: Decimal,
    order: Any = None,
    before_filter: Optional[BeforeFilterHook] = None,
    numeric_comparison: bool = False,
) -> bool:
    """
    Check a single rule against the order.

    Priority:
    1. before_filter hook returning True vetoes the rule
    2. Condition list, when non-empty, decides alone
    3. "below" threshold: order_total < total (strict)
    4. "above" threshold: order_total >= total (inclusive)
    5. Otherwise the rule matches unconditionally
    """
    if before_filter is not None and before_filter(rule, order_total):
        logger.debug(f"Rule {rule!r} vetoed by before_filter")
        return False

    if rule.has_conditions:
        return evaluate_conditions(rule.conditions, order, numeric_comparison)

    if rule.match_type == MatchType.BELOW:
        return order_total < _threshold(rule)

    if rule.match_type == MatchType.ABOVE:
        return order_total >= _threshold(rule)

    return True
