"""
Rule processor — computes the fee a single rule would charge.
"""

import logging
from decimal import Decimal
from typing import Sequence

from commission_calculator.models import (
    CalculatedRule,
    FeeType,
    Rule,
    SplitAction,
    SplitCondition,
    TotalLine,
)
from commission_calculator.services.order_total_aggregator import round_money, sum_by_code

logger = logging.getLogger(__name__)


def base_fee(rule: Rule, order_total: Decimal) -> Decimal:
    """Percentage of the order total, or the flat fee, rounded to 2 decimals."""
    if rule.fee_type == FeeType.PERCENT:
        fee = rule.fee / Decimal("100") * order_total
    else:
        fee = rule.fee
    return round_money(fee)


def process_rule(
    rule: Rule,
    order_total: Decimal,
    totals: Sequence[TotalLine],
    include_conditions: Sequence[SplitCondition],
) -> CalculatedRule:
    """
    Compute the rule's fee and return it as a CalculatedRule copy.

    Every "include" condition adds the unrounded sum of its total code on
    top of the rounded base fee, in the given order. Other actions are skipped.
    """
    calculated_fee = base_fee(rule, order_total)
    for condition in include_conditions:
        if condition.action == SplitAction.INCLUDE:
            calculated_fee += sum_by_code(totals, condition.code)

    calculated_fee = round_money(calculated_fee)
    logger.debug(f"Rule {rule!r} calculated fee: {calculated_fee}")

    return CalculatedRule.model_validate({
        **rule.model_dump(),
        "calculated_fee": calculated_fee,
    })
