"""
Order total aggregation — builds the taxable base of an order.

The base is the sum of every total line whose code is the base code
("subtotal" by default) or is declared with a "split" condition.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Sequence

from commission_calculator.models import SplitAction, SplitCondition, TotalLine

MONEY_QUANTUM = Decimal("0.01")
DEFAULT_BASE_CODE = "subtotal"


def round_money(amount: Decimal) -> Decimal:
    """Round to 2 decimal places, half away from zero."""
    return Decimal(amount).quantize(MONEY_QUANTUM, rounding=ROUND_HALF_UP)


def sum_by_code(totals: Iterable[TotalLine], code: str) -> Decimal:
    """Unrounded sum of all total lines with the given code (0 when none match)."""
    return sum((line.value for line in totals if line.code == code), Decimal("0"))


def aggregate_base(
    totals: Sequence[TotalLine],
    split_conditions: Sequence[SplitCondition],
    base_code: str = DEFAULT_BASE_CODE,
) -> Decimal:
    """
    Compute the rounded taxable base (order total) of an order.

    Args:
        totals: the order's total lines
        split_conditions: conditions; only action "split" widens the base
        base_code: total code always part of the base

    Returns:
        Sum of the matching lines rounded to 2 decimals
    """
    codes = {condition.code for condition in split_conditions if condition.action == SplitAction.SPLIT}
    codes.add(base_code)

    base = sum((line.value for line in totals if line.code in codes), Decimal("0"))
    return round_money(base)
