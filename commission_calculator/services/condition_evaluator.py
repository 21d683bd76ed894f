"""
Condition evaluator — checks rule conditions against order attributes.

Conditions run in ascending priority and are combined with AND: the first
failing condition stops evaluation. Both sides are trimmed and lowercased
before comparison.

Ordering operators (greater, less, equals_or_*) compare the normalized
strings lexicographically, so "9" > "10". Deployments whose attributes are
always numeric can opt into decimal comparison with
numeric_condition_comparison.
"""

import logging
import operator as op
from collections.abc import Mapping
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Dict, Optional, Sequence, Tuple

from commission_calculator.models import Operator, RuleCondition

logger = logging.getLogger(__name__)


_ORDERING_CHECKS: Dict[str, Callable[[Any, Any], bool]] = {
    Operator.GREATER.value: op.gt,
    Operator.LESS.value: op.lt,
    Operator.EQUALS_OR_GREATER.value: op.ge,
    Operator.EQUALS_OR_LESS.value: op.le,
}

_TEXT_CHECKS: Dict[str, Callable[[str, str], bool]] = {
    Operator.IS.value: lambda model_value, value: model_value == value,
    Operator.IS_NOT.value: lambda model_value, value: model_value != value,
    Operator.CONTAINS.value: lambda model_value, value: value in model_value,
    Operator.DOES_NOT_CONTAIN.value: lambda model_value, value: value not in model_value,
}


def normalize_value(value: Any) -> str:
    """Trim and lowercase a raw value. None reads as an empty string."""
    if value is None:
        return ""
    return str(value).strip().lower()


def get_order_attribute(order: Any, attribute: str) -> str:
    """
    Resolve a normalized attribute value from the order.

    Lookup order:
    1. order.get_attribute(name) when the order provides it
    2. Mapping access for dict-like orders
    3. Plain attribute access (ORM rows, dataclasses...)

    Lookup failures (KeyError, AttributeError...) propagate to the caller.
    """
    getter = getattr(order, "get_attribute", None)
    if callable(getter):
        value = getter(attribute)
    elif isinstance(order, Mapping):
        value = order[attribute]
    else:
        value = getattr(order, attribute)
    return normalize_value(value)


def _as_decimals(model_value: str, condition_value: str) -> Optional[Tuple[Decimal, Decimal]]:
    try:
        left, right = Decimal(model_value), Decimal(condition_value)
    except InvalidOperation:
        return None
    if not (left.is_finite() and right.is_finite()):
        return None
    return left, right


def evaluate_condition(
    condition: RuleCondition,
    order: Any,
    numeric_comparison: bool = False,
) -> bool:
    """Evaluate a single condition. Unrecognized operators evaluate to False."""
    model_value = get_order_attribute(order, condition.attribute)
    condition_value = normalize_value(condition.value)

    text_check = _TEXT_CHECKS.get(condition.operator)
    if text_check is not None:
        return text_check(model_value, condition_value)

    ordering_check = _ORDERING_CHECKS.get(condition.operator)
    if ordering_check is not None:
        if numeric_comparison:
            numbers = _as_decimals(model_value, condition_value)
            if numbers is not None:
                return ordering_check(*numbers)
        return ordering_check(model_value, condition_value)

    logger.warning(f"Unknown condition operator '{condition.operator}' on attribute '{condition.attribute}'")
    return False


def evaluate_conditions(
    conditions: Sequence[RuleCondition],
    order: Any,
    numeric_comparison: bool = False,
) -> bool:
    """
    Evaluate conditions in ascending priority with short-circuit AND.

    The sort is stable, so conditions sharing a priority keep their given
    order. An empty list evaluates to True.
    """
    ordered = sorted(conditions, key=lambda condition: condition.priority)
    return all(
        evaluate_condition(condition, order, numeric_comparison)
        for condition in ordered
    )
