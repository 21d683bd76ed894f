"""
Commission calculator — orchestrates the fee pipeline for one order.

Pipeline:
1. Aggregate the taxable base (order total) from the order's total lines
2. Compute every rule's fee against that base
3. Keep the rules that match the order (before_filter hook can veto)
4. Sum the matched fees, notifying on_rule_matched for each one

Usage:
    result = (
        CommissionCalculator.create()
        .use_order(order)
        .with_rules(rules)
        .with_conditions(conditions)
        .with_totals(totals)
        .calculate()
    )
"""

import logging
from decimal import Decimal
from typing import Any, Callable, Iterable, List, Optional

from commission_calculator.config import Settings, get_settings
from commission_calculator.models import (
    CalculatedRule,
    CalculatorConfigurationError,
    CommissionResult,
    Rule,
    SplitCondition,
    TotalLine,
)
from commission_calculator.services.order_total_aggregator import aggregate_base
from commission_calculator.services.rule_filter import BeforeFilterHook, rule_matches
from commission_calculator.services.rule_processor import process_rule

logger = logging.getLogger(__name__)

RuleMatchedHook = Callable[[CalculatedRule, Decimal], Any]


class CommissionCalculator:
    """
    Chainable calculator for the commission fee owed on one order.

    Every setter returns the calculator itself. calculate() may be called
    again after reconfiguring; each call starts from scratch.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()

        self._order: Any = None
        self._rules: Optional[List[Any]] = None
        self._conditions: List[Any] = []
        self._totals: Optional[List[Any]] = None
        self._on_rule_matched: Optional[RuleMatchedHook] = None
        self._before_filter: Optional[BeforeFilterHook] = None

        self._result: Optional[CommissionResult] = None
        self._matched_rules: List[CalculatedRule] = []
        self._running_fee = Decimal("0.00")

    @classmethod
    def create(cls, settings: Optional[Settings] = None) -> "CommissionCalculator":
        return cls(settings)

    # ---- Configuration ----

    def use_order(self, order: Any) -> "CommissionCalculator":
        self._order = order
        return self

    def with_rules(self, rules: Iterable[Any]) -> "CommissionCalculator":
        self._rules = list(rules)
        return self

    def with_conditions(self, conditions: Optional[Iterable[Any]]) -> "CommissionCalculator":
        self._conditions = list(conditions or [])
        return self

    def with_totals(self, totals: Iterable[Any]) -> "CommissionCalculator":
        self._totals = list(totals)
        return self

    def on_rule_matched(self, callback: Optional[RuleMatchedHook]) -> "CommissionCalculator":
        """Observer called with (rule, order_total) for each matched rule."""
        self._on_rule_matched = callback
        return self

    def before_filter(self, callback: Optional[BeforeFilterHook]) -> "CommissionCalculator":
        """Veto hook: returning True for (rule, order_total) excludes the rule."""
        self._before_filter = callback
        return self

    # ---- Results ----

    @property
    def result(self) -> Optional[CommissionResult]:
        return self._result

    @property
    def order_total(self) -> Optional[Decimal]:
        return self._result.order_total if self._result else None

    @property
    def calculated_fee(self) -> Optional[Decimal]:
        return self._result.calculated_fee if self._result else None

    @property
    def matched_rules(self) -> List[CalculatedRule]:
        return list(self._matched_rules)

    @property
    def running_fee(self) -> Decimal:
        """Fees added so far by the current (or last) reduction."""
        return self._running_fee

    # ---- Calculation ----

    def _check_configured(self) -> None:
        missing = [
            name
            for name, value in (("order", self._order), ("rules", self._rules), ("totals", self._totals))
            if value is None
        ]
        if missing:
            raise CalculatorConfigurationError(
                f"Calculator is missing required configuration: {', '.join(missing)}"
            )

    def calculate(self) -> CommissionResult:
        """Run the pipeline once and return the CommissionResult."""
        self._check_configured()
        self._result = None
        self._matched_rules = []
        self._running_fee = Decimal("0.00")

        rules = [Rule.coerce(rule) for rule in self._rules]
        conditions = [SplitCondition.coerce(condition) for condition in self._conditions]
        totals = [TotalLine.coerce(total) for total in self._totals]

        order_total = aggregate_base(totals, conditions, base_code=self.settings.base_total_code)
        logger.debug(f"Order total (taxable base): {order_total}")

        calculated_rules = [
            process_rule(rule, order_total, totals, conditions)
            for rule in rules
        ]

        matched_rules = [
            rule
            for rule in calculated_rules
            if rule_matches(
                rule,
                order_total,
                order=self._order,
                before_filter=self._before_filter,
                numeric_comparison=self.settings.numeric_condition_comparison,
            )
        ]

        for rule in matched_rules:
            if self._on_rule_matched is not None:
                self._on_rule_matched(rule, order_total)
            logger.debug(f"Rule matched: {rule!r} -> {rule.calculated_fee}")
            self._running_fee += rule.calculated_fee
        calculated_fee = self._running_fee

        self._matched_rules = matched_rules
        self._result = CommissionResult(order_total=order_total, calculated_fee=calculated_fee)

        logger.info(
            f"Commission calculated: {len(matched_rules)}/{len(rules)} rules matched, "
            f"order_total={order_total}, fee={calculated_fee}"
        )
        return self._result


def calculate_commission(
    order: Any,
    rules: Iterable[Any],
    conditions: Optional[Iterable[Any]],
    totals: Iterable[Any],
    *,
    on_rule_matched: Optional[RuleMatchedHook] = None,
    before_filter: Optional[BeforeFilterHook] = None,
    settings: Optional[Settings] = None,
) -> CommissionResult:
    """Compute the commission for one order in a single call."""
    return (
        CommissionCalculator.create(settings)
        .use_order(order)
        .with_rules(rules)
        .with_conditions(conditions)
        .with_totals(totals)
        .on_rule_matched(on_rule_matched)
        .before_filter(before_filter)
        .calculate()
    )
