"""
Tests for record validation at the calculator boundary.
"""

from decimal import Decimal
from types import SimpleNamespace

import pytest

from commission_calculator.models import (
    FeeType,
    InvalidConditionError,
    InvalidRuleError,
    InvalidTotalError,
    Rule,
    RuleCondition,
    SplitCondition,
    TotalLine,
)


class TestRule:
    def test_from_dict(self):
        rule = Rule.coerce({"fee_type": "percent", "fee": 12.5, "type": "above", "total": "10"})
        assert rule.fee_type is FeeType.PERCENT
        assert rule.fee == Decimal("12.5")
        assert rule.match_type == "above"
        assert rule.total == Decimal("10")
        assert rule.conditions is None

    def test_from_attribute_object(self):
        row = SimpleNamespace(
            fee_type="flat",
            fee=Decimal("3"),
            match_type=None,
            total=None,
            conditions=[SimpleNamespace(attribute="status", operator="is", value="paid", priority=1)],
        )
        rule = Rule.coerce(row)
        assert rule.conditions[0].attribute == "status"

    def test_unknown_fee_type_is_invalid(self):
        with pytest.raises(InvalidRuleError) as exc_info:
            Rule.coerce({"fee_type": "fixed", "fee": "1"})
        assert "fee_type" in str(exc_info.value)

    def test_rules_are_immutable(self):
        rule = Rule.coerce({"fee_type": "flat", "fee": "1"})
        with pytest.raises(Exception):
            rule.fee = Decimal("2")

    def test_invalid_nested_condition_reports_condition_error(self):
        with pytest.raises(InvalidConditionError):
            Rule.coerce({"fee_type": "flat", "fee": "1", "conditions": [{"operator": "is"}]})

    def test_invalid_errors_are_value_errors(self):
        with pytest.raises(ValueError):
            Rule.coerce({"fee_type": "flat"})


class TestRuleCondition:
    def test_value_defaults_and_stringifies(self):
        assert RuleCondition.coerce({"attribute": "a", "operator": "is"}).value == ""
        assert RuleCondition.coerce({"attribute": "a", "operator": "is", "value": None}).value == ""
        assert RuleCondition.coerce({"attribute": "a", "operator": "is", "value": 10}).value == "10"

    def test_priority_defaults_to_zero(self):
        assert RuleCondition.coerce({"attribute": "a", "operator": "is"}).priority == 0

    def test_fractional_priority(self):
        condition = RuleCondition.coerce({"attribute": "a", "operator": "is", "value": "x", "priority": 1.5})
        assert condition.priority == Decimal("1.5")

    def test_null_priority_reads_as_zero(self):
        condition = RuleCondition.coerce({"attribute": "a", "operator": "is", "priority": None})
        assert condition.priority == Decimal("0")

    def test_missing_attribute(self):
        with pytest.raises(InvalidConditionError):
            RuleCondition.coerce({"operator": "is", "value": "x"})


class TestTotals:
    def test_total_line_from_float(self):
        assert TotalLine.coerce({"code": "subtotal", "value": 19.99}).value == Decimal("19.99")

    def test_total_line_missing_value(self):
        with pytest.raises(InvalidTotalError):
            TotalLine.coerce({"code": "subtotal"})

    def test_split_condition_missing_code(self):
        with pytest.raises(InvalidConditionError):
            SplitCondition.coerce({"action": "split"})
