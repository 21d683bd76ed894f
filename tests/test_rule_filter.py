"""
Tests for rule matching: veto hook, conditions and thresholds.
"""

from decimal import Decimal
from types import SimpleNamespace

import pytest

from commission_calculator.models import InvalidRuleError, Rule
from commission_calculator.services.rule_filter import rule_matches


def _make_rule(**kwargs):
    defaults = {"fee_type": "flat", "fee": "5.00"}
    defaults.update(kwargs)
    return Rule.coerce(defaults)


def _make_order(**kwargs):
    defaults = {"order_type": "delivery"}
    defaults.update(kwargs)
    return SimpleNamespace(**defaults)


class TestThresholds:
    def test_above_is_inclusive(self):
        rule = _make_rule(match_type="above", total="100")
        assert rule_matches(rule, Decimal("100.00")) is True
        assert rule_matches(rule, Decimal("99.99")) is False

    def test_below_is_exclusive(self):
        rule = _make_rule(match_type="below", total="100")
        assert rule_matches(rule, Decimal("100.00")) is False
        assert rule_matches(rule, Decimal("99.99")) is True

    def test_legacy_type_key(self):
        rule = _make_rule(type="below", total="10")
        assert rule.match_type == "below"
        assert rule_matches(rule, Decimal("20.00")) is False

    def test_unknown_match_type_matches_unconditionally(self):
        rule = _make_rule(match_type="between", total="100")
        assert rule_matches(rule, Decimal("0.00")) is True

    def test_no_threshold_matches_unconditionally(self):
        assert rule_matches(_make_rule(), Decimal("0.00")) is True

    def test_threshold_without_total_is_invalid(self):
        with pytest.raises(InvalidRuleError):
            rule_matches(_make_rule(match_type="above"), Decimal("10.00"))


class TestConditions:
    def test_conditions_take_precedence_over_threshold(self):
        rule = _make_rule(
            match_type="above",
            total="1000",
            conditions=[{"attribute": "order_type", "operator": "is", "value": "delivery"}],
        )
        assert rule_matches(rule, Decimal("10.00"), order=_make_order()) is True

    def test_failing_condition_rejects_rule(self):
        rule = _make_rule(conditions=[{"attribute": "order_type", "operator": "is", "value": "pickup"}])
        assert rule_matches(rule, Decimal("10.00"), order=_make_order()) is False

    def test_empty_condition_list_falls_back_to_threshold(self):
        rule = _make_rule(match_type="above", total="50", conditions=[])
        assert rule_matches(rule, Decimal("10.00"), order=_make_order()) is False


class TestBeforeFilter:
    def test_true_vetoes_the_rule(self):
        calls = []

        def veto(rule, order_total):
            calls.append((rule, order_total))
            return True

        rule = _make_rule()
        assert rule_matches(rule, Decimal("10.00"), before_filter=veto) is False
        assert calls == [(rule, Decimal("10.00"))]

    def test_false_lets_normal_matching_continue(self):
        rule = _make_rule(match_type="above", total="50")
        assert rule_matches(rule, Decimal("60.00"), before_filter=lambda r, t: False) is True
        assert rule_matches(rule, Decimal("40.00"), before_filter=lambda r, t: False) is False

    def test_hook_errors_propagate(self):
        def broken(rule, order_total):
            raise RuntimeError("hook failed")

        with pytest.raises(RuntimeError):
            rule_matches(_make_rule(), Decimal("1.00"), before_filter=broken)
