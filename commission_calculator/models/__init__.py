"""
Pydantic records consumed and produced by the commission calculator.
"""

from commission_calculator.models.base import (
    CommissionModel,
    CommissionError,
    InvalidRecordError,
    InvalidRuleError,
    InvalidConditionError,
    InvalidTotalError,
    CalculatorConfigurationError,
)
from commission_calculator.models.total import TotalLine, SplitCondition, SplitAction
from commission_calculator.models.rule import (
    Rule,
    RuleCondition,
    CalculatedRule,
    FeeType,
    MatchType,
    Operator,
)
from commission_calculator.models.result import CommissionResult

__all__ = [
    "CommissionModel",
    "CommissionError",
    "InvalidRecordError",
    "InvalidRuleError",
    "InvalidConditionError",
    "InvalidTotalError",
    "CalculatorConfigurationError",
    "TotalLine",
    "SplitCondition",
    "SplitAction",
    "Rule",
    "RuleCondition",
    "CalculatedRule",
    "FeeType",
    "MatchType",
    "Operator",
    "CommissionResult",
]
