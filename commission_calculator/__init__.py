"""
Commission calculator.

Computes the commission fee owed on an order from its total lines,
a set of flat or percentage rules and the split/include conditions
that shape the taxable base.
"""

from commission_calculator.config import Settings, get_settings
from commission_calculator.models import (
    CalculatedRule,
    CalculatorConfigurationError,
    CommissionError,
    CommissionResult,
    FeeType,
    InvalidConditionError,
    InvalidRecordError,
    InvalidRuleError,
    InvalidTotalError,
    MatchType,
    Operator,
    Rule,
    RuleCondition,
    SplitAction,
    SplitCondition,
    TotalLine,
)
from commission_calculator.services import CommissionCalculator, calculate_commission

__version__ = "0.1.0"
