"""
Commission rule models.

A rule charges either a flat amount or a percentage of the taxable base.
It is gated by a threshold (match_type + total) or by an ordered list of
conditions on order attributes; the condition list wins when both are set.

Example:
  Rule(fee_type="percent", fee=10, match_type="above", total=50)
    → 10% of the base, only when the base is 50.00 or more
  Rule(fee_type="flat", fee=5, conditions=[
      {"attribute": "order_type", "operator": "is", "value": "delivery"},
  ])
    → 5.00 on delivery orders
"""

import enum
from decimal import Decimal
from typing import Any, ClassVar, List, Optional, Type

from pydantic import AliasChoices, ConfigDict, Field, ValidationError, field_validator

from commission_calculator.models.base import (
    CommissionModel,
    InvalidConditionError,
    InvalidRecordError,
    InvalidRuleError,
    describe_validation_error,
    to_decimal,
)


class FeeType(str, enum.Enum):
    PERCENT = "percent"
    FLAT = "flat"


class MatchType(str, enum.Enum):
    """Threshold comparisons. Any other value makes the rule match unconditionally."""

    BELOW = "below"
    ABOVE = "above"


class Operator(str, enum.Enum):
    """Operators understood by the condition evaluator. Others evaluate to False."""

    IS = "is"
    IS_NOT = "is_not"
    GREATER = "greater"
    LESS = "less"
    CONTAINS = "contains"
    DOES_NOT_CONTAIN = "does_not_contain"
    EQUALS_OR_GREATER = "equals_or_greater"
    EQUALS_OR_LESS = "equals_or_less"


class RuleCondition(CommissionModel):
    """A single test of an order attribute against a value."""

    error_class: ClassVar[Type[InvalidRecordError]] = InvalidConditionError

    attribute: str = Field(..., min_length=1)
    operator: str = Field(..., min_length=1)
    value: str = ""
    priority: Decimal = Decimal("0")

    @field_validator("value", mode="before")
    @classmethod
    def stringify_value(cls, v: Any) -> str:
        if v is None:
            return ""
        if isinstance(v, (int, float, Decimal)):
            return str(v)
        return v

    @field_validator("priority", mode="before")
    @classmethod
    def parse_priority(cls, v: Any):
        # Nullable column: unset priority reads as 0
        if v is None:
            return Decimal("0")
        return to_decimal(v)

    def __repr__(self) -> str:
        return (
            f"<RuleCondition(attribute='{self.attribute}', operator='{self.operator}', "
            f"value='{self.value}', priority={self.priority})>"
        )


class Rule(CommissionModel):
    """A commission policy. Unknown fields (id, name...) are kept as extras."""

    model_config = ConfigDict(extra="allow")

    error_class: ClassVar[Type[InvalidRecordError]] = InvalidRuleError

    fee_type: FeeType
    fee: Decimal
    # Stored as "type" by older rule tables
    match_type: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("match_type", "type"),
    )
    total: Optional[Decimal] = None
    conditions: Optional[List[RuleCondition]] = None

    @field_validator("fee", "total", mode="before")
    @classmethod
    def parse_amounts(cls, v):
        return to_decimal(v)

    @classmethod
    def error_for(cls, exc: ValidationError) -> InvalidRecordError:
        # Errors located inside the condition list are reported as condition errors
        errors = exc.errors()
        if errors and all(error.get("loc", ())[:1] == ("conditions",) for error in errors):
            return InvalidConditionError(describe_validation_error(exc), errors)
        return InvalidRuleError(describe_validation_error(exc), errors)

    @property
    def has_conditions(self) -> bool:
        return bool(self.conditions)


class CalculatedRule(Rule):
    """A rule with its fee computed against one order's taxable base."""

    calculated_fee: Decimal
