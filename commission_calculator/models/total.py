"""
Order total line and split condition models.

A total line is one component of the order's monetary breakdown
(subtotal, tax, shipping, discount...). Split conditions declare which
total codes join the taxable base ("split") or are added on top of a
rule's fee ("include").
"""

import enum
from decimal import Decimal
from typing import ClassVar, Type

from pydantic import Field, field_validator

from commission_calculator.models.base import (
    CommissionModel,
    InvalidConditionError,
    InvalidRecordError,
    InvalidTotalError,
    to_decimal,
)


class SplitAction(str, enum.Enum):
    """Recognized split condition actions. Other actions are ignored."""

    SPLIT = "split"
    INCLUDE = "include"


class TotalLine(CommissionModel):
    """One monetary component of an order. Codes need not be unique."""

    error_class: ClassVar[Type[InvalidRecordError]] = InvalidTotalError

    code: str
    value: Decimal

    @field_validator("value", mode="before")
    @classmethod
    def parse_value(cls, v):
        return to_decimal(v)

    def __repr__(self) -> str:
        return f"<TotalLine(code='{self.code}', value={self.value})>"


class SplitCondition(CommissionModel):
    """How a total code participates in the taxable base."""

    error_class: ClassVar[Type[InvalidRecordError]] = InvalidConditionError

    # 'split', 'include' or any other (ignored) action
    action: str
    code: str = Field(..., min_length=1)

    def __repr__(self) -> str:
        return f"<SplitCondition(action='{self.action}', code='{self.code}')>"
