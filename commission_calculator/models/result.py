"""
Commission calculation result.
"""

from decimal import Decimal

from commission_calculator.models.base import CommissionModel


class CommissionResult(CommissionModel):
    """Taxable base of the order and the total commission fee owed on it."""

    order_total: Decimal
    calculated_fee: Decimal
