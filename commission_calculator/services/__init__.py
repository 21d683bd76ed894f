"""
Commission services: base aggregation, rule processing, filtering and orchestration.
"""

from commission_calculator.services.order_total_aggregator import (
    aggregate_base,
    round_money,
    sum_by_code,
)
from commission_calculator.services.condition_evaluator import (
    evaluate_condition,
    evaluate_conditions,
    get_order_attribute,
)
from commission_calculator.services.rule_filter import rule_matches
from commission_calculator.services.rule_processor import base_fee, process_rule
from commission_calculator.services.commission_calculator import (
    CommissionCalculator,
    calculate_commission,
)
