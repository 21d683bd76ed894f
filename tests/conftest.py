import pytest

from commission_calculator.config import Settings


@pytest.fixture
def settings():
    return Settings(base_total_code="subtotal", numeric_condition_comparison=False)


@pytest.fixture
def numeric_settings():
    return Settings(base_total_code="subtotal", numeric_condition_comparison=True)
