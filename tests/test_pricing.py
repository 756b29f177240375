from datetime import datetime
from decimal import Decimal

import pytest

from stayhub.domain.errors import InvalidRange
from stayhub.domain.services.pricing import PricingCalculator


@pytest.fixture
def calculator():
    return PricingCalculator()


def test_three_nights_at_100(calculator):
    total = calculator.compute_total(Decimal("100.00"), datetime(2025, 1, 1), datetime(2025, 1, 4))
    assert total == Decimal("300.00")
    assert str(total) == "300.00"


def test_end_equal_to_start_is_invalid(calculator):
    with pytest.raises(InvalidRange):
        calculator.compute_total(Decimal("100.00"), datetime(2025, 1, 1), datetime(2025, 1, 1))


def test_nights_ignore_time_of_day():
    # 15:00 -> 11:00 del día siguiente sigue siendo una noche
    assert PricingCalculator.nights(datetime(2025, 1, 1, 15), datetime(2025, 1, 2, 11)) == 1


def test_same_day_stay_has_no_nights(calculator):
    with pytest.raises(InvalidRange):
        calculator.compute_total(Decimal("80.00"), datetime(2025, 1, 1, 9), datetime(2025, 1, 1, 18))


def test_total_is_rounded_half_up_to_cents(calculator):
    total = calculator.compute_total(Decimal("33.335"), datetime(2025, 1, 1), datetime(2025, 1, 2))
    assert total == Decimal("33.34")


def test_float_rate_is_converted_exactly(calculator):
    total = calculator.compute_total(75.5, datetime(2025, 3, 1), datetime(2025, 3, 3))
    assert total == Decimal("151.00")


def test_nights_reject_reversed_range():
    with pytest.raises(InvalidRange):
        PricingCalculator.nights(datetime(2025, 1, 4), datetime(2025, 1, 1))
