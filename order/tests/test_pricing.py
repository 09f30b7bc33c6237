from decimal import Decimal

import pytest

from order.pricing import calculate_delivery_fee


@pytest.mark.parametrize('subtotal, fee', [
    (0, 10),
    (80, 10),
    (150, 15),
    (199.99, 19),
    (300, 30),
    (499, 49),
    (499.99, 49),
    (500, 0),
    (1250, 0),
])
def test_delivery_fee_examples(subtotal, fee):
    assert calculate_delivery_fee(subtotal) == Decimal(fee)


def test_fee_matches_general_formula():
    for cents in range(0, 50000, 137):
        subtotal = Decimal(cents) / 100
        expected = Decimal(min(50, max(10, int(subtotal * Decimal('0.10')))))
        assert calculate_delivery_fee(subtotal) == expected


def test_negative_subtotal_rejected():
    with pytest.raises(ValueError):
        calculate_delivery_fee(Decimal('-1'))
