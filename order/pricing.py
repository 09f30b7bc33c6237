from decimal import Decimal, ROUND_FLOOR

FREE_DELIVERY_THRESHOLD = Decimal('500')
DELIVERY_RATE = Decimal('0.10')
MIN_DELIVERY_FEE = Decimal('10')
MAX_DELIVERY_FEE = Decimal('50')


def calculate_delivery_fee(subtotal):
    """
    Delivery charge for a cart or order subtotal.

    Orders of 500 or more ship free. Below that the fee is 10% of the
    subtotal rounded down to a whole unit, kept between 10 and 50.
    """
    subtotal = Decimal(str(subtotal))
    if subtotal < 0:
        raise ValueError("Subtotal cannot be negative")

    if subtotal >= FREE_DELIVERY_THRESHOLD:
        return Decimal('0')

    fee = (subtotal * DELIVERY_RATE).to_integral_value(rounding=ROUND_FLOOR)
    return min(MAX_DELIVERY_FEE, max(MIN_DELIVERY_FEE, fee))
