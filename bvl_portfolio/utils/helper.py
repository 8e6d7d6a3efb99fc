from decimal import Decimal, ROUND_HALF_UP


def round_2_decimals(x):
    if x is None:
        return None
    return Decimal(str(x)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
