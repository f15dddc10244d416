"""
Display rounding for report values.
All statistics are kept at full precision; rounding happens only here.
"""

from decimal import Decimal, ROUND_HALF_UP
from numbers import Integral, Real

def round_half_away(value: Real, places: int = 2) -> Decimal:
    """
    Round to a fixed number of decimal places, halves away from zero.

    Floats are converted through their shortest decimal representation,
    so 2.675 rounds to 2.68 as it is displayed, not as it is stored.

    :param value: Number to round.
    :param places: Decimal places to keep.
    :return: Rounded Decimal.
    """
    if isinstance(value, Integral):
        exact = Decimal(int(value))
    else:
        exact = Decimal(repr(float(value)))
    rounded = exact.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)
    # no "-0.00"
    if rounded.is_zero():
        rounded = abs(rounded)
    return rounded

def format_fixed(value: Real, places: int = 2) -> str:
    return str(round_half_away(value, places))

def format_median(value: Real) -> str:
    """
    Odd-count medians are whole lengths; even-count medians keep one decimal.
    """
    if isinstance(value, Integral):
        return str(int(value))
    return format_fixed(value, 1)
