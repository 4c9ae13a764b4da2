"""
Money helpers shared by the balance calculator and settlement resolver.

Amounts travel through the system as binary floats. Rounding happens only
at output boundaries, through ``round_money``, so drift does not compound
between steps.
"""

from decimal import Decimal, ROUND_HALF_UP, localcontext
from enum import Enum

MONEY_PLACES = 2
SETTLEMENT_TOLERANCE = 0.01


class Currency(str, Enum):
    """
    Currencies a group can be labelled with.

    The code is a display label only. Amounts are never converted.
    """
    USD = "USD"
    INR = "INR"
    EUR = "EUR"
    GBP = "GBP"


def round_money(value: float, places: int = MONEY_PLACES) -> float:
    """
    Round an amount half away from zero.

    The float's shortest repr is quantized, so 2.675 rounds to 2.68 and
    -2.675 to -2.68 instead of following the binary representation.
    Negative zero is normalised to 0.0.

    The decimal context is widened to fit the value, so amounts beyond
    the default 28 digits of precision round instead of raising.
    """
    exact = Decimal(repr(float(value)))
    quantum = Decimal(1).scaleb(-places)
    with localcontext() as ctx:
        ctx.prec = max(28, exact.adjusted() + places + 2)
        rounded = exact.quantize(quantum, rounding=ROUND_HALF_UP)
    if rounded == 0:
        return 0.0
    return float(rounded)


def is_settled(value: float, tolerance: float = SETTLEMENT_TOLERANCE) -> bool:
    """True when the amount is inside the dead zone around zero."""
    return abs(value) < tolerance


def is_debtor(value: float, tolerance: float = SETTLEMENT_TOLERANCE) -> bool:
    return value < -tolerance


def is_creditor(value: float, tolerance: float = SETTLEMENT_TOLERANCE) -> bool:
    return value > tolerance
