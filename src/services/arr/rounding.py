"""
Rounding policy for ARR costing.

Every monetary and per-unit value is quantized to a fixed number of decimal
places right after the arithmetic step that produced it. Quantization goes
through Decimal so that line items and totals are summed exactly and the
displayed total always equals the sum of the displayed line items.
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Union

from src.services.exceptions import InvalidAmountError

DECIMAL_PLACES = 5

_QUANTUM = Decimal(1).scaleb(-DECIMAL_PLACES)

Number = Union[Decimal, float, int, str]


def to_decimal(value: Number) -> Decimal:
    """
    Convert a numeric value to a finite Decimal.

    Floats go through str() so that 0.1 becomes Decimal("0.1") rather than
    its full binary expansion.

    Raises:
        InvalidAmountError: If the value is not numeric or not finite
    """
    if isinstance(value, bool):
        raise InvalidAmountError(value, "must be a number")
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value))
        except (InvalidOperation, ValueError, TypeError):
            raise InvalidAmountError(value, "must be a number")
    if not result.is_finite():
        raise InvalidAmountError(value, "must be finite")
    return result


def quantize5(value: Number) -> Decimal:
    """
    Round a value to DECIMAL_PLACES places using ROUND_HALF_UP.

    Examples:
        >>> quantize5(Decimal("1.234565"))
        Decimal('1.23457')
        >>> quantize5(10)
        Decimal('10.00000')
    """
    try:
        return to_decimal(value).quantize(_QUANTUM, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        raise InvalidAmountError(value, "is too large to round")


def round5(value: Number) -> float:
    """
    Round a value to DECIMAL_PLACES places and return it as a float.

    Idempotent: round5(round5(x)) == round5(x).

    Examples:
        >>> round5(2 / 3)
        0.66667
        >>> round5(6600)
        6600.0
    """
    return float(quantize5(value))
