"""DTO utilities for service layer.

Provides standardized formatting functions for presenting calculation
results: fixed-decimal cost strings, currency display and amount display.
Formatting never feeds back into calculations; engine values stay at the
5-decimal rounding policy.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Union

from src.utils.constants import AMOUNT_DISPLAY_DECIMALS, CURRENCY_FORMATS, DEFAULT_CURRENCY

Numeric = Union[Decimal, float, int, str, None]


def cost_to_string(value: Numeric) -> str:
    """
    Convert a cost value to a 2-decimal string format.

    Args:
        value: Cost value (Decimal, float, int, str, or None)

    Returns:
        String formatted as "12.34". Returns "0.00" if value is None.

    Examples:
        >>> cost_to_string(Decimal("12.345"))
        '12.35'
        >>> cost_to_string(None)
        '0.00'
    """
    if value is None:
        return "0.00"

    decimal_value = Decimal(str(value))
    rounded = decimal_value.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    return str(rounded)


def format_currency(value: Numeric, currency: Optional[str] = None) -> str:
    """
    Format a monetary value for display.

    Uses the symbol, separators and fraction digits configured for the
    currency in CURRENCY_FORMATS. IDR shows no fraction digits and groups
    thousands with dots.

    Args:
        value: Amount to format (None yields "-")
        currency: Currency code; defaults to DEFAULT_CURRENCY

    Returns:
        Display string

    Examples:
        >>> format_currency(6600, "IDR")
        'Rp 6.600'
        >>> format_currency(-3300.5, "IDR")
        '-Rp 3.301'
        >>> format_currency(1234.5, "USD")
        '$ 1,234.50'
    """
    if value is None:
        return "-"

    fmt = CURRENCY_FORMATS.get((currency or DEFAULT_CURRENCY).upper())
    if fmt is None:
        fmt = CURRENCY_FORMATS[DEFAULT_CURRENCY]

    digits = fmt["digits"]
    amount = Decimal(str(value)).quantize(Decimal(1).scaleb(-digits), rounding=ROUND_HALF_UP)
    sign = "-" if amount < 0 else ""

    text = f"{abs(amount):,.{digits}f}"
    text = (
        text.replace(",", "\x00")
        .replace(".", fmt["decimal"])
        .replace("\x00", fmt["thousands"])
    )
    return f"{sign}{fmt['symbol']} {text}"


def format_amount(
    value: Numeric, unit: Optional[str] = None, decimals: int = AMOUNT_DISPLAY_DECIMALS
) -> str:
    """
    Format an ingredient amount with at most `decimals` places.

    Trailing zeros are dropped.

    Examples:
        >>> format_amount(300.0, "g")
        '300 g'
        >>> format_amount(1 / 3, "cup")
        '0.33 cup'
    """
    if value is None:
        return "-"

    amount = Decimal(str(value)).quantize(Decimal(1).scaleb(-decimals), rounding=ROUND_HALF_UP)
    text = f"{amount:f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text == "-0":
        text = "0"
    return f"{text} {unit}" if unit else text


def format_scaling_factor(value: Numeric, decimals: int = 4) -> str:
    """
    Format a scaling factor, e.g. "1.5x".

    Examples:
        >>> format_scaling_factor(1.5)
        '1.5x'
    """
    if value is None:
        return "-"
    return f"{format_amount(value, decimals=decimals)}x"
