import math
from decimal import ROUND_DOWN, Decimal


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up (round() would give round(2.5) == 2)."""
    return math.floor(value + 0.5)


def format_amount(value: float) -> str:
    """Thousands-separated amount, at most 3 decimals, never rounded up: 2761.9999 -> '2,761.999'."""
    if float(value).is_integer():
        return f"{int(value):,}"
    truncated = Decimal(str(value)).quantize(Decimal("0.001"), rounding=ROUND_DOWN)
    return f"{truncated:,.3f}".rstrip("0").rstrip(".")
