"""Colombian (es-CO) display formatting for COP, UVT and rates."""

from decimal import ROUND_HALF_UP, Decimal

_ES_CO = str.maketrans({",": ".", ".": ","})


def format_cop(value: Decimal | int | float) -> str:
    """Format a peso amount without decimals, e.g. ``$ 84.658.300``."""
    amount = Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    sign = "-" if amount < 0 else ""
    return f"{sign}$ {abs(amount):,}".translate(_ES_CO)


def format_uvt(value: Decimal | int | float) -> str:
    """Format a UVT amount with two decimals, e.g. ``1.700,00 UVT``."""
    amount = Decimal(str(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    return f"{amount:,.2f}".translate(_ES_CO) + " UVT"


def format_percent(value: Decimal | int | float) -> str:
    """Format a rate as a whole percentage, e.g. ``0.19`` -> ``19%``."""
    return f"{Decimal(str(value)) * 100:.0f}%"
