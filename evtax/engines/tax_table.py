"""Bracket lookup and COP/UVT conversion.

All functions are pure and take the tax-year constants explicitly.
"""

from decimal import Decimal

from evtax.formatting import format_percent
from evtax.models.calculation import TaxBracketInfo
from evtax.models.tax_year import TaxYearConfig


def cop_to_uvt(cop: Decimal, config: TaxYearConfig) -> Decimal:
    return cop / config.uvt_value


def uvt_to_cop(uvt: Decimal, config: TaxYearConfig) -> Decimal:
    return uvt * config.uvt_value


def bracket_tax_uvt(income_uvt: Decimal, config: TaxYearConfig) -> Decimal:
    """Tax owed, in UVT, on a taxable income expressed in UVT.

    Scans the bracket table in order; within a bracket the tax is the
    bracket's offset plus the marginal rate on the amount above its lower
    bound.
    """
    if income_uvt <= 0:
        return Decimal("0")

    lower = Decimal("0")
    for upper, rate, offset in config.brackets:
        if upper is None or income_uvt <= upper:
            return (income_uvt - lower) * rate + offset
        lower = upper

    # Unreachable: the top bracket is unbounded
    raise AssertionError("bracket table has no unbounded top bracket")


def bracket_for(income_uvt: Decimal, config: TaxYearConfig) -> TaxBracketInfo:
    """Classify a UVT amount into its bracket. Upper bounds are inclusive."""
    lower = Decimal("0")
    for upper, rate, _ in config.brackets:
        if upper is None or income_uvt <= upper:
            return _bracket_info(lower, upper, rate)
        lower = upper

    raise AssertionError("bracket table has no unbounded top bracket")


def all_brackets(config: TaxYearConfig) -> list[TaxBracketInfo]:
    """Every bracket of the year, lowest first."""
    result = []
    lower = Decimal("0")
    for upper, rate, _ in config.brackets:
        result.append(_bracket_info(lower, upper, rate))
        if upper is not None:
            lower = upper
    return result


def _bracket_info(lower: Decimal, upper: Decimal | None, rate: Decimal) -> TaxBracketInfo:
    if upper is None:
        uvt_range = f"> {lower:f} UVT"
    else:
        uvt_range = f"{lower:f} - {upper:f} UVT"
    return TaxBracketInfo(
        name=format_percent(rate),
        marginal_rate=rate,
        lower_uvt=lower,
        upper_uvt=upper,
        uvt_range=uvt_range,
    )
