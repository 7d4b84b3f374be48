"""Per-year tax constants used by the calculator.

A TaxYearConfig is passed explicitly into the engines so that several tax
years can be evaluated side by side without touching module globals.
"""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, model_validator

BracketRow = tuple[Decimal | None, Decimal, Decimal]


class TaxYearConfig(BaseModel):
    """Constants for one tax year. Amounts in UVT unless stated otherwise."""

    model_config = ConfigDict(frozen=True)

    tax_year: int
    uvt_value: Decimal = Field(gt=0, description="Value of one UVT in COP")
    max_deductions_uvt: Decimal = Field(gt=0)
    max_deductions_rate: Decimal = Field(gt=0, le=1)
    max_labor_exemption_uvt: Decimal = Field(ge=0)
    labor_exemption_rate: Decimal = Field(ge=0, le=1)
    brackets: tuple[BracketRow, ...] = Field(
        description="(upper_bound_uvt, rate, offset_uvt); upper bound None for the top bracket",
    )

    @model_validator(mode="after")
    def _check_brackets(self) -> "TaxYearConfig":
        if not self.brackets:
            raise ValueError("bracket table is empty")
        if self.brackets[-1][0] is not None:
            raise ValueError("top bracket must be unbounded")

        prev_upper = Decimal("0")
        prev_rate = Decimal("0")
        prev_offset = Decimal("0")
        for i, (upper, rate, offset) in enumerate(self.brackets):
            if upper is None and i != len(self.brackets) - 1:
                raise ValueError(f"bracket {i} is unbounded but not last")
            if upper is not None and upper <= prev_upper:
                raise ValueError(f"non-monotonic bracket bound: {upper} <= {prev_upper}")
            if not Decimal("0") <= rate <= Decimal("1"):
                raise ValueError(f"rate out of range in bracket {i}: {rate}")
            if i > 0:
                lower = self.brackets[i - 1][0]
                prev_lower = self.brackets[i - 2][0] if i > 1 else Decimal("0")
                expected = (lower - prev_lower) * prev_rate + prev_offset
                if offset != expected:
                    raise ValueError(
                        f"discontinuous offset in bracket {i}: {offset} != {expected}"
                    )
            elif offset != 0:
                raise ValueError("first bracket offset must be 0")
            if upper is not None:
                prev_upper = upper
            prev_rate = rate
            prev_offset = offset
        return self

    @property
    def target_bracket_index(self) -> int:
        """Index of the lowest bracket with a non-zero rate."""
        for i, (_, rate, _) in enumerate(self.brackets):
            if rate > 0:
                return i
        return len(self.brackets) - 1
