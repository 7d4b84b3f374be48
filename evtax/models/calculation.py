"""Calculator input and result models."""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from evtax.models.enums import DeductionLimitReason, OptimizationRationale

MIN_VEHICLE_DEDUCTION = Decimal("1000000")
MAX_VEHICLE_DEDUCTION = Decimal("1000000000")


class CalculationInput(BaseModel):
    """One calculation request. All amounts in COP."""

    model_config = ConfigDict(frozen=True)

    monthly_net_income: Decimal = Field(ge=0, description="Monthly net income")
    other_deductions_annual: Decimal = Field(
        default=Decimal("0"),
        ge=0,
        description="Annual deductions already claimed, excluding the vehicle",
    )
    vehicle_deduction_total: Decimal = Field(
        ge=MIN_VEHICLE_DEDUCTION,
        le=MAX_VEHICLE_DEDUCTION,
        description="Total deductible value of the vehicle",
    )
    vehicle_deduction_applied: Decimal | None = Field(
        default=None,
        ge=0,
        description="Vehicle deduction to apply this year; defaults to the full total",
    )
    calculate_optimal_deduction: bool = False
    include_labor_exemption: bool = True


class TaxBracketInfo(BaseModel):
    name: str  # "0%", "19%", "28%", "33%"
    marginal_rate: Decimal
    lower_uvt: Decimal
    upper_uvt: Decimal | None
    uvt_range: str


class ScenarioResult(BaseModel):
    """Tax computation for one scenario (with or without the vehicle)."""

    total_deductions: Decimal
    labor_exemption: Decimal
    total_deductions_and_exemptions: Decimal
    taxable_income_cop: Decimal
    taxable_income_uvt: Decimal
    tax_cop: Decimal
    tax_uvt: Decimal
    bracket: TaxBracketInfo


class OptimalDeductionResult(BaseModel):
    recommended_deduction: Decimal
    new_bracket: TaxBracketInfo
    estimated_savings: Decimal
    remaining_vehicle_deduction: Decimal
    rationale: OptimizationRationale
    reason: str


class CalculationResult(BaseModel):
    tax_year: int
    # Income
    annual_net_income: Decimal
    annual_net_income_uvt: Decimal
    # Deduction cap
    max_deductions_cop: Decimal
    max_deductions_uvt: Decimal
    deductions_limit_reason: DeductionLimitReason
    # Scenarios
    without_vehicle: ScenarioResult
    vehicle_deduction_applied: Decimal
    with_vehicle: ScenarioResult
    # Savings
    annual_savings: Decimal
    savings_per_million: Decimal
    savings_per_million_exact: Decimal
    optimal_deduction: OptimalDeductionResult | None = None
    alerts: list[str] = Field(default_factory=list)

    @property
    def deduction_headroom(self) -> Decimal:
        """Room left under the cap after baseline deductions and exemptions."""
        return max(
            self.max_deductions_cop - self.without_vehicle.total_deductions_and_exemptions,
            Decimal("0"),
        )
