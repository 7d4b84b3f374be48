"""Electric-vehicle tax benefit calculator.

Computes Colombian personal income tax (cédula general) twice, without and
with the vehicle deduction, and reports the difference. Implements:
  - Deduction cap: min(1340 UVT, 40% of annual net income), E.T. Art. 336
  - 25% labor exemption capped at 790 UVT, E.T. Art. 206 num. 10
  - Progressive UVT brackets, E.T. Art. 241
  - Optional closed-form optimal deduction (see engines.optimizer)

The calculation is pure: no I/O, no shared state. Soft corrections are
reported as advisory alerts on the result, never raised.
"""

from decimal import Decimal

from evtax.engines.brackets import MONTHS_PER_YEAR, SAVINGS_PROBE_COP
from evtax.engines.optimizer import solve_optimal_deduction
from evtax.engines.tax_table import bracket_for, bracket_tax_uvt, cop_to_uvt, uvt_to_cop
from evtax.formatting import format_cop
from evtax.models.calculation import CalculationInput, CalculationResult, ScenarioResult
from evtax.models.enums import DeductionLimitReason
from evtax.models.tax_year import TaxYearConfig

ZERO = Decimal("0")


class TaxBenefitCalculator:
    """Estimates the income-tax savings of deducting an electric vehicle."""

    def __init__(self, config: TaxYearConfig) -> None:
        self.config = config

    def compute(self, data: CalculationInput) -> CalculationResult:
        """Run both scenarios and the optional optimizer for one request."""
        cfg = self.config
        alerts: list[str] = []

        # --- Income ---
        annual_income = data.monthly_net_income * MONTHS_PER_YEAR

        # --- Deduction cap ---
        max_deductions, limit_reason = self.resolve_deduction_cap(annual_income)

        other_deductions = data.other_deductions_annual
        if other_deductions > max_deductions:
            alerts.append(
                f"Your current deductions ({format_cop(other_deductions)}) exceed the "
                f"allowed limit. They are adjusted to the maximum of {format_cop(max_deductions)}."
            )
            other_deductions = max_deductions

        # --- Scenario without the vehicle ---
        without_vehicle = self.compute_scenario(
            annual_income, other_deductions, max_deductions, data.include_labor_exemption
        )

        # --- Optimal deduction ---
        optimal = None
        if data.vehicle_deduction_applied is not None:
            applied = data.vehicle_deduction_applied
        else:
            applied = data.vehicle_deduction_total

        if data.calculate_optimal_deduction:
            optimal = solve_optimal_deduction(
                taxable_income_cop=without_vehicle.taxable_income_cop,
                deductions_and_exemptions=without_vehicle.total_deductions_and_exemptions,
                max_deductions_cop=max_deductions,
                vehicle_deduction_total=data.vehicle_deduction_total,
                config=cfg,
            )
            applied = optimal.recommended_deduction

        # --- Clamp the vehicle deduction ---
        headroom = max(max_deductions - without_vehicle.total_deductions_and_exemptions, ZERO)
        if applied > headroom:
            alerts.append(
                f"The vehicle deduction is limited to {format_cop(headroom)} "
                "by the deduction cap."
            )
            applied = headroom
        # The optimizer never exceeds the vehicle total; caller amounts might.
        if applied > data.vehicle_deduction_total:
            applied = data.vehicle_deduction_total

        # --- Scenario with the vehicle ---
        with_vehicle = self.compute_scenario(
            annual_income,
            other_deductions + applied,
            max_deductions,
            data.include_labor_exemption,
        )

        # --- Savings ---
        annual_savings = max(without_vehicle.tax_cop - with_vehicle.tax_cop, ZERO)
        savings_per_million = without_vehicle.bracket.marginal_rate * SAVINGS_PROBE_COP
        savings_per_million_exact = self.marginal_savings(without_vehicle.taxable_income_cop)

        # --- Advisory alerts ---
        if headroom <= 0:
            alerts.append(
                "Your current deductions already reach the maximum limit. "
                "You will not be able to deduct the vehicle this year."
            )
        if without_vehicle.bracket.marginal_rate == 0:
            alerts.append(
                "Your current taxable income is in the exempt (0%) bracket. "
                "The tax benefit from the vehicle would be minimal or none."
            )

        return CalculationResult(
            tax_year=cfg.tax_year,
            annual_net_income=annual_income,
            annual_net_income_uvt=cop_to_uvt(annual_income, cfg),
            max_deductions_cop=max_deductions,
            max_deductions_uvt=cop_to_uvt(max_deductions, cfg),
            deductions_limit_reason=limit_reason,
            without_vehicle=without_vehicle,
            vehicle_deduction_applied=applied,
            with_vehicle=with_vehicle,
            annual_savings=annual_savings,
            savings_per_million=savings_per_million,
            savings_per_million_exact=savings_per_million_exact,
            optimal_deduction=optimal,
            alerts=alerts,
        )

    # ------------------------------------------------------------------
    # Building blocks
    # ------------------------------------------------------------------

    def resolve_deduction_cap(
        self, annual_income: Decimal
    ) -> tuple[Decimal, DeductionLimitReason]:
        """Maximum deductions plus exemptions, and which limit binds."""
        limit_by_uvt = uvt_to_cop(self.config.max_deductions_uvt, self.config)
        limit_by_rate = self.config.max_deductions_rate * annual_income
        if limit_by_uvt <= limit_by_rate:
            return limit_by_uvt, DeductionLimitReason.UVT
        return limit_by_rate, DeductionLimitReason.RATE

    def compute_scenario(
        self,
        annual_income: Decimal,
        deductions: Decimal,
        max_deductions: Decimal,
        include_labor_exemption: bool = True,
    ) -> ScenarioResult:
        """Taxable income, tax and bracket for a given deduction total.

        The labor exemption is taken on income net of deductions, capped in
        UVT, and the combined total is capped at ``max_deductions``.
        """
        cfg = self.config
        subtotal = max(annual_income - deductions, ZERO)
        if include_labor_exemption:
            exemption = min(
                subtotal * cfg.labor_exemption_rate,
                uvt_to_cop(cfg.max_labor_exemption_uvt, cfg),
            )
        else:
            exemption = ZERO

        total = min(deductions + exemption, max_deductions)
        taxable_cop = max(annual_income - total, ZERO)
        taxable_uvt = cop_to_uvt(taxable_cop, cfg)
        tax_uvt = bracket_tax_uvt(taxable_uvt, cfg)

        return ScenarioResult(
            total_deductions=deductions,
            labor_exemption=exemption,
            total_deductions_and_exemptions=total,
            taxable_income_cop=taxable_cop,
            taxable_income_uvt=taxable_uvt,
            tax_cop=uvt_to_cop(tax_uvt, cfg),
            tax_uvt=tax_uvt,
            bracket=bracket_for(taxable_uvt, cfg),
        )

    def compute_tax_cop(self, taxable_income_cop: Decimal) -> Decimal:
        """Tax in COP on a taxable income in COP."""
        taxable_uvt = cop_to_uvt(taxable_income_cop, self.config)
        return uvt_to_cop(bracket_tax_uvt(taxable_uvt, self.config), self.config)

    def marginal_savings(self, taxable_income_cop: Decimal) -> Decimal:
        """Exact tax saved by deducting one more million, across bracket changes."""
        tax_at_base = self.compute_tax_cop(taxable_income_cop)
        tax_after = self.compute_tax_cop(taxable_income_cop - SAVINGS_PROBE_COP)
        return max(tax_at_base - tax_after, ZERO)
