"""Optimal vehicle-deduction solver.

Finds the smallest vehicle deduction that brings taxable income down to the
top of the lowest taxed bracket (1,700 UVT for the 19% bracket), limited by
the deduction headroom left under the cap and by the vehicle's total
deductible value. Closed form: no search.
"""

from decimal import Decimal

from evtax.engines.tax_table import bracket_for, bracket_tax_uvt, cop_to_uvt, uvt_to_cop
from evtax.formatting import format_percent
from evtax.models.calculation import OptimalDeductionResult
from evtax.models.enums import OptimizationRationale
from evtax.models.tax_year import TaxYearConfig


def solve_optimal_deduction(
    taxable_income_cop: Decimal,
    deductions_and_exemptions: Decimal,
    max_deductions_cop: Decimal,
    vehicle_deduction_total: Decimal,
    config: TaxYearConfig,
) -> OptimalDeductionResult:
    """Recommend this year's vehicle deduction.

    ``taxable_income_cop`` and ``deductions_and_exemptions`` come from the
    baseline (no vehicle) scenario.
    """
    target_upper = config.brackets[config.target_bracket_index][0]
    taxable_uvt = cop_to_uvt(taxable_income_cop, config)

    if target_upper is None or taxable_uvt <= target_upper:
        bracket = bracket_for(taxable_uvt, config)
        if bracket.marginal_rate == 0:
            rationale = OptimizationRationale.ALREADY_EXEMPT
        else:
            rationale = OptimizationRationale.ALREADY_IN_TARGET
        return OptimalDeductionResult(
            recommended_deduction=Decimal("0"),
            new_bracket=bracket,
            estimated_savings=Decimal("0"),
            remaining_vehicle_deduction=vehicle_deduction_total,
            rationale=rationale,
            reason=_reason(rationale, bracket.name, config),
        )

    required = taxable_income_cop - uvt_to_cop(target_upper, config)
    headroom = max(max_deductions_cop - deductions_and_exemptions, Decimal("0"))
    recommended = min(required, headroom, vehicle_deduction_total)

    new_uvt = cop_to_uvt(taxable_income_cop - recommended, config)
    new_bracket = bracket_for(new_uvt, config)

    tax_before = bracket_tax_uvt(taxable_uvt, config) * config.uvt_value
    tax_after = bracket_tax_uvt(new_uvt, config) * config.uvt_value
    savings = max(tax_before - tax_after, Decimal("0"))

    if recommended >= required:
        rationale = OptimizationRationale.TARGET_REACHED
    elif recommended >= vehicle_deduction_total:
        rationale = OptimizationRationale.VEHICLE_CEILING
    else:
        rationale = OptimizationRationale.DEDUCTION_CAP

    return OptimalDeductionResult(
        recommended_deduction=recommended,
        new_bracket=new_bracket,
        estimated_savings=savings,
        remaining_vehicle_deduction=vehicle_deduction_total - recommended,
        rationale=rationale,
        reason=_reason(rationale, new_bracket.name, config),
    )


def _reason(
    rationale: OptimizationRationale, bracket_name: str, config: TaxYearConfig
) -> str:
    target = format_percent(config.brackets[config.target_bracket_index][1])
    match rationale:
        case OptimizationRationale.ALREADY_EXEMPT:
            return (
                "Your taxable income is already in the exempt (0%) bracket. "
                "Deducting the vehicle brings no additional tax benefit."
            )
        case OptimizationRationale.ALREADY_IN_TARGET:
            return (
                f"You are already in the {target} bracket. You can still deduct the vehicle "
                f"to lower your tax, but savings will be at {target} or less."
            )
        case OptimizationRationale.TARGET_REACHED:
            return (
                f"With this deduction you land in the {target} bracket, "
                "the most favorable one before the next marginal rate."
            )
        case OptimizationRationale.VEHICLE_CEILING:
            return (
                "The total vehicle deduction is applied. "
                f"You will land in the {bracket_name} bracket."
            )
        case _:
            return (
                "The maximum allowed by the deduction limits "
                f"({format_percent(config.max_deductions_rate)} or "
                f"{config.max_deductions_uvt:f} UVT) is applied. "
                f"You will land in the {bracket_name} bracket."
            )
