"""Tax computation engines."""

from evtax.engines.calculator import TaxBenefitCalculator
from evtax.engines.optimizer import solve_optimal_deduction
from evtax.engines.tax_table import bracket_for, bracket_tax_uvt, cop_to_uvt, uvt_to_cop

__all__ = [
    "TaxBenefitCalculator",
    "bracket_for",
    "bracket_tax_uvt",
    "cop_to_uvt",
    "solve_optimal_deduction",
    "uvt_to_cop",
]
