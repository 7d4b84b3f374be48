"""Data models for evtax."""

from evtax.models.calculation import (
    CalculationInput,
    CalculationResult,
    OptimalDeductionResult,
    ScenarioResult,
    TaxBracketInfo,
)
from evtax.models.enums import ClientType, DeductionLimitReason, OptimizationRationale
from evtax.models.submission import AuditRecord, CalculatorSubmission
from evtax.models.tax_year import TaxYearConfig

__all__ = [
    "AuditRecord",
    "CalculationInput",
    "CalculationResult",
    "CalculatorSubmission",
    "ClientType",
    "DeductionLimitReason",
    "OptimalDeductionResult",
    "OptimizationRationale",
    "ScenarioResult",
    "TaxBracketInfo",
    "TaxYearConfig",
]
