"""Shared test fixtures for evtax."""

from decimal import Decimal

import pytest

from evtax.config import get_tax_year_config
from evtax.engines.calculator import TaxBenefitCalculator
from evtax.models.calculation import CalculationInput
from evtax.models.enums import ClientType
from evtax.models.submission import CalculatorSubmission
from evtax.models.tax_year import TaxYearConfig


@pytest.fixture
def config_2025() -> TaxYearConfig:
    return get_tax_year_config(2025)


@pytest.fixture
def calculator(config_2025: TaxYearConfig) -> TaxBenefitCalculator:
    return TaxBenefitCalculator(config_2025)


@pytest.fixture
def high_income_input() -> CalculationInput:
    """10M/month, no deductions, no labor exemption: taxable 120M (28% bracket)."""
    return CalculationInput(
        monthly_net_income=Decimal("10000000"),
        other_deductions_annual=Decimal("0"),
        vehicle_deduction_total=Decimal("150000000"),
        calculate_optimal_deduction=True,
        include_labor_exemption=False,
    )


@pytest.fixture
def submission_data() -> dict:
    return {
        "name": "Laura Gómez",
        "email": "laura@example.com",
        "id_document": "1020304050",
        "phone": "3001234567",
        "city": "Medellín",
        "client_type": "natural",
        "monthly_income": "10000000",
        "other_deductions": "0",
        "vehicle_value": "150000000",
        "calculate_optimal_deduction": True,
    }


@pytest.fixture
def sample_submission(submission_data: dict) -> CalculatorSubmission:
    submission = CalculatorSubmission(**submission_data)
    assert submission.client_type == ClientType.NATURAL
    return submission
