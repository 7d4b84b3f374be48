"""Calculator form submission and the audit record derived from it."""

from datetime import datetime, timezone
from decimal import Decimal

from pydantic import BaseModel, Field

from evtax.models.calculation import (
    MAX_VEHICLE_DEDUCTION,
    MIN_VEHICLE_DEDUCTION,
    CalculationInput,
    CalculationResult,
)
from evtax.models.enums import ClientType

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class CalculatorSubmission(BaseModel):
    """Lead-capture form filled in before a calculation.

    Validation mirrors the web form; a submission that fails it never
    reaches the calculator.
    """

    name: str = Field(min_length=2, max_length=100)
    email: str = Field(max_length=255, pattern=EMAIL_PATTERN)
    id_document: str = Field(min_length=5, max_length=20, description="Cédula or NIT")
    phone: str = Field(min_length=10, max_length=15)
    city: str = Field(min_length=2)
    client_type: ClientType
    monthly_income: Decimal = Field(ge=0)
    other_deductions: Decimal = Field(ge=0)
    vehicle_value: Decimal = Field(ge=MIN_VEHICLE_DEDUCTION, le=MAX_VEHICLE_DEDUCTION)
    vehicle_deduction_applied: Decimal | None = Field(default=None, ge=0)
    calculate_optimal_deduction: bool = False

    def to_calculation_input(self) -> CalculationInput:
        return CalculationInput(
            monthly_net_income=self.monthly_income,
            other_deductions_annual=self.other_deductions,
            vehicle_deduction_total=self.vehicle_value,
            vehicle_deduction_applied=self.vehicle_deduction_applied,
            calculate_optimal_deduction=self.calculate_optimal_deduction,
        )


class AuditRecord(BaseModel):
    """One append-only row describing a calculation request and its outcome."""

    timestamp: datetime
    name: str
    email: str
    id_document: str
    phone: str
    city: str
    client_type: ClientType
    monthly_income: Decimal
    other_deductions: Decimal
    vehicle_value: Decimal
    annual_savings: Decimal
    bracket_without_vehicle: str
    bracket_with_vehicle: str

    @classmethod
    def from_calculation(
        cls,
        submission: CalculatorSubmission,
        result: CalculationResult,
        timestamp: datetime | None = None,
    ) -> "AuditRecord":
        return cls(
            timestamp=timestamp or datetime.now(timezone.utc),
            name=submission.name,
            email=submission.email,
            id_document=submission.id_document,
            phone=submission.phone,
            city=submission.city,
            client_type=submission.client_type,
            monthly_income=submission.monthly_income,
            other_deductions=submission.other_deductions,
            vehicle_value=submission.vehicle_value,
            annual_savings=result.annual_savings,
            bracket_without_vehicle=result.without_vehicle.bracket.name,
            bracket_with_vehicle=result.with_vehicle.bracket.name,
        )

    def as_row(self) -> list[str]:
        """Column values in sheet order."""
        return [
            self.timestamp.isoformat(),
            self.name,
            self.email,
            self.id_document,
            self.phone,
            self.city,
            self.client_type.value,
            str(self.monthly_income),
            str(self.other_deductions),
            str(self.vehicle_value),
            str(self.annual_savings),
            self.bracket_without_vehicle,
            self.bracket_with_vehicle,
        ]
