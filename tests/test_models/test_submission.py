"""Tests for form submissions and audit records."""

from datetime import datetime, timezone
from decimal import Decimal

import pytest
from pydantic import ValidationError

from evtax.models.enums import ClientType
from evtax.models.submission import AuditRecord, CalculatorSubmission


class TestCalculatorSubmission:
    def test_valid(self, sample_submission):
        assert sample_submission.name == "Laura Gómez"
        assert sample_submission.monthly_income == Decimal("10000000")
        assert sample_submission.vehicle_deduction_applied is None

    def test_company_client(self, submission_data):
        submission_data["client_type"] = "empresa"
        assert CalculatorSubmission(**submission_data).client_type == ClientType.COMPANY

    def test_unknown_client_type(self, submission_data):
        submission_data["client_type"] = "government"
        with pytest.raises(ValidationError):
            CalculatorSubmission(**submission_data)

    @pytest.mark.parametrize(
        "field,value",
        [
            ("name", "L"),
            ("name", "x" * 101),
            ("email", "laura.example.com"),
            ("email", "laura@example"),
            ("id_document", "1234"),
            ("id_document", "1" * 21),
            ("phone", "300123"),
            ("phone", "3" * 16),
            ("city", "M"),
            ("monthly_income", "-1"),
            ("other_deductions", "-1"),
            ("vehicle_value", "500000"),
            ("vehicle_value", "2000000000"),
        ],
    )
    def test_invalid_field(self, submission_data, field, value):
        submission_data[field] = value
        with pytest.raises(ValidationError):
            CalculatorSubmission(**submission_data)

    def test_missing_field(self, submission_data):
        del submission_data["email"]
        with pytest.raises(ValidationError):
            CalculatorSubmission(**submission_data)

    def test_to_calculation_input(self, sample_submission):
        data = sample_submission.to_calculation_input()
        assert data.monthly_net_income == Decimal("10000000")
        assert data.other_deductions_annual == Decimal("0")
        assert data.vehicle_deduction_total == Decimal("150000000")
        assert data.calculate_optimal_deduction is True
        assert data.include_labor_exemption is True


class TestAuditRecord:
    def test_from_calculation(self, sample_submission, calculator):
        result = calculator.compute(sample_submission.to_calculation_input())
        ts = datetime(2025, 3, 14, 9, 30, tzinfo=timezone.utc)
        record = AuditRecord.from_calculation(sample_submission, result, timestamp=ts)

        assert record.timestamp == ts
        assert record.email == "laura@example.com"
        assert record.annual_savings == result.annual_savings
        assert record.bracket_without_vehicle == "28%"
        assert record.bracket_with_vehicle == result.with_vehicle.bracket.name

    def test_default_timestamp_is_utc_now(self, sample_submission, calculator):
        result = calculator.compute(sample_submission.to_calculation_input())
        before = datetime.now(timezone.utc)
        record = AuditRecord.from_calculation(sample_submission, result)
        assert record.timestamp.tzinfo is not None
        assert before <= record.timestamp <= datetime.now(timezone.utc)

    def test_as_row_order(self, sample_submission, calculator):
        result = calculator.compute(sample_submission.to_calculation_input())
        ts = datetime(2025, 3, 14, 9, 30, tzinfo=timezone.utc)
        row = AuditRecord.from_calculation(sample_submission, result, timestamp=ts).as_row()

        assert len(row) == 13
        assert row[0] == "2025-03-14T09:30:00+00:00"
        assert row[1:7] == [
            "Laura Gómez",
            "laura@example.com",
            "1020304050",
            "3001234567",
            "Medellín",
            "natural",
        ]
        assert row[7:10] == ["10000000", "0", "150000000"]
        assert row[11] == "28%"
        assert all(isinstance(v, str) for v in row)
