"""Fixtures for audit sink tests."""

from datetime import datetime, timezone

import pytest

from evtax.models.submission import AuditRecord


@pytest.fixture
def audit_record(sample_submission, calculator) -> AuditRecord:
    result = calculator.compute(sample_submission.to_calculation_input())
    return AuditRecord.from_calculation(
        sample_submission, result, timestamp=datetime(2025, 3, 14, 9, 30, tzinfo=timezone.utc)
    )
