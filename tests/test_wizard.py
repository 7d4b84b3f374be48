"""Tests for the interactive wizard."""

import io
from decimal import Decimal, InvalidOperation
from unittest.mock import patch

import pytest
from rich.console import Console

from evtax.models.enums import OptimizationRationale
from evtax.wizard import _parse_amount, _prompt_amount, collect_input, run_wizard


@pytest.fixture
def console() -> Console:
    return Console(file=io.StringIO(), width=120)


def _output(console: Console) -> str:
    return console.file.getvalue()


class TestParseAmount:
    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("84658300", Decimal("84658300")),
            ("84.658.300", Decimal("84658300")),
            ("1,500,000", Decimal("1500000")),
            ("$ 2.000.000", Decimal("2000000")),
            ("  0 ", Decimal("0")),
            ("1500000.50", Decimal("1500000.50")),
            ("1.500.000,50", Decimal("1500000.50")),
            ("1,500,000.5", Decimal("1500000.5")),
            ("$ 84.658.300,00", Decimal("84658300.00")),
        ],
    )
    def test_valid(self, raw, expected):
        assert _parse_amount(raw) == expected

    @pytest.mark.parametrize("raw", ["", "   ", "$", "abc", "nan", "inf", "-Infinity", "sNaN"])
    def test_invalid(self, raw):
        with pytest.raises(InvalidOperation):
            _parse_amount(raw)


class TestPromptAmount:
    def test_retries_until_valid(self, console):
        with patch("evtax.wizard.Prompt.ask", side_effect=["abc", "500", "2.000.000"]):
            value = _prompt_amount("Vehicle", Decimal("1000000"), console, minimum=Decimal("1000000"))
        assert value == Decimal("2000000")
        out = _output(console)
        assert "Invalid number" in out
        assert "Enter a value between $ 1.000.000" in out

    def test_upper_bound(self, console):
        with patch("evtax.wizard.Prompt.ask", side_effect=["60000000", "40000000"]):
            value = _prompt_amount(
                "Applied", Decimal("0"), console, maximum=Decimal("50000000")
            )
        assert value == Decimal("40000000")
        assert "and $ 50.000.000" in _output(console)


class TestCollectInput:
    def test_optimal_flow(self, console):
        with patch("evtax.wizard.Prompt.ask", side_effect=["10.000.000", "0", "150.000.000"]), \
             patch("evtax.wizard.Confirm.ask", side_effect=[False, True]):
            data = collect_input(console)
        assert data.monthly_net_income == Decimal("10000000")
        assert data.vehicle_deduction_total == Decimal("150000000")
        assert data.include_labor_exemption is False
        assert data.calculate_optimal_deduction is True
        assert data.vehicle_deduction_applied is None

    def test_manual_amount_flow(self, console):
        with patch(
            "evtax.wizard.Prompt.ask",
            side_effect=["10000000", "5000000", "150000000", "40000000"],
        ) as prompt, patch("evtax.wizard.Confirm.ask", side_effect=[True, False]):
            data = collect_input(console)
        assert prompt.call_count == 4
        assert data.other_deductions_annual == Decimal("5000000")
        assert data.include_labor_exemption is True
        assert data.calculate_optimal_deduction is False
        assert data.vehicle_deduction_applied == Decimal("40000000")


class TestRunWizard:
    def test_full_run(self, console, config_2025):
        with patch("evtax.wizard.Prompt.ask", side_effect=["10000000", "0", "150000000"]), \
             patch("evtax.wizard.Confirm.ask", side_effect=[False, True]):
            result = run_wizard(config_2025, console=console)

        assert result.annual_savings.quantize(Decimal("0.01")) == Decimal("9895676.00")
        assert result.optimal_deduction.rationale == OptimizationRationale.TARGET_REACHED
        out = _output(console)
        assert "Tax year 2025" in out
        assert "Tax Comparison" in out
        assert "Optimal Deduction" in out
        assert "$ 9.895.676" in out

    def test_alerts_shown(self, console, config_2025):
        with patch("evtax.wizard.Prompt.ask", side_effect=["3000000", "0", "50000000"]), \
             patch("evtax.wizard.Confirm.ask", side_effect=[True, True]):
            result = run_wizard(config_2025, console=console)
        assert result.alerts
        assert "Warning:" in _output(console)


class TestNonFiniteInput:
    def test_nan_is_retried(self, console):
        with patch("evtax.wizard.Prompt.ask", side_effect=["nan", "5"]):
            value = _prompt_amount("Monthly", Decimal("0"), console)
        assert value == Decimal("5")
        assert "Invalid number: 'nan'" in _output(console)

    def test_infinite_income_is_retried(self, console):
        with patch(
            "evtax.wizard.Prompt.ask",
            side_effect=["inf", "10000000", "0", "1000000"],
        ), patch("evtax.wizard.Confirm.ask", side_effect=[True, True]):
            data = collect_input(console)
        assert data.monthly_net_income == Decimal("10000000")
        assert data.vehicle_deduction_total == Decimal("1000000")
        assert "Invalid number: 'inf'" in _output(console)
