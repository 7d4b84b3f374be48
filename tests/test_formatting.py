"""Tests for es-CO display formatting."""

from decimal import Decimal

import pytest

from evtax.formatting import format_cop, format_percent, format_uvt


class TestFormatCop:
    @pytest.mark.parametrize(
        "value,expected",
        [
            (Decimal("84658300"), "$ 84.658.300"),
            (Decimal("0"), "$ 0"),
            (Decimal("999"), "$ 999"),
            (Decimal("1000"), "$ 1.000"),
            (Decimal("5771704.10"), "$ 5.771.704"),
            (Decimal("9895676.5"), "$ 9.895.677"),
            (Decimal("-5"), "-$ 5"),
            (1500000, "$ 1.500.000"),
        ],
    )
    def test_values(self, value, expected):
        assert format_cop(value) == expected


class TestFormatUvt:
    def test_thousands_and_decimals(self):
        assert format_uvt(Decimal("1700")) == "1.700,00 UVT"

    def test_rounding(self):
        assert format_uvt(Decimal("2409.68608")) == "2.409,69 UVT"

    def test_small(self):
        assert format_uvt(Decimal("0.5")) == "0,50 UVT"


class TestFormatPercent:
    @pytest.mark.parametrize(
        "value,expected",
        [(Decimal("0"), "0%"), (Decimal("0.19"), "19%"), (Decimal("0.28"), "28%"), (Decimal("0.40"), "40%")],
    )
    def test_values(self, value, expected):
        assert format_percent(value) == expected
