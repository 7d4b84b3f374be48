"""Tax bracket configuration.

Colombian personal income tax (cédula general) constants, keyed by tax year.
Never hardcode brackets or UVT amounts in computation functions.

Sources:
  - Brackets: Estatuto Tributario Art. 241 (as amended by Ley 2277 de 2022)
  - Deduction caps: E.T. Art. 336 num. 3 (40% / 1.340 UVT)
  - 25% labor exemption cap: E.T. Art. 206 num. 10 (790 UVT)
  - UVT 2024: DIAN Resolución 000187 de 2023
  - UVT 2025: DIAN Resolución 000193 de 2024
"""

from decimal import Decimal

# ---------------------------------------------------------------------------
# UVT (Unidad de Valor Tributario) value in COP, updated every year by DIAN
# ---------------------------------------------------------------------------
UVT_VALUE: dict[int, Decimal] = {
    2024: Decimal("47065"),
    2025: Decimal("49799"),
}

# ---------------------------------------------------------------------------
# Income brackets: {year: [(upper_bound_uvt, rate, offset_uvt), ...]}
# Upper bound is inclusive, None for the top bracket. The offset is the tax
# owed at the previous bracket's upper bound.
# ---------------------------------------------------------------------------
INCOME_TAX_BRACKETS: dict[int, list[tuple[Decimal | None, Decimal, Decimal]]] = {
    2024: [
        (Decimal("1090"), Decimal("0"), Decimal("0")),
        (Decimal("1700"), Decimal("0.19"), Decimal("0")),
        (Decimal("4100"), Decimal("0.28"), Decimal("115.9")),
        (None, Decimal("0.33"), Decimal("787.9")),
    ],
    2025: [
        (Decimal("1090"), Decimal("0"), Decimal("0")),
        (Decimal("1700"), Decimal("0.19"), Decimal("0")),
        (Decimal("4100"), Decimal("0.28"), Decimal("115.9")),
        (None, Decimal("0.33"), Decimal("787.9")),
    ],
}

# ---------------------------------------------------------------------------
# Deduction and exemption limits (statutory, expressed in UVT)
# ---------------------------------------------------------------------------
MAX_DEDUCTIONS_UVT: dict[int, Decimal] = {
    2024: Decimal("1340"),
    2025: Decimal("1340"),
}
MAX_DEDUCTIONS_RATE = Decimal("0.40")  # 40% of annual net income

MAX_LABOR_EXEMPTION_UVT: dict[int, Decimal] = {
    2024: Decimal("790"),
    2025: Decimal("790"),
}
LABOR_EXEMPTION_RATE = Decimal("0.25")  # 25% renta exenta laboral

# ---------------------------------------------------------------------------
# Reporting
# ---------------------------------------------------------------------------
MONTHS_PER_YEAR = 12
SAVINGS_PROBE_COP = Decimal("1000000")  # marginal savings per extra million deducted

DEFAULT_TAX_YEAR = 2025
