"""Interactive step-by-step wizard for evtax.

Guides the user through one calculation:
  Step 1: Income and current deductions
  Step 2: Vehicle deduction
  Step 3: Results (both scenarios, optimal deduction, alerts)
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation

from rich.console import Console
from rich.panel import Panel
from rich.prompt import Confirm, Prompt
from rich.rule import Rule
from rich.table import Table

from evtax.engines.calculator import TaxBenefitCalculator
from evtax.formatting import format_cop, format_uvt
from evtax.models.calculation import (
    MAX_VEHICLE_DEDUCTION,
    MIN_VEHICLE_DEDUCTION,
    CalculationInput,
    CalculationResult,
)
from evtax.models.tax_year import TaxYearConfig

# ---------------------------------------------------------------------------
# Decimal prompt helper
# ---------------------------------------------------------------------------


def _parse_amount(raw: str) -> Decimal:
    """Parse a peso amount written with ``.`` or ``,`` as thousands separators.

    A final separator followed by one or two digits is the decimal point, so
    ``1.500.000,50`` and ``1500000.50`` both read as 1,500,000.50.
    """
    cleaned = raw.strip().replace("$", "").replace(" ", "")
    whole, fraction = cleaned, ""
    sep = max(cleaned.rfind("."), cleaned.rfind(","))
    if sep != -1 and 0 < len(cleaned) - sep - 1 <= 2:
        whole, fraction = cleaned[:sep], cleaned[sep + 1:]
    digits = whole.replace(".", "").replace(",", "")
    if fraction:
        digits = f"{digits or '0'}.{fraction}"
    if not digits:
        raise InvalidOperation(raw)
    value = Decimal(digits)
    if not value.is_finite():
        raise InvalidOperation(raw)
    return value


def _prompt_amount(
    label: str,
    default: Decimal,
    console: Console,
    minimum: Decimal = Decimal("0"),
    maximum: Decimal | None = None,
) -> Decimal:
    """Prompt the user for a COP amount, retrying on bad or out-of-range input."""
    while True:
        raw = Prompt.ask(label, default=str(default), console=console)
        try:
            value = _parse_amount(raw)
        except InvalidOperation:
            console.print(f"[red]Invalid number: {raw!r}. Try again.[/red]")
            continue
        if value < minimum or (maximum is not None and value > maximum):
            upper = f" and {format_cop(maximum)}" if maximum is not None else ""
            console.print(f"[red]Enter a value between {format_cop(minimum)}{upper}.[/red]")
            continue
        return value


def _show_step_header(step: int, title: str, console: Console) -> None:
    console.print()
    console.print(Rule(f"Step {step}: {title}", style="bold cyan"))
    console.print()


# ---------------------------------------------------------------------------
# Display
# ---------------------------------------------------------------------------


def _display_result(result: CalculationResult, console: Console) -> None:
    """Pretty-print a CalculationResult using Rich."""
    table = Table(title="Tax Comparison", padding=(0, 1))
    table.add_column("", style="cyan", min_width=26)
    table.add_column("Without vehicle", justify="right")
    table.add_column("With vehicle", justify="right", style="green")

    wo, wv = result.without_vehicle, result.with_vehicle
    table.add_row("Annual net income", format_cop(result.annual_net_income), format_cop(result.annual_net_income))
    table.add_row("Deductions", format_cop(wo.total_deductions), format_cop(wv.total_deductions))
    table.add_row("25% labor exemption", format_cop(wo.labor_exemption), format_cop(wv.labor_exemption))
    table.add_row("Taxable income", format_cop(wo.taxable_income_cop), format_cop(wv.taxable_income_cop))
    table.add_row("Taxable income (UVT)", format_uvt(wo.taxable_income_uvt), format_uvt(wv.taxable_income_uvt))
    table.add_row("Bracket", f"{wo.bracket.name} ({wo.bracket.uvt_range})", f"{wv.bracket.name} ({wv.bracket.uvt_range})")
    table.add_row("Income tax", format_cop(wo.tax_cop), format_cop(wv.tax_cop))
    console.print(table)

    console.print(
        Panel(
            f"[bold]Vehicle deduction applied:[/bold] {format_cop(result.vehicle_deduction_applied)}\n"
            f"[bold]Deduction limit:[/bold] {format_cop(result.max_deductions_cop)} "
            f"({format_uvt(result.max_deductions_uvt)})\n"
            f"[bold]Per extra million deducted:[/bold] {format_cop(result.savings_per_million_exact)}\n"
            f"[bold green]Estimated annual savings: {format_cop(result.annual_savings)}[/bold green]",
            title="[bold]Summary[/bold]",
            border_style="cyan",
        )
    )

    opt = result.optimal_deduction
    if opt is not None:
        console.print(
            Panel(
                f"[bold]Recommended deduction:[/bold] {format_cop(opt.recommended_deduction)}\n"
                f"[bold]Estimated savings:[/bold] {format_cop(opt.estimated_savings)}\n"
                f"[bold]New bracket:[/bold] {opt.new_bracket.name}\n"
                f"[bold]Balance for later years:[/bold] {format_cop(opt.remaining_vehicle_deduction)}\n\n"
                f"{opt.reason}",
                title="[bold]Optimal Deduction[/bold]",
                border_style="green",
            )
        )

    for alert in result.alerts:
        console.print(f"[yellow]Warning: {alert}[/yellow]")


# ---------------------------------------------------------------------------
# Orchestration
# ---------------------------------------------------------------------------


def collect_input(console: Console) -> CalculationInput:
    """Ask for every calculator input."""
    _show_step_header(1, "Income and Deductions", console)
    monthly = _prompt_amount("Monthly net income (COP)", Decimal("0"), console)
    other = _prompt_amount("Annual deductions already claimed (COP)", Decimal("0"), console)
    include_exemption = Confirm.ask(
        "Include the 25% labor income exemption?", default=True, console=console
    )

    _show_step_header(2, "Vehicle Deduction", console)
    vehicle = _prompt_amount(
        "Total deductible value of the vehicle (COP)",
        MIN_VEHICLE_DEDUCTION,
        console,
        minimum=MIN_VEHICLE_DEDUCTION,
        maximum=MAX_VEHICLE_DEDUCTION,
    )
    optimal = Confirm.ask(
        "Calculate the optimal deduction for this year?", default=True, console=console
    )
    applied = None
    if not optimal:
        applied = _prompt_amount(
            "Deduction to apply this year (COP)",
            vehicle,
            console,
            maximum=vehicle,
        )

    return CalculationInput(
        monthly_net_income=monthly,
        other_deductions_annual=other,
        vehicle_deduction_total=vehicle,
        vehicle_deduction_applied=applied,
        calculate_optimal_deduction=optimal,
        include_labor_exemption=include_exemption,
    )


def run_wizard(config: TaxYearConfig, console: Console | None = None) -> CalculationResult:
    """Main wizard orchestration, called from cli.py."""
    if console is None:
        console = Console()

    console.print(
        Panel(
            "[bold]Electric Vehicle Tax Benefit Calculator[/bold]\n\n"
            f"Tax year {config.tax_year}, UVT = {format_cop(config.uvt_value)}",
            title="[bold cyan]evtax Wizard[/bold cyan]",
            border_style="cyan",
        )
    )

    data = collect_input(console)
    result = TaxBenefitCalculator(config).compute(data)

    _show_step_header(3, "Results", console)
    _display_result(result, console)
    return result
