"""Typer CLI interface for evtax."""

import json
import logging
from decimal import Decimal
from pathlib import Path

import typer

from evtax.config import DEFAULT_AUDIT_DB

app = typer.Typer(
    name="evtax",
    help="evtax: estimate the income-tax savings of deducting an electric vehicle in Colombia.",
)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """evtax: electric-vehicle income-tax benefit calculator."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def _load_config(year: int | None, config_file: Path | None):
    """Resolve tax-year constants or exit with an error."""
    from evtax.config import resolve_tax_year_config
    from evtax.exceptions import ConfigurationError

    try:
        return resolve_tax_year_config(year, config_file)
    except ConfigurationError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


def _print_result(result, as_json: bool) -> None:
    from evtax.reports.result_summary import ResultSummaryGenerator

    if as_json:
        typer.echo(result.model_dump_json(indent=2))
    else:
        typer.echo(ResultSummaryGenerator().render(result))


@app.command()
def calculate(
    monthly_income: float = typer.Option(
        ...,
        "--monthly-income",
        "-i",
        help="Monthly net income (COP)",
    ),
    vehicle_value: float = typer.Option(
        ...,
        "--vehicle-value",
        "-V",
        help="Total deductible value of the vehicle (COP)",
    ),
    other_deductions: float = typer.Option(
        0.0,
        "--other-deductions",
        "-d",
        help="Annual deductions already claimed, excluding the vehicle (COP)",
    ),
    applied: float | None = typer.Option(
        None,
        "--applied",
        help="Vehicle deduction to apply this year (COP); defaults to the full value",
    ),
    optimal: bool = typer.Option(
        False,
        "--optimal",
        help="Compute the deduction that lands you in the 19% bracket",
    ),
    no_exemption: bool = typer.Option(
        False,
        "--no-exemption",
        help="Exclude the 25% labor income exemption",
    ),
    year: int | None = typer.Option(
        None,
        "--year",
        "-y",
        help="Tax year (defaults to EVTAX_TAX_YEAR or the latest built-in year)",
    ),
    config_file: Path | None = typer.Option(
        None,
        "--config",
        help="JSON file with tax-year constants (overrides --year)",
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON"),
) -> None:
    """Compute tax with and without the vehicle deduction."""
    from pydantic import ValidationError

    from evtax.engines.calculator import TaxBenefitCalculator
    from evtax.models.calculation import CalculationInput

    config = _load_config(year, config_file)

    try:
        data = CalculationInput(
            monthly_net_income=Decimal(str(monthly_income)),
            other_deductions_annual=Decimal(str(other_deductions)),
            vehicle_deduction_total=Decimal(str(vehicle_value)),
            vehicle_deduction_applied=Decimal(str(applied)) if applied is not None else None,
            calculate_optimal_deduction=optimal,
            include_labor_exemption=not no_exemption,
        )
    except ValidationError as e:
        typer.echo(f"Error: Invalid input.\n{e}", err=True)
        raise typer.Exit(1)

    result = TaxBenefitCalculator(config).compute(data)
    _print_result(result, as_json)


@app.command()
def submit(
    file: Path = typer.Argument(..., help="JSON file with a calculator form submission"),
    year: int | None = typer.Option(None, "--year", "-y", help="Tax year"),
    config_file: Path | None = typer.Option(
        None, "--config", help="JSON file with tax-year constants"
    ),
    db: Path | None = typer.Option(
        None,
        "--db",
        help="SQLite audit log (defaults to EVTAX_AUDIT_DB or ~/.evtax/calculations.db)",
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON"),
) -> None:
    """Validate a form submission, compute it and log it to the audit sinks."""
    from dataclasses import replace

    from pydantic import ValidationError

    from evtax.audit.dispatcher import AuditDispatcher
    from evtax.config import AuditSettings
    from evtax.engines.calculator import TaxBenefitCalculator
    from evtax.exceptions import ConfigurationError
    from evtax.models.submission import AuditRecord, CalculatorSubmission

    if not file.exists():
        typer.echo(f"Error: File not found: {file}", err=True)
        raise typer.Exit(1)

    try:
        submission = CalculatorSubmission(**json.loads(file.read_text()))
    except json.JSONDecodeError as e:
        typer.echo(f"Error: {file.name} is not valid JSON: {e}", err=True)
        raise typer.Exit(1)
    except (TypeError, ValidationError) as e:
        typer.echo(f"Error: Invalid submission.\n{e}", err=True)
        raise typer.Exit(1)

    config = _load_config(year, config_file)
    try:
        settings = AuditSettings.from_env()
    except ConfigurationError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)
    if db is not None or settings.db_path is None:
        settings = replace(settings, db_path=db or DEFAULT_AUDIT_DB)

    result = TaxBenefitCalculator(config).compute(submission.to_calculation_input())

    with AuditDispatcher.from_settings(settings) as dispatcher:
        dispatcher.dispatch(AuditRecord.from_calculation(submission, result))
        _print_result(result, as_json)


@app.command()
def brackets(
    year: int | None = typer.Option(None, "--year", "-y", help="Tax year"),
    config_file: Path | None = typer.Option(
        None, "--config", help="JSON file with tax-year constants"
    ),
) -> None:
    """Show the income tax brackets for a tax year."""
    from evtax.engines.tax_table import all_brackets, uvt_to_cop
    from evtax.formatting import format_cop

    config = _load_config(year, config_file)

    typer.echo(f"=== Income Tax Brackets: {config.tax_year} (UVT = {format_cop(config.uvt_value)}) ===")
    typer.echo("")
    typer.echo(f"  {'Bracket':<8} {'UVT range':<18} {'COP from':>16} {'COP to':>16}")
    for b in all_brackets(config):
        upper = format_cop(uvt_to_cop(b.upper_uvt, config)) if b.upper_uvt is not None else "-"
        typer.echo(
            f"  {b.name:<8} {b.uvt_range:<18} "
            f"{format_cop(uvt_to_cop(b.lower_uvt, config)):>16} {upper:>16}"
        )
    typer.echo("")
    typer.echo(
        f"  Deduction cap: {config.max_deductions_uvt:f} UVT or "
        f"{config.max_deductions_rate * 100:.0f}% of annual income, whichever is lower"
    )
    typer.echo(f"  25% labor exemption cap: {config.max_labor_exemption_uvt:f} UVT")


@app.command()
def history(
    db: Path | None = typer.Option(
        None,
        "--db",
        help="SQLite audit log (defaults to EVTAX_AUDIT_DB or ~/.evtax/calculations.db)",
    ),
    limit: int = typer.Option(20, "--limit", "-n", help="Number of rows to show"),
) -> None:
    """List logged calculations, newest first."""
    from evtax.config import AuditSettings
    from evtax.db.repository import CalculationLogRepository
    from evtax.db.schema import create_schema
    from evtax.exceptions import ConfigurationError
    from evtax.formatting import format_cop

    if db is None:
        try:
            db = AuditSettings.from_env().db_path or DEFAULT_AUDIT_DB
        except ConfigurationError as e:
            typer.echo(f"Error: {e}", err=True)
            raise typer.Exit(1)

    if not db.exists():
        typer.echo("No calculations logged yet.")
        return

    conn = create_schema(db)
    try:
        rows = CalculationLogRepository(conn).get_entries(limit=limit)
    finally:
        conn.close()

    if not rows:
        typer.echo("No calculations logged yet.")
        return

    for row in rows:
        typer.echo(
            f"{row['timestamp'][:19]}  {row['name']:<24} {row['city']:<14} "
            f"{format_cop(Decimal(row['annual_savings'])):>16}  "
            f"{row['bracket_without_vehicle']} -> {row['bracket_with_vehicle']}"
        )


@app.command()
def wizard(
    year: int | None = typer.Option(None, "--year", "-y", help="Tax year"),
) -> None:
    """Interactive step-by-step calculation."""
    from evtax.wizard import run_wizard

    run_wizard(_load_config(year, None))
