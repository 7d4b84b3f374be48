"""Configuration loading for evtax.

Tax-year constants come from the built-in tables in ``engines.brackets`` or
from a JSON override file, so that a new year's UVT value can be published
without a code change. Audit sink settings come from the environment.
"""

import json
import logging
import os
from dataclasses import dataclass
from decimal import Decimal
from pathlib import Path

from pydantic import ValidationError

from evtax.engines.brackets import (
    DEFAULT_TAX_YEAR,
    INCOME_TAX_BRACKETS,
    LABOR_EXEMPTION_RATE,
    MAX_DEDUCTIONS_RATE,
    MAX_DEDUCTIONS_UVT,
    MAX_LABOR_EXEMPTION_UVT,
    UVT_VALUE,
)
from evtax.exceptions import ConfigurationError
from evtax.models.tax_year import TaxYearConfig

logger = logging.getLogger(__name__)

DEFAULT_AUDIT_DB = Path.home() / ".evtax" / "calculations.db"


def available_tax_years() -> list[int]:
    return sorted(UVT_VALUE)


def default_tax_year() -> int:
    """Tax year from ``EVTAX_TAX_YEAR``, falling back to the built-in default."""
    raw = os.environ.get("EVTAX_TAX_YEAR")
    if not raw:
        return DEFAULT_TAX_YEAR
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError("EVTAX_TAX_YEAR", f"not a year: {raw!r}") from None


def get_tax_year_config(year: int) -> TaxYearConfig:
    """Build the constants for a tax year from the built-in tables."""
    if year not in UVT_VALUE or year not in INCOME_TAX_BRACKETS:
        valid = ", ".join(str(y) for y in available_tax_years())
        raise ConfigurationError(
            "built-in tables", f"no constants for tax year {year} (available: {valid})"
        )
    try:
        return TaxYearConfig(
            tax_year=year,
            uvt_value=UVT_VALUE[year],
            max_deductions_uvt=MAX_DEDUCTIONS_UVT[year],
            max_deductions_rate=MAX_DEDUCTIONS_RATE,
            max_labor_exemption_uvt=MAX_LABOR_EXEMPTION_UVT[year],
            labor_exemption_rate=LABOR_EXEMPTION_RATE,
            brackets=tuple(INCOME_TAX_BRACKETS[year]),
        )
    except (KeyError, ValidationError) as e:
        raise ConfigurationError("built-in tables", f"tax year {year}: {e}") from e


def load_tax_year_config(path: Path) -> TaxYearConfig:
    """Load a tax year's constants from a JSON file.

    Missing keys fall back to the built-in table for the same ``tax_year``
    when one exists, so an annual update can be as small as::

        {"tax_year": 2025, "uvt_value": 49799}
    """
    try:
        data = json.loads(path.read_text(), parse_float=Decimal)
    except OSError as e:
        raise ConfigurationError(str(path), f"cannot read file: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigurationError(str(path), f"invalid JSON: {e}") from e

    if not isinstance(data, dict) or "tax_year" not in data:
        raise ConfigurationError(str(path), "expected an object with a 'tax_year' key")

    year = data["tax_year"]
    if year in UVT_VALUE:
        base = get_tax_year_config(year).model_dump()
        base.update(data)
        data = base

    try:
        config = TaxYearConfig(**data)
    except (TypeError, ValidationError) as e:
        raise ConfigurationError(str(path), str(e)) from e

    logger.info("Loaded tax year %d constants from %s (UVT %s)", config.tax_year, path, config.uvt_value)
    return config


def resolve_tax_year_config(year: int | None = None, path: Path | None = None) -> TaxYearConfig:
    """Config file if given, else the built-in table for ``year`` (or the default year)."""
    if path is not None:
        return load_tax_year_config(path)
    return get_tax_year_config(year if year is not None else default_tax_year())


@dataclass(frozen=True)
class AuditSettings:
    """Where calculation audit records are sent."""

    db_path: Path | None = None
    webhook_url: str | None = None
    webhook_token: str | None = None
    webhook_timeout: float = 10.0
    webhook_max_retries: int = 3

    @classmethod
    def from_env(cls) -> "AuditSettings":
        db = os.environ.get("EVTAX_AUDIT_DB")
        try:
            timeout = float(os.environ.get("EVTAX_AUDIT_WEBHOOK_TIMEOUT", "10"))
            retries = int(os.environ.get("EVTAX_AUDIT_WEBHOOK_MAX_RETRIES", "3"))
        except ValueError as e:
            raise ConfigurationError("environment", f"invalid webhook setting: {e}") from e
        return cls(
            db_path=Path(db) if db else None,
            webhook_url=os.environ.get("EVTAX_AUDIT_WEBHOOK_URL") or None,
            webhook_token=os.environ.get("EVTAX_AUDIT_WEBHOOK_TOKEN") or None,
            webhook_timeout=timeout,
            webhook_max_retries=retries,
        )
