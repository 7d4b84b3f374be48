"""Calculation result summary report generator."""

from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from evtax.formatting import format_cop, format_percent, format_uvt
from evtax.models.calculation import CalculationResult

TEMPLATE_DIR = Path(__file__).parent / "templates"


class ResultSummaryGenerator:
    """Generates a human-readable summary of a tax benefit calculation."""

    def __init__(self) -> None:
        self.env = Environment(
            loader=FileSystemLoader(str(TEMPLATE_DIR)),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.filters["cop"] = format_cop
        self.env.filters["uvt"] = format_uvt
        self.env.filters["pct"] = format_percent

    def render(self, result: CalculationResult) -> str:
        """Render the result summary report."""
        template = self.env.get_template("result_summary.txt")
        return template.render(res=result)
