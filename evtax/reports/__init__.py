"""Report generation for evtax."""

from evtax.reports.result_summary import ResultSummaryGenerator

__all__ = ["ResultSummaryGenerator"]
