"""Database layer for the calculation audit log."""

from evtax.db.repository import CalculationLogRepository
from evtax.db.schema import create_schema

__all__ = ["CalculationLogRepository", "create_schema"]
