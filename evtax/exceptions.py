"""Custom exceptions for evtax."""


class CalculatorError(Exception):
    """Base exception for calculator errors."""


class ConfigurationError(CalculatorError):
    """Raised when tax-year constants are missing or inconsistent."""

    def __init__(self, source: str, message: str):
        self.source = source
        super().__init__(f"Configuration error in {source}: {message}")


class AuditSinkError(CalculatorError):
    """Raised when an audit sink cannot store a record."""

    def __init__(self, sink: str, message: str):
        self.sink = sink
        super().__init__(f"Audit sink '{sink}' failed: {message}")
