"""evtax: income-tax benefit calculator for electric-vehicle purchases in Colombia."""

__version__ = "0.1.0"
