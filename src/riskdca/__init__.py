"""Risk-weighted dollar-cost-averaging backtester."""

__version__ = "0.1.0"
