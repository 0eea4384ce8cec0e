"""Fleet cash-flow planner — seasonal forecasting and break-even solving."""

__version__ = "1.0.0"
