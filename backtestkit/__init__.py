"""Building blocks for event-driven trading backtests: events, portfolio, metrics, analytics and parameter search."""

__version__ = "0.1.0"