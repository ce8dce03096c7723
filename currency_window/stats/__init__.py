"""Window statistics."""

from currency_window.stats.aggregator import aggregate_day, aggregate_days
from currency_window.stats.window import lookback_window

__all__ = ["aggregate_day", "aggregate_days", "lookback_window"]
