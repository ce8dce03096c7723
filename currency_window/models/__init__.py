"""Data models."""

from currency_window.models.rates import CurrencyStat, DailyRateEntry, DailyRates, DayFailure

__all__ = ["CurrencyStat", "DailyRateEntry", "DailyRates", "DayFailure"]
