"""Calendar window for the lookback period."""

from datetime import date

import pandas as pd


DEFAULT_PERIOD = 90


def lookback_window(today: date | None = None, period: int = DEFAULT_PERIOD) -> list[date]:
    """
    Consecutive calendar days ending at today, inclusive.

    Args:
        today: Last day of the window (defaults to the current local date)
        period: Number of days in the window

    Returns:
        Ascending list of exactly ``period`` dates
    """
    if period < 1:
        raise ValueError(f"period must be at least 1, got {period}")
    end = today or date.today()
    days = pd.date_range(end=pd.Timestamp(end), periods=period, freq="D")
    return [ts.date() for ts in days]
