"""Data models for daily rates and window statistics."""

from dataclasses import dataclass, field
from datetime import date


@dataclass(frozen=True)
class DailyRateEntry:
    """Single currency quote from a daily publication."""

    char_code: str
    nominal: int  # quoted per this many units
    value: float
    published: date
    num_code: str = ""
    name: str = ""
    valute_id: str = ""

    @property
    def normalized(self) -> float:
        """Rate for a single unit of the currency."""
        return self.value / self.nominal


@dataclass
class DailyRates:
    """One decoded daily publication."""

    published: date
    entries: list[DailyRateEntry] = field(default_factory=list)
    market: str = ""


@dataclass
class CurrencyStat:
    """Running statistics for one currency across the window."""

    min_value: float
    min_date: date
    max_value: float
    max_date: date
    total: float
    observations: int = 1

    @classmethod
    def first(cls, value: float, on: date) -> "CurrencyStat":
        return cls(min_value=value, min_date=on, max_value=value, max_date=on, total=value)

    def observe(self, value: float, on: date) -> None:
        # Strict comparisons: on ties the earliest date is kept
        if value > self.max_value:
            self.max_value = value
            self.max_date = on
        if value < self.min_value:
            self.min_value = value
            self.min_date = on
        self.total += value
        self.observations += 1

    def average(self, period: int) -> float:
        """
        Mean over the whole window.

        Divides by the window length, not by the number of observations,
        so currencies missing on some days are averaged as if those days
        contributed zero.
        """
        return self.total / period


@dataclass(frozen=True)
class DayFailure:
    """A requested date that was skipped."""

    day: date
    kind: str  # "fetch" or "decode"
    message: str
