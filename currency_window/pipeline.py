"""Collect daily publications over the lookback window and aggregate them."""

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import date

import pandas as pd

from currency_window.config import Settings
from currency_window.data import CbrRatesFetcher
from currency_window.errors import DecodeError, FetchError, RateReportError
from currency_window.models import CurrencyStat, DailyRates, DayFailure
from currency_window.stats import aggregate_day, lookback_window


logger = logging.getLogger(__name__)

REPORT_COLUMNS = ["currency", "min", "min_date", "max", "max_date", "average", "observations"]


@dataclass
class WindowReport:
    """Aggregated statistics for one lookback window."""

    start: date
    stop: date
    period: int
    stats: dict[str, CurrencyStat]
    failures: list[DayFailure] = field(default_factory=list)
    days_aggregated: int = 0
    market: str = ""  # publication name, e.g. "Foreign Currency Market"

    def sorted_stats(self) -> list[tuple[str, CurrencyStat]]:
        return sorted(self.stats.items())

    def to_frame(self) -> pd.DataFrame:
        """One row per currency, ordered by code."""
        rows = [
            {
                "currency": code,
                "min": stat.min_value,
                "min_date": stat.min_date,
                "max": stat.max_value,
                "max_date": stat.max_date,
                "average": stat.average(self.period),
                "observations": stat.observations,
            }
            for code, stat in self.sorted_stats()
        ]
        return pd.DataFrame(rows, columns=REPORT_COLUMNS)


class RateWindowCollector:
    """Fetches every day of the window and folds the results."""

    def __init__(
        self,
        settings: Settings | None = None,
        fetcher: CbrRatesFetcher | None = None,
        today: date | None = None,
    ) -> None:
        self.settings = settings or Settings()
        self.settings.validate()
        self.fetcher = fetcher or CbrRatesFetcher(self.settings)
        self.today = today

    def _load_day(self, day: date) -> DailyRates | DayFailure:
        try:
            return self.fetcher.fetch_day(day)
        except FetchError as e:
            if self.settings.strict:
                raise
            logger.warning(f"Skipping {day}: fetch failed: {e}")
            return DayFailure(day=day, kind="fetch", message=str(e))
        except DecodeError as e:
            if self.settings.strict:
                raise
            logger.warning(f"Skipping {day}: {e}")
            return DayFailure(day=day, kind="decode", message=str(e))

    def collect(self) -> WindowReport:
        """
        Run the whole window.

        Fetch and decode run on a thread pool; results are folded here in
        date order so tie dates are always the earliest day.

        Raises:
            FetchError, DecodeError: In strict mode, the first failure
            RateReportError: No day of the window could be retrieved
        """
        days = lookback_window(self.today, self.settings.period_days)
        start, stop = days[0], days[-1]
        logger.info(f"Collecting rates for {len(days)} days ({start} - {stop})")

        stats: dict[str, CurrencyStat] = {}
        failures: list[DayFailure] = []
        aggregated = 0
        market = ""

        with ThreadPoolExecutor(max_workers=self.settings.max_workers) as pool:
            futures: list[Future] = [pool.submit(self._load_day, day) for day in days]
            try:
                for future in futures:
                    outcome = future.result()
                    if isinstance(outcome, DayFailure):
                        failures.append(outcome)
                        continue
                    aggregate_day(stats, outcome)
                    market = outcome.market or market
                    aggregated += 1
            except RateReportError:
                for pending in futures:
                    pending.cancel()
                logger.error("Aborting run on first failure (strict mode)")
                raise

        if failures:
            logger.warning(
                f"Skipped {len(failures)} of {len(days)} days: "
                f"{[str(f.day) for f in failures]}"
            )
        if aggregated == 0:
            raise RateReportError(f"No daily publications could be retrieved for {start} - {stop}")

        logger.info(f"Aggregated {aggregated} days, {len(stats)} currencies ({market or 'unnamed market'})")
        return WindowReport(
            start=start,
            stop=stop,
            period=self.settings.period_days,
            stats=stats,
            failures=failures,
            days_aggregated=aggregated,
            market=market,
        )
