"""Per-currency min/max/sum fold over daily publications."""

from typing import Iterable

from currency_window.models import CurrencyStat, DailyRates


def aggregate_day(stats: dict[str, CurrencyStat], daily: DailyRates) -> dict[str, CurrencyStat]:
    """Fold one day's entries into the running stats (mutated in place)."""
    for entry in daily.entries:
        value = entry.normalized
        stat = stats.get(entry.char_code)
        if stat is None:
            stats[entry.char_code] = CurrencyStat.first(value, entry.published)
        else:
            stat.observe(value, entry.published)
    return stats


def aggregate_days(
    days: Iterable[DailyRates], stats: dict[str, CurrencyStat] | None = None
) -> dict[str, CurrencyStat]:
    """Fold publications in the given order, oldest first for stable tie dates."""
    stats = {} if stats is None else stats
    for daily in days:
        aggregate_day(stats, daily)
    return stats
