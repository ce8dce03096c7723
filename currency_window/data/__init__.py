"""Data fetching and decoding."""

from .cbr_fetcher import CbrRatesFetcher
from .decoder import decode_daily_rates, parse_decimal

__all__ = ["CbrRatesFetcher", "decode_daily_rates", "parse_decimal"]
