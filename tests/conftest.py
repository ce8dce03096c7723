"""
Shared pytest fixtures for the rate window test suite.
"""

from datetime import date

import pytest

from currency_window.config import Settings
from currency_window.models import DailyRateEntry, DailyRates


def build_document(
    published: str,
    rates: list[tuple[str, int, str, str]],
    encoding: str | None = "windows-1251",
) -> bytes:
    """Synthetic XML_daily document; rates are (code, nominal, value, name)."""
    records = "".join(
        f'<Valute ID="R{index:05d}">'
        f"<NumCode>{index:03d}</NumCode>"
        f"<CharCode>{code}</CharCode>"
        f"<Nominal>{nominal}</Nominal>"
        f"<Name>{name}</Name>"
        f"<Value>{value}</Value>"
        f"</Valute>"
        for index, (code, nominal, value, name) in enumerate(rates, start=1)
    )
    prolog = f'<?xml version="1.0" encoding="{encoding}"?>' if encoding else ""
    text = f'{prolog}<ValCurs Date="{published}" name="Foreign Currency Market">{records}</ValCurs>'
    return text.encode(encoding or "utf-8")


def daily(published: date, **values: float) -> DailyRates:
    """DailyRates with nominal 1 for every code given as keyword."""
    return DailyRates(
        published=published,
        entries=[
            DailyRateEntry(char_code=code, nominal=1, value=value, published=published)
            for code, value in values.items()
        ],
    )


@pytest.fixture
def make_document():
    return build_document


@pytest.fixture
def sample_document():
    return build_document(
        "17.10.2026",
        [
            ("USD", 1, "90,0000", "Доллар США"),
            ("JPY", 100, "55,1234", "Japanese Yen"),
            ("EUR", 1, "98,7654", "Euro"),
        ],
    )


@pytest.fixture
def fast_settings():
    """Settings without delays, for tests."""
    return Settings(
        base_url="https://rates.test/XML_daily_eng.asp",
        period_days=3,
        request_timeout=5.0,
        request_delay=0.0,
        max_retries=3,
        retry_backoff=0.0,
        retry_max_wait=0.0,
        max_workers=2,
        strict=False,
    )
