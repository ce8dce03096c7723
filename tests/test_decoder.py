from datetime import date

import pytest

from currency_window.data.decoder import decode_daily_rates, declared_encoding, parse_decimal
from currency_window.errors import DecodeError


def test_parse_decimal_comma_separator():
    assert parse_decimal("12,3456") == 12.3456
    assert parse_decimal(" 90,0 ") == 90.0
    assert parse_decimal("7.5") == 7.5


@pytest.mark.parametrize("text", ["", None, "abc", "1,2,3"])
def test_parse_decimal_rejects_garbage(text):
    with pytest.raises(DecodeError):
        parse_decimal(text)


def test_decode_windows_1251_document(sample_document):
    rates = decode_daily_rates(sample_document)

    assert rates.published == date(2026, 10, 17)
    assert rates.market == "Foreign Currency Market"
    assert [e.char_code for e in rates.entries] == ["USD", "JPY", "EUR"]

    usd = rates.entries[0]
    assert usd.name == "Доллар США"
    assert usd.nominal == 1
    assert usd.value == 90.0
    assert usd.normalized == 90.0
    assert usd.published == date(2026, 10, 17)
    assert usd.valute_id == "R00001"
    assert usd.num_code == "001"


def test_decode_normalizes_by_nominal(sample_document):
    jpy = decode_daily_rates(sample_document).entries[1]

    assert jpy.nominal == 100
    assert jpy.value == 55.1234
    assert jpy.normalized == pytest.approx(0.551234)


def test_publication_date_comes_from_document(make_document):
    # Requested a Sunday, the service answers with Saturday's publication
    rates = decode_daily_rates(make_document("10.10.2026", [("USD", 1, "91,5", "US Dollar")]))
    assert rates.published == date(2026, 10, 10)
    assert rates.entries[0].published == date(2026, 10, 10)


def test_utf8_and_undeclared_encoding_accepted(make_document):
    explicit = decode_daily_rates(make_document("17.10.2026", [("USD", 1, "1,0", "x")], "utf-8"))
    implicit = decode_daily_rates(make_document("17.10.2026", [("USD", 1, "1,0", "x")], None))

    assert explicit.entries[0].value == 1.0
    assert implicit.entries[0].value == 1.0


def test_unsupported_declared_encoding(make_document):
    raw = make_document("17.10.2026", [("USD", 1, "90,0", "Доллар США")], "koi8-r")

    with pytest.raises(DecodeError, match="Unsupported charset"):
        decode_daily_rates(raw)


def test_unknown_declared_encoding():
    raw = b'<?xml version="1.0" encoding="x-no-such-charset"?><ValCurs Date="17.10.2026"/>'

    with pytest.raises(DecodeError, match="Unknown charset"):
        decode_daily_rates(raw)


def test_declared_encoding_reads_prolog():
    assert declared_encoding(b'<?xml version="1.0" encoding="windows-1251"?><a/>') == "windows-1251"
    assert declared_encoding(b"<?xml version='1.0' encoding='UTF-8'?><a/>") == "UTF-8"
    assert declared_encoding(b"<a/>") is None


def test_empty_currency_list(make_document):
    rates = decode_daily_rates(make_document("17.10.2026", []))
    assert rates.entries == []
    assert rates.published == date(2026, 10, 17)


@pytest.mark.parametrize(
    "raw",
    [
        b'<?xml version="1.0" encoding="windows-1251"?><ValCurs Date="17.10.2026">',
        b'<?xml version="1.0" encoding="windows-1251"?><Error>no data</Error>',
        b'<?xml version="1.0" encoding="windows-1251"?><ValCurs Date="2026-10-17"/>',
        b'<?xml version="1.0" encoding="windows-1251"?><ValCurs/>',
    ],
    ids=["truncated", "wrong-root", "bad-date", "missing-date"],
)
def test_malformed_documents(raw):
    with pytest.raises(DecodeError):
        decode_daily_rates(raw)


@pytest.mark.parametrize(
    "rate",
    [
        ("USD", 1, "n/a", "US Dollar"),
        ("USD", 0, "90,0", "US Dollar"),
        ("USD", "ten", "90,0", "US Dollar"),
        ("USD", 1, "-1,0", "US Dollar"),
        ("", 1, "90,0", "US Dollar"),
    ],
    ids=["bad-value", "zero-nominal", "bad-nominal", "negative", "no-code"],
)
def test_bad_currency_records(make_document, rate):
    with pytest.raises(DecodeError):
        decode_daily_rates(make_document("17.10.2026", [rate]))


@pytest.mark.parametrize("encoding", ["utf-16", "utf-16-le", "utf-32"])
def test_wide_encodings_rejected(make_document, encoding):
    # Declared UTF-16/32 prolog is not visible to a byte-level scan
    raw = make_document("17.10.2026", [("USD", 1, "90,0", "US Dollar")], encoding)

    with pytest.raises(DecodeError, match="Unsupported charset"):
        decode_daily_rates(raw)


def test_applied_encoding_checked_after_parse(make_document, monkeypatch):
    # Whatever the prolog scan concluded, the parser's own encoding decides
    raw = make_document("17.10.2026", [("USD", 1, "90,0", "US Dollar")])
    monkeypatch.setattr("currency_window.data.decoder._check_encoding", lambda raw: "cp1251")
    monkeypatch.setattr("currency_window.data.decoder.SUPPORTED_ENCODINGS", frozenset({"utf-8"}))

    with pytest.raises(DecodeError, match="Unsupported charset"):
        decode_daily_rates(raw)
