"""Decoder for the CBR daily rate XML document."""

import codecs
import logging
import re
from datetime import date, datetime

from lxml import etree

from currency_window.errors import DecodeError
from currency_window.models import DailyRateEntry, DailyRates


logger = logging.getLogger(__name__)

# Codec names as reported by codecs.lookup()
SUPPORTED_ENCODINGS = frozenset({"cp1251", "utf-8"})

DATE_FORMATS = ("%d.%m.%Y", "%d/%m/%Y")

_XML_DECLARATION = re.compile(
    rb"""^\s*<\?xml[^>]*?\bencoding\s*=\s*["']([A-Za-z][A-Za-z0-9._:-]*)["']"""
)

_WIDE_BOMS = (
    codecs.BOM_UTF32_LE,
    codecs.BOM_UTF32_BE,
    codecs.BOM_UTF16_LE,
    codecs.BOM_UTF16_BE,
)


def parse_decimal(text: str | None) -> float:
    """Parse a number that uses a comma as the decimal separator."""
    cleaned = (text or "").strip().replace(",", ".", 1)
    try:
        return float(cleaned)
    except ValueError as e:
        raise DecodeError(f"Unparseable number: {text!r}") from e


def declared_encoding(raw: bytes) -> str | None:
    """Return the encoding named in the XML prolog, if any."""
    if raw.startswith(codecs.BOM_UTF8):
        raw = raw[len(codecs.BOM_UTF8):]
    match = _XML_DECLARATION.match(raw)
    return match.group(1).decode("ascii") if match else None


def _supported_codec(name: str) -> str:
    try:
        codec = codecs.lookup(name).name
    except LookupError as e:
        raise DecodeError(f"Unknown charset: {name}") from e
    if codec not in SUPPORTED_ENCODINGS:
        raise DecodeError(f"Unsupported charset: {name}")
    return codec


def _check_encoding(raw: bytes) -> str:
    # Multi-byte encodings hide the prolog from a byte-level scan
    if raw.startswith(_WIDE_BOMS) or b"\x00" in raw:
        raise DecodeError("Unsupported charset: UTF-16/UTF-32 document")
    # XML without a declaration is UTF-8 by definition
    return _supported_codec(declared_encoding(raw) or "utf-8")


def _parse_date(text: str | None) -> date:
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime((text or "").strip(), fmt).date()
        except ValueError:
            continue
    raise DecodeError(f"Unparseable publication date: {text!r}")


def _required_text(element: etree._Element, tag: str) -> str:
    text = element.findtext(tag)
    if text is None or not text.strip():
        raise DecodeError(f"Currency record is missing <{tag}>")
    return text.strip()


def _parse_entry(element: etree._Element, published: date) -> DailyRateEntry:
    char_code = _required_text(element, "CharCode")

    nominal_text = _required_text(element, "Nominal")
    try:
        nominal = int(nominal_text)
    except ValueError as e:
        raise DecodeError(f"{char_code}: unparseable nominal {nominal_text!r}") from e
    if nominal <= 0:
        raise DecodeError(f"{char_code}: nominal must be positive, got {nominal}")

    value = parse_decimal(_required_text(element, "Value"))
    if value < 0:
        raise DecodeError(f"{char_code}: negative rate {value}")

    return DailyRateEntry(
        char_code=char_code,
        nominal=nominal,
        value=value,
        published=published,
        num_code=(element.findtext("NumCode") or "").strip(),
        name=(element.findtext("Name") or "").strip(),
        valute_id=element.get("ID", ""),
    )


def decode_daily_rates(raw: bytes) -> DailyRates:
    """
    Decode one daily publication.

    Args:
        raw: Response body exactly as received

    Returns:
        DailyRates dated by the document's own Date attribute, which can
        differ from the requested date on days without a publication

    Raises:
        DecodeError: Unsupported charset, malformed markup or bad field
    """
    codec = _check_encoding(raw)

    parser = etree.XMLParser(resolve_entities=False, no_network=True)
    try:
        root = etree.fromstring(raw, parser=parser)
    except etree.XMLSyntaxError as e:
        raise DecodeError(f"Malformed rate document: {e}") from e

    # The encoding the parser actually applied must agree with the check above
    applied = root.getroottree().docinfo.encoding
    if applied:
        codec = _supported_codec(applied)

    if root.tag != "ValCurs":
        raise DecodeError(f"Unexpected root element <{root.tag}>")

    published = _parse_date(root.get("Date"))
    entries = [_parse_entry(valute, published) for valute in root.findall("Valute")]

    logger.debug(f"Decoded {len(entries)} rates for {published} ({codec})")
    return DailyRates(published=published, entries=entries, market=root.get("name", ""))
