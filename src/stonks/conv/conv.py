from __future__ import annotations

import datetime as dt
import logging
import re
from decimal import Decimal, InvalidOperation

NUM_CLEAN_RE = re.compile(r"[,$\s]")  # thousands separators, currency sign, spaces
US_DATE_RE = re.compile(r"^\d{2}/\d{2}/\d{4}$")
US_DATE_FMT = "%m/%d/%Y"

logger = logging.getLogger(__name__)


def to_dec(
    s: str | int | Decimal | None, default: Decimal = Decimal("0")
) -> Decimal:
    """Convert broker numeric strings to Decimal, coercing blanks and junk to default.

    Handles:
    - None, "" -> default
    - "1,234.56", "$15.00" -> Decimal
    - anything else unparsable -> default (logged)
    """
    if s is None:
        return default
    if isinstance(s, Decimal):
        return s
    if isinstance(s, int):
        return Decimal(s)

    s_stripped = s.strip()
    if not s_stripped:
        return default

    try:
        return Decimal(NUM_CLEAN_RE.sub("", s_stripped))
    except InvalidOperation:
        logger.error("Failed to parse number from: %r; using %s", s, default)
        return default


def to_dec_strict(s: str | int | Decimal | None) -> Decimal:
    """Convert broker numeric strings to Decimal.

    Raises ValueError on missing or invalid data. Binary floats are refused so
    that money never goes through float rounding.
    """
    if s is None:
        raise ValueError("Value is None")
    if isinstance(s, Decimal):
        return s
    if isinstance(s, float):
        raise ValueError(f"Refusing binary float value: {s!r}")
    if isinstance(s, int):
        return Decimal(s)

    s_stripped = s.strip()
    if not s_stripped:
        raise ValueError("Value is empty string")

    try:
        value = Decimal(NUM_CLEAN_RE.sub("", s_stripped))
    except InvalidOperation as e:
        raise ValueError(f"Invalid decimal format: {s!r}") from e
    if not value.is_finite():
        raise ValueError(f"Non-finite decimal: {s!r}")
    return value


def parse_us_date(d: str) -> dt.date:
    """Parse a strict 'MM/DD/YYYY' date as written in TD Ameritrade exports."""
    d = d.strip()
    if not US_DATE_RE.match(d):
        raise ValueError(f"Date {d!r} does not match MM/DD/YYYY")
    return dt.datetime.strptime(d, US_DATE_FMT).date()
