import datetime as dt
import logging
from decimal import Decimal

import pytest

from stonks.conv import parse_us_date, to_dec, to_dec_strict


def test_to_dec_standard():
    assert to_dec("123") == Decimal("123")
    assert to_dec("123.45") == Decimal("123.45")
    assert to_dec("1,234.56") == Decimal("1234.56")
    assert to_dec("$15.00") == Decimal("15.00")
    assert to_dec(100) == Decimal("100")
    assert to_dec(Decimal("5.5")) == Decimal("5.5")


def test_to_dec_blank_is_default():
    assert to_dec(None) == Decimal("0")
    assert to_dec("") == Decimal("0")
    assert to_dec("   ") == Decimal("0")
    assert to_dec(None, default=Decimal("-1")) == Decimal("-1")


def test_to_dec_invalid_format(caplog):
    with caplog.at_level(logging.ERROR):
        assert to_dec("invalid") == Decimal("0")
        assert "Failed to parse number" in caplog.text


def test_to_dec_strict_standard():
    assert to_dec_strict("100") == Decimal("100")
    assert to_dec_strict(" -1,000.25 ") == Decimal("-1000.25")
    assert to_dec_strict(10) == Decimal("10")


def test_to_dec_strict_is_exact():
    total = to_dec_strict("0.1") + to_dec_strict("0.2")
    assert total == Decimal("0.3")


def test_to_dec_strict_raises():
    with pytest.raises(ValueError, match="Value is None"):
        to_dec_strict(None)

    with pytest.raises(ValueError, match="Value is empty string"):
        to_dec_strict("")

    with pytest.raises(ValueError, match="Invalid decimal format"):
        to_dec_strict("abc")

    with pytest.raises(ValueError, match="Non-finite"):
        to_dec_strict("NaN")

    with pytest.raises(ValueError, match="binary float"):
        to_dec_strict(1.5)


def test_parse_us_date():
    assert parse_us_date("01/15/2024") == dt.date(2024, 1, 15)
    assert parse_us_date(" 12/31/2023 ") == dt.date(2023, 12, 31)


@pytest.mark.parametrize(
    "value",
    ["2024-01-15", "1/15/2024", "13/01/2024", "02/30/2024", "DATE", ""],
)
def test_parse_us_date_rejects_other_shapes(value):
    with pytest.raises(ValueError):
        parse_us_date(value)
