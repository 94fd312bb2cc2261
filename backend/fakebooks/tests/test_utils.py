from datetime import date, datetime

from fakebooks.utils import format_currency, format_date


def test_format_currency():
    assert format_currency(0) == "$0.00"
    assert format_currency(5) == "$5.00"
    assert format_currency(1234.5) == "$1,234.50"
    assert format_currency(-5) == "-$5.00"
    assert format_currency(1000000.456) == "$1,000,000.46"


def test_format_date():
    assert format_date(date(2023, 5, 1)) == "5/1/2023"
    assert format_date(datetime(2022, 12, 31, 23, 59)) == "12/31/2022"
    assert format_date(None) == ""
