from datetime import date, datetime


def format_currency(value: float) -> str:
    """Format an amount as US dollars, e.g. ``$1,234.50`` or ``-$5.00``."""
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.2f}"


def format_date(value: date | datetime | None) -> str:
    """Short month/day/year display, e.g. ``5/1/2023``."""
    if value is None:
        return ""
    return f"{value.month}/{value.day}/{value.year}"
