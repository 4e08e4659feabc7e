"""Currency and lease-date formatting helpers."""

import re
from datetime import date, datetime
from typing import Any

from dateutil import parser as date_parser

CURRENCY_SYMBOLS = {"NGN": "₦"}

_SLASH_DATE = re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{4})$")


def format_naira(amount: float, currency_code: str = "NGN") -> str:
    """Format an amount as whole currency units, e.g. ``₦2,500,000``.

    Negative amounts keep their sign in front of the symbol.
    """
    symbol = CURRENCY_SYMBOLS.get(currency_code, f"{currency_code} ")
    rounded = round(amount)
    sign = "-" if rounded < 0 else ""
    return f"{sign}{symbol}{abs(rounded):,}"


def parse_lease_date(value: Any) -> date:
    """Parse a lease date.

    Accepts ISO dates (``2025-09-10``), day-first slash dates
    (``21/05/2025``) and long-form dates (``10 September 2025``,
    ``October 25, 2025``).

    Raises:
        ValueError: If the value cannot be read as a date
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise ValueError(f"Expected a date string, got {type(value).__name__}")

    text = value.strip()
    if not text:
        raise ValueError("Date value is empty")

    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        pass

    match = _SLASH_DATE.match(text)
    if match:
        day, month, year = (int(part) for part in match.groups())
        return date(year, month, day)

    try:
        return date_parser.parse(text).date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Unrecognised date: {value!r}") from e


def format_long_date(value: date) -> str:
    """Render a date as ``10 September 2025``."""
    return f"{value.day} {value.strftime('%B %Y')}"
