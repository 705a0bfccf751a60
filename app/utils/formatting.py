"""Display helpers registered as Jinja filters."""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal


def format_currency(amount_in_cents) -> str:
    """Return ``amount_in_cents`` as US dollars, e.g. ``"$1,234.56"``."""

    if amount_in_cents is None:
        amount_in_cents = 0
    dollars = Decimal(int(amount_in_cents)) / 100
    sign = "-" if dollars < 0 else ""
    return f"{sign}${abs(dollars):,.2f}"


def format_date_to_local(value) -> str:
    """Return a short US style date such as ``"Dec 6, 2022"``."""

    if value is None:
        return ""
    if isinstance(value, str):
        value = date.fromisoformat(value[:10])
    if isinstance(value, datetime):
        value = value.date()
    return f"{value:%b} {value.day}, {value.year}"
