"""Coercion helpers shared by request schemas and storage backends."""

from datetime import date, datetime, time, timezone
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any

CENTS = Decimal("0.01")


def to_amount(value: Any) -> Decimal:
    """
    Coerce a money value to a positive Decimal with two decimal places.

    Accepts Decimal, int, float or numeric text. Raises ValueError for
    anything that is not a finite number greater than zero.
    """
    if isinstance(value, bool):
        raise ValueError("Amount must be a number")
    if isinstance(value, str):
        value = value.strip()
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
        if not amount.is_finite():
            raise ValueError("Amount must be a number")
        amount = amount.quantize(CENTS, rounding=ROUND_HALF_UP)
    except (InvalidOperation, TypeError):
        raise ValueError("Amount must be a number")
    if amount <= 0:
        raise ValueError("Amount must be positive")
    return amount


def to_timestamp(value: Any) -> datetime:
    """
    Normalize a date-only or full timestamp value to a naive UTC datetime.

    Strings may be ``YYYY-MM-DD`` or any ISO 8601 timestamp, including a
    trailing ``Z``.
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc).replace(tzinfo=None)
        return value
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            raise ValueError("Date is required")
        if len(text) == 10:
            return datetime.combine(date.fromisoformat(text), time.min)
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        return to_timestamp(datetime.fromisoformat(text))
    raise ValueError("Date must be an ISO date or timestamp")


def month_start(moment: datetime) -> datetime:
    """First instant of the calendar month containing ``moment``."""
    return datetime(moment.year, moment.month, 1)


def shift_month(start: datetime, months: int) -> datetime:
    """Move a month start forwards (or backwards for negative values)."""
    index = start.year * 12 + (start.month - 1) + months
    return datetime(index // 12, index % 12 + 1, 1)


MONTH_ABBREVIATIONS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


def month_label(moment: datetime) -> str:
    """English "Mon YYYY" label, independent of the process locale."""
    return f"{MONTH_ABBREVIATIONS[moment.month - 1]} {moment.year}"


def utc_now() -> datetime:
    """Current time as naive UTC, the time base of every stored timestamp."""
    return datetime.now(timezone.utc).replace(tzinfo=None)
