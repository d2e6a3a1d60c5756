"""
Core Utilities

Shared helpers used across the application.
"""
from datetime import datetime, timezone
from decimal import Decimal, ROUND_HALF_UP


def utcnow() -> datetime:
    """
    Return timezone-aware UTC datetime.

    Use this instead of datetime.utcnow() which returns naive datetime.
    """
    return datetime.now(timezone.utc)


def to_minor_units(amount: float) -> int:
    """Convert a major-unit amount (pounds) to minor units (pence), rounding half up."""
    return int((Decimal(str(amount)) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def round_money(amount: float) -> float:
    """Round a major-unit amount to whole pence, matching to_minor_units()."""
    return to_minor_units(amount) / 100
