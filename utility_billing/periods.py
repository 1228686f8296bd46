"""Billing period helpers.

A billing period is an integer ``YYYYMM``: ``202401`` is January 2024.
"""

from __future__ import annotations

from typing import Iterator

from utility_billing.exceptions import InvalidPeriodError

MIN_YEAR = 1900
MAX_YEAR = 9999


def is_valid_period(period: int) -> bool:
    """Return True if ``period`` encodes a real year and month."""
    if isinstance(period, bool) or not isinstance(period, int):
        return False
    year, month = divmod(period, 100)
    return MIN_YEAR <= year <= MAX_YEAR and 1 <= month <= 12


def validate_period(period: int) -> int:
    """Return ``period`` unchanged or raise ``InvalidPeriodError``."""
    if not is_valid_period(period):
        raise InvalidPeriodError(f"Invalid billing period {period!r}")
    return period


def next_period(period: int) -> int:
    """Return the billing period following ``period``."""
    year, month = divmod(validate_period(period), 100)
    if month == 12:
        return (year + 1) * 100 + 1
    return year * 100 + month + 1


def period_range(start: int, count: int) -> Iterator[int]:
    """Yield ``count`` consecutive billing periods starting at ``start``."""
    period = validate_period(start)
    for _ in range(count):
        yield period
        period = next_period(period)
