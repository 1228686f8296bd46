"""Charge, due date and late fee arithmetic."""

from utility_billing.models.billing import RateSchedule

DEFAULT_DUE_OFFSET_BLOCKS = 4320  # 30 days
DEFAULT_LATE_FEE_DIVISOR = 20  # 5%


def calculate_charge(schedule: RateSchedule, usage: int) -> int:
    """Base fee plus usage priced at the schedule's per-unit rate."""
    return schedule.charge(usage)


def calculate_due_date(creation_block: int, offset: int = DEFAULT_DUE_OFFSET_BLOCKS) -> int:
    """Return the block height at which a bill created at ``creation_block`` is due."""
    return creation_block + offset


def calculate_late_fee(total_amount: int, divisor: int = DEFAULT_LATE_FEE_DIVISOR) -> int:
    """Return the late fee for ``total_amount``, truncated toward zero.

    Parameters
    ----------
    total_amount : int
        Bill total.
    divisor : int
        ``20`` charges 5% of the total.

    Returns
    -------
    int
        Late fee.
    """
    fee = abs(total_amount) // divisor
    return fee if total_amount >= 0 else -fee
