"""Bill model for the billing domain."""

from dataclasses import dataclass


@dataclass
class Bill:
    """Utility bill for one customer and billing period.

    ``is_paid`` is the only field changed after the bill is generated.
    """

    customer_id: int
    billing_period: int  # YYYYMM
    water_usage: int
    gas_usage: int
    electric_usage: int
    water_charges: int
    gas_charges: int
    electric_charges: int
    total_amount: int
    due_date: int  # block height
    is_paid: bool = False

    @property
    def key(self) -> tuple[int, int]:
        """Ledger key of the bill."""
        return (self.customer_id, self.billing_period)

    def is_overdue(self, current_block: int) -> bool:
        """Return True when unpaid and ``current_block`` is past the due date."""
        return current_block > self.due_date and not self.is_paid
