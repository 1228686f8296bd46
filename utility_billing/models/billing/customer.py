"""Customer model for the billing domain."""

from dataclasses import dataclass


@dataclass
class Customer:
    """Utility customer entity.

    Customers are never removed from the ledger; deactivation only clears
    ``is_active``.
    """

    customer_id: int
    name: str
    address: str
    phone: str
    email: str
    is_active: bool = True
