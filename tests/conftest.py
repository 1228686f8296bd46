"""Pytest configuration and fixtures."""

import pytest

from utility_billing.clock import BlockClock
from utility_billing.store.ledger import BillingLedger


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def clock() -> BlockClock:
    """Clock positioned at block 1000."""
    return BlockClock(height=1000)


@pytest.fixture
def ledger(clock: BlockClock) -> BillingLedger:
    """Fresh ledger with default rates."""
    return BillingLedger(clock=clock)


@pytest.fixture
def customer_id() -> int:
    """Sample customer ID."""
    return 123


@pytest.fixture
def registered(ledger: BillingLedger, customer_id: int) -> BillingLedger:
    """Ledger with one active customer."""
    ledger.register_customer(
        customer_id,
        "John Doe",
        "123 Main St, City, State 12345",
        "555-123-4567",
        "john@example.com",
    )
    return ledger
