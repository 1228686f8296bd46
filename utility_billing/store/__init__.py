"""In-memory ledger store."""

from utility_billing.store.ledger import BillingLedger

__all__ = ["BillingLedger"]
