"""Command and query surface over the billing ledger.

Ledger errors never escape this layer: every command returns a ``Result``
whose ``error`` holds the ``ErrorCode`` of the rejected operation.
Successful commands record an ``Event`` in the outbox until published.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Any, Callable

from utility_billing.exceptions import LedgerError
from utility_billing.logging import log_context
from utility_billing.models.base import Event
from utility_billing.models.billing import Bill, Customer, ErrorCode
from utility_billing.sinks.serialization import to_dict
from utility_billing.store.ledger import BillingLedger

if TYPE_CHECKING:
    from utility_billing.sinks import Sink

logger = logging.getLogger(__name__)

EVENT_SOURCE = "utility-billing"


@dataclass
class Result:
    """Outcome of a ledger command."""

    success: bool
    data: dict[str, Any] = field(default_factory=dict)
    error: ErrorCode | None = None

    @classmethod
    def ok(cls, **data: Any) -> "Result":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: ErrorCode) -> "Result":
        return cls(success=False, error=error)


class BillingService:
    """Billing commands returning discriminated results."""

    def __init__(self, ledger: BillingLedger | None = None) -> None:
        self.ledger = ledger or BillingLedger()
        self.outbox: list[Event] = []

    def _run(self, operation: str, action: Callable[[], Result]) -> Result:
        try:
            return action()
        except LedgerError as exc:
            logger.warning(
                "%s rejected: %s",
                operation,
                exc,
                extra=log_context(error_code=exc.code, block=self.ledger.current_block),
            )
            return Result.fail(exc.code)

    def _record(self, event_type: str, subject: str, data: dict[str, Any]) -> None:
        self.outbox.append(
            Event(
                event_id=str(uuid.uuid4()),
                event_type=event_type,
                event_time=datetime.now(),
                source=EVENT_SOURCE,
                subject=subject,
                data=data,
                metadata={"block": self.ledger.current_block},
            )
        )

    # Commands
    def register_customer(self, customer_id: int, name: str, address: str, phone: str, email: str) -> Result:
        def action() -> Result:
            customer = self.ledger.register_customer(customer_id, name, address, phone, email)
            self._record("customer.registered", str(customer_id), to_dict(customer))
            return Result.ok(customer_id=customer.customer_id, is_active=customer.is_active)

        return self._run("register_customer", action)

    def deactivate_customer(self, customer_id: int) -> Result:
        def action() -> Result:
            customer = self.ledger.deactivate_customer(customer_id)
            self._record("customer.deactivated", str(customer_id), {"customer_id": customer_id})
            return Result.ok(customer_id=customer.customer_id, is_active=customer.is_active)

        return self._run("deactivate_customer", action)

    def generate_bill(
        self,
        customer_id: int,
        billing_period: int,
        water_usage: int,
        gas_usage: int,
        electric_usage: int,
    ) -> Result:
        def action() -> Result:
            bill = self.ledger.generate_bill(
                customer_id, billing_period, water_usage, gas_usage, electric_usage
            )
            payload = to_dict(bill)
            self._record("bill.generated", f"{customer_id}:{billing_period}", payload)
            return Result.ok(**payload)

        return self._run("generate_bill", action)

    def update_rate_schedule(self, utility_type: int, base_fee: int, rate_per_unit: int) -> Result:
        def action() -> Result:
            schedule = self.ledger.update_rate_schedule(utility_type, base_fee, rate_per_unit)
            payload = to_dict(schedule)
            self._record("rate_schedule.updated", str(int(schedule.utility_type)), payload)
            return Result.ok(**payload)

        return self._run("update_rate_schedule", action)

    def mark_bill_paid(self, customer_id: int, billing_period: int) -> Result:
        def action() -> Result:
            bill = self.ledger.mark_bill_paid(customer_id, billing_period)
            self._record(
                "bill.paid",
                f"{customer_id}:{billing_period}",
                {"customer_id": customer_id, "billing_period": billing_period},
            )
            return Result.ok(
                customer_id=bill.customer_id,
                billing_period=bill.billing_period,
                is_paid=bill.is_paid,
            )

        return self._run("mark_bill_paid", action)

    # Queries
    def is_overdue(self, customer_id: int, billing_period: int, current_block: int | None = None) -> bool:
        return self.ledger.is_overdue(customer_id, billing_period, current_block)

    def calculate_late_fee(self, total_amount: int) -> int:
        return self.ledger.calculate_late_fee(total_amount)

    def get_customer(self, customer_id: int) -> Customer | None:
        return self.ledger.get_customer(customer_id)

    def get_bill(self, customer_id: int, billing_period: int) -> Bill | None:
        return self.ledger.get_bill(customer_id, billing_period)

    def get_rate_schedule(self, utility_type: int) -> Result:
        def action() -> Result:
            return Result.ok(**to_dict(self.ledger.get_rate_schedule(utility_type)))

        return self._run("get_rate_schedule", action)

    def get_customer_bills(self, customer_id: int) -> list[Bill]:
        return self.ledger.get_customer_bills(customer_id)

    def overdue_bills(self, current_block: int | None = None) -> list[Bill]:
        return self.ledger.overdue_bills(current_block)

    def summary(self) -> dict[str, int]:
        return self.ledger.summary()

    def amount_due(self, customer_id: int, billing_period: int, current_block: int | None = None) -> Result:
        def action() -> Result:
            amount = self.ledger.amount_due(customer_id, billing_period, current_block)
            return Result.ok(customer_id=customer_id, billing_period=billing_period, amount_due=amount)

        return self._run("amount_due", action)

    # Events
    def publish(self, sink: "Sink", topic: str = "billing.events") -> int:
        """Write pending events to ``sink`` as one batch and clear the outbox.

        If the sink raises, the events stay in the outbox for the next attempt.
        """
        if not self.outbox:
            return 0
        events = list(self.outbox)
        sink.write_batch(topic, events)
        self.outbox.clear()
        logger.info("Published %d events to %s", len(events), topic)
        return len(events)
