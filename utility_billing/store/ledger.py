"""Billing ledger: customers, rate schedules and bills."""

import logging
from dataclasses import dataclass, field

from utility_billing.clock import BlockClock
from utility_billing.config import LedgerConfig
from utility_billing.exceptions import (
    BillNotFoundError,
    DuplicateBillError,
    DuplicateCustomerError,
    InvalidAmountError,
    InvalidCustomerError,
    InvalidPeriodError,
)
from utility_billing.logging import log_context
from utility_billing.models.billing import Bill, Customer, MeterReading, RateSchedule, UtilityType
from utility_billing.periods import validate_period
from utility_billing.pricing import calculate_charge, calculate_due_date, calculate_late_fee

logger = logging.getLogger(__name__)


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _utility_type(value: int) -> UtilityType:
    """Resolve a utility type number or raise ``InvalidPeriodError``."""
    if not _is_int(value):
        raise InvalidPeriodError(f"Invalid utility type {value!r}")
    try:
        return UtilityType(value)
    except ValueError:
        raise InvalidPeriodError(f"Invalid utility type {value!r}") from None


def _require_amount(name: str, value: int) -> int:
    """Return ``value`` if it is a non-negative integer, else raise ``InvalidAmountError``."""
    if not _is_int(value) or value < 0:
        raise InvalidAmountError(f"{name} must be a non-negative integer, got {value!r}")
    return value


@dataclass
class BillingLedger:
    """In-memory single-writer ledger with referential integrity.

    Every mutation goes through one of the methods below and either completes
    or raises a ``LedgerError`` before touching any record. Injected
    ``rate_schedules`` override the configured defaults per utility.
    """

    config: LedgerConfig = field(default_factory=LedgerConfig)
    clock: BlockClock = field(default_factory=BlockClock)

    customers: dict[int, Customer] = field(default_factory=dict)
    rate_schedules: dict[UtilityType, RateSchedule] = field(default_factory=dict)
    bills: dict[tuple[int, int], Bill] = field(default_factory=dict)

    def __post_init__(self) -> None:
        schedules = self.config.initial_schedules()
        for utility, schedule in self.rate_schedules.items():
            schedules[_utility_type(utility)] = schedule
        self.rate_schedules = schedules

    @property
    def current_block(self) -> int:
        """Current block height reported by the clock."""
        return self.clock.height

    # Customers
    def register_customer(
        self,
        customer_id: int,
        name: str,
        address: str,
        phone: str,
        email: str,
    ) -> Customer:
        """Register a new active customer."""
        if customer_id in self.customers:
            raise DuplicateCustomerError(f"Customer {customer_id} already registered")

        customer = Customer(
            customer_id=customer_id,
            name=name,
            address=address,
            phone=phone,
            email=email,
        )
        self.customers[customer_id] = customer
        logger.info(
            "Registered customer %d",
            customer_id,
            extra=log_context(customer_id=customer_id, block=self.current_block),
        )
        return customer

    def deactivate_customer(self, customer_id: int) -> Customer:
        """Mark a customer inactive. Deactivating twice is a no-op."""
        customer = self.customers.get(customer_id)
        if customer is None:
            raise InvalidCustomerError(f"Customer {customer_id} not found")

        if customer.is_active:
            customer.is_active = False
            logger.info(
                "Deactivated customer %d",
                customer_id,
                extra=log_context(customer_id=customer_id, block=self.current_block),
            )
        return customer

    def get_customer(self, customer_id: int) -> Customer | None:
        """Get a customer by id."""
        return self.customers.get(customer_id)

    # Rates
    def update_rate_schedule(self, utility_type: int, base_fee: int, rate_per_unit: int) -> RateSchedule:
        """Replace the rate schedule of a utility, effective at the current block."""
        utility = _utility_type(utility_type)
        _require_amount("base_fee", base_fee)
        _require_amount("rate_per_unit", rate_per_unit)

        schedule = RateSchedule(
            utility_type=utility,
            base_fee=base_fee,
            rate_per_unit=rate_per_unit,
            effective_date=self.current_block,
        )
        self.rate_schedules[utility] = schedule
        logger.info(
            "Updated %s rates: base_fee=%d rate_per_unit=%d",
            utility.name,
            base_fee,
            rate_per_unit,
            extra=log_context(utility_type=utility, block=schedule.effective_date),
        )
        return schedule

    def get_rate_schedule(self, utility_type: int) -> RateSchedule:
        """Get the current rate schedule of a utility."""
        return self.rate_schedules[_utility_type(utility_type)]

    # Bills
    def generate_bill(
        self,
        customer_id: int,
        billing_period: int,
        water_usage: int,
        gas_usage: int,
        electric_usage: int,
    ) -> Bill:
        """Price a period's usage and record the bill."""
        customer = self.customers.get(customer_id)
        if customer is None:
            raise InvalidCustomerError(f"Customer {customer_id} not found")
        if not customer.is_active:
            raise InvalidCustomerError(f"Customer {customer_id} is inactive")

        validate_period(billing_period)
        if (customer_id, billing_period) in self.bills:
            raise DuplicateBillError(
                f"Bill for customer {customer_id} period {billing_period} already exists"
            )

        usages = {
            UtilityType.WATER: water_usage,
            UtilityType.GAS: gas_usage,
            UtilityType.ELECTRIC: electric_usage,
        }
        for utility, usage in usages.items():
            _require_amount(f"{utility.name.lower()}_usage", usage)

        charges = {
            utility: calculate_charge(self.rate_schedules[utility], usage)
            for utility, usage in usages.items()
        }

        bill = Bill(
            customer_id=customer_id,
            billing_period=billing_period,
            water_usage=water_usage,
            gas_usage=gas_usage,
            electric_usage=electric_usage,
            water_charges=charges[UtilityType.WATER],
            gas_charges=charges[UtilityType.GAS],
            electric_charges=charges[UtilityType.ELECTRIC],
            total_amount=sum(charges.values()),
            due_date=calculate_due_date(self.current_block, self.config.due_offset_blocks),
        )
        self.bills[bill.key] = bill
        logger.debug(
            "Generated bill: total=%d due=%d",
            bill.total_amount,
            bill.due_date,
            extra=log_context(
                customer_id=customer_id,
                billing_period=billing_period,
                block=self.current_block,
            ),
        )
        return bill

    def bill_from_reading(self, reading: MeterReading) -> Bill:
        """Generate a bill from a meter reading."""
        return self.generate_bill(
            reading.customer_id,
            reading.billing_period,
            reading.water_usage,
            reading.gas_usage,
            reading.electric_usage,
        )

    def get_bill(self, customer_id: int, billing_period: int) -> Bill | None:
        """Get a bill by customer and billing period."""
        return self.bills.get((customer_id, billing_period))

    def _require_bill(self, customer_id: int, billing_period: int) -> Bill:
        bill = self.get_bill(customer_id, billing_period)
        if bill is None:
            raise BillNotFoundError(f"Bill for customer {customer_id} period {billing_period} not found")
        return bill

    def mark_bill_paid(self, customer_id: int, billing_period: int) -> Bill:
        """Mark a bill paid. Paying an already paid bill is a no-op."""
        bill = self._require_bill(customer_id, billing_period)
        context = log_context(
            customer_id=customer_id,
            billing_period=billing_period,
            block=self.current_block,
        )
        if bill.is_paid:
            logger.debug("Bill already paid", extra=context)
            return bill

        bill.is_paid = True
        logger.info("Bill paid", extra=context)
        return bill

    def is_overdue(self, customer_id: int, billing_period: int, current_block: int | None = None) -> bool:
        """Return True if the bill is unpaid past its due date; False for unknown bills."""
        bill = self.get_bill(customer_id, billing_period)
        if bill is None:
            return False
        block = self.current_block if current_block is None else current_block
        return bill.is_overdue(block)

    def calculate_late_fee(self, total_amount: int) -> int:
        """Late fee on ``total_amount`` under the configured rate."""
        return calculate_late_fee(total_amount, self.config.late_fee_divisor)

    def late_fee_for(self, customer_id: int, billing_period: int, current_block: int | None = None) -> int:
        """Late fee owed on a bill, 0 unless it is overdue."""
        bill = self._require_bill(customer_id, billing_period)
        block = self.current_block if current_block is None else current_block
        if not bill.is_overdue(block):
            return 0
        return self.calculate_late_fee(bill.total_amount)

    def amount_due(self, customer_id: int, billing_period: int, current_block: int | None = None) -> int:
        """Outstanding amount on a bill including any late fee."""
        bill = self._require_bill(customer_id, billing_period)
        if bill.is_paid:
            return 0
        return bill.total_amount + self.late_fee_for(customer_id, billing_period, current_block)

    # Query methods
    def get_customer_bills(self, customer_id: int) -> list[Bill]:
        """Get all bills of a customer ordered by billing period."""
        return sorted(
            (bill for bill in self.bills.values() if bill.customer_id == customer_id),
            key=lambda bill: bill.billing_period,
        )

    def overdue_bills(self, current_block: int | None = None) -> list[Bill]:
        """All bills overdue at ``current_block`` (defaults to the clock)."""
        block = self.current_block if current_block is None else current_block
        return [bill for bill in self.bills.values() if bill.is_overdue(block)]

    def summary(self) -> dict[str, int]:
        """Return summary counts of all entities."""
        return {
            "customers": len(self.customers),
            "active_customers": sum(1 for c in self.customers.values() if c.is_active),
            "bills": len(self.bills),
            "paid_bills": sum(1 for b in self.bills.values() if b.is_paid),
        }
