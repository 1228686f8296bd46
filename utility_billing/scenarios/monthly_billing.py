"""Monthly billing scenario: customers, bills, payments and churn."""

import logging
import random

from utility_billing.clock import BlockClock
from utility_billing.config import LedgerConfig
from utility_billing.generators import CustomerGenerator, UsageGenerator
from utility_billing.periods import period_range
from utility_billing.store.ledger import BillingLedger

logger = logging.getLogger(__name__)


class MonthlyBillingScenario:
    """Run a ledger through several billing cycles.

    Each cycle:
    - generates a bill for every active customer from a synthetic reading
    - advances the clock by one period
    - pays a share of the cycle's bills; the rest stay open and go overdue
    - deactivates a share of active customers
    """

    def __init__(
        self,
        num_customers: int = 100,
        num_periods: int = 12,
        start_period: int = 202401,
        blocks_per_period: int = 4320,
        payment_rate: float = 0.85,
        churn_rate: float = 0.01,
        ledger_config: LedgerConfig | None = None,
        seed: int | None = None,
    ) -> None:
        """Initialize monthly billing scenario.

        Parameters
        ----------
        num_customers : int
            Customers registered before the first cycle.
        num_periods : int
            Number of billing cycles to run.
        start_period : int
            First billing period (``YYYYMM``).
        blocks_per_period : int
            Blocks the clock advances per cycle.
        payment_rate : float
            Share of bills paid within their cycle.
        churn_rate : float
            Share of active customers deactivated per cycle.
        ledger_config : LedgerConfig | None
            Billing rules for the ledger.
        seed : int | None
            Random seed for reproducibility.
        """
        self.num_customers = num_customers
        self.num_periods = num_periods
        self.start_period = start_period
        self.blocks_per_period = blocks_per_period
        self.payment_rate = payment_rate
        self.churn_rate = churn_rate
        self.seed = seed

        if seed is not None:
            random.seed(seed)

        self.ledger = BillingLedger(config=ledger_config or LedgerConfig(), clock=BlockClock())
        self._customer_gen = CustomerGenerator(seed=seed)
        self._usage_gen = UsageGenerator(seed=seed)

    def generate(self) -> BillingLedger:
        """Register customers and run every billing cycle.

        Returns
        -------
        BillingLedger
            Ledger holding all generated data.
        """
        logger.info(
            "Starting monthly billing scenario: %d customers, %d periods",
            self.num_customers,
            self.num_periods,
        )

        for customer in self._customer_gen.generate_batch(self.num_customers):
            self.ledger.register_customer(
                customer.customer_id,
                customer.name,
                customer.address,
                customer.phone,
                customer.email,
            )

        for period in period_range(self.start_period, self.num_periods):
            self._run_cycle(period)

        summary = self.ledger.summary()
        logger.info(
            "Scenario complete: %d bills, %d paid, %d overdue at block %d",
            summary["bills"],
            summary["paid_bills"],
            len(self.ledger.overdue_bills()),
            self.ledger.current_block,
        )
        return self.ledger

    def _run_cycle(self, period: int) -> None:
        """Bill, pay and churn for one period."""
        active_ids = [c.customer_id for c in self.ledger.customers.values() if c.is_active]

        bills = [
            self.ledger.bill_from_reading(reading)
            for reading in self._usage_gen.generate_for_customers(active_ids, period)
        ]

        self.ledger.clock.advance(self.blocks_per_period)

        for bill in bills:
            if random.random() < self.payment_rate:
                self.ledger.mark_bill_paid(bill.customer_id, bill.billing_period)

        for customer_id in active_ids:
            if random.random() < self.churn_rate:
                self.ledger.deactivate_customer(customer_id)

        logger.debug("Period %d: %d bills generated", period, len(bills))
