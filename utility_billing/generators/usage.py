"""Meter reading generator."""

from __future__ import annotations

import random
from typing import Iterator

from utility_billing.generators.base import BaseGenerator
from utility_billing.models.billing import MeterReading, UtilityType

# Median monthly consumption per utility (units)
MEDIAN_USAGE = {
    UtilityType.WATER: 900,
    UtilityType.GAS: 450,
    UtilityType.ELECTRIC: 750,
}


class UsageGenerator(BaseGenerator):
    """Generate monthly meter readings.

    Consumption is log-normal around ``MEDIAN_USAGE``. A share of readings
    report zero usage for a utility (no gas service, vacant premises).
    """

    def __init__(
        self,
        seed: int | None = None,
        zero_usage_rate: float = 0.05,
        sigma: float = 0.35,
    ) -> None:
        super().__init__(seed)
        self.zero_usage_rate = zero_usage_rate
        self.sigma = sigma

    def _usage(self, utility: UtilityType) -> int:
        if random.random() < self.zero_usage_rate:
            return 0
        median = MEDIAN_USAGE[utility]
        return int(random.lognormvariate(mu=0.0, sigma=self.sigma) * median)

    def generate(self, customer_id: int, billing_period: int) -> MeterReading:
        """Generate the reading of one customer for one period."""
        return MeterReading(
            customer_id=customer_id,
            billing_period=billing_period,
            water_usage=self._usage(UtilityType.WATER),
            gas_usage=self._usage(UtilityType.GAS),
            electric_usage=self._usage(UtilityType.ELECTRIC),
        )

    def generate_for_customers(self, customer_ids: list[int], billing_period: int) -> Iterator[MeterReading]:
        """Generate one reading per customer for ``billing_period``."""
        for customer_id in customer_ids:
            yield self.generate(customer_id, billing_period)
