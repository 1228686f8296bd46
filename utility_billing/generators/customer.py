"""Customer generator for the billing domain."""

from __future__ import annotations

from typing import Iterator

from utility_billing.generators.base import BaseGenerator
from utility_billing.models.billing import Customer


class CustomerGenerator(BaseGenerator):
    """Generate synthetic utility customers with sequential integer ids."""

    def __init__(
        self,
        seed: int | None = None,
        locale: str = "en_US",
        start_id: int = 1,
    ) -> None:
        super().__init__(seed, locale)
        self._next_id = start_id

    def generate(self) -> Customer:
        """Generate a single customer.

        Returns
        -------
        Customer
            Generated customer.
        """
        customer = Customer(
            customer_id=self._next_id,
            name=self.fake.name(),
            address=self.fake.address().replace("\n", ", "),
            phone=self.fake.phone_number(),
            email=self.fake.email(),
        )
        self._next_id += 1
        return customer

    def generate_batch(self, count: int) -> Iterator[Customer]:
        """Generate multiple customers.

        Parameters
        ----------
        count : int
            Number of customers to generate.

        Yields
        ------
        Customer
            Generated customers.
        """
        for _ in range(count):
            yield self.generate()
