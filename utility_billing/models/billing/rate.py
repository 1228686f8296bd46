"""Rate schedule model."""

from dataclasses import dataclass

from utility_billing.models.billing.enums import UtilityType


@dataclass
class RateSchedule:
    """Pricing for one utility type, effective from a block height."""

    utility_type: UtilityType
    base_fee: int
    rate_per_unit: int
    effective_date: int = 0  # block height

    def charge(self, usage: int) -> int:
        """Return the charge for ``usage`` units under this schedule."""
        return self.base_fee + usage * self.rate_per_unit
