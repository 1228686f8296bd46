"""Billing domain models."""

from utility_billing.models.billing.bill import Bill
from utility_billing.models.billing.customer import Customer
from utility_billing.models.billing.enums import ErrorCode, UtilityType
from utility_billing.models.billing.rate import RateSchedule
from utility_billing.models.billing.reading import MeterReading

__all__ = [
    "Bill",
    "Customer",
    "ErrorCode",
    "MeterReading",
    "RateSchedule",
    "UtilityType",
]
