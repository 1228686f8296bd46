"""Enumeration types for the billing domain."""

from enum import Enum, IntEnum


class UtilityType(IntEnum):
    WATER = 1
    GAS = 2
    ELECTRIC = 3


class ErrorCode(str, Enum):
    BILL_EXISTS = "ERR-BILL-EXISTS"
    INVALID_CUSTOMER = "ERR-INVALID-CUSTOMER"
    INVALID_PERIOD = "ERR-INVALID-PERIOD"
    BILL_NOT_FOUND = "ERR-BILL-NOT-FOUND"
    INVALID_AMOUNT = "ERR-INVALID-AMOUNT"
