"""Custom exception hierarchy for utility-billing."""

from utility_billing.models.billing.enums import ErrorCode


class BillingError(Exception):
    """Base exception for all utility-billing errors."""


class LedgerError(BillingError):
    """Base exception for rejected ledger operations.

    Every subclass carries the ``ErrorCode`` reported to callers of the
    billing service.
    """

    code: ErrorCode


class DuplicateEntityError(LedgerError):
    """Raised when a customer or bill key is already taken."""

    code = ErrorCode.BILL_EXISTS


class DuplicateCustomerError(DuplicateEntityError):
    """Raised when a customer id is registered twice."""


class DuplicateBillError(DuplicateEntityError):
    """Raised when a bill already exists for a customer and billing period."""


class InvalidCustomerError(LedgerError):
    """Raised when a customer does not exist or is inactive."""

    code = ErrorCode.INVALID_CUSTOMER


class InvalidPeriodError(LedgerError):
    """Raised for an unknown utility type or a malformed billing period."""

    code = ErrorCode.INVALID_PERIOD


class BillNotFoundError(LedgerError):
    """Raised when a referenced bill does not exist."""

    code = ErrorCode.BILL_NOT_FOUND


class InvalidAmountError(LedgerError):
    """Raised for negative usage, fees or rates."""

    code = ErrorCode.INVALID_AMOUNT


class ConfigurationError(BillingError):
    """Raised when configuration is invalid or missing."""


class SinkError(BillingError):
    """Raised when a sink operation fails."""
