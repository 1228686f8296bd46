"""Tests for domain models, billing periods, clock and pricing."""

from datetime import datetime

import pytest

from utility_billing.clock import BlockClock
from utility_billing.exceptions import InvalidPeriodError
from utility_billing.models.base import Event
from utility_billing.models.billing import Bill, Customer, ErrorCode, RateSchedule, UtilityType
from utility_billing.periods import is_valid_period, next_period, period_range, validate_period
from utility_billing.pricing import calculate_charge, calculate_due_date, calculate_late_fee


class TestEnums:
    """Tests for enumeration values."""

    def test_utility_type_values(self) -> None:
        assert UtilityType.WATER == 1
        assert UtilityType.GAS == 2
        assert UtilityType.ELECTRIC == 3

    def test_error_code_values(self) -> None:
        assert ErrorCode.BILL_EXISTS.value == "ERR-BILL-EXISTS"
        assert ErrorCode.INVALID_CUSTOMER.value == "ERR-INVALID-CUSTOMER"
        assert ErrorCode.INVALID_PERIOD.value == "ERR-INVALID-PERIOD"


class TestCustomer:
    """Tests for Customer model."""

    def test_customer_defaults_active(self) -> None:
        customer = Customer(
            customer_id=123,
            name="John Doe",
            address="123 Main St",
            phone="555-123-4567",
            email="john@example.com",
        )

        assert customer.is_active is True


class TestRateSchedule:
    """Tests for RateSchedule model."""

    def test_charge(self) -> None:
        schedule = RateSchedule(utility_type=UtilityType.WATER, base_fee=1500, rate_per_unit=50)

        assert schedule.charge(1000) == 51500
        assert schedule.charge(0) == 1500
        assert schedule.effective_date == 0


class TestBill:
    """Tests for Bill model."""

    @pytest.fixture
    def bill(self) -> Bill:
        return Bill(
            customer_id=123,
            billing_period=202401,
            water_usage=1000,
            gas_usage=500,
            electric_usage=800,
            water_charges=51500,
            gas_charges=39500,
            electric_charges=98500,
            total_amount=189500,
            due_date=5320,
        )

    def test_key(self, bill: Bill) -> None:
        assert bill.key == (123, 202401)

    def test_is_overdue(self, bill: Bill) -> None:
        assert bill.is_paid is False
        assert bill.is_overdue(5320) is False
        assert bill.is_overdue(6000) is True

    def test_paid_bill_never_overdue(self, bill: Bill) -> None:
        bill.is_paid = True

        assert bill.is_overdue(6000) is False


class TestEvent:
    """Tests for Event model."""

    def test_event_creation(self) -> None:
        now = datetime.now()
        event = Event(
            event_id="evt-001",
            event_type="bill.generated",
            event_time=now,
            source="utility-billing",
            subject="123:202401",
            data={"total_amount": 189500},
        )

        assert event.event_type == "bill.generated"
        assert event.event_time == now
        assert event.metadata == {}


class TestPeriods:
    """Tests for billing period helpers."""

    @pytest.mark.parametrize("period", [202401, 202412, 199001, 999912])
    def test_valid_periods(self, period: int) -> None:
        assert is_valid_period(period) is True
        assert validate_period(period) == period

    @pytest.mark.parametrize("period", [202400, 202413, 1, 189912, -202401, True, "202401", 2024.01])
    def test_invalid_periods(self, period: object) -> None:
        assert is_valid_period(period) is False

    def test_validate_period_raises(self) -> None:
        with pytest.raises(InvalidPeriodError, match="202413"):
            validate_period(202413)

    def test_next_period(self) -> None:
        assert next_period(202401) == 202402
        assert next_period(202412) == 202501

    def test_period_range(self) -> None:
        assert list(period_range(202411, 4)) == [202411, 202412, 202501, 202502]
        assert list(period_range(202401, 0)) == []


class TestBlockClock:
    """Tests for BlockClock."""

    def test_starts_at_zero(self) -> None:
        assert BlockClock().height == 0

    def test_advance(self) -> None:
        clock = BlockClock(height=1000)

        assert clock.advance() == 1001
        assert clock.advance(4320) == 5321

    def test_advance_negative_fails(self) -> None:
        with pytest.raises(ValueError):
            BlockClock().advance(-1)

    def test_set_height(self) -> None:
        clock = BlockClock(height=10)

        assert clock.set_height(10) == 10
        assert clock.set_height(2000) == 2000

    def test_set_height_backwards_fails(self) -> None:
        clock = BlockClock(height=2000)

        with pytest.raises(ValueError, match="backwards"):
            clock.set_height(1999)
        assert clock.height == 2000


class TestPricing:
    """Tests for pricing arithmetic."""

    def test_calculate_charge(self) -> None:
        schedule = RateSchedule(utility_type=UtilityType.ELECTRIC, base_fee=2500, rate_per_unit=120)

        assert calculate_charge(schedule, 800) == 98500

    def test_calculate_due_date(self) -> None:
        assert calculate_due_date(1000) == 5320
        assert calculate_due_date(1000, offset=10) == 1010

    @pytest.mark.parametrize(
        ("total", "fee"),
        [(189500, 9475), (6000, 300), (19, 0), (39, 1), (0, 0), (-39, -1)],
    )
    def test_calculate_late_fee(self, total: int, fee: int) -> None:
        assert calculate_late_fee(total) == fee
