"""Tests for billing scenarios."""

from utility_billing.config import LedgerConfig
from utility_billing.scenarios import MonthlyBillingScenario
from utility_billing.store.ledger import BillingLedger


class TestMonthlyBillingScenario:
    """Tests for MonthlyBillingScenario."""

    def test_generate(self, seed: int) -> None:
        scenario = MonthlyBillingScenario(num_customers=10, num_periods=3, churn_rate=0.0, seed=seed)

        ledger = scenario.generate()

        assert isinstance(ledger, BillingLedger)
        assert len(ledger.customers) == 10
        assert len(ledger.bills) == 30
        assert ledger.current_block == 3 * 4320
        assert {b.billing_period for b in ledger.bills.values()} == {202401, 202402, 202403}

    def test_bill_invariants(self, seed: int) -> None:
        ledger = MonthlyBillingScenario(num_customers=5, num_periods=2, seed=seed).generate()

        for bill in ledger.bills.values():
            assert bill.total_amount == bill.water_charges + bill.gas_charges + bill.electric_charges
            assert bill.due_date % 4320 == 0

    def test_all_paid(self, seed: int) -> None:
        ledger = MonthlyBillingScenario(
            num_customers=5, num_periods=2, payment_rate=1.0, churn_rate=0.0, seed=seed
        ).generate()

        assert ledger.summary()["paid_bills"] == 10
        assert ledger.overdue_bills() == []

    def test_none_paid_goes_overdue(self, seed: int) -> None:
        ledger = MonthlyBillingScenario(
            num_customers=4, num_periods=3, payment_rate=0.0, churn_rate=0.0, seed=seed
        ).generate()

        # Bills of the last period are due exactly at the final block
        overdue = ledger.overdue_bills()
        assert len(overdue) == 8
        assert {b.billing_period for b in overdue} == {202401, 202402}

    def test_full_churn_stops_billing(self, seed: int) -> None:
        ledger = MonthlyBillingScenario(
            num_customers=3, num_periods=2, churn_rate=1.0, seed=seed
        ).generate()

        assert ledger.summary()["active_customers"] == 0
        assert {b.billing_period for b in ledger.bills.values()} == {202401}

    def test_crosses_year_boundary(self, seed: int) -> None:
        ledger = MonthlyBillingScenario(
            num_customers=1, num_periods=2, start_period=202412, churn_rate=0.0, seed=seed
        ).generate()

        assert sorted(p for _, p in ledger.bills) == [202412, 202501]

    def test_uses_ledger_config(self, seed: int) -> None:
        ledger = MonthlyBillingScenario(
            num_customers=1,
            num_periods=1,
            blocks_per_period=144,
            ledger_config=LedgerConfig(due_offset_blocks=144),
            seed=seed,
        ).generate()

        assert [b.due_date for b in ledger.bills.values()] == [144]
