"""Scenarios for generating realistic billing data sets."""

from utility_billing.scenarios.monthly_billing import MonthlyBillingScenario

__all__ = ["MonthlyBillingScenario"]
