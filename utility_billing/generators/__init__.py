"""Synthetic data generators for the billing domain."""

from utility_billing.generators.customer import CustomerGenerator
from utility_billing.generators.usage import UsageGenerator

__all__ = ["CustomerGenerator", "UsageGenerator"]
