"""Domain models for utility billing."""

from utility_billing.models.base import Event

__all__ = ["Event"]
