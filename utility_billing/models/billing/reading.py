"""Meter reading model."""

from dataclasses import dataclass


@dataclass
class MeterReading:
    """Usage recorded for one customer over one billing period."""

    customer_id: int
    billing_period: int  # YYYYMM
    water_usage: int
    gas_usage: int
    electric_usage: int
