"""Output sinks for exporting ledger data and events."""

from utility_billing.sinks.base import Sink
from utility_billing.sinks.console import ConsoleSink
from utility_billing.sinks.json_file import JsonFileSink
from utility_billing.sinks.kafka import KafkaSink

__all__ = ["ConsoleSink", "JsonFileSink", "KafkaSink", "Sink"]
