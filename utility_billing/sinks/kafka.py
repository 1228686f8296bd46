"""Kafka sink for publishing ledger records and events."""

import json
import logging
from dataclasses import dataclass, is_dataclass
from typing import Any

from confluent_kafka import KafkaException, Producer

from utility_billing.config import KafkaConfig
from utility_billing.exceptions import SinkError
from utility_billing.sinks.serialization import serialize_value, to_dict

logger = logging.getLogger(__name__)


@dataclass
class ProducerStats:
    """Track producer delivery statistics."""

    sent: int = 0
    delivered: int = 0
    failed: int = 0

    @property
    def success_rate(self) -> float:
        """Calculate success rate."""
        total = self.delivered + self.failed
        return self.delivered / total if total > 0 else 0.0


class KafkaSink:
    """Output data to Kafka topics as JSON messages."""

    # Topic suffix to key field mapping
    KEY_FIELDS = {
        "customers": "customer_id",
        "bills": "customer_id",
        "rate-schedules": "utility_type",
        "events": "subject",
    }

    def __init__(self, config: KafkaConfig | str) -> None:
        """Initialize Kafka sink.

        Parameters
        ----------
        config : KafkaConfig | str
            Producer configuration or bootstrap servers string.
        """
        if isinstance(config, str):
            config = KafkaConfig(bootstrap_servers=config)

        self.config = config
        self.producer = Producer(config.to_dict())
        self.stats = ProducerStats()

    def _delivery_callback(self, err: Any, msg: Any) -> None:
        """Handle delivery reports."""
        if err:
            self.stats.failed += 1
            logger.error("Delivery failed: %s", err)
        else:
            self.stats.delivered += 1
            logger.debug("Delivered to %s[%d]@%d", msg.topic(), msg.partition(), msg.offset())

    def _get_key(self, topic: str, record: Any) -> str | None:
        """Extract message key from record based on topic suffix."""
        # dev.billing.rate-schedules -> rate-schedules
        key_field = self.KEY_FIELDS.get(topic.split(".")[-1])
        if not key_field:
            return None

        if is_dataclass(record):
            value = getattr(record, key_field, None)
        elif isinstance(record, dict):
            value = record.get(key_field)
        else:
            return None
        return None if value is None else str(serialize_value(value))

    def send(self, topic: str, record: Any, key: str | None = None) -> None:
        """Send a single record to Kafka topic."""
        value = json.dumps(to_dict(record), ensure_ascii=False, default=str).encode("utf-8")

        if key is None:
            key = self._get_key(topic, record)

        try:
            self.producer.produce(
                topic=topic,
                key=key.encode("utf-8") if key else None,
                value=value,
                callback=self._delivery_callback,
            )
        except (BufferError, KafkaException) as exc:
            raise SinkError(f"Failed to produce to {topic}: {exc}") from exc
        self.stats.sent += 1
        self.producer.poll(0)

    def write_batch(self, topic: str, records: list[Any]) -> None:
        """Write a batch of records to a Kafka topic.

        Raises ``SinkError`` if any delivery report of the batch is a failure.
        """
        logger.info("Writing batch to %s: %d records", topic, len(records))
        failed_before = self.stats.failed

        for record in records:
            self.send(topic, record)

        self.flush()
        logger.info(
            "Batch complete: sent=%d, delivered=%d, failed=%d",
            self.stats.sent,
            self.stats.delivered,
            self.stats.failed,
        )

        failed = self.stats.failed - failed_before
        if failed:
            raise SinkError(f"{failed} of {len(records)} records to {topic} were not delivered")

    def flush(self, timeout: float = 30.0) -> None:
        """Flush pending messages."""
        self.producer.flush(timeout)

    def close(self) -> None:
        """Flush and close the producer."""
        self.flush()
        logger.info(
            "Kafka sink closed: sent=%d, delivered=%d, failed=%d",
            self.stats.sent,
            self.stats.delivered,
            self.stats.failed,
        )
