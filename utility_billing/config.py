"""Configuration management for utility-billing."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from utility_billing.exceptions import ConfigurationError
from utility_billing.models.billing import RateSchedule, UtilityType
from utility_billing.pricing import DEFAULT_DUE_OFFSET_BLOCKS, DEFAULT_LATE_FEE_DIVISOR

# utility type -> (base fee, rate per unit)
DEFAULT_RATES: dict[UtilityType, tuple[int, int]] = {
    UtilityType.WATER: (1500, 50),
    UtilityType.GAS: (2000, 75),
    UtilityType.ELECTRIC: (2500, 120),
}


@dataclass
class LedgerConfig:
    """Billing rules applied by the ledger."""

    due_offset_blocks: int = DEFAULT_DUE_OFFSET_BLOCKS
    late_fee_divisor: int = DEFAULT_LATE_FEE_DIVISOR
    default_rates: dict[UtilityType, tuple[int, int]] = field(
        default_factory=lambda: dict(DEFAULT_RATES)
    )

    def __post_init__(self) -> None:
        if self.due_offset_blocks < 0:
            raise ConfigurationError(f"due_offset_blocks must be >= 0, got {self.due_offset_blocks}")
        if self.late_fee_divisor <= 0:
            raise ConfigurationError(f"late_fee_divisor must be > 0, got {self.late_fee_divisor}")
        missing = set(UtilityType) - set(self.default_rates)
        if missing:
            names = ", ".join(sorted(u.name for u in missing))
            raise ConfigurationError(f"Missing default rates for: {names}")
        for utility, (base_fee, rate) in self.default_rates.items():
            if base_fee < 0 or rate < 0:
                raise ConfigurationError(f"Negative default rate for {UtilityType(utility).name}")

    def initial_schedules(self) -> dict[UtilityType, RateSchedule]:
        """Build the rate schedules a new ledger starts with (effective at block 0)."""
        return {
            UtilityType(utility): RateSchedule(
                utility_type=UtilityType(utility),
                base_fee=base_fee,
                rate_per_unit=rate,
                effective_date=0,
            )
            for utility, (base_fee, rate) in sorted(self.default_rates.items())
        }


@dataclass
class KafkaConfig:
    """Kafka producer configuration."""

    bootstrap_servers: str = "localhost:9092"
    acks: str = "all"
    batch_size: int = 16384
    linger_ms: int = 5
    compression: str = "snappy"
    retries: int = 3

    def to_dict(self) -> dict[str, Any]:
        """Convert to confluent-kafka config dict."""
        return {
            "bootstrap.servers": self.bootstrap_servers,
            "acks": self.acks,
            "batch.size": self.batch_size,
            "linger.ms": self.linger_ms,
            "compression.type": self.compression,
            "retries": self.retries,
        }


@dataclass
class OutputConfig:
    """Output configuration."""

    json_output_dir: Path = field(default_factory=lambda: Path("output"))
    pretty_json: bool = False
    topic_prefix: str = "dev.billing"


@dataclass
class BillingConfig:
    """Main configuration for utility-billing."""

    ledger: LedgerConfig = field(default_factory=LedgerConfig)
    kafka: KafkaConfig = field(default_factory=KafkaConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    seed: int | None = None
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "BillingConfig":
        """Create config from environment variables."""
        import json
        import os

        try:
            rates_str = os.getenv("RATE_SCHEDULES")
            default_rates = dict(DEFAULT_RATES)
            if rates_str:
                # {"1": [1500, 50], ...} keyed by utility type number
                for key, (base_fee, rate) in json.loads(rates_str).items():
                    default_rates[UtilityType(int(key))] = (int(base_fee), int(rate))

            ledger = LedgerConfig(
                due_offset_blocks=int(os.getenv("DUE_OFFSET_BLOCKS", str(DEFAULT_DUE_OFFSET_BLOCKS))),
                late_fee_divisor=int(os.getenv("LATE_FEE_DIVISOR", str(DEFAULT_LATE_FEE_DIVISOR))),
                default_rates=default_rates,
            )
            seed = int(os.getenv("SEED")) if os.getenv("SEED") else None
        except (TypeError, ValueError) as exc:
            raise ConfigurationError(f"Invalid billing configuration: {exc}") from exc

        kafka = KafkaConfig(
            bootstrap_servers=os.getenv("KAFKA_BOOTSTRAP_SERVERS", "localhost:9092"),
            acks=os.getenv("KAFKA_ACKS", "all"),
        )

        output = OutputConfig(
            json_output_dir=Path(os.getenv("OUTPUT_DIR", "output")),
            pretty_json=os.getenv("PRETTY_JSON", "false").lower() == "true",
            topic_prefix=os.getenv("TOPIC_PREFIX", "dev.billing"),
        )

        return cls(
            ledger=ledger,
            kafka=kafka,
            output=output,
            seed=seed,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )
