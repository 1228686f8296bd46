"""Run a billing simulation and export the resulting ledger."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from utility_billing.config import BillingConfig, KafkaConfig
from utility_billing.logging import setup_logging
from utility_billing.scenarios import MonthlyBillingScenario
from utility_billing.sinks import ConsoleSink, JsonFileSink, KafkaSink, Sink
from utility_billing.sinks.export import export_ledger

logger = logging.getLogger(__name__)


def build_parser(config: BillingConfig) -> argparse.ArgumentParser:
    """Build the argument parser with defaults taken from ``config``."""
    parser = argparse.ArgumentParser(
        description="Simulate utility billing cycles and export the ledger"
    )
    parser.add_argument(
        "--customers",
        type=int,
        default=100,
        help="Number of customers to register (default: 100)",
    )
    parser.add_argument(
        "--periods",
        type=int,
        default=12,
        help="Number of billing periods to run (default: 12)",
    )
    parser.add_argument(
        "--start-period",
        type=int,
        default=202401,
        help="First billing period as YYYYMM (default: 202401)",
    )
    parser.add_argument(
        "--payment-rate",
        type=float,
        default=0.85,
        help="Share of bills paid on time (default: 0.85)",
    )
    parser.add_argument(
        "--churn-rate",
        type=float,
        default=0.01,
        help="Share of active customers deactivated per period (default: 0.01)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=config.seed,
        help="Random seed for reproducibility",
    )
    parser.add_argument(
        "--sink",
        choices=["console", "json", "kafka"],
        default="console",
        help="Where to export the ledger (default: console)",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=config.output.json_output_dir,
        help="Directory for the json sink",
    )
    parser.add_argument(
        "--kafka-bootstrap",
        type=str,
        default=config.kafka.bootstrap_servers,
        help="Kafka bootstrap servers",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=config.log_level,
        help="Log level (default: INFO)",
    )
    parser.add_argument(
        "--log-format",
        choices=["standard", "json"],
        default="standard",
        help="Log line format (default: standard)",
    )
    return parser


def create_sink(args: argparse.Namespace, config: BillingConfig) -> Sink:
    """Instantiate the sink selected on the command line."""
    if args.sink == "json":
        return JsonFileSink(args.output_dir, pretty=config.output.pretty_json)
    if args.sink == "kafka":
        kafka = KafkaConfig(
            bootstrap_servers=args.kafka_bootstrap,
            acks=config.kafka.acks,
        )
        return KafkaSink(kafka)
    return ConsoleSink(max_records=5)


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    config = BillingConfig.from_env()
    args = build_parser(config).parse_args(argv)
    setup_logging(level=args.log_level, format_type=args.log_format)

    scenario = MonthlyBillingScenario(
        num_customers=args.customers,
        num_periods=args.periods,
        start_period=args.start_period,
        blocks_per_period=config.ledger.due_offset_blocks,
        payment_rate=args.payment_rate,
        churn_rate=args.churn_rate,
        ledger_config=config.ledger,
        seed=args.seed,
    )
    ledger = scenario.generate()

    sink = create_sink(args, config)
    try:
        export_ledger(ledger, sink, prefix=config.output.topic_prefix)
    finally:
        sink.close()

    logger.info("Ledger summary: %s", ledger.summary())
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
