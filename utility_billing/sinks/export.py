"""Snapshot export of a ledger to any sink."""

import logging

from utility_billing.sinks.base import Sink
from utility_billing.sinks.serialization import to_dict_fast
from utility_billing.store.ledger import BillingLedger

logger = logging.getLogger(__name__)


def export_ledger(ledger: BillingLedger, sink: Sink, prefix: str = "billing") -> dict[str, int]:
    """Write customers, rate schedules and bills as three batches.

    Parameters
    ----------
    ledger : BillingLedger
        Ledger to export.
    sink : Sink
        Destination.
    prefix : str
        Prepended to each batch name (``billing.bills``).

    Returns
    -------
    dict[str, int]
        Records written per batch name.
    """
    batches = {
        f"{prefix}.customers": list(ledger.customers.values()),
        f"{prefix}.rate-schedules": [ledger.rate_schedules[u] for u in sorted(ledger.rate_schedules)],
        f"{prefix}.bills": sorted(ledger.bills.values(), key=lambda b: b.key),
    }

    counts = {}
    for name, records in batches.items():
        sink.write_batch(name, [to_dict_fast(record) for record in records])
        counts[name] = len(records)

    logger.info("Exported ledger: %s", counts)
    return counts
