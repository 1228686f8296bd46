"""JSON file sink for exporting ledger data to files."""

import json
from pathlib import Path
from typing import Any

from utility_billing.exceptions import SinkError
from utility_billing.sinks.serialization import to_dict


class JsonFileSink:
    """Output data to JSON files, one file per entity type.

    Batches written to the same entity type accumulate: each write rewrites
    ``<entity_type>.json`` with every record the sink has received for it.
    """

    def __init__(self, output_dir: str | Path, pretty: bool = False) -> None:
        """Initialize JSON file sink.

        Parameters
        ----------
        output_dir : str | Path
            Directory to write JSON files.
        pretty : bool
            Pretty-print JSON output.
        """
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.pretty = pretty
        self._records: dict[str, list[dict[str, Any]]] = {}

    def write_batch(self, entity_type: str, records: list[Any]) -> None:
        """Append a batch of records to ``<entity_type>.json``."""
        # Topic-style names (dev.billing.bills) become dev_billing_bills.json
        file_path = self.output_dir / f"{entity_type.replace('.', '_')}.json"

        data = self._records.get(entity_type, []) + [to_dict(record) for record in records]

        try:
            with open(file_path, "w", encoding="utf-8") as f:
                if self.pretty:
                    json.dump(data, f, indent=2, ensure_ascii=False, default=str)
                else:
                    json.dump(data, f, ensure_ascii=False, default=str)
        except OSError as exc:
            raise SinkError(f"Cannot write {file_path}: {exc}") from exc

        self._records[entity_type] = data

    def close(self) -> None:
        """Print summary."""
        print(f"JSON files written to: {self.output_dir}")
        for entity_type, data in self._records.items():
            print(f"  {entity_type}: {len(data)} records")
