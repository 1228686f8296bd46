"""Interface shared by all sinks."""

from typing import Any, Protocol


class Sink(Protocol):
    """Anything that accepts named batches of records."""

    def write_batch(self, entity_type: str, records: list[Any]) -> None: ...

    def close(self) -> None: ...
