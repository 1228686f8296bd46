"""Base models shared across the package."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class Event:
    """Standard event envelope for publishing ledger changes."""

    event_id: str
    event_type: str  # entity.action (e.g., bill.generated)
    event_time: datetime
    source: str  # Service/system that generated
    subject: str  # Entity key affected
    data: dict
    metadata: dict = field(default_factory=dict)
