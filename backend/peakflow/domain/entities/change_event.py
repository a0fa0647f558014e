"""Change notifications emitted when a watched table's rows change."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class ChangeType(str, Enum):
    INSERT = "INSERT"
    UPDATE = "UPDATE"
    DELETE = "DELETE"


@dataclass(frozen=True)
class ChangeEvent:
    """A single row-level change on a table.

    ``record`` carries the new row for inserts/updates and the old row for
    deletes, as plain JSON-compatible values.
    """

    table: str
    event: ChangeType
    record: dict[str, Any]
    committed_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def matches(self, table: str, filters: dict[str, Any] | None = None) -> bool:
        """True when the event is on ``table`` and every equality filter holds."""
        if self.table != table:
            return False
        if not filters:
            return True
        return all(self.record.get(key) == value for key, value in filters.items())

    def to_dict(self) -> dict[str, Any]:
        return {
            "table": self.table,
            "event": self.event.value,
            "record": self.record,
            "committed_at": self.committed_at.isoformat(),
        }
