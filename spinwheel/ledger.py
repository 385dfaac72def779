import logging
from datetime import datetime, timezone

from .constants import REMOVED_BY_SPIN
from .entry import RemovedEntry

logger = logging.getLogger(__name__)


class RemovalLedger:
    """Append-only history of entries that left the wheel."""

    def __init__(self):
        self._records = []

    def record(self, entries, reason=REMOVED_BY_SPIN, at=None):
        at = at or datetime.now(timezone.utc)
        added = []
        for entry in entries:
            if entry.is_protected_winner:
                logger.error(f"[Ledger] Protected winner {entry.name!r} is being removed ({reason})")
            added.append(RemovedEntry(entry.id, entry.name, at,
                                      was_protected_winner=entry.is_protected_winner,
                                      reason=reason))
        self._records.extend(added)
        return added

    def names(self):
        return [record.name for record in self._records]

    def snapshot(self):
        return [record.to_dict() for record in self._records]

    def clear(self):
        self._records = []

    def __iter__(self):
        return iter(list(self._records))

    def __len__(self):
        return len(self._records)
