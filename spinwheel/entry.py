import re
import time
from enum import Enum, auto

_WHITESPACE = re.compile(r'\s+')


class GamePhase(Enum):
    PLAYING = auto()
    FINAL_WINNER_DECLARED = auto()


def normalize_name(name: str) -> str:
    """Lowercase, trim and drop all internal whitespace ("Alex  Dhanaraj" == "alexdhanaraj")."""
    return _WHITESPACE.sub('', name.lower().strip())


class Entry:
    """One participant on the wheel."""

    __slots__ = ('id', 'name', 'section_index', 'is_protected_winner')

    def __init__(self, id, name, section_index=0, is_protected_winner=False):
        self.id = id
        self.name = name
        self.section_index = section_index
        self.is_protected_winner = is_protected_winner

    def replace(self, **changes):
        """Copy of this entry with some fields changed."""
        fields = {slot: getattr(self, slot) for slot in self.__slots__}
        fields.update(changes)
        return Entry(**fields)

    @property
    def normalized(self):
        return normalize_name(self.name)

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'section_index': self.section_index,
            'is_protected_winner': self.is_protected_winner,
        }

    def __eq__(self, other):
        if not isinstance(other, Entry):
            return NotImplemented
        return all(getattr(self, s) == getattr(other, s) for s in self.__slots__)

    def __hash__(self):
        return hash(self.id)

    def __repr__(self):
        flag = ", protected" if self.is_protected_winner else ""
        return f"Entry({self.id!r}, {self.name!r}, section={self.section_index}{flag})"


class RemovedEntry:
    """Ledger record for an entry that left the wheel."""

    __slots__ = ('id', 'name', 'removed_at', 'was_protected_winner', 'reason')

    def __init__(self, id, name, removed_at, was_protected_winner=False, reason='spin'):
        self.id = id
        self.name = name
        self.removed_at = removed_at
        self.was_protected_winner = was_protected_winner
        self.reason = reason

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'removed_at': self.removed_at.isoformat(),
            'was_protected_winner': self.was_protected_winner,
            'reason': self.reason,
        }

    def __repr__(self):
        return f"RemovedEntry({self.id!r}, {self.name!r}, reason={self.reason!r})"


class IdFactory:
    """Hands out entry ids of the form "<millis>-<counter>", unique per engine."""

    def __init__(self):
        self._counter = 0

    def next_id(self):
        self._counter += 1
        return f"{int(time.time() * 1000)}-{self._counter}"

    def make_entries(self, names):
        return [Entry(self.next_id(), name) for name in names]


def count_protected(roster):
    return sum(1 for entry in roster if entry.is_protected_winner)


def eliminable(roster):
    """Live entries that may be eliminated (everyone but the protected winner)."""
    return [entry for entry in roster if not entry.is_protected_winner]
