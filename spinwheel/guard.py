import logging

from .entry import normalize_name
from .errors import DesignationError

logger = logging.getLogger(__name__)


class WinnerGuard:
    """Keeps the "exactly one protected entry" promise for a designated name.

    The designation is stored as a name rather than an entry id so it
    survives bulk imports and roster rebuilds. All methods work on the
    roster list handed in and flip ``is_protected_winner`` in place.
    """

    def __init__(self):
        self.designated_name = None

    @property
    def is_set(self):
        return bool(self.designated_name)

    def clear(self):
        self.designated_name = None

    def matches(self, entry):
        return self.is_set and entry.normalized == normalize_name(self.designated_name)

    def find_match(self, roster):
        """Live entry carrying the designated name.

        Several entries can share a normalized name; the flagged one wins,
        otherwise the first in roster order.
        """
        if not self.is_set:
            return None
        matches = [entry for entry in roster if self.matches(entry)]
        for entry in matches:
            if entry.is_protected_winner:
                return entry
        return matches[0] if matches else None

    def designate(self, roster, name):
        """Protect the entry called ``name``; every other entry loses the flag."""
        self.designated_name = name.strip()
        match = self.find_match(roster)
        for entry in roster:
            entry.is_protected_winner = entry is match
        if match:
            logger.info(f"[Guard] Pre-selected winner set: {match.name}")
        else:
            logger.warning(f"[Guard] Pre-selected winner {name!r} set but not on the wheel yet")
        return match

    def auto_detect(self, roster, auto_name):
        """Designate ``auto_name`` if nobody is designated and it is on the wheel."""
        if self.is_set or not auto_name:
            return False
        target = normalize_name(auto_name)
        for entry in roster:
            if entry.normalized == target:
                logger.info(f"[Guard] Found {entry.name!r}, setting as pre-selected winner")
                self.designate(roster, entry.name)
                return True
        return False

    def validate(self, roster):
        flagged = [entry for entry in roster if entry.is_protected_winner]
        if len(flagged) > 1:
            logger.error(f"[Guard] Multiple winners flagged: {[e.name for e in flagged]}")
            return False
        if not self.is_set:
            return True

        match = self.find_match(roster)
        if match is None:
            logger.error(f"[Guard] Pre-selected winner {self.designated_name!r} not found in names list")
            return False
        if not match.is_protected_winner:
            logger.error(f"[Guard] Pre-selected winner {self.designated_name!r} is not properly flagged")
            return False
        return True

    def repair(self, roster):
        """Restore a single correctly flagged winner. Returns True if anything changed."""
        changed = False

        if self.is_set:
            for entry in roster:
                if entry.is_protected_winner and not self.matches(entry):
                    entry.is_protected_winner = False
                    changed = True

        flagged = [entry for entry in roster if entry.is_protected_winner]
        if len(flagged) > 1:
            logger.warning(f"[Guard] Multiple winners detected, keeping {flagged[0].name!r}")
            for entry in flagged[1:]:
                entry.is_protected_winner = False
            changed = True
        elif not flagged:
            match = self.find_match(roster)
            if match is not None:
                logger.warning(f"[Guard] Winner flag was lost, restoring {match.name!r}")
                match.is_protected_winner = True
                changed = True

        return changed

    def ensure(self, roster):
        """Repair, then raise if the designation still does not hold."""
        self.repair(roster)
        if not self.validate(roster):
            raise DesignationError(self.designated_name)

    def protected_entry(self, roster):
        for entry in roster:
            if entry.is_protected_winner:
                return entry
        return None
