import logging
import math
import random

from .constants import (
    INDIVIDUAL_SLICE_LIMIT, MEDIUM_ROSTER_LIMIT, LARGE_ROSTER_LIMIT,
    MEDIUM_MAX_SECTIONS, LARGE_ENTRIES_PER_SECTION, LARGE_MAX_SECTIONS,
    HUGE_LOG_FACTOR, HUGE_MAX_SECTIONS
)
from .entry import count_protected

logger = logging.getLogger(__name__)


def section_count(n: int) -> int:
    """Number of wheel wedges for a roster of n entries.

    Small rosters get one wedge each; bigger ones are capped so a wheel of
    thousands of names still draws a handful of readable wedges.
    """
    if n <= INDIVIDUAL_SLICE_LIMIT:
        return max(n, 0)
    elif n <= MEDIUM_ROSTER_LIMIT:
        return min(n, MEDIUM_MAX_SECTIONS)
    elif n <= LARGE_ROSTER_LIMIT:
        return min(math.ceil(n / LARGE_ENTRIES_PER_SECTION), LARGE_MAX_SECTIONS)
    else:
        return min(math.ceil(math.log(n) * HUGE_LOG_FACTOR), HUGE_MAX_SECTIONS)


def assign(roster, rng=None):
    """Return the roster with every entry placed in a section.

    Up to six entries keep their order and get a wedge each. Larger rosters
    are shuffled and dealt round-robin so sections differ by at most one.
    Returns the input untouched if the protected flag count changes.
    """
    rng = rng or random
    n = len(roster)
    count = section_count(n)

    if n <= INDIVIDUAL_SLICE_LIMIT:
        distributed = [entry.replace(section_index=i) for i, entry in enumerate(roster)]
    else:
        order = list(roster)
        rng.shuffle(order)
        distributed = [entry.replace(section_index=i % count)
                       for i, entry in enumerate(order)]

    before = count_protected(roster)
    after = count_protected(distributed)
    if before != after:
        logger.error(f"[Partition] Winner flags changed during distribution ({before} -> {after}), keeping previous layout")
        return list(roster)

    return distributed


def group_sections(roster):
    """Derived wedge contents: sections[i] holds every entry with section_index i."""
    count = section_count(len(roster))
    sections = [[] for _ in range(count)]
    for entry in roster:
        if 0 <= entry.section_index < count:
            sections[entry.section_index].append(entry)
        else:
            logger.warning(f"[Partition] {entry!r} is outside {count} sections, skipping")
    return sections


def section_of(roster, entry_id):
    for entry in roster:
        if entry.id == entry_id:
            return entry.section_index
    return None
