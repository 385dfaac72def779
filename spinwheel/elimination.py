import logging
import math
import random

from .constants import (
    INDIVIDUAL_SLICE_LIMIT, MEDIUM_ROSTER_LIMIT, LARGE_ROSTER_LIMIT, ELIMINATION_RATES
)

logger = logging.getLogger(__name__)


def elimination_count(population: int) -> int:
    """How many entries a spin removes, paced by the whole eliminable population."""
    if population <= INDIVIDUAL_SLICE_LIMIT:
        return 1
    elif population <= MEDIUM_ROSTER_LIMIT:
        rate = ELIMINATION_RATES['medium']
    elif population <= LARGE_ROSTER_LIMIT:
        rate = ELIMINATION_RATES['large']
    else:
        rate = ELIMINATION_RATES['huge']
    return max(1, math.floor(population * rate))


def select(eligible, population, rng=None):
    """Pick the entries to remove from the landed section.

    ``eligible`` should already exclude the protected winner; it is filtered
    again here anyway. The count comes from ``population`` and is clamped to
    what the section can give.
    """
    rng = rng or random
    candidates = [entry for entry in eligible if not entry.is_protected_winner]
    if len(candidates) != len(eligible):
        logger.error("[Elimination] Protected winner was offered for elimination, skipping it")

    count = min(elimination_count(population), len(candidates))
    logger.debug(f"[Elimination] Removing {count} of {len(candidates)} eligible ({population} eliminable)")
    return rng.sample(candidates, count)
