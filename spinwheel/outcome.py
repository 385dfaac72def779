"""
Spin outcome decisions.

The wheel's pointer sits at the top (0 degrees). Rotating the wheel by R
degrees brings the point at angle (360 - R) of the section layout under the
pointer, so landing on a section means rotating by 360 minus its center.
``target_rotation`` and ``landed_section`` are exact inverses of each other:

    landed_section(target_rotation(s, c) + k * 360, c) == s
"""
import logging
import math
import random

from .constants import FULL_TURN, SPIN_REGULAR, SPIN_FINAL, EASE_OUT_BEZIER
from .entry import eliminable
from .errors import InvariantViolation
from .partition import group_sections, section_count

logger = logging.getLogger(__name__)


def section_angle(count):
    return FULL_TURN / count


def section_center(section, count):
    angle = section_angle(count)
    return section * angle + angle / 2


def target_rotation(section, count):
    """Rotation in (0, 360) that puts the center of ``section`` under the pointer."""
    return FULL_TURN - section_center(section, count)


def landed_section(rotation, count):
    """Section under the pointer after the wheel has turned ``rotation`` degrees."""
    normalized = rotation % FULL_TURN
    return math.floor((FULL_TURN - normalized) / section_angle(count)) % count


def safe_sections(sections):
    """Indices of non-empty sections that hold no protected entry."""
    return [i for i, members in enumerate(sections)
            if members and not any(entry.is_protected_winner for entry in members)]


def is_final_spin(roster):
    """Final when only the protected winner and at most one rival are left,
    or when a single entry is left and nobody is protected."""
    protected = [entry for entry in roster if entry.is_protected_winner]
    if protected:
        return len(eliminable(roster)) <= 1
    return len(roster) == 1


class SpinDecision:
    """Everything fixed before the wheel starts moving."""

    def __init__(self, kind, target_section, section_count, target_rotation,
                 full_rotations, duration, safe_sections=None):
        self.kind = kind
        self.target_section = target_section
        self.section_count = section_count
        self.target_rotation = target_rotation
        self.full_rotations = full_rotations
        self.duration = duration
        self.safe_sections = safe_sections or []

    @property
    def is_final(self):
        return self.kind == SPIN_FINAL

    @property
    def final_rotation(self):
        return self.full_rotations * FULL_TURN + self.target_rotation

    def to_dict(self):
        return {
            'kind': self.kind,
            'target_section': self.target_section,
            'section_count': self.section_count,
            'target_rotation': self.target_rotation,
            'final_rotation': self.final_rotation,
            'duration': self.duration,
            'safe_sections': list(self.safe_sections),
        }

    def __repr__(self):
        return (f"SpinDecision({self.kind}, section={self.target_section}/{self.section_count}, "
                f"rotation={self.final_rotation:.1f}, duration={self.duration:.2f}s)")


def _flourish(rng, rotations, duration):
    low, high = rotations
    turns = rng.randint(int(low), int(high))
    return turns, rng.uniform(*duration)


def decide(roster, config, rng=None):
    """Pick the section this spin lands on.

    Sections are rebuilt from ``roster`` on every call. A final spin is
    forced onto the protected winner; a regular spin only ever targets a
    section without them.
    """
    rng = rng or random
    if not roster:
        raise InvariantViolation("Cannot decide a spin on an empty wheel")

    sections = group_sections(roster)
    count = section_count(len(roster))

    if is_final_spin(roster):
        survivor = next((e for e in roster if e.is_protected_winner), roster[0])
        target = survivor.section_index
        turns, duration = _flourish(rng, config.final_rotations, config.final_duration)
        decision = SpinDecision(SPIN_FINAL, target, count, target_rotation(target, count),
                                turns, duration)
        logger.info(f"[Spin] FINAL SPIN: forcing wheel onto {survivor.name!r} {decision!r}")
        return decision

    safe = safe_sections(sections)
    if not safe:
        raise InvariantViolation(f"No safe sections among {count} for an elimination spin")

    target = safe[rng.randrange(len(safe))]
    turns, duration = _flourish(rng, config.regular_rotations, config.regular_duration)
    decision = SpinDecision(SPIN_REGULAR, target, count, target_rotation(target, count),
                            turns, duration, safe_sections=safe)
    logger.info(f"[Spin] REGULAR SPIN: eliminating from safe section {decision!r} "
                f"({len(safe)} safe)")
    return decision


def verify_landing(roster, decision):
    """Re-check a regular spin against the roster it is about to eliminate from."""
    if decision.is_final:
        return True
    sections = group_sections(roster)
    if not sections:
        return False
    landed = landed_section(decision.final_rotation, len(sections))
    if any(entry.is_protected_winner for entry in sections[landed]):
        logger.warning(f"[Spin] Wheel landed on winner section {landed} during elimination spin")
        return False
    return True


def _bezier(t, p1, p2):
    u = 1 - t
    return 3 * u * u * t * p1 + 3 * u * t * t * p2 + t ** 3


def ease_out(progress, curve=EASE_OUT_BEZIER):
    """Fast start, slow finish. Maps animation progress in [0, 1] to [0, 1]."""
    if progress <= 0:
        return 0.0
    if progress >= 1:
        return 1.0
    x1, y1, x2, y2 = curve
    # x(t) is monotonic for control points in [0, 1]; bisect for t
    low, high = 0.0, 1.0
    for _ in range(40):
        mid = (low + high) / 2
        if _bezier(mid, x1, x2) < progress:
            low = mid
        else:
            high = mid
    return _bezier((low + high) / 2, y1, y2)
