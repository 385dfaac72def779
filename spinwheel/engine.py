import logging
import random
import re
import time

from .config import get_config
from .constants import (
    REMOVED_BY_SPIN, REMOVED_MANUALLY, INDIVIDUAL_SLICE_LIMIT,
    STATUS_EMPTY, STATUS_INDIVIDUAL, STATUS_FINAL_SPIN, STATUS_PLAYING, STATUS_REVEALED
)
from .elimination import select
from .entry import GamePhase, IdFactory, count_protected, eliminable
from .errors import EngineDefect, EntryNotFound, SpinRejected, SpinWheelError
from .guard import WinnerGuard
from .ledger import RemovalLedger
from .outcome import decide, is_final_spin, landed_section, verify_landing
from .partition import assign, group_sections, section_count

logger = logging.getLogger(__name__)

_NAME_SEPARATORS = re.compile(r'[\n,;\s]+')
_NUMERIC = re.compile(r'^\d+$')


class SpinResult:
    """Handle for one spin.

    The decision fields are filled in as soon as ``spin()`` returns. The
    outcome fields (``eliminated``, ``final_winner``, ``respun``, ``error``)
    are filled in when the engine resolves the spin, at which point ``done``
    becomes True.
    """

    def __init__(self, decision, start_rotation=0.0, auto=False):
        self.decision = decision
        self.start_rotation = start_rotation
        self.auto = auto
        self.eliminated = []
        self.final_winner = None
        self.landed_section = None
        self.respun = False
        self.error = None
        self.done = False

    @property
    def outcome_kind(self):
        return self.decision.kind

    @property
    def target_rotation_degrees(self):
        return self.decision.final_rotation

    @property
    def duration_seconds(self):
        return self.decision.duration

    def to_dict(self):
        return {
            'outcome_kind': self.outcome_kind,
            'target_rotation_degrees': self.target_rotation_degrees,
            'duration_seconds': self.duration_seconds,
            'target_section': self.decision.target_section,
            'landed_section': self.landed_section,
            'eliminated': [entry.name for entry in self.eliminated],
            'final_winner': self.final_winner,
            'respun': self.respun,
            'done': self.done,
        }

    def __repr__(self):
        state = 'done' if self.done else 'pending'
        return f"SpinResult({self.outcome_kind}, {state}, eliminated={len(self.eliminated)})"


class WheelEngine:
    """The elimination game: roster, spins, eliminations and the final winner.

    Single actor and cooperative. ``spin()`` commits its decision right away
    and the resolution runs later from ``update()`` once the spin's duration
    has elapsed on ``clock``. Pass a seeded ``random.Random`` to make a game
    reproducible.
    """

    def __init__(self, config=None, rng=None, clock=None):
        self.config = config or get_config()
        self.rng = rng or random.Random()
        self.clock = clock or time.monotonic

        self.roster = []
        self.ledger = RemovalLedger()
        self.guard = WinnerGuard()
        self.ids = IdFactory()

        self.phase = GamePhase.PLAYING
        self.winner = None
        self.current_rotation = 0.0
        self.last_result = None
        self.last_error = None

        # Deferred work: (resolve_at, SpinResult) and the safety-net re-spin time
        self._pending = None
        self._respin_at = None
        self._respin_streak = 0

    # ============ State ============

    @property
    def is_spinning(self):
        return self._pending is not None or self._respin_at is not None

    @property
    def is_over(self):
        return self.phase == GamePhase.FINAL_WINNER_DECLARED

    @property
    def sections(self):
        return group_sections(self.roster)

    @property
    def section_count(self):
        return section_count(len(self.roster))

    @property
    def designated_name(self):
        return self.guard.designated_name

    def _require_idle(self, action):
        if self.is_spinning:
            raise SpinRejected(f"Cannot {action} while the wheel is spinning")

    # ============ Roster mutations ============

    def add_entries(self, raw_text):
        """Add names typed as free text. Returns how many were added."""
        names = [token.strip() for token in _NAME_SEPARATORS.split(raw_text or '')]
        return self._append([name for name in names if name])

    def import_entries(self, rows):
        """Add names from already tokenized rows, skipping row numbers and emails."""
        names = []
        for row in rows:
            for token in row:
                cleaned = str(token).strip().replace('"', '')
                if cleaned and not _NUMERIC.match(cleaned) and '@' not in cleaned:
                    names.append(cleaned)
        return self._append(names)

    def _append(self, names):
        if not names:
            return 0
        self._require_idle("add names")
        self.roster = assign(self.roster + self.ids.make_entries(names), self.rng)
        logger.info(f"[Engine] Added {len(names)} names ({len(self.roster)} on the wheel)")
        self._check_guard()
        return len(names)

    def remove_entry(self, entry_id, strict=False):
        """Take one entry off the wheel by hand. It still goes to the ledger."""
        self._require_idle("remove names")
        entry = next((e for e in self.roster if e.id == entry_id), None)
        if entry is None:
            if strict:
                raise EntryNotFound(entry_id)
            return False

        self.ledger.record([entry], REMOVED_MANUALLY)
        self.roster = assign([e for e in self.roster if e.id != entry_id], self.rng)
        logger.info(f"[Engine] Removed {entry.name!r} by hand")
        self._check_guard()
        return True

    def shuffle(self):
        """Redeal everyone into sections without spinning."""
        self._require_idle("shuffle")
        self.roster = assign(self.roster, self.rng)
        self._check_guard()

    def reset(self):
        """Empty wheel, empty ledger, no designation. Always allowed."""
        if self._pending is not None:
            logger.info("[Engine] Reset dropped an unresolved spin")
        self.roster = []
        self.ledger.clear()
        self.guard.clear()
        self.phase = GamePhase.PLAYING
        self.winner = None
        self.current_rotation = 0.0
        self.last_result = None
        self.last_error = None
        self._pending = None
        self._respin_at = None
        self._respin_streak = 0

    # ============ Winner designation ============

    def designate_winner(self, name):
        self._require_idle("change the winner")
        return self.guard.designate(self.roster, name) is not None

    def validate_designation(self):
        return self.guard.validate(self.roster)

    def repair_designation(self):
        return self.guard.repair(self.roster)

    def _check_guard(self):
        """Invariant check run after every roster mutation."""
        self.guard.auto_detect(self.roster, self.config.auto_winner_name)
        if self.guard.repair(self.roster):
            logger.warning("[Engine] Winner flag integrity restored")
        if count_protected(self.roster) > 1:
            logger.error("[Engine] More than one protected entry after repair")

    # ============ Spinning ============

    def spin(self, auto=False):
        """Decide and commit the next spin. Raises SpinRejected if one is pending."""
        if self.is_spinning:
            raise SpinRejected("A spin is already in progress")
        if not self.roster:
            raise SpinRejected("There are no names on the wheel")
        if self.is_over:
            raise SpinRejected(f"The game is over, {self.winner} already won")

        self.guard.ensure(self.roster)
        decision = decide(self.roster, self.config, self.rng)

        result = SpinResult(decision, start_rotation=self.current_rotation, auto=auto)
        self.current_rotation = decision.final_rotation
        self.winner = None
        self.last_result = result
        self._respin_at = None
        self._pending = (self.clock() + decision.duration, result)
        logger.info(f"[Engine] Spinning for {decision.duration:.2f}s to {decision.final_rotation:.1f} deg")
        return result

    def update(self):
        """Per-frame tick. Resolves a spin whose time is up and fires a due re-spin."""
        now = self.clock()
        resolved = None
        if self._pending is not None and now >= self._pending[0]:
            resolved = self._resolve()
        if self._pending is None and self._respin_at is not None and now >= self._respin_at:
            self._auto_respin()
        return resolved

    def advance(self):
        """Resolve the pending spin now, ignoring the clock. Returns it, or None."""
        if self._pending is None:
            return None
        return self._resolve()

    def settle(self):
        """Run pending work, including safety-net re-spins, until the engine is idle.

        Returns the resolved results in order.
        """
        results = []
        while self.is_spinning:
            if self._pending is None:
                if not self._auto_respin():
                    break
            results.append(self._resolve())
        return results

    def spin_and_settle(self):
        """Spin and resolve at once (headless play). Returns the spin's last result."""
        self.spin()
        return self.settle()[-1]

    def _auto_respin(self):
        self._respin_at = None
        logger.info("[Engine] Auto re-spinning after landing on the winner section")
        try:
            self.spin(auto=True)
        except SpinWheelError as exc:
            logger.error(f"[Engine] Auto re-spin failed: {exc}")
            self.last_error = exc
            return False
        return True

    def _resolve(self):
        _, result = self._pending
        try:
            if result.decision.is_final:
                self._resolve_final(result)
            else:
                self._resolve_regular(result)
        except Exception as exc:
            logger.exception(f"[Engine] Error while resolving spin: {exc}")
            result.error = exc
            self.last_error = exc
        finally:
            self._pending = None
            result.done = True
        return result

    def _resolve_final(self, result):
        decision = result.decision
        result.landed_section = landed_section(decision.final_rotation, decision.section_count)
        survivor = self.guard.protected_entry(self.roster) or self.roster[0]
        self._declare(survivor, result)

    def _resolve_regular(self, result):
        sections = group_sections(self.roster)
        landed = landed_section(result.decision.final_rotation, len(sections))
        result.landed_section = landed
        members = sections[landed]

        if not verify_landing(self.roster, result.decision):
            self._respin_streak += 1
            result.respun = True
            if self._respin_streak > self.config.max_auto_respins:
                defect = EngineDefect(self._respin_streak)
                logger.error(f"[Engine] {defect}, giving up")
                result.error = defect
                self.last_error = defect
                self._respin_streak = 0
                return
            logger.warning(f"[Engine] CRITICAL: landed on winner section {landed}, "
                           f"re-spinning in {self.config.respin_cooldown}s")
            self._respin_at = self.clock() + self.config.respin_cooldown
            return

        self._respin_streak = 0
        if not members:
            logger.warning(f"[Engine] No names in section {landed}")
            return

        population = len(eliminable(self.roster))
        chosen = select(eliminable(members), population, self.rng)
        chosen_ids = {entry.id for entry in chosen}
        remaining = [entry for entry in self.roster if entry.id not in chosen_ids]
        lone_survivor = len(remaining) == 1 and (remaining[0].is_protected_winner
                                                 or not self.guard.is_set)
        new_roster = remaining if lone_survivor else assign(remaining, self.rng)

        # roster and ledger are committed together
        self.roster = new_roster
        self.ledger.record(chosen, REMOVED_BY_SPIN)
        result.eliminated = chosen
        logger.info(f"[Engine] Eliminated {[e.name for e in chosen]} from section {landed}, "
                    f"{len(remaining)} left")

        if lone_survivor:
            self._declare(remaining[0], result)
            return
        self._check_guard()

    def _declare(self, entry, result=None):
        self.winner = entry.name
        self.phase = GamePhase.FINAL_WINNER_DECLARED
        if result is not None:
            result.final_winner = entry.name
        logger.info(f"[Engine] FINAL WINNER: {entry.name}")

    # ============ Inspection ============

    def names(self):
        return [entry.name for entry in self.roster]

    def removed(self):
        return list(self.ledger)

    def export_names(self):
        """Roster as newline separated text, ready to paste back into add_entries."""
        return '\n'.join(self.names())

    def clear_removed(self):
        self.ledger.clear()

    def progress(self):
        protected = [entry.name for entry in self.roster if entry.is_protected_winner]
        rest = eliminable(self.roster)
        return {
            'total': len(self.roster),
            'protected_count': len(protected),
            'protected_names': protected,
            'eliminable_count': len(rest),
            'is_final_round': bool(self.roster) and is_final_spin(self.roster),
            'removed_count': len(self.ledger),
            'phase': self.phase.name,
        }

    def force_final_winner(self):
        """Declare the designated winner right away. Returns their name, or None."""
        self._require_idle("declare a winner")
        entry = self.guard.protected_entry(self.roster) or self.guard.find_match(self.roster)
        if entry is None:
            return None
        self._declare(entry)
        return entry.name

    def status_message(self):
        if self.is_over:
            return STATUS_REVEALED
        if not self.roster:
            return STATUS_EMPTY
        if len(self.roster) > 1 and is_final_spin(self.roster):
            return STATUS_FINAL_SPIN
        if len(self.roster) <= INDIVIDUAL_SLICE_LIMIT:
            return STATUS_INDIVIDUAL
        return STATUS_PLAYING

    def snapshot(self):
        """Read-only view of the whole game for display or debugging."""
        return {
            'phase': self.phase.name,
            'spinning': self.is_spinning,
            'winner': self.winner,
            'designated_name': self.guard.designated_name,
            'current_rotation': self.current_rotation,
            'section_count': self.section_count,
            'entries': [entry.to_dict() for entry in self.roster],
            'sections': [[entry.name for entry in members] for members in self.sections],
            'removed': self.ledger.snapshot(),
            'last_error': str(self.last_error) if self.last_error else None,
        }
