"""Tests for the winner designation guard."""

import pytest

from conftest import make_roster
from spinwheel.entry import Entry, count_protected, normalize_name
from spinwheel.errors import DesignationError
from spinwheel.guard import WinnerGuard


class TestNormalizeName:

    def test_case_and_spacing_ignored(self):
        assert normalize_name("  Alex  Dhanaraj ") == "alexdhanaraj"
        assert normalize_name("ALEX\tDHANARAJ") == "alexdhanaraj"


class TestDesignate:
    """Marking the protected entry."""

    def test_flags_only_the_match(self):
        roster = make_roster(["Alice", "Bob", "Carol"])
        guard = WinnerGuard()
        match = guard.designate(roster, "  bob ")
        assert match.name == "Bob"
        assert [e.is_protected_winner for e in roster] == [False, True, False]

    def test_whitespace_insensitive(self):
        roster = [Entry("1", "Alex Dhanaraj"), Entry("2", "Zed")]
        guard = WinnerGuard()
        guard.designate(roster, "alexdhanaraj")
        assert roster[0].is_protected_winner

    def test_moves_flag(self):
        roster = make_roster(["Alice", "Bob"], protected="Alice")
        guard = WinnerGuard()
        guard.designate(roster, "Bob")
        assert [e.is_protected_winner for e in roster] == [False, True]

    def test_unknown_name_clears_everyone(self):
        roster = make_roster(["Alice", "Bob"], protected="Alice")
        guard = WinnerGuard()
        assert guard.designate(roster, "Zed") is None
        assert count_protected(roster) == 0
        assert guard.designated_name == "Zed"


class TestValidate:

    def test_valid_designation(self):
        roster = make_roster(["Alice", "Bob"])
        guard = WinnerGuard()
        guard.designate(roster, "Bob")
        assert guard.validate(roster) is True

    def test_no_designation_is_valid(self):
        assert WinnerGuard().validate(make_roster(["Alice"])) is True

    def test_missing_from_roster(self):
        guard = WinnerGuard()
        guard.designate(make_roster(["Alice"]), "Bob")
        assert guard.validate(make_roster(["Alice"])) is False

    def test_match_not_flagged(self):
        roster = make_roster(["Alice", "Bob"])
        guard = WinnerGuard()
        guard.designate(roster, "Bob")
        roster[1].is_protected_winner = False
        assert guard.validate(roster) is False

    def test_two_flags_invalid(self):
        roster = make_roster(["Alice", "Bob"])
        for e in roster:
            e.is_protected_winner = True
        assert WinnerGuard().validate(roster) is False


class TestRepair:

    def test_nothing_to_do(self):
        roster = make_roster(["Alice", "Bob"])
        guard = WinnerGuard()
        guard.designate(roster, "Bob")
        assert guard.repair(roster) is False

    def test_keeps_first_of_many(self):
        roster = make_roster(["A", "B", "C", "D"])
        roster[1].is_protected_winner = True
        roster[3].is_protected_winner = True
        guard = WinnerGuard()
        assert guard.repair(roster) is True
        assert [e.name for e in roster if e.is_protected_winner] == ["B"]

    def test_prefers_designated_name(self):
        roster = make_roster(["A", "B", "C"])
        guard = WinnerGuard()
        guard.designate(roster, "B")
        roster[0].is_protected_winner = True
        assert guard.repair(roster) is True
        assert [e.name for e in roster if e.is_protected_winner] == ["B"]
        assert guard.validate(roster)

    def test_restores_lost_flag(self):
        roster = make_roster(["A", "B", "C"])
        guard = WinnerGuard()
        guard.designate(roster, "C")
        roster[2].is_protected_winner = False
        assert guard.repair(roster) is True
        assert roster[2].is_protected_winner

    def test_duplicate_name_keeps_flagged_copy(self):
        """Two entries share the name; the flagged one wherever it sits."""
        roster = make_roster(["Alex", "B", "alex", "C"])
        guard = WinnerGuard()
        guard.designate(roster, "Alex")
        roster.reverse()
        assert guard.find_match(roster) is roster[3]
        assert guard.validate(roster)
        assert guard.repair(roster) is False
        assert [e.name for e in roster if e.is_protected_winner] == ["Alex"]

    def test_ensure_raises_when_unrecoverable(self):
        guard = WinnerGuard()
        guard.designate([], "Ghost")
        with pytest.raises(DesignationError):
            guard.ensure(make_roster(["A", "B"]))


class TestAutoDetect:

    def test_designates_configured_name(self):
        roster = [Entry("1", "Bob"), Entry("2", "Alex Dhanaraj")]
        guard = WinnerGuard()
        assert guard.auto_detect(roster, "AlexDhanaraj") is True
        assert roster[1].is_protected_winner
        assert guard.designated_name == "Alex Dhanaraj"

    def test_leaves_existing_designation(self):
        roster = make_roster(["Bob", "Carol"])
        guard = WinnerGuard()
        guard.designate(roster, "Bob")
        assert guard.auto_detect(roster, "Carol") is False
        assert roster[0].is_protected_winner

    def test_no_match(self):
        guard = WinnerGuard()
        assert guard.auto_detect(make_roster(["Bob"]), "Carol") is False
        assert guard.auto_detect(make_roster(["Bob"]), None) is False
