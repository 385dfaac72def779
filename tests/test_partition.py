"""Tests for section counting and assignment."""

import random

import pytest

from conftest import make_roster
from spinwheel.entry import count_protected
from spinwheel.partition import assign, group_sections, section_count, section_of


class TestSectionCount:
    """Roster size to wedge count."""

    @pytest.mark.parametrize("n, expected", [
        (0, 0), (1, 1), (2, 2), (6, 6),
        (7, 6), (30, 6), (50, 6),
        (51, 6), (100, 10), (120, 12), (500, 12),
        (501, 19), (5000, 20),
    ])
    def test_documented_values(self, n, expected):
        assert section_count(n) == expected

    def test_bounds_for_all_sizes(self):
        """Always between 1 and min(n, 20) for a non-empty roster."""
        for n in range(1, 3000):
            count = section_count(n)
            assert 1 <= count <= min(n, 20)

    def test_at_least_two_sections_when_two_or_more_entries(self):
        for n in range(2, 2000):
            assert section_count(n) >= 2


class TestAssign:
    """Dealing entries into sections."""

    def test_small_roster_keeps_order(self, rng):
        roster = make_roster(["A", "B", "C", "D"])
        result = assign(roster, rng)
        assert [e.name for e in result] == ["A", "B", "C", "D"]
        assert [e.section_index for e in result] == [0, 1, 2, 3]

    def test_seven_entries_one_section_doubled(self, rng):
        roster = make_roster(["A", "B", "C", "D", "E", "F", "G"])
        result = assign(roster, rng)
        sections = group_sections(result)
        assert len(sections) == 6
        assert sorted(len(s) for s in sections) == [1, 1, 1, 1, 1, 2]

    def test_every_index_in_range(self):
        rng = random.Random(99)
        for n in (7, 49, 50, 51, 230, 500, 501, 1200):
            roster = make_roster([f"n{i}" for i in range(n)])
            result = assign(roster, rng)
            count = section_count(n)
            assert len(result) == n
            assert all(0 <= e.section_index < count for e in result)
            sizes = [len(s) for s in group_sections(result)]
            assert max(sizes) - min(sizes) <= 1

    def test_same_entries_come_back(self, rng):
        roster = make_roster([f"n{i}" for i in range(40)])
        result = assign(roster, rng)
        assert sorted(e.id for e in result) == sorted(e.id for e in roster)

    def test_protected_flag_preserved(self, rng):
        roster = make_roster([f"n{i}" for i in range(40)], protected="n17")
        result = assign(roster, rng)
        assert count_protected(result) == 1
        assert [e.name for e in result if e.is_protected_winner] == ["n17"]

    def test_input_not_mutated(self, rng):
        roster = make_roster([f"n{i}" for i in range(20)])
        assign(roster, rng)
        assert all(e.section_index == 0 for e in roster)

    def test_lost_flag_returns_input(self, rng, monkeypatch):
        """If dealing ever drops the winner flag, the old layout is kept."""
        roster = make_roster([f"n{i}" for i in range(10)], protected="n3")

        def flag_dropping_shuffle(items):
            items[:] = [e.replace(is_protected_winner=False) for e in items]

        monkeypatch.setattr(rng, "shuffle", flag_dropping_shuffle)
        result = assign(roster, rng)
        assert result == roster
        assert count_protected(result) == 1

    def test_empty_roster(self, rng):
        assert assign([], rng) == []


class TestGroupSections:
    """Derived section lists."""

    def test_groups_by_index(self, rng):
        roster = assign(make_roster([f"n{i}" for i in range(12)]), rng)
        sections = group_sections(roster)
        for i, members in enumerate(sections):
            assert all(e.section_index == i for e in members)
        assert sum(len(s) for s in sections) == 12

    def test_section_of(self, rng):
        roster = make_roster(["A", "B", "C"])
        roster = assign(roster, rng)
        assert section_of(roster, "2") == 2
        assert section_of(roster, "missing") is None
