"""Tests for how many entries a spin removes and which ones."""

import random
from collections import Counter

import pytest

from conftest import make_roster
from spinwheel.elimination import elimination_count, select


class TestEliminationCount:

    @pytest.mark.parametrize("population, expected", [
        (1, 1), (5, 1), (6, 1),
        (7, 1), (10, 2), (30, 6), (50, 10),
        (51, 7), (200, 30), (500, 75),
        (501, 50), (2000, 200),
    ])
    def test_documented_rule(self, population, expected):
        assert elimination_count(population) == expected


class TestSelect:

    def test_count_matches_rule(self, rng):
        for population in (5, 6, 30, 200, 2000):
            eligible = make_roster([f"n{i}" for i in range(population)])
            chosen = select(eligible, population, rng)
            assert len(chosen) == elimination_count(population)

    def test_clamped_to_eligible(self, rng):
        eligible = make_roster(["A", "B", "C"])
        assert len(select(eligible, 200, rng)) == 3

    def test_empty_eligible(self, rng):
        assert select([], 30, rng) == []

    def test_distinct_subset(self, rng):
        eligible = make_roster([f"n{i}" for i in range(40)])
        chosen = select(eligible, 40, rng)
        ids = [e.id for e in chosen]
        assert len(set(ids)) == len(ids)
        assert set(ids) <= {e.id for e in eligible}

    def test_never_picks_protected(self, rng):
        eligible = make_roster(["A", "B"], protected="A")
        for _ in range(20):
            assert [e.name for e in select(eligible, 200, rng)] == ["B"]

    def test_seeded_selection_repeats(self):
        eligible = make_roster([f"n{i}" for i in range(30)])
        first = select(eligible, 30, random.Random(5))
        second = select(eligible, 30, random.Random(5))
        assert [e.id for e in first] == [e.id for e in second]

    def test_uniform_pick(self):
        """Each of three candidates is picked about a third of the time."""
        rng = random.Random(42)
        eligible = make_roster(["A", "B", "C"])
        counts = Counter(select(eligible, 3, rng)[0].name for _ in range(3000))
        for name in ("A", "B", "C"):
            assert 850 < counts[name] < 1150
