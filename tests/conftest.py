"""Shared pytest fixtures."""

import random
import sys
from pathlib import Path

import pytest

# Ensure the package is importable without installing it
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from spinwheel.config import ModeConfig
from spinwheel.engine import WheelEngine
from spinwheel.entry import Entry


class FakeClock:
    """Manually advanced stand-in for time.monotonic."""

    def __init__(self, start=0.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


def make_roster(names, protected=None):
    """Entries with ids "0", "1", ... and an optional protected name."""
    return [Entry(str(i), name, is_protected_winner=(name == protected))
            for i, name in enumerate(names)]


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def config():
    return ModeConfig('quick')


@pytest.fixture
def engine(config, rng, clock):
    return WheelEngine(config, rng=rng, clock=clock)
