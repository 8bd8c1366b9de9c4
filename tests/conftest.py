import os
import sys

import pytest

# Ensure repository root importable early
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from delve.dungeon.tiles import FLOOR, WALL  # noqa: E402
from delve.models.entities import Actor, Adversary, CombatStats  # noqa: E402


def grid_from_ascii(text):
    """Build a row-major FLOOR/WALL grid from '#' / '.' lines (blank lines ignored)."""
    rows = [line.strip() for line in text.strip().splitlines() if line.strip()]
    return [[WALL if ch == "#" else FLOOR for ch in row] for row in rows]


@pytest.fixture()
def ascii_grid():
    return grid_from_ascii


@pytest.fixture()
def open_grid():
    """7x7 room: floor everywhere except a one tile wall border."""
    return grid_from_ascii(
        """
        #######
        #.....#
        #.....#
        #.....#
        #.....#
        #.....#
        #######
        """
    )


@pytest.fixture()
def make_actor():
    def _make(x=1, y=1, hp=20, attack=5, defense=2, name="Hero"):
        return Actor(name=name, x=x, y=y, stats=CombatStats(hp, hp, attack, defense))

    return _make


@pytest.fixture()
def make_foe():
    def _make(x, y, behavior="chase", hp=10, attack=3, defense=0, name=None):
        return Adversary(
            name=name or behavior.title(),
            x=x,
            y=y,
            stats=CombatStats(hp, hp, attack, defense),
            behavior=behavior,
        )

    return _make


@pytest.fixture(autouse=True)
def _quiet_logs(monkeypatch):
    """Keep log output out of captured stdout unless a test opts in."""
    monkeypatch.setenv("DELVE_LOG_LEVEL", "error")
    monkeypatch.delenv("DELVE_LOG_JSON", raising=False)
    yield
