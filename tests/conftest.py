"""Shared fixtures for the retakes spawn tests."""

from dataclasses import dataclass
from typing import Optional

import pytest

from retakes_spawns.spawns import Bombsite, Spawn, SpawnStore, Team


@dataclass(eq=False)
class FakePlayer:
    player_id: int
    team: Optional[Team]
    alive: bool = True


def make_spawn(x, team=Team.COUNTER_TERRORIST, bombsite=Bombsite.A, planter=False, spawn_id=0, **kwargs):
    return Spawn(
        position=(float(x), 0.0, 0.0),
        orientation=(0.0, 90.0, 0.0),
        team=team,
        bombsite=bombsite,
        can_be_planter=planter,
        id=spawn_id,
        **kwargs,
    )


@pytest.fixture
def map_dir(tmp_path):
    return tmp_path / "map_config"


@pytest.fixture
def store(map_dir):
    store = SpawnStore(map_dir, "de_test")
    store.load()
    return store
