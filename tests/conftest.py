"""Shared fixtures for the test suite."""

import random

import pytest

from dungeon_dash.game.entities import Entity, EntityKind, Player
from dungeon_dash.game.run_state import RunState
from dungeon_dash.settings import Settings


class ScriptedRandom(random.Random):
    """Random source that replays a fixed list of draws."""

    def __init__(self, values):
        super().__init__(0)
        self.values = list(values)

    def random(self):
        return self.values.pop(0)


@pytest.fixture
def settings() -> Settings:
    """Default settings, isolated from the environment and any .env file."""
    return Settings(_env_file=None)


@pytest.fixture
def player(settings) -> Player:
    physics = settings.physics
    return Player(
        x=physics.player_x,
        y=settings.floor_y,
        width=physics.player_width,
        height=physics.player_height,
        floor_y=settings.floor_y,
        gravity=physics.gravity,
        jump_force=physics.jump_force,
        fast_fall_speed=physics.fast_fall_speed,
        on_ground=True,
    )


@pytest.fixture
def run_state(player) -> RunState:
    return RunState(player=player, running=True)


def make_goblin(x: float, y: float = 630.0) -> Entity:
    return Entity(EntityKind.MINOR_HAZARD, x=x, y=y, width=90, height=90, speed=5.0)


def make_potion(x: float, y: float) -> Entity:
    return Entity(EntityKind.ITEM, x=x, y=y, width=50, height=50, speed=5.0)
