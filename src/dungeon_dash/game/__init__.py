"""Simulation core: actors, spawning, collisions, progression and the run loop."""

from dungeon_dash.game.controller import RunController, Variant, VARIANTS
from dungeon_dash.game.entities import Entity, EntityKind, Player, Rect
from dungeon_dash.game.run_state import RunState

__all__ = [
    "RunController",
    "Variant",
    "VARIANTS",
    "Entity",
    "EntityKind",
    "Player",
    "Rect",
    "RunState",
]
