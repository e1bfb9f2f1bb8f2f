"""Mutable state of a single run."""

from dataclasses import dataclass, field
from typing import List, Optional

from dungeon_dash.game.entities import Entity, Player


@dataclass
class RunState:
    """Single source of truth for one run.

    Created by the run controller on start and discarded wholesale on
    reset; no field survives from one run into the next.
    """

    max_lives: int = 3
    lives: int = 3
    score: int = 0
    level: int = 1
    background: int = 0
    frame: int = 0
    invincibility: int = 0
    attack_cooldown: int = 0
    running: bool = False
    character_id: Optional[str] = None
    player: Optional[Player] = None
    hazards: List[Entity] = field(default_factory=list)
    items: List[Entity] = field(default_factory=list)

    @property
    def game_over(self) -> bool:
        return self.lives <= 0
