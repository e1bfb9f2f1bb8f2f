"""Collision detection, hit resolution and pass-through scoring."""

import logging
import math
from dataclasses import dataclass, field
from typing import List, Optional

from dungeon_dash.game.entities import Entity, Player
from dungeon_dash.game.lives import LivesTracker
from dungeon_dash.game.run_state import RunState

logger = logging.getLogger(__name__)


@dataclass
class CollisionReport:
    """What happened during one collision pass."""

    scored: int = 0
    hit: Optional[Entity] = None
    invincible: bool = False
    collected: List[Entity] = field(default_factory=list)
    lives_gained: int = 0
    game_over: bool = False


class CollisionEngine:
    """
    Resolves the player against hazards and items once per frame.

    Runs after every actor has moved. Scoring and item pickups happen
    every frame; hit detection is skipped entirely while the player is
    invincible, and at most one hit is resolved per frame.
    """

    def __init__(self, lives: LivesTracker) -> None:
        self.lives = lives

    def resolve(self, state: RunState) -> CollisionReport:
        report = CollisionReport()
        player = state.player
        if player is None:
            return report

        report.scored = self.score_passed(state, player)

        if self.lives.tick(state):
            report.invincible = True
        else:
            report.hit = self._resolve_hit(state, player)
            report.game_over = report.hit is not None and state.lives == 0

        if report.game_over:
            # The run is over; potions touched on the fatal frame stay put
            return report

        report.collected, report.lives_gained = self._collect_items(state, player)
        return report

    def score_passed(self, state: RunState, player: Player) -> int:
        """Score each hazard once, when its right edge clears the player's left edge."""
        scored = 0
        for hazard in state.hazards:
            if not hazard.scored and hazard.x + hazard.width < player.x:
                hazard.scored = True
                scored += 1
        state.score += scored
        return scored

    def _resolve_hit(self, state: RunState, player: Player) -> Optional[Entity]:
        hitbox = player.hitbox()
        for index, hazard in enumerate(state.hazards):
            if hitbox.intersects(hazard.rect):
                del state.hazards[index]
                self.lives.take_hit(state)
                return hazard
        return None

    def _collect_items(self, state: RunState, player: Player) -> tuple[List[Entity], int]:
        hitbox = player.hitbox()
        collected = [item for item in state.items if hitbox.intersects(item.rect)]
        if not collected:
            return collected, 0

        gained = 0
        for _ in collected:
            if self.lives.restore(state):
                gained += 1

        # Consumed even when lives were already full
        taken = {id(item) for item in collected}
        state.items = [item for item in state.items if id(item) not in taken]
        logger.debug(f"Collected {len(collected)} item(s), lives={state.lives}")
        return collected, gained


def smash_hazards(state: RunState, radius: float) -> List[Entity]:
    """Remove every hazard whose centre lies within ``radius`` of the player's centre.

    Smashed hazards are gone before they can pass the player, so they never
    score.
    """
    if state.player is None:
        return []
    px, py = state.player.rect.center

    smashed = []
    survivors = []
    for hazard in state.hazards:
        hx, hy = hazard.rect.center
        if math.hypot(hx - px, hy - py) <= radius:
            smashed.append(hazard)
        else:
            survivors.append(hazard)
    state.hazards = survivors
    return smashed
