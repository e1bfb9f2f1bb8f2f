"""Procedural hazard and item spawning.

Hazard waves are picked from a fixed catalog with a single uniform draw
against ascending cumulative thresholds, so a given random source always
reproduces the same sequence of waves.
"""

import logging
import random
from dataclasses import dataclass
from typing import List, Sequence

from dungeon_dash.game.entities import Entity, EntityKind, count_hazards
from dungeon_dash.game.run_state import RunState
from dungeon_dash.settings import Settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Placement:
    """One hazard of a wave, relative to the right edge of the field."""

    kind: EntityKind
    gap: int = 0  # pair gaps beyond the right edge
    raised: bool = False


@dataclass(frozen=True)
class SpawnPattern:
    name: str
    threshold: float  # cumulative upper bound of the roll
    placements: tuple[Placement, ...]


_MINOR = EntityKind.MINOR_HAZARD
_MAJOR = EntityKind.MAJOR_HAZARD

# First release: a boss one time in five, otherwise a goblin
CLASSIC_PATTERNS: tuple[SpawnPattern, ...] = (
    SpawnPattern("boss", 0.20, (Placement(_MAJOR),)),
    SpawnPattern("goblin", 1.00, (Placement(_MINOR),)),
)

WAVE_PATTERNS: tuple[SpawnPattern, ...] = (
    SpawnPattern("paired_high", 0.10, (Placement(_MINOR, raised=True), Placement(_MINOR, 1, raised=True))),
    SpawnPattern("paired_staggered", 0.25, (Placement(_MINOR), Placement(_MINOR, 1, raised=True))),
    SpawnPattern("paired_ground", 0.45, (Placement(_MINOR), Placement(_MINOR, 1))),
    SpawnPattern("boss", 0.60, (Placement(_MAJOR),)),
    SpawnPattern("goblin", 1.00, (Placement(_MINOR),)),
)


def select_pattern(patterns: Sequence[SpawnPattern], roll: float) -> SpawnPattern:
    """Return the first pattern whose cumulative threshold exceeds ``roll``.

    The last pattern is the fallback for rolls past every threshold.
    """
    for pattern in patterns:
        if roll < pattern.threshold:
            return pattern
    return patterns[-1]


class Spawner:
    """Frame-indexed spawner with a hazard population cap."""

    def __init__(
        self,
        settings: Settings,
        rng: random.Random,
        patterns: Sequence[SpawnPattern] = WAVE_PATTERNS,
        items_enabled: bool = True,
    ) -> None:
        self.settings = settings
        self.rng = rng
        self.patterns = tuple(patterns)
        self.items_enabled = items_enabled

    def update(self, state: RunState) -> List[Entity]:
        """Run the spawn decisions for ``state.frame``.

        New entities are appended to the state's collections and also
        returned for the caller's convenience.
        """
        spawned = self._spawn_hazards(state)
        if self.items_enabled:
            spawned.extend(self._spawn_item(state))
        return spawned

    def _spawn_hazards(self, state: RunState) -> List[Entity]:
        cfg = self.settings.spawn
        if state.frame % cfg.hazard_interval != 0:
            return []

        live = count_hazards(state.hazards)
        if live >= cfg.hazard_cap:
            return []

        pattern = select_pattern(self.patterns, self.rng.random())
        if live + len(pattern.placements) > cfg.hazard_cap:
            # A pair that would overflow the cap shrinks to the fallback single
            pattern = self.patterns[-1]

        hazards = [self._place(p) for p in pattern.placements]
        state.hazards.extend(hazards)
        logger.debug(f"Frame {state.frame}: spawned {pattern.name} ({live + len(hazards)} live)")
        return hazards

    def _place(self, placement: Placement) -> Entity:
        cfg = self.settings.spawn
        size = cfg.major_size if placement.kind is EntityKind.MAJOR_HAZARD else cfg.minor_size
        y = self.settings.screen.height - size
        if placement.raised:
            y -= cfg.raise_offset
        return Entity(
            kind=placement.kind,
            x=float(self.settings.screen.width + placement.gap * cfg.pair_gap),
            y=float(y),
            width=size,
            height=size,
            speed=self.settings.physics.object_speed,
        )

    def _spawn_item(self, state: RunState) -> List[Entity]:
        cfg = self.settings.spawn
        if state.frame < cfg.item_warmup or state.frame % cfg.item_interval != 0:
            return []
        if self.rng.random() >= cfg.item_chance:
            return []

        lift = self.rng.uniform(cfg.item_band_min, cfg.item_band_max)
        item = Entity(
            kind=EntityKind.ITEM,
            x=float(self.settings.screen.width),
            y=self.settings.screen.height - cfg.item_size - lift,
            width=cfg.item_size,
            height=cfg.item_size,
            speed=self.settings.physics.object_speed,
        )
        state.items.append(item)
        logger.debug(f"Frame {state.frame}: spawned item at y={item.y:.0f}")
        return [item]
