"""Actors of the play field: the player and the scrolling entities.

Hazards and items share one shape of behaviour (scroll left at a constant
speed, be drawn with a per-kind sprite and size), so they are a single
tagged ``Entity`` dispatched by ``EntityKind`` rather than a class tree.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, NamedTuple


class Rect(NamedTuple):
    """Axis-aligned rectangle (top-left origin, y grows downward)."""

    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def center(self) -> tuple[float, float]:
        return (self.x + self.width / 2, self.y + self.height / 2)

    def intersects(self, other: "Rect") -> bool:
        """Strict AABB overlap; touching edges do not count."""
        return (
            self.x < other.right
            and self.right > other.x
            and self.y < other.bottom
            and self.bottom > other.y
        )

    def shrink(self, padding: float) -> "Rect":
        """Return a copy shrunk by ``padding`` on every side."""
        if padding <= 0:
            return self
        return Rect(
            self.x + padding,
            self.y + padding,
            max(0.0, self.width - 2 * padding),
            max(0.0, self.height - 2 * padding),
        )


class EntityKind(Enum):
    MINOR_HAZARD = "goblin"
    MAJOR_HAZARD = "boss"
    ITEM = "potion"

    @property
    def is_hazard(self) -> bool:
        return self is not EntityKind.ITEM


@dataclass
class Entity:
    """A horizontally scrolling hazard or item."""

    kind: EntityKind
    x: float
    y: float
    width: int
    height: int
    speed: float
    scored: bool = False

    def advance(self) -> None:
        self.x -= self.speed

    @property
    def rect(self) -> Rect:
        return Rect(self.x, self.y, self.width, self.height)

    @property
    def offscreen(self) -> bool:
        """True once the right edge has reached the left border."""
        return self.x + self.width <= 0


def advance_entities(entities: List[Entity]) -> List[Entity]:
    """Scroll every entity one frame and drop the ones that left the field."""
    for entity in entities:
        entity.advance()
    return [e for e in entities if not e.offscreen]


def count_hazards(entities: Iterable[Entity]) -> int:
    return sum(1 for e in entities if e.kind.is_hazard)


@dataclass
class Player:
    """Vertical kinematics for the auto-running character.

    The player never moves horizontally. Gravity pulls it toward the floor
    line, where landing restores the jump charges.
    """

    x: float
    y: float
    width: int
    height: int
    floor_y: float
    gravity: float
    jump_force: float
    fast_fall_speed: float
    max_jumps: int = 2
    hitbox_padding: float = 0.0
    dy: float = 0.0
    jumps: int = 2
    on_ground: bool = False

    def advance(self) -> bool:
        """Integrate one frame of gravity.

        Returns:
            True on the frame the player lands (airborne -> grounded edge)
        """
        self.dy += self.gravity
        self.y += self.dy

        if self.y >= self.floor_y:
            self.y = self.floor_y
            self.dy = 0.0
            landed = not self.on_ground
            if landed:
                self.jumps = self.max_jumps
            self.on_ground = True
            return landed

        self.on_ground = False
        return False

    def jump(self) -> bool:
        """Spend one jump charge. No-op without charges."""
        if self.jumps <= 0:
            return False
        self.dy = self.jump_force
        self.jumps -= 1
        return True

    def fast_fall(self) -> bool:
        """Slam down toward the floor. Only while airborne."""
        if self.on_ground:
            return False
        self.dy = self.fast_fall_speed
        return True

    @property
    def rect(self) -> Rect:
        return Rect(self.x, self.y, self.width, self.height)

    def hitbox(self) -> Rect:
        return self.rect.shrink(self.hitbox_padding)

    def is_visible(self, frame: int, invincibility_timer: int, blink_period: int = 10) -> bool:
        """Blink while invincible: hidden for the first half of each period."""
        if invincibility_timer > 0 and frame % blink_period < blink_period // 2:
            return False
        return True
