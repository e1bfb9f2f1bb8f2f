"""Playable character catalog."""

from dataclasses import dataclass
from typing import Dict, Optional


@dataclass(frozen=True)
class Character:
    """A selectable hero. Only the sprite and hitbox differ between heroes."""

    id: str
    display_name: str
    sprite: str
    hitbox_padding: float = 0.0
    color: tuple[int, int, int] = (220, 220, 220)  # placeholder sprite tint


CHARACTERS: Dict[str, Character] = {
    "assassin": Character("assassin", "ASSASSIN", "assassin.png", hitbox_padding=14.0, color=(120, 90, 200)),
    "cleric": Character("cleric", "CLERIC", "cleric.png", color=(240, 230, 170)),
    "warrior": Character("warrior", "WARRIOR", "warrior.png", color=(200, 70, 60)),
    "mage": Character("mage", "MAGE", "mage.png", color=(70, 130, 230)),
    "idol": Character("idol", "IDOL", "idol.png", color=(250, 140, 200)),
}

# Selection order on the start screen (keys 1-5)
CHARACTER_ORDER = ["assassin", "cleric", "warrior", "mage", "idol"]


def get_character(character_id: Optional[str]) -> Optional[Character]:
    """Look up a character, returning None for unknown or missing ids."""
    if not character_id:
        return None
    return CHARACTERS.get(character_id)
