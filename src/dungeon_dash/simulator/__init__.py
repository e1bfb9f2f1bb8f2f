"""Desktop pygame shell for DUNGEON DASH."""

from .window import GameWindow, WindowConfig

__all__ = ["GameWindow", "WindowConfig"]
