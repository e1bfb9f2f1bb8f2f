"""DUNGEON DASH - side-scrolling arcade runner."""

__version__ = "0.1.0"
