"""Graphics module for the frame buffer rendering pipeline."""

from dungeon_dash.graphics.renderer import GameRenderer
from dungeon_dash.graphics.primitives import (
    draw_centered_text,
    draw_heart,
    draw_image,
    draw_rect,
    draw_text,
    fill,
)

__all__ = [
    # Renderer
    "GameRenderer",
    # Primitives
    "draw_centered_text",
    "draw_heart",
    "draw_image",
    "draw_rect",
    "draw_text",
    "fill",
]
