"""Frame renderer: draws the run state into an RGB frame buffer."""

from typing import Optional

import numpy as np
from numpy.typing import NDArray

from dungeon_dash.assets.registry import AssetRegistry
from dungeon_dash.core.state import RunPhase
from dungeon_dash.game.characters import CHARACTER_ORDER, CHARACTERS
from dungeon_dash.game.controller import RunController
from dungeon_dash.game.entities import Entity
from dungeon_dash.graphics.primitives import (
    draw_centered_text, draw_heart, draw_image, draw_rect, draw_text, fill,
)
from dungeon_dash.settings import Settings

HUD_COLOR = (240, 240, 240)
HEART_COLOR = (230, 40, 60)
EMPTY_HEART_COLOR = (70, 70, 80)
OVERLAY_COLOR = (255, 80, 80)
FLOOR_COLOR = (60, 45, 35)


class GameRenderer:
    """
    Draws one frame for the current phase.

    IDLE shows character select, RUNNING shows the play field with HUD,
    GAME_OVER shows the frozen field under a game-over banner.
    """

    def __init__(self, settings: Settings, assets: AssetRegistry) -> None:
        self.settings = settings
        self.assets = assets

    def create_buffer(self) -> NDArray[np.uint8]:
        screen = self.settings.screen
        return np.zeros((screen.height, screen.width, 3), dtype=np.uint8)

    def render(
        self,
        buffer: NDArray[np.uint8],
        controller: RunController,
        selected: Optional[str] = None,
    ) -> None:
        if controller.phase == RunPhase.IDLE:
            self._render_select(buffer, controller, selected)
            return

        self._render_field(buffer, controller)
        self._render_hud(buffer, controller)

        if controller.phase == RunPhase.GAME_OVER:
            draw_centered_text(buffer, "GAME OVER", 260, OVERLAY_COLOR, scale=12)
            draw_centered_text(buffer, f"SCORE {controller.state.score}", 360, HUD_COLOR, scale=6)
            draw_centered_text(buffer, "PRESS R TO RETRY", 440, HUD_COLOR, scale=4)

    def _render_select(
        self,
        buffer: NDArray[np.uint8],
        controller: RunController,
        selected: Optional[str],
    ) -> None:
        fill(buffer, (20, 20, 30))
        draw_centered_text(buffer, "DUNGEON DASH", 80, (255, 200, 80), scale=12)
        draw_centered_text(buffer, "CHOOSE YOUR HERO 1-5", 190, HUD_COLOR, scale=4)

        slot = 200
        left = (buffer.shape[1] - slot * len(CHARACTER_ORDER)) // 2
        for index, character_id in enumerate(CHARACTER_ORDER):
            character = CHARACTERS[character_id]
            x = left + index * slot + 60
            if character_id == selected:
                draw_rect(buffer, x - 10, 290, 100, 100, (255, 200, 80), filled=False, thickness=4)
            sprite = self.assets.get(character_id)
            if sprite is not None:
                draw_image(buffer, sprite, x, 300)
            draw_text(buffer, f"{index + 1} {character.display_name}", x - 10, 410, HUD_COLOR, scale=3)

        if controller.start_pending:
            status = f"LOADING {self.assets.loaded}/{self.assets.expected}"
        elif selected:
            status = "PRESS ENTER TO START"
        else:
            status = ""
        if status:
            draw_centered_text(buffer, status, 520, HUD_COLOR, scale=4)

    def _render_field(self, buffer: NDArray[np.uint8], controller: RunController) -> None:
        state = controller.state
        background = self.assets.get(f"background_{state.background}")
        if background is not None:
            draw_image(buffer, background[:, :, :3], 0, 0)
        else:
            fill(buffer, (30, 30, 45))
        draw_rect(buffer, 0, self.settings.screen.height - 4, buffer.shape[1], 4, FLOOR_COLOR)

        for entity in state.items:
            self._draw_entity(buffer, entity)
        for entity in state.hazards:
            self._draw_entity(buffer, entity)

        player = state.player
        if player is not None and player.is_visible(
            state.frame, state.invincibility, self.settings.rules.blink_period
        ):
            sprite = self.assets.get(state.character_id)
            if sprite is not None:
                draw_image(buffer, sprite, int(player.x), int(player.y))
            else:
                draw_rect(buffer, int(player.x), int(player.y), player.width, player.height, HUD_COLOR)

    def _draw_entity(self, buffer: NDArray[np.uint8], entity: Entity) -> None:
        sprite = self.assets.get(entity.kind.value)
        if sprite is not None:
            draw_image(buffer, sprite, int(entity.x), int(entity.y))
        else:
            draw_rect(buffer, int(entity.x), int(entity.y), entity.width, entity.height, (200, 200, 200))

    def _render_hud(self, buffer: NDArray[np.uint8], controller: RunController) -> None:
        state = controller.state
        for index in range(state.max_lives):
            color = HEART_COLOR if index < state.lives else EMPTY_HEART_COLOR
            draw_heart(buffer, 20 + index * 36, 20, color, scale=4)

        draw_text(buffer, f"SCORE {state.score}", buffer.shape[1] - 360, 20, HUD_COLOR, scale=5)
        draw_text(buffer, f"LEVEL {state.level}", buffer.shape[1] - 360, 56, HUD_COLOR, scale=5)
