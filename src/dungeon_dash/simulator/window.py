"""
Desktop game window using pygame.

Hosts the run controller: translates key presses into input events,
steps the simulation once per display refresh and blits the rendered
frame buffer.
"""

import pygame
import asyncio
import logging
from dataclasses import dataclass
from typing import Optional

from ..assets.registry import AssetRegistry, default_manifest, load_assets
from ..audio.engine import AudioEngine
from ..core.events import Event, EventBus, EventType, attack_event, fast_fall_event, input_event, jump_event
from ..core.state import RunPhase
from ..game.characters import CHARACTER_ORDER
from ..game.controller import RunController
from ..graphics.renderer import GameRenderer
from ..settings import Settings

logger = logging.getLogger(__name__)


@dataclass
class WindowConfig:
    """Game window configuration."""
    title: str = "Dungeon Dash"
    fullscreen: bool = False
    bg_color: tuple[int, int, int] = (0, 0, 0)


class GameWindow:
    """
    Main game window.

    Keyboard Mapping:
        1-5: Select hero
        RETURN: Start run / retry after game over
        SPACE, UP: Jump
        DOWN: Fast-fall (dash variant)
        X: Attack (brawler variant)
        R: Retry after game over
        BACKSPACE: Abandon run, back to hero select
        ESC: Exit
    """

    def __init__(
        self,
        settings: Settings,
        config: WindowConfig | None = None,
        event_bus: EventBus | None = None,
        audio: AudioEngine | None = None,
    ) -> None:
        self.settings = settings
        self.config = config or WindowConfig()
        self.event_bus = event_bus or EventBus()
        self.audio = audio

        specs = default_manifest(settings.rules.background_count)
        self._asset_specs = specs
        self.assets = AssetRegistry(spec.name for spec in specs)
        self.controller = RunController(settings, event_bus=self.event_bus, assets=self.assets)
        self.renderer = GameRenderer(settings, self.assets)
        self._buffer = self.renderer.create_buffer()

        self._screen: pygame.Surface | None = None
        self._clock: pygame.time.Clock | None = None
        self._running = False
        self._selected: Optional[str] = None

        self.event_bus.subscribe(EventType.RUN_RESET, self._on_run_reset)
        logger.info("GameWindow created")

    @property
    def selected_character(self) -> Optional[str]:
        return self._selected

    def _init_pygame(self) -> None:
        """Initialize pygame and create window."""
        pygame.init()
        pygame.display.set_caption(self.config.title)

        flags = pygame.DOUBLEBUF
        if self.config.fullscreen:
            flags |= pygame.FULLSCREEN

        screen = self.settings.screen
        self._screen = pygame.display.set_mode((screen.width, screen.height), flags)
        self._clock = pygame.time.Clock()
        logger.info(f"Pygame initialized: {screen.width}x{screen.height}")

    def _handle_events(self) -> None:
        """Process pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._running = False
            elif event.type == pygame.KEYDOWN:
                self._handle_keydown(event)

    def _handle_keydown(self, event: pygame.event.Event) -> None:
        """Queue the input for this key. KEYDOWN fires once per press."""
        key = event.key
        phase = self.controller.phase

        if key == pygame.K_ESCAPE:
            self._running = False
        elif key == pygame.K_BACKSPACE:
            self.controller.reset_run()

        elif phase == RunPhase.IDLE:
            if pygame.K_1 <= key < pygame.K_1 + len(CHARACTER_ORDER):
                self._selected = CHARACTER_ORDER[key - pygame.K_1]
                logger.debug(f"Selected hero: {self._selected}")
            elif key in (pygame.K_RETURN, pygame.K_KP_ENTER):
                self.event_bus.queue_event(input_event(EventType.START, character=self._selected))

        elif phase == RunPhase.RUNNING:
            if key in (pygame.K_SPACE, pygame.K_UP):
                self.event_bus.queue_event(jump_event())
            elif key == pygame.K_DOWN:
                self.event_bus.queue_event(fast_fall_event())
            elif key == pygame.K_x:
                self.event_bus.queue_event(attack_event())

        elif phase == RunPhase.GAME_OVER:
            if key in (pygame.K_r, pygame.K_RETURN):
                self.event_bus.queue_event(input_event(EventType.RETRY))

    def _on_run_reset(self, event: Event) -> None:
        # Back at hero select with nothing chosen
        self._selected = None

    def _render(self) -> None:
        """Render the current frame."""
        if not self._screen:
            return

        self.renderer.render(self._buffer, self.controller, self._selected)
        surface = pygame.surfarray.make_surface(self._buffer.swapaxes(0, 1))
        self._screen.fill(self.config.bg_color)
        self._screen.blit(surface, (0, 0))
        pygame.display.flip()

    async def _load_assets(self) -> None:
        try:
            await load_assets(self.assets, self._asset_specs, self.settings.assets_path)
        except Exception as e:
            logger.error(f"Asset loading failed: {e}")

    async def run(self) -> None:
        """Main game loop: one simulation step and one render per refresh."""
        self._init_pygame()
        self._running = True
        loader = asyncio.create_task(self._load_assets())

        logger.info("Game window started")

        while self._running:
            self._handle_events()

            # Inputs apply on the frame boundary, before the step
            await self.event_bus.process_queue()

            self.controller.step()
            self._render()

            if self._clock:
                self._clock.tick(self.settings.screen.fps)

            # Yield to other tasks
            await asyncio.sleep(0)

        if not loader.done():
            loader.cancel()
        self._cleanup()

    def _cleanup(self) -> None:
        """Clean up pygame resources."""
        if self.audio:
            self.audio.shutdown()
        pygame.quit()
        logger.info("Game window stopped")

    def stop(self) -> None:
        """Stop the game loop."""
        self._running = False
