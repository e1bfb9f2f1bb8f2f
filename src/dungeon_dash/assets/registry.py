"""
Sprite loading and the aggregate "assets ready" signal.

Each expected asset resolves exactly once through ``mark_loaded``. When
the last one arrives the registry fires its ready callbacks a single
time; callers that register after that point are called immediately.
"""

import asyncio
import logging
from concurrent.futures import Executor
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional

import numpy as np
from numpy.typing import NDArray
from PIL import Image

from dungeon_dash.game.characters import CHARACTERS

logger = logging.getLogger(__name__)

Sprite = NDArray[np.uint8]


@dataclass(frozen=True)
class AssetSpec:
    """An image to load, with the size it is drawn at."""

    name: str
    filename: str
    size: tuple[int, int]
    color: tuple[int, int, int]  # placeholder fill when the file is unusable


class AssetRegistry:
    """Tracks loaded sprites against the expected set."""

    def __init__(self, expected: Iterable[str]) -> None:
        self._expected = set(expected)
        self._assets: Dict[str, Sprite] = {}
        self._ready_callbacks: List[Callable[[], None]] = []
        self._fired = False

    @property
    def expected(self) -> int:
        return len(self._expected)

    @property
    def loaded(self) -> int:
        return len(self._assets)

    @property
    def is_ready(self) -> bool:
        return self.loaded >= self.expected

    def get(self, name: str) -> Optional[Sprite]:
        return self._assets.get(name)

    def mark_loaded(self, name: str, sprite: Sprite) -> None:
        """Record a finished asset and fire the ready signal on the last one."""
        if name not in self._expected:
            logger.warning(f"Unexpected asset loaded: {name}")
            return
        if name in self._assets:
            return

        self._assets[name] = sprite
        logger.debug(f"Asset loaded: {name} ({self.loaded}/{self.expected})")

        if self.is_ready:
            self._fire_ready()

    def on_ready(self, callback: Callable[[], None]) -> Callable[[], None]:
        """
        Register a one-shot callback for when every asset has loaded.

        Returns:
            Function that cancels the callback if it has not fired yet
        """
        if self.is_ready:
            callback()
            return lambda: None

        self._ready_callbacks.append(callback)

        def cancel() -> None:
            if callback in self._ready_callbacks:
                self._ready_callbacks.remove(callback)

        return cancel

    def _fire_ready(self) -> None:
        if self._fired:
            return
        self._fired = True
        logger.info(f"All {self.expected} assets ready")

        callbacks, self._ready_callbacks = self._ready_callbacks, []
        for callback in callbacks:
            try:
                callback()
            except Exception as e:
                logger.error(f"Error in ready callback: {e}")


def default_manifest(background_count: int = 4) -> List[AssetSpec]:
    """Every sprite the game draws: heroes, enemies, potion and backgrounds."""
    specs = [
        AssetSpec(c.id, c.sprite, (80, 80), c.color) for c in CHARACTERS.values()
    ]
    specs += [
        AssetSpec("goblin", "goblin.png", (90, 90), (90, 160, 70)),
        AssetSpec("boss", "boss.png", (150, 150), (150, 40, 40)),
        AssetSpec("potion", "potion.png", (50, 50), (230, 60, 90)),
    ]
    palette = [(34, 40, 64), (52, 30, 60), (60, 28, 28), (18, 18, 24)]
    for index in range(background_count):
        specs.append(AssetSpec(
            f"background_{index}",
            f"background_{index}.png",
            (1280, 720),
            palette[index % len(palette)],
        ))
    return specs


def load_sprite(path: Path, spec: AssetSpec) -> Sprite:
    """Load an image as an RGBA array sized to ``spec.size``.

    Missing or unreadable files produce a solid placeholder so the game
    stays playable without art.
    """
    width, height = spec.size
    try:
        with Image.open(path) as img:
            img = img.convert("RGBA").resize((width, height), Image.Resampling.LANCZOS)
            return np.asarray(img, dtype=np.uint8).copy()
    except (OSError, ValueError) as e:
        logger.warning(f"Using placeholder for {spec.name}: {e}")

    sprite = np.zeros((height, width, 4), dtype=np.uint8)
    sprite[:, :, :3] = spec.color
    sprite[:, :, 3] = 255
    return sprite


async def load_assets(
    registry: AssetRegistry,
    specs: Iterable[AssetSpec],
    assets_path: Path,
    executor: Optional[Executor] = None,
) -> None:
    """Decode every sprite off the loop thread, marking each as it completes.

    ``mark_loaded`` always runs on the event loop thread, so ready
    callbacks never race the simulation.
    """
    loop = asyncio.get_running_loop()

    async def load_one(spec: AssetSpec) -> None:
        sprite = await loop.run_in_executor(
            executor, load_sprite, assets_path / spec.filename, spec
        )
        registry.mark_loaded(spec.name, sprite)

    await asyncio.gather(*(load_one(spec) for spec in specs))
