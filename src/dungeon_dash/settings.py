"""
Game settings using Pydantic.

Settings are loaded from environment variables with .env file support.
All values are expressed in play-field pixels and simulation frames
(one frame per display refresh at the target FPS).
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ScreenSettings(BaseModel):
    """Play field geometry."""

    width: int = 1280
    height: int = 720
    fps: int = 60


class PhysicsSettings(BaseModel):
    """Vertical kinematics and scroll speed."""

    gravity: float = 0.6
    jump_force: float = -15.0
    fast_fall_speed: float = 20.0
    object_speed: float = 5.0  # leftward, per frame

    player_x: float = 100.0
    player_width: int = 80
    player_height: int = 80
    max_jumps: int = Field(default=2, ge=1)


class SpawnSettings(BaseModel):
    """Spawner cadence, caps and entity sizes."""

    hazard_interval: int = Field(default=100, ge=1)  # frames between spawn decisions
    hazard_cap: int = Field(default=5, ge=1)

    minor_size: int = 90
    major_size: int = 150
    pair_gap: float = 220.0
    raise_offset: float = 160.0

    item_interval: int = Field(default=300, ge=1)
    item_warmup: int = Field(default=600, ge=0)
    item_chance: float = Field(default=0.5, ge=0.0, le=1.0)
    item_size: int = 50
    item_band_min: float = 80.0
    item_band_max: float = 260.0


class RulesSettings(BaseModel):
    """Lives, invincibility, scoring and abilities."""

    max_lives: int = Field(default=3, ge=1)
    invincibility_frames: int = Field(default=120, ge=0)  # 2 seconds at 60fps
    blink_period: int = Field(default=10, ge=2)

    level_threshold: int = Field(default=10, ge=1)
    background_count: int = Field(default=4, ge=1)

    attack_radius: float = 200.0
    attack_cooldown: int = Field(default=45, ge=0)


class Settings(BaseSettings):
    """Main game settings."""

    model_config = SettingsConfigDict(
        env_prefix="DUNGEON_DASH_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    debug: bool = False
    variant: Literal["classic", "dash", "brawler"] = "dash"
    audio_enabled: bool = True
    seed: int | None = None

    assets_path: Path = Field(
        default_factory=lambda: Path(__file__).parent / "assets" / "images"
    )

    screen: ScreenSettings = Field(default_factory=ScreenSettings)
    physics: PhysicsSettings = Field(default_factory=PhysicsSettings)
    spawn: SpawnSettings = Field(default_factory=SpawnSettings)
    rules: RulesSettings = Field(default_factory=RulesSettings)

    @property
    def floor_y(self) -> float:
        """Top edge of the player when standing on the floor."""
        return float(self.screen.height - self.physics.player_height)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
