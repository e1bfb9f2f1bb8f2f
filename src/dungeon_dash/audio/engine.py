"""
DUNGEON DASH Audio Engine - synthesized chiptune effects.

Every sound is generated at startup from simple waveforms, so the game
ships without audio files. Audio is strictly optional: mixer or playback
failures are logged and the run carries on silently.
"""

import pygame
import array
import math
import random
import logging
from typing import Callable, Dict, List, Optional

from dungeon_dash.core.events import Event, EventBus, EventType

logger = logging.getLogger(__name__)

SAMPLE_RATE = 44100


def square(t: float, freq: float) -> float:
    """Square wave oscillator."""
    return 1 if (t * freq) % 1 < 0.5 else -1


def sine(t: float, freq: float) -> float:
    """Sine wave oscillator."""
    return math.sin(2 * math.pi * freq * t)


def noise() -> float:
    """White noise generator."""
    return random.random() * 2 - 1


class AudioEngine:
    """Plays short effects in response to gameplay events."""

    def __init__(self) -> None:
        self._initialized = False
        self._sounds: Dict[str, pygame.mixer.Sound] = {}
        self._volume = 0.8
        self._unsubscribers: List[Callable[[], None]] = []

    @property
    def initialized(self) -> bool:
        return self._initialized

    def init(self) -> bool:
        """Initialize the mixer and generate the effects."""
        try:
            pygame.mixer.pre_init(SAMPLE_RATE, -16, 2, 1024)
            pygame.mixer.init()
            self._initialized = True
            self._generate_all_sounds()
            logger.info(f"Audio engine initialized ({len(self._sounds)} sounds)")
            return True
        except Exception as e:
            self._initialized = False
            logger.error(f"Failed to initialize audio: {e}")
            return False

    def attach(self, event_bus: EventBus) -> None:
        """Play effects for run events published on the bus."""
        routes = {
            EventType.PLAYER_JUMPED: "jump",
            EventType.HAZARD_HIT: "hit",
            EventType.HAZARDS_SMASHED: "smash",
            EventType.ITEM_COLLECTED: "pickup",
            EventType.LEVEL_CHANGED: "level_up",
            EventType.GAME_OVER: "game_over",
            EventType.RUN_STARTED: "start",
        }
        for event_type, sound_name in routes.items():
            self._unsubscribers.append(
                event_bus.subscribe(event_type, self._player_for(sound_name))
            )

    def detach(self) -> None:
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers.clear()

    def _player_for(self, sound_name: str) -> Callable[[Event], None]:
        def handler(event: Event) -> None:
            self.play(sound_name)
        return handler

    def play(self, sound_name: str, volume: float = 1.0) -> Optional[pygame.mixer.Channel]:
        """Play a sound effect. Failures are logged, never raised."""
        if not self._initialized:
            return None

        sound = self._sounds.get(sound_name)
        if not sound:
            logger.warning(f"Sound not found: {sound_name}")
            return None

        try:
            sound.set_volume(volume * self._volume)
            return sound.play()
        except pygame.error as e:
            logger.warning(f"Playback failed for {sound_name}: {e}")
            return None

    def shutdown(self) -> None:
        self.detach()
        if self._initialized:
            pygame.mixer.quit()
            self._initialized = False

    # ===== SOUND GENERATION =====

    def _create_sound(self, samples: array.array) -> pygame.mixer.Sound:
        """Create a pygame Sound from mono samples (auto-converted to stereo)."""
        stereo = array.array('h')
        for s in samples:
            stereo.append(s)
            stereo.append(s)
        return pygame.mixer.Sound(buffer=stereo)

    def _generate_all_sounds(self) -> None:
        self._gen_jump()
        self._gen_hit()
        self._gen_smash()
        self._gen_pickup()
        self._gen_level_up()
        self._gen_game_over()
        self._gen_start()

    def _gen_jump(self) -> None:
        """Rising chirp."""
        samples = array.array('h')
        for i in range(int(SAMPLE_RATE * 0.12)):
            t = i / SAMPLE_RATE
            freq = 300 + t * 3000
            env = max(0, 1 - t * 8)
            samples.append(int(square(t, freq) * 0.25 * env * 32767))
        self._sounds["jump"] = self._create_sound(samples)

    def _gen_hit(self) -> None:
        """Noise crunch with a low thud."""
        samples = array.array('h')
        for i in range(int(SAMPLE_RATE * 0.25)):
            t = i / SAMPLE_RATE
            env = max(0, 1 - t * 4)
            val = noise() * 0.35 + sine(t, 90) * 0.3
            samples.append(int(val * env * 32767))
        self._sounds["hit"] = self._create_sound(samples)

    def _gen_smash(self) -> None:
        """Short swoosh."""
        samples = array.array('h')
        for i in range(int(SAMPLE_RATE * 0.15)):
            t = i / SAMPLE_RATE
            env = max(0, 1 - t * 7)
            val = noise() * 0.3 + square(t, 180 - t * 400) * 0.15
            samples.append(int(val * env * 32767))
        self._sounds["smash"] = self._create_sound(samples)

    def _gen_pickup(self) -> None:
        """Two-note sparkle."""
        samples = array.array('h')
        for i in range(int(SAMPLE_RATE * 0.2)):
            t = i / SAMPLE_RATE
            freq = 988 if t < 0.08 else 1319
            env = max(0, 1 - t * 5)
            samples.append(int(square(t, freq) * 0.2 * env * 32767))
        self._sounds["pickup"] = self._create_sound(samples)

    def _gen_level_up(self) -> None:
        """Triumphant arpeggio."""
        samples = array.array('h')
        notes = [523, 659, 784, 1047]
        for i in range(int(SAMPLE_RATE * 0.5)):
            t = i / SAMPLE_RATE
            note_idx = min(int(t * 10), 3)
            env = max(0, 1 - (t - note_idx * 0.1) * 5)
            samples.append(int(square(t, notes[note_idx]) * 0.25 * env * 32767))
        self._sounds["level_up"] = self._create_sound(samples)

    def _gen_game_over(self) -> None:
        """Sad descending tone."""
        samples = array.array('h')
        for i in range(int(SAMPLE_RATE * 0.8)):
            t = i / SAMPLE_RATE
            freq = 440 - t * 250
            env = max(0, 1 - t * 1.25)
            samples.append(int(square(t, freq) * 0.25 * env * 32767))
        self._sounds["game_over"] = self._create_sound(samples)

    def _gen_start(self) -> None:
        """Bright fanfare blip."""
        samples = array.array('h')
        for i in range(int(SAMPLE_RATE * 0.3)):
            t = i / SAMPLE_RATE
            freq = 659 if t < 0.1 else 880
            env = max(0, 1 - t * 3.3)
            val = square(t, freq) * 0.2 + sine(t, freq / 2) * 0.1
            samples.append(int(val * env * 32767))
        self._sounds["start"] = self._create_sound(samples)


_audio_engine: Optional[AudioEngine] = None


def get_audio_engine() -> AudioEngine:
    """Get the global audio engine instance."""
    global _audio_engine
    if _audio_engine is None:
        _audio_engine = AudioEngine()
    return _audio_engine
