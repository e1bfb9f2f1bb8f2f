"""Run controller: owns one run's state and drives it frame by frame.

Lifecycle:
    IDLE --start_run--> RUNNING --lives reach 0--> GAME_OVER --retry--> IDLE

Frame order:
    spawn -> scroll entities -> player physics -> collisions and scoring
    -> level progression -> game over check
"""

import logging
import random
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Dict, FrozenSet, Optional

from dungeon_dash.core.events import Event, EventBus, EventType
from dungeon_dash.core.state import RunPhase, StateMachine
from dungeon_dash.game.characters import get_character
from dungeon_dash.game.clock import FrameDriver
from dungeon_dash.game.collisions import CollisionEngine, CollisionReport, smash_hazards
from dungeon_dash.game.entities import Player, advance_entities
from dungeon_dash.game.lives import LivesTracker
from dungeon_dash.game.progression import ProgressionController
from dungeon_dash.game.run_state import RunState
from dungeon_dash.game.spawner import CLASSIC_PATTERNS, WAVE_PATTERNS, SpawnPattern, Spawner
from dungeon_dash.settings import Settings

if TYPE_CHECKING:
    from dungeon_dash.assets.registry import AssetRegistry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Variant:
    """A ruleset: spawn catalog, item drops and the abilities on offer.

    Fast-fall and attack are never offered together.
    """

    name: str
    patterns: tuple[SpawnPattern, ...]
    items: bool
    abilities: FrozenSet[EventType]


VARIANTS: Dict[str, Variant] = {
    "classic": Variant("classic", CLASSIC_PATTERNS, False, frozenset({EventType.JUMP})),
    "dash": Variant("dash", WAVE_PATTERNS, True, frozenset({EventType.JUMP, EventType.FAST_FALL})),
    "brawler": Variant("brawler", WAVE_PATTERNS, True, frozenset({EventType.JUMP, EventType.ATTACK})),
}


class RunController:
    """
    Orchestrates start, reset and game over, and steps the simulation.

    All mutable run state lives in ``self.state`` and is replaced
    wholesale on reset. The host calls ``step()`` once per display
    refresh; it is a no-op unless a run is in progress.
    """

    def __init__(
        self,
        settings: Settings,
        event_bus: Optional[EventBus] = None,
        state_machine: Optional[StateMachine] = None,
        assets: Optional["AssetRegistry"] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.settings = settings
        self.event_bus = event_bus or EventBus()
        self.state_machine = state_machine or StateMachine()
        self.assets = assets
        self.rng = rng or random.Random(settings.seed)
        self.variant = VARIANTS[settings.variant]

        rules = settings.rules
        self.lives_tracker = LivesTracker(rules.max_lives, rules.invincibility_frames)
        self.collisions = CollisionEngine(self.lives_tracker)
        self.progression = ProgressionController(rules.level_threshold, rules.background_count)
        self.spawner = Spawner(
            settings, self.rng, patterns=self.variant.patterns, items_enabled=self.variant.items
        )
        self.driver = FrameDriver(self._step_frame)

        self.state = self._new_state()
        self._cancel_pending: Optional[Callable[[], None]] = None

        self._subscribe_inputs()
        logger.info(f"RunController ready (variant={self.variant.name})")

    @property
    def phase(self) -> RunPhase:
        return self.state_machine.phase

    @property
    def start_pending(self) -> bool:
        """True while a start request waits for assets."""
        return self._cancel_pending is not None

    # Lifecycle

    def start_run(self, character_id: Optional[str]) -> bool:
        """
        Begin a run with the given hero.

        Requests without a known character, or outside IDLE, are ignored.
        If assets are still loading the start is deferred until they are
        ready and then proceeds with the same character.

        Returns:
            True if the run started immediately
        """
        character = get_character(character_id)
        if character is None:
            logger.warning(f"Start ignored: no valid character selected ({character_id!r})")
            return False

        if self.phase != RunPhase.IDLE:
            logger.warning(f"Start ignored: run is {self.phase.name}")
            return False

        if self.assets is not None and not self.assets.is_ready:
            self._cancel_pending_start()
            logger.info(
                f"Assets loading ({self.assets.loaded}/{self.assets.expected}), "
                f"deferring start for {character.id}"
            )
            self._cancel_pending = self.assets.on_ready(
                lambda: self._start_deferred(character.id)
            )
            return False

        cfg = self.settings.physics
        self.state = self._new_state()
        self.state.character_id = character.id
        self.state.player = Player(
            x=cfg.player_x,
            y=self.settings.floor_y,
            width=cfg.player_width,
            height=cfg.player_height,
            floor_y=self.settings.floor_y,
            gravity=cfg.gravity,
            jump_force=cfg.jump_force,
            fast_fall_speed=cfg.fast_fall_speed,
            max_jumps=cfg.max_jumps,
            jumps=cfg.max_jumps,
            hitbox_padding=character.hitbox_padding,
        )
        self.state.running = True

        self.state_machine.transition(RunPhase.RUNNING, character_id=character.id)
        self.driver.start()
        logger.info(f"Run started with {character.display_name}")
        self._emit(EventType.RUN_STARTED, character=character.id)
        self._emit(EventType.LIVES_CHANGED, lives=self.state.lives)
        return True

    def reset_run(self) -> None:
        """Discard the current run and return to IDLE."""
        self._cancel_pending_start()
        self.driver.stop()
        self.state = self._new_state()

        if self.phase != RunPhase.IDLE:
            self.state_machine.transition(RunPhase.IDLE)

        logger.info("Run reset")
        self._emit(EventType.RUN_RESET)

    def retry(self) -> bool:
        """Leave the game-over screen for character select."""
        if self.phase != RunPhase.GAME_OVER:
            logger.warning(f"Retry ignored: run is {self.phase.name}")
            return False
        self.reset_run()
        return True

    def step(self) -> bool:
        """Advance the simulation by one frame if a run is in progress."""
        return self.driver.tick()

    # Input

    def handle_input(self, event: Event) -> bool:
        """Apply a discrete input trigger. Returns True if it had an effect."""
        if self.phase != RunPhase.RUNNING or self.state.player is None:
            return False
        if event.type not in self.variant.abilities:
            return False

        player = self.state.player
        if event.type == EventType.JUMP:
            if player.jump():
                self._emit(EventType.PLAYER_JUMPED, jumps_left=player.jumps)
                return True
            return False

        if event.type == EventType.FAST_FALL:
            return player.fast_fall()

        if event.type == EventType.ATTACK:
            return self._attack()

        return False

    def _attack(self) -> bool:
        if self.state.attack_cooldown > 0:
            return False

        self.state.attack_cooldown = self.settings.rules.attack_cooldown
        smashed = smash_hazards(self.state, self.settings.rules.attack_radius)
        if smashed:
            logger.debug(f"Attack smashed {len(smashed)} hazard(s)")
            self._emit(EventType.HAZARDS_SMASHED, count=len(smashed))
        return True

    # Simulation

    def _step_frame(self) -> None:
        state = self.state
        state.frame += 1
        if state.attack_cooldown > 0:
            state.attack_cooldown -= 1

        self.spawner.update(state)
        state.hazards = advance_entities(state.hazards)
        state.items = advance_entities(state.items)
        state.player.advance()

        report = self.collisions.resolve(state)
        self._publish(report)

        if self.progression.update(state):
            self._emit(EventType.LEVEL_CHANGED, level=state.level, background=state.background)

        if report.game_over:
            self._game_over()

    def _publish(self, report: CollisionReport) -> None:
        if report.scored:
            self._emit(EventType.SCORE_CHANGED, score=self.state.score)
        if report.hit is not None:
            self._emit(EventType.HAZARD_HIT, kind=report.hit.kind.value)
            self._emit(EventType.LIVES_CHANGED, lives=self.state.lives)
        if report.collected:
            self._emit(EventType.ITEM_COLLECTED, count=len(report.collected))
            if report.lives_gained:
                self._emit(EventType.LIVES_CHANGED, lives=self.state.lives)

    def _game_over(self) -> None:
        self.driver.stop()
        self.state.running = False
        self.state_machine.transition(
            RunPhase.GAME_OVER,
            final_score=self.state.score,
            final_level=self.state.level,
        )
        self._emit(EventType.GAME_OVER, score=self.state.score, level=self.state.level)

    # Helpers

    def _new_state(self) -> RunState:
        max_lives = self.settings.rules.max_lives
        return RunState(max_lives=max_lives, lives=max_lives)

    def _start_deferred(self, character_id: str) -> None:
        self._cancel_pending = None
        self.start_run(character_id)

    def _cancel_pending_start(self) -> None:
        if self._cancel_pending is not None:
            self._cancel_pending()
            self._cancel_pending = None

    def _subscribe_inputs(self) -> None:
        for event_type in (EventType.JUMP, EventType.FAST_FALL, EventType.ATTACK):
            self.event_bus.subscribe(event_type, self.handle_input)
        self.event_bus.subscribe(
            EventType.START, lambda e: self.start_run(e.data.get("character"))
        )
        self.event_bus.subscribe(EventType.RETRY, lambda e: self.retry())

    def _emit(self, event_type: EventType, **data) -> None:
        self.event_bus.emit(Event(event_type, data=data, source="run"))
