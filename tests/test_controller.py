"""Tests for the run lifecycle, frame stepping and variant abilities."""

import random

import numpy as np
import pytest

from dungeon_dash.assets.registry import AssetRegistry
from dungeon_dash.core.events import Event, EventBus, EventType, attack_event, fast_fall_event, jump_event
from dungeon_dash.core.state import RunPhase
from dungeon_dash.game.controller import VARIANTS, RunController

from conftest import make_goblin, make_potion

SPRITE = np.zeros((4, 4, 4), dtype=np.uint8)


class RecordingBus(EventBus):
    """Event bus that keeps every emitted event."""

    def __init__(self):
        super().__init__()
        self.emitted = []

    def emit(self, event):
        self.emitted.append(event)
        super().emit(event)

    def last(self, event_type):
        return [e for e in self.emitted if e.type == event_type][-1]


def make_controller(settings, variant="dash", **kwargs):
    settings = settings.model_copy(update={"variant": variant})
    kwargs.setdefault("rng", random.Random(0))
    return RunController(settings, event_bus=RecordingBus(), **kwargs)


def history_types(controller):
    return [e.type for e in controller.event_bus.emitted]


class TestStart:
    @pytest.mark.parametrize("character", [None, "", "necromancer"])
    def test_invalid_character_ignored(self, settings, character):
        controller = make_controller(settings)
        assert not controller.start_run(character)
        assert controller.phase == RunPhase.IDLE
        assert not controller.driver.running

    def test_start_initializes_run(self, settings):
        controller = make_controller(settings)
        assert controller.start_run("warrior")

        state = controller.state
        assert controller.phase == RunPhase.RUNNING
        assert controller.driver.running
        assert state.running
        assert state.character_id == "warrior"
        assert state.lives == 3
        assert state.score == 0
        assert state.level == 1
        assert state.player.y == settings.floor_y
        assert state.player.jumps == 2
        assert EventType.RUN_STARTED in history_types(controller)

    def test_character_sets_hitbox(self, settings):
        controller = make_controller(settings)
        controller.start_run("assassin")
        assert controller.state.player.hitbox_padding == 14

    def test_start_while_running_ignored(self, settings):
        controller = make_controller(settings)
        controller.start_run("mage")
        assert not controller.start_run("cleric")
        assert controller.state.character_id == "mage"

    def test_start_event_from_bus(self, settings):
        controller = make_controller(settings)
        controller.event_bus.emit(Event(EventType.START, data={"character": "idol"}))
        assert controller.phase == RunPhase.RUNNING
        assert controller.state.character_id == "idol"


class TestDeferredStart:
    def test_waits_for_assets_and_keeps_character(self, settings):
        assets = AssetRegistry(["hero", "background_0"])
        controller = make_controller(settings, assets=assets)

        assert not controller.start_run("mage")
        assert controller.start_pending
        assert controller.phase == RunPhase.IDLE

        assets.mark_loaded("hero", SPRITE)
        assert controller.phase == RunPhase.IDLE

        assets.mark_loaded("background_0", SPRITE)
        assert controller.phase == RunPhase.RUNNING
        assert controller.state.character_id == "mage"
        assert not controller.start_pending

    def test_starts_immediately_when_ready(self, settings):
        assets = AssetRegistry(["hero"])
        assets.mark_loaded("hero", SPRITE)
        controller = make_controller(settings, assets=assets)
        assert controller.start_run("cleric")

    def test_reset_cancels_pending_start(self, settings):
        assets = AssetRegistry(["hero"])
        controller = make_controller(settings, assets=assets)
        controller.start_run("warrior")

        controller.reset_run()
        assets.mark_loaded("hero", SPRITE)

        assert controller.phase == RunPhase.IDLE
        assert not controller.start_pending

    def test_latest_request_wins(self, settings):
        assets = AssetRegistry(["hero"])
        controller = make_controller(settings, assets=assets)
        controller.start_run("warrior")
        controller.start_run("cleric")

        assets.mark_loaded("hero", SPRITE)
        assert controller.state.character_id == "cleric"


class TestStepping:
    def test_step_noop_when_idle(self, settings):
        controller = make_controller(settings)
        assert not controller.step()
        assert controller.state.frame == 0

    def test_step_advances_frame(self, settings):
        controller = make_controller(settings)
        controller.start_run("warrior")
        for _ in range(5):
            assert controller.step()
        assert controller.state.frame == 5
        assert controller.driver.ticks == 5

    def test_first_spawn_on_frame_100(self, settings):
        controller = make_controller(settings)
        controller.start_run("warrior")
        for _ in range(99):
            controller.step()
        assert controller.state.hazards == []
        controller.step()
        assert controller.state.hazards

    def test_game_over_on_last_life(self, settings):
        controller = make_controller(settings)
        controller.start_run("warrior")
        controller.state.lives = 1
        controller.state.hazards = [make_goblin(150)]

        controller.step()

        assert controller.phase == RunPhase.GAME_OVER
        assert controller.state.lives == 0
        assert not controller.state.running
        assert not controller.driver.running
        assert controller.state_machine.context.final_score == 0
        assert EventType.GAME_OVER in history_types(controller)

        frame = controller.state.frame
        assert not controller.step()
        assert controller.state.frame == frame

    def test_potion_on_fatal_frame_keeps_run_over(self, settings):
        controller = make_controller(settings)
        controller.start_run("warrior")
        controller.state.lives = 1
        controller.state.hazards = [make_goblin(150)]
        controller.state.items = [make_potion(125, 650)]

        controller.step()

        assert controller.phase == RunPhase.GAME_OVER
        assert controller.state.lives == 0
        assert EventType.ITEM_COLLECTED not in history_types(controller)
        assert controller.event_bus.last(EventType.LIVES_CHANGED).data["lives"] == 0

    def test_game_over_always_at_zero_lives(self, settings):
        for seed in range(5):
            controller = make_controller(settings, rng=random.Random(seed))
            controller.start_run("warrior")
            for _ in range(4000):
                if not controller.step():
                    break
            if controller.phase == RunPhase.GAME_OVER:
                assert controller.state.lives == 0

    def test_hit_publishes_lives(self, settings):
        controller = make_controller(settings)
        controller.start_run("warrior")
        controller.state.hazards = [make_goblin(150)]
        controller.step()

        assert controller.event_bus.last(EventType.LIVES_CHANGED).data["lives"] == 2
        assert controller.state.invincibility == 120

    def test_level_up_event(self, settings):
        controller = make_controller(settings)
        controller.start_run("warrior")
        controller.state.score = 10
        controller.step()

        assert controller.state.level == 2
        assert controller.state.background == 1
        assert EventType.LEVEL_CHANGED in history_types(controller)

    def test_same_seed_same_run(self, settings):
        results = []
        for _ in range(2):
            controller = make_controller(settings, rng=random.Random(7))
            controller.start_run("warrior")
            for _ in range(1500):
                controller.step()
            state = controller.state
            results.append((state.frame, state.score, state.lives, len(state.hazards)))
        assert results[0] == results[1]


class TestResetAndRetry:
    def test_reset_discards_run(self, settings):
        controller = make_controller(settings)
        controller.start_run("warrior")
        controller.step()
        controller.reset_run()

        assert controller.phase == RunPhase.IDLE
        assert not controller.driver.running
        assert controller.state.player is None
        assert controller.state.frame == 0
        assert EventType.RUN_RESET in history_types(controller)

    def test_retry_only_after_game_over(self, settings):
        controller = make_controller(settings)
        assert not controller.retry()

        controller.start_run("warrior")
        assert not controller.retry()
        assert controller.phase == RunPhase.RUNNING

        controller.state.lives = 1
        controller.state.hazards = [make_goblin(150)]
        controller.step()
        assert controller.phase == RunPhase.GAME_OVER

        controller.event_bus.emit(Event(EventType.RETRY))
        assert controller.phase == RunPhase.IDLE
        assert controller.state.lives == 3
        assert controller.state.score == 0

    def test_new_run_after_retry_is_fresh(self, settings):
        controller = make_controller(settings)
        controller.start_run("warrior")
        controller.state.score = 7
        controller.state.lives = 1
        controller.state.hazards = [make_goblin(150)]
        controller.step()
        controller.retry()

        assert controller.start_run("mage")
        assert controller.state.score == 0
        assert controller.state.lives == 3
        assert controller.state.frame == 0


class TestVariants:
    def test_catalog(self):
        assert set(VARIANTS) == {"classic", "dash", "brawler"}
        for variant in VARIANTS.values():
            assert not {EventType.FAST_FALL, EventType.ATTACK} <= variant.abilities
        assert not VARIANTS["classic"].items

    def test_input_ignored_when_idle(self, settings):
        controller = make_controller(settings)
        assert not controller.handle_input(jump_event())

    def test_jump_via_bus(self, settings):
        controller = make_controller(settings)
        controller.start_run("warrior")
        controller.event_bus.emit(jump_event())

        assert controller.state.player.jumps == 1
        assert EventType.PLAYER_JUMPED in history_types(controller)

    def test_dash_fast_fall(self, settings):
        controller = make_controller(settings, "dash")
        controller.start_run("warrior")
        controller.step()
        assert not controller.handle_input(fast_fall_event())

        controller.handle_input(jump_event())
        controller.step()
        assert controller.handle_input(fast_fall_event())
        assert controller.state.player.dy == settings.physics.fast_fall_speed
        assert not controller.handle_input(attack_event())

    def test_classic_is_jump_only(self, settings):
        controller = make_controller(settings, "classic")
        controller.start_run("warrior")
        controller.handle_input(jump_event())
        controller.step()
        assert not controller.handle_input(fast_fall_event())
        assert not controller.handle_input(attack_event())

    def test_brawler_attack_and_cooldown(self, settings):
        controller = make_controller(settings, "brawler")
        controller.start_run("warrior")
        controller.state.hazards = [make_goblin(250), make_goblin(900)]

        assert controller.handle_input(attack_event())
        assert len(controller.state.hazards) == 1
        assert EventType.HAZARDS_SMASHED in history_types(controller)

        assert not controller.handle_input(attack_event())
        for _ in range(settings.rules.attack_cooldown):
            controller.step()
        assert controller.handle_input(attack_event())
        assert not controller.handle_input(fast_fall_event())
