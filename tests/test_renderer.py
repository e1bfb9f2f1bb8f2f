"""Tests for frame rendering into the numpy buffer."""

import random

import numpy as np

from dungeon_dash.assets.registry import AssetRegistry
from dungeon_dash.core.events import EventBus
from dungeon_dash.graphics.primitives import draw_image, draw_rect, draw_text, measure_text
from dungeon_dash.graphics.renderer import GameRenderer
from dungeon_dash.game.controller import RunController

from conftest import make_goblin


def make_renderer(settings):
    assets = AssetRegistry([])
    controller = RunController(settings, event_bus=EventBus(), rng=random.Random(0))
    return GameRenderer(settings, assets), controller


def test_buffer_shape(settings):
    renderer, _ = make_renderer(settings)
    assert renderer.create_buffer().shape == (720, 1280, 3)


def test_select_screen(settings):
    renderer, controller = make_renderer(settings)
    buffer = renderer.create_buffer()
    renderer.render(buffer, controller, selected="mage")
    assert buffer.any()


def test_running_frame_draws_player_and_hazards(settings):
    renderer, controller = make_renderer(settings)
    controller.start_run("warrior")
    controller.state.hazards = [make_goblin(600)]
    buffer = renderer.create_buffer()

    renderer.render(buffer, controller)

    assert tuple(buffer[680, 140]) == (240, 240, 240)
    assert tuple(buffer[675, 645]) == (200, 200, 200)


def test_player_hidden_while_blinking(settings):
    renderer, controller = make_renderer(settings)
    controller.start_run("warrior")
    controller.state.invincibility = 60
    buffer = renderer.create_buffer()

    renderer.render(buffer, controller)

    assert tuple(buffer[680, 140]) != (240, 240, 240)


def test_draw_rect_clips_to_buffer():
    buffer = np.zeros((10, 10, 3), dtype=np.uint8)
    draw_rect(buffer, -5, -5, 8, 8, (255, 0, 0))
    assert tuple(buffer[0, 0]) == (255, 0, 0)
    assert tuple(buffer[3, 3]) == (0, 0, 0)


def test_draw_image_blends_alpha():
    buffer = np.zeros((4, 4, 3), dtype=np.uint8)
    sprite = np.zeros((2, 2, 4), dtype=np.uint8)
    sprite[0, 0] = (200, 100, 50, 255)
    draw_image(buffer, sprite, 1, 1)
    assert tuple(buffer[1, 1]) == (200, 100, 50)
    assert tuple(buffer[2, 2]) == (0, 0, 0)


def test_draw_text_marks_pixels():
    buffer = np.zeros((20, 40, 3), dtype=np.uint8)
    draw_text(buffer, "HI", 0, 0, (255, 255, 255), scale=2)
    assert buffer.any()
    width, height = measure_text("HI", scale=2)
    assert height == 10
    assert width > 0
