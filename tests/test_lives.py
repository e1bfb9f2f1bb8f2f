"""Tests for the lives pool."""

from dungeon_dash.game.lives import LivesTracker
from dungeon_dash.game.run_state import RunState


def test_take_hit_floors_at_zero():
    tracker = LivesTracker(max_lives=3, invincibility_frames=120)
    state = RunState(lives=1, running=True)

    assert tracker.take_hit(state)
    assert state.lives == 0
    assert state.game_over
    assert not state.running

    tracker.take_hit(state)
    assert state.lives == 0


def test_restore_caps_at_max():
    tracker = LivesTracker(max_lives=3)
    state = RunState(lives=2)

    assert tracker.restore(state)
    assert state.lives == 3
    assert not tracker.restore(state)
    assert state.lives == 3


def test_tick_reports_invincibility():
    tracker = LivesTracker(invincibility_frames=2)
    state = RunState()
    tracker.take_hit(state)

    assert tracker.tick(state)
    assert tracker.tick(state)
    assert not tracker.tick(state)
    assert state.invincibility == 0
