"""Tests for hit resolution, invincibility, scoring and item pickup."""

from dungeon_dash.game.collisions import CollisionEngine, smash_hazards
from dungeon_dash.game.lives import LivesTracker

from conftest import make_goblin, make_potion


def make_engine():
    return CollisionEngine(LivesTracker(max_lives=3, invincibility_frames=120))


def test_hit_costs_life_and_removes_hazard(run_state):
    hazard = make_goblin(120)
    run_state.hazards = [hazard]

    report = make_engine().resolve(run_state)

    assert report.hit is hazard
    assert run_state.lives == 2
    assert run_state.invincibility == 120
    assert run_state.hazards == []
    assert not report.game_over


def test_one_hit_per_frame(run_state):
    run_state.hazards = [make_goblin(110), make_goblin(140)]

    make_engine().resolve(run_state)

    assert run_state.lives == 2
    assert len(run_state.hazards) == 1


def test_invincibility_skips_hits_and_counts_down(run_state):
    run_state.invincibility = 5
    run_state.hazards = [make_goblin(120)]

    report = make_engine().resolve(run_state)

    assert report.invincible
    assert report.hit is None
    assert run_state.lives == 3
    assert run_state.invincibility == 4
    assert len(run_state.hazards) == 1


def test_invincibility_expires(run_state):
    engine = make_engine()
    run_state.hazards = [make_goblin(120)]
    engine.resolve(run_state)
    assert run_state.lives == 2

    run_state.hazards = [make_goblin(120)]
    for _ in range(120):
        engine.resolve(run_state)
    assert run_state.lives == 2
    assert run_state.invincibility == 0

    engine.resolve(run_state)
    assert run_state.lives == 1


def test_last_life_ends_run(run_state):
    run_state.lives = 1
    run_state.hazards = [make_goblin(120)]

    report = make_engine().resolve(run_state)

    assert report.game_over
    assert run_state.lives == 0
    assert not run_state.running


def test_touching_hazard_is_not_a_hit(run_state):
    # Right edge exactly at the player's left edge
    run_state.hazards = [make_goblin(10)]
    report = make_engine().resolve(run_state)
    assert report.hit is None
    assert run_state.lives == 3


def test_hitbox_padding_avoids_graze(run_state):
    # Overlaps the sprite rect but not the padded hitbox
    run_state.player.hitbox_padding = 14
    run_state.hazards = [make_goblin(20)]
    assert make_engine().resolve(run_state).hit is None


def test_passed_hazard_scores_once(run_state):
    engine = make_engine()
    run_state.hazards = [make_goblin(5)]

    assert engine.resolve(run_state).scored == 1
    assert engine.resolve(run_state).scored == 0
    assert run_state.score == 1


def test_hazard_at_player_edge_not_yet_scored(run_state):
    run_state.hazards = [make_goblin(10)]
    make_engine().resolve(run_state)
    assert run_state.score == 0


def test_scoring_continues_while_invincible(run_state):
    run_state.invincibility = 30
    run_state.hazards = [make_goblin(-20)]
    report = make_engine().resolve(run_state)
    assert report.invincible
    assert report.scored == 1


def test_item_restores_life(run_state):
    run_state.lives = 2
    run_state.items = [make_potion(110, 650)]

    report = make_engine().resolve(run_state)

    assert len(report.collected) == 1
    assert report.lives_gained == 1
    assert run_state.lives == 3
    assert run_state.items == []


def test_item_consumed_at_full_lives(run_state):
    run_state.items = [make_potion(110, 650)]

    report = make_engine().resolve(run_state)

    assert report.lives_gained == 0
    assert run_state.lives == 3
    assert run_state.items == []


def test_item_out_of_reach_stays(run_state):
    far = make_potion(600, 400)
    run_state.items = [far]
    make_engine().resolve(run_state)
    assert run_state.items == [far]


def test_smash_removes_nearby_hazards(run_state):
    near = make_goblin(200)
    far = make_goblin(600)
    run_state.hazards = [near, far]

    smashed = smash_hazards(run_state, radius=200)

    assert smashed == [near]
    assert run_state.hazards == [far]
    assert run_state.score == 0


def test_no_player_no_collisions(run_state):
    run_state.player = None
    run_state.hazards = [make_goblin(120)]
    report = make_engine().resolve(run_state)
    assert report.hit is None
    assert smash_hazards(run_state, 200) == []


def test_potion_does_not_revive_after_fatal_hit(run_state):
    run_state.lives = 1
    potion = make_potion(115, 650)
    run_state.hazards = [make_goblin(125)]
    run_state.items = [potion]

    report = make_engine().resolve(run_state)

    assert report.game_over
    assert run_state.lives == 0
    assert report.collected == []
    assert report.lives_gained == 0
    assert run_state.items == [potion]


def test_hit_and_pickup_same_frame(run_state):
    run_state.lives = 2
    run_state.hazards = [make_goblin(125)]
    run_state.items = [make_potion(115, 650)]

    report = make_engine().resolve(run_state)

    assert report.hit is not None
    assert report.lives_gained == 1
    assert run_state.lives == 2
    assert run_state.items == []
