import random

import pytest

from flappy_bird.config import (
    CLOUD_FREQUENCY,
    INITIAL_SPEED,
    MIN_WINDOW_HEIGHT,
    MIN_WINDOW_WIDTH,
    PIPE_FREQUENCY,
    PIPE_WIDTH,
    SPEED_INCREMENT,
    SPEED_STEP_SCORE,
)
from flappy_bird.entities import Obstacle
from flappy_bird.storage import HighScoreStore
from flappy_bird.world import GameState, IllegalTransition, World


def safe_obstacle(w: World, x: float) -> Obstacle:
    """An obstacle whose gap spans nearly the whole view."""
    obs = Obstacle(x, w.height, w.rng)
    obs.top_height, obs.bottom_y = 1, w.height - 1
    return obs


def test_initial_state() -> None:
    w = World(400, 600, rng=random.Random(1))
    assert w.state is GameState.START
    assert w.score == 0
    assert w.speed == INITIAL_SPEED
    assert w.frames == 0
    assert w.obstacles == [] and w.clouds == []
    assert w.bird.y == 300
    assert w.high_score == 0


def test_start_flaps_and_plays() -> None:
    w = World(rng=random.Random(1))
    w.primary_action()
    assert w.state is GameState.PLAYING
    assert w.bird.velocity == w.bird.flap_impulse


def test_primary_action_while_playing_only_flaps() -> None:
    w = World(rng=random.Random(1))
    w.start()
    w.bird.velocity = 3.0
    w.primary_action()
    assert w.state is GameState.PLAYING
    assert w.bird.velocity == w.bird.flap_impulse


def test_primary_action_after_game_over_resets() -> None:
    w = World(rng=random.Random(1))
    w.start()
    w.trigger_game_over()
    w.primary_action()
    assert w.state is GameState.START


def test_illegal_transitions_raise() -> None:
    w = World(rng=random.Random(1))
    with pytest.raises(IllegalTransition):
        w.transition(GameState.GAMEOVER)
    w.start()
    with pytest.raises(IllegalTransition):
        w.start()
    w.trigger_game_over()
    with pytest.raises(IllegalTransition) as err:
        w.transition(GameState.PLAYING)
    assert err.value.current is GameState.GAMEOVER
    assert err.value.target is GameState.PLAYING


def test_game_over_outside_playing_is_ignored() -> None:
    w = World(rng=random.Random(1))
    w.trigger_game_over()
    assert w.state is GameState.START
    w.start()
    w.trigger_game_over()
    w.trigger_game_over()
    assert w.state is GameState.GAMEOVER


def test_speed_increases_on_every_fifth_point() -> None:
    w = World(rng=random.Random(1))
    w.start()
    speeds = []
    for _ in range(12):
        w.add_point(safe_obstacle(w, 0))
        speeds.append(w.speed)
    assert speeds[3] == pytest.approx(INITIAL_SPEED)
    assert speeds[4] == pytest.approx(3.2)
    assert speeds[8] == pytest.approx(3.2)
    assert speeds[9] == pytest.approx(INITIAL_SPEED + 2 * SPEED_INCREMENT)
    assert speeds == sorted(speeds)


def test_obstacles_spawn_on_interval_and_scroll_left() -> None:
    w = World(rng=random.Random(5))
    w.start()
    w.step()
    assert len(w.obstacles) == 1
    first = w.obstacles[0]
    assert first.x == pytest.approx(w.width - w.speed)

    positions = [first.x]
    for _ in range(PIPE_FREQUENCY - 1):
        w.bird.y = first.top_height + (first.bottom_y - first.top_height) / 2
        w.bird.velocity = 0.0
        w.step()
        positions.append(first.x)
    assert len(w.obstacles) == 1
    assert all(b < a for a, b in zip(positions, positions[1:]))

    w.bird.y = w.height / 2
    w.bird.velocity = 0.0
    w.obstacles = []
    w.step()
    assert w.frames == PIPE_FREQUENCY + 1
    assert len(w.obstacles) == 1


def test_offscreen_obstacles_removed() -> None:
    w = World(rng=random.Random(5))
    w.start()
    w.frames = 1
    gone = safe_obstacle(w, -PIPE_WIDTH + 1)
    gone.passed = True
    kept = safe_obstacle(w, 300)
    w.obstacles = [gone, kept]
    w.bird.y = w.height / 2
    w.step()
    assert w.obstacles == [kept]


def test_scoring_through_step() -> None:
    w = World(rng=random.Random(5))
    w.start()
    w.frames = 1
    w.bird.y = w.height / 2
    w.bird.velocity = 0.0
    obs = safe_obstacle(w, w.bird.x - PIPE_WIDTH - 1 + w.speed)
    w.obstacles = [obs]
    w.step()
    assert w.score == 1
    assert obs.passed


def test_game_over_freezes_simulation() -> None:
    w = World(rng=random.Random(5))
    w.start()
    w.step()
    w.trigger_game_over()
    x = w.obstacles[0].x
    y = w.bird.y
    frames = w.frames
    for _ in range(10):
        w.step()
    assert w.obstacles[0].x == x
    assert w.bird.y == y
    assert w.frames == frames


def test_clouds_drift_in_every_state() -> None:
    w = World(rng=random.Random(5))
    w.step()
    assert len(w.clouds) == 1
    for _ in range(CLOUD_FREQUENCY):
        w.step()
    assert len(w.clouds) == 2
    assert w.state is GameState.START
    x = w.clouds[0].x
    w.step()
    assert w.clouds[0].x < x


def test_start_screen_bird_bobs() -> None:
    w = World(400, 600, rng=random.Random(5))
    w.step(now_ms=0.0)
    assert w.bird.y == pytest.approx(300.0)
    w.step(now_ms=471.0)  # ~ quarter period of sin(t/300)
    assert w.bird.y == pytest.approx(310.0, abs=0.01)
    assert w.bird.velocity == 0.0


def test_restart_resets_everything() -> None:
    w = World(rng=random.Random(5))
    w.start()
    for _ in range(30):
        w.bird.y = w.height / 2
        w.step()
    for _ in range(5):
        w.add_point(safe_obstacle(w, 0))
    w.trigger_game_over()
    w.restart()
    assert w.state is GameState.START
    assert w.score == 0
    assert w.speed == INITIAL_SPEED
    assert w.frames == 0
    assert w.obstacles == [] and w.clouds == []
    assert w.bird.velocity == 0.0
    assert w.bird.y == w.height / 2
    assert w.high_score == 5


def test_restart_allowed_while_playing() -> None:
    w = World(rng=random.Random(5))
    w.start()
    w.restart()
    assert w.state is GameState.START


def test_resize_keeps_game_state() -> None:
    w = World(rng=random.Random(5))
    w.start()
    w.step()
    w.score = 3
    assert w.resize(800, 900) == (800, 900)
    assert w.state is GameState.PLAYING
    assert w.score == 3
    assert len(w.obstacles) == 1
    assert w.resize(10, 10) == (MIN_WINDOW_WIDTH, MIN_WINDOW_HEIGHT)


def test_high_score_loaded_and_saved(tmp_path) -> None:
    store = HighScoreStore(tmp_path / "hs.json")
    store.save(2)
    w = World(store=store, rng=random.Random(1))
    assert w.high_score == 2
    w.start()
    w.add_point(safe_obstacle(w, 0))
    w.trigger_game_over()
    assert w.high_score == 2 and not w.new_best
    assert store.load() == 2

    w.restart()
    w.start()
    for _ in range(3):
        w.add_point(safe_obstacle(w, 0))
    w.trigger_game_over()
    assert w.high_score == 3 and w.new_best
    assert store.load() == 3


def test_add_point_ignored_outside_playing() -> None:
    w = World(rng=random.Random(1))
    obs = safe_obstacle(w, 0)
    w.add_point(obs)
    assert w.score == 0 and not obs.passed
    w.start()
    w.trigger_game_over()
    for _ in range(SPEED_STEP_SCORE):
        w.add_point(safe_obstacle(w, 0))
    assert w.score == 0
    assert w.speed == INITIAL_SPEED


def test_restart_mid_run_keeps_new_best(tmp_path) -> None:
    store = HighScoreStore(tmp_path / "hs.json")
    store.save(1)
    w = World(store=store, rng=random.Random(1))
    w.start()
    for _ in range(3):
        w.add_point(safe_obstacle(w, 0))
    w.restart()
    assert w.state is GameState.START
    assert w.high_score == 3
    assert store.load() == 3
    # Nothing to record on a fresh session
    assert w.record_high_score() is False
