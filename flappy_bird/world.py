"""World state, the game state machine, and the fixed simulation tick."""

from __future__ import annotations

import enum
import logging
import random

from .config import (
    BIRD_X,
    CLOUD_FREQUENCY,
    INITIAL_SPEED,
    MIN_WINDOW_HEIGHT,
    MIN_WINDOW_WIDTH,
    PIPE_FREQUENCY,
    SPEED_INCREMENT,
    SPEED_STEP_SCORE,
    WINDOW_HEIGHT,
    WINDOW_WIDTH,
)
from .entities import Bird, Cloud, Obstacle
from .storage import HighScoreStore

log = logging.getLogger(__name__)


class GameState(enum.Enum):
    START = "START"
    PLAYING = "PLAYING"
    GAMEOVER = "GAMEOVER"


# START -> START and PLAYING -> START come from the dedicated restart control.
TRANSITIONS: dict[GameState, frozenset[GameState]] = {
    GameState.START: frozenset({GameState.PLAYING, GameState.START}),
    GameState.PLAYING: frozenset({GameState.GAMEOVER, GameState.START}),
    GameState.GAMEOVER: frozenset({GameState.START}),
}


class IllegalTransition(Exception):
    def __init__(self, current: GameState, target: GameState) -> None:
        super().__init__(f"cannot go from {current.name} to {target.name}")
        self.current = current
        self.target = target


class World:
    """All mutable game state for one window, advanced one tick at a time."""

    def __init__(
        self,
        width: int = WINDOW_WIDTH,
        height: int = WINDOW_HEIGHT,
        *,
        store: HighScoreStore | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.resize(width, height)
        self.store = store
        self.rng = rng or random.Random()
        self.high_score = store.load() if store is not None else 0
        self.state = GameState.START
        self.score = 0
        self.reset()

    # ------------------------------------------------------------------ state

    def transition(self, target: GameState) -> None:
        if target not in TRANSITIONS[self.state]:
            raise IllegalTransition(self.state, target)
        log.debug("state %s -> %s (score=%d)", self.state.name, target.name, self.score)
        self.state = target

    @property
    def playing(self) -> bool:
        return self.state is GameState.PLAYING

    def reset(self) -> None:
        """Reinitialise the session and return to the start screen."""
        # An abandoned run still counts towards the best
        self.record_high_score()
        self.transition(GameState.START)
        self.bird = Bird(BIRD_X, self.height / 2)
        self.obstacles: list[Obstacle] = []
        self.clouds: list[Cloud] = []
        self.score = 0
        self.speed = INITIAL_SPEED
        self.frames = 0
        self.ticks = 0
        self.new_best = False

    def start(self) -> None:
        self.transition(GameState.PLAYING)
        # Initial flap so the bird doesn't drop straight away
        self.bird.flap()

    def trigger_game_over(self) -> None:
        if not self.playing:
            return
        self.transition(GameState.GAMEOVER)
        self.record_high_score()

    def record_high_score(self) -> bool:
        """Adopt and persist the current score if it beats the best."""
        if self.score <= self.high_score:
            return False
        self.high_score = self.score
        self.new_best = True
        if self.store is not None:
            self.store.save(self.high_score)
        return True

    def primary_action(self) -> None:
        """Begin, flap or restart depending on the current state."""
        if self.state is GameState.START:
            self.start()
        elif self.state is GameState.PLAYING:
            self.bird.flap()
        else:
            self.reset()

    def restart(self) -> None:
        self.reset()

    # ---------------------------------------------------------------- scoring

    def add_point(self, obstacle: Obstacle) -> None:
        if not self.playing:
            return
        obstacle.passed = True
        self.score += 1
        if self.score % SPEED_STEP_SCORE == 0:
            self.speed += SPEED_INCREMENT
            log.debug("speed up to %.2f at score %d", self.speed, self.score)

    # ---------------------------------------------------------------- spawning

    def spawn_obstacle(self) -> Obstacle:
        obs = Obstacle(self.width, self.height, self.rng)
        self.obstacles.append(obs)
        return obs

    def spawn_cloud(self) -> Cloud:
        cloud = Cloud(self.width, self.height, self.rng)
        self.clouds.append(cloud)
        return cloud

    # -------------------------------------------------------------------- tick

    def step(self, now_ms: float = 0.0) -> None:
        """Advance the simulation by exactly one tick."""
        # Clouds drift in every state
        if self.ticks % CLOUD_FREQUENCY == 0:
            self.spawn_cloud()
        for cloud in self.clouds:
            cloud.update(self)
        self.clouds = [c for c in self.clouds if not c.offscreen()]
        self.ticks += 1

        if self.state is GameState.PLAYING:
            self._step_playing()
        elif self.state is GameState.START:
            self.bird.bob(now_ms, self.height)

    def _step_playing(self) -> None:
        self.bird.update(self)
        if not self.playing:
            return

        if self.frames % PIPE_FREQUENCY == 0:
            self.spawn_obstacle()

        for obs in self.obstacles:
            obs.update(self)
            if not self.playing:
                break
        self.obstacles = [o for o in self.obstacles if not o.offscreen()]
        self.frames += 1

    def resize(self, width: int, height: int) -> tuple[int, int]:
        """Adopt new view dimensions; game state is left untouched."""
        self.width = max(MIN_WINDOW_WIDTH, int(width))
        self.height = max(MIN_WINDOW_HEIGHT, int(height))
        return self.width, self.height
