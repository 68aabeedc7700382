"""Game entities and rendering helpers.

Contains the player-controlled bird, the pipe obstacles and the background
clouds. Every entity advances one tick at a time through ``update(world)`` and
paints itself with ``draw(surf)``; the world owns one list per category.
"""

from __future__ import annotations

import abc
import math
import random
from typing import TYPE_CHECKING

import pygame

from .config import (
    BIRD_COLOR,
    BIRD_OUTLINE,
    BIRD_RADIUS,
    BIRD_START_Y,
    BIRD_WING,
    BIRD_X,
    BOB_AMPLITUDE,
    BOB_PERIOD_MS,
    CLOUD_COLOR,
    CLOUD_CULL_X,
    CLOUD_SPAWN_JITTER,
    EYE_COLOR,
    FLAP_IMPULSE,
    GRAVITY,
    MIN_PIPE_HEIGHT,
    PIPE_BORDER,
    PIPE_CAP_HEIGHT,
    PIPE_CAP_OVERHANG,
    PIPE_COLOR,
    PIPE_GAP,
    PIPE_WIDTH,
    PUPIL_COLOR,
)
from .utils import spans_overlap

if TYPE_CHECKING:
    from .world import World


class Entity(abc.ABC):
    """Something the world advances every tick and draws every frame."""

    @abc.abstractmethod
    def update(self, world: World) -> None: ...

    @abc.abstractmethod
    def draw(self, surf: pygame.Surface) -> None: ...


class Bird(Entity):
    def __init__(self, x: float = BIRD_X, y: float = BIRD_START_Y) -> None:
        self.x = float(x)
        self.y = float(y)
        self.velocity = 0.0
        self.radius = BIRD_RADIUS
        self.gravity = GRAVITY
        self.flap_impulse = FLAP_IMPULSE

    @property
    def top(self) -> float:
        return self.y - self.radius

    @property
    def bottom(self) -> float:
        return self.y + self.radius

    def flap(self) -> None:
        # Replaces the current velocity rather than adding to it
        self.velocity = self.flap_impulse

    def update(self, world: World) -> None:
        self.velocity += self.gravity
        self.y += self.velocity

        if self.bottom >= world.height:
            world.trigger_game_over()

        # Ceiling stops the bird without ending the run
        if self.top <= 0:
            self.y = float(self.radius)
            self.velocity = 0.0

    def bob(self, now_ms: float, height: int) -> None:
        """Idle hover used on the start screen; physics is not involved."""
        self.y = height / 2 + math.sin(now_ms / BOB_PERIOD_MS) * BOB_AMPLITUDE

    def draw(self, surf: pygame.Surface) -> None:
        cx, cy = int(self.x), int(self.y)
        r = self.radius

        pygame.draw.circle(surf, BIRD_COLOR, (cx, cy), r)
        pygame.draw.circle(surf, BIRD_OUTLINE, (cx, cy), r, 2)

        # Eye
        pygame.draw.circle(surf, EYE_COLOR, (cx + 8, cy - 6), 6)
        pygame.draw.circle(surf, PUPIL_COLOR, (cx + 10, cy - 6), 2)

        # Wing: slightly tilted ellipse, rendered to a temp surface to rotate it
        w, h = 16, 10
        s = pygame.Surface((w + 4, h + 4), pygame.SRCALPHA)
        rect = pygame.Rect(2, 2, w, h)
        pygame.draw.ellipse(s, BIRD_WING, rect)
        pygame.draw.ellipse(s, BIRD_OUTLINE, rect, 2)
        rot = pygame.transform.rotozoom(s, -math.degrees(0.2), 1.0)
        surf.blit(rot, rot.get_rect(center=(cx - 5, cy + 5)).topleft)


class Obstacle(Entity):
    """A pipe pair with a fixed-size gap at a random height."""

    def __init__(self, x: float, height: int, rng: random.Random | None = None) -> None:
        rng = rng or random.Random()
        self.x = float(x)
        self.width = PIPE_WIDTH
        self.gap = PIPE_GAP
        min_pos = MIN_PIPE_HEIGHT
        max_pos = max(min_pos, height - MIN_PIPE_HEIGHT - PIPE_GAP)
        self.top_height = rng.randint(min_pos, max_pos)
        self.bottom_y = self.top_height + self.gap
        self.passed = False

    @property
    def right(self) -> float:
        return self.x + self.width

    def collides_with(self, bird: Bird) -> bool:
        if not spans_overlap(bird.x - bird.radius, bird.x + bird.radius, self.x, self.right):
            return False
        return bird.top < self.top_height or bird.bottom > self.bottom_y

    def update(self, world: World) -> None:
        self.x -= world.speed

        bird = world.bird
        if self.collides_with(bird):
            world.trigger_game_over()
            return

        if not self.passed and bird.x > self.right:
            world.add_point(self)

    def offscreen(self) -> bool:
        return self.right < 0

    def draw(self, surf: pygame.Surface) -> None:
        height = surf.get_height()
        x = int(self.x)
        cap_x = x - PIPE_CAP_OVERHANG
        cap_w = self.width + 2 * PIPE_CAP_OVERHANG

        def segment(rect: pygame.Rect) -> None:
            pygame.draw.rect(surf, PIPE_COLOR, rect)
            pygame.draw.rect(surf, PIPE_BORDER, rect, 2)

        # Top pipe and its cap
        segment(pygame.Rect(x, 0, self.width, self.top_height))
        segment(pygame.Rect(cap_x, self.top_height - PIPE_CAP_HEIGHT, cap_w, PIPE_CAP_HEIGHT))

        # Bottom pipe and its cap
        segment(pygame.Rect(x, self.bottom_y, self.width, max(0, height - self.bottom_y)))
        segment(pygame.Rect(cap_x, self.bottom_y, cap_w, PIPE_CAP_HEIGHT))


class Cloud(Entity):
    """Background decoration drifting left; never collides."""

    def __init__(self, width: int, height: int, rng: random.Random | None = None) -> None:
        rng = rng or random.Random()
        self.x = width + rng.random() * CLOUD_SPAWN_JITTER
        self.y = rng.random() * (height / 2)
        self.speed = rng.random() * 0.5 + 0.5
        self.size = rng.random() * 0.5 + 0.5

    def update(self, world: World) -> None:
        self.x -= self.speed

    def offscreen(self) -> bool:
        return self.x < CLOUD_CULL_X

    def draw(self, surf: pygame.Surface) -> None:
        k = self.size
        puffs = [(0.0, 0.0, 30.0), (25.0, -10.0, 35.0), (50.0, 0.0, 30.0)]
        pad = int(45 * k)
        w = int(50 * k) + 2 * pad
        h = 2 * pad
        s = pygame.Surface((w, h), pygame.SRCALPHA)
        # Fill the union once so overlaps don't stack alpha
        for dx, dy, r in puffs:
            pygame.draw.circle(s, CLOUD_COLOR[:3], (int(pad + dx * k), int(pad + dy * k)), int(r * k))
        s.set_alpha(CLOUD_COLOR[3])
        surf.blit(s, (int(self.x) - pad, int(self.y) - pad))
