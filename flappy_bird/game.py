"""Game loop, window management, and rendering composition for Flappy Bird."""

from __future__ import annotations

import logging

import pygame

from .config import (
    BUTTON_COLOR,
    BUTTON_HOVER,
    COL_SKY_BOTTOM,
    COL_SKY_TOP,
    FPS,
    LOG_FORMAT,
    LOG_LEVEL,
    MAX_STEPS_PER_FRAME,
    PANEL_COLOR,
    STEP_SECONDS,
    TEXT_COLOR,
    TEXT_SHADOW,
    WINDOW_HEIGHT,
    WINDOW_WIDTH,
)
from .controls import Action, translate_event
from .storage import HighScoreStore
from .utils import gradient_surface
from .world import GameState, World

log = logging.getLogger(__name__)


class Game:
    """Top-level game controller: owns the window and drives the world."""

    def __init__(self, store: HighScoreStore | None = None) -> None:
        pygame.init()
        self.screen = pygame.display.set_mode((WINDOW_WIDTH, WINDOW_HEIGHT), pygame.RESIZABLE)
        pygame.display.set_caption("Flappy Bird")
        self.clock = pygame.time.Clock()
        self.font_big = pygame.font.SysFont(None, 64)
        self.font_small = pygame.font.SysFont(None, 28)

        self.world = World(*self.screen.get_size(), store=store or HighScoreStore())
        self.bg_gradient = self._generate_gradient_surface()
        self.restart_button: pygame.Rect | None = None
        self.running = True
        self._accum = 0.0

    def _generate_gradient_surface(self) -> pygame.Surface:
        w, h = self.screen.get_size()
        return gradient_surface(w, h, COL_SKY_TOP, COL_SKY_BOTTOM)

    def resize(self, width: int, height: int) -> None:
        """Refit the drawing surface; the running game is left as is."""
        w, h = self.world.resize(width, height)
        self.screen = pygame.display.set_mode((w, h), pygame.RESIZABLE)
        self.bg_gradient = self._generate_gradient_surface()
        log.debug("resized to %dx%d", w, h)

    def handle_input(self, event: pygame.event.Event) -> None:
        if event.type == pygame.VIDEORESIZE:
            self.resize(event.w, event.h)
            return

        button = self.restart_button if self.world.state is GameState.GAMEOVER else None
        action = translate_event(event, button)
        if action is Action.QUIT:
            self.running = False
        elif action is Action.RESTART:
            self.world.restart()
        elif action is Action.PRIMARY:
            self.world.primary_action()

    def update(self, dt: float, now_ms: float = 0.0) -> int:
        """Run as many fixed ticks as dt covers; returns the number run."""
        self._accum += dt
        steps = 0
        while self._accum >= STEP_SECONDS and steps < MAX_STEPS_PER_FRAME:
            self.world.step(now_ms)
            self._accum -= STEP_SECONDS
            steps += 1
        if steps == MAX_STEPS_PER_FRAME:
            # Drop the backlog after a stall instead of fast-forwarding
            self._accum = 0.0
        return steps

    def draw(self) -> None:
        world = self.world
        self.screen.blit(self.bg_gradient, (0, 0))
        for cloud in world.clouds:
            cloud.draw(self.screen)
        for obs in world.obstacles:
            obs.draw(self.screen)
        world.bird.draw(self.screen)
        self._draw_ui(self.screen)
        pygame.display.flip()

    def _blit_text(
        self,
        surf: pygame.Surface,
        font: pygame.font.Font,
        text: str,
        center: tuple[int, int],
    ) -> pygame.Rect:
        shadow = font.render(text, True, TEXT_SHADOW)
        label = font.render(text, True, TEXT_COLOR)
        rect = label.get_rect(center=center)
        surf.blit(shadow, rect.move(2, 2))
        surf.blit(label, rect)
        return rect

    def _draw_ui(self, surf: pygame.Surface) -> None:
        world = self.world
        w, h = surf.get_size()
        cx, cy = w // 2, h // 2

        if world.state is GameState.PLAYING:
            self.restart_button = None
            self._blit_text(surf, self.font_big, str(world.score), (cx, 50))
            return

        if world.state is GameState.START:
            self.restart_button = None
            self._blit_text(surf, self.font_big, "Flappy Bird", (cx, h // 4))
            self._blit_text(surf, self.font_small, "Space, click or tap to start", (cx, cy + 60))
            if world.high_score:
                self._blit_text(surf, self.font_small, f"Best: {world.high_score}", (cx, cy + 92))
            return

        # Game over panel
        panel = pygame.Surface((min(w - 40, 320), 240), pygame.SRCALPHA)
        panel.fill(PANEL_COLOR)
        panel_rect = panel.get_rect(center=(cx, cy))
        surf.blit(panel, panel_rect)

        self._blit_text(surf, self.font_big, "Game Over", (cx, panel_rect.top + 40))
        self._blit_text(surf, self.font_small, f"Score: {world.score}", (cx, panel_rect.top + 90))
        best = f"Best: {world.high_score}" + ("  (new!)" if world.new_best else "")
        self._blit_text(surf, self.font_small, best, (cx, panel_rect.top + 122))

        button = pygame.Rect(0, 0, 160, 48)
        button.center = (cx, panel_rect.bottom - 50)
        hover = button.collidepoint(pygame.mouse.get_pos())
        pygame.draw.rect(surf, BUTTON_HOVER if hover else BUTTON_COLOR, button, border_radius=8)
        self._blit_text(surf, self.font_small, "Restart", button.center)
        self.restart_button = button

    def run(self) -> None:
        while self.running:
            dt = self.clock.tick(FPS) / 1000.0
            for event in pygame.event.get():
                self.handle_input(event)
                if not self.running:
                    break

            self.update(dt, pygame.time.get_ticks())
            self.draw()
        self.world.record_high_score()
        pygame.quit()


def main() -> None:
    logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)
    Game().run()
