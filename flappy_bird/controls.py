"""Maps raw pygame events onto the game's semantic actions."""

from __future__ import annotations

import enum

import pygame

PRIMARY_KEYS = (pygame.K_SPACE,)
RESTART_KEYS = (pygame.K_r,)
QUIT_KEYS = (pygame.K_ESCAPE,)


class Action(enum.Enum):
    PRIMARY = "primary"  # begin / flap / restart depending on state
    RESTART = "restart"
    QUIT = "quit"


def translate_event(
    event: pygame.event.Event, restart_button: pygame.Rect | None = None
) -> Action | None:
    """Return the action for an event, or None if the game ignores it.

    ``restart_button`` is the on-screen restart control, when it is showing.
    """
    if event.type == pygame.QUIT:
        return Action.QUIT
    if event.type == pygame.KEYDOWN:
        if event.key in PRIMARY_KEYS:
            return Action.PRIMARY
        if event.key in RESTART_KEYS:
            return Action.RESTART
        if event.key in QUIT_KEYS:
            return Action.QUIT
        return None
    if event.type == pygame.MOUSEBUTTONDOWN:
        # SDL mirrors touches as mouse clicks; the FINGERDOWN already counted
        if getattr(event, "touch", False) or event.button != 1:
            return None
        if restart_button is not None and restart_button.collidepoint(event.pos):
            return Action.RESTART
        return Action.PRIMARY
    if event.type == pygame.FINGERDOWN:
        return Action.PRIMARY
    return None
