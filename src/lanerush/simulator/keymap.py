"""
Keyboard, mouse and window-focus mapping onto session intents.

The simulator owns pygame; this module only translates its events into
calls on a ``GameSession``. Returns False for anything it does not map
so the window can handle its own keys.
"""

import logging

import pygame

from lanerush.core.state import SessionState
from lanerush.game.lanes import Direction
from lanerush.game.session import GameSession

logger = logging.getLogger(__name__)

DIRECTION_KEYS = {
    pygame.K_LEFT: Direction.LEFT,
    pygame.K_a: Direction.LEFT,
    pygame.K_RIGHT: Direction.RIGHT,
    pygame.K_d: Direction.RIGHT,
    pygame.K_UP: Direction.UP,
    pygame.K_w: Direction.UP,
    pygame.K_DOWN: Direction.DOWN,
    pygame.K_s: Direction.DOWN,
}

# Number row and keypad select lanes directly (1 = top-left ... 4 = bottom-right)
LANE_KEYS = {
    pygame.K_1: 0,
    pygame.K_2: 1,
    pygame.K_3: 2,
    pygame.K_4: 3,
    pygame.K_KP1: 0,
    pygame.K_KP2: 1,
    pygame.K_KP3: 2,
    pygame.K_KP4: 3,
}

START_KEYS = (pygame.K_RETURN, pygame.K_KP_ENTER)
PAUSE_KEYS = (pygame.K_p, pygame.K_ESCAPE)


def handle_key(session: GameSession, key: int) -> bool:
    """Queue the intent bound to ``key``; True if the key was mapped."""
    if key in DIRECTION_KEYS:
        session.navigate(DIRECTION_KEYS[key])
        return True
    if key in LANE_KEYS:
        session.select_lane(LANE_KEYS[key])
        return True
    if key == pygame.K_SPACE:
        if session.state == SessionState.RUNNING:
            session.toggle_pause()
        else:
            session.start()
        return True
    if key in START_KEYS:
        session.start()
        return True
    if key in PAUSE_KEYS:
        session.toggle_pause()
        return True
    return False


def handle_pointer(
    session: GameSession,
    pos: tuple[int, int],
    area: pygame.Rect,
) -> bool:
    """Queue a quadrant selection for a click inside ``area``."""
    if not area.collidepoint(pos):
        return False
    session.select_point(pos[0] - area.x, pos[1] - area.y, area.width, area.height)
    return True


def handle_focus_lost(session: GameSession) -> None:
    """Window hidden or unfocused: freeze the run."""
    logger.debug("Window focus lost, forcing pause")
    session.force_pause()
