from __future__ import annotations

import random

import pygame

from lanerush.core.state import SessionState
from lanerush.game.session import GameSession
from lanerush.simulator import keymap

from conftest import Driver, quiet_settings


def _running() -> tuple[GameSession, Driver]:
    session = GameSession("dodge", settings=quiet_settings(), rng=random.Random(1))
    driver = Driver(session)
    assert keymap.handle_key(session, pygame.K_SPACE)
    assert driver.tick().state == SessionState.RUNNING
    return session, driver


def test_arrow_keys_navigate() -> None:
    session, driver = _running()
    keymap.handle_key(session, pygame.K_UP)
    assert driver.tick().selection == 2
    keymap.handle_key(session, pygame.K_LEFT)
    assert driver.tick().selection == 0
    keymap.handle_key(session, pygame.K_LEFT)
    assert driver.tick().selection == 0


def test_number_keys_select_directly() -> None:
    session, driver = _running()
    keymap.handle_key(session, pygame.K_2)
    assert driver.tick().selection == 1


def test_pause_keys_toggle() -> None:
    session, driver = _running()
    keymap.handle_key(session, pygame.K_p)
    assert driver.tick().state == SessionState.PAUSED
    keymap.handle_key(session, pygame.K_ESCAPE)
    assert driver.tick().state == SessionState.RUNNING


def test_unmapped_key_is_left_alone() -> None:
    session, _ = _running()
    assert not keymap.handle_key(session, pygame.K_z)
    assert session.event_bus.pending == 0


def test_click_selects_quadrant() -> None:
    session, driver = _running()
    area = pygame.Rect(100, 50, 200, 200)
    assert not keymap.handle_pointer(session, (10, 10), area)
    assert keymap.handle_pointer(session, (120, 220), area)
    assert driver.tick().selection == 1


def test_focus_loss_pauses() -> None:
    session, driver = _running()
    keymap.handle_focus_lost(session)
    assert driver.tick().state == SessionState.PAUSED


def test_space_pauses_a_run_and_resumes_it() -> None:
    session, driver = _running()
    keymap.handle_key(session, pygame.K_SPACE)
    assert driver.tick().state == SessionState.PAUSED
    keymap.handle_key(session, pygame.K_SPACE)
    assert driver.tick().state == SessionState.RUNNING


def test_return_never_pauses() -> None:
    session, driver = _running()
    keymap.handle_key(session, pygame.K_RETURN)
    assert driver.tick().state == SessionState.RUNNING
