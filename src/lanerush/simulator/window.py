"""
Desktop simulator window using pygame.

Acts as every external collaborator at once: scheduler (one tick per
frame), input (keyboard/mouse/focus), renderer and HUD.
"""

import asyncio
import logging
from dataclasses import dataclass

import pygame

from lanerush.game.session import GameSession
from lanerush.graphics.renderer import LaneRenderer
from lanerush.simulator import keymap
from lanerush.simulator.hud import hud_lines, overlay_for

logger = logging.getLogger(__name__)


@dataclass
class WindowConfig:
    """Simulator window configuration."""
    width: int = 720
    height: int = 720
    title: str = "LANE RUSH"
    fullscreen: bool = False
    fps: int = 60
    render_size: int = 128
    hud_height: int = 48

    # Colors
    bg_color: tuple[int, int, int] = (11, 18, 32)
    panel_color: tuple[int, int, int] = (30, 40, 58)
    text_color: tuple[int, int, int] = (200, 210, 225)
    accent_color: tuple[int, int, int] = (85, 183, 97)


class SimulatorWindow:
    """
    Main simulator window driving one game session.

    Keyboard Mapping:
        ARROWS / WASD: Move between lanes
        1-4: Jump to a lane
        SPACE: Pause a running game, otherwise start or resume
        RETURN: Start or resume
        P / ESC: Toggle pause
        M: Toggle reduced motion
        L: Toggle log viewer
        Q: Quit
    """

    def __init__(self, session: GameSession, config: WindowConfig | None = None) -> None:
        self.config = config or WindowConfig()
        self.session = session
        self.renderer = LaneRenderer(self.config.render_size)

        self._screen: pygame.Surface | None = None
        self._clock: pygame.time.Clock | None = None
        self._font: pygame.font.Font | None = None
        self._small_font: pygame.font.Font | None = None
        self._running = False
        self._field = pygame.Rect(0, 0, 0, 0)

        self._show_log = False
        self._log_buffer: list[str] = []
        self._max_log_lines = 14
        self._log_handler: logging.Handler | None = None
        self._setup_log_capture()

        logger.info("SimulatorWindow created")

    def _setup_log_capture(self) -> None:
        """Mirror log records into the on-screen log viewer."""
        class SimulatorLogHandler(logging.Handler):
            def __init__(self, window: "SimulatorWindow"):
                super().__init__()
                self.window = window

            def emit(self, record):
                buffer = self.window._log_buffer
                buffer.append(self.format(record))
                if len(buffer) > self.window._max_log_lines * 2:
                    del buffer[:-self.window._max_log_lines]

        handler = SimulatorLogHandler(self)
        handler.setLevel(logging.INFO)
        handler.setFormatter(logging.Formatter("%(levelname).1s %(name)s: %(message)s"))
        logging.getLogger("lanerush").addHandler(handler)
        self._log_handler = handler

    def _init_pygame(self) -> None:
        pygame.init()
        pygame.display.set_caption(self.config.title)

        flags = pygame.DOUBLEBUF
        if self.config.fullscreen:
            flags |= pygame.FULLSCREEN
        self._screen = pygame.display.set_mode((self.config.width, self.config.height), flags)
        self._clock = pygame.time.Clock()

        pygame.font.init()
        self._font = pygame.font.SysFont(None, 28)
        self._small_font = pygame.font.SysFont(None, 18)

        self._calculate_layout()
        logger.info(f"Pygame initialized: {self.config.width}x{self.config.height}")

    def _calculate_layout(self) -> None:
        w, h = self.config.width, self.config.height
        available = min(w, h - self.config.hud_height)
        scale = max(1, available // self.config.render_size)
        side = self.config.render_size * scale
        self._field = pygame.Rect((w - side) // 2, self.config.hud_height, side, side)

    def _handle_events(self) -> None:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._running = False
            elif event.type == pygame.KEYDOWN:
                self._handle_keydown(event.key)
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                keymap.handle_pointer(self.session, event.pos, self._field)
            elif event.type in (pygame.WINDOWFOCUSLOST, pygame.WINDOWMINIMIZED, pygame.WINDOWHIDDEN):
                keymap.handle_focus_lost(self.session)

    def _handle_keydown(self, key: int) -> None:
        if key == pygame.K_q:
            self._running = False
        elif key == pygame.K_l:
            self._show_log = not self._show_log
        elif key == pygame.K_m:
            self.session.set_reduced_motion(not self.session.reduced_motion)
        else:
            keymap.handle_key(self.session, key)

    def _render(self, snapshot) -> None:
        if not self._screen:
            return

        self._screen.fill(self.config.bg_color)

        frame = self.renderer.render(snapshot)
        surface = pygame.surfarray.make_surface(frame.swapaxes(0, 1))
        surface = pygame.transform.scale(surface, self._field.size)
        self._screen.blit(surface, self._field.topleft)

        self._render_hud(snapshot)
        self._render_overlay(snapshot)
        if self._show_log:
            self._render_log_panel()

        pygame.display.flip()

    def _render_hud(self, snapshot) -> None:
        if not self._font:
            return
        lines = hud_lines(snapshot)
        slot = self.config.width // len(lines)
        for i, text in enumerate(lines):
            surf = self._font.render(text, True, self.config.text_color)
            rect = surf.get_rect(center=(slot * i + slot // 2, self.config.hud_height // 2))
            self._screen.blit(surf, rect)

    def _render_overlay(self, snapshot) -> None:
        overlay = overlay_for(snapshot, self.session.result, self.session.mode.display_name)
        if overlay is None or not self._font or not self._small_font:
            return

        card = self._field.inflate(-self._field.width // 4, -self._field.height // 2)
        pygame.draw.rect(self._screen, self.config.panel_color, card, border_radius=10)
        pygame.draw.rect(self._screen, self.config.accent_color, card, 2, border_radius=10)

        title = self._font.render(overlay.title, True, self.config.text_color)
        self._screen.blit(title, title.get_rect(center=(card.centerx, card.y + 30)))
        message = self._small_font.render(overlay.message, True, self.config.text_color)
        self._screen.blit(message, message.get_rect(center=(card.centerx, card.centery)))
        button = self._small_font.render(f"[ {overlay.button} ]", True, self.config.accent_color)
        self._screen.blit(button, button.get_rect(center=(card.centerx, card.bottom - 24)))

    def _render_log_panel(self) -> None:
        if not self._small_font:
            return
        lines = self._log_buffer[-self._max_log_lines:]
        y = self.config.height - 16 * len(lines) - 8
        for line in lines:
            surf = self._small_font.render(line[:90], True, (150, 160, 175))
            self._screen.blit(surf, (8, y))
            y += 16

    async def run(self) -> None:
        """Main simulator loop: one session tick per display frame."""
        self._init_pygame()
        self._running = True

        logger.info("Simulator started")

        while self._running:
            self._handle_events()

            snapshot = self.session.tick(pygame.time.get_ticks())
            self._render(snapshot)

            if self._clock:
                self._clock.tick(self.config.fps)

            # Yield to other tasks
            await asyncio.sleep(0)

        self._cleanup()

    def _cleanup(self) -> None:
        pygame.quit()
        logger.info("Simulator stopped")
        if self._log_handler:
            logging.getLogger("lanerush").removeHandler(self._log_handler)
            self._log_handler = None

    def stop(self) -> None:
        self._running = False
