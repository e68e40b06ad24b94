"""
Snapshot renderer for the four-lane playfield.

Draws each lane as a quadrant with entities growing toward the viewer
as they approach the capture threshold. Hit/catch feedback (shake,
flash) is derived from the outcomes carried by each snapshot; the
simulation never asks for it.
"""

import math
import logging
from typing import Dict

import numpy as np
from numpy.typing import NDArray

from lanerush.core.state import SessionState
from lanerush.game.collision import OutcomeType
from lanerush.game.entities import EntityKind
from lanerush.game.lanes import LANES, Column, Row
from lanerush.game.snapshot import EntityView, Snapshot
from lanerush.graphics.primitives import (
    Color, blend, draw_circle, draw_diamond, draw_rect, fill, new_buffer, shift
)

logger = logging.getLogger(__name__)

BACKGROUND: Color = (11, 18, 32)
LANE_COLOR: Color = (22, 34, 54)
LANE_EDGE: Color = (40, 60, 90)
PLAYER_COLOR: Color = (85, 183, 97)

ENTITY_COLORS: Dict[str, Color] = {
    "social": (235, 90, 120),
    "email": (90, 150, 240),
    "meeting": (240, 170, 60),
    "clock": (110, 220, 130),
}
KIND_COLORS: Dict[EntityKind, Color] = {
    EntityKind.OBSTACLE: (230, 80, 80),
    EntityKind.PICKUP: (110, 220, 130),
    EntityKind.TOKEN: (250, 210, 80),
}

SHAKE_DECAY = 2.6  # per second
FLASH_DECAY = 4.0


class LaneRenderer:
    """Renders snapshots into a square RGB buffer.

    Keeps only feedback state (shake/flash levels) between frames; it
    never holds on to entities.
    """

    def __init__(self, size: int = 128) -> None:
        self.size = size
        self.buffer: NDArray[np.uint8] = new_buffer(size, size, BACKGROUND)
        self.shake = 0.0
        self.flash = 0.0
        self.flash_color: Color = PLAYER_COLOR
        self._last_elapsed = 0.0

    def quadrant(self, lane: int) -> tuple[int, int, int]:
        """(x, y, side) of the quadrant holding ``lane``."""
        half = self.size // 2
        info = LANES[lane]
        x = 0 if info.column == Column.LEFT else half
        y = 0 if info.row == Row.TOP else half
        return x, y, half

    def render(self, snapshot: Snapshot) -> NDArray[np.uint8]:
        dt = max(0.0, snapshot.elapsed - self._last_elapsed)
        self._last_elapsed = snapshot.elapsed
        self._absorb_outcomes(snapshot)

        buffer = self.buffer
        fill(buffer, BACKGROUND)
        self._draw_lanes(buffer, snapshot)

        # Far entities first so near ones overlap them
        ordered = sorted(snapshot.entities, key=snapshot.travel_fraction)
        for entity in ordered:
            self._draw_entity(buffer, snapshot, entity)

        self._draw_player(buffer, snapshot)
        self._draw_progress(buffer, snapshot)

        if self.flash > 0:
            blend(buffer, self.flash_color, 0.35 * self.flash)
            self.flash = max(0.0, self.flash - dt * FLASH_DECAY)

        if self.shake > 0 and not snapshot.reduced_motion:
            amount = int(round(self.shake * 3))
            dx = int(round(math.sin(snapshot.frame * 1.7) * amount))
            dy = int(round(math.cos(snapshot.frame * 2.3) * amount))
            out = shift(buffer, dx, dy, BACKGROUND)
        else:
            out = buffer.copy()
        self.shake = max(0.0, self.shake - dt * SHAKE_DECAY)

        if snapshot.state == SessionState.PAUSED or snapshot.state.is_terminal:
            blend(out, (0, 0, 0), 0.45)
        return out

    def _absorb_outcomes(self, snapshot: Snapshot) -> None:
        if snapshot.reduced_motion:
            self.shake = 0.0
        for outcome in snapshot.outcomes:
            if outcome.type == OutcomeType.PENALTY_HIT:
                if not snapshot.reduced_motion:
                    self.shake = max(self.shake, 1.0)
                self._set_flash((230, 60, 60), 1.0)
            elif outcome.type == OutcomeType.CAPTURE:
                self._set_flash(KIND_COLORS[outcome.kind], 0.6)
            elif outcome.penalized:
                if not snapshot.reduced_motion:
                    self.shake = max(self.shake, 0.6)
                self._set_flash((230, 60, 60), 0.7)

    def _set_flash(self, color: Color, level: float) -> None:
        if level >= self.flash:
            self.flash_color = color
            self.flash = level

    def _draw_lanes(self, buffer: NDArray[np.uint8], snapshot: Snapshot) -> None:
        for lane in LANES:
            x, y, side = self.quadrant(lane.index)
            draw_rect(buffer, x + 1, y + 1, side - 2, side - 2, LANE_COLOR)
            draw_rect(buffer, x + 1, y + 1, side - 2, side - 2, LANE_EDGE, filled=False)

    def _draw_entity(self, buffer: NDArray[np.uint8], snapshot: Snapshot, entity: EntityView) -> None:
        t = max(0.0, min(1.0, snapshot.travel_fraction(entity)))
        x, y, side = self.quadrant(entity.lane)
        cx, cy = x + side // 2, y + side // 2
        radius = max(1, int(2 + t * (side * 0.3)))
        color = ENTITY_COLORS.get(entity.label, KIND_COLORS[entity.kind])

        if entity.kind == EntityKind.OBSTACLE:
            draw_diamond(buffer, cx, cy, radius, color)
        else:
            draw_circle(buffer, cx, cy, radius, color)

    def _draw_player(self, buffer: NDArray[np.uint8], snapshot: Snapshot) -> None:
        x, y, side = self.quadrant(snapshot.selection)
        draw_rect(buffer, x + 1, y + 1, side - 2, side - 2, PLAYER_COLOR, filled=False, thickness=2)
        draw_circle(buffer, x + side // 2, y + side // 2, max(3, side // 3), PLAYER_COLOR,
                    filled=False, thickness=1)

    def _draw_progress(self, buffer: NDArray[np.uint8], snapshot: Snapshot) -> None:
        width = int(self.size * snapshot.run_progress_pct)
        if width > 0:
            draw_rect(buffer, 0, self.size - 2, width, 2, PLAYER_COLOR)
