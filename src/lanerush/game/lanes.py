"""
Lane registry and player lane selection.

The four lanes form a 2x2 grid:

    0 (top-left)     2 (top-right)
    1 (bottom-left)  3 (bottom-right)
"""

from dataclasses import dataclass
from enum import Enum
import logging

logger = logging.getLogger(__name__)

LANE_COUNT = 4
DEFAULT_LANE = 3


class Row(Enum):
    TOP = "top"
    BOTTOM = "bottom"


class Column(Enum):
    LEFT = "left"
    RIGHT = "right"


class Direction(Enum):
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"


@dataclass(frozen=True)
class Lane:
    index: int
    row: Row
    column: Column


LANES: tuple[Lane, ...] = (
    Lane(0, Row.TOP, Column.LEFT),
    Lane(1, Row.BOTTOM, Column.LEFT),
    Lane(2, Row.TOP, Column.RIGHT),
    Lane(3, Row.BOTTOM, Column.RIGHT),
)

# Single-axis moves; lanes missing from a row stay where they are
_MOVES: dict[Direction, dict[int, int]] = {
    Direction.LEFT: {2: 0, 3: 1},
    Direction.RIGHT: {0: 2, 1: 3},
    Direction.UP: {1: 0, 3: 2},
    Direction.DOWN: {0: 1, 2: 3},
}


def clamp_lane(index: int) -> int:
    """Clamp any integer-like value into a valid lane index."""
    return max(0, min(LANE_COUNT - 1, int(index)))


def lane_at(row: Row, column: Column) -> Lane:
    for lane in LANES:
        if lane.row == row and lane.column == column:
            return lane
    raise ValueError(f"No lane at {row}/{column}")


def neighbor(index: int, direction: Direction | str) -> int:
    """Lane reached by moving one step in ``direction`` from ``index``."""
    direction = Direction(direction)
    index = clamp_lane(index)
    return _MOVES[direction].get(index, index)


def lane_from_point(x: float, y: float, width: float, height: float) -> int:
    """Map a point on the input surface to the lane of its quadrant."""
    left = x < width / 2
    top = y < height / 2
    row = Row.TOP if top else Row.BOTTOM
    column = Column.LEFT if left else Column.RIGHT
    return lane_at(row, column).index


class LaneSelection:
    """
    Authoritative player lane.

    Only the target matters for collision; renderers are free to animate
    the player marker toward it.
    """

    def __init__(self, default: int = DEFAULT_LANE) -> None:
        self._default = clamp_lane(default)
        self._target = self._default

    @property
    def target(self) -> int:
        return self._target

    def select(self, index: int) -> int:
        lane = clamp_lane(index)
        if lane != index:
            logger.debug(f"Lane {index} clamped to {lane}")
        self._target = lane
        return self._target

    def navigate(self, direction: Direction | str) -> int:
        self._target = neighbor(self._target, direction)
        return self._target

    def select_point(self, x: float, y: float, width: float, height: float) -> int:
        self._target = lane_from_point(x, y, width, height)
        return self._target

    def reset(self) -> None:
        self._target = self._default
