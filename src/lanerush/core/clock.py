"""Frame clock turning scheduler timestamps into a bounded simulation delta."""

import logging

logger = logging.getLogger(__name__)

MAX_DT = 0.05


class FrameClock:
    """
    Converts wall-clock timestamps (milliseconds) into a clamped dt.

    The first tick only records a baseline and yields 0. Long gaps
    (suspended window, debugger pause) never integrate more than
    ``max_dt`` seconds of simulated time in one frame.
    """

    def __init__(self, max_dt: float = MAX_DT) -> None:
        self._max_dt = max_dt
        self._last_ms: float | None = None

    @property
    def max_dt(self) -> float:
        return self._max_dt

    @property
    def has_baseline(self) -> bool:
        return self._last_ms is not None

    def tick(self, timestamp_ms: float) -> float:
        """Advance to ``timestamp_ms`` and return the clamped delta in seconds."""
        if self._last_ms is None:
            self._last_ms = timestamp_ms
            return 0.0

        raw = (timestamp_ms - self._last_ms) / 1000.0
        self._last_ms = timestamp_ms

        if raw > self._max_dt:
            logger.debug(f"Frame gap {raw:.3f}s clamped to {self._max_dt}s")
        return max(0.0, min(self._max_dt, raw))

    def reset(self) -> None:
        """Forget the baseline; the next tick returns 0."""
        self._last_ms = None
