"""Game variants for LANE RUSH."""

import logging
from typing import Dict, Type

from lanerush.config.settings import Settings
from lanerush.modes.base import BaseMode, ModeResult
from lanerush.modes.lane_catch import LaneCatchMode
from lanerush.modes.lane_dodge import LaneDodgeMode

logger = logging.getLogger(__name__)

MODES: Dict[str, Type[BaseMode]] = {
    LaneDodgeMode.name: LaneDodgeMode,
    LaneCatchMode.name: LaneCatchMode,
}


class UnknownModeError(KeyError):
    """Raised when a variant name is not registered."""


def create_mode(name: str, settings: Settings | None = None) -> BaseMode:
    """Instantiate a registered variant by name."""
    try:
        mode_cls = MODES[name]
    except KeyError:
        raise UnknownModeError(f"Unknown mode '{name}', expected one of {sorted(MODES)}") from None
    logger.info(f"Creating mode: {mode_cls.display_name}")
    return mode_cls(settings)


__all__ = [
    "BaseMode",
    "ModeResult",
    "LaneCatchMode",
    "LaneDodgeMode",
    "MODES",
    "UnknownModeError",
    "create_mode",
]
