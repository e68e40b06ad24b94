"""Base class for the LANE RUSH game variants."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List
import logging

from lanerush.config.settings import Settings
from lanerush.game.collision import CollisionRules
from lanerush.game.ledger import ResourceLedger
from lanerush.game.spawner import SpawnProfile

logger = logging.getLogger(__name__)


@dataclass
class ModeResult:
    """Result of a finished run."""

    mode_name: str
    success: bool = True
    data: Dict[str, Any] = field(default_factory=dict)
    title: str = ""
    display_text: str = ""


class BaseMode(ABC):
    """Abstract base class for game variants.

    A variant supplies the rules that differ between games; the session
    owns the shared machinery (clock, stream, resolver, state machine).

    Lifecycle:
        1. reset() - zero run progress at the start of every run
        2. advance_run(dt, ledger) - per-frame run progress and drains
        3. goal_reached() - polled after collisions each frame
        4. build_result(ledger, success) - summary once the run ends
    """

    # Mode metadata (override in subclasses)
    name: str = "base"
    display_name: str = "Base Mode"
    description: str = "Base mode class"
    icon: str = "?"
    style: str = "arcade"

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or Settings()
        self._run_progress = 0.0
        logger.debug(f"Mode created: {self.name}")

    @property
    def run_progress(self) -> float:
        """Monotonic run scalar (distance or elapsed time)."""
        return self._run_progress

    @property
    def run_progress_pct(self) -> float:
        """Share of the win goal covered, 0.0 when there is no goal."""
        return 0.0

    def reset(self) -> None:
        self._run_progress = 0.0
        self.on_reset()

    def on_reset(self) -> None:
        """Extra per-run state to clear. Override when needed."""
        pass

    def goal_reached(self) -> bool:
        return False

    def difficulty_input(self, profile: SpawnProfile, ledger: ResourceLedger) -> float:
        """Scalar feeding the spawn curve for ``profile``."""
        return self._run_progress

    @property
    def spawn_floor(self) -> float:
        return min(p.spawn_at for p in self.spawn_profiles())

    # Abstract methods (must be implemented by subclasses)
    @property
    @abstractmethod
    def capture_threshold(self) -> float:
        pass

    @property
    @abstractmethod
    def despawn_threshold(self) -> float:
        pass

    @abstractmethod
    def create_ledger(self) -> ResourceLedger:
        """Fresh ledger at starting values."""
        pass

    @abstractmethod
    def spawn_profiles(self) -> List[SpawnProfile]:
        pass

    @abstractmethod
    def collision_rules(self) -> CollisionRules:
        pass

    @abstractmethod
    def advance_run(self, dt: float, ledger: ResourceLedger) -> None:
        """Per-frame run progress update while running."""
        pass

    @abstractmethod
    def build_result(self, ledger: ResourceLedger, success: bool) -> ModeResult:
        pass

    @classmethod
    def get_info(cls) -> Dict[str, Any]:
        """Get mode metadata as dictionary."""
        return {
            "name": cls.name,
            "display_name": cls.display_name,
            "description": cls.description,
            "icon": cls.icon,
            "style": cls.style,
        }
