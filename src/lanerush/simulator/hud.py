"""HUD and overlay text for the simulator window."""

import math
from dataclasses import dataclass

from lanerush.core.state import SessionState
from lanerush.game.ledger import ResourceKind
from lanerush.game.snapshot import Snapshot
from lanerush.modes.base import ModeResult


@dataclass(frozen=True)
class Overlay:
    title: str
    message: str
    button: str


def hud_lines(snapshot: Snapshot) -> list[str]:
    """Status lines shown above the playfield."""
    res = snapshot.resource
    if res.kind == ResourceKind.BUDGET:
        lines = [
            f"BUDGET {max(0, math.ceil(res.value))}s",
            f"HITS {res.hits}",
            f"DEADLINE {int(snapshot.run_progress_pct * 100)}%",
        ]
    else:
        lines = [
            f"LIVES {int(res.value)}",
            f"SCORE {res.score}",
            f"STREAK {res.streak}",
        ]
    return lines


def overlay_for(snapshot: Snapshot, result: ModeResult | None, display_name: str) -> Overlay | None:
    """Overlay card for non-running states, None while playing."""
    state = snapshot.state
    if state == SessionState.RUNNING:
        return None
    if state == SessionState.IDLE:
        return Overlay(display_name, "Arrows or 1-4 pick a lane. Space starts.", "Start")
    if state == SessionState.PAUSED:
        return Overlay("Paused", "Take a breath. Space or P resumes.", "Resume")
    if result is not None:
        return Overlay(result.title, result.display_text, "Play again")
    return Overlay("Run over", "", "Play again")
