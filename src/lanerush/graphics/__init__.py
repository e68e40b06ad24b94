"""Rendering collaborators for LANE RUSH snapshots."""

from lanerush.graphics.renderer import LaneRenderer

__all__ = ["LaneRenderer"]
