"""LANE RUSH - four-lane reflex arcade engine."""

__version__ = "0.1.0"
