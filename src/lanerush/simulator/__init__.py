"""Pygame desktop simulator for LANE RUSH."""
