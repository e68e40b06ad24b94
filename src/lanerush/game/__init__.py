"""Gameplay engine: lanes, entities, spawning, collisions and the session."""

from lanerush.game.collision import CollisionResolver, CollisionRules, Outcome, OutcomeType
from lanerush.game.entities import Entity, EntityKind, EntityStream
from lanerush.game.lanes import Direction, LaneSelection
from lanerush.game.ledger import ResourceKind, ResourceLedger
from lanerush.game.spawner import SpawnProfile, Spawner

__all__ = [
    "CollisionResolver",
    "CollisionRules",
    "Direction",
    "Entity",
    "EntityKind",
    "EntityStream",
    "LaneSelection",
    "Outcome",
    "OutcomeType",
    "ResourceKind",
    "ResourceLedger",
    "SpawnProfile",
    "Spawner",
]
