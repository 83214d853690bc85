"""
Gameplay core. NO UI DEPENDENCIES.
"""

from incident_commander.gameplay.game import (
    AlertCollectedEvent,
    CollisionCause,
    CollisionEvent,
    Game,
    GameEvent,
    GameState,
    LevelCompletedEvent,
    LevelStartedEvent,
    StateChangedEvent,
)
from incident_commander.gameplay.grid import Direction, Grid, Position

__all__ = [
    "AlertCollectedEvent",
    "CollisionCause",
    "CollisionEvent",
    "Direction",
    "Game",
    "GameEvent",
    "GameState",
    "Grid",
    "LevelCompletedEvent",
    "LevelStartedEvent",
    "Position",
    "StateChangedEvent",
]
