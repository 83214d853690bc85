"""
Incident Commander - grid arcade game core.
"""

from incident_commander.gameplay import Direction, Game, GameState, Position

__all__ = ["Direction", "Game", "GameState", "Position"]
