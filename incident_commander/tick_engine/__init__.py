"""
Tick engine for Incident Commander.
"""

from incident_commander.tick_engine.engine import TickEngine, TickStats

__all__ = ["TickEngine", "TickStats"]
