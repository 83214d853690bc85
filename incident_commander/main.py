"""
Incident Commander - headless runner.

Builds a game from settings and drives it with the tick engine until the
run ends. Rendering and input belong to a front end; this entry point only
logs what happens.

Usage:
    incident-commander
    python -m incident_commander.main
"""

import asyncio
import logging

from incident_commander.config import Settings, get_settings
from incident_commander.gameplay.game import (
    Game, GameEvent, LevelCompletedEvent, LevelStartedEvent, CollisionEvent
)
from incident_commander.tick_engine.engine import TickEngine

logger = logging.getLogger(__name__)


def log_events(game: Game, events: list[GameEvent]) -> None:
    """on_tick hook: report the events a front end would react to."""
    for event in events:
        if isinstance(event, LevelCompletedEvent):
            logger.info(f"Level {event.level} cleared (+{event.bonus}), score {game.score}")
        elif isinstance(event, LevelStartedEvent):
            logger.info(f"Now on level {event.level} with {event.obstacle_count} obstacles")
        elif isinstance(event, CollisionEvent):
            logger.info(f"Crashed into {event.cause.name.lower()} at ({event.position.x}, {event.position.y})")


def build_engine(settings: Settings) -> TickEngine:
    """Create a game and tick engine from settings."""
    game = Game(settings.grid_width, settings.grid_height, seed=settings.seed)
    return TickEngine(
        game,
        on_tick=log_events,
        base_tick_rate=settings.base_tick_rate,
        tick_rate_per_level=settings.tick_rate_per_level,
        max_tick_rate=settings.max_tick_rate,
        stop_when_finished=True,
    )


async def run(settings: Settings) -> Game:
    """Run one game to completion and return it."""
    engine = build_engine(settings)
    await engine.start()
    try:
        await engine.join()
    finally:
        await engine.stop()
    return engine.game


def main() -> None:
    """Main entry point."""
    settings = get_settings()

    # Configure logging
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    logger.info(f"Incident Commander starting on a {settings.grid_width}x{settings.grid_height} grid")
    game = asyncio.run(run(settings))
    logger.info(f"Final score {game.score} on level {game.level} ({game.state.name})")


if __name__ == "__main__":
    main()
