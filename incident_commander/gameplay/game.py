"""
Main Game class - the tick-driven state machine.
NO UI DEPENDENCIES.

This is the central gameplay module. It can be fully tested
without any UI framework.
"""
import logging
import random
import time
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Set, Tuple
from enum import Enum, auto

from .grid import Grid, Direction, Position
from .level import create_level_layout
from .scoring import alert_points, alerts_needed, level_bonus
from .constants import (
    GRID_WIDTH, GRID_HEIGHT, ALERT_COUNT, MAX_LEVEL, LEVEL_COMPLETE_DWELL,
    ALERT_SAMPLES_PER_CELL
)

logger = logging.getLogger(__name__)


class GameState(Enum):
    """Current state of the game."""
    PLAYING = auto()
    PAUSED = auto()
    GAME_OVER = auto()
    LEVEL_COMPLETE = auto()


class CollisionCause(Enum):
    """What ended the run."""
    WALL = auto()
    TRAIL = auto()
    OBSTACLE = auto()


@dataclass
class GameEvent:
    """An event that occurred during a tick (for UI to react to)."""
    pass


@dataclass
class StateChangedEvent(GameEvent):
    """Game state changed."""
    old_state: GameState
    new_state: GameState


@dataclass
class AlertCollectedEvent(GameEvent):
    """The commander picked up an alert."""
    position: Position
    points: int
    alerts_collected: int


@dataclass
class LevelCompletedEvent(GameEvent):
    """Alert quota reached; bonus has been added to the score."""
    level: int
    bonus: int


@dataclass
class LevelStartedEvent(GameEvent):
    """A new level has been set up."""
    level: int
    obstacle_count: int


@dataclass
class CollisionEvent(GameEvent):
    """The commander crashed."""
    position: Position
    cause: CollisionCause


class Game:
    """
    The incident commander game.

    This class is COMPLETELY DECOUPLED from UI.
    It exposes state through read-only snapshots and accepts commands as
    method calls.

    Usage:
        game = Game(20, 20, seed=42)
        game.set_direction(Direction.UP)
        while game.state != GameState.GAME_OVER:
            events = game.update()
            # UI reads game state and renders
    """

    def __init__(
        self,
        width: int = GRID_WIDTH,
        height: int = GRID_HEIGHT,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
        clock: Optional[Callable[[], float]] = None,
    ):
        self.grid = Grid(width, height)
        self._rng = rng if rng is not None else random.Random(seed)
        self._clock = clock if clock is not None else time.monotonic

        # Event queue for UI notifications
        self._events: List[GameEvent] = []

        self._reset()

    def _reset(self) -> None:
        """Put every piece of state back to a fresh level-1 run."""
        self._commander = self.grid.center
        self._trail: List[Position] = []
        self._trail_cells: Set[Position] = set()
        self._alerts: List[Position] = []
        self._obstacles: List[Position] = []
        self._obstacle_cells: Set[Position] = set()

        self._direction = Direction.RIGHT
        self._state = GameState.PLAYING
        self._score = 0
        self._level = 1
        self._alerts_collected = 0
        self._alerts_needed = alerts_needed(1)

        self._level_start_time = self._clock()
        self._level_complete_time: Optional[float] = None

        self._spawn_alerts()
        self._setup_level()

    # =========================================================================
    # COMMANDS
    # =========================================================================

    def set_direction(self, direction: Direction) -> None:
        """
        Steer the commander. Takes effect on the next movement.
        Reversing straight into the trail is ignored.
        """
        if direction == self._direction.opposite():
            return
        self._direction = direction

    def pause(self) -> None:
        """Toggle between PLAYING and PAUSED. Ignored in any other state."""
        if self._state == GameState.PLAYING:
            self._set_state(GameState.PAUSED)
        elif self._state == GameState.PAUSED:
            self._set_state(GameState.PLAYING)

    def resume(self) -> None:
        """Leave PAUSED. Ignored in any other state."""
        if self._state == GameState.PAUSED:
            self._set_state(GameState.PLAYING)

    def restart(self) -> None:
        """Start over from level 1 on the same grid."""
        logger.info(f"Restarting (final score {self._score}, level {self._level})")
        self._events = []
        self._reset()

    # =========================================================================
    # UPDATE LOOP
    # =========================================================================

    def update(self) -> List[GameEvent]:
        """
        Advance the game by one tick.
        Returns list of events that occurred.
        """
        self._events = []

        # Completion runs even while paused so the dwell timer resolves
        self._check_level_complete()

        if self._state != GameState.PLAYING:
            return self._events

        self._move_commander()
        self._check_collisions()

        return self._events

    def _move_commander(self) -> None:
        self._trail.append(self._commander)
        self._trail_cells.add(self._commander)
        self._commander = self._commander.step(self._direction)

    def _check_collisions(self) -> None:
        """Walls, then trail, then obstacles, then alerts."""
        pos = self._commander

        if not self.grid.in_bounds(pos):
            self._crash(CollisionCause.WALL)
            return

        if pos in self._trail_cells:
            self._crash(CollisionCause.TRAIL)
            return

        if pos in self._obstacle_cells:
            self._crash(CollisionCause.OBSTACLE)
            return

        for i, alert in enumerate(self._alerts):
            if alert == pos:
                self._collect_alert(i)
                break

    def _crash(self, cause: CollisionCause) -> None:
        logger.info(f"Commander hit {cause.name.lower()} at ({self._commander.x}, {self._commander.y})")
        self._events.append(CollisionEvent(self._commander, cause))
        self._set_state(GameState.GAME_OVER)

    def _collect_alert(self, index: int) -> None:
        position = self._alerts.pop(index)

        points = alert_points(self._alerts_collected)
        self._score += points
        self._alerts_collected += 1
        logger.debug(
            f"Alert collected at ({position.x}, {position.y}): +{points} "
            f"({self._alerts_collected}/{self._alerts_needed})"
        )
        self._events.append(AlertCollectedEvent(position, points, self._alerts_collected))

        self._spawn_alerts()

    def _check_level_complete(self) -> None:
        if self._alerts_collected < self._alerts_needed:
            return

        now = self._clock()
        if self._state != GameState.LEVEL_COMPLETE:
            bonus = level_bonus(self._level, now - self._level_start_time)
            self._score += bonus
            self._level_complete_time = now
            self._set_state(GameState.LEVEL_COMPLETE)
            self._events.append(LevelCompletedEvent(self._level, bonus))
            logger.info(f"Level {self._level} complete: bonus {bonus}, score {self._score}")
        elif now - self._level_complete_time >= LEVEL_COMPLETE_DWELL:
            self.next_level()

    def next_level(self) -> None:
        """
        Advance to the next level with a fresh layout.
        Does nothing once the last level has been reached.
        """
        if self._level >= MAX_LEVEL:
            return

        self._level += 1
        self._alerts_collected = 0
        self._alerts_needed = alerts_needed(self._level)
        self._level_start_time = self._clock()
        self._level_complete_time = None
        self._set_state(GameState.PLAYING)

        self._commander = self.grid.center
        self._trail = []
        self._trail_cells = set()
        self._alerts = []
        self._obstacles = []
        self._obstacle_cells = set()

        self._setup_level()

        # The spawn cell must stay clear
        self._obstacles = [o for o in self._obstacles if o != self._commander]
        self._obstacle_cells = set(self._obstacles)

        self._spawn_alerts()

        logger.info(
            f"Level {self._level} started: {len(self._obstacles)} obstacles, "
            f"{self._alerts_needed} alerts needed"
        )
        self._events.append(LevelStartedEvent(self._level, len(self._obstacles)))

    def _setup_level(self) -> None:
        obstacles = create_level_layout(self._level, self.grid, self._rng, self._is_occupied)
        self._obstacles.extend(obstacles)
        self._obstacle_cells.update(obstacles)

    def _set_state(self, new_state: GameState) -> None:
        if new_state == self._state:
            return
        old_state = self._state
        self._state = new_state
        self._events.append(StateChangedEvent(old_state, new_state))

    # =========================================================================
    # PLACEMENT
    # =========================================================================

    def _is_occupied(self, pos: Position) -> bool:
        """Commander, trail or obstacle on this cell."""
        return (pos == self._commander
                or pos in self._trail_cells
                or pos in self._obstacle_cells)

    def _spawn_alerts(self) -> None:
        """Top the alerts back up to ALERT_COUNT."""
        while len(self._alerts) < ALERT_COUNT:
            pos = self._find_alert_cell()
            if pos is None:
                logger.warning(
                    f"No free cell for an alert on {self.grid}; "
                    f"{len(self._alerts)} alerts on the grid"
                )
                return
            self._alerts.append(pos)

    def _find_alert_cell(self) -> Optional[Position]:
        """
        Random free cell, falling back to a row-by-row scan once the
        sampling budget is spent. None if the grid is full.
        """
        for _ in range(self.grid.cell_count * ALERT_SAMPLES_PER_CELL):
            pos = self.grid.random_cell(self._rng)
            if not self._is_occupied(pos) and pos not in self._alerts:
                return pos

        for pos in self.grid.iter_cells():
            if not self._is_occupied(pos) and pos not in self._alerts:
                return pos
        return None

    # =========================================================================
    # STATE QUERIES (for UI to read)
    # =========================================================================

    @property
    def width(self) -> int:
        return self.grid.width

    @property
    def height(self) -> int:
        return self.grid.height

    @property
    def commander(self) -> Position:
        return self._commander

    @property
    def trail(self) -> Tuple[Position, ...]:
        """Past commander cells, oldest first."""
        return tuple(self._trail)

    @property
    def alerts(self) -> Tuple[Position, ...]:
        return tuple(self._alerts)

    @property
    def obstacles(self) -> Tuple[Position, ...]:
        return tuple(self._obstacles)

    @property
    def direction(self) -> Direction:
        return self._direction

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def score(self) -> int:
        return self._score

    @property
    def level(self) -> int:
        return self._level

    @property
    def alerts_collected(self) -> int:
        return self._alerts_collected

    @property
    def alerts_needed(self) -> int:
        return self._alerts_needed

    @property
    def level_start_time(self) -> float:
        return self._level_start_time

    @property
    def level_complete_time(self) -> Optional[float]:
        return self._level_complete_time

    @property
    def is_running(self) -> bool:
        """Whether the commander is currently moving."""
        return self._state == GameState.PLAYING

    @property
    def is_game_complete(self) -> bool:
        """The final level has been cleared."""
        return self._level >= MAX_LEVEL and self._state == GameState.LEVEL_COMPLETE

    @property
    def is_finished(self) -> bool:
        """No further ticks will change anything without a restart."""
        return self._state == GameState.GAME_OVER or self.is_game_complete

    # =========================================================================
    # CONVENIENCE METHODS FOR TESTING
    # =========================================================================

    def simulate(self, ticks: int) -> List[GameEvent]:
        """
        Run up to `ticks` updates, stopping early once the game is finished.
        Returns all events that occurred.
        """
        all_events = []
        for _ in range(ticks):
            if self.is_finished:
                break
            all_events.extend(self.update())
        return all_events

    def set_layout(
        self,
        obstacles: Optional[Iterable[Position]] = None,
        alerts: Optional[Iterable[Position]] = None,
    ) -> None:
        """
        Replace the obstacles and/or alerts for a scripted scenario.
        Alerts are not topped up, so pass ALERT_COUNT of them.
        """
        if obstacles is not None:
            self._obstacles = list(obstacles)
            self._obstacle_cells = set(self._obstacles)
        if alerts is not None:
            self._alerts = list(alerts)
