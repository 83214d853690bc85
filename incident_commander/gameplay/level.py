"""
Level layouts - obstacle generation per level.
NO UI DEPENDENCIES.
"""
import logging
import random
from typing import Callable, List, Set

from .grid import Grid, Position
from .constants import (
    BARRIER_OFFSET, BARRIER_MARGIN, MAZE_OFFSET, MAZE_PITCH, SAFE_ZONE_RADIUS,
    OBSTACLE_PLACEMENT_ATTEMPTS
)

logger = logging.getLogger(__name__)


class LayoutBuilder:
    """
    Places obstacles for one level.

    `is_occupied` reports cells taken by the commander or its trail; obstacles
    placed by this builder are tracked here and count as occupied too.
    """

    def __init__(self, grid: Grid, rng: random.Random, is_occupied: Callable[[Position], bool]):
        self.grid = grid
        self.rng = rng
        self._is_occupied = is_occupied
        self.obstacles: List[Position] = []
        self._taken: Set[Position] = set()

    def occupied(self, pos: Position) -> bool:
        return pos in self._taken or self._is_occupied(pos)

    def add(self, pos: Position) -> bool:
        """Add an obstacle. Returns False if the cell already holds one."""
        if pos in self._taken:
            return False
        self.obstacles.append(pos)
        self._taken.add(pos)
        return True

    def add_static_barriers(self) -> None:
        """
        Cross pattern around the center.

        Two rows BARRIER_OFFSET above and below the center and two columns
        BARRIER_OFFSET left and right of it, each with a gap across the safe
        zone and stopping BARRIER_MARGIN cells short of the edges.
        """
        grid = self.grid
        center = grid.center

        # Horizontal lines
        for x in range(BARRIER_MARGIN, grid.width - BARRIER_MARGIN):
            if abs(x - center.x) <= SAFE_ZONE_RADIUS:
                continue
            for y in (center.y - BARRIER_OFFSET, center.y + BARRIER_OFFSET):
                pos = Position(x, y)
                if grid.in_bounds(pos):
                    self.add(pos)

        # Vertical lines
        for y in range(BARRIER_MARGIN, grid.height - BARRIER_MARGIN):
            if abs(y - center.y) <= SAFE_ZONE_RADIUS:
                continue
            for x in (center.x - BARRIER_OFFSET, center.x + BARRIER_OFFSET):
                pos = Position(x, y)
                if grid.in_bounds(pos):
                    self.add(pos)

    def add_random_obstacles(self, count: int) -> int:
        """
        Best-effort placement of `count` single-cell obstacles.
        Returns how many were actually placed.
        """
        placed = 0
        for _ in range(count):
            for _attempt in range(OBSTACLE_PLACEMENT_ATTEMPTS):
                pos = self.grid.random_cell(self.rng)
                if self.grid.in_safe_zone(pos):
                    continue
                if not self.occupied(pos):
                    self.add(pos)
                    placed += 1
                    break

        if placed < count:
            logger.debug(f"Placed {placed} of {count} random obstacles")
        return placed

    def add_maze(self) -> None:
        """
        Lattice of obstacles every MAZE_PITCH cells, each joined to one
        neighbor to the right or below.
        """
        grid = self.grid
        for x in range(MAZE_OFFSET, grid.width - MAZE_OFFSET, MAZE_PITCH):
            for y in range(MAZE_OFFSET, grid.height - MAZE_OFFSET, MAZE_PITCH):
                pos = Position(x, y)
                if grid.in_safe_zone(pos) or self.occupied(pos):
                    continue
                self.add(pos)

                if self.rng.randrange(2) == 0:
                    link = Position(x + 1, y)
                else:
                    link = Position(x, y + 1)

                if (grid.in_bounds(link)
                        and not self.occupied(link)
                        and not grid.in_safe_zone(link)):
                    self.add(link)


def _open_grid(builder: LayoutBuilder) -> None:
    pass


def _barriers(builder: LayoutBuilder) -> None:
    builder.add_static_barriers()


def _barriers_and_debris(builder: LayoutBuilder) -> None:
    builder.add_static_barriers()
    builder.add_random_obstacles(2)


def _scattered(builder: LayoutBuilder) -> None:
    builder.add_random_obstacles(4)


def _maze(builder: LayoutBuilder) -> None:
    builder.add_maze()


LEVEL_LAYOUTS = {
    1: _open_grid,
    2: _open_grid,
    3: _barriers,
    4: _barriers,
    5: _barriers_and_debris,
    6: _barriers_and_debris,
    7: _scattered,
    8: _scattered,
    9: _maze,
    10: _maze,
}


def create_level_layout(
    level: int,
    grid: Grid,
    rng: random.Random,
    is_occupied: Callable[[Position], bool],
) -> List[Position]:
    """
    Generate the obstacles for a level.

    Levels 1-2 are open, 3-4 add the cross barrier, 5-6 add two random
    obstacles on top of it, 7-8 scatter four random obstacles and 9-10
    build the maze.
    """
    builder = LayoutBuilder(grid, rng, is_occupied)
    LEVEL_LAYOUTS.get(level, _open_grid)(builder)
    return builder.obstacles
