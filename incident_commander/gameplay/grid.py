"""
Grid geometry: directions, positions and bounds.
NO UI DEPENDENCIES.
"""
import random
from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator, Tuple

from .constants import SAFE_ZONE_RADIUS


class Direction(Enum):
    """Cardinal directions."""
    UP = auto()
    DOWN = auto()
    LEFT = auto()
    RIGHT = auto()

    def opposite(self) -> 'Direction':
        """Return the opposite direction."""
        opposites = {
            Direction.UP: Direction.DOWN,
            Direction.DOWN: Direction.UP,
            Direction.LEFT: Direction.RIGHT,
            Direction.RIGHT: Direction.LEFT,
        }
        return opposites[self]

    def delta(self) -> Tuple[int, int]:
        """Return (dx, dy) for this direction."""
        deltas = {
            Direction.UP: (0, -1),
            Direction.DOWN: (0, 1),
            Direction.LEFT: (-1, 0),
            Direction.RIGHT: (1, 0),
        }
        return deltas[self]


@dataclass(frozen=True)
class Position:
    """A cell coordinate. Compared by value."""
    x: int
    y: int

    def step(self, direction: Direction) -> 'Position':
        """Return the neighboring position in the given direction."""
        dx, dy = direction.delta()
        return Position(self.x + dx, self.y + dy)


class Grid:
    """
    The playing field the commander moves on.

    Coordinate system:
    - (0, 0) is top-left
    - x increases to the right
    - y increases downward
    """

    def __init__(self, width: int, height: int):
        if width < 1 or height < 1:
            raise ValueError(f"Grid dimensions must be positive, got {width}x{height}")
        self.width = width
        self.height = height

    @property
    def center(self) -> Position:
        """Spawn cell of the commander."""
        return Position(self.width // 2, self.height // 2)

    @property
    def cell_count(self) -> int:
        return self.width * self.height

    def in_bounds(self, pos: Position) -> bool:
        """Check if a position is within grid bounds."""
        return 0 <= pos.x < self.width and 0 <= pos.y < self.height

    def in_safe_zone(self, pos: Position) -> bool:
        """Check if a position lies in the obstacle-free square around the center."""
        center = self.center
        return (abs(pos.x - center.x) <= SAFE_ZONE_RADIUS
                and abs(pos.y - center.y) <= SAFE_ZONE_RADIUS)

    def random_cell(self, rng: random.Random) -> Position:
        """Pick a uniformly random cell (x drawn before y)."""
        x = rng.randrange(self.width)
        y = rng.randrange(self.height)
        return Position(x, y)

    def iter_cells(self) -> Iterator[Position]:
        """Iterate over all cells, row by row."""
        for y in range(self.height):
            for x in range(self.width):
                yield Position(x, y)

    def __repr__(self) -> str:
        return f"Grid({self.width}x{self.height})"
