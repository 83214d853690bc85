"""
Pytest fixtures for Incident Commander tests.
"""

import pytest

from incident_commander.gameplay.game import Game
from incident_commander.gameplay.grid import Position


class FakeClock:
    """Manually advanced stand-in for time.monotonic."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def game(clock: FakeClock) -> Game:
    """Default 20x20 game with a fixed seed and a fake clock."""
    return Game(20, 20, seed=1234, clock=clock)


def collect_next(game: Game) -> None:
    """Put an alert on the commander's next cell and tick once."""
    target = game.commander.step(game.direction)
    others = [a for a in game.alerts if a != target]
    game.set_layout(alerts=[target] + others[:2])
    game.update()


def far_cells(count: int) -> list[Position]:
    """Cells in the top-left corner, away from a commander heading right."""
    return [Position(i, 0) for i in range(count)]
