"""
Tick engine implementation for Incident Commander.
Drives Game.update() at a level-dependent rate.
"""

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Callable

from incident_commander.gameplay.game import Game, GameEvent
from incident_commander.gameplay.scoring import tick_rate
from incident_commander.gameplay.constants import (
    BASE_TICK_RATE, TICK_RATE_PER_LEVEL, MAX_TICK_RATE
)

logger = logging.getLogger(__name__)

TickCallback = Callable[[Game, list[GameEvent]], None]


@dataclass
class TickStats:
    """Statistics for tick timing."""

    tick_number: int
    level: int
    duration_ms: float
    interval_ms: float
    events: int


class TickEngine:
    """
    Manages the game tick loop.
    Calls game.update() and hands the resulting events to on_tick.
    The game keeps being ticked while paused so level transitions resolve.
    """

    def __init__(
        self,
        game: Game,
        on_tick: TickCallback | None = None,
        base_tick_rate: float = BASE_TICK_RATE,
        tick_rate_per_level: float = TICK_RATE_PER_LEVEL,
        max_tick_rate: float = MAX_TICK_RATE,
        stop_when_finished: bool = False,
    ) -> None:
        self._game = game
        self._on_tick = on_tick
        self._base_tick_rate = base_tick_rate
        self._tick_rate_per_level = tick_rate_per_level
        self._max_tick_rate = max_tick_rate
        self._stop_when_finished = stop_when_finished

        self._tick_number = 0
        self._is_running = False
        self._task: asyncio.Task | None = None
        self._stop_event = asyncio.Event()

        # Tick statistics
        self._recent_stats: list[TickStats] = []
        self._max_stats_history = 100

    @property
    def game(self) -> Game:
        return self._game

    @property
    def tick_number(self) -> int:
        """Current tick number."""
        return self._tick_number

    @property
    def is_running(self) -> bool:
        """Whether the tick loop is active."""
        return self._is_running

    def interval_ms(self, level: int | None = None) -> float:
        """Milliseconds between ticks for a level (default: the current one)."""
        if level is None:
            level = self._game.level
        rate = tick_rate(
            level,
            base=self._base_tick_rate,
            per_level=self._tick_rate_per_level,
            cap=self._max_tick_rate,
        )
        return 1000.0 / rate

    async def start(self) -> None:
        """Start the tick engine loop."""
        if self._task is not None:
            return

        self._is_running = True
        self._stop_event.clear()
        self._task = asyncio.create_task(self._run_loop())
        logger.info(f"Tick engine started (level {self._game.level}, interval {self.interval_ms():.0f}ms)")

    async def stop(self) -> None:
        """Stop the tick engine loop."""
        if self._task is None:
            return

        self._is_running = False
        self._stop_event.set()

        try:
            await asyncio.wait_for(self._task, timeout=5.0)
        except asyncio.TimeoutError:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass

        self._task = None
        logger.info(f"Tick engine stopped at tick {self._tick_number}")

    async def join(self) -> None:
        """Wait for the loop to end on its own (see stop_when_finished)."""
        if self._task is None:
            return
        await self._task
        self._task = None

    def step(self) -> list[GameEvent]:
        """Execute a single tick outside the loop."""
        events = self._process_tick()
        logger.debug(f"Manual tick step executed: {self._tick_number}")
        return events

    async def _run_loop(self) -> None:
        """
        Main tick loop.
        Fail-fast: errors from the game or on_tick propagate out of the task.
        """
        while self._is_running:
            tick_start = time.perf_counter()

            self._process_tick()

            if self._stop_when_finished and self._game.is_finished:
                logger.info(
                    f"Game finished in state {self._game.state.name} "
                    f"(level {self._game.level}, score {self._game.score})"
                )
                self._is_running = False
                break

            # Level may have changed this tick, so recompute the interval
            tick_duration = (time.perf_counter() - tick_start) * 1000
            sleep_time = max(0, (self.interval_ms() - tick_duration) / 1000)

            # Wait for either sleep time or stop signal
            try:
                await asyncio.wait_for(
                    self._stop_event.wait(),
                    timeout=sleep_time,
                )
                # Stop event was set
                break
            except asyncio.TimeoutError:
                # Normal tick interval elapsed
                pass

    def _process_tick(self) -> list[GameEvent]:
        """Process a single tick."""
        tick_start = time.perf_counter()
        self._tick_number += 1
        interval = self.interval_ms()

        events = self._game.update()
        if self._on_tick is not None:
            self._on_tick(self._game, events)

        # Record stats
        tick_duration = (time.perf_counter() - tick_start) * 1000
        stats = TickStats(
            tick_number=self._tick_number,
            level=self._game.level,
            duration_ms=tick_duration,
            interval_ms=interval,
            events=len(events),
        )
        self._recent_stats.append(stats)
        if len(self._recent_stats) > self._max_stats_history:
            self._recent_stats.pop(0)

        if tick_duration > interval:
            logger.warning(
                f"Tick {self._tick_number} took {tick_duration:.1f}ms "
                f"(target: {interval:.1f}ms)"
            )

        return events

    def get_recent_stats(self) -> list[TickStats]:
        """Get recent tick statistics."""
        return list(self._recent_stats)
