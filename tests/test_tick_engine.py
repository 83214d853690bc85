"""
Tests for the tick engine driving loop.
"""
import pytest

from incident_commander.gameplay.game import Game, GameState
from incident_commander.gameplay.grid import Position
from incident_commander.tick_engine import TickEngine


FAST = dict(base_tick_rate=1000.0, tick_rate_per_level=0.0, max_tick_rate=1000.0)


def _doomed_game() -> Game:
    """5x5 game that hits the right wall on the third tick."""
    return Game(5, 5, seed=1)


class TestTickInterval:

    def test_interval_follows_level(self):
        """About 465ms at level 1, 125ms once capped."""
        engine = TickEngine(Game(seed=1))
        assert engine.interval_ms(1) == pytest.approx(1000.0 / 2.15)
        assert engine.interval_ms(20) == pytest.approx(125.0)

    def test_interval_uses_current_level(self):
        game = Game(seed=1)
        engine = TickEngine(game)
        game.next_level()
        assert engine.interval_ms() == engine.interval_ms(2)


class TestStep:

    def test_step_ticks_game(self):
        game = Game(20, 20, seed=1)
        game.set_layout(alerts=[Position(0, 0), Position(1, 0), Position(2, 0)])
        engine = TickEngine(game)

        engine.step()

        assert engine.tick_number == 1
        assert game.commander == Position(11, 10)

    def test_on_tick_receives_events(self):
        seen = []
        game = _doomed_game()
        engine = TickEngine(game, on_tick=lambda g, events: seen.append((g, events)))

        for _ in range(3):
            engine.step()

        assert len(seen) == 3
        assert all(g is game for g, _ in seen)
        assert seen[-1][1]

    def test_stats_recorded(self):
        engine = TickEngine(_doomed_game())
        engine.step()
        engine.step()

        stats = engine.get_recent_stats()

        assert [s.tick_number for s in stats] == [1, 2]
        assert stats[0].level == 1
        assert stats[0].interval_ms == pytest.approx(engine.interval_ms(1))


class TestRunLoop:

    @pytest.mark.asyncio
    async def test_runs_until_game_over(self):
        """stop_when_finished ends the loop on GAME_OVER."""
        game = _doomed_game()
        engine = TickEngine(game, stop_when_finished=True, **FAST)

        await engine.start()
        assert engine.is_running
        await engine.join()

        assert game.state == GameState.GAME_OVER
        assert engine.tick_number == 3
        assert not engine.is_running

    @pytest.mark.asyncio
    async def test_stop(self):
        engine = TickEngine(Game(seed=1))

        await engine.start()
        await engine.stop()

        assert not engine.is_running

    @pytest.mark.asyncio
    async def test_start_twice_is_harmless(self):
        engine = TickEngine(Game(seed=1))

        await engine.start()
        await engine.start()
        await engine.stop()

        assert not engine.is_running

    @pytest.mark.asyncio
    async def test_callback_errors_propagate(self):
        """Fail-fast: an exception in on_tick ends the loop and surfaces."""
        def explode(game, events):
            raise RuntimeError("renderer failed")

        engine = TickEngine(Game(seed=1), on_tick=explode, **FAST)

        await engine.start()
        with pytest.raises(RuntimeError, match="renderer failed"):
            await engine.join()
