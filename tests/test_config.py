"""
Tests for settings and the headless runner.
"""
import pytest
from pydantic import ValidationError

from incident_commander.config import Settings
from incident_commander.gameplay.game import GameState
from incident_commander.main import build_engine, run


class TestSettings:

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("INCIDENT_COMMANDER_GRID_WIDTH", raising=False)
        settings = Settings()
        assert settings.grid_width == 20
        assert settings.grid_height == 20
        assert settings.seed is None
        assert settings.max_tick_rate == 8.0

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("INCIDENT_COMMANDER_GRID_WIDTH", "30")
        monkeypatch.setenv("INCIDENT_COMMANDER_SEED", "42")

        settings = Settings()

        assert settings.grid_width == 30
        assert settings.seed == 42

    def test_rejects_empty_grid(self):
        with pytest.raises(ValidationError):
            Settings(grid_width=0)


class TestRunner:

    def test_build_engine(self):
        engine = build_engine(Settings(grid_width=12, grid_height=8, seed=3))

        assert engine.game.width == 12
        assert engine.game.height == 8
        assert engine.interval_ms(1) == pytest.approx(1000.0 / 2.15)

    @pytest.mark.asyncio
    async def test_run_to_completion(self):
        """With no input the commander drives into the wall."""
        settings = Settings(
            grid_width=5, grid_height=5, seed=3,
            base_tick_rate=1000.0, max_tick_rate=1000.0,
        )

        game = await run(settings)

        assert game.state == GameState.GAME_OVER
