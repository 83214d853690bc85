"""
Tests for scoring and progression rules.
"""
import pytest
from incident_commander.gameplay.scoring import (
    alert_points, combo_total, level_bonus, alerts_needed, tick_rate
)
from incident_commander.gameplay.constants import MAX_LEVEL, MAX_TICK_RATE


class TestAlertPoints:

    def test_combo_multiplier(self):
        """Each alert in a level is worth ten more than the last."""
        assert alert_points(0) == 10
        assert alert_points(1) == 20
        assert alert_points(2) == 30

    @pytest.mark.parametrize("n", range(0, 15))
    def test_combo_total(self, n):
        assert combo_total(n) == 5 * n * (n + 1)


class TestLevelBonus:

    def test_instant_clear(self):
        assert level_bonus(1, 0) == 160

    def test_partial_seconds_truncate(self):
        assert level_bonus(1, 59.9) == 101
        assert level_bonus(3, 10.7) == 350

    def test_late_clear(self):
        """Time bonus never goes negative."""
        assert level_bonus(2, 60) == 200
        assert level_bonus(2, 500) == 200


class TestProgression:

    def test_alerts_needed(self):
        assert alerts_needed(1) == 5
        assert alerts_needed(2) == 6
        assert alerts_needed(MAX_LEVEL) == 14

    def test_tick_rate_grows_with_level(self):
        """About two ticks a second at level 1, faster afterwards."""
        assert tick_rate(1) == pytest.approx(2.15)
        assert tick_rate(5) > tick_rate(4)

    def test_tick_rate_capped(self):
        assert tick_rate(20) == MAX_TICK_RATE
        assert tick_rate(20, base=1.0, per_level=1.0, cap=4.0) == 4.0
