"""
Scoring and progression rules.
NO UI DEPENDENCIES.
"""
from .constants import (
    ALERT_BASE_POINTS, BASE_ALERTS_NEEDED, LEVEL_BONUS_PER_LEVEL,
    TIME_BONUS_WINDOW, BASE_TICK_RATE, TICK_RATE_PER_LEVEL, MAX_TICK_RATE
)


def alert_points(collected_before: int) -> int:
    """
    Points for collecting an alert.

    The combo multiplier is the number of alerts already collected this
    level plus one: 10, 20, 30, ...
    """
    return ALERT_BASE_POINTS * (collected_before + 1)


def combo_total(count: int) -> int:
    """Total points for collecting `count` alerts in a row within one level."""
    return sum(alert_points(i) for i in range(count))


def level_bonus(level: int, elapsed_seconds: float) -> int:
    """
    Bonus awarded on completing a level.
    Whole seconds are counted; finishing after the window leaves only the level part.
    """
    time_bonus = max(0, TIME_BONUS_WINDOW - int(elapsed_seconds))
    return LEVEL_BONUS_PER_LEVEL * level + time_bonus


def alerts_needed(level: int) -> int:
    """Alert quota for a level: 5 at level 1, 14 at level 10."""
    return BASE_ALERTS_NEEDED + (level - 1)


def tick_rate(
    level: int,
    base: float = BASE_TICK_RATE,
    per_level: float = TICK_RATE_PER_LEVEL,
    cap: float = MAX_TICK_RATE,
) -> float:
    """Ticks per second for a level: ~2 at level 1, capped at 8."""
    return min(base + level * per_level, cap)
