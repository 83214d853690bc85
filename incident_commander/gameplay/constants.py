"""
Game constants - all magic numbers in one place.
NO UI DEPENDENCIES.
"""

# =============================================================================
# GRID
# =============================================================================
GRID_WIDTH = 20    # cells
GRID_HEIGHT = 20   # cells

# =============================================================================
# ENTITIES
# =============================================================================
ALERT_COUNT = 3                 # alerts kept on the grid at all times
SAFE_ZONE_RADIUS = 2            # cells around the center kept free of obstacles

# =============================================================================
# PROGRESSION
# =============================================================================
MAX_LEVEL = 10
BASE_ALERTS_NEEDED = 5          # level 1 quota, +1 per level

# =============================================================================
# SCORING
# =============================================================================
ALERT_BASE_POINTS = 10          # times the combo multiplier
LEVEL_BONUS_PER_LEVEL = 100
TIME_BONUS_WINDOW = 60          # seconds; bonus is whatever is left of it

# =============================================================================
# TIMING (all in seconds)
# =============================================================================
LEVEL_COMPLETE_DWELL = 1.0      # pause on LevelComplete before advancing

# =============================================================================
# LAYOUT
# =============================================================================
BARRIER_OFFSET = 4              # cross barrier distance from center
BARRIER_MARGIN = 2              # barrier lines stop this far from the edges
MAZE_OFFSET = 2
MAZE_PITCH = 4
OBSTACLE_PLACEMENT_ATTEMPTS = 50
ALERT_SAMPLES_PER_CELL = 10     # random samples per grid cell before scanning

# =============================================================================
# TICK RATE (ticks per second)
# =============================================================================
BASE_TICK_RATE = 1.5
TICK_RATE_PER_LEVEL = 0.65
MAX_TICK_RATE = 8.0
