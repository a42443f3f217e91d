"""
Gameplay constants
"""

from dataclasses import dataclass

FRAME_MS = 1000.0 / 60.0


@dataclass(frozen=True)
class GameConfig:
    """All tunable numbers of one session. Times are in milliseconds of simulation clock."""
    width: float = 480.0
    height: float = 640.0
    frame_ms: float = FRAME_MS

    # Paddle
    paddle_start_width: float = 80.0
    paddle_height: float = 12.0
    paddle_y_offset: float = 30.0
    min_paddle_width: float = 40.0
    paddle_shrink_amount: float = 10.0
    paddle_shrink_interval: float = 10000.0

    # Ball
    ball_radius: float = 8.0
    initial_ball_speed: float = 3.0
    initial_ball_speed_x: float = 2.0
    ball_speed_increment: float = 1.5
    hits_to_speedup: int = 5
    max_ball_speed_x: float = 6.0

    # Island
    island_width: float = 120.0
    island_height: float = 30.0
    island_y: float = 40.0

    # Bonuses
    bonus_size: float = 24.0
    bonus_fall_speed: float = 2.0
    bonus_duration: float = 15000.0
    bonus_spawn_chance: float = 0.01
    multiball_extra_balls: int = 2

    # Mock store
    purchase_status_ms: float = 4000.0

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Field size must be positive, got {self.width}x{self.height}")
        if self.hits_to_speedup <= 0:
            raise ValueError("hits_to_speedup must be positive")


DEFAULT_CONFIG = GameConfig()
