"""
Game entity dataclasses

Entities only read the siblings handed to their update call. Anything that
touches session state (score, power-ups, game over) is reported back to the
caller as an event.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .utils import Rect, clamp, rects_overlap


class BonusType(Enum):
    """Kinds of falling power-up"""
    MULTIBALL = "multiball"
    SHIELD = "shield"
    SHRINK = "shrink"
    GROW = "grow"

    @classmethod
    def from_name(cls, name: str) -> Optional["BonusType"]:
        """Look a kind up by name; unknown names give None (drawn gray, no effect)"""
        try:
            return cls(name)
        except ValueError:
            return None


class BallEvent(Enum):
    """What a ball reports back from one update"""
    ISLAND_HIT = "island_hit"
    EXITED_BOTTOM = "exited_bottom"


@dataclass
class Paddle:
    """Player paddle, follows the input target on the x axis"""
    x: float
    y: float
    width: float = 80.0
    height: float = 12.0
    min_width: float = 40.0
    max_width: float = 80.0
    step: float = 10.0

    @property
    def rect(self) -> Rect:
        return (self.x, self.y, self.width, self.height)

    @property
    def center_x(self) -> float:
        return self.x + self.width / 2

    def update(self, target_x: float, field_width: float):
        self.x = clamp(target_x - self.width / 2, 0.0, field_width - self.width)

    def shrink(self):
        if self.width > self.min_width:
            self.width = max(self.width - self.step, self.min_width)

    def grow(self):
        if self.width < self.max_width:
            self.width = min(self.width + self.step, self.max_width)


@dataclass
class Island:
    """Fixed target at the top of the field"""
    x: float
    y: float
    width: float = 120.0
    height: float = 30.0

    @property
    def rect(self) -> Rect:
        return (self.x, self.y, self.width, self.height)


@dataclass
class Ball:
    """Bouncing ball"""
    x: float
    y: float
    speed_x: float
    speed_y: float
    radius: float = 8.0
    max_speed_x: float = 6.0
    active: bool = True

    def update(self, paddle: Paddle, island: Island,
               field_width: float, field_height: float) -> Optional[BallEvent]:
        """
        Advance one frame and resolve walls, paddle and island.

        Returns ISLAND_HIT or EXITED_BOTTOM, or None when nothing happened.
        Deactivation on a bottom exit is left to the caller (a shield may save it).
        """
        if not self.active:
            return None

        self.x += self.speed_x
        self.y += self.speed_y
        r = self.radius

        # Walls
        if self.x - r < 0:
            self.x = r
            self.speed_x = -self.speed_x
        elif self.x + r > field_width:
            self.x = field_width - r
            self.speed_x = -self.speed_x
        if self.y - r < 0:
            self.y = r
            self.speed_y = -self.speed_y

        # Paddle: leading (bottom) edge inside the paddle's band
        if (paddle.y <= self.y + r <= paddle.y + paddle.height
                and paddle.x <= self.x <= paddle.x + paddle.width):
            self.y = paddle.y - r
            self.speed_y = -abs(self.speed_y)
            hit_pos = (self.x - paddle.x) / paddle.width - 0.5
            self.speed_x = clamp(self.speed_x + hit_pos * 2,
                                 -self.max_speed_x, self.max_speed_x)

        event = None

        # Island: leading (top) edge inside the island's band
        if (island.y <= self.y - r <= island.y + island.height
                and island.x <= self.x <= island.x + island.width):
            self.y = island.y + island.height + r
            self.speed_y = abs(self.speed_y)
            event = BallEvent.ISLAND_HIT

        if self.y - r > field_height:
            event = BallEvent.EXITED_BOTTOM

        return event

    def scale_speed(self, factor: float):
        self.speed_x *= factor
        self.speed_y *= factor


@dataclass
class Bonus:
    """Falling power-up pickup"""
    kind: Optional[BonusType]
    x: float
    y: float
    size: float = 24.0
    fall_speed: float = 2.0
    active: bool = True

    @property
    def rect(self) -> Rect:
        return (self.x, self.y, self.size, self.size)

    def update(self, paddle: Paddle, field_height: float) -> bool:
        """Fall one frame. Returns True only on the frame the paddle catches it."""
        if not self.active:
            return False
        self.y += self.fall_speed
        if self.y > field_height:
            self.active = False
            return False
        if rects_overlap(self.rect, paddle.rect):
            self.active = False
            return True
        return False
