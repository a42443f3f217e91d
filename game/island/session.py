"""
Per-session mutable state: score, power-up latches, timers and input
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional

from .entities import BonusType

# Power-ups that stay on for a while; the others act instantly
TIMED_BONUSES = (BonusType.SHIELD, BonusType.MULTIBALL)


class GameState(Enum):
    RUNNING = "running"
    GAME_OVER = "game_over"


@dataclass
class InputState:
    """Latest pointer samples. Writers overwrite, the frame reads once."""
    mouse_x: float = 0.0
    touch_x: Optional[float] = None

    @property
    def target_x(self) -> float:
        # A touch in progress wins over the mouse
        if self.touch_x is not None:
            return self.touch_x
        return self.mouse_x

    def end_touch(self):
        self.touch_x = None


@dataclass
class SessionState:
    """Score and power-up bookkeeping for one run, replaced wholesale on restart"""
    score: int = 0
    hits: int = 0
    game_over: bool = False
    active: Dict[BonusType, bool] = field(
        default_factory=lambda: {kind: False for kind in TIMED_BONUSES})
    timers: Dict[BonusType, float] = field(
        default_factory=lambda: {kind: 0.0 for kind in TIMED_BONUSES})
    last_shrink: float = 0.0

    @classmethod
    def fresh(cls, now: float) -> "SessionState":
        state = cls(last_shrink=now)
        for kind in TIMED_BONUSES:
            state.timers[kind] = now
        return state

    @property
    def state(self) -> GameState:
        return GameState.GAME_OVER if self.game_over else GameState.RUNNING

    @property
    def shield(self) -> bool:
        return self.active[BonusType.SHIELD]

    @property
    def multiball(self) -> bool:
        return self.active[BonusType.MULTIBALL]

    def activate(self, kind: BonusType, now: float):
        self.active[kind] = True
        self.timers[kind] = now

    def deactivate(self, kind: BonusType):
        self.active[kind] = False

    def register_hit(self, hits_to_speedup: int) -> bool:
        """Count an island hit; True when this hit triggers a speed-up"""
        self.score += 1
        self.hits += 1
        return self.hits % hits_to_speedup == 0
