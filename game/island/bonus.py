"""
Power-up spawning, effects and timeouts
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, List, Optional

import numpy as np

from .config import GameConfig
from .entities import Ball, Bonus, BonusType, Paddle
from .session import TIMED_BONUSES, SessionState

logger = logging.getLogger(__name__)

BONUS_TYPES = list(BonusType)


class BonusManager:
    """Applies pickups to the paddle/ball set and expires timed power-ups"""

    def __init__(self, config: GameConfig, rng: np.random.Generator):
        self.config = config
        self.rng = rng
        self._effects: Dict[BonusType, Callable[[SessionState, Paddle, List[Ball], float], None]] = {
            BonusType.MULTIBALL: self._multiball,
            BonusType.SHIELD: self._shield,
            BonusType.SHRINK: self._shrink,
            BonusType.GROW: self._grow,
        }

    def apply(self, kind: Optional[BonusType], session: SessionState,
              paddle: Paddle, balls: List[Ball], now: float):
        """Run the effect of one pickup. Unknown kinds do nothing."""
        effect = self._effects.get(kind) if kind is not None else None
        if effect is None:
            logger.debug("Ignoring pickup of unknown bonus kind")
            return
        effect(session, paddle, balls, now)

    # ----------------------------
    # Effects
    # ----------------------------

    def _multiball(self, session: SessionState, paddle: Paddle, balls: List[Ball], now: float):
        # Boolean latch: a second pickup while active spawns nothing
        if session.multiball:
            return
        session.activate(BonusType.MULTIBALL, now)
        cfg = self.config
        for _ in range(cfg.multiball_extra_balls):
            balls.append(Ball(
                x=paddle.center_x,
                y=paddle.y - cfg.ball_radius - 2,
                speed_x=self.rng.random() * 4 - 2,
                speed_y=-cfg.initial_ball_speed,
                radius=cfg.ball_radius,
                max_speed_x=cfg.max_ball_speed_x,
            ))
        logger.debug("Multiball on, %d balls in play", len(balls))

    def _shield(self, session: SessionState, paddle: Paddle, balls: List[Ball], now: float):
        session.activate(BonusType.SHIELD, now)

    def _shrink(self, session: SessionState, paddle: Paddle, balls: List[Ball], now: float):
        paddle.shrink()

    def _grow(self, session: SessionState, paddle: Paddle, balls: List[Ball], now: float):
        paddle.grow()

    # ----------------------------
    # Lifecycle
    # ----------------------------

    def expire(self, session: SessionState, balls: List[Ball], now: float) -> List[Ball]:
        """Switch off timed power-ups past their duration; returns the surviving balls"""
        for kind in TIMED_BONUSES:
            if session.active[kind] and now - session.timers[kind] > self.config.bonus_duration:
                session.deactivate(kind)
                logger.debug("%s expired", kind.value)
                if kind is BonusType.MULTIBALL:
                    balls = balls[:1]
        return balls

    def roll_spawn(self) -> Optional[Bonus]:
        """One spawn roll per frame"""
        cfg = self.config
        if self.rng.random() >= cfg.bonus_spawn_chance:
            return None
        kind = BONUS_TYPES[int(self.rng.random() * len(BONUS_TYPES))]
        x = self.rng.random() * (cfg.width - cfg.bonus_size)
        return Bonus(kind=kind, x=x, y=-cfg.bonus_size,
                     size=cfg.bonus_size, fall_speed=cfg.bonus_fall_speed)
