"""
FrameController - one Hit the Island session stepped frame by frame
-------------------------------------------------------------------
Fixed per-frame order:
    1. paddle follows the input target
    2. island (static)
    3. balls: walls, paddle, island, bottom exit
    4. bonuses: fall and pickup
    5. prune inactive balls and bonuses
    6. periodic paddle shrink
    7. power-up timeouts
    8. bonus spawn roll

Time comes from an explicit simulation clock advanced by `frame_ms` per
step, so a seeded session replays exactly.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import numpy as np

from .bonus import BonusManager
from .config import DEFAULT_CONFIG, GameConfig
from .entities import Ball, BallEvent, Bonus, BonusType, Island, Paddle
from .session import GameState, InputState, SessionState

logger = logging.getLogger(__name__)


@dataclass
class FrameResult:
    """What happened during one step"""
    island_hits: int = 0
    balls_lost: int = 0
    shields_used: int = 0
    speedups: int = 0
    collected: List[Optional[BonusType]] = field(default_factory=list)
    spawned: Optional[Bonus] = None
    game_over: bool = False


class FrameController:
    """Owns the paddle, island, ball and bonus collections of one session"""

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rng: Optional[np.random.Generator] = None,
        seed: Optional[int] = None,
    ):
        self.config = config or DEFAULT_CONFIG
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self.bonus_manager = BonusManager(self.config, self.rng)
        self.input = InputState(mouse_x=self.config.width / 2)
        self.now = 0.0

        self.session: SessionState = None  # type: ignore
        self.paddle: Paddle = None  # type: ignore
        self.island: Island = None  # type: ignore
        self.balls: List[Ball] = []
        self.bonuses: List[Bonus] = []

        self.restart()

    # ----------------------------
    # Session lifecycle
    # ----------------------------

    def restart(self):
        """Throw the current session away and start a fresh one at the current clock"""
        cfg = self.config
        self.session = SessionState.fresh(self.now)
        self.paddle = Paddle(
            x=(cfg.width - cfg.paddle_start_width) / 2,
            y=cfg.height - cfg.paddle_y_offset,
            width=cfg.paddle_start_width,
            height=cfg.paddle_height,
            min_width=cfg.min_paddle_width,
            max_width=cfg.paddle_start_width,
            step=cfg.paddle_shrink_amount,
        )
        self.island = Island(
            x=(cfg.width - cfg.island_width) / 2,
            y=cfg.island_y,
            width=cfg.island_width,
            height=cfg.island_height,
        )
        self.balls = [self.new_ball(cfg.width / 2, cfg.height / 2,
                                    cfg.initial_ball_speed_x, -cfg.initial_ball_speed)]
        self.bonuses = []
        logger.info("Session started at t=%.0fms", self.now)

    def new_ball(self, x: float, y: float, speed_x: float, speed_y: float) -> Ball:
        return Ball(x=x, y=y, speed_x=speed_x, speed_y=speed_y,
                    radius=self.config.ball_radius,
                    max_speed_x=self.config.max_ball_speed_x)

    @property
    def state(self) -> GameState:
        return self.session.state

    @property
    def score(self) -> int:
        return self.session.score

    # ----------------------------
    # Simulation step
    # ----------------------------

    def step(self, now: Optional[float] = None) -> FrameResult:
        """
        Run one frame.

        Args:
            now: Clock value for this frame in ms. Defaults to the previous
                value plus one frame duration.

        The clock keeps running after game over so store messages still
        time out; nothing else changes until restart.
        """
        self.now = self.now + self.config.frame_ms if now is None else now
        if self.session.game_over:
            return FrameResult(game_over=True)

        cfg = self.config
        session = self.session
        result = FrameResult()

        # 1-2. paddle, island
        self.paddle.update(self.input.target_x, cfg.width)

        # 3. balls
        for ball in self.balls:
            event = ball.update(self.paddle, self.island, cfg.width, cfg.height)
            if event is BallEvent.ISLAND_HIT:
                self._on_island_hit(result)
            elif event is BallEvent.EXITED_BOTTOM:
                self._on_ball_exit(ball, result)

        if all(not ball.active for ball in self.balls):
            session.game_over = True
            result.game_over = True
            logger.info("Game over with score %d after %d island hits", session.score, session.hits)

        # 4. bonuses
        for bonus in self.bonuses:
            if bonus.update(self.paddle, cfg.height):
                result.collected.append(bonus.kind)
                self.bonus_manager.apply(bonus.kind, session, self.paddle, self.balls, self.now)

        # 5. prune
        self.balls = [b for b in self.balls if b.active]
        self.bonuses = [b for b in self.bonuses if b.active]

        # 6. paddle shrinks over time
        if self.now - session.last_shrink > cfg.paddle_shrink_interval:
            self.paddle.shrink()
            session.last_shrink = self.now

        # 7. power-up durations
        self.balls = self.bonus_manager.expire(session, self.balls, self.now)

        # 8. spawn
        spawned = self.bonus_manager.roll_spawn()
        if spawned is not None:
            self.bonuses.append(spawned)
            result.spawned = spawned

        return result

    def _on_island_hit(self, result: FrameResult):
        result.island_hits += 1
        if self.session.register_hit(self.config.hits_to_speedup):
            for ball in self.balls:
                ball.scale_speed(self.config.ball_speed_increment)
            result.speedups += 1
            logger.debug("Speed-up after %d island hits", self.session.hits)

    def _on_ball_exit(self, ball: Ball, result: FrameResult):
        # First ball to fall this frame takes the shield
        if self.session.shield:
            self.session.deactivate(BonusType.SHIELD)
            result.shields_used += 1
            return
        ball.active = False
        result.balls_lost += 1

    def apply_bonus(self, kind: Optional[BonusType]):
        """Apply a power-up effect directly, without a physical pickup"""
        self.bonus_manager.apply(kind, self.session, self.paddle, self.balls, self.now)

    # ----------------------------
    # Presentation
    # ----------------------------

    def snapshot(self) -> Dict[str, Any]:
        """Everything the presentation layer needs to draw this frame"""
        return {
            "paddle": {"x": self.paddle.x, "y": self.paddle.y,
                       "width": self.paddle.width, "height": self.paddle.height},
            "island": {"x": self.island.x, "y": self.island.y,
                       "width": self.island.width, "height": self.island.height},
            "balls": [{"x": b.x, "y": b.y, "radius": b.radius}
                      for b in self.balls if b.active],
            "bonuses": [{"x": b.x, "y": b.y, "size": b.size,
                         "kind": b.kind.value if b.kind is not None else None}
                        for b in self.bonuses if b.active],
            "score": self.session.score,
            "shield": self.session.shield,
            "multiball": self.session.multiball,
            "game_over": self.session.game_over,
            "time_ms": self.now,
        }
