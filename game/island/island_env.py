"""
IslandEnv - Hit the Island as a Gymnasium environment
-----------------------------------------------------
- FrameController for simulation, Arcade for human rendering
- Gymnasium API
- 1 RL agent that steers the paddle (continuous target x)
- Reward for island hits and pickups, penalty for lost balls and game over
- Vector observation: paddle + power-up flags + K lowest balls + M nearest bonuses

Quick test:
    python -m game.island.island_env
"""

from __future__ import annotations

import time
from dataclasses import replace
from typing import Any, Dict, Optional

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from .config import DEFAULT_CONFIG, GameConfig
from .entities import BonusType
from .frame import FrameController, FrameResult
from .utils import clamp

BONUS_CODES = {kind: i for i, kind in enumerate(BonusType)}

DEFAULT_REWARDS = {
    "R_HIT": 1.0,
    "R_BONUS": 0.1,
    "R_LOST": 1.0,
    "R_ALIVE": 0.001,
    "R_GAME_OVER": 5.0,
}

# Colours shared by both renderers
BG_C = (17, 24, 39)
PADDLE_C = (79, 70, 229)
SHIELD_C = (250, 204, 21)
BALL_C = (251, 191, 36)
ISLAND_C = (16, 185, 129)
BONUS_COLORS = {
    BonusType.MULTIBALL: (59, 130, 246),
    BonusType.SHIELD: (251, 191, 36),
    BonusType.SHRINK: (239, 68, 68),
    BonusType.GROW: (34, 197, 94),
}
UNKNOWN_BONUS_C = (156, 163, 175)


class IslandEnv(gym.Env):
    """Paddle-and-island arcade game exposed through the Gymnasium API"""

    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": 60}

    def __init__(
        self,
        render_mode: Optional[str] = None,
        width: int = 480,
        height: int = 640,
        max_steps: int = 3600,  # 60s at 60 FPS
        k_balls: int = 3,
        m_bonuses: int = 2,
        max_ball_speed: float = 20.0,
        reward_config: Optional[Dict[str, float]] = None,
        config: Optional[GameConfig] = None,
    ):
        super().__init__()

        assert render_mode is None or render_mode in self.metadata["render_modes"], \
            f"Unknown render_mode {render_mode!r}"
        self.render_mode = render_mode

        self.config = replace(config or DEFAULT_CONFIG, width=float(width), height=float(height))
        self.width = width
        self.height = height
        self.max_steps = max_steps

        # Observation config
        self.k_balls = k_balls
        self.m_bonuses = m_bonuses
        self.max_ball_speed = max_ball_speed

        self.rewards = dict(DEFAULT_REWARDS)
        if reward_config:
            self.rewards.update({k: v for k, v in reward_config.items() if k in DEFAULT_REWARDS})

        # Action: paddle target x, -1 = left wall, 1 = right wall
        self.action_space = spaces.Box(low=-1.0, high=1.0, shape=(1,), dtype=np.float32)

        # Observation (vector)
        # Paddle: x(1) width(1), flags: shield(1) multiball(1)
        # Each ball: pos(2) vel(2)
        # Each bonus: rel pos(2) kind(1)
        obs_dim = 4 + (self.k_balls * 4) + (self.m_bonuses * 3)
        self.observation_space = spaces.Box(
            low=-1.0, high=1.0, shape=(obs_dim,), dtype=np.float32
        )

        # Arcade rendering state
        self._window = None

        self.game: FrameController = None  # type: ignore
        self._step_count = 0
        self._last_result = FrameResult()

    # ----------------------------
    # Gym API
    # ----------------------------

    def reset(self, seed: Optional[int] = None, options: Optional[dict] = None):
        super().reset(seed=seed)

        self._step_count = 0
        self._last_result = FrameResult()
        # every random draw of the session comes from np_random
        self.game = FrameController(config=self.config, rng=self.np_random)

        return self._get_obs(), self._get_info()

    def step(self, action):
        a = float(np.asarray(action, dtype=np.float32).reshape(-1)[0])
        self.game.input.mouse_x = (clamp(a, -1.0, 1.0) + 1.0) * 0.5 * self.width

        result = self.game.step()
        self._last_result = result

        reward = self._compute_reward(result)

        terminated = result.game_over
        self._step_count += 1
        truncated = self._step_count >= self.max_steps

        obs = self._get_obs()
        info = self._get_info()

        if self.render_mode == "human":
            self.render()

        return obs, reward, terminated, truncated, info

    # ----------------------------
    # Observation / reward / info
    # ----------------------------

    def _get_obs(self) -> np.ndarray:
        game = self.game
        paddle = game.paddle
        cfg = self.config

        travel = max(1e-6, self.width - paddle.width)
        obs_parts = [
            (paddle.x / travel) * 2 - 1,
            (paddle.width - cfg.min_paddle_width)
            / max(1e-6, cfg.paddle_start_width - cfg.min_paddle_width) * 2 - 1,
            1.0 if game.session.shield else -1.0,
            1.0 if game.session.multiball else -1.0,
        ]

        # Balls: lowest (most urgent) first
        balls = sorted((b for b in game.balls if b.active), key=lambda b: -b.y)
        for i in range(self.k_balls):
            if i < len(balls):
                b = balls[i]
                obs_parts += [
                    clamp(b.x / self.width * 2 - 1, -1, 1),
                    clamp(b.y / self.height * 2 - 1, -1, 1),
                    clamp(b.speed_x / self.max_ball_speed, -1, 1),
                    clamp(b.speed_y / self.max_ball_speed, -1, 1),
                ]
            else:
                obs_parts += [0.0, 0.0, 0.0, 0.0]

        # Bonuses: nearest to the paddle first
        px, py = paddle.center_x, paddle.y
        bonuses = sorted(
            (b for b in game.bonuses if b.active),
            key=lambda b: (b.x - px) ** 2 + (b.y - py) ** 2
        )
        n_kinds = len(BONUS_CODES)
        for i in range(self.m_bonuses):
            if i < len(bonuses):
                b = bonuses[i]
                code = BONUS_CODES.get(b.kind, -1)
                obs_parts += [
                    clamp((b.x - px) / self.width, -1, 1),
                    clamp((b.y - py) / self.height, -1, 1),
                    (code + 1) / n_kinds,
                ]
            else:
                obs_parts += [0.0, 0.0, 0.0]

        return np.array(obs_parts, dtype=np.float32)

    def _compute_reward(self, result: FrameResult) -> float:
        r = self.rewards
        reward = 0.0
        reward += r["R_HIT"] * result.island_hits
        reward += r["R_BONUS"] * len(result.collected)
        reward -= r["R_LOST"] * result.balls_lost
        reward += r["R_ALIVE"]
        if result.game_over:
            reward -= r["R_GAME_OVER"]
        return float(reward)

    def _get_info(self) -> Dict[str, Any]:
        game = self.game
        return {
            "score": game.session.score,
            "island_hits": game.session.hits,
            "num_balls": len(game.balls),
            "num_bonuses": len(game.bonuses),
            "paddle_width": game.paddle.width,
            "balls_lost": self._last_result.balls_lost,
            "bonuses_collected": len(self._last_result.collected),
            "game_over": game.session.game_over,
            "step": self._step_count,
        }

    # ----------------------------
    # Rendering
    # ----------------------------

    def render(self):
        if self.render_mode is None:
            return None

        if self.render_mode == "human":
            if self._window is None:
                # Arcade opens a display on import of its window module
                from .window import IslandWindow
                self._window = IslandWindow(self.game)
            self._window.game = self.game
            self._window.on_draw()
            return None
        return self._render_rgb_array()

    def _render_rgb_array(self) -> np.ndarray:
        """Rasterise the current frame with numpy (no display needed)"""
        h, w = int(self.height), int(self.width)
        frame = np.empty((h, w, 3), dtype=np.uint8)
        frame[:] = BG_C
        game = self.game

        def fill_rect(x, y, rw, rh, color):
            x0, y0 = max(0, int(x)), max(0, int(y))
            x1, y1 = min(w, int(x + rw)), min(h, int(y + rh))
            if x1 > x0 and y1 > y0:
                frame[y0:y1, x0:x1] = color

        yy, xx = np.ogrid[:h, :w]

        def fill_circle(cx, cy, radius, color):
            mask = (xx - cx) ** 2 + (yy - cy) ** 2 <= radius * radius
            frame[mask] = color

        island = game.island
        fill_rect(island.x, island.y, island.width, island.height, ISLAND_C)
        paddle = game.paddle
        fill_rect(paddle.x, paddle.y, paddle.width, paddle.height, PADDLE_C)
        for ball in game.balls:
            if ball.active:
                fill_circle(ball.x, ball.y, ball.radius, BALL_C)
        for bonus in game.bonuses:
            if bonus.active:
                color = BONUS_COLORS.get(bonus.kind, UNKNOWN_BONUS_C)
                half = bonus.size / 2
                fill_circle(bonus.x + half, bonus.y + half, half, color)
        return frame

    def close(self):
        if self._window is not None:
            self._window.close()
            self._window = None


# ----------------------------
# Quick sanity test
# ----------------------------

def run_random_episode(render: bool = True, seed: Optional[int] = 42):
    """Run a random episode for testing"""
    env = IslandEnv(render_mode="human" if render else None)
    obs, info = env.reset(seed=seed)

    terminated = False
    truncated = False
    total = 0.0

    print("Running episode... close the window to stop early.")

    while not (terminated or truncated):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total += reward

        if render and env._window:
            env._window.dispatch_events()
            env._window.flip()
            time.sleep(1 / 60)

    print(f"Random episode return: {total:.2f}, score: {info['score']}")
    env.close()
    return total


if __name__ == "__main__":
    run_random_episode(render=True)
