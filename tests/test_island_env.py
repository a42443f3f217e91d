"""Tests for the Gymnasium wrapper."""

import random
from dataclasses import replace

import numpy as np
import pytest

from game.island import DEFAULT_CONFIG, IslandEnv


@pytest.fixture
def env():
    env = IslandEnv(render_mode=None, max_steps=200)
    yield env
    env.close()


class TestIslandEnv:

    def test_reset_observation(self, env):
        obs, info = env.reset(seed=0)
        assert obs.shape == env.observation_space.shape
        assert obs.dtype == np.float32
        assert env.observation_space.contains(obs)
        assert info["score"] == 0
        assert info["num_balls"] == 1
        assert info["step"] == 0

    def test_step_api(self, env):
        env.reset(seed=0)
        obs, reward, terminated, truncated, info = env.step(np.array([0.0], dtype=np.float32))
        assert env.observation_space.contains(obs)
        assert isinstance(reward, float)
        assert not terminated
        assert not truncated
        assert info["step"] == 1

    def test_action_moves_paddle(self, env):
        env.reset(seed=0)
        env.step(np.array([-1.0], dtype=np.float32))
        assert env.game.paddle.x == 0.0
        env.step(np.array([1.0], dtype=np.float32))
        assert env.game.paddle.x == env.width - env.game.paddle.width

    def test_truncates_at_max_steps(self, env):
        env.reset(seed=1)
        terminated = truncated = False
        steps = 0
        while not (terminated or truncated):
            _, _, terminated, truncated, _ = env.step(env.action_space.sample())
            steps += 1
        assert steps <= 200
        assert truncated or env.game.session.game_over

    def test_game_over_terminates_with_penalty(self, env):
        env.reset(seed=0)
        ball = env.game.balls[0]
        ball.x, ball.y, ball.speed_y = 100.0, 650.0, 3.0
        _, reward, terminated, _, info = env.step(np.array([0.0], dtype=np.float32))
        assert terminated
        assert info["game_over"]
        assert reward == pytest.approx(0.001 - 1.0 - 5.0)

    def test_island_hit_reward(self, env):
        env.reset(seed=0)
        ball = env.game.balls[0]
        ball.x, ball.y, ball.speed_y = 240.0, 80.0, -3.0
        _, reward, _, _, info = env.step(np.array([0.0], dtype=np.float32))
        assert info["score"] == 1
        assert reward == pytest.approx(1.0 + 0.001)

    def test_reward_overrides(self):
        env = IslandEnv(reward_config={"name": "custom", "R_HIT": 3.0})
        assert env.rewards["R_HIT"] == 3.0
        assert "name" not in env.rewards

    def test_same_seed_same_trajectory(self):
        a, b = IslandEnv(), IslandEnv()
        obs_a, _ = a.reset(seed=5)
        obs_b, _ = b.reset(seed=5)
        actions = np.linspace(-1.0, 1.0, 50, dtype=np.float32)
        for x in actions:
            obs_a, *_ = a.step(np.array([x]))
            obs_b, *_ = b.step(np.array([x]))
        np.testing.assert_array_equal(obs_a, obs_b)

    def test_rgb_array_render(self):
        env = IslandEnv(render_mode="rgb_array")
        env.reset(seed=0)
        frame = env.render()
        assert frame.shape == (640, 480, 3)
        assert frame.dtype == np.uint8
        # paddle pixels use the paddle colour
        assert tuple(frame[615, 240]) == (79, 70, 229)

    def test_rejects_unknown_render_mode(self):
        with pytest.raises(AssertionError):
            IslandEnv(render_mode="ascii")

    def test_rejects_empty_field(self):
        with pytest.raises(ValueError):
            IslandEnv(width=0)

    def test_global_rngs_do_not_affect_session(self):
        config = replace(DEFAULT_CONFIG, bonus_spawn_chance=0.5)
        a, b = IslandEnv(config=config), IslandEnv(config=config)
        a.reset(seed=11)
        random.seed(1)
        np.random.seed(1)
        b.reset(seed=11)
        random.seed(2)
        np.random.seed(2)
        for _ in range(120):
            a.step(np.array([0.0], dtype=np.float32))
            b.step(np.array([0.0], dtype=np.float32))
        assert a.game.snapshot() == b.game.snapshot()
        assert a.game.snapshot()["bonuses"]
