"""Tests for the RL action wrapper, output directories and metrics callback."""

import csv
import os

import numpy as np
import pytest

pytest.importorskip("stable_baselines3")

from game.island import IslandEnv  # noqa: E402
from rl.configs.island_config import TRAINING_CONFIG  # noqa: E402
from rl.metrics_callback import MetricsCallback  # noqa: E402
from rl.train import BoxToDiscreteWrapper, make_env, run_dirs  # noqa: E402


class TestBoxToDiscreteWrapper:

    def test_maps_bins_to_targets(self):
        env = BoxToDiscreteWrapper(IslandEnv(), n_bins=5)
        assert env.action_space.n == 5
        np.testing.assert_allclose(env.action(0), [-1.0])
        np.testing.assert_allclose(env.action(2), [0.0])
        np.testing.assert_allclose(env.action(4), [1.0])

    def test_drives_paddle(self):
        env = BoxToDiscreteWrapper(IslandEnv(), n_bins=5)
        env.reset(seed=0)
        env.step(4)
        paddle = env.unwrapped.game.paddle
        assert paddle.x == 480 - paddle.width


def test_make_env_reports_episode_stats():
    env = make_env(seed=0)()
    env.reset(seed=0)
    ball = env.unwrapped.game.balls[0]
    ball.y, ball.speed_y = 650.0, 3.0
    _, _, terminated, _, info = env.step(np.array([0.0], dtype=np.float32))
    assert terminated
    assert "episode" in info


class TestRunDirs:

    def test_defaults_come_from_training_config(self):
        save_dir, log_dir, tb_dir = run_dirs("ppo")
        assert save_dir == os.path.join(TRAINING_CONFIG["model_dir"], "ppo")
        assert log_dir == os.path.join(TRAINING_CONFIG["log_dir"], "ppo")
        assert tb_dir == os.path.join(TRAINING_CONFIG["tensorboard_log"], "ppo")

    def test_explicit_paths_win(self):
        assert run_dirs("dqn", "a", "b", "c") == ("a", "b", "c")


class TestMetricsCallback:

    def _feed(self, callback, infos, dones):
        callback.locals = {"infos": infos, "dones": dones}
        callback.num_timesteps += len(infos)
        return callback._on_step()

    def test_accumulates_per_env_and_writes_rows(self, tmp_path):
        callback = MetricsCallback(log_dir=str(tmp_path), algo_name="ppo", verbose=0)
        callback._on_training_start()

        # env 0 catches two bonuses and loses one ball before its episode ends;
        # env 1 keeps going and must not leak into env 0's totals
        self._feed(callback,
                   [{"bonuses_collected": 1, "balls_lost": 0}, {"bonuses_collected": 5, "balls_lost": 2}],
                   [False, False])
        self._feed(callback,
                   [{"bonuses_collected": 1, "balls_lost": 1, "score": 7, "game_over": True,
                     "episode": {"r": 3.5, "l": 120}},
                    {"bonuses_collected": 0, "balls_lost": 0}],
                   [True, False])
        callback._on_training_end()

        assert callback.episode_scores == [7]
        assert callback.episode_bonuses == [2]
        assert callback.episode_lost == [1]
        assert callback._bonuses == {1: 5}

        with open(callback.csv_path, newline="") as f:
            rows = list(csv.reader(f))
        assert rows[0] == ["timestep", "episode", "reward", "length",
                           "score", "bonuses", "balls_lost", "game_over"]
        assert rows[1] == ["4", "1", "3.5", "120", "7", "2", "1", "1"]

        summary = callback.get_summary()
        assert summary["total_episodes"] == 1
        assert summary["mean_score"] == 7
