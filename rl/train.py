"""
Training script for the island environment using Stable-Baselines3
Supports PPO, DQN, and SAC with task metrics tracking.
"""

import os
import argparse
from typing import Optional

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from stable_baselines3 import PPO, DQN, SAC
from stable_baselines3.common.vec_env import DummyVecEnv, VecNormalize
from stable_baselines3.common.callbacks import CheckpointCallback, EvalCallback
from stable_baselines3.common.monitor import Monitor

from game.island import IslandEnv
from rl.configs.island_config import (
    ENV_CONFIG, REWARD_CONFIGS, PPO_CONFIG, DQN_CONFIG, SAC_CONFIG,
    TRAINING_CONFIG, DQN_ACTION_BINS,
)
from rl.metrics_callback import MetricsCallback, TensorboardMetricsCallback


class BoxToDiscreteWrapper(gym.ActionWrapper):
    """
    Wrapper to convert the continuous paddle target to Discrete for DQN.
    Action i puts the paddle at the i-th of n evenly spaced targets.
    """

    def __init__(self, env, n_bins: int = DQN_ACTION_BINS):
        super().__init__(env)
        self.n_bins = n_bins
        self._targets = np.linspace(-1.0, 1.0, n_bins, dtype=np.float32)
        self.action_space = spaces.Discrete(n_bins)

    def action(self, action):
        return np.array([self._targets[int(action)]], dtype=np.float32)


def make_env(render_mode: Optional[str] = None, seed: Optional[int] = None,
             wrap_for_dqn: bool = False, reward_name: str = "baseline"):
    """Factory function to create the environment"""
    def _init():
        env = IslandEnv(render_mode=render_mode, reward_config=REWARD_CONFIGS[reward_name],
                        **ENV_CONFIG)
        if wrap_for_dqn:
            env = BoxToDiscreteWrapper(env)
        env = Monitor(env)
        if seed is not None:
            env.reset(seed=seed)
        return env
    return _init


def run_dirs(algo: str, save_dir: Optional[str] = None, log_dir: Optional[str] = None,
             tensorboard_log: Optional[str] = None):
    """Per-algorithm output directories, defaulting under TRAINING_CONFIG paths"""
    return (
        save_dir or os.path.join(TRAINING_CONFIG["model_dir"], algo),
        log_dir or os.path.join(TRAINING_CONFIG["log_dir"], algo),
        tensorboard_log or os.path.join(TRAINING_CONFIG["tensorboard_log"], algo),
    )


def _callbacks(algo: str, eval_env, save_dir: str, log_dir: str, n_envs: int = 1):
    checkpoint_callback = CheckpointCallback(
        save_freq=max(1, TRAINING_CONFIG["save_freq"] // n_envs),
        save_path=save_dir,
        name_prefix=f"{algo}_island",
    )
    eval_callback = EvalCallback(
        eval_env,
        best_model_save_path=save_dir,
        log_path=log_dir,
        eval_freq=max(1, TRAINING_CONFIG.get("eval_freq", 5000) // n_envs),
        deterministic=True,
        render=False,
    )
    metrics_callback = MetricsCallback(log_dir=log_dir, algo_name=algo, verbose=1)
    tb_callback = TensorboardMetricsCallback(verbose=0)
    return metrics_callback, [checkpoint_callback, eval_callback, metrics_callback, tb_callback]


def _report(algo: str, final_path: str, metrics_callback: MetricsCallback):
    print(f"\n{'='*60}")
    print(f"{algo.upper()} Training complete! Model saved to {final_path}")
    summary = metrics_callback.get_summary()
    if summary:
        print(f"Mean Reward: {summary['mean_reward']:.2f} ± {summary['std_reward']:.2f}")
        print(f"Mean Score: {summary['mean_score']:.2f}")
        print(f"Total Episodes: {summary['total_episodes']}")
    print(f"{'='*60}\n")


def train_ppo(
    total_timesteps: int = None,
    save_dir: Optional[str] = None,
    log_dir: Optional[str] = None,
    tensorboard_log: Optional[str] = None,
    n_envs: int = 4,
    reward_name: str = "baseline",
):
    """Train PPO agent on the island environment"""

    if total_timesteps is None:
        total_timesteps = TRAINING_CONFIG["total_timesteps"]
    save_dir, log_dir, tensorboard_log = run_dirs("ppo", save_dir, log_dir, tensorboard_log)

    os.makedirs(save_dir, exist_ok=True)
    os.makedirs(log_dir, exist_ok=True)

    print(f"\n{'='*60}")
    print(f"Training PPO for {total_timesteps:,} timesteps...")
    print(f"Using {n_envs} parallel environments, reward config '{reward_name}'")
    print(f"{'='*60}\n")

    env = DummyVecEnv([make_env(seed=i, reward_name=reward_name) for i in range(n_envs)])
    env = VecNormalize(env, norm_obs=True, norm_reward=True)

    eval_env = DummyVecEnv([make_env(seed=100, reward_name=reward_name)])
    eval_env = VecNormalize(eval_env, norm_obs=True, norm_reward=False, training=False)

    metrics_callback, callbacks = _callbacks("ppo", eval_env, save_dir, log_dir, n_envs)

    model = PPO(env=env, tensorboard_log=tensorboard_log, **PPO_CONFIG)
    model.learn(total_timesteps=total_timesteps, callback=callbacks)

    final_path = os.path.join(save_dir, "ppo_island_final")
    model.save(final_path)
    env.save(os.path.join(save_dir, "vec_normalize.pkl"))

    _report("ppo", final_path, metrics_callback)
    return model, metrics_callback


def train_dqn(
    total_timesteps: int = None,
    save_dir: Optional[str] = None,
    log_dir: Optional[str] = None,
    tensorboard_log: Optional[str] = None,
    reward_name: str = "baseline",
):
    """Train DQN agent on the island environment"""

    if total_timesteps is None:
        total_timesteps = TRAINING_CONFIG["total_timesteps"]
    save_dir, log_dir, tensorboard_log = run_dirs("dqn", save_dir, log_dir, tensorboard_log)

    os.makedirs(save_dir, exist_ok=True)
    os.makedirs(log_dir, exist_ok=True)

    print(f"\n{'='*60}")
    print(f"Training DQN for {total_timesteps:,} timesteps...")
    print(f"Using Box->Discrete action wrapper ({DQN_ACTION_BINS} actions)")
    print(f"{'='*60}\n")

    env = DummyVecEnv([make_env(seed=0, wrap_for_dqn=True, reward_name=reward_name)])
    eval_env = DummyVecEnv([make_env(seed=100, wrap_for_dqn=True, reward_name=reward_name)])

    metrics_callback, callbacks = _callbacks("dqn", eval_env, save_dir, log_dir)

    model = DQN(env=env, tensorboard_log=tensorboard_log, **DQN_CONFIG)
    model.learn(total_timesteps=total_timesteps, callback=callbacks)

    final_path = os.path.join(save_dir, "dqn_island_final")
    model.save(final_path)

    _report("dqn", final_path, metrics_callback)
    return model, metrics_callback


def train_sac(
    total_timesteps: int = None,
    save_dir: Optional[str] = None,
    log_dir: Optional[str] = None,
    tensorboard_log: Optional[str] = None,
    reward_name: str = "baseline",
):
    """Train SAC agent on the island environment (native continuous action)"""

    if total_timesteps is None:
        total_timesteps = TRAINING_CONFIG["total_timesteps"]
    save_dir, log_dir, tensorboard_log = run_dirs("sac", save_dir, log_dir, tensorboard_log)

    os.makedirs(save_dir, exist_ok=True)
    os.makedirs(log_dir, exist_ok=True)

    print(f"\n{'='*60}")
    print(f"Training SAC for {total_timesteps:,} timesteps...")
    print(f"{'='*60}\n")

    env = DummyVecEnv([make_env(seed=0, reward_name=reward_name)])
    eval_env = DummyVecEnv([make_env(seed=100, reward_name=reward_name)])

    metrics_callback, callbacks = _callbacks("sac", eval_env, save_dir, log_dir)

    model = SAC(env=env, tensorboard_log=tensorboard_log, **SAC_CONFIG)
    model.learn(total_timesteps=total_timesteps, callback=callbacks)

    final_path = os.path.join(save_dir, "sac_island_final")
    model.save(final_path)

    _report("sac", final_path, metrics_callback)
    return model, metrics_callback


def main():
    parser = argparse.ArgumentParser(description="Train RL agent on the island environment")
    parser.add_argument(
        "--algo",
        type=str,
        default="ppo",
        choices=["ppo", "dqn", "sac", "all"],
        help="RL algorithm to use (default: ppo)",
    )
    parser.add_argument(
        "--timesteps",
        type=int,
        default=None,
        help=f"Total timesteps to train (default: {TRAINING_CONFIG['total_timesteps']})",
    )
    parser.add_argument(
        "--n-envs",
        type=int,
        default=4,
        help="Number of parallel environments for PPO (default: 4)",
    )
    parser.add_argument(
        "--reward",
        type=str,
        default="baseline",
        choices=sorted(REWARD_CONFIGS),
        help="Reward shaping config (default: baseline)",
    )

    args = parser.parse_args()

    if args.algo in ("ppo", "all"):
        train_ppo(total_timesteps=args.timesteps, n_envs=args.n_envs, reward_name=args.reward)
    if args.algo in ("dqn", "all"):
        train_dqn(total_timesteps=args.timesteps, reward_name=args.reward)
    if args.algo in ("sac", "all"):
        train_sac(total_timesteps=args.timesteps, reward_name=args.reward)


if __name__ == "__main__":
    main()
