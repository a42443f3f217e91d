"""
Custom callback for tracking task-specific metrics during training.
Records: final score, island hits, power-ups caught, balls lost.
"""

import os
import csv
from typing import Dict, List, Any, Optional

import numpy as np
from stable_baselines3.common.callbacks import BaseCallback


class MetricsCallback(BaseCallback):
    """
    Callback to track and log task-specific metrics per episode.
    Saves to CSV for easy plotting.
    """

    def __init__(
        self,
        log_dir: str,
        algo_name: str,
        verbose: int = 1,
    ):
        super().__init__(verbose)
        self.log_dir = log_dir
        self.algo_name = algo_name

        # Episode tracking
        self.episode_rewards: List[float] = []
        self.episode_lengths: List[int] = []
        self.episode_scores: List[int] = []
        self.episode_bonuses: List[int] = []
        self.episode_lost: List[int] = []

        # Per-env accumulators (bonuses/lost are reported per frame)
        self._bonuses: Dict[int, int] = {}
        self._lost: Dict[int, int] = {}

        self.csv_path: Optional[str] = None
        self.csv_file = None
        self.csv_writer = None

    def _on_training_start(self) -> None:
        """Initialize CSV file for logging."""
        os.makedirs(self.log_dir, exist_ok=True)
        self.csv_path = os.path.join(self.log_dir, f"{self.algo_name}_metrics.csv")

        self.csv_file = open(self.csv_path, "w", newline="")
        self.csv_writer = csv.writer(self.csv_file)
        self.csv_writer.writerow([
            "timestep", "episode", "reward", "length",
            "score", "bonuses", "balls_lost", "game_over"
        ])
        self.csv_file.flush()

        if self.verbose > 0:
            print(f"[MetricsCallback] Logging to {self.csv_path}")

    def _on_step(self) -> bool:
        infos = self.locals.get("infos", [])
        dones = self.locals.get("dones", [])

        for i, (info, done) in enumerate(zip(infos, dones)):
            self._bonuses[i] = self._bonuses.get(i, 0) + info.get("bonuses_collected", 0)
            self._lost[i] = self._lost.get(i, 0) + info.get("balls_lost", 0)

            # Monitor wrapper adds episode info on the final step
            if done and "episode" in info:
                ep_info = info["episode"]
                score = info.get("score", 0)
                bonuses = self._bonuses.pop(i, 0)
                lost = self._lost.pop(i, 0)
                game_over = 1 if info.get("game_over") else 0

                self.episode_rewards.append(ep_info["r"])
                self.episode_lengths.append(ep_info["l"])
                self.episode_scores.append(score)
                self.episode_bonuses.append(bonuses)
                self.episode_lost.append(lost)

                if self.csv_writer:
                    self.csv_writer.writerow([
                        self.num_timesteps,
                        len(self.episode_rewards),
                        ep_info["r"],
                        ep_info["l"],
                        score,
                        bonuses,
                        lost,
                        game_over,
                    ])
                    self.csv_file.flush()

                if self.verbose > 0 and len(self.episode_rewards) % 10 == 0:
                    avg_score = sum(self.episode_scores[-10:]) / 10
                    print(f"[{self.algo_name}] Episode {len(self.episode_rewards)}, "
                          f"Timestep {self.num_timesteps}, "
                          f"Avg Score (10 ep): {avg_score:.2f}")

        return True

    def _on_training_end(self) -> None:
        if self.csv_file:
            self.csv_file.close()
            if self.verbose > 0:
                print(f"[MetricsCallback] Saved {len(self.episode_rewards)} episodes to {self.csv_path}")

    def get_summary(self) -> Dict[str, Any]:
        """Get summary statistics."""
        if not self.episode_rewards:
            return {}

        return {
            "mean_reward": np.mean(self.episode_rewards),
            "std_reward": np.std(self.episode_rewards),
            "mean_length": np.mean(self.episode_lengths),
            "total_episodes": len(self.episode_rewards),
            "mean_score": np.mean(self.episode_scores),
            "mean_bonuses": np.mean(self.episode_bonuses),
        }


class TensorboardMetricsCallback(BaseCallback):
    """
    Logs final score and island hits to TensorBoard.
    """

    def _on_step(self) -> bool:
        infos = self.locals.get("infos", [])
        dones = self.locals.get("dones", [])

        for info, done in zip(infos, dones):
            if done and "episode" in info and self.logger:
                self.logger.record("custom/episode_reward", info["episode"]["r"])
                self.logger.record("custom/episode_length", info["episode"]["l"])
                self.logger.record("custom/final_score", info.get("score", 0))

        return True
