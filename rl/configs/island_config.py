"""
Training configuration for the island environment
Reward shaping variants, algorithm hyperparameters and training settings
"""

# Environment parameters
ENV_CONFIG = {
    "width": 480,
    "height": 640,
    "max_steps": 3600,  # 60 seconds at 60 FPS
    "k_balls": 3,
    "m_bonuses": 2,
    "max_ball_speed": 20.0,
}

# ==============================================================================
# REWARD SHAPING CONFIGURATIONS
# ==============================================================================

# BASELINE: hits matter, losing balls hurts
REWARD_CONFIG_BASELINE = {
    "name": "baseline",
    "description": "Balanced hit reward and ball-loss penalty",
    "R_HIT": 1.0,        # Reward per island hit
    "R_BONUS": 0.1,      # Reward per power-up caught
    "R_LOST": 1.0,       # Penalty per ball lost
    "R_ALIVE": 0.001,    # Small per-frame survival reward
    "R_GAME_OVER": 5.0,  # Game over penalty
}

# SURVIVAL: keep the rally going
REWARD_CONFIG_SURVIVAL = {
    "name": "survival",
    "description": "Prioritize keeping balls in play",
    "R_HIT": 0.5,
    "R_BONUS": 0.2,
    "R_LOST": 3.0,
    "R_ALIVE": 0.005,
    "R_GAME_OVER": 10.0,
}

REWARD_CONFIGS = {
    "baseline": REWARD_CONFIG_BASELINE,
    "survival": REWARD_CONFIG_SURVIVAL,
}

# ==============================================================================
# ALGORITHM HYPERPARAMETERS
# ==============================================================================

PPO_CONFIG = {
    "policy": "MlpPolicy",
    "learning_rate": 3e-4,
    "n_steps": 2048,
    "batch_size": 256,
    "n_epochs": 10,
    "gamma": 0.99,
    "gae_lambda": 0.95,
    "clip_range": 0.2,
    "ent_coef": 0.0,
    "vf_coef": 0.5,
    "max_grad_norm": 0.5,
    "verbose": 1,
}

DQN_CONFIG = {
    "policy": "MlpPolicy",
    "learning_rate": 1e-4,
    "buffer_size": 100_000,
    "learning_starts": 1000,
    "batch_size": 128,
    "tau": 1.0,
    "gamma": 0.99,
    "train_freq": 4,
    "gradient_steps": 1,
    "target_update_interval": 1000,
    "exploration_fraction": 0.1,
    "exploration_initial_eps": 1.0,
    "exploration_final_eps": 0.05,
    "verbose": 1,
}

SAC_CONFIG = {
    "policy": "MlpPolicy",
    "learning_rate": 3e-4,
    "buffer_size": 100_000,
    "learning_starts": 1000,
    "batch_size": 256,
    "tau": 0.005,
    "gamma": 0.99,
    "train_freq": 1,
    "gradient_steps": 1,
    "ent_coef": "auto",
    "verbose": 1,
}

# Number of paddle positions DQN chooses from
DQN_ACTION_BINS = 9

# ==============================================================================
# TRAINING SETTINGS
# ==============================================================================

TRAINING_CONFIG = {
    "total_timesteps": 500_000,
    "save_freq": 10_000,
    "eval_freq": 5_000,
    "log_dir": "./logs",
    "model_dir": "./models",
    "tensorboard_log": "./tensorboard_logs",
}
