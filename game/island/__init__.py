"""Hit the Island - paddle-and-island arcade game and its Gymnasium environment"""

from .config import GameConfig, DEFAULT_CONFIG
from .entities import Ball, BallEvent, Bonus, BonusType, Island, Paddle
from .session import GameState, InputState, SessionState
from .bonus import BonusManager
from .frame import FrameController, FrameResult
from .purchases import MockStore, PurchaseState
from .island_env import IslandEnv, run_random_episode

__all__ = [
    'GameConfig', 'DEFAULT_CONFIG',
    'Ball', 'BallEvent', 'Bonus', 'BonusType', 'Island', 'Paddle',
    'GameState', 'InputState', 'SessionState',
    'BonusManager', 'FrameController', 'FrameResult',
    'MockStore', 'PurchaseState',
    'IslandEnv', 'run_random_episode',
]
