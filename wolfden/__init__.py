"""
Wolfden: moderation engine for a village-vs-werewolves party game.
"""

from .engine import GameEngine
from .core import (
    ActionType,
    Channel,
    GamePhase,
    GameState,
    InvalidActionError,
    NotFoundError,
    Player,
    Role,
    SetupError,
    WolfdenError,
)
from .config import GameConfig, default_config, load_config

__version__ = "0.1.0"

__all__ = [
    'GameEngine',
    'ActionType',
    'Channel',
    'GamePhase',
    'GameState',
    'InvalidActionError',
    'NotFoundError',
    'Player',
    'Role',
    'SetupError',
    'WolfdenError',
    'GameConfig',
    'default_config',
    'load_config',
]
