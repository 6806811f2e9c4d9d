"""
Core game components: game state, players, roles, capabilities, channels and narration.
"""

from .roles import Role, parse_role
from .player import Player, PlayerStatus
from .game_engine import (
    ActionType,
    Channel,
    ChatMessage,
    GamePhase,
    GameState,
    MessageKind,
    NightActions,
    SeerFinding,
    VoteAction,
    WitchPowers,
    evaluate_winner,
)
from .actions import CAPABILITIES, parse_action_type
from .channels import active_channel, can_read, can_write, visible_messages
from .moderator import Moderator, Narration
from .exceptions import (
    WolfdenError,
    SetupError,
    NotEnoughPlayersError,
    MissingModeratorError,
    MissingRolesError,
    InvalidActionError,
    NotFoundError,
)

__all__ = [
    'Role',
    'parse_role',
    'Player',
    'PlayerStatus',
    'ActionType',
    'Channel',
    'ChatMessage',
    'GamePhase',
    'GameState',
    'MessageKind',
    'NightActions',
    'SeerFinding',
    'VoteAction',
    'WitchPowers',
    'evaluate_winner',
    'CAPABILITIES',
    'parse_action_type',
    'active_channel',
    'can_read',
    'can_write',
    'visible_messages',
    'Moderator',
    'Narration',
    'WolfdenError',
    'SetupError',
    'NotEnoughPlayersError',
    'MissingModeratorError',
    'MissingRolesError',
    'InvalidActionError',
    'NotFoundError',
]
