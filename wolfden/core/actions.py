"""
Role capabilities: which role may take which action in which phase.

Adding a role means adding rows here, not new branches in the engine.
"""

from typing import Dict, FrozenSet, Optional

from .game_engine import ActionType, GamePhase, GameState
from .player import Player
from .roles import Role

NIGHT_ONLY = frozenset({GamePhase.NIGHT})

# Death-triggered shots can be aimed at any point while the game is running
ANY_ACTIVE_PHASE = frozenset({GamePhase.NIGHT, GamePhase.DAY, GamePhase.VOTING})

VOTERS = frozenset(role for role in Role if role != Role.MODERATOR)

# {action_type: {role: phases in which the role may take it}}
CAPABILITIES: Dict[ActionType, Dict[Role, FrozenSet[GamePhase]]] = {
    ActionType.VOTE: {role: frozenset({GamePhase.VOTING}) for role in VOTERS},
    ActionType.WOLF_KILL: {Role.WOLF: NIGHT_ONLY, Role.WOLF_KING: NIGHT_ONLY},
    ActionType.SEER_REVEAL: {Role.SEER: NIGHT_ONLY},
    ActionType.WITCH_SAVE: {Role.WITCH: NIGHT_ONLY},
    ActionType.WITCH_KILL: {Role.WITCH: NIGHT_ONLY},
    ActionType.GUARD_PROTECT: {Role.GUARD: NIGHT_ONLY},
    ActionType.HUNTER_SHOOT: {Role.HUNTER: ANY_ACTIVE_PHASE},
    ActionType.WOLF_KING_KILL: {Role.WOLF_KING: ANY_ACTIVE_PHASE},
}


def parse_action_type(value) -> ActionType:
    """Accept an ActionType or its string value ("guardProtect") or name."""
    if isinstance(value, ActionType):
        return value
    try:
        return ActionType(value)
    except ValueError:
        try:
            return ActionType[str(value).upper()]
        except KeyError:
            raise ValueError(f"Unknown action type: {value!r}") from None


def role_can(role: Role, action_type: ActionType, phase: GamePhase) -> bool:
    """Capability lookup, ignoring player status and consumables."""
    return phase in CAPABILITIES.get(action_type, {}).get(role, frozenset())


def denial_reason(state: GameState, player: Optional[Player], action_type: ActionType) -> Optional[str]:
    """
    Why `player` may not take `action_type` right now, or None if allowed.
    """
    if player is None:
        return "unknown player"
    if not player.is_alive:
        return f"{player.name} is dead"
    if not role_can(player.role, action_type, state.phase):
        return f"{player.role.value} cannot use {action_type.value} during {state.phase.value}"
    if action_type == ActionType.WITCH_SAVE and not state.witch_powers.has_potion:
        return "the witch's potion has already been used"
    if action_type == ActionType.WITCH_KILL and not state.witch_powers.has_poison:
        return "the witch's poison has already been used"
    return None
