"""
Base agent interface for scripted players.

Agents never touch the engine's state directly: they read a snapshot through
`build_context` and act through the same public methods a human client uses.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple, TYPE_CHECKING

from ..core import ActionType, ChatMessage, GamePhase, GameState, Player, Role, visible_messages
from ..core.actions import CAPABILITIES, denial_reason
from ..config.game_config import GameConfig, default_config

if TYPE_CHECKING:
    from ..engine import GameEngine

NightChoice = Tuple[ActionType, str]


@dataclass
class AgentContext:
    """Context information provided to an agent."""
    player: Player
    game_state: GameState
    messages: List[ChatMessage]
    private_info: Dict[str, Any]
    current_phase: GamePhase
    available_actions: List[ActionType]


class BaseAgent(ABC):
    """
    Abstract base class for all player agents.

    This defines the interface that all agent implementations must follow.
    """

    def __init__(self, player: Player, config: GameConfig = default_config):
        """
        Initialize the agent.

        Args:
            player: The player this agent represents
            config: Game configuration
        """
        self.player_id = player.id
        self.name = player.name
        self.role = player.role
        self.config = config

    @abstractmethod
    def get_day_speech(self, context: AgentContext) -> str:
        """
        Generate what the player says on their turn.

        Args:
            context: Current game context

        Returns:
            The speech text
        """
        pass

    @abstractmethod
    def get_night_actions(self, context: AgentContext) -> List[NightChoice]:
        """
        Choose tonight's secret actions.

        Args:
            context: Current game context

        Returns:
            (action type, target id) pairs, cast in order
        """
        pass

    @abstractmethod
    def get_vote_choice(self, context: AgentContext) -> Optional[str]:
        """
        Get voting choice.

        Args:
            context: Current game context

        Returns:
            Player id to vote against, or None to abstain
        """
        pass

    def get_wolf_chat(self, context: AgentContext) -> Optional[str]:
        """Optional message for the wolf channel at night."""
        return None

    def build_context(self, engine: 'GameEngine') -> AgentContext:
        """
        Build context for the agent from a private snapshot of the engine.

        Args:
            engine: The running game

        Returns:
            AgentContext with all relevant information
        """
        state = engine.snapshot()
        player = state.get_player(self.player_id)

        return AgentContext(
            player=player,
            game_state=state,
            messages=visible_messages(player, state),
            private_info=self._get_private_info(state, player),
            current_phase=state.phase,
            available_actions=self._get_available_actions(state, player),
        )

    def _get_private_info(self, state: GameState, player: Player) -> Dict[str, Any]:
        """What this role secretly knows."""
        info: Dict[str, Any] = {}

        if player.is_wolf_aligned:
            info["pack"] = [p.id for p in state.players if p.is_wolf_aligned]
            info["wolf_kill"] = state.night_actions.wolf_kill

        if player.role == Role.SEER:
            info["findings"] = {f.target_id: f.is_wolf_aligned for f in state.seer_findings}

        if player.role == Role.WITCH:
            # The witch is shown the wolves' victim before choosing her potions
            info["wolf_kill"] = state.night_actions.wolf_kill
            info["has_potion"] = state.witch_powers.has_potion
            info["has_poison"] = state.witch_powers.has_poison

        if player.role == Role.GUARD:
            info["last_guard_target"] = state.night_actions.last_guard_target

        return info

    def _get_available_actions(self, state: GameState, player: Player) -> List[ActionType]:
        """Actions the capability table currently grants this player."""
        return [
            action_type for action_type in CAPABILITIES
            if denial_reason(state, player, action_type) is None
        ]
