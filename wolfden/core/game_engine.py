"""
Core game state: phases, night actions, votes, chat log and win condition.
"""

import time
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional

from .player import Player
from .roles import Role


class GamePhase(Enum):
    """Current game phase."""
    LOBBY = "lobby"
    NIGHT = "night"
    DAY = "day"
    VOTING = "voting"
    GAME_OVER = "gameOver"


class ActionType(Enum):
    """Ballots and secret actions a player can cast."""
    VOTE = "vote"
    WOLF_KILL = "wolfKill"
    SEER_REVEAL = "seerReveal"
    WITCH_SAVE = "witchSave"
    WITCH_KILL = "witchKill"
    HUNTER_SHOOT = "hunterShoot"
    WOLF_KING_KILL = "wolfKingKill"
    GUARD_PROTECT = "guardProtect"


class Channel(Enum):
    """Chat channels."""
    VILLAGE = "village"
    WOLF = "wolf"


class MessageKind(Enum):
    """Who a chat message speaks for."""
    VILLAGE = "village"
    WOLF = "wolf"
    MODERATOR = "moderator"
    SYSTEM = "system"


# NightActions attribute each night action type writes to
NIGHT_ACTION_SLOTS: Dict[ActionType, str] = {
    ActionType.WOLF_KILL: "wolf_kill",
    ActionType.SEER_REVEAL: "seer_reveal",
    ActionType.WITCH_SAVE: "witch_save",
    ActionType.WITCH_KILL: "witch_kill",
    ActionType.HUNTER_SHOOT: "hunter_target",
    ActionType.WOLF_KING_KILL: "wolf_king_target",
    ActionType.GUARD_PROTECT: "guard_target",
}


@dataclass
class NightActions:
    """Targets chosen during one night (before resolution)."""
    wolf_kill: Optional[str] = None
    seer_reveal: Optional[str] = None
    witch_save: Optional[str] = None
    witch_kill: Optional[str] = None
    hunter_target: Optional[str] = None
    wolf_king_target: Optional[str] = None
    guard_target: Optional[str] = None
    last_guard_target: Optional[str] = None

    def next_night(self) -> "NightActions":
        """Fresh record for the following night; only the guard's last target carries forward."""
        return NightActions(last_guard_target=self.guard_target)


@dataclass
class WitchPowers:
    """Single-use witch potions. Once consumed they stay consumed."""
    has_potion: bool = True
    has_poison: bool = True


@dataclass(frozen=True)
class VoteAction:
    """One live ballot or night choice."""
    voter_id: str
    target_id: str
    action_type: ActionType


@dataclass(frozen=True)
class ChatMessage:
    """A chat line. Messages are never edited or removed."""
    sender_id: str
    sender_name: str
    content: str
    channel: Channel
    kind: MessageKind
    timestamp: float = field(default_factory=time.time)
    recipient_id: Optional[str] = None  # Private narration (seer finding)
    id: str = field(default_factory=lambda: str(uuid.uuid4()))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "sender_id": self.sender_id,
            "sender_name": self.sender_name,
            "content": self.content,
            "timestamp": self.timestamp,
            "channel": self.channel.value,
            "kind": self.kind.value,
            "recipient_id": self.recipient_id,
        }


@dataclass(frozen=True)
class SeerFinding:
    """Result of a seer reveal."""
    night: int
    seer_id: Optional[str]
    target_id: str
    is_wolf_aligned: bool


def evaluate_winner(players: Iterable[Player]) -> Optional[Role]:
    """
    Decide whether the game is over.

    Living players are split into wolf-aligned, plain villagers and special
    village roles; the moderator does not count. Wolves win as soon as either
    the plain villagers or the special roles are wiped out, villagers win when
    no wolf-aligned player is left. Returns None while the game continues.
    """
    wolves = villagers = specials = 0
    for player in players:
        if not player.is_alive:
            continue
        if player.role.is_wolf_aligned:
            wolves += 1
        elif player.role == Role.VILLAGER:
            villagers += 1
        elif player.role.is_special:
            specials += 1

    if villagers == 0 or specials == 0:
        return Role.WOLF
    if wolves == 0:
        return Role.VILLAGER
    return None


@dataclass
class GameState:
    """Complete game state."""
    game_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    phase: GamePhase = GamePhase.LOBBY
    players: List[Player] = field(default_factory=list)
    messages: Dict[Channel, List[ChatMessage]] = field(
        default_factory=lambda: {Channel.VILLAGE: [], Channel.WOLF: []}
    )
    votes: List[VoteAction] = field(default_factory=list)
    day_count: int = 0
    night_actions: NightActions = field(default_factory=NightActions)
    witch_powers: WitchPowers = field(default_factory=WitchPowers)
    speaking_player_id: Optional[str] = None
    winners: Optional[Role] = None

    seer_findings: List[SeerFinding] = field(default_factory=list)
    acting_player_id: Optional[str] = None  # Human the public chat/vote calls act for

    def get_player(self, player_id: Optional[str]) -> Optional[Player]:
        """Get player by id."""
        for player in self.players:
            if player.id == player_id:
                return player
        return None

    def get_alive_players(self) -> List[Player]:
        """Get all alive players."""
        return [p for p in self.players if p.is_alive]

    def get_speakers(self) -> List[Player]:
        """Living non-moderator players in roster order."""
        return [p for p in self.players if p.is_alive and not p.is_moderator]

    def get_players_with_role(self, role: Role) -> List[Player]:
        """Get alive players with the given role."""
        return [p for p in self.players if p.is_alive and p.role == role]

    def get_players_without_role(self, role: Role) -> List[Player]:
        """Get alive players without the given role."""
        return [p for p in self.players if p.is_alive and p.role != role]

    def append_message(self, message: ChatMessage) -> None:
        self.messages[message.channel].append(message)

    def all_messages(self) -> List[ChatMessage]:
        """Both channels merged in timestamp order."""
        merged = self.messages[Channel.VILLAGE] + self.messages[Channel.WOLF]
        return sorted(merged, key=lambda m: m.timestamp)

    def get_vote(self, voter_id: str, action_type: ActionType) -> Optional[VoteAction]:
        for vote in self.votes:
            if vote.voter_id == voter_id and vote.action_type == action_type:
                return vote
        return None

    def get_game_summary(self) -> Dict[str, Any]:
        """Get a summary of the current game state."""
        alive_players = self.get_alive_players()
        return {
            "game_id": self.game_id,
            "phase": self.phase.value,
            "day": self.day_count,
            "alive_players": len(alive_players),
            "alive_wolves": len([p for p in alive_players if p.is_wolf_aligned]),
            "winner": self.winners.value if self.winners else None,
        }

    def to_dict(self) -> Dict[str, Any]:
        """Plain-data view of the whole state, suitable for JSON."""
        actions = self.night_actions
        return {
            "game_id": self.game_id,
            "phase": self.phase.value,
            "players": [p.to_dict() for p in self.players],
            "messages": {
                channel.value: [m.to_dict() for m in messages]
                for channel, messages in self.messages.items()
            },
            "votes": [
                {"voter_id": v.voter_id, "target_id": v.target_id, "action_type": v.action_type.value}
                for v in self.votes
            ],
            "day_count": self.day_count,
            "night_actions": {
                "wolf_kill": actions.wolf_kill,
                "seer_reveal": actions.seer_reveal,
                "witch_save": actions.witch_save,
                "witch_kill": actions.witch_kill,
                "hunter_target": actions.hunter_target,
                "wolf_king_target": actions.wolf_king_target,
                "guard_target": actions.guard_target,
                "last_guard_target": actions.last_guard_target,
            },
            "witch_powers": {
                "has_potion": self.witch_powers.has_potion,
                "has_poison": self.witch_powers.has_poison,
            },
            "speaking_player_id": self.speaking_player_id,
            "seer_findings": [
                {"night": f.night, "seer_id": f.seer_id, "target_id": f.target_id, "is_wolf_aligned": f.is_wolf_aligned}
                for f in self.seer_findings
            ],
            "winners": self.winners.value if self.winners else None,
            "acting_player_id": self.acting_player_id,
        }
