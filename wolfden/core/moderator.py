"""
Moderator narration: the game's announcements as chat messages.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

from .game_engine import Channel, ChatMessage, GameState, MessageKind
from .player import Player
from .roles import Role
from ..config.game_config import GameConfig, default_config

logger = logging.getLogger(__name__)

MODERATOR_SENDER_ID = "system"
MODERATOR_SENDER_NAME = "Moderator"


@dataclass(frozen=True)
class Narration:
    """An announcement produced by a resolver, not yet posted to the chat."""
    text: str
    channel: Channel = Channel.VILLAGE
    recipient_id: Optional[str] = None


class Moderator:
    """Posts announcements into the game state and echoes them to the log."""

    def __init__(self, config: GameConfig = default_config):
        self.config = config

    def announce(self, state: GameState, text: str, channel: Channel = Channel.VILLAGE,
                 recipient_id: Optional[str] = None) -> ChatMessage:
        """Append a moderator message to `state`."""
        kind = MessageKind.WOLF if channel == Channel.WOLF else MessageKind.MODERATOR
        message = ChatMessage(
            sender_id=MODERATOR_SENDER_ID,
            sender_name=MODERATOR_SENDER_NAME,
            content=text,
            channel=channel,
            kind=kind,
            recipient_id=recipient_id,
        )
        state.append_message(message)
        if self.config.use_moderator_announcements:
            if recipient_id:
                logger.info("[MODERATOR -> %s] %s", recipient_id, text)
            else:
                logger.info("[MODERATOR] %s", text)
        return message

    def post(self, state: GameState, narration: List[Narration]) -> None:
        """Post resolver narration in order."""
        for item in narration:
            self.announce(state, item.text, item.channel, item.recipient_id)

    def announce_game_start(self, state: GameState) -> None:
        self.announce(state, "The game has begun! The village falls into a deep slumber as night descends...")
        self.announce(state, "Wolves, choose your victim...", Channel.WOLF)

    def announce_night(self, state: GameState) -> None:
        self.announce(
            state,
            "Night falls once more. The village sleeps, uneasy with the knowledge that wolves walk among them...",
        )
        self.announce(state, "Wolves, choose your next victim...", Channel.WOLF)

    def announce_dawn(self, state: GameState) -> None:
        self.announce(state, "Dawn breaks over the village. The villagers wake to discover the events of the night...")

    def announce_voting(self, state: GameState) -> None:
        self.announce(state, "It's time to vote! Who do you suspect is a werewolf?")

    def announce_speaker(self, state: GameState, speaker: Player) -> None:
        self.announce(state, f"{speaker.name}, it's your turn to speak.")

    def announce_winner(self, state: GameState, winner: Role) -> None:
        side = "Werewolves" if winner == Role.WOLF else "Villagers"
        self.announce(state, f"Game Over! The {side} have won!")
