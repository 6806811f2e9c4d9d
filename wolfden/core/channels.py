"""
Chat channel routing and visibility.

The router only decides the default compose target and the core read rule
(wolf chatter never reaches a living villager); how messages are laid out is
up to the presentation layer.
"""

from typing import List, Optional

from .game_engine import Channel, ChatMessage, GamePhase, GameState
from .player import Player


def active_channel(player: Optional[Player], phase: GamePhase) -> Channel:
    """Default channel the player composes into during `phase`."""
    if player is None:
        return Channel.VILLAGE

    # During the day everyone talks in the village
    if phase in (GamePhase.DAY, GamePhase.VOTING):
        return Channel.VILLAGE

    if phase == GamePhase.NIGHT and player.is_wolf_aligned:
        return Channel.WOLF

    return Channel.VILLAGE


def can_read(viewer: Optional[Player], message: ChatMessage) -> bool:
    """Whether `viewer` may see `message`."""
    if message.recipient_id is not None:
        return viewer is not None and (viewer.id == message.recipient_id or viewer.is_moderator)

    if message.channel == Channel.WOLF:
        return viewer is not None and (viewer.is_wolf_aligned or viewer.is_moderator)

    return True


def visible_messages(viewer: Optional[Player], state: GameState) -> List[ChatMessage]:
    """All messages `viewer` may read, both channels merged in timestamp order."""
    return [m for m in state.all_messages() if can_read(viewer, m)]


def write_denial(player: Player, channel: Channel, state: GameState) -> Optional[str]:
    """
    Why `player` may not post to `channel` right now, or None if allowed.

    The moderator may always post to the village. Otherwise the dead are silent,
    the wolf channel belongs to living wolves at night, and during the day only
    the current speaker may talk.
    """
    if player.is_moderator:
        return None
    if not player.is_alive:
        return f"{player.name} is dead"

    phase = state.phase
    if channel == Channel.WOLF:
        if not player.is_wolf_aligned:
            return "only wolves may use the wolf channel"
        if phase != GamePhase.NIGHT:
            return "the wolf channel is only open at night"
        return None

    if phase == GamePhase.NIGHT:
        return "the village sleeps at night"
    if phase == GamePhase.DAY and state.speaking_player_id != player.id:
        return "it is not your turn to speak"
    return None


def can_write(player: Player, channel: Channel, state: GameState) -> bool:
    return write_denial(player, channel, state) is None
