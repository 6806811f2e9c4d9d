"""
Day phase speaking order.

Speakers are the living non-moderator players in fixed roster order; the
rotation wraps from the last speaker back to the first.
"""

from typing import List, Optional

from ..core import Player


def get_speaking_order(players: List[Player]) -> List[str]:
    """Ids of everyone who may speak today, in roster order."""
    return [p.id for p in players if p.is_alive and not p.is_moderator]


def first_speaker(players: List[Player]) -> Optional[str]:
    order = get_speaking_order(players)
    return order[0] if order else None


def next_speaker(players: List[Player], current_id: Optional[str]) -> Optional[str]:
    """
    Speaker after `current_id`, wrapping.
    If the current speaker is no longer in the order (e.g. they died), start from the top.
    """
    order = get_speaking_order(players)
    if not order:
        return None
    if current_id not in order:
        return order[0]
    return order[(order.index(current_id) + 1) % len(order)]
