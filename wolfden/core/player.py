"""
Player class representing a game participant.
"""

import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict

from .roles import Role, parse_role


class PlayerStatus(Enum):
    """Player status in the game."""
    ALIVE = "alive"
    DEAD = "dead"


@dataclass
class Player:
    """Represents a player in the game."""
    name: str
    role: Role = Role.VILLAGER
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    status: PlayerStatus = PlayerStatus.ALIVE
    is_human: bool = False

    def __post_init__(self):
        self.role = parse_role(self.role)
        if not isinstance(self.status, PlayerStatus):
            self.status = PlayerStatus(self.status)

    def __str__(self) -> str:
        return f"{self.name} ({self.role.value})"

    @property
    def is_alive(self) -> bool:
        """Check if player is alive."""
        return self.status == PlayerStatus.ALIVE

    @property
    def is_wolf_aligned(self) -> bool:
        return self.role.is_wolf_aligned

    @property
    def is_moderator(self) -> bool:
        return self.role == Role.MODERATOR

    def eliminate(self) -> bool:
        """
        Mark player as dead.
        Returns False if the player was already dead (status never reverses).
        """
        if not self.is_alive:
            return False
        self.status = PlayerStatus.DEAD
        return True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "role": self.role.value,
            "status": self.status.value,
            "is_human": self.is_human,
        }
