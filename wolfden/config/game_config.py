"""
Game configuration and constants.
"""

from dataclasses import dataclass, field
from typing import List, Optional


def _default_demo_roles() -> List[str]:
    return [
        "moderator", "wolf", "wolf", "wolfKing",
        "villager", "villager", "villager",
        "seer", "witch", "hunter", "guard",
    ]


@dataclass
class GameConfig:
    """Configuration for game parameters."""

    # Roster requirements
    min_players: int = 4
    min_villagers: int = 3
    min_wolves: int = 1  # Plain wolves; the wolf king does not count
    max_guards: int = 1  # Guard is optional
    max_wolf_kings: int = 1

    # Moderator announcements
    use_moderator_announcements: bool = True
    log_level: str = "INFO"

    # Scripted demo settings
    random_seed: Optional[int] = None  # Seed for reproducible scripted agents
    step_delay: float = 0.0  # Seconds between scripted engine calls
    max_days: int = 20  # Demo stops after this many days even without a winner
    demo_roles: List[str] = field(default_factory=_default_demo_roles)
    runs_dir: str = "runs"


# Default configuration instance
default_config = GameConfig()
