"""
Pytest fixtures for Wolfden tests.
"""

from typing import List

import pytest

from wolfden import GameEngine
from wolfden.core import Channel, Player, Role
from wolfden.config.game_config import GameConfig


# Fixed ids keep assertions readable
STANDARD_SEATS = [
    ("mod", "Moderator", Role.MODERATOR),
    ("wolf1", "EvilWolf1", Role.WOLF),
    ("wolf2", "SneakyWolf2", Role.WOLF),
    ("king", "WolfKing", Role.WOLF_KING),
    ("v1", "TrustyVillager1", Role.VILLAGER),
    ("v2", "HonestVillager2", Role.VILLAGER),
    ("v3", "SimpleVillager3", Role.VILLAGER),
    ("seer", "MysticSeer", Role.SEER),
    ("witch", "WiseWitch", Role.WITCH),
    ("hunter", "BraveHunter", Role.HUNTER),
    ("guard", "StalwartGuard", Role.GUARD),
]


@pytest.fixture
def game_config():
    """Test game configuration."""
    return GameConfig(
        use_moderator_announcements=False,  # Disable for cleaner test output
        random_seed=42,
    )


@pytest.fixture
def roster() -> List[Player]:
    """The standard 11-seat table."""
    return [Player(name=name, role=role, id=player_id) for player_id, name, role in STANDARD_SEATS]


@pytest.fixture
def engine(game_config) -> GameEngine:
    """Engine in the lobby."""
    return GameEngine(game_config)


@pytest.fixture
def started_engine(engine, roster) -> GameEngine:
    """Engine on night 1 with the standard table."""
    engine.set_roster(roster)
    engine.start()
    return engine


def alive_ids(players: List[Player]) -> set:
    return {p.id for p in players if p.is_alive}


def village_texts(engine: GameEngine) -> List[str]:
    """Content of every village channel message so far."""
    return [m.content for m in engine.state.messages[Channel.VILLAGE]]
