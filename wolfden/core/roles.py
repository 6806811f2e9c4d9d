"""
Role definitions and alignment for the werewolf game.
"""

from enum import Enum


class Role(Enum):
    """Player roles."""
    VILLAGER = "villager"
    WOLF = "wolf"
    WOLF_KING = "wolfKing"
    SEER = "seer"
    WITCH = "witch"
    HUNTER = "hunter"
    GUARD = "guard"
    MODERATOR = "moderator"

    def __str__(self) -> str:
        return self.value

    @property
    def is_wolf_aligned(self) -> bool:
        return self in WOLF_ALIGNED_ROLES

    @property
    def is_special(self) -> bool:
        """Village information/support roles (not plain villagers)."""
        return self in SPECIAL_ROLES

    @property
    def has_death_trigger(self) -> bool:
        """Role fires a final shot when its player dies."""
        return self in DEATH_TRIGGERED_ROLES


WOLF_ALIGNED_ROLES = frozenset({Role.WOLF, Role.WOLF_KING})

SPECIAL_ROLES = frozenset({Role.SEER, Role.WITCH, Role.HUNTER, Role.GUARD})

DEATH_TRIGGERED_ROLES = frozenset({Role.HUNTER, Role.WOLF_KING})


def parse_role(value) -> Role:
    """Accept a Role or its string value ("wolfKing") or name ("WOLF_KING")."""
    if isinstance(value, Role):
        return value
    try:
        return Role(value)
    except ValueError:
        try:
            return Role[str(value).upper()]
        except KeyError:
            raise ValueError(f"Unknown role: {value!r}") from None
