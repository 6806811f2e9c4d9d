"""
Exceptions raised by the rules engine.

Every error is a caller-input validation failure raised before any state is
committed, so the game is always left as it was before the call.
"""

from typing import Optional


class WolfdenError(Exception):
    """Base class for all engine errors."""

    def __init__(self, message: str, player_id: Optional[str] = None, action_type: Optional[str] = None):
        self.message = message
        self.player_id = player_id
        self.action_type = action_type
        super().__init__(self.message)


class SetupError(WolfdenError):
    """Raised when the roster cannot start a game."""


class NotEnoughPlayersError(SetupError):
    """Raised when the roster is smaller than the configured minimum."""

    def __init__(self, player_count: int, minimum: int):
        self.player_count = player_count
        self.minimum = minimum
        super().__init__(f"You need at least {minimum} players to start the game (have {player_count}).")


class MissingModeratorError(SetupError):
    """Raised when the roster does not have exactly one moderator."""

    def __init__(self, moderator_count: int):
        self.moderator_count = moderator_count
        if moderator_count == 0:
            message = "You need a moderator to start the game."
        else:
            message = f"Only one moderator is allowed (found {moderator_count})."
        super().__init__(message)


class MissingRolesError(SetupError):
    """Raised when the required role counts are not met."""

    def __init__(self, problems: list):
        self.problems = list(problems)
        super().__init__("Required roles not fulfilled: " + "; ".join(self.problems))


class InvalidActionError(WolfdenError):
    """Raised when a player, role or phase does not permit the requested action."""


class NotFoundError(WolfdenError):
    """Raised when a referenced player id does not exist."""

    def __init__(self, player_id: str, action_type: Optional[str] = None):
        super().__init__(f"Player {player_id!r} not found", player_id=player_id, action_type=action_type)
