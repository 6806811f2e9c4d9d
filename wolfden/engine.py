"""
Game engine: the phase state machine and the public surface used by
presentation layers and scripted actors.

Every mutation works on a deep copy of the current state and commits the copy
in one assignment, so a rejected call leaves the game exactly as it was and no
caller ever observes a half-applied transition.
"""

import copy
import logging
from collections import Counter
from typing import Any, Dict, List, Optional, Union

from .config.game_config import GameConfig, default_config
from .core import (
    ActionType,
    Channel,
    ChatMessage,
    GamePhase,
    GameState,
    InvalidActionError,
    MessageKind,
    MissingModeratorError,
    MissingRolesError,
    Moderator,
    NightActions,
    NotEnoughPlayersError,
    NotFoundError,
    Player,
    Role,
    VoteAction,
    WitchPowers,
    WolfdenError,
    evaluate_winner,
    parse_action_type,
    parse_role,
)
from .core.actions import denial_reason
from .core.channels import active_channel, can_write, visible_messages, write_denial
from .core.game_engine import NIGHT_ACTION_SLOTS
from .core.moderator import MODERATOR_SENDER_ID
from .phases import first_speaker, next_speaker, resolve_lynch, resolve_night
from .recording.event_emitter import EventEmitter

logger = logging.getLogger(__name__)

ACTIVE_PHASES = (GamePhase.NIGHT, GamePhase.DAY, GamePhase.VOTING)


class GameEngine:
    """Owns the single live GameState and sequences the phases."""

    def __init__(self, config: GameConfig = default_config, event_emitter: Optional[EventEmitter] = None):
        self.config = config
        self.event_emitter = event_emitter
        self.moderator = Moderator(config)
        self._state = GameState()

    # -- state access ---------------------------------------------------

    @property
    def state(self) -> GameState:
        """The current snapshot. Treat as read-only; use `snapshot()` for a private copy."""
        return self._state

    @property
    def phase(self) -> GamePhase:
        return self._state.phase

    def snapshot(self) -> GameState:
        return copy.deepcopy(self._state)

    def to_dict(self) -> Dict[str, Any]:
        return self._state.to_dict()

    def _begin(self) -> GameState:
        return copy.deepcopy(self._state)

    def _commit(self, state: GameState) -> None:
        previous = self._state
        self._state = state
        if previous.phase != state.phase or previous.game_id != state.game_id:
            logger.debug("Phase %s -> %s (day %d)", previous.phase.value, state.phase.value, state.day_count)
        if self.event_emitter:
            self._emit_changes(previous, state)

    def _rejected(self, error: WolfdenError) -> WolfdenError:
        logger.warning("Rejected: %s", error.message)
        return error

    # -- roster -----------------------------------------------------------

    def reset(self) -> None:
        """Replace the game with a brand-new lobby (new id, empty roster)."""
        self._commit(GameState())

    def add_player(self, name: str, is_bot: bool = False, role: Union[Role, str, None] = None) -> Player:
        state = self._begin()
        self._require_lobby(state, "add players")
        if not name or not name.strip():
            raise self._rejected(InvalidActionError("Player name cannot be empty"))

        player = Player(name=name.strip(), role=parse_role(role) if role else Role.VILLAGER, is_human=not is_bot)
        state.players.append(player)
        if player.is_human and state.acting_player_id is None:
            state.acting_player_id = player.id
        self._commit(state)
        return copy.deepcopy(player)

    def remove_player(self, player_id: str) -> None:
        state = self._begin()
        self._require_lobby(state, "remove players")
        if state.get_player(player_id) is None:
            raise self._rejected(NotFoundError(player_id))

        state.players = [p for p in state.players if p.id != player_id]
        if state.acting_player_id == player_id:
            state.acting_player_id = None
        self._commit(state)

    def set_roster(self, players: List[Player]) -> None:
        """Replace the whole lobby roster (roles included)."""
        state = self._begin()
        self._require_lobby(state, "change the roster")
        ids = [p.id for p in players]
        if len(set(ids)) != len(ids):
            raise self._rejected(InvalidActionError("Player ids must be unique"))

        state.players = copy.deepcopy(list(players))
        if state.get_player(state.acting_player_id) is None:
            human = next((p for p in state.players if p.is_human), None)
            state.acting_player_id = human.id if human else None
        self._commit(state)

    def set_acting_player(self, player_id: Optional[str]) -> None:
        """Choose which player `send_message`/`cast_vote` act for by default."""
        state = self._begin()
        if player_id is not None and state.get_player(player_id) is None:
            raise self._rejected(NotFoundError(player_id))
        state.acting_player_id = player_id
        self._commit(state)

    # -- phase transitions ----------------------------------------------------

    def start(self) -> None:
        """Validate the roster and move from the lobby into the first night."""
        state = self._begin()
        self._require_lobby(state, "start the game")
        self._validate_roster(state.players)

        state.phase = GamePhase.NIGHT
        state.day_count = 1
        state.witch_powers = WitchPowers()
        state.night_actions = NightActions()
        state.votes = []
        state.speaking_player_id = None
        state.winners = None
        self.moderator.announce_game_start(state)
        self._commit(state)

    def advance(self) -> None:
        """Move to the next phase, resolving whatever the current phase decided."""
        phase = self._state.phase
        if phase == GamePhase.LOBBY:
            self.start()
            return
        if phase == GamePhase.GAME_OVER:
            self.reset()
            return

        state = self._begin()
        if phase == GamePhase.NIGHT:
            self._end_night(state)
        elif phase == GamePhase.DAY:
            self._begin_voting(state)
        else:
            self._end_voting(state)
        self._commit(state)

    def _end_night(self, state: GameState) -> None:
        result = resolve_night(state.players, state.night_actions, night=state.day_count)
        state.players = result.players
        if result.seer_finding:
            state.seer_findings.append(result.seer_finding)

        self.moderator.announce_dawn(state)
        self.moderator.post(state, result.narration)

        if result.winner:
            self._end_game(state, result.winner)
            return

        state.phase = GamePhase.DAY
        state.votes = []
        state.speaking_player_id = first_speaker(state.players)
        speaker = state.get_player(state.speaking_player_id)
        if speaker:
            self.moderator.announce_speaker(state, speaker)

    def _begin_voting(self, state: GameState) -> None:
        state.phase = GamePhase.VOTING
        state.speaking_player_id = None
        state.votes = []
        self.moderator.announce_voting(state)

    def _end_voting(self, state: GameState) -> None:
        result = resolve_lynch(state.players, state.votes, state.night_actions)
        state.players = result.players
        self.moderator.post(state, result.narration)

        if result.winner:
            self._end_game(state, result.winner)
            return

        state.phase = GamePhase.NIGHT
        state.day_count += 1
        state.night_actions = state.night_actions.next_night()
        state.votes = []
        self.moderator.announce_night(state)

    def _end_game(self, state: GameState, winner: Role) -> None:
        state.phase = GamePhase.GAME_OVER
        state.winners = winner
        state.speaking_player_id = None
        self.moderator.announce_winner(state, winner)

    def next_speaker(self) -> Optional[str]:
        """Pass the floor to the next living speaker. Returns the new speaker id."""
        state = self._begin()
        if state.phase != GamePhase.DAY:
            raise self._rejected(InvalidActionError(
                f"Speaking order only applies during the day (phase is {state.phase.value})"
            ))

        speaker_id = next_speaker(state.players, state.speaking_player_id)
        if speaker_id is None:
            return None

        state.speaking_player_id = speaker_id
        self.moderator.announce_speaker(state, state.get_player(speaker_id))
        self._commit(state)
        return speaker_id

    # -- player actions -------------------------------------------------------

    def cast_vote(self, target_id: str, action_type: Union[ActionType, str], voter_id: Optional[str] = None) -> None:
        """
        Record a day ballot or a night choice.

        The voter defaults to the acting player; without one the call does nothing.
        A later vote of the same type replaces the earlier one.
        """
        action_type = parse_action_type(action_type)
        state = self._begin()
        voter_id = voter_id or state.acting_player_id
        if voter_id is None:
            logger.debug("No acting player; ignoring %s", action_type.value)
            return

        voter = state.get_player(voter_id)
        if voter is None:
            raise self._rejected(NotFoundError(voter_id, action_type.value))
        target = state.get_player(target_id)
        if target is None:
            raise self._rejected(NotFoundError(target_id, action_type.value))

        reason = denial_reason(state, voter, action_type)
        if reason:
            raise self._rejected(InvalidActionError(reason, voter_id, action_type.value))
        if not target.is_alive:
            raise self._rejected(InvalidActionError(f"{target.name} is already dead", voter_id, action_type.value))
        if target.is_moderator:
            raise self._rejected(InvalidActionError("The moderator cannot be targeted", voter_id, action_type.value))
        if action_type == ActionType.GUARD_PROTECT and target_id == state.night_actions.last_guard_target:
            raise self._rejected(InvalidActionError(
                f"The guard cannot protect {target.name} two nights in a row", voter_id, action_type.value
            ))

        state.votes = [
            v for v in state.votes if not (v.voter_id == voter_id and v.action_type == action_type)
        ]
        state.votes.append(VoteAction(voter_id=voter_id, target_id=target_id, action_type=action_type))

        slot = NIGHT_ACTION_SLOTS.get(action_type)
        if slot:
            setattr(state.night_actions, slot, target_id)
        if action_type == ActionType.WITCH_SAVE:
            state.witch_powers.has_potion = False
        elif action_type == ActionType.WITCH_KILL:
            state.witch_powers.has_poison = False

        self._commit(state)
        if self.event_emitter:
            self.event_emitter.emit_vote(voter_id, target_id, action_type.value, state.day_count)

    def send_message(self, content: str, channel: Union[Channel, str] = Channel.VILLAGE,
                     sender_id: Optional[str] = None) -> Optional[ChatMessage]:
        """Post a chat message as the acting player (or `sender_id`)."""
        channel = Channel(channel)
        state = self._begin()
        sender_id = sender_id or state.acting_player_id
        if sender_id is None:
            logger.debug("No acting player; dropping chat message")
            return None

        sender = state.get_player(sender_id)
        if sender is None:
            raise self._rejected(NotFoundError(sender_id))
        if not content or not content.strip():
            raise self._rejected(InvalidActionError("Message cannot be empty", sender_id))
        reason = write_denial(sender, channel, state)
        if reason:
            raise self._rejected(InvalidActionError(reason, sender_id))

        if channel == Channel.WOLF:
            kind = MessageKind.WOLF
        elif sender.is_moderator:
            kind = MessageKind.MODERATOR
        else:
            kind = MessageKind.VILLAGE
        message = ChatMessage(
            sender_id=sender.id,
            sender_name=sender.name,
            content=content,
            channel=channel,
            kind=kind,
        )
        state.append_message(message)
        self._commit(state)
        return message

    # -- queries ------------------------------------------------------------

    def is_action_allowed(self, player_id: str, action_type: Union[ActionType, str]) -> bool:
        action_type = parse_action_type(action_type)
        return denial_reason(self._state, self._state.get_player(player_id), action_type) is None

    def alive_players_with_role(self, role: Union[Role, str]) -> List[Player]:
        return self._state.get_players_with_role(parse_role(role))

    def alive_players_without_role(self, role: Union[Role, str]) -> List[Player]:
        return self._state.get_players_without_role(parse_role(role))

    def active_channel(self, player: Union[Player, str, None] = None) -> Channel:
        """Default compose channel for `player` (the acting player if omitted)."""
        if player is None:
            player = self._state.acting_player_id
        if isinstance(player, str):
            player = self._state.get_player(player)
        return active_channel(player, self._state.phase)

    def visible_messages(self, viewer_id: Optional[str] = None) -> List[ChatMessage]:
        viewer = self._state.get_player(viewer_id or self._state.acting_player_id)
        return visible_messages(viewer, self._state)

    def can_send(self, channel: Union[Channel, str] = Channel.VILLAGE, sender_id: Optional[str] = None) -> bool:
        """Whether the sender (the acting player if omitted) may post to `channel` right now."""
        sender = self._state.get_player(sender_id or self._state.acting_player_id)
        if sender is None:
            return False
        return can_write(sender, Channel(channel), self._state)

    def current_winner(self) -> Optional[Role]:
        if self._state.phase == GamePhase.GAME_OVER:
            return self._state.winners
        if self._state.phase not in ACTIVE_PHASES:
            return None
        return evaluate_winner(self._state.players)

    # -- validation ---------------------------------------------------------

    def _require_lobby(self, state: GameState, what: str) -> None:
        if state.phase != GamePhase.LOBBY:
            raise self._rejected(InvalidActionError(
                f"Cannot {what} once the game has started (phase is {state.phase.value})"
            ))

    def _validate_roster(self, players: List[Player]) -> None:
        """Raise a SetupError unless the roster can host a game."""
        if len(players) < self.config.min_players:
            raise self._rejected(NotEnoughPlayersError(len(players), self.config.min_players))

        counts = Counter(p.role for p in players)
        if counts[Role.MODERATOR] != 1:
            raise self._rejected(MissingModeratorError(counts[Role.MODERATOR]))

        problems = []
        if counts[Role.VILLAGER] < self.config.min_villagers:
            problems.append(f"need at least {self.config.min_villagers} villagers (have {counts[Role.VILLAGER]})")
        if counts[Role.WOLF] < self.config.min_wolves:
            problems.append(f"need at least {self.config.min_wolves} wolves (have {counts[Role.WOLF]})")
        for role in (Role.SEER, Role.WITCH, Role.HUNTER):
            if counts[role] != 1:
                problems.append(f"need exactly 1 {role.value} (have {counts[role]})")
        if counts[Role.GUARD] > self.config.max_guards:
            problems.append(f"at most {self.config.max_guards} guard allowed (have {counts[Role.GUARD]})")
        if counts[Role.WOLF_KING] > self.config.max_wolf_kings:
            problems.append(f"at most {self.config.max_wolf_kings} wolf king allowed (have {counts[Role.WOLF_KING]})")
        if problems:
            raise self._rejected(MissingRolesError(problems))

    # -- events -------------------------------------------------------------

    def _emit_changes(self, previous: GameState, state: GameState) -> None:
        """Tell listeners what the committed transition changed."""
        emitter = self.event_emitter
        same_game = previous.game_id == state.game_id

        if previous.phase == GamePhase.LOBBY and state.phase == GamePhase.NIGHT:
            emitter.emit_game_start(state.game_id, [p.to_dict() for p in state.players])

        for channel, messages in state.messages.items():
            start = len(previous.messages[channel]) if same_game else 0
            for message in messages[start:]:
                if message.sender_id == MODERATOR_SENDER_ID:
                    emitter.emit_announcement(message, state.phase.value, state.day_count)
                else:
                    emitter.emit_chat(message, state.phase.value, state.day_count)

        if same_game:
            was_alive = {p.id for p in previous.players if p.is_alive}
            for player in state.players:
                if player.id in was_alive and not player.is_alive:
                    emitter.emit_elimination(player.id, previous.phase.value, state.day_count)

        if previous.phase != state.phase or not same_game:
            emitter.emit_phase_change(state.phase.value, state.day_count)
            emitter.emit_game_state_update(state.get_game_summary())
            if state.phase == GamePhase.GAME_OVER:
                emitter.emit_game_over(state.winners.value if state.winners else None, state.day_count)
