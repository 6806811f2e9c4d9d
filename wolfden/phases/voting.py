"""
Day vote tallying and lynch resolution.
"""

import copy
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, List, Optional

from ..core import ActionType, NightActions, Player, Role, VoteAction, evaluate_winner
from ..core.moderator import Narration
from .night_phase import run_death_chain

logger = logging.getLogger(__name__)


class VoteOutcome(Enum):
    NO_VOTES = "no_votes"
    TIE = "tie"
    ELIMINATED = "eliminated"


@dataclass
class VoteResult:
    """Counted day ballots."""
    outcome: VoteOutcome
    target_id: Optional[str] = None
    counts: Dict[str, int] = field(default_factory=dict)
    tied: List[str] = field(default_factory=list)


@dataclass
class LynchResult:
    """Roster after the day vote, with narration and chained deaths."""
    players: List[Player]
    tally: VoteResult
    narration: List[Narration] = field(default_factory=list)
    deaths: List[str] = field(default_factory=list)
    winner: Optional[Role] = None


def tally_votes(votes: Iterable[VoteAction]) -> VoteResult:
    """
    Count day ballots (night choices are ignored) and find the plurality target.

    Single pass: a strictly higher count resets the tie set, an equal count joins it.
    """
    counts: Dict[str, int] = {}
    for vote in votes:
        if vote.action_type == ActionType.VOTE:
            counts[vote.target_id] = counts.get(vote.target_id, 0) + 1

    max_votes = 0
    leaders: List[str] = []
    for target_id, count in counts.items():
        if count > max_votes:
            max_votes = count
            leaders = [target_id]
        elif count == max_votes:
            leaders.append(target_id)

    if not leaders:
        return VoteResult(outcome=VoteOutcome.NO_VOTES, counts=counts)
    if len(leaders) > 1:
        return VoteResult(outcome=VoteOutcome.TIE, counts=counts, tied=leaders)
    return VoteResult(outcome=VoteOutcome.ELIMINATED, target_id=leaders[0], counts=counts)


def resolve_lynch(players: List[Player], votes: Iterable[VoteAction], actions: NightActions) -> LynchResult:
    """
    Apply the day vote to a copy of `players`: eliminate the plurality target and
    fire any final shot it carries.
    """
    players = copy.deepcopy(players)
    tally = tally_votes(votes)
    result = LynchResult(players=players, tally=tally)

    if tally.outcome == VoteOutcome.NO_VOTES:
        result.narration.append(Narration("The village couldn't decide on anyone to lynch today."))
    elif tally.outcome == VoteOutcome.TIE:
        result.narration.append(Narration("The vote was tied! No one was lynched today."))
    else:
        target = next((p for p in players if p.id == tally.target_id), None)
        if target is not None and target.eliminate():
            result.narration.append(Narration(f"The village has spoken. {target.name} has been lynched!"))
            result.deaths.append(target.id)
            run_death_chain(players, [target.id], actions, result.narration, result.deaths)
        else:
            logger.warning("Lynch target %s is not a living player", tally.target_id)

    result.winner = evaluate_winner(players)
    return result
