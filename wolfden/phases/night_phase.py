"""
Night resolution: protection, saves, kills, poison, last shots and the seer's reveal.

Resolution order matters:
1. Guard protection negates the wolves' kill (outranks the witch).
2. Otherwise the witch's potion negates it.
3. Otherwise the wolves' victim dies.
4. The witch's poison kills regardless of protection.
5. Every fresh death of a hunter or wolf king fires its final shot, chained.
6. The seer learns whether the revealed player is wolf-aligned.
"""

import copy
import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Deque, List, Optional

from ..core import NightActions, Player, Role, SeerFinding, evaluate_winner
from ..core.moderator import Narration

logger = logging.getLogger(__name__)


@dataclass
class NightResult:
    """Outcome of one night, computed from a roster snapshot."""
    players: List[Player]
    narration: List[Narration] = field(default_factory=list)
    deaths: List[str] = field(default_factory=list)
    seer_finding: Optional[SeerFinding] = None
    winner: Optional[Role] = None


def _find(players: List[Player], player_id: Optional[str]) -> Optional[Player]:
    if player_id is None:
        return None
    return next((p for p in players if p.id == player_id), None)


def run_death_chain(players: List[Player], just_died: List[str], actions: NightActions,
                    narration: List[Narration], deaths: List[str]) -> None:
    """
    Fire death-triggered abilities for everyone in `just_died`.

    Works on a queue rather than recursion: a shot victim who carries an ability
    is queued in turn. A player can only die once, so mutually aimed shots stop
    after both have fallen. Mutates `players`, `narration` and `deaths`.
    """
    queue: Deque[str] = deque(just_died)
    while queue:
        shooter = _find(players, queue.popleft())
        if shooter is None or not shooter.role.has_death_trigger:
            continue

        if shooter.role == Role.HUNTER:
            target = _find(players, actions.hunter_target)
            line = "With their last breath, the Hunter shoots {name}!"
        else:
            target = _find(players, actions.wolf_king_target)
            line = "The Wolf King drags {name} down with them!"

        if target is None or target.id == shooter.id or not target.eliminate():
            continue

        logger.debug("%s takes %s down with them", shooter, target)
        narration.append(Narration(line.format(name=target.name)))
        deaths.append(target.id)
        queue.append(target.id)


def resolve_death_chain(players: List[Player], just_died: List[str], actions: NightActions) -> NightResult:
    """Pure wrapper around `run_death_chain` for callers outside night resolution."""
    players = copy.deepcopy(players)
    result = NightResult(players=players)
    run_death_chain(players, just_died, actions, result.narration, result.deaths)
    result.winner = evaluate_winner(players)
    return result


def resolve_night(players: List[Player], actions: NightActions, night: int = 0) -> NightResult:
    """
    Apply the night's actions to a copy of `players`.
    The input roster is never modified.
    """
    players = copy.deepcopy(players)
    result = NightResult(players=players)
    fresh_deaths: List[str] = []

    wolf_kill = actions.wolf_kill
    if wolf_kill is not None:
        if actions.guard_target == wolf_kill:
            result.narration.append(Narration(
                "The wolves struck in the night, but a vigilant guard turned them away!"
            ))
        elif actions.witch_save == wolf_kill:
            result.narration.append(Narration(
                "A villager was attacked in the night, but someone mysterious saved them!"
            ))
        else:
            victim = _find(players, wolf_kill)
            if victim is not None and victim.eliminate():
                result.narration.append(Narration(f"{victim.name} was killed in the night by the werewolves!"))
                fresh_deaths.append(victim.id)

    # Poison ignores guard and potion
    poisoned = _find(players, actions.witch_kill)
    if poisoned is not None and poisoned.eliminate():
        result.narration.append(Narration(f"{poisoned.name} was found dead, poisoned by an unknown assailant!"))
        fresh_deaths.append(poisoned.id)

    result.deaths.extend(fresh_deaths)
    run_death_chain(players, fresh_deaths, actions, result.narration, result.deaths)

    revealed = _find(players, actions.seer_reveal)
    if revealed is not None:
        seer = next((p for p in players if p.role == Role.SEER), None)
        finding = SeerFinding(
            night=night,
            seer_id=seer.id if seer else None,
            target_id=revealed.id,
            is_wolf_aligned=revealed.is_wolf_aligned,
        )
        result.seer_finding = finding
        if seer is not None and seer.is_alive:
            verdict = "is a werewolf" if finding.is_wolf_aligned else "is not a werewolf"
            result.narration.append(Narration(
                f"The spirits whisper to the seer: {revealed.name} {verdict}.",
                recipient_id=seer.id,
            ))

    result.winner = evaluate_winner(players)
    if result.winner:
        logger.debug("Night %s ends with a winner: %s", night, result.winner.value)
    return result
