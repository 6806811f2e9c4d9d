"""
Scripted agent with deterministic, seedable behavior for demo games.
"""

import random
import re
from typing import List, Optional, Set

from .base_agent import AgentContext, BaseAgent, NightChoice
from ..core import ActionType, Player, Role
from ..config.game_config import GameConfig, default_config

SEER_CLAIM = re.compile(r"I am the seer\. (?P<name>.+) is a werewolf!")


class ScriptedAgent(BaseAgent):
    """
    Simple scripted agent:
    - Wolves: agree on one living non-wolf victim, vote for a non-wolf by day
    - Wolf King: also aims his final shot at a random non-wolf
    - Seer: reveals a player not checked before, announces any wolf found
    - Witch: saves the wolves' first victim, poisons a random suspect from day 2
    - Guard: protects a random player, never the same one two nights running
    - Hunter: keeps his final shot aimed at a random living player
    - Everyone else votes for whoever the seer exposed, otherwise at random
    """

    def __init__(self, player: Player, config: GameConfig = default_config, seat: int = 0):
        super().__init__(player, config)
        # Combine seed with seat so each agent has different but reproducible randomness
        seed = config.random_seed
        if seed is not None:
            self.random = random.Random(seed + seat)
        else:
            self.random = random.Random()
        self.checked_players: Set[str] = set()

    def _others(self, context: AgentContext) -> List[Player]:
        """Living players other than self and the moderator, in roster order."""
        return [
            p for p in context.game_state.get_alive_players()
            if p.id != self.player_id and not p.is_moderator
        ]

    def _non_wolves(self, context: AgentContext) -> List[Player]:
        return [p for p in self._others(context) if not p.is_wolf_aligned]

    def _pick(self, candidates: List[Player]) -> Optional[str]:
        if not candidates:
            return None
        return self.random.choice(candidates).id

    def get_night_actions(self, context: AgentContext) -> List[NightChoice]:
        """Night choices for this role; only actions the engine currently allows."""
        allowed = context.available_actions
        info = context.private_info
        choices: List[NightChoice] = []

        if ActionType.WOLF_KILL in allowed:
            pack_target = info.get("wolf_kill")
            victims = self._non_wolves(context)
            if pack_target is None or pack_target not in {p.id for p in victims}:
                pack_target = self._pick(victims)
            if pack_target:
                choices.append((ActionType.WOLF_KILL, pack_target))

        if ActionType.WOLF_KING_KILL in allowed:
            target = self._pick(self._non_wolves(context))
            if target:
                choices.append((ActionType.WOLF_KING_KILL, target))

        if ActionType.SEER_REVEAL in allowed:
            unchecked = [p for p in self._others(context) if p.id not in self.checked_players]
            target = self._pick(unchecked or self._others(context))
            if target:
                self.checked_players.add(target)
                choices.append((ActionType.SEER_REVEAL, target))

        if ActionType.WITCH_SAVE in allowed and info.get("wolf_kill"):
            choices.append((ActionType.WITCH_SAVE, info["wolf_kill"]))

        if (ActionType.WITCH_KILL in allowed and context.game_state.day_count >= 2
                and self.random.random() < 0.5):
            suspects = [p for p in self._others(context) if p.id != info.get("wolf_kill")]
            target = self._pick(suspects)
            if target:
                choices.append((ActionType.WITCH_KILL, target))

        if ActionType.GUARD_PROTECT in allowed:
            last = info.get("last_guard_target")
            candidates = [
                p for p in context.game_state.get_alive_players()
                if not p.is_moderator and p.id != last
            ]
            target = self._pick(candidates)
            if target:
                choices.append((ActionType.GUARD_PROTECT, target))

        if ActionType.HUNTER_SHOOT in allowed:
            target = self._pick(self._others(context))
            if target:
                choices.append((ActionType.HUNTER_SHOOT, target))

        return choices

    def get_wolf_chat(self, context: AgentContext) -> Optional[str]:
        target = context.game_state.get_player(context.private_info.get("wolf_kill"))
        if target is None:
            return None
        return f"Let's target {target.name}!"

    def get_day_speech(self, context: AgentContext) -> str:
        if self.role == Role.SEER:
            findings = context.private_info.get("findings", {})
            for target_id, is_wolf in findings.items():
                target = context.game_state.get_player(target_id)
                if is_wolf and target and target.is_alive:
                    return f"I am the seer. {target.name} is a werewolf!"

        suspect = self._exposed_wolf(context)
        if suspect and not context.player.is_wolf_aligned:
            return f"I believe the seer. We should vote out {suspect.name}."

        lines = [
            "I was asleep all night, I have nothing to report.",
            "Someone here is lying, and I intend to find out who.",
            "Let's not rush to judgment today.",
            "I have my suspicions, but I'll keep them to myself for now.",
        ]
        return self.random.choice(lines)

    def _exposed_wolf(self, context: AgentContext) -> Optional[Player]:
        """Living player most recently named by a seer claim in the village chat."""
        living = {p.name: p for p in context.game_state.get_alive_players()}
        for message in reversed(context.messages):
            match = SEER_CLAIM.search(message.content)
            if match and match.group("name") in living:
                return living[match.group("name")]
        return None

    def get_vote_choice(self, context: AgentContext) -> Optional[str]:
        if context.player.is_wolf_aligned:
            return self._pick(self._non_wolves(context))

        if self.role == Role.SEER:
            findings = context.private_info.get("findings", {})
            for player in self._others(context):
                if findings.get(player.id):
                    return player.id

        suspect = self._exposed_wolf(context)
        if suspect and suspect.id != self.player_id:
            return suspect.id

        return self._pick(self._others(context))
