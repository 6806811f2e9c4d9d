"""
Scripted demo game for Wolfden.

Every seat is a ScriptedAgent that plays through the engine's public methods,
exactly as a human client would.
"""

import argparse
import dataclasses
import logging
import random
import time
from collections import Counter
from typing import Any, Callable, Dict, Optional

from wolfden import GameEngine, GamePhase, Role, WolfdenError
from wolfden.agents import BaseAgent, ScriptedAgent
from wolfden.config.config_loader import load_config
from wolfden.config.game_config import GameConfig, default_config
from wolfden.core import ActionType, Channel, parse_role
from wolfden.recording import EventEmitter, RunRecorder

logger = logging.getLogger(__name__)

# Order in which night roles act; the witch must see the wolves' choice
NIGHT_ORDER = [Role.WOLF, Role.WOLF_KING, Role.GUARD, Role.WITCH, Role.SEER, Role.HUNTER]

SEAT_NAMES = {
    Role.MODERATOR: ["Moderator"],
    Role.WOLF: ["EvilWolf", "SneakyWolf", "HungryWolf", "ShadowWolf"],
    Role.WOLF_KING: ["WolfKing"],
    Role.VILLAGER: ["TrustyVillager", "HonestVillager", "SimpleVillager", "QuietVillager"],
    Role.SEER: ["MysticSeer"],
    Role.WITCH: ["WiseWitch"],
    Role.HUNTER: ["BraveHunter"],
    Role.GUARD: ["StalwartGuard"],
}


def seat_name(role: Role, index: int) -> str:
    """Display name for the index-th seat holding `role` (0-based)."""
    names = SEAT_NAMES[role]
    if len(names) == 1 and index == 0:
        return names[0]
    base = names[index % len(names)]
    return f"{base}{index + 1}"


class DemoGame:
    """Runs a complete game with scripted agents in every seat."""

    def __init__(self, config: Optional[GameConfig] = None, event_emitter: Optional[EventEmitter] = None,
                 run_name: Optional[str] = None, record: bool = False):
        config = config or default_config
        # Generate seed if not provided, so the run can be replayed
        if config.random_seed is None:
            config = dataclasses.replace(config, random_seed=random.randint(0, 2**31 - 1))
        self.config = config

        self.run_recorder: Optional[RunRecorder] = None
        if event_emitter is None and record:
            self.run_recorder = RunRecorder(config.runs_dir)
            run_name = self.run_recorder.create_run(run_name)
            event_emitter = EventEmitter(self.run_recorder)
            print(f"Recording game to: {self.run_recorder.get_run_path()}/")
        elif event_emitter is not None:
            self.run_recorder = event_emitter.run_recorder
        self.event_emitter = event_emitter

        self.engine = GameEngine(config, event_emitter=event_emitter)
        self.agents: Dict[str, BaseAgent] = {}
        self._seat_players()

    def _seat_players(self) -> None:
        """Add one bot per configured role and attach an agent to every non-moderator."""
        seen: Counter = Counter()
        for seat, role_name in enumerate(self.config.demo_roles):
            role = parse_role(role_name)
            name = seat_name(role, seen[role])
            seen[role] += 1
            player = self.engine.add_player(name, is_bot=True, role=role)
            if role != Role.MODERATOR:
                self.agents[player.id] = ScriptedAgent(player, self.config, seat)

    def _step(self, call: Callable[..., Any], *args, **kwargs) -> Any:
        """Pace and perform one engine call; a rejected call is logged and skipped."""
        if self.config.step_delay:
            time.sleep(self.config.step_delay)
        try:
            return call(*args, **kwargs)
        except WolfdenError as e:
            logger.warning("Scripted call %s failed: %s", call.__name__, e.message)
            return None

    def _living_agents(self):
        return [
            (player, self.agents[player.id])
            for player in self.engine.state.get_alive_players()
            if player.id in self.agents
        ]

    def run_night(self) -> None:
        for role in NIGHT_ORDER:
            for player in self.engine.alive_players_with_role(role):
                agent = self.agents.get(player.id)
                if agent is None:
                    continue
                context = agent.build_context(self.engine)
                if player.is_wolf_aligned:
                    chat = agent.get_wolf_chat(context)
                    if chat:
                        self._step(self.engine.send_message, chat, Channel.WOLF, sender_id=player.id)
                for action_type, target_id in agent.get_night_actions(context):
                    self._step(self.engine.cast_vote, target_id, action_type, voter_id=player.id)
        self._step(self.engine.advance)

    def run_day(self) -> None:
        turns = len(self.engine.state.get_speakers())
        for turn in range(turns):
            speaker_id = self.engine.state.speaking_player_id
            agent = self.agents.get(speaker_id)
            if agent is not None:
                speech = agent.get_day_speech(agent.build_context(self.engine))
                self._step(self.engine.send_message, speech, Channel.VILLAGE, sender_id=speaker_id)
            if turn < turns - 1:
                self._step(self.engine.next_speaker)
        self._step(self.engine.advance)

    def run_voting(self) -> None:
        for player, agent in self._living_agents():
            target_id = agent.get_vote_choice(agent.build_context(self.engine))
            if target_id:
                self._step(self.engine.cast_vote, target_id, ActionType.VOTE, voter_id=player.id)
        self._step(self.engine.advance)

    def run_game(self) -> Optional[Role]:
        """
        Play until the game is over or the day limit is reached.

        Returns:
            The winning side (Role.WOLF or Role.VILLAGER), or None when stopped at max_days
        """
        state = self.engine.state
        if self.run_recorder:
            self.run_recorder.start_game(state.game_id, [p.to_dict() for p in state.players], {
                "random_seed": self.config.random_seed,
                "max_days": self.config.max_days,
                "demo_roles": list(self.config.demo_roles),
            })

        print("=" * 60)
        print("WOLFDEN - Starting")
        print("=" * 60)
        for player in state.players:
            print(f"  {player.name}: {player.role.value}")
        print("=" * 60)

        self._step(self.engine.start)
        if self.engine.phase == GamePhase.LOBBY:
            print("Game could not start, check the configured roles")
            return None

        handlers = {
            GamePhase.NIGHT: self.run_night,
            GamePhase.DAY: self.run_day,
            GamePhase.VOTING: self.run_voting,
        }
        while self.engine.phase != GamePhase.GAME_OVER:
            if self.engine.state.day_count > self.config.max_days:
                logger.info("Stopping after %d days without a winner", self.config.max_days)
                break
            phase = self.engine.phase
            if phase == GamePhase.NIGHT:
                print(f"\n--- NIGHT {self.engine.state.day_count} ---")
            elif phase == GamePhase.DAY:
                print(f"\n--- DAY {self.engine.state.day_count} ---")
            else:
                print(f"\n--- VOTING (Day {self.engine.state.day_count}) ---")
            handlers[phase]()

        winner = self.engine.current_winner() if self.engine.phase == GamePhase.GAME_OVER else None
        if self.run_recorder:
            self.run_recorder.save_final_state(self.engine.to_dict())
        self._print_game_summary(winner)
        return winner

    def _print_game_summary(self, winner: Optional[Role]) -> None:
        state = self.engine.state
        print("\n" + "=" * 60)
        if winner == Role.WOLF:
            print("GAME OVER - The Werewolves WIN!")
        elif winner == Role.VILLAGER:
            print("GAME OVER - The Villagers WIN!")
        else:
            print(f"Game stopped without a winner (max days: {self.config.max_days})")
        print("=" * 60)
        print(f"Days played: {state.day_count}")
        print(f"Random Seed: {self.config.random_seed}")

        alive = [p for p in state.players if p.is_alive and not p.is_moderator]
        dead = [p for p in state.players if not p.is_alive]
        print(f"\nAlive Players ({len(alive)}):")
        for player in alive:
            print(f"  • {player.name}: {player.role.value}")
        if dead:
            print(f"\nEliminated Players ({len(dead)}):")
            for player in dead:
                print(f"  • {player.name}: {player.role.value}")

    def get_game_summary(self) -> Dict[str, Any]:
        """Final game summary as a dictionary."""
        state = self.engine.state
        return {
            "winner": state.winners.value if state.winners else None,
            "days": state.day_count,
            "random_seed": self.config.random_seed,
            "final_state": state.get_game_summary(),
        }


def main():
    """Entry point for running a scripted demo game."""
    parser = argparse.ArgumentParser(
        description="Run a scripted Werewolf game",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py                                # Default 11-seat table
  python main.py --config configs/demo.yaml     # Roles and pacing from YAML
  python main.py --seed 42 --record             # Reproducible game saved under runs/
        """
    )
    parser.add_argument(
        "--config",
        "-c",
        type=str,
        default=None,
        help="Path to YAML configuration file (default: use default config)"
    )
    parser.add_argument(
        "--seed",
        "-s",
        type=int,
        default=None,
        help="Random seed for the scripted agents (overrides the config file)"
    )
    parser.add_argument(
        "--run-name",
        "-r",
        type=str,
        default=None,
        help="Custom name for the recorded run (default: auto-generated timestamp)"
    )
    parser.add_argument(
        "--record",
        action="store_true",
        help="Record game events to the runs directory"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Logging level (default: the config's log_level)"
    )

    args = parser.parse_args()

    config = load_config(args.config)
    if args.seed is not None:
        config = dataclasses.replace(config, random_seed=args.seed)

    logging.basicConfig(
        level=(args.log_level or config.log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.config:
        print(f"Using config: {args.config}")

    game = DemoGame(config=config, run_name=args.run_name, record=args.record)
    game.run_game()

    if game.run_recorder:
        run_path = game.run_recorder.get_run_path()
        if run_path:
            print(f"\nGame events saved to: {run_path}")


if __name__ == "__main__":
    main()
