"""
Tests for scripted agents.
"""

from wolfden.agents import ScriptedAgent
from wolfden.core import ActionType, GamePhase


def agent_for(engine, player_id, config, seat=0):
    return ScriptedAgent(engine.state.get_player(player_id), config, seat)


def test_context_reflects_role(started_engine, game_config):
    wolf = agent_for(started_engine, "wolf1", game_config)
    context = wolf.build_context(started_engine)

    assert context.current_phase == GamePhase.NIGHT
    assert context.available_actions == [ActionType.WOLF_KILL]
    assert set(context.private_info["pack"]) == {"wolf1", "wolf2", "king"}


def test_context_is_a_copy(started_engine, game_config):
    context = agent_for(started_engine, "v1", game_config).build_context(started_engine)
    context.game_state.players[4].eliminate()

    assert started_engine.state.get_player("v1").is_alive


def test_wolves_attack_a_non_wolf(started_engine, game_config):
    wolf = agent_for(started_engine, "wolf1", game_config)
    choices = wolf.get_night_actions(wolf.build_context(started_engine))

    assert len(choices) == 1
    action_type, target_id = choices[0]
    assert action_type == ActionType.WOLF_KILL
    assert not started_engine.state.get_player(target_id).is_wolf_aligned
    assert not started_engine.state.get_player(target_id).is_moderator


def test_pack_agrees_on_target(started_engine, game_config):
    started_engine.cast_vote("v2", ActionType.WOLF_KILL, voter_id="wolf1")
    second = agent_for(started_engine, "wolf2", game_config, seat=2)

    assert second.get_night_actions(second.build_context(started_engine)) == [(ActionType.WOLF_KILL, "v2")]


def test_wolf_king_aims_final_shot(started_engine, game_config):
    king = agent_for(started_engine, "king", game_config, seat=3)
    action_types = [a for a, _ in king.get_night_actions(king.build_context(started_engine))]

    assert action_types == [ActionType.WOLF_KILL, ActionType.WOLF_KING_KILL]


def test_witch_saves_the_victim(started_engine, game_config):
    started_engine.cast_vote("v3", ActionType.WOLF_KILL, voter_id="wolf1")
    witch = agent_for(started_engine, "witch", game_config, seat=8)
    choices = witch.get_night_actions(witch.build_context(started_engine))

    # No poison on the first night
    assert choices == [(ActionType.WITCH_SAVE, "v3")]


def test_guard_avoids_last_target(started_engine, game_config):
    started_engine.cast_vote("v1", ActionType.GUARD_PROTECT, voter_id="guard")
    started_engine.advance()
    started_engine.advance()
    started_engine.advance()

    guard = agent_for(started_engine, "guard", game_config, seat=10)
    for _ in range(20):
        choices = guard.get_night_actions(guard.build_context(started_engine))
        assert choices[0][0] == ActionType.GUARD_PROTECT
        assert choices[0][1] != "v1"


def test_seer_checks_new_players(started_engine, game_config):
    seer = agent_for(started_engine, "seer", game_config, seat=7)
    seen = set()
    for _ in range(5):
        ((action_type, target_id),) = seer.get_night_actions(seer.build_context(started_engine))
        assert action_type == ActionType.SEER_REVEAL
        assert target_id not in seen
        seen.add(target_id)


def test_seer_claim_drives_votes(started_engine, game_config):
    started_engine.cast_vote("wolf2", ActionType.SEER_REVEAL, voter_id="seer")
    started_engine.advance()
    seer = agent_for(started_engine, "seer", game_config, seat=7)

    speech = seer.get_day_speech(seer.build_context(started_engine))
    assert speech == "I am the seer. SneakyWolf2 is a werewolf!"

    # Let the seer speak in turn
    while started_engine.state.speaking_player_id != "seer":
        started_engine.next_speaker()
    started_engine.send_message(speech, sender_id="seer")
    started_engine.advance()

    villager = agent_for(started_engine, "v1", game_config, seat=4)
    assert villager.get_vote_choice(villager.build_context(started_engine)) == "wolf2"
    assert seer.get_vote_choice(seer.build_context(started_engine)) == "wolf2"


def test_wolves_never_vote_for_wolves(started_engine, game_config):
    started_engine.advance()
    started_engine.advance()
    wolf = agent_for(started_engine, "wolf1", game_config)

    for _ in range(20):
        target_id = wolf.get_vote_choice(wolf.build_context(started_engine))
        assert not started_engine.state.get_player(target_id).is_wolf_aligned
