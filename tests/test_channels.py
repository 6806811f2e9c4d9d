"""
Tests for chat routing, posting rules and message visibility.
"""

import pytest

from wolfden.core import Channel, GamePhase, InvalidActionError, MessageKind, NotFoundError


def test_active_channel_follows_phase(started_engine):
    assert started_engine.active_channel("wolf1") == Channel.WOLF
    assert started_engine.active_channel("king") == Channel.WOLF
    assert started_engine.active_channel("v1") == Channel.VILLAGE

    started_engine.advance()
    assert started_engine.active_channel("wolf1") == Channel.VILLAGE


def test_active_channel_without_player(started_engine):
    assert started_engine.active_channel() == Channel.VILLAGE


def test_wolves_chat_at_night(started_engine):
    message = started_engine.send_message("Take the seer", Channel.WOLF, sender_id="wolf1")

    assert message.kind == MessageKind.WOLF
    assert message.sender_name == "EvilWolf1"
    assert started_engine.state.messages[Channel.WOLF][-1].content == "Take the seer"


def test_villager_cannot_use_wolf_channel(started_engine):
    with pytest.raises(InvalidActionError):
        started_engine.send_message("Let me in", Channel.WOLF, sender_id="v1")


def test_wolf_channel_closed_during_day(started_engine):
    started_engine.advance()

    with pytest.raises(InvalidActionError):
        started_engine.send_message("Psst", Channel.WOLF, sender_id="wolf1")


def test_village_sleeps_at_night(started_engine):
    with pytest.raises(InvalidActionError):
        started_engine.send_message("Anyone awake?", Channel.VILLAGE, sender_id="v1")


def test_moderator_may_always_post(started_engine):
    message = started_engine.send_message("Quiet please", Channel.VILLAGE, sender_id="mod")

    assert message.kind == MessageKind.MODERATOR


def test_only_current_speaker_talks_by_day(started_engine):
    started_engine.advance()
    assert started_engine.state.speaking_player_id == "wolf1"

    started_engine.send_message("I'm just a villager", sender_id="wolf1")
    with pytest.raises(InvalidActionError):
        started_engine.send_message("Liar!", sender_id="v1")


def test_anyone_living_talks_while_voting(started_engine):
    started_engine.advance()
    started_engine.advance()
    assert started_engine.phase == GamePhase.VOTING

    message = started_engine.send_message("I vote wolf1", sender_id="v1")
    assert message.kind == MessageKind.VILLAGE


def test_dead_players_are_silent(started_engine):
    started_engine.cast_vote("v1", "wolfKill", voter_id="wolf1")
    started_engine.advance()
    started_engine.advance()

    with pytest.raises(InvalidActionError):
        started_engine.send_message("I was framed", sender_id="v1")


def test_empty_message_rejected(started_engine):
    with pytest.raises(InvalidActionError):
        started_engine.send_message("   ", Channel.WOLF, sender_id="wolf1")


def test_unknown_sender(started_engine):
    with pytest.raises(NotFoundError):
        started_engine.send_message("hello", sender_id="ghost")


def test_no_acting_player_drops_message(started_engine):
    assert started_engine.send_message("hello") is None


def test_wolf_chatter_hidden_from_village(started_engine):
    started_engine.send_message("Take the seer", Channel.WOLF, sender_id="wolf1")

    def contents(viewer_id):
        return [m.content for m in started_engine.visible_messages(viewer_id)]

    assert "Take the seer" in contents("wolf2")
    assert "Take the seer" in contents("king")
    assert "Take the seer" in contents("mod")
    assert "Take the seer" not in contents("v1")
    assert "Wolves, choose your victim..." not in contents("seer")


def test_visible_messages_are_time_ordered(started_engine):
    started_engine.send_message("first", Channel.WOLF, sender_id="wolf1")
    started_engine.send_message("second", Channel.VILLAGE, sender_id="mod")

    timestamps = [m.timestamp for m in started_engine.visible_messages("mod")]
    assert timestamps == sorted(timestamps)


def test_can_send_matches_send_rules(started_engine):
    assert started_engine.can_send(Channel.WOLF, sender_id="wolf1")
    assert not started_engine.can_send(Channel.WOLF, sender_id="v1")
    assert not started_engine.can_send(Channel.VILLAGE, sender_id="v1")
    assert started_engine.can_send("village", sender_id="mod")

    started_engine.advance()
    assert started_engine.can_send(sender_id="wolf1")
    assert not started_engine.can_send(sender_id="wolf2")


def test_can_send_without_sender(started_engine):
    assert not started_engine.can_send()
    assert not started_engine.can_send(sender_id="ghost")


def test_can_send_uses_acting_player(started_engine):
    started_engine.set_acting_player("king")

    assert started_engine.can_send(Channel.WOLF)
