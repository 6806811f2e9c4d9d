"""
Tests for the day speaking order.
"""

from wolfden.phases import first_speaker, get_speaking_order, next_speaker


def test_speaking_order_skips_moderator_and_dead(roster):
    roster[4].eliminate()  # v1
    order = get_speaking_order(roster)

    assert "mod" not in order
    assert "v1" not in order
    assert order[0] == "wolf1"
    assert len(order) == 9


def test_first_speaker(roster):
    assert first_speaker(roster) == "wolf1"


def test_next_speaker_advances_in_roster_order(roster):
    assert next_speaker(roster, "wolf1") == "wolf2"
    assert next_speaker(roster, "hunter") == "guard"


def test_next_speaker_wraps(roster):
    assert next_speaker(roster, "guard") == "wolf1"


def test_next_speaker_restarts_when_current_is_gone(roster):
    roster[4].eliminate()  # v1
    assert next_speaker(roster, "v1") == "wolf1"
    assert next_speaker(roster, None) == "wolf1"


def test_no_speakers_left(roster):
    for player in roster:
        player.eliminate()

    assert first_speaker(roster) is None
    assert next_speaker(roster, "wolf1") is None
