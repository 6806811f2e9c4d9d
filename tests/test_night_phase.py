"""
Tests for night resolution.
"""

from wolfden.core import NightActions, Player, Role
from wolfden.phases import resolve_death_chain, resolve_night

from conftest import alive_ids


def narration_texts(result):
    return [n.text for n in result.narration]


def test_wolf_kill_eliminates_victim(roster):
    """An unprotected wolf victim dies."""
    result = resolve_night(roster, NightActions(wolf_kill="v1"))

    assert "v1" not in alive_ids(result.players)
    assert result.deaths == ["v1"]
    assert "TrustyVillager1 was killed in the night by the werewolves!" in narration_texts(result)


def test_input_roster_is_not_modified(roster):
    resolve_night(roster, NightActions(wolf_kill="v1", witch_kill="v2"))

    assert all(p.is_alive for p in roster)


def test_guard_protection_blocks_wolf_kill(roster):
    result = resolve_night(roster, NightActions(wolf_kill="v1", guard_target="v1"))

    assert "v1" in alive_ids(result.players)
    assert result.deaths == []
    assert narration_texts(result) == [
        "The wolves struck in the night, but a vigilant guard turned them away!"
    ]


def test_witch_save_blocks_wolf_kill(roster):
    result = resolve_night(roster, NightActions(wolf_kill="v1", witch_save="v1"))

    assert "v1" in alive_ids(result.players)
    assert narration_texts(result) == [
        "A villager was attacked in the night, but someone mysterious saved them!"
    ]


def test_guard_outranks_witch_save(roster):
    """When both protect the victim, only the guard is credited."""
    result = resolve_night(roster, NightActions(wolf_kill="v1", guard_target="v1", witch_save="v1"))

    assert "v1" in alive_ids(result.players)
    texts = narration_texts(result)
    assert "The wolves struck in the night, but a vigilant guard turned them away!" in texts
    assert not any("someone mysterious" in t for t in texts)


def test_save_on_other_player_does_not_help(roster):
    result = resolve_night(roster, NightActions(wolf_kill="v1", guard_target="v2", witch_save="v3"))

    assert "v1" not in alive_ids(result.players)


def test_poison_ignores_guard(roster):
    """The witch's poison cannot be blocked."""
    result = resolve_night(roster, NightActions(witch_kill="v2", guard_target="v2"))

    assert "v2" not in alive_ids(result.players)
    assert "HonestVillager2 was found dead, poisoned by an unknown assailant!" in narration_texts(result)


def test_wolf_kill_and_poison_same_night(roster):
    result = resolve_night(roster, NightActions(wolf_kill="v1", witch_kill="v2"))

    assert result.deaths == ["v1", "v2"]


def test_hunter_fires_when_killed(roster):
    result = resolve_night(roster, NightActions(wolf_kill="hunter", hunter_target="wolf1"))

    assert result.deaths == ["hunter", "wolf1"]
    assert "With their last breath, the Hunter shoots EvilWolf1!" in narration_texts(result)


def test_hunter_fires_when_poisoned(roster):
    result = resolve_night(roster, NightActions(witch_kill="hunter", hunter_target="wolf2"))

    assert result.deaths == ["hunter", "wolf2"]


def test_saved_hunter_does_not_fire(roster):
    result = resolve_night(roster, NightActions(wolf_kill="hunter", witch_save="hunter", hunter_target="wolf1"))

    assert result.deaths == []
    assert "wolf1" in alive_ids(result.players)


def test_death_chain_follows_each_trigger(roster):
    """Hunter shoots the wolf king, who drags a villager down."""
    actions = NightActions(wolf_kill="hunter", hunter_target="king", wolf_king_target="v2")
    result = resolve_night(roster, actions)

    assert result.deaths == ["hunter", "king", "v2"]
    assert narration_texts(result)[-1] == "The Wolf King drags HonestVillager2 down with them!"


def test_mutual_shots_terminate(roster):
    """Hunter and wolf king aimed at each other: each dies once, then the chain stops."""
    actions = NightActions(wolf_kill="hunter", hunter_target="king", wolf_king_target="hunter")
    result = resolve_night(roster, actions)

    assert result.deaths == ["hunter", "king"]


def test_hunter_shot_at_dead_player_is_skipped(roster):
    actions = NightActions(wolf_kill="v1", witch_kill="hunter", hunter_target="v1")
    result = resolve_night(roster, actions)

    assert result.deaths == ["v1", "hunter"]
    assert not any("Hunter shoots" in t for t in narration_texts(result))


def test_hunter_cannot_shoot_self(roster):
    result = resolve_night(roster, NightActions(wolf_kill="hunter", hunter_target="hunter"))

    assert result.deaths == ["hunter"]


def test_resolve_death_chain_is_pure(roster):
    roster[9].eliminate()  # hunter
    result = resolve_death_chain(roster, ["hunter"], NightActions(hunter_target="v3"))

    assert result.deaths == ["v3"]
    assert next(p for p in roster if p.id == "v3").is_alive


def test_seer_learns_wolf_alignment(roster):
    result = resolve_night(roster, NightActions(seer_reveal="king"), night=2)

    finding = result.seer_finding
    assert finding.target_id == "king"
    assert finding.is_wolf_aligned is True
    assert finding.seer_id == "seer"
    assert finding.night == 2

    private = [n for n in result.narration if n.recipient_id == "seer"]
    assert [n.text for n in private] == ["The spirits whisper to the seer: WolfKing is a werewolf."]


def test_seer_learns_villager_alignment(roster):
    result = resolve_night(roster, NightActions(seer_reveal="v1"))

    assert result.seer_finding.is_wolf_aligned is False
    assert result.narration[-1].text == "The spirits whisper to the seer: TrustyVillager1 is not a werewolf."


def test_quiet_night(roster):
    result = resolve_night(roster, NightActions())

    assert result.deaths == []
    assert result.narration == []
    assert result.seer_finding is None
    assert result.winner is None


def test_night_can_decide_the_game():
    """Killing the last special role hands the game to the wolves."""
    players = [
        Player(name="Wolf", role=Role.WOLF, id="w"),
        Player(name="Villager", role=Role.VILLAGER, id="v"),
        Player(name="Seer", role=Role.SEER, id="s"),
    ]
    result = resolve_night(players, NightActions(wolf_kill="s"))

    assert result.winner == Role.WOLF


def test_seer_killed_tonight_hears_nothing(roster):
    result = resolve_night(roster, NightActions(wolf_kill="seer", seer_reveal="wolf1"))

    assert result.seer_finding.is_wolf_aligned is True
    assert all(n.recipient_id is None for n in result.narration)
