"""
Tests for the encounter owner driving the demo.
"""

import random

from character.combatant import LootEntry
from combat.session import CombatSession
from core.constants import ActionKind, OutcomeKind
from main import Encounter, make_names_unique


def _start(encounter, participants, config, catalog):
    return CombatSession.initialize(
        participants,
        config=config,
        catalog=catalog,
        on_terminated=encounter.on_terminated,
    )


def test_victory_awards_experience(ally, enemy, config, catalog):
    encounter = Encounter([ally], [enemy])
    session = _start(encounter, [ally, enemy], config, catalog)
    enemy.health = 10

    session.execute("ally", ActionKind.ATTACK, target_index=1)

    assert encounter.outcome == OutcomeKind.VICTORY
    assert encounter.experience_awarded == 20


def test_victory_counts_every_enemy(ally, medic, enemy, ghoul, config, catalog):
    encounter = Encounter([ally, medic], [enemy, ghoul])
    session = _start(encounter, [ally, medic, enemy, ghoul], config, catalog)
    ghoul.health = 0
    enemy.health = 10

    session.execute("ally", ActionKind.ATTACK, target_index=2)

    assert encounter.experience_awarded == 35


def test_flight_awards_nothing(ally, enemy, config, catalog):
    encounter = Encounter([ally], [enemy])
    session = _start(encounter, [ally, enemy], config, catalog)

    session.flee("ally")

    assert encounter.outcome == OutcomeKind.FLED
    assert encounter.experience_awarded == 0


def test_victory_rolls_every_loot_entry(ally, medic, enemy, ghoul, config, catalog):
    enemy.loot = [
        LootEntry(item="scrap_metal", chance=1.0, quantity=2),
        LootEntry(item="power_armor", chance=0.0),
    ]
    ghoul.loot = [
        LootEntry(item="scrap_metal", chance=1.0),
        LootEntry(item="stimpak", chance=0.5),
    ]
    encounter = Encounter([ally, medic], [enemy, ghoul], rng=random.Random(7))
    session = _start(encounter, [ally, medic, enemy, ghoul], config, catalog)
    ghoul.health = 0
    enemy.health = 10

    session.execute("ally", ActionKind.ATTACK, target_index=2)

    # One roll per entry, enemies in participant order.
    stimpak_roll = [random.Random(7).random() for _ in range(4)][3]
    expected = {"scrap_metal": 3}
    if stimpak_roll < 0.5:
        expected["stimpak"] = 1
    assert dict(encounter.loot) == expected


def test_no_loot_without_victory(ally, enemy, config, catalog, mocker):
    enemy.loot = [LootEntry(item="scrap_metal", chance=1.0)]
    rng = mocker.Mock()
    encounter = Encounter([ally], [enemy], rng=rng)
    session = _start(encounter, [ally, enemy], config, catalog)

    session.flee("ally")

    assert not encounter.loot
    rng.random.assert_not_called()


def test_report_prints_the_outcome(ally, enemy, mocker):
    printer = mocker.patch("main.cprint")
    mocker.patch("main.crule")
    encounter = Encounter([ally], [enemy])
    encounter.outcome = OutcomeKind.DEFEAT

    encounter.report()

    assert any("Outcome" in call.args[0] for call in printer.call_args_list)


def test_make_names_unique(enemy, ghoul):
    twin = enemy.model_copy(update={"id": "raider_2"})

    make_names_unique([enemy, twin, ghoul])

    assert [c.name for c in (enemy, twin, ghoul)] == [
        "Raider (1)",
        "Raider (2)",
        "Ghoul",
    ]
