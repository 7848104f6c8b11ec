"""
Shared fixtures for the combat resolver tests.
"""

from pathlib import Path

import pytest
from character.combatant import Combatant
from character.skill import Skill
from combat.session import CombatSession
from core.config import CombatConfig
from core.constants import ItemEffectKind, Side
from effects.status_effect import StatusEffectTemplate
from items.consumable import ItemCatalog, ItemDescriptor

DATA_DIR = Path(__file__).resolve().parents[1] / "wasteland" / "data"


@pytest.fixture
def data_dir():
    return DATA_DIR


@pytest.fixture
def config():
    return CombatConfig()


@pytest.fixture
def catalog():
    return ItemCatalog.from_items(
        [
            ItemDescriptor(
                id="stimpak",
                name="Stimpak",
                effect=ItemEffectKind.INSTANT_HEAL,
                amount=30,
                energy_cost=1,
                tags={"restorative"},
            ),
            ItemDescriptor(
                id="rad_away",
                name="Rad-Away",
                effect=ItemEffectKind.CLEANSE,
                tags={"restorative"},
            ),
            ItemDescriptor(
                id="psycho",
                name="Psycho",
                effect=ItemEffectKind.STAT_BUFF,
                buff=StatusEffectTemplate(kind="buff", duration=2, magnitude=5),
                tags={"restorative"},
            ),
            ItemDescriptor(
                id="frag_grenade",
                name="Frag Grenade",
                effect=ItemEffectKind.STAT_BUFF,
                buff=StatusEffectTemplate(kind="debuff", duration=2, magnitude=4),
            ),
        ]
    )


@pytest.fixture
def heal_skill():
    return Skill(
        id="heal",
        name="Heal",
        energy_cost=20,
        healing=30,
        cooldown=2,
        tags={"healing"},
    )


@pytest.fixture
def strike_skill():
    return Skill(
        id="power_strike",
        name="Power Strike",
        energy_cost=10,
        damage=25,
        cooldown=2,
    )


@pytest.fixture
def poison_skill():
    return Skill(
        id="poison_dart",
        name="Poison Dart",
        energy_cost=5,
        damage=5,
        effect=StatusEffectTemplate(kind="poison", duration=3, magnitude=4),
    )


@pytest.fixture
def cure_skill():
    return Skill(
        id="cure",
        name="Cure",
        energy_cost=5,
        cooldown=1,
        cleanses=True,
        tags={"support"},
    )


@pytest.fixture
def ally(heal_skill, strike_skill, poison_skill, cure_skill):
    return Combatant(
        id="ally",
        name="Ranger",
        side=Side.ALLY,
        health=100,
        max_health=100,
        energy=50,
        max_energy=50,
        attack=20,
        defense=5,
        agility=4,
        skills=[heal_skill, strike_skill, poison_skill, cure_skill],
    )


@pytest.fixture
def medic():
    """A wounded ally without skills."""
    return Combatant(
        id="medic",
        name="Medic",
        side=Side.ALLY,
        health=50,
        max_health=100,
        energy=30,
        max_energy=30,
        attack=10,
        defense=2,
        agility=9,
    )


@pytest.fixture
def enemy():
    return Combatant(
        id="raider",
        name="Raider",
        side=Side.ENEMY,
        health=80,
        max_health=80,
        energy=10,
        max_energy=10,
        attack=12,
        defense=4,
        agility=6,
        experience=20,
    )


@pytest.fixture
def ghoul():
    return Combatant(
        id="ghoul",
        name="Ghoul",
        side=Side.ENEMY,
        health=40,
        max_health=40,
        attack=8,
        defense=1,
        agility=10,
        experience=15,
    )


@pytest.fixture
def duel(ally, enemy, config, catalog):
    """One ally against one enemy. Turn order: ally, raider."""
    return CombatSession.initialize(
        [ally, enemy],
        config=config,
        catalog=catalog,
        consumables={Side.ALLY: {"stimpak": 2}},
    )


@pytest.fixture
def skirmish(ally, medic, enemy, ghoul, config, catalog):
    """Two allies against two enemies. Turn order: ally, medic, raider, ghoul."""
    return CombatSession.initialize(
        [ally, medic, enemy, ghoul],
        config=config,
        catalog=catalog,
        consumables={
            Side.ALLY: {"stimpak": 2, "rad_away": 1, "psycho": 1, "frag_grenade": 1},
        },
    )
