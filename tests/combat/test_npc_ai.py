"""
Tests for the decision functions of computer-controlled sides.
"""

import pytest
from combat.npc_ai import always_basic_attack, priority_strategy
from combat.targeting import TargetValidator
from core.constants import ActionKind


@pytest.fixture
def strategy(config, catalog):
    return priority_strategy(TargetValidator(config, catalog))


def test_always_basic_attack_picks_first_living_opponent(skirmish, enemy):
    assert always_basic_attack(skirmish.state) == (ActionKind.ATTACK, None, 2)

    enemy.health = 0
    assert always_basic_attack(skirmish.state) == (ActionKind.ATTACK, None, 3)


def test_priority_strategy_heals_wounded_ally(skirmish, strategy, medic):
    medic.health = 30

    assert strategy(skirmish.state) == (ActionKind.SKILL, "heal", 1)


def test_priority_strategy_prefers_strongest_skill(skirmish, strategy, ghoul):
    ghoul.health = 10

    assert strategy(skirmish.state) == (ActionKind.SKILL, "power_strike", 3)


def test_priority_strategy_falls_back_to_attack(skirmish, strategy, ally, ghoul):
    ally.energy = 0
    ghoul.health = 10

    assert strategy(skirmish.state) == (ActionKind.ATTACK, None, 3)


def test_priority_strategy_skips_skills_on_cooldown(skirmish, strategy, ally):
    ally.get_skill("power_strike").current_cooldown = 1

    assert strategy(skirmish.state) == (ActionKind.SKILL, "poison_dart", 2)


def test_decisions_are_accepted_by_the_session(skirmish, strategy, medic):
    medic.health = 30

    result = skirmish.execute("ally", *strategy(skirmish.state))

    assert result.action_id == "heal"
    assert medic.health == 60
