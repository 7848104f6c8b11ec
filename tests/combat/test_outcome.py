"""
Tests for outcome evaluation.
"""

from combat.outcome import OutcomeEvaluator
from core.constants import OutcomeKind


def test_fight_goes_on(skirmish):
    assert OutcomeEvaluator().evaluate(skirmish.state) is None


def test_victory_when_enemies_are_down(skirmish, enemy, ghoul):
    enemy.health = 0
    ghoul.health = 0

    assert OutcomeEvaluator().evaluate(skirmish.state) == OutcomeKind.VICTORY


def test_defeat_when_allies_are_down(skirmish, ally, medic):
    ally.health = 0
    medic.health = 0

    assert OutcomeEvaluator().evaluate(skirmish.state) == OutcomeKind.DEFEAT


def test_defeat_takes_precedence_on_mutual_wipe(skirmish):
    for combatant in skirmish.state.participants:
        combatant.health = 0

    assert OutcomeEvaluator().evaluate(skirmish.state) == OutcomeKind.DEFEAT


def test_fled_regardless_of_health(skirmish, enemy, ghoul):
    enemy.health = 1
    ghoul.health = 0

    assert OutcomeEvaluator().evaluate(skirmish.state, fled=True) == OutcomeKind.FLED


def test_recorded_outcome_is_final(skirmish, enemy, ghoul):
    skirmish.state.outcome = OutcomeKind.FLED
    enemy.health = 0
    ghoul.health = 0

    assert OutcomeEvaluator().evaluate(skirmish.state) == OutcomeKind.FLED
