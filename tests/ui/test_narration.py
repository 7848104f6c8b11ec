"""
Tests for the console narration.
"""

import pytest
from core.constants import ItemEffectKind, OutcomeKind, TickKind
from effects.event_system import (
    AttackResolved,
    CombatEnded,
    EffectApplied,
    EffectsCleansed,
    EffectTicked,
    ItemUsed,
    RoundStarted,
    SkillUsed,
)
from ui.narration import Narrator


@pytest.fixture
def narrator(duel):
    return Narrator(duel.state)


def test_render_round_and_attack(narrator):
    assert "Round 2" in narrator.render(RoundStarted(round=2))

    line = narrator.render(
        AttackResolved(round=1, actor="ally", target="raider", amount=16)
    )

    assert "Ranger" in line
    assert "Raider" in line
    assert "16" in line


def test_render_skill_and_item(narrator):
    skill_line = narrator.render(
        SkillUsed(
            round=1,
            actor="ally",
            skill="power_strike",
            target="raider",
            energy_spent=10,
            damage=25,
        )
    )
    item_line = narrator.render(
        ItemUsed(
            round=1,
            actor="ally",
            item="stimpak",
            target="ally",
            effect=ItemEffectKind.INSTANT_HEAL,
            amount=30,
            remaining=1,
        )
    )

    assert "dealing" in skill_line
    assert "restoring" not in skill_line
    assert "restoring" in item_line
    assert "1 left" in item_line


def test_render_effects(narrator):
    applied = narrator.render(
        EffectApplied(
            round=1,
            actor="ally",
            target="raider",
            kind="poison",
            duration=3,
            magnitude=8,
            merged=True,
        )
    )
    ticked = narrator.render(
        EffectTicked(
            round=2, target="raider", kind="poison", tick=TickKind.DAMAGE, amount=8
        )
    )
    cleansed = narrator.render(
        EffectsCleansed(round=2, actor="ally", target="ally", kinds=[])
    )

    assert "intensifies" in applied
    assert "poison damage" in ticked
    assert "nothing to cleanse" in cleansed


def test_unknown_ids_are_rendered_verbatim(narrator):
    line = narrator.render(
        AttackResolved(round=1, actor="ghost", target="raider", amount=1)
    )
    assert "ghost" in line


def test_listener_prints_every_line(narrator, mocker):
    printer = mocker.patch("ui.narration.cprint")

    narrator(CombatEnded(round=4, outcome=OutcomeKind.VICTORY))

    printer.assert_called_once()
    assert "Combat over" in printer.call_args.args[0]


def test_narrator_follows_a_session(duel, mocker):
    printer = mocker.patch("ui.narration.cprint")
    duel.state.event_log.subscribe(Narrator(duel.state))

    duel.flee("ally")

    lines = [call.args[0] for call in printer.call_args_list]
    assert any("retreat" in line for line in lines)
    assert any("Combat over" in line for line in lines)
