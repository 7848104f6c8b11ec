"""
Tests for the structured combat event log.
"""

import pytest
from core.constants import OutcomeKind, Side, TickKind
from effects.event_system import (
    AttackResolved,
    CombatEnded,
    EffectTicked,
    EventLog,
    EventType,
    TurnStarted,
)
from effects.status_effect import StatusEffect, StatusEffectTemplate


def test_listeners_receive_events_in_order(mocker):
    log = EventLog()
    listener = mocker.Mock()
    log.subscribe(listener)

    first = TurnStarted(round=1, actor="ally", side=Side.ALLY)
    second = AttackResolved(round=1, actor="ally", target="raider", amount=5)
    log.append(first)
    log.append(second)

    assert listener.call_args_list == [mocker.call(first), mocker.call(second)]


def test_unsubscribe_stops_notifications(mocker):
    log = EventLog()
    listener = mocker.Mock()
    log.subscribe(listener)
    log.subscribe(listener)
    log.unsubscribe(listener)

    log.append(CombatEnded(round=3, outcome=OutcomeKind.VICTORY))

    listener.assert_not_called()
    assert len(log.entries) == 1


def test_of_type_and_last():
    log = EventLog()
    assert log.last() is None

    log.append(AttackResolved(round=1, actor="a", target="b", amount=2))
    log.append(CombatEnded(round=1, outcome=OutcomeKind.FLED))

    assert len(log.of_type(EventType.ATTACK_RESOLVED)) == 1
    assert log.of_type(EventType.EFFECT_EXPIRED) == []
    assert isinstance(log.last(), CombatEnded)


def test_dumped_log_restores_event_types():
    """
    Test that the tagged union brings every event back as its own type.
    """
    log = EventLog()
    log.append(AttackResolved(round=1, actor="a", target="b", amount=2))
    log.append(
        EffectTicked(round=2, target="b", kind="poison", tick=TickKind.DAMAGE, amount=3)
    )

    restored = EventLog.model_validate(log.model_dump())

    assert isinstance(restored.entries[0], AttackResolved)
    assert isinstance(restored.entries[1], EffectTicked)
    assert restored.entries[1].tick == TickKind.DAMAGE


def test_template_validation():
    with pytest.raises(ValueError):
        StatusEffectTemplate(kind="poison", duration=0, magnitude=1)
    with pytest.raises(ValueError):
        StatusEffectTemplate(kind="", duration=1)


def test_status_effect_display():
    effect = StatusEffectTemplate(kind="poison", duration=3, magnitude=4).instantiate(
        "ally", source_skill="poison_dart"
    )

    assert isinstance(effect, StatusEffect)
    assert effect.source_skill == "poison_dart"
    assert not effect.is_expired()
    assert "Poison" in str(effect)


def test_failing_listener_is_reported_and_skipped(mocker):
    warning = mocker.patch("effects.event_system.log_warning")
    log = EventLog()
    after = mocker.Mock()
    log.subscribe(mocker.Mock(side_effect=RuntimeError("renderer crashed")))
    log.subscribe(after)

    event = CombatEnded(round=1, outcome=OutcomeKind.DEFEAT)
    log.append(event)

    assert log.entries == [event]
    after.assert_called_once_with(event)
    warning.assert_called_once()
