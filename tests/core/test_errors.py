"""
Tests for the error hierarchy.
"""

from core.errors import (
    CombatError,
    DegenerateEncounter,
    EmptyTurnOrder,
    InvalidAction,
    InvalidActorState,
    SessionBusy,
)


def test_hierarchy():
    for error in [InvalidAction, InvalidActorState, DegenerateEncounter, SessionBusy]:
        assert issubclass(error, CombatError)
    assert issubclass(EmptyTurnOrder, DegenerateEncounter)


def test_message_includes_context():
    error = InvalidAction("Not enough energy", {"actor": "ally", "cost": 20})

    assert error.message == "Not enough energy"
    assert error.context == {"actor": "ally", "cost": 20}
    assert str(error) == "Not enough energy [actor=ally cost=20]"


def test_message_without_context():
    assert str(SessionBusy("Busy")) == "Busy"
