"""
Core system module for the wasteland combat resolver.

This module contains the fundamental components shared by every other
package: constants and enumerations, error types, configuration, content
loading, logging and console utilities.
"""

from .constants import (
    ActionKind,
    ItemEffectKind,
    OutcomeKind,
    Side,
    StackingPolicy,
    StatTarget,
    TickKind,
    is_opponent,
)
from .errors import (
    CombatError,
    DegenerateEncounter,
    EmptyTurnOrder,
    InvalidAction,
    InvalidActorState,
    SessionBusy,
)

__all__ = [
    # Import from constants.py
    "ActionKind",
    "ItemEffectKind",
    "OutcomeKind",
    "Side",
    "StackingPolicy",
    "StatTarget",
    "TickKind",
    "is_opponent",
    # Import from errors.py
    "CombatError",
    "DegenerateEncounter",
    "EmptyTurnOrder",
    "InvalidAction",
    "InvalidActorState",
    "SessionBusy",
]
