"""
Effects system module for the wasteland combat resolver.

This module contains the timed status effects attached to combatants and the
structured event stream recording everything that happens during a fight.
"""

# Import status effects
from .status_effect import StatusEffect, StatusEffectTemplate

# Import the event stream
from .event_system import CombatEvent, EventLog, EventType

__all__ = [
    # Import from status_effect.py
    "StatusEffect",
    "StatusEffectTemplate",
    # Import from event_system.py
    "CombatEvent",
    "EventLog",
    "EventType",
]
