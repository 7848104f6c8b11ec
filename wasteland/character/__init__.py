"""
Character system module for the wasteland combat resolver.

This module defines the combatants taking part in a fight and the skills they
can use on their turn.
"""

from .combatant import Combatant, LootEntry
from .skill import Skill

__all__ = [
    # Import from combatant.py
    "Combatant",
    "LootEntry",
    # Import from skill.py
    "Skill",
]
