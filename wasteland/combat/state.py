"""
Combat state module for the combat resolver.

CombatState is the whole of a fight: participants, turn order, round counter,
the side currently acting, the consumables each side carries, and the
append-only event log. It lives for exactly one encounter.
"""

from typing import Any

from pydantic import BaseModel, Field

from character.combatant import Combatant
from core.constants import OutcomeKind, Side
from effects.event_system import EventLog
from items.consumable import ConsumablePool


class CombatState(BaseModel):
    """
    The mutable state of a single combat session.
    """

    participants: list[Combatant] = Field(
        description="Every combatant in the fight, in the order supplied.",
    )
    turn_order: list[int] = Field(
        description="Permutation of participant indices giving the acting order.",
    )
    current_turn_index: int = Field(
        default=0,
        ge=0,
        description="Position in turn_order of the current actor.",
    )
    round: int = Field(
        default=1,
        ge=1,
        description="The current round, starting at 1.",
    )
    acting_side: Side = Field(
        description="The side of the current actor.",
    )
    consumables: dict[Side, ConsumablePool] = Field(
        default_factory=dict,
        description="The consumables each side shares.",
    )
    event_log: EventLog = Field(
        default_factory=EventLog,
        description="Structured record of everything that happened.",
    )
    outcome: OutcomeKind | None = Field(
        default=None,
        description="The terminal outcome, once reached.",
    )

    def model_post_init(self, _: Any) -> None:
        if sorted(self.turn_order) != list(range(len(self.participants))):
            raise ValueError("turn_order must be a permutation of participant indices.")
        if self.participants and self.current_turn_index >= len(self.turn_order):
            raise ValueError("current_turn_index is out of range.")
        ids = [combatant.id for combatant in self.participants]
        if len(set(ids)) != len(ids):
            raise ValueError("Combatant ids must be unique inside a session.")

    # ============================================================================
    # LOOKUPS
    # ============================================================================

    def current_actor(self) -> Combatant:
        """Get the combatant whose turn it is."""
        return self.participants[self.turn_order[self.current_turn_index]]

    def get_combatant(self, combatant_id: str) -> Combatant | None:
        """Get a participant by id, or None if unknown."""
        for combatant in self.participants:
            if combatant.id == combatant_id:
                return combatant
        return None

    def get_side(self, side: Side) -> list[Combatant]:
        """Get every participant fighting on the given side."""
        return [c for c in self.participants if c.side == side]

    def get_alive(self, side: Side | None = None) -> list[Combatant]:
        """Get the living participants, optionally restricted to one side."""
        return [
            c
            for c in self.participants
            if c.is_alive() and (side is None or c.side == side)
        ]

    def side_is_wiped(self, side: Side) -> bool:
        """Check if every combatant of a side has been defeated."""
        return not self.get_alive(side)

    def pool(self, side: Side) -> ConsumablePool:
        """Get the consumable pool of a side (an empty, detached pool if it has none)."""
        return self.consumables.get(side) or ConsumablePool()

    def is_over(self) -> bool:
        """Check if the fight has reached a terminal outcome."""
        return self.outcome is not None
