"""
Event system module for the combat resolver.

Every resolved step of a fight is recorded as a structured, tagged event in an
append-only log. Narration and animation consume these events independently
through listeners; nothing ever parses rendered text back into numbers.
"""

from collections.abc import Callable
from enum import Enum
from typing import Annotated, Literal, TypeAlias

from catchery import log_warning
from pydantic import BaseModel, Field, PrivateAttr

from core.constants import ItemEffectKind, OutcomeKind, Side, TickKind


class EventType(Enum):
    """Enumeration of available event types."""

    ROUND_STARTED = "round_started"  # A new round begins
    TURN_STARTED = "turn_started"  # A combatant becomes the current actor
    ATTACK_RESOLVED = "attack_resolved"  # A basic attack hit its target
    SKILL_USED = "skill_used"  # A skill was resolved
    ITEM_USED = "item_used"  # A consumable was used
    EFFECT_APPLIED = "effect_applied"  # A status effect was attached or merged
    EFFECTS_CLEANSED = "effects_cleansed"  # Negative effects were removed
    EFFECT_TICKED = "effect_ticked"  # An ongoing effect dealt damage or healing
    EFFECT_EXPIRED = "effect_expired"  # A status effect ran out
    FLED = "fled"  # The acting side fled the fight
    COMBAT_ENDED = "combat_ended"  # The session reached a terminal outcome


class CombatEvent(BaseModel):
    """Base class for all combat events."""

    event_type: EventType = Field(
        description="The type of the event.",
    )
    round: int = Field(
        description="The round during which the event happened.",
    )


class RoundStarted(CombatEvent):
    """Event data for the start of a new round."""

    event_type: Literal[EventType.ROUND_STARTED] = EventType.ROUND_STARTED


class TurnStarted(CombatEvent):
    """Event data for a combatant becoming the current actor."""

    event_type: Literal[EventType.TURN_STARTED] = EventType.TURN_STARTED
    actor: str = Field(description="Id of the new current actor.")
    side: Side = Field(description="Side of the new current actor.")


class AttackResolved(CombatEvent):
    """Event data for a basic attack."""

    event_type: Literal[EventType.ATTACK_RESOLVED] = EventType.ATTACK_RESOLVED
    actor: str = Field(description="Id of the attacker.")
    target: str = Field(description="Id of the target.")
    amount: int = Field(description="Health removed from the target.")

    def __str__(self) -> str:
        return f"AttackResolved({self.actor} -> {self.target}, amount={self.amount})"


class SkillUsed(CombatEvent):
    """Event data for a resolved skill."""

    event_type: Literal[EventType.SKILL_USED] = EventType.SKILL_USED
    actor: str = Field(description="Id of the skill user.")
    skill: str = Field(description="Id of the skill.")
    target: str = Field(description="Id of the target.")
    energy_spent: int = Field(description="Energy deducted from the actor.")
    damage: int = Field(default=0, description="Health removed from the target.")
    healing: int = Field(default=0, description="Health restored to the target.")

    def __str__(self) -> str:
        return (
            f"SkillUsed({self.actor} -> {self.target}, skill={self.skill}, "
            f"damage={self.damage}, healing={self.healing})"
        )


class ItemUsed(CombatEvent):
    """Event data for a consumed item."""

    event_type: Literal[EventType.ITEM_USED] = EventType.ITEM_USED
    actor: str = Field(description="Id of the item user.")
    item: str = Field(description="Id of the item.")
    target: str = Field(description="Id of the target.")
    effect: ItemEffectKind = Field(description="The instant effect of the item.")
    amount: int = Field(default=0, description="Health restored by the item.")
    remaining: int = Field(description="Units left in the side's pool.")


class EffectApplied(CombatEvent):
    """Event data for a status effect attached to (or merged into) a combatant."""

    event_type: Literal[EventType.EFFECT_APPLIED] = EventType.EFFECT_APPLIED
    actor: str = Field(description="Id of the combatant applying the effect.")
    target: str = Field(description="Id of the effect bearer.")
    kind: str = Field(description="Kind tag of the effect.")
    duration: int = Field(description="Duration after application.")
    magnitude: int = Field(description="Magnitude after application.")
    merged: bool = Field(
        default=False,
        description="Whether an existing effect of the same kind was stacked or refreshed.",
    )


class EffectsCleansed(CombatEvent):
    """Event data for negative effects removed from a combatant."""

    event_type: Literal[EventType.EFFECTS_CLEANSED] = EventType.EFFECTS_CLEANSED
    actor: str = Field(description="Id of the cleansing combatant.")
    target: str = Field(description="Id of the cleansed combatant.")
    kinds: list[str] = Field(
        default_factory=list,
        description="Kinds of the removed effects.",
    )


class EffectTicked(CombatEvent):
    """Event data for an ongoing effect resolved during a round wrap."""

    event_type: Literal[EventType.EFFECT_TICKED] = EventType.EFFECT_TICKED
    target: str = Field(description="Id of the effect bearer.")
    kind: str = Field(description="Kind tag of the effect.")
    tick: TickKind = Field(description="Whether the tick damaged or healed.")
    amount: int = Field(description="Health actually removed or restored.")


class EffectExpired(CombatEvent):
    """Event data for a status effect that ran out of round-ticks."""

    event_type: Literal[EventType.EFFECT_EXPIRED] = EventType.EFFECT_EXPIRED
    target: str = Field(description="Id of the former effect bearer.")
    kind: str = Field(description="Kind tag of the effect.")


class Fled(CombatEvent):
    """Event data for the acting side fleeing the fight."""

    event_type: Literal[EventType.FLED] = EventType.FLED
    actor: str = Field(description="Id of the combatant that called the retreat.")
    side: Side = Field(description="The side that fled.")


class CombatEnded(CombatEvent):
    """Event data for the end of a combat session."""

    event_type: Literal[EventType.COMBAT_ENDED] = EventType.COMBAT_ENDED
    outcome: OutcomeKind = Field(description="The terminal outcome.")


ValidCombatEvent: TypeAlias = Annotated[
    RoundStarted
    | TurnStarted
    | AttackResolved
    | SkillUsed
    | ItemUsed
    | EffectApplied
    | EffectsCleansed
    | EffectTicked
    | EffectExpired
    | Fled
    | CombatEnded,
    Field(discriminator="event_type"),
]

EventListener: TypeAlias = Callable[[CombatEvent], None]


class EventLog(BaseModel):
    """
    Append-only, ordered log of structured combat events.

    Listeners registered with subscribe() are notified synchronously of every
    appended event, in order. A failing listener is reported and skipped, it
    never interrupts the resolution of an action.
    """

    entries: list[ValidCombatEvent] = Field(
        default_factory=list,
        description="The recorded events, oldest first.",
    )

    _listeners: list[EventListener] = PrivateAttr(default_factory=list)

    def append(self, event: CombatEvent) -> None:
        """
        Record an event and notify the listeners.

        Args:
            event (CombatEvent):
                The event to record.

        """
        self.entries.append(event)  # type: ignore[arg-type]
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception as e:
                log_warning(
                    f"Event listener failed: {e}",
                    {
                        "event": event.event_type.value,
                        "listener": repr(listener),
                        "context": "append",
                    },
                )

    def subscribe(self, listener: EventListener) -> None:
        """Register a listener called for every new event."""
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: EventListener) -> None:
        """Remove a previously registered listener."""
        if listener in self._listeners:
            self._listeners.remove(listener)

    def of_type(self, event_type: EventType) -> list[CombatEvent]:
        """
        Get every recorded event of the given type.

        Args:
            event_type (EventType):
                The type to filter on.

        Returns:
            list[CombatEvent]:
                The matching events, oldest first.

        """
        return [e for e in self.entries if e.event_type == event_type]

    def last(self) -> CombatEvent | None:
        """Get the most recent event, if any."""
        return self.entries[-1] if self.entries else None
