"""
Constants and enumerations for the combat resolver.

Defines the sides a combatant can fight on, the kinds of actions that can be
resolved, the possible combat outcomes and the policy enumerations used by
status effect rules and consumable items.
"""

from enum import Enum


class NiceEnum(Enum):
    """An enumeration that provides a nicer string representation."""

    def __str__(self) -> str:
        return self.name

    @property
    def display_name(self) -> str:
        return self.name.lower().capitalize()


class Side(NiceEnum):
    """Defines the side a combatant fights on."""

    ALLY = "ALLY"
    ENEMY = "ENEMY"

    @property
    def emoji(self) -> str:
        """Returns the emoji associated with this side."""
        return {
            Side.ALLY: "🛡️",
            Side.ENEMY: "☢️",
        }.get(self, "❔")

    @property
    def color(self) -> str:
        """Returns the color string associated with this side."""
        return {
            Side.ALLY: "bold blue",
            Side.ENEMY: "bold red",
        }.get(self, "dim white")

    @property
    def colored_name(self) -> str:
        return self.colorize(self.display_name)

    def colorize(self, message: str) -> str:
        """Applies side color formatting to a message."""
        return f"[{self.color}]{message}[/]"

    @property
    def opposite(self) -> "Side":
        """Returns the opposing side."""
        return Side.ENEMY if self == Side.ALLY else Side.ALLY


class ActionKind(NiceEnum):
    """Defines the kind of action a combatant can take on its turn."""

    ATTACK = "ATTACK"
    SKILL = "SKILL"
    ITEM = "ITEM"
    FLEE = "FLEE"

    @property
    def emoji(self) -> str:
        """Returns the emoji associated with this action kind."""
        return {
            ActionKind.ATTACK: "⚔️",
            ActionKind.SKILL: "⚡",
            ActionKind.ITEM: "💉",
            ActionKind.FLEE: "🏃",
        }.get(self, "❔")


class OutcomeKind(NiceEnum):
    """Defines how a combat session ended, seen from the ally side."""

    VICTORY = "VICTORY"
    DEFEAT = "DEFEAT"
    FLED = "FLED"

    @property
    def color(self) -> str:
        """Returns the color string associated with this outcome."""
        return {
            OutcomeKind.VICTORY: "bold green",
            OutcomeKind.DEFEAT: "bold red",
            OutcomeKind.FLED: "bold yellow",
        }.get(self, "dim white")

    @property
    def colored_name(self) -> str:
        return f"[{self.color}]{self.display_name}[/]"


class StackingPolicy(NiceEnum):
    """Defines what happens when an effect kind already present is applied again."""

    STACK = "STACK"
    REFRESH = "REFRESH"


class StatTarget(NiceEnum):
    """Defines which combat stat a status effect modifies."""

    NONE = "NONE"
    ATTACK = "ATTACK"
    DEFENSE = "DEFENSE"


class TickKind(NiceEnum):
    """Defines what a status effect does on every round wrap."""

    NONE = "NONE"
    DAMAGE = "DAMAGE"
    HEAL = "HEAL"


class ItemEffectKind(NiceEnum):
    """Defines the instant effect of a consumable item."""

    INSTANT_HEAL = "INSTANT_HEAL"
    CLEANSE = "CLEANSE"
    STAT_BUFF = "STAT_BUFF"

    @property
    def emoji(self) -> str:
        """Returns the emoji associated with this item effect."""
        return {
            ItemEffectKind.INSTANT_HEAL: "💚",
            ItemEffectKind.CLEANSE: "🧼",
            ItemEffectKind.STAT_BUFF: "💪",
        }.get(self, "❔")


def is_opponent(side1: Side, side2: Side) -> bool:
    """Determines if side2 is an opponent of side1.

    Args:
        side1 (Side): The first side.
        side2 (Side): The second side.

    Returns:
        bool: True if the two sides oppose each other, False otherwise.

    """
    return side1 != side2
