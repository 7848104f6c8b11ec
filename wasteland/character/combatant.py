"""
Combatant module for the combat resolver.

Defines the Combatant model shared by party members and enemies. Health and
energy are always kept inside [0, max]: every change goes through the adjust
helpers, which clamp and report the amount actually applied.
"""

from typing import Any

from pydantic import BaseModel, Field

from core.constants import Side
from core.logging import log_debug
from core.utils import clamp, make_bar
from effects.status_effect import StatusEffect

from .skill import Skill


class LootEntry(BaseModel):
    """One possible drop of a defeated enemy."""

    item: str = Field(
        description="Id of the dropped item.",
    )
    chance: float = Field(
        ge=0.0,
        le=1.0,
        description="Probability of the drop, between 0 and 1.",
    )
    quantity: int = Field(
        default=1,
        ge=1,
        description="Units dropped when the roll succeeds.",
    )


class Combatant(BaseModel):
    """
    A participant of a combat session, ally or enemy.
    """

    id: str = Field(
        description="Unique identifier of the combatant inside a session.",
    )
    name: str = Field(
        description="Display name of the combatant.",
    )
    side: Side = Field(
        description="The side the combatant fights on.",
    )
    level: int = Field(
        default=1,
        ge=1,
        description="Level of the combatant (display only).",
    )
    health: int = Field(
        description="Current health.",
    )
    max_health: int = Field(
        description="Maximum health.",
    )
    energy: int = Field(
        default=0,
        description="Current energy.",
    )
    max_energy: int = Field(
        default=0,
        ge=0,
        description="Maximum energy.",
    )
    attack: int = Field(
        default=0,
        ge=0,
        description="Offensive stat used by basic attacks.",
    )
    defense: int = Field(
        default=0,
        ge=0,
        description="Defensive stat subtracted from incoming basic attacks.",
    )
    agility: int = Field(
        default=0,
        description="Speed stat, only used by initiative-based turn orders.",
    )
    experience: int = Field(
        default=0,
        ge=0,
        description="Experience granted to the winners when this combatant falls.",
    )
    loot: list[LootEntry] = Field(
        default_factory=list,
        description="Drops rolled by the winners when this combatant falls.",
    )
    skills: list[Skill] = Field(
        default_factory=list,
        description="Skills available to the combatant.",
    )
    status_effects: list[StatusEffect] = Field(
        default_factory=list,
        description="Active status effects, in application order.",
    )

    def model_post_init(self, _: Any) -> None:
        if not self.id:
            raise ValueError("Combatant id must be a non-empty string.")
        if self.max_health <= 0:
            raise ValueError(f"Combatant '{self.id}' must have a positive max_health.")
        if len({skill.id for skill in self.skills}) != len(self.skills):
            raise ValueError(f"Combatant '{self.id}' has duplicate skill ids.")
        # Out-of-range values coming from content are clamped, not rejected.
        health = clamp(self.health, 0, self.max_health)
        energy = clamp(self.energy, 0, self.max_energy)
        if health != self.health or energy != self.energy:
            log_debug(
                f"Clamping stats of {self.name}",
                {"health": self.health, "energy": self.energy},
            )
        self.health = health
        self.energy = energy

    # ============================================================================
    # STATE QUERIES
    # ============================================================================

    @property
    def colored_name(self) -> str:
        """Returns the combatant's name colored by side."""
        return self.side.colorize(self.name)

    def is_alive(self) -> bool:
        """Check if the combatant still has health left."""
        return self.health > 0

    def is_defeated(self) -> bool:
        """Check if the combatant has been reduced to zero health."""
        return self.health <= 0

    def get_skill(self, skill_id: str) -> Skill | None:
        """Get one of the combatant's skills by id, or None if unknown."""
        for skill in self.skills:
            if skill.id == skill_id:
                return skill
        return None

    def can_use_skill(self, skill: Skill) -> bool:
        """Check if the skill is off cooldown and affordable right now."""
        return skill.is_ready() and skill.is_affordable(self.energy)

    def get_usable_skills(self) -> list[Skill]:
        """Get every skill the combatant could use this turn."""
        return [skill for skill in self.skills if self.can_use_skill(skill)]

    def get_effects(self, kind: str) -> list[StatusEffect]:
        """Get the active effects of the given kind."""
        return [effect for effect in self.status_effects if effect.kind == kind]

    # ============================================================================
    # STATE CHANGES
    # ============================================================================

    def adjust_health(self, amount: int) -> int:
        """
        Adjusts the combatant's current health by the specified amount.

        Args:
            amount (int):
                The amount to adjust health by (positive or negative).

        Returns:
            int:
                The actual amount adjusted (may be less than requested if at max
                or min).

        """
        new_health = clamp(self.health + amount, 0, self.max_health)
        actual_adjustment = new_health - self.health
        self.health = new_health
        return actual_adjustment

    def adjust_energy(self, amount: int) -> int:
        """
        Adjusts the combatant's current energy by the specified amount.

        Args:
            amount (int):
                The amount to adjust energy by (positive or negative).

        Returns:
            int:
                The actual amount adjusted (may be less than requested if at max
                or min).

        """
        new_energy = clamp(self.energy + amount, 0, self.max_energy)
        actual_adjustment = new_energy - self.energy
        self.energy = new_energy
        return actual_adjustment

    def take_damage(self, amount: int) -> int:
        """Removes health and returns the damage actually taken."""
        return -self.adjust_health(-max(0, amount))

    def heal(self, amount: int) -> int:
        """Restores health and returns the amount actually healed."""
        return self.adjust_health(max(0, amount))

    # ============================================================================
    # DISPLAY
    # ============================================================================

    def get_status_line(self, show_numbers: bool = True, show_bars: bool = True) -> str:
        """
        Builds a one-line status summary for console output.

        Args:
            show_numbers (bool):
                Whether to include the numeric health and energy values.
            show_bars (bool):
                Whether to include health and energy bars.

        Returns:
            str:
                The rich-formatted status line.

        """
        parts = [f"{self.side.emoji} {self.colored_name:<24}"]
        if self.is_defeated():
            parts.append("[dim]defeated[/]")
            return " ".join(parts)
        hp = ""
        if show_bars:
            hp += make_bar(self.health, self.max_health, color="red") + " "
        if show_numbers:
            hp += f"{self.health:>3}/{self.max_health:<3}"
        parts.append(f"HP {hp}")
        if self.max_energy > 0:
            ep = ""
            if show_bars:
                ep += make_bar(self.energy, self.max_energy, color="blue") + " "
            if show_numbers:
                ep += f"{self.energy:>3}/{self.max_energy:<3}"
            parts.append(f"EN {ep}")
        if self.status_effects:
            parts.append(" ".join(f"[magenta]{e}[/]" for e in self.status_effects))
        return " ".join(parts)
