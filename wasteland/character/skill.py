"""
Skill module for the combat resolver.

Defines the skills combatants can use on their turn, with their energy cost,
damage or healing value, cooldown and optional status effect.
"""

from typing import Any

from pydantic import BaseModel, Field

from effects.status_effect import StatusEffectTemplate


class Skill(BaseModel):
    """A special ability gated by energy and a cooldown measured in rounds."""

    id: str = Field(
        description="Unique identifier of the skill.",
    )
    name: str = Field(
        description="Name of the skill.",
    )
    description: str = Field(
        default="No description.",
        description="Description of the skill.",
    )
    energy_cost: int = Field(
        default=0,
        ge=0,
        description="Energy deducted from the user on every use.",
    )
    damage: int | None = Field(
        default=None,
        ge=0,
        description="Health removed from an opposing target, if any.",
    )
    healing: int | None = Field(
        default=None,
        ge=0,
        description="Health restored to an allied target, if any.",
    )
    range: int = Field(
        default=1,
        ge=0,
        description="Reach of the skill in tiles (content data only).",
    )
    cooldown: int = Field(
        default=0,
        ge=0,
        description="Rounds to wait after a use before the skill is ready again.",
    )
    current_cooldown: int = Field(
        default=0,
        ge=0,
        description="Rounds remaining before the skill is ready again.",
    )
    effect: StatusEffectTemplate | None = Field(
        default=None,
        description="Status effect attached to the target on use, if any.",
    )
    cleanses: bool = Field(
        default=False,
        description="Whether the skill removes negative effects from its target.",
    )
    tags: set[str] = Field(
        default_factory=set,
        description="Free-form tags consumed by the targeting configuration.",
    )

    def model_post_init(self, _: Any) -> None:
        if not self.id:
            raise ValueError("Skill id must be a non-empty string.")
        if self.current_cooldown > self.cooldown:
            raise ValueError(
                f"Skill '{self.id}' current cooldown ({self.current_cooldown}) "
                f"exceeds its cooldown ({self.cooldown})."
            )

    def is_ready(self) -> bool:
        """Check if the cooldown has elapsed."""
        return self.current_cooldown <= 0

    def is_affordable(self, energy: int) -> bool:
        """Check if the given amount of energy pays for the skill."""
        return energy >= self.energy_cost

    def start_cooldown(self) -> None:
        """Set the current cooldown to its defined value."""
        self.current_cooldown = self.cooldown

    def tick_cooldown(self) -> None:
        """Decrease the current cooldown by one round, never below zero."""
        if self.current_cooldown > 0:
            self.current_cooldown -= 1
