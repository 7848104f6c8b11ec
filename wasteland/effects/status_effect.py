"""
Status effect module for the combat resolver.

Defines the template a skill or item carries and the timed status effect that
is attached to a combatant once the template is applied.
"""

from typing import Any

from pydantic import BaseModel, Field


class StatusEffectTemplate(BaseModel):
    """
    Blueprint of a status effect carried by a skill or a consumable item.
    """

    kind: str = Field(
        description="The kind tag of the effect (e.g., poison, buff, stun).",
    )
    duration: int = Field(
        description="The duration of the effect in round-ticks.",
    )
    magnitude: int = Field(
        default=0,
        description="The strength of the effect (damage per tick, stat bonus, ...).",
    )

    def model_post_init(self, _: Any) -> None:
        if not self.kind:
            raise ValueError("Effect kind must be a non-empty string.")
        if self.duration < 1:
            raise ValueError("Duration must be a positive integer for a status effect.")
        if self.magnitude < 0:
            raise ValueError("Magnitude must be a non-negative integer.")

    def instantiate(
        self,
        source_actor: str,
        source_skill: str | None = None,
        source_item: str | None = None,
    ) -> "StatusEffect":
        """
        Create a live status effect from this template.

        Args:
            source_actor (str):
                Id of the combatant applying the effect.
            source_skill (str | None):
                Id of the skill that carried the effect, if any.
            source_item (str | None):
                Id of the item that carried the effect, if any.

        Returns:
            StatusEffect:
                A fresh effect with the full duration.

        """
        return StatusEffect(
            kind=self.kind,
            duration=self.duration,
            magnitude=self.magnitude,
            source_actor=source_actor,
            source_skill=source_skill,
            source_item=source_item,
        )


class StatusEffect(BaseModel):
    """
    A timed modifier attached to a combatant.
    """

    kind: str = Field(
        description="The kind tag of the effect.",
    )
    duration: int = Field(
        description="Remaining duration in round-ticks.",
    )
    magnitude: int = Field(
        default=0,
        description="The strength of the effect.",
    )
    source_actor: str = Field(
        description="Id of the combatant that applied the effect.",
    )
    source_skill: str | None = Field(
        default=None,
        description="Id of the skill that applied the effect, if any.",
    )
    source_item: str | None = Field(
        default=None,
        description="Id of the item that applied the effect, if any.",
    )

    @property
    def display_name(self) -> str:
        return self.kind.lower().capitalize()

    def is_expired(self) -> bool:
        """Check if the effect has run out of round-ticks."""
        return self.duration <= 0

    def __str__(self) -> str:
        return f"{self.display_name}({self.magnitude}, {self.duration}r)"
