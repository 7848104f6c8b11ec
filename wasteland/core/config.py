"""
Configuration module for the combat resolver.

Holds the tunable rules of the engine as data: the minimum damage of an
attack, per-round energy regeneration, which tags mark an action as healing,
and how every status effect kind stacks, ticks and modifies stats. New content
only needs new configuration entries, never code changes.
"""

import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from core.constants import StackingPolicy, StatTarget, TickKind


class EffectRule(BaseModel):
    """
    Describes how a status effect kind behaves once attached to a combatant.
    """

    stacking: StackingPolicy = Field(
        default=StackingPolicy.REFRESH,
        description="What happens when the same kind is applied again.",
    )
    stat: StatTarget = Field(
        default=StatTarget.NONE,
        description="The combat stat modified by the effect magnitude.",
    )
    stat_sign: int = Field(
        default=1,
        description="Multiplier applied to the magnitude (+1 or -1).",
    )
    tick: TickKind = Field(
        default=TickKind.NONE,
        description="What the effect does to its bearer on every round wrap.",
    )
    negative: bool = Field(
        default=False,
        description="Whether the effect is removed by cleansing actions.",
    )

    def model_post_init(self, _: Any) -> None:
        if self.stat_sign not in (-1, 1):
            raise ValueError("stat_sign must be either +1 or -1.")


class TargetingRules(BaseModel):
    """
    Tag sets used by the target validator to tell healing actions from
    damaging ones.
    """

    healing_tags: set[str] = Field(
        default_factory=lambda: {"healing", "support"},
        description="Skill tags marking a skill as a healing-class action.",
    )
    healing_skill_ids: set[str] = Field(
        default_factory=set,
        description="Skill ids always treated as healing-class actions.",
    )
    restorative_item_tags: set[str] = Field(
        default_factory=lambda: {"restorative"},
        description="Item tags marking a consumable as a healing-class action.",
    )


def _default_effect_rules() -> dict[str, EffectRule]:
    return {
        "poison": EffectRule(
            stacking=StackingPolicy.STACK, tick=TickKind.DAMAGE, negative=True
        ),
        "burn": EffectRule(tick=TickKind.DAMAGE, negative=True),
        "freeze": EffectRule(stat=StatTarget.DEFENSE, stat_sign=-1, negative=True),
        "stun": EffectRule(negative=True),
        "debuff": EffectRule(stat=StatTarget.ATTACK, stat_sign=-1, negative=True),
        "buff": EffectRule(stacking=StackingPolicy.STACK, stat=StatTarget.ATTACK),
        "guard": EffectRule(stat=StatTarget.DEFENSE),
        "regen": EffectRule(tick=TickKind.HEAL),
    }


class CombatConfig(BaseModel):
    """
    The complete set of tunable combat rules.
    """

    minimum_damage: int = Field(
        default=1,
        ge=0,
        description="Lower bound of the damage dealt by a basic attack.",
    )
    energy_regen_per_round: int = Field(
        default=0,
        ge=0,
        description="Energy restored to every living combatant on round wrap.",
    )
    targeting: TargetingRules = Field(
        default_factory=TargetingRules,
        description="Tag sets distinguishing healing from damaging actions.",
    )
    effect_rules: dict[str, EffectRule] = Field(
        default_factory=_default_effect_rules,
        description="Behaviour of every known status effect kind.",
    )
    default_effect_rule: EffectRule = Field(
        default_factory=EffectRule,
        description="Behaviour of effect kinds missing from effect_rules.",
    )

    def rule_for(self, kind: str) -> EffectRule:
        """
        Get the rule governing a status effect kind.

        Args:
            kind (str):
                The effect kind tag.

        Returns:
            EffectRule:
                The configured rule, or the default rule for unknown kinds.

        """
        return self.effect_rules.get(kind, self.default_effect_rule)

    @classmethod
    def load(cls, filepath: Path) -> "CombatConfig":
        """
        Load a configuration from a JSON file.

        Args:
            filepath (Path):
                Path of the JSON file.

        Returns:
            CombatConfig:
                The validated configuration.

        Raises:
            ValueError:
                If the file is missing or does not contain a JSON object.

        """
        if not filepath.is_file():
            raise ValueError(f"Configuration file not found: {filepath}")
        with open(filepath, encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(
                f"Expected object in {filepath}, got {type(data).__name__}"
            )
        return cls(**data)
