"""
Decision functions for computer-controlled sides.

A decision function receives the combat state and returns the action the
current actor takes, as an (action_kind, action_id, target_index) triple that
is fed straight into CombatSession.execute().
"""

from collections.abc import Callable
from typing import TypeAlias

from pydantic import BaseModel, Field

from character.combatant import Combatant
from character.skill import Skill
from core.constants import ActionKind, is_opponent

from combat.state import CombatState
from combat.targeting import TargetValidator

Decision: TypeAlias = tuple[ActionKind, str | None, int | None]
DecisionFunction: TypeAlias = Callable[[CombatState], Decision]

# =============================================================================
# Support Functions
# =============================================================================


class SkillSelection(BaseModel):
    """
    Represents a candidate action along with its target and score.
    """

    action_kind: ActionKind = Field(
        description="The kind of action being considered.",
    )
    skill: Skill | None = Field(
        default=None,
        description="The skill being considered, if any.",
    )
    target_index: int = Field(
        description="Participant index of the selected target.",
    )
    score: float = Field(
        description="Score of the selection (higher is better).",
    )

    def to_decision(self) -> Decision:
        return (
            self.action_kind,
            self.skill.id if self.skill else None,
            self.target_index,
        )


def _hp_ratio(combatant: Combatant, missing: bool = False) -> float:
    """
    Helper function to calculate the health ratio.

    Args:
        combatant (Combatant):
            The combatant whose health ratio to calculate.
        missing (bool):
            If True, returns the missing health ratio instead.

    Returns:
        float:
            The health ratio (0.0 to 1.0), or missing ratio if specified.

    """
    ratio = combatant.health / combatant.max_health
    return 1.0 - ratio if missing else ratio


def _weakest(state: CombatState, indices: list[int]) -> int:
    """Returns the index of the combatant with the lowest health ratio."""
    return min(indices, key=lambda i: _hp_ratio(state.participants[i]))


def _opponent_indices(state: CombatState, actor: Combatant) -> list[int]:
    return [
        index
        for index, combatant in enumerate(state.participants)
        if is_opponent(actor.side, combatant.side) and combatant.is_alive()
    ]


# =============================================================================
# Decision Functions
# =============================================================================


def always_basic_attack(state: CombatState) -> Decision:
    """
    Deterministic strategy: basic attack on the first living opponent.

    Args:
        state (CombatState):
            The current combat state.

    Returns:
        Decision:
            The chosen action, or a flee when nobody can be attacked.

    """
    actor = state.current_actor()
    opponents = _opponent_indices(state, actor)
    if not opponents:
        return (ActionKind.FLEE, None, None)
    return (ActionKind.ATTACK, None, opponents[0])


def priority_strategy(
    validator: TargetValidator,
    heal_threshold: float = 0.5,
) -> DecisionFunction:
    """
    Builds a priority-based strategy.

    The strategy heals the most wounded ally below the threshold when it has a
    usable healing skill, otherwise uses its hardest-hitting usable skill on
    the weakest opponent, and falls back to a basic attack.

    Args:
        validator (TargetValidator):
            The validator used to classify skills and find legal targets.
        heal_threshold (float):
            Health ratio under which an ally is worth healing.

    Returns:
        DecisionFunction:
            The strategy.

    """

    def decide(state: CombatState) -> Decision:
        actor = state.current_actor()
        candidates: list[SkillSelection] = []

        for skill in actor.get_usable_skills():
            targets = validator.legal_targets(state, actor, ActionKind.SKILL, skill.id)
            if not targets:
                continue
            target = _weakest(state, targets)
            if validator.is_healing_skill(skill):
                if not skill.healing:
                    continue
                wounded = _hp_ratio(state.participants[target])
                if wounded >= heal_threshold:
                    continue
                # Healing always outranks damage when someone is in danger.
                score = 100.0 + _hp_ratio(state.participants[target], missing=True)
            else:
                score = float(skill.damage or 0) + (1.0 if skill.effect else 0.0)
                if score <= 0:
                    continue
            candidates.append(
                SkillSelection(
                    action_kind=ActionKind.SKILL,
                    skill=skill,
                    target_index=target,
                    score=score,
                )
            )

        if candidates:
            return max(candidates, key=lambda c: c.score).to_decision()

        opponents = validator.legal_targets(state, actor, ActionKind.ATTACK)
        if not opponents:
            return (ActionKind.FLEE, None, None)
        return (ActionKind.ATTACK, None, _weakest(state, opponents))

    return decide
