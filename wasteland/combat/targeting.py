"""
Target validation module for the combat resolver.

Decides which participants an action may legally target. Healing-class
actions only reach living members of the acting side, damaging actions only
reach living members of the opposing side. Which skills and items count as
healing is read from the targeting configuration, never from ad-hoc id
comparisons.
"""

from character.combatant import Combatant
from character.skill import Skill
from core.config import CombatConfig
from core.constants import ActionKind
from core.errors import InvalidAction
from items.consumable import ItemCatalog, ItemDescriptor

from combat.state import CombatState


class TargetValidator:
    """
    Computes legal target sets and validates chosen targets.
    """

    def __init__(self, config: CombatConfig, catalog: ItemCatalog) -> None:
        """
        Initialize the validator.

        Args:
            config (CombatConfig):
                The configuration holding the targeting rules.
            catalog (ItemCatalog):
                The catalog describing consumable items.

        """
        self.config = config
        self.catalog = catalog

    # ============================================================================
    # ACTION CLASSIFICATION
    # ============================================================================

    def is_healing_skill(self, skill: Skill) -> bool:
        """
        Check if a skill is a healing-class action.

        A skill heals when it has a positive healing value, when its id is
        listed among the healing skill ids, or when one of its tags is a
        healing tag.

        Args:
            skill (Skill):
                The skill to classify.

        Returns:
            bool:
                True if the skill targets allies, False if it targets opponents.

        """
        rules = self.config.targeting
        if skill.healing is not None and skill.healing > 0:
            return True
        if skill.id in rules.healing_skill_ids:
            return True
        return bool(skill.tags & rules.healing_tags)

    def is_healing_item(self, item: ItemDescriptor) -> bool:
        """Check if a consumable is tagged as restorative."""
        return bool(item.tags & self.config.targeting.restorative_item_tags)

    def targets_allies(
        self,
        actor: Combatant,
        action_kind: ActionKind,
        action_id: str | None,
    ) -> bool:
        """
        Check if an action is aimed at the acting side.

        Args:
            actor (Combatant):
                The acting combatant.
            action_kind (ActionKind):
                The kind of action.
            action_id (str | None):
                The skill or item id, when the action needs one.

        Returns:
            bool:
                True for healing-class actions, False for damaging ones.

        Raises:
            InvalidAction:
                If the action id is missing or unknown, or the action kind
                does not take a target.

        """
        if action_kind == ActionKind.ATTACK:
            return False
        if action_kind == ActionKind.SKILL:
            skill = actor.get_skill(action_id) if action_id else None
            if skill is None:
                raise InvalidAction(
                    "Unknown skill",
                    {"actor": actor.id, "skill": action_id},
                )
            return self.is_healing_skill(skill)
        if action_kind == ActionKind.ITEM:
            item = self.catalog.get(action_id) if action_id else None
            if item is None:
                raise InvalidAction(
                    "Unknown item",
                    {"actor": actor.id, "item": action_id},
                )
            return self.is_healing_item(item)
        raise InvalidAction(
            f"{action_kind} does not take a target",
            {"actor": actor.id},
        )

    # ============================================================================
    # TARGET SETS
    # ============================================================================

    def legal_targets(
        self,
        state: CombatState,
        actor: Combatant,
        action_kind: ActionKind,
        action_id: str | None = None,
    ) -> list[int]:
        """
        Get the participant indices an action may target.

        Args:
            state (CombatState):
                The current combat state.
            actor (Combatant):
                The acting combatant.
            action_kind (ActionKind):
                The kind of action.
            action_id (str | None):
                The skill or item id, when the action needs one.

        Returns:
            list[int]:
                Indices into state.participants of every living legal target.

        Raises:
            InvalidAction:
                If the action cannot be classified.

        """
        wanted = (
            actor.side
            if self.targets_allies(actor, action_kind, action_id)
            else actor.side.opposite
        )
        return [
            index
            for index, combatant in enumerate(state.participants)
            if combatant.side == wanted and combatant.is_alive()
        ]

    def validate_target(
        self,
        state: CombatState,
        actor: Combatant,
        action_kind: ActionKind,
        action_id: str | None,
        target_index: int | None,
    ) -> Combatant:
        """
        Validate the chosen target of an action.

        Args:
            state (CombatState):
                The current combat state.
            actor (Combatant):
                The acting combatant.
            action_kind (ActionKind):
                The kind of action.
            action_id (str | None):
                The skill or item id, when the action needs one.
            target_index (int | None):
                The chosen participant index.

        Returns:
            Combatant:
                The validated target.

        Raises:
            InvalidAction:
                If there is no legal target at all, or the chosen one is not
                legal.

        """
        legal = self.legal_targets(state, actor, action_kind, action_id)
        if not legal:
            raise InvalidAction(
                "No legal target for the chosen action",
                {"actor": actor.id, "action": action_kind, "id": action_id},
            )
        if target_index is None or target_index not in legal:
            raise InvalidAction(
                "Illegal target for the chosen action",
                {
                    "actor": actor.id,
                    "action": action_kind,
                    "id": action_id,
                    "target_index": target_index,
                },
            )
        return state.participants[target_index]
