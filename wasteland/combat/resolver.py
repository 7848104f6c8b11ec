"""
Action resolver module for the combat resolver.

Resolves the action chosen by the current actor: basic attacks, skills,
consumable items and flee. Every check runs before the first mutation, so a
rejected action leaves the combat state exactly as it was.
"""

from catchery import log_warning
from pydantic import BaseModel, Field

from character.combatant import Combatant
from character.skill import Skill
from core.config import CombatConfig
from core.constants import ActionKind, ItemEffectKind
from core.errors import CombatError, InvalidAction, InvalidActorState
from core.logging import log_debug
from effects.effect_tracker import StatusEffectTracker
from effects.event_system import (
    AttackResolved,
    Fled,
    ItemUsed,
    SkillUsed,
    ValidCombatEvent,
)
from items.consumable import ItemCatalog, ItemDescriptor

from combat.damage import compute_attack_damage
from combat.state import CombatState
from combat.targeting import TargetValidator


class ActionResult(BaseModel):
    """
    Summary of a successfully resolved action.
    """

    actor: str = Field(
        description="Id of the acting combatant.",
    )
    action_kind: ActionKind = Field(
        description="The kind of the resolved action.",
    )
    action_id: str | None = Field(
        default=None,
        description="The skill or item id, when the action used one.",
    )
    target: str | None = Field(
        default=None,
        description="Id of the target, when the action had one.",
    )
    amount: int = Field(
        default=0,
        description="Health removed or restored by the action.",
    )
    fled: bool = Field(
        default=False,
        description="Whether the acting side fled.",
    )
    events: list[ValidCombatEvent] = Field(
        default_factory=list,
        description="The events appended while resolving the action.",
    )


class ActionResolver:
    """
    Validates and executes combat actions against a CombatState.
    """

    def __init__(
        self,
        config: CombatConfig,
        catalog: ItemCatalog,
        tracker: StatusEffectTracker | None = None,
        validator: TargetValidator | None = None,
    ) -> None:
        """
        Initialize the resolver.

        Args:
            config (CombatConfig):
                The combat rules.
            catalog (ItemCatalog):
                The consumable item catalog.
            tracker (StatusEffectTracker | None):
                The status effect tracker, built from the config if omitted.
            validator (TargetValidator | None):
                The target validator, built from the config if omitted.

        """
        self.config = config
        self.catalog = catalog
        self.tracker = tracker or StatusEffectTracker(config)
        self.validator = validator or TargetValidator(config, catalog)

    def execute(
        self,
        state: CombatState,
        actor_id: str,
        action_kind: ActionKind,
        action_id: str | None = None,
        target_index: int | None = None,
    ) -> ActionResult:
        """
        Resolve an action of the current actor.

        Args:
            state (CombatState):
                The combat state to mutate.
            actor_id (str):
                Id of the acting combatant.
            action_kind (ActionKind):
                The kind of action.
            action_id (str | None):
                The skill or item id (ignored for attacks and flee).
            target_index (int | None):
                The chosen participant index (ignored for flee).

        Returns:
            ActionResult:
                The summary of the resolved action.

        Raises:
            InvalidActorState:
                If the actor cannot act right now.
            InvalidAction:
                If the action, its resources or its target are not valid.

        """
        try:
            actor = self._check_actor(state, actor_id)
            if action_kind == ActionKind.FLEE:
                return self._flee(state, actor)
            if action_kind == ActionKind.ATTACK:
                target = self.validator.validate_target(
                    state, actor, action_kind, None, target_index
                )
                return self._attack(state, actor, target)
            if action_kind == ActionKind.SKILL:
                skill = self._check_skill(actor, action_id)
                target = self.validator.validate_target(
                    state, actor, action_kind, action_id, target_index
                )
                return self._use_skill(state, actor, skill, target)
            if action_kind == ActionKind.ITEM:
                item = self._check_item(state, actor, action_id)
                target = self.validator.validate_target(
                    state, actor, action_kind, action_id, target_index
                )
                return self._use_item(state, actor, item, target)
            raise InvalidAction(
                "Unsupported action kind",
                {"actor": actor_id, "action": action_kind},
            )
        except CombatError as e:
            log_warning(
                f"Rejected action: {e.message}",
                {**e.context, "action": str(action_kind), "context": "execute"},
            )
            raise

    # ============================================================================
    # VALIDATION
    # ============================================================================

    def _check_actor(self, state: CombatState, actor_id: str) -> Combatant:
        if state.is_over():
            raise InvalidActorState(
                "The combat session has already ended",
                {"actor": actor_id, "outcome": state.outcome},
            )
        actor = state.get_combatant(actor_id)
        if actor is None:
            raise InvalidActorState("Unknown actor", {"actor": actor_id})
        current = state.current_actor()
        if current.id != actor.id:
            raise InvalidActorState(
                "Not the current actor",
                {"actor": actor_id, "current": current.id},
            )
        if actor.is_defeated():
            raise InvalidActorState("The actor is defeated", {"actor": actor_id})
        return actor

    def _check_skill(self, actor: Combatant, skill_id: str | None) -> Skill:
        skill = actor.get_skill(skill_id) if skill_id else None
        if skill is None:
            raise InvalidAction("Unknown skill", {"actor": actor.id, "skill": skill_id})
        if not skill.is_ready():
            raise InvalidAction(
                f"{skill.name} is on cooldown",
                {
                    "actor": actor.id,
                    "skill": skill.id,
                    "cooldown": skill.current_cooldown,
                },
            )
        if not skill.is_affordable(actor.energy):
            raise InvalidAction(
                f"Not enough energy for {skill.name}",
                {
                    "actor": actor.id,
                    "skill": skill.id,
                    "energy": actor.energy,
                    "cost": skill.energy_cost,
                },
            )
        return skill

    def _check_item(
        self, state: CombatState, actor: Combatant, item_id: str | None
    ) -> ItemDescriptor:
        item = self.catalog.get(item_id) if item_id else None
        if item is None:
            raise InvalidAction("Unknown item", {"actor": actor.id, "item": item_id})
        if not state.pool(actor.side).has(item.id):
            raise InvalidAction(
                f"No {item.name} left",
                {"actor": actor.id, "item": item.id, "side": actor.side},
            )
        if actor.energy < item.energy_cost:
            raise InvalidAction(
                f"Not enough energy for {item.name}",
                {
                    "actor": actor.id,
                    "item": item.id,
                    "energy": actor.energy,
                    "cost": item.energy_cost,
                },
            )
        return item

    # ============================================================================
    # RESOLUTION
    # ============================================================================

    def _flee(self, state: CombatState, actor: Combatant) -> ActionResult:
        mark = len(state.event_log.entries)
        log_debug(f"{actor.name} calls the retreat", {"side": actor.side})
        state.event_log.append(Fled(round=state.round, actor=actor.id, side=actor.side))
        return ActionResult(
            actor=actor.id,
            action_kind=ActionKind.FLEE,
            fled=True,
            events=state.event_log.entries[mark:],
        )

    def _attack(
        self, state: CombatState, actor: Combatant, target: Combatant
    ) -> ActionResult:
        mark = len(state.event_log.entries)
        damage = compute_attack_damage(actor, target, self.tracker, self.config)
        dealt = target.take_damage(damage)
        log_debug(
            f"{actor.name} attacks {target.name}",
            {"damage": damage, "dealt": dealt, "health": target.health},
        )
        state.event_log.append(
            AttackResolved(
                round=state.round,
                actor=actor.id,
                target=target.id,
                amount=dealt,
            )
        )
        return ActionResult(
            actor=actor.id,
            action_kind=ActionKind.ATTACK,
            target=target.id,
            amount=dealt,
            events=state.event_log.entries[mark:],
        )

    def _use_skill(
        self,
        state: CombatState,
        actor: Combatant,
        skill: Skill,
        target: Combatant,
    ) -> ActionResult:
        mark = len(state.event_log.entries)
        spent = -actor.adjust_energy(-skill.energy_cost)

        damage = 0
        healing = 0
        if self.validator.is_healing_skill(skill):
            healing = target.heal(skill.healing or 0)
        else:
            damage = target.take_damage(skill.damage or 0)
        skill.start_cooldown()

        log_debug(
            f"{actor.name} uses {skill.name} on {target.name}",
            {"energy": spent, "damage": damage, "healing": healing},
        )
        state.event_log.append(
            SkillUsed(
                round=state.round,
                actor=actor.id,
                skill=skill.id,
                target=target.id,
                energy_spent=spent,
                damage=damage,
                healing=healing,
            )
        )
        if skill.cleanses:
            self.tracker.cleanse(state.event_log, state.round, actor, target)
        if skill.effect is not None:
            self.tracker.apply(
                state.event_log,
                state.round,
                actor,
                target,
                skill.effect,
                source_skill=skill.id,
            )
        return ActionResult(
            actor=actor.id,
            action_kind=ActionKind.SKILL,
            action_id=skill.id,
            target=target.id,
            amount=damage or healing,
            events=state.event_log.entries[mark:],
        )

    def _use_item(
        self,
        state: CombatState,
        actor: Combatant,
        item: ItemDescriptor,
        target: Combatant,
    ) -> ActionResult:
        mark = len(state.event_log.entries)
        remaining = state.consumables[actor.side].take(item.id)
        actor.adjust_energy(-item.energy_cost)

        healed = 0
        if item.effect == ItemEffectKind.INSTANT_HEAL:
            healed = target.heal(item.amount)

        log_debug(
            f"{actor.name} uses {item.name} on {target.name}",
            {"effect": item.effect, "healed": healed, "remaining": remaining},
        )
        state.event_log.append(
            ItemUsed(
                round=state.round,
                actor=actor.id,
                item=item.id,
                target=target.id,
                effect=item.effect,
                amount=healed,
                remaining=remaining,
            )
        )
        if item.effect == ItemEffectKind.CLEANSE:
            self.tracker.cleanse(state.event_log, state.round, actor, target)
        elif item.effect == ItemEffectKind.STAT_BUFF and item.buff is not None:
            self.tracker.apply(
                state.event_log,
                state.round,
                actor,
                target,
                item.buff,
                source_item=item.id,
            )
        return ActionResult(
            actor=actor.id,
            action_kind=ActionKind.ITEM,
            action_id=item.id,
            target=target.id,
            amount=healed,
            events=state.event_log.entries[mark:],
        )
