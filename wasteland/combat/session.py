"""
Combat session module for the combat resolver.

CombatSession is the single engine behind every presentation: it builds the
state from the participant list, exposes the current actor, runs each action
through the resolver, the outcome evaluator and the scheduler, and hands the
final state to the encounter owner once the fight ends.
"""

from collections.abc import Callable
from typing import TypeAlias

from catchery import log_warning

from character.combatant import Combatant
from core.config import CombatConfig
from core.constants import ActionKind, OutcomeKind, Side
from core.errors import (
    DegenerateEncounter,
    EmptyTurnOrder,
    InvalidActorState,
    SessionBusy,
)
from core.logging import log_debug, log_info
from effects.effect_tracker import StatusEffectTracker
from effects.event_system import CombatEnded, RoundStarted, TurnStarted
from items.consumable import ConsumablePool, ItemCatalog

from combat.npc_ai import DecisionFunction
from combat.outcome import OutcomeEvaluator
from combat.resolver import ActionResolver, ActionResult
from combat.scheduler import TurnScheduler
from combat.state import CombatState
from combat.targeting import TargetValidator

OrderingFunction: TypeAlias = Callable[[list[Combatant]], list[int]]
TerminationCallback: TypeAlias = Callable[[CombatState, OutcomeKind], None]


# ============================================================================
# TURN ORDER POLICIES
# ============================================================================


def allies_first_order(participants: list[Combatant]) -> list[int]:
    """
    Keeps the supplied order, with every ally placed before every enemy.

    Args:
        participants (list[Combatant]):
            The participants, in the order supplied by the encounter owner.

    Returns:
        list[int]:
            The turn order, as participant indices.

    """
    allies = [i for i, c in enumerate(participants) if c.side == Side.ALLY]
    enemies = [i for i, c in enumerate(participants) if c.side == Side.ENEMY]
    return allies + enemies


def agility_order(participants: list[Combatant]) -> list[int]:
    """
    Orders the participants by descending agility, ties kept in supplied order.

    Args:
        participants (list[Combatant]):
            The participants.

    Returns:
        list[int]:
            The turn order, as participant indices.

    """
    return sorted(range(len(participants)), key=lambda i: -participants[i].agility)


# ============================================================================
# SESSION
# ============================================================================


class CombatSession:
    """
    Owns one combat state for the whole duration of one encounter.
    """

    def __init__(
        self,
        state: CombatState,
        config: CombatConfig,
        catalog: ItemCatalog,
        controllers: dict[Side, DecisionFunction] | None = None,
        on_terminated: TerminationCallback | None = None,
    ) -> None:
        """
        Initialize the session around an existing state.

        Prefer CombatSession.initialize(), which also builds the state.

        Args:
            state (CombatState):
                The state owned by the session.
            config (CombatConfig):
                The combat rules.
            catalog (ItemCatalog):
                The consumable item catalog.
            controllers (dict[Side, DecisionFunction] | None):
                Decision functions of the computer-controlled sides.
            on_terminated (TerminationCallback | None):
                Called once with the final state and outcome.

        """
        self.state = state
        self.config = config
        self.catalog = catalog
        self.controllers: dict[Side, DecisionFunction] = controllers or {}
        self.on_terminated = on_terminated

        tracker = StatusEffectTracker(config)
        self.validator = TargetValidator(config, catalog)
        self.resolver = ActionResolver(config, catalog, tracker, self.validator)
        self.scheduler = TurnScheduler(config, tracker)
        self.evaluator = OutcomeEvaluator()

        self._busy = False

    @classmethod
    def initialize(
        cls,
        participants: list[Combatant],
        ordering: OrderingFunction = allies_first_order,
        config: CombatConfig | None = None,
        catalog: ItemCatalog | None = None,
        consumables: dict[Side, dict[str, int]] | None = None,
        controllers: dict[Side, DecisionFunction] | None = None,
        on_terminated: TerminationCallback | None = None,
    ) -> "CombatSession":
        """
        Build a session with a fresh combat state.

        Args:
            participants (list[Combatant]):
                Every combatant taking part in the fight.
            ordering (OrderingFunction):
                The policy producing the turn order.
            config (CombatConfig | None):
                The combat rules (defaults if omitted).
            catalog (ItemCatalog | None):
                The consumable item catalog (empty if omitted).
            consumables (dict[Side, dict[str, int]] | None):
                The item quantities each side carries.
            controllers (dict[Side, DecisionFunction] | None):
                Decision functions of the computer-controlled sides.
            on_terminated (TerminationCallback | None):
                Called once with the final state and outcome.

        Returns:
            CombatSession:
                The ready-to-play session.

        Raises:
            EmptyTurnOrder:
                If there are no participants at all.
            DegenerateEncounter:
                If a side has no living participant.

        """
        if not participants:
            raise EmptyTurnOrder("Cannot start a fight without participants")
        for side in Side:
            if not any(c.side == side and c.is_alive() for c in participants):
                raise DegenerateEncounter(
                    f"Cannot start a fight without living {side.display_name} "
                    "participants",
                    {"side": side, "participants": len(participants)},
                )

        turn_order = ordering(participants)
        # Start on the first living entry of the turn order.
        start = next(
            position
            for position, index in enumerate(turn_order)
            if participants[index].is_alive()
        )
        first = participants[turn_order[start]]
        state = CombatState(
            participants=participants,
            turn_order=turn_order,
            current_turn_index=start,
            round=1,
            acting_side=first.side,
            consumables={
                side: ConsumablePool(quantities=dict(quantities))
                for side, quantities in (consumables or {}).items()
            },
        )
        state.event_log.append(RoundStarted(round=1))
        state.event_log.append(TurnStarted(round=1, actor=first.id, side=first.side))
        log_info(
            "Combat begins",
            {
                "allies": len(state.get_side(Side.ALLY)),
                "enemies": len(state.get_side(Side.ENEMY)),
                "first": first.name,
            },
        )
        return cls(
            state,
            config or CombatConfig(),
            catalog or ItemCatalog(),
            controllers=controllers,
            on_terminated=on_terminated,
        )

    # ============================================================================
    # QUERIES
    # ============================================================================

    @property
    def busy(self) -> bool:
        """Whether an action is being resolved right now."""
        return self._busy

    @property
    def outcome(self) -> OutcomeKind | None:
        """The terminal outcome, once reached."""
        return self.state.outcome

    def is_over(self) -> bool:
        """Check if the session has ended."""
        return self.state.is_over()

    def current_actor(self) -> Combatant:
        """Get the combatant whose turn it is."""
        return self.state.current_actor()

    def is_automated_turn(self) -> bool:
        """Check if the current actor belongs to a computer-controlled side."""
        return not self.is_over() and self.state.acting_side in self.controllers

    def legal_targets(
        self,
        actor_id: str,
        action_kind: ActionKind,
        action_id: str | None = None,
    ) -> list[int]:
        """
        Get the participant indices an action of the given actor may target.

        Args:
            actor_id (str):
                Id of the acting combatant.
            action_kind (ActionKind):
                The kind of action.
            action_id (str | None):
                The skill or item id, when the action needs one.

        Returns:
            list[int]:
                The legal target indices.

        Raises:
            InvalidActorState:
                If the actor is unknown.
            InvalidAction:
                If the action cannot be classified.

        """
        actor = self.state.get_combatant(actor_id)
        if actor is None:
            raise InvalidActorState("Unknown actor", {"actor": actor_id})
        return self.validator.legal_targets(self.state, actor, action_kind, action_id)

    # ============================================================================
    # ACTIONS
    # ============================================================================

    def execute(
        self,
        actor_id: str,
        action_kind: ActionKind,
        action_id: str | None = None,
        target_index: int | None = None,
    ) -> ActionResult:
        """
        Resolve an action, check for termination and pass the turn.

        Args:
            actor_id (str):
                Id of the acting combatant.
            action_kind (ActionKind):
                The kind of action.
            action_id (str | None):
                The skill or item id, when the action needs one.
            target_index (int | None):
                The chosen participant index.

        Returns:
            ActionResult:
                The summary of the resolved action.

        Raises:
            SessionBusy:
                If another action is still being resolved.
            InvalidActorState:
                If the actor cannot act right now.
            InvalidAction:
                If the action, its resources or its target are not valid.

        """
        if self._busy:
            log_warning(
                "Rejected re-entrant action",
                {"actor": actor_id, "action": str(action_kind), "context": "execute"},
            )
            raise SessionBusy(
                "Another action is still being resolved", {"actor": actor_id}
            )

        self._busy = True
        try:
            result = self.resolver.execute(
                self.state, actor_id, action_kind, action_id, target_index
            )
            outcome = self.evaluator.evaluate(self.state, fled=result.fled)
            if outcome is None:
                self.scheduler.advance(self.state)
                # Ongoing effects resolved on round wrap can end the fight.
                outcome = self.evaluator.evaluate(self.state)
            if outcome is not None:
                self._finish(outcome)
            return result
        finally:
            self._busy = False

    def flee(self, actor_id: str) -> ActionResult:
        """Make the acting side flee the fight on the given actor's turn."""
        return self.execute(actor_id, ActionKind.FLEE)

    def play_automated_turns(self) -> list[ActionResult]:
        """
        Play every consecutive turn owned by a computer-controlled side.

        Returns:
            list[ActionResult]:
                The resolved actions, in order. The loop stops when a
                human-controlled side must act or the session ends.

        """
        results: list[ActionResult] = []
        while self.is_automated_turn():
            actor = self.current_actor()
            decide = self.controllers[self.state.acting_side]
            action_kind, action_id, target_index = decide(self.state)
            log_debug(
                f"{actor.name} decides",
                {"action": action_kind, "id": action_id, "target": target_index},
            )
            results.append(self.execute(actor.id, action_kind, action_id, target_index))
        return results

    def terminate(self, outcome: OutcomeKind) -> None:
        """
        End the session with the given outcome.

        Args:
            outcome (OutcomeKind):
                The terminal outcome.

        Raises:
            InvalidActorState:
                If the session has already ended.

        """
        if self.is_over():
            raise InvalidActorState(
                "The combat session has already ended",
                {"outcome": self.state.outcome},
            )
        self._finish(outcome)

    def _finish(self, outcome: OutcomeKind) -> None:
        self.state.outcome = outcome
        self.state.event_log.append(CombatEnded(round=self.state.round, outcome=outcome))
        log_info("Combat ends", {"outcome": outcome, "round": self.state.round})
        if self.on_terminated is not None:
            self.on_terminated(self.state, outcome)
