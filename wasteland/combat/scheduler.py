"""
Turn scheduling module for the combat resolver.

Moves the turn to the next living combatant and, whenever the turn order
wraps around, runs the once-per-round bookkeeping: ongoing effect ticks,
cooldowns, effect durations and energy regeneration.
"""

from core.config import CombatConfig
from core.constants import Side
from core.logging import log_debug
from effects.effect_tracker import StatusEffectTracker
from effects.event_system import RoundStarted, TurnStarted

from combat.state import CombatState


class TurnScheduler:
    """
    Advances whose turn it is.
    """

    def __init__(
        self,
        config: CombatConfig,
        tracker: StatusEffectTracker | None = None,
    ) -> None:
        """
        Initialize the scheduler.

        Args:
            config (CombatConfig):
                The combat rules.
            tracker (StatusEffectTracker | None):
                The status effect tracker, built from the config if omitted.

        """
        self.config = config
        self.tracker = tracker or StatusEffectTracker(config)

    def advance(self, state: CombatState) -> None:
        """
        Move to the next living entry of the turn order.

        Defeated combatants are skipped. Passing index 0 starts a new round.
        Nothing happens once the fight is over or either side has no living
        members left.

        Args:
            state (CombatState):
                The combat state to mutate.

        """
        if state.is_over():
            return
        if state.side_is_wiped(Side.ALLY) or state.side_is_wiped(Side.ENEMY):
            return

        size = len(state.turn_order)
        index = state.current_turn_index
        for _ in range(size):
            index = (index + 1) % size
            if index == 0:
                self.wrap_round(state)
            if state.participants[state.turn_order[index]].is_alive():
                state.current_turn_index = index
                break
        else:
            # Everyone fell during the round wrap; the evaluator ends the fight.
            return

        actor = state.current_actor()
        state.acting_side = actor.side
        log_debug(
            f"Turn of {actor.name}",
            {"round": state.round, "index": state.current_turn_index},
        )
        state.event_log.append(
            TurnStarted(round=state.round, actor=actor.id, side=actor.side)
        )

    def wrap_round(self, state: CombatState) -> None:
        """
        Run the once-per-round bookkeeping and start the next round.

        Args:
            state (CombatState):
                The combat state to mutate.

        """
        state.round += 1
        log_debug(f"Round {state.round} begins")
        state.event_log.append(RoundStarted(round=state.round))

        self.tracker.apply_ongoing(state.event_log, state.round, state.participants)
        for combatant in state.participants:
            for skill in combatant.skills:
                skill.tick_cooldown()
        self.tracker.decay(state.event_log, state.round, state.participants)

        if self.config.energy_regen_per_round > 0:
            for combatant in state.get_alive():
                combatant.adjust_energy(self.config.energy_regen_per_round)
