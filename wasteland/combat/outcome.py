"""
Outcome evaluation for the combat resolver.
"""

from core.constants import OutcomeKind, Side

from combat.state import CombatState


class OutcomeEvaluator:
    """
    Decides whether a fight has reached a terminal outcome.
    """

    def evaluate(self, state: CombatState, fled: bool = False) -> OutcomeKind | None:
        """
        Check the state for a terminal outcome, seen from the ally side.

        A fled side ends the fight regardless of health totals. Otherwise a
        wiped ally side means defeat (even if the enemies are wiped too), and a
        wiped enemy side means victory.

        Args:
            state (CombatState):
                The state to inspect.
            fled (bool):
                Whether the last resolved action was a flee.

        Returns:
            OutcomeKind | None:
                The outcome, or None if the fight goes on.

        """
        if state.outcome is not None:
            return state.outcome
        if fled:
            return OutcomeKind.FLED
        if state.side_is_wiped(Side.ALLY):
            return OutcomeKind.DEFEAT
        if state.side_is_wiped(Side.ENEMY):
            return OutcomeKind.VICTORY
        return None
