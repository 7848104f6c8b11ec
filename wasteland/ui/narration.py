"""
Console narration rendered from the structured combat event stream.
"""

from combat.state import CombatState
from core.constants import TickKind
from core.utils import cprint
from effects.event_system import (
    AttackResolved,
    CombatEnded,
    CombatEvent,
    EffectApplied,
    EffectExpired,
    EffectsCleansed,
    EffectTicked,
    Fled,
    ItemUsed,
    RoundStarted,
    SkillUsed,
    TurnStarted,
)


class Narrator:
    """
    Event listener printing one line of narration per combat event.

    Subscribe it to a session's event log:

        state.event_log.subscribe(Narrator(state))
    """

    def __init__(self, state: CombatState) -> None:
        self.state = state

    def __call__(self, event: CombatEvent) -> None:
        line = self.render(event)
        if line:
            cprint(line)

    def _name(self, combatant_id: str) -> str:
        combatant = self.state.get_combatant(combatant_id)
        return combatant.colored_name if combatant else combatant_id

    def render(self, event: CombatEvent) -> str:
        """
        Turns an event into a rich-formatted line of narration.

        Args:
            event (CombatEvent): The event to render.

        Returns:
            str: The narration line, empty for events that are not narrated.

        """
        if isinstance(event, RoundStarted):
            return f"\n[bold yellow]=== Round {event.round} ===[/]"
        if isinstance(event, TurnStarted):
            return f"{event.side.emoji} It's {self._name(event.actor)}'s turn."
        if isinstance(event, AttackResolved):
            return (
                f"    ⚔️ {self._name(event.actor)} attacks {self._name(event.target)} "
                f"for [bold red]{event.amount}[/] damage."
            )
        if isinstance(event, SkillUsed):
            line = (
                f"    ⚡ {self._name(event.actor)} uses [bold]{event.skill}[/] "
                f"on {self._name(event.target)}"
            )
            if event.damage:
                line += f", dealing [bold red]{event.damage}[/] damage"
            if event.healing:
                line += f", restoring [bold green]{event.healing}[/] health"
            return line + "."
        if isinstance(event, ItemUsed):
            line = (
                f"    {event.effect.emoji} {self._name(event.actor)} uses "
                f"[bold]{event.item}[/] on {self._name(event.target)}"
            )
            if event.amount:
                line += f", restoring [bold green]{event.amount}[/] health"
            return line + f" ({event.remaining} left)."
        if isinstance(event, EffectApplied):
            verb = "intensifies on" if event.merged else "afflicts"
            return (
                f"    ✨ [magenta]{event.kind.capitalize()}[/] {verb} "
                f"{self._name(event.target)} ({event.magnitude}, {event.duration}r)."
            )
        if isinstance(event, EffectsCleansed):
            if not event.kinds:
                return f"    🧼 {self._name(event.target)} has nothing to cleanse."
            kinds = ", ".join(kind.capitalize() for kind in event.kinds)
            return f"    🧼 {self._name(event.target)} is cleansed of {kinds}."
        if isinstance(event, EffectTicked):
            if event.tick == TickKind.DAMAGE:
                return (
                    f"    ☠️ {self._name(event.target)} suffers [bold red]"
                    f"{event.amount}[/] {event.kind} damage."
                )
            return (
                f"    💚 {self._name(event.target)} recovers [bold green]"
                f"{event.amount}[/] health from {event.kind}."
            )
        if isinstance(event, EffectExpired):
            return (
                f"    ⌛ {event.kind.capitalize()} wears off "
                f"{self._name(event.target)}."
            )
        if isinstance(event, Fled):
            return f"    🏃 {self._name(event.actor)} calls the retreat!"
        if isinstance(event, CombatEnded):
            return f"\n[bold]Combat over:[/] {event.outcome.colored_name}"
        return ""
