"""
Status effect tracker module for the combat resolver.

Owns every combatant's list of timed modifiers: attaching effects according to
the configured stacking policy of their kind, answering stat modifier queries,
cleansing negative effects, and (on round wrap only) resolving ongoing ticks
and expiring effects whose duration runs out.
"""

from character.combatant import Combatant
from core.config import CombatConfig
from core.constants import StackingPolicy, StatTarget, TickKind
from core.logging import log_debug

from .event_system import (
    EffectApplied,
    EffectExpired,
    EffectsCleansed,
    EffectTicked,
    EventLog,
)
from .status_effect import StatusEffect, StatusEffectTemplate


class StatusEffectTracker:
    """
    Applies, queries, and decays status effects following the kind rules of a
    CombatConfig.
    """

    def __init__(self, config: CombatConfig) -> None:
        """
        Initialize the tracker.

        Args:
            config (CombatConfig):
                The configuration holding the effect kind rules.

        """
        self.config = config

    # === Application ===

    def apply(
        self,
        log: EventLog,
        round_number: int,
        actor: Combatant,
        target: Combatant,
        template: StatusEffectTemplate,
        source_skill: str | None = None,
        source_item: str | None = None,
    ) -> StatusEffect:
        """
        Attach an effect to the target, merging it with an existing effect of
        the same kind when there is one.

        Args:
            log (EventLog):
                The log receiving the EffectApplied event.
            round_number (int):
                The current round.
            actor (Combatant):
                The combatant applying the effect.
            target (Combatant):
                The combatant receiving the effect.
            template (StatusEffectTemplate):
                The effect to apply.
            source_skill (str | None):
                Id of the skill carrying the effect, if any.
            source_item (str | None):
                Id of the item carrying the effect, if any.

        Returns:
            StatusEffect:
                The effect now active on the target (new or merged).

        """
        rule = self.config.rule_for(template.kind)
        existing = target.get_effects(template.kind)

        assert len(existing) <= 1, (
            "Data integrity error: more than one effect of kind "
            f"'{template.kind}' found on {target.id}."
        )

        if existing:
            effect = existing[0]
            if rule.stacking == StackingPolicy.STACK:
                effect.magnitude += template.magnitude
                effect.duration = max(effect.duration, template.duration)
            else:
                effect.magnitude = template.magnitude
                effect.duration = template.duration
            # The latest application owns the merged effect.
            effect.source_actor = actor.id
            effect.source_skill = source_skill
            effect.source_item = source_item
            merged = True
        else:
            effect = template.instantiate(actor.id, source_skill, source_item)
            target.status_effects.append(effect)
            merged = False

        log_debug(
            f"{'Merged' if merged else 'Applied'} {effect.kind} on {target.name}",
            {
                "policy": rule.stacking,
                "magnitude": effect.magnitude,
                "duration": effect.duration,
            },
        )
        log.append(
            EffectApplied(
                round=round_number,
                actor=actor.id,
                target=target.id,
                kind=effect.kind,
                duration=effect.duration,
                magnitude=effect.magnitude,
                merged=merged,
            )
        )
        return effect

    def cleanse(
        self,
        log: EventLog,
        round_number: int,
        actor: Combatant,
        target: Combatant,
    ) -> list[str]:
        """
        Remove every negative effect from the target.

        Args:
            log (EventLog):
                The log receiving the EffectsCleansed event.
            round_number (int):
                The current round.
            actor (Combatant):
                The cleansing combatant.
            target (Combatant):
                The cleansed combatant.

        Returns:
            list[str]:
                The kinds of the removed effects.

        """
        removed = [
            effect.kind
            for effect in target.status_effects
            if self.config.rule_for(effect.kind).negative
        ]
        target.status_effects = [
            effect
            for effect in target.status_effects
            if not self.config.rule_for(effect.kind).negative
        ]
        log.append(
            EffectsCleansed(
                round=round_number,
                actor=actor.id,
                target=target.id,
                kinds=removed,
            )
        )
        return removed

    # === Queries ===

    def stat_modifier(self, combatant: Combatant, stat: StatTarget) -> int:
        """
        Sum the signed magnitudes of the effects modifying a stat.

        Args:
            combatant (Combatant):
                The effect bearer.
            stat (StatTarget):
                The stat being computed.

        Returns:
            int:
                The total modifier (may be negative).

        """
        total = 0
        for effect in combatant.status_effects:
            rule = self.config.rule_for(effect.kind)
            if rule.stat == stat:
                total += rule.stat_sign * effect.magnitude
        return total

    def effective_attack(self, combatant: Combatant) -> int:
        """The combatant's offensive stat including effect modifiers, floored at 0."""
        return max(0, combatant.attack + self.stat_modifier(combatant, StatTarget.ATTACK))

    def effective_defense(self, combatant: Combatant) -> int:
        """The combatant's defensive stat including effect modifiers, floored at 0."""
        return max(
            0, combatant.defense + self.stat_modifier(combatant, StatTarget.DEFENSE)
        )

    # === Round wrap ===

    def apply_ongoing(
        self,
        log: EventLog,
        round_number: int,
        combatants: list[Combatant],
    ) -> None:
        """
        Resolve the damage and healing over time of every living combatant.

        Args:
            log (EventLog):
                The log receiving one EffectTicked event per resolved tick.
            round_number (int):
                The round that is starting.
            combatants (list[Combatant]):
                Every participant of the fight.

        """
        for combatant in combatants:
            for effect in list(combatant.status_effects):
                if combatant.is_defeated():
                    break
                rule = self.config.rule_for(effect.kind)
                if rule.tick == TickKind.NONE or effect.magnitude <= 0:
                    continue
                if rule.tick == TickKind.DAMAGE:
                    amount = combatant.take_damage(effect.magnitude)
                else:
                    amount = combatant.heal(effect.magnitude)
                log.append(
                    EffectTicked(
                        round=round_number,
                        target=combatant.id,
                        kind=effect.kind,
                        tick=rule.tick,
                        amount=amount,
                    )
                )

    def decay(
        self,
        log: EventLog,
        round_number: int,
        combatants: list[Combatant],
    ) -> None:
        """
        Decrease every effect's duration by one round-tick and remove the
        effects that reach zero.

        Args:
            log (EventLog):
                The log receiving one EffectExpired event per removed effect.
            round_number (int):
                The round that is starting.
            combatants (list[Combatant]):
                Every participant of the fight.

        """
        for combatant in combatants:
            survivors: list[StatusEffect] = []
            for effect in combatant.status_effects:
                effect.duration -= 1
                if effect.is_expired():
                    log.append(
                        EffectExpired(
                            round=round_number,
                            target=combatant.id,
                            kind=effect.kind,
                        )
                    )
                else:
                    survivors.append(effect)
            combatant.status_effects = survivors

