"""
Damage computation for basic attacks.
"""

from character.combatant import Combatant
from core.config import CombatConfig
from effects.effect_tracker import StatusEffectTracker


def compute_attack_damage(
    attacker: Combatant,
    defender: Combatant,
    tracker: StatusEffectTracker,
    config: CombatConfig,
) -> int:
    """
    Computes the damage of a basic attack.

    The attacker's offensive stat and the defender's defensive stat both
    include the modifiers of their active status effects. The result never
    drops below the configured minimum damage.

    Args:
        attacker (Combatant):
            The attacking combatant.
        defender (Combatant):
            The attacked combatant.
        tracker (StatusEffectTracker):
            The tracker answering stat modifier queries.
        config (CombatConfig):
            The configuration holding the minimum damage.

    Returns:
        int:
            The damage to subtract from the defender's health.

    """
    offense = tracker.effective_attack(attacker)
    defense = tracker.effective_defense(defender)
    return max(config.minimum_damage, offense - defense)
