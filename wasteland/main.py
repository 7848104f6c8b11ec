"""
Main entry point for the wasteland combat resolver.

This script loads the content repository, assembles a party and a group of
enemies, and runs one encounter on the console. It demonstrates the combat
engine contract:
- The encounter owner builds the session and registers a termination callback
- Enemy turns are produced by an injected decision function
- The player's side is driven by an input adapter holding the session
- Narration is rendered from the structured event stream

Run with --auto to let a decision function play the party as well.
"""

import argparse
import logging
import random
from collections import Counter
from pathlib import Path

from character.combatant import Combatant
from combat.npc_ai import priority_strategy
from combat.session import CombatSession, agility_order, allies_first_order
from combat.state import CombatState
from combat.targeting import TargetValidator
from core.constants import OutcomeKind, Side
from core.content import ContentRepository
from core.logging import setup_logging
from core.utils import cprint, crule
from ui.cli_interface import PlayerInterface
from ui.narration import Narrator

# Get the path to the data folder.
data_dir = Path(__file__).parent / "data"


class Encounter:
    """
    The owner of one fight: supplies the participants and consumes the result.
    """

    def __init__(
        self,
        party: list[Combatant],
        enemies: list[Combatant],
        rng: random.Random | None = None,
    ) -> None:
        self.party = party
        self.enemies = enemies
        self.rng = rng or random.Random()
        self.outcome: OutcomeKind | None = None
        self.experience_awarded = 0
        self.loot: Counter[str] = Counter()

    def on_terminated(self, state: CombatState, outcome: OutcomeKind) -> None:
        """
        Termination callback: record the outcome and hand out the rewards.

        On victory the party earns the experience of every enemy and one loot
        roll per entry of their loot tables.

        Args:
            state (CombatState): The final combat state.
            outcome (OutcomeKind): How the fight ended.

        """
        self.outcome = outcome
        if outcome != OutcomeKind.VICTORY:
            return
        self.experience_awarded = sum(
            enemy.experience for enemy in state.get_side(Side.ENEMY)
        )
        for enemy in state.get_side(Side.ENEMY):
            for entry in enemy.loot:
                if self.rng.random() < entry.chance:
                    self.loot[entry.item] += entry.quantity

    def report(self) -> None:
        """Print the final report of the encounter."""
        crule(":crossed_swords:  Final Report", style="bold green")
        for combatant in self.party + self.enemies:
            cprint(combatant.get_status_line())
        if self.outcome is not None:
            cprint(f"\nOutcome: {self.outcome.colored_name}")
        if self.experience_awarded:
            cprint(
                f"The party earns [bold yellow]{self.experience_awarded}[/] experience."
            )
        for item, quantity in sorted(self.loot.items()):
            cprint(f"  Looted [bold]{item}[/] x{quantity}")


def make_names_unique(in_list: list[Combatant]) -> None:
    """
    Ensure all combatant names in a list are unique by appending numbers.

    Example:
        Input: ["Raider", "Raider", "Ghoul"]
        Output: ["Raider (1)", "Raider (2)", "Ghoul"]

    """
    name_counts = Counter(c.name for c in in_list)
    seen: Counter[str] = Counter()
    for combatant in in_list:
        base = combatant.name
        if name_counts[base] > 1:
            seen[base] += 1
            combatant.name = f"{base} ({seen[base]})"


def spawn(
    repo: ContentRepository, template_ids: list[str], enemies: bool
) -> list[Combatant]:
    """Spawn combatants from templates, skipping the unknown ones."""
    spawned = []
    for template_id in template_ids:
        combatant = (
            repo.make_enemy(template_id)
            if enemies
            else repo.make_party_member(template_id)
        )
        if combatant is not None:
            spawned.append(combatant)
    make_names_unique(spawned)
    return spawned


def main() -> None:
    parser = argparse.ArgumentParser(description="Wasteland combat demo")
    parser.add_argument("--auto", action="store_true", help="let the AI play the party")
    parser.add_argument(
        "--initiative", action="store_true", help="order turns by agility"
    )
    parser.add_argument("--debug", action="store_true", help="show engine debug logs")
    args = parser.parse_args()

    setup_logging(logging.DEBUG if args.debug else logging.WARNING)

    crule("Wasteland Combat", style="bold green")
    repo = ContentRepository(data_dir)

    party = spawn(repo, ["warrior", "medic"], enemies=False)
    enemies = spawn(
        repo, ["raider_scavenger", "raider_scavenger", "feral_ghoul"], enemies=True
    )
    encounter = Encounter(party, enemies)

    catalog = repo.item_catalog()
    validator = TargetValidator(repo.config, catalog)
    controllers = {Side.ENEMY: priority_strategy(validator)}
    if args.auto:
        controllers[Side.ALLY] = priority_strategy(validator)

    session = CombatSession.initialize(
        party + enemies,
        ordering=agility_order if args.initiative else allies_first_order,
        config=repo.config,
        catalog=catalog,
        consumables={
            Side.ALLY: {"stimpak": 2, "rad_away": 1, "psycho": 1, "frag_grenade": 1},
            Side.ENEMY: {"stimpak": 1},
        },
        controllers=controllers,
        on_terminated=encounter.on_terminated,
    )
    session.state.event_log.subscribe(Narrator(session.state))
    player = PlayerInterface(session)

    crule(":crossed_swords:  Combat Started", style="bold green")
    try:
        while not session.is_over():
            if session.is_automated_turn():
                session.play_automated_turns()
            else:
                player.play_turn()
    except KeyboardInterrupt:
        cprint("")
        crule(":crossed_swords:  Combat Interrupted", style="bold red")
        return
    encounter.report()


if __name__ == "__main__":
    main()
