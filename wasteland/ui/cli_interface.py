"""
User interface module for the combat resolver.

Provides the console input adapter of human-controlled sides: it shows Rich
table-based menus, reads choices with prompt_toolkit and translates them into
CombatSession.execute() calls. The session is handed over explicitly by the
encounter owner.
"""

from typing import Any

from prompt_toolkit import ANSI, PromptSession
from rich.table import Table

from character.combatant import Combatant
from character.skill import Skill
from combat.resolver import ActionResult
from combat.session import CombatSession
from core.constants import ActionKind
from core.errors import CombatError
from core.utils import ccapture, cprint
from items.consumable import ItemDescriptor


class PlayerInterface:
    """
    Command-line interface translating player choices into combat actions.

    Uses prompt_toolkit for interactive input with numeric and alphabetic
    shortcuts, and only offers targets the validator deems legal.
    """

    def __init__(
        self,
        session: CombatSession,
        prompt_session: PromptSession | None = None,
    ) -> None:
        """
        Initialize the PlayerInterface.

        Args:
            session (CombatSession):
                The combat session receiving the chosen actions.
            prompt_session (PromptSession | None):
                The prompt used for input (one session keeps history).

        """
        self.session = session
        self.prompt_session = prompt_session or PromptSession(erase_when_done=True)

    def play_turn(self) -> ActionResult | None:
        """
        Let the player choose and execute the current actor's action.

        Loops until an action is accepted by the engine. Rejected actions are
        reported and the menu is shown again.

        Returns:
            ActionResult | None:
                The resolved action, or None if the session is already over.

        """
        while not self.session.is_over():
            actor = self.session.current_actor()
            choice = self.choose_action(actor)
            if choice is None:
                continue
            action_kind, action_id = choice
            target_index: int | None = None
            if action_kind != ActionKind.FLEE:
                target = self.choose_target(
                    self.session.legal_targets(actor.id, action_kind, action_id)
                )
                if target is None:
                    continue
                target_index = target
            try:
                return self.session.execute(
                    actor.id, action_kind, action_id, target_index
                )
            except CombatError as e:
                cprint(f"[bold red]{e.message}[/]")
        return None

    def choose_action(self, actor: Combatant) -> tuple[ActionKind, str | None] | None:
        """Choose an action for the given actor.

        Args:
            actor (Combatant): The acting combatant.

        Returns:
            tuple[ActionKind, str | None] | None: The action kind and skill or
            item id, or None if the player went back.

        """
        entries: list[tuple[ActionKind, str | None]] = [(ActionKind.ATTACK, None)]
        submenus: list[str] = []
        if actor.skills:
            submenus.append("Skills")
        pool = self.session.state.pool(actor.side)
        if pool.available():
            submenus.append("Items")
        submenus.append("Flee")

        table = Table(title=f"{actor.name}'s turn", pad_edge=False)
        table.add_column("#", style="cyan")
        table.add_column("Action", style="bold")
        table.add_row("1", f"{ActionKind.ATTACK.emoji} Basic attack")
        table.add_row()
        for i, submenu in enumerate(submenus):
            table.add_row(chr(97 + i), submenu)

        prompt = "\n" + actor.get_status_line() + "\n" + ccapture(table) + "\nAction > "
        while True:
            answer = self.prompt_session.prompt(ANSI(prompt))
            if not answer:
                continue
            index = self.get_digit_choice(answer) - 1
            if 0 <= index < len(entries):
                return entries[index]
            index = self.get_alpha_choice(answer)
            if 0 <= index < len(submenus):
                submenu = submenus[index]
                if submenu == "Flee":
                    return (ActionKind.FLEE, None)
                if submenu == "Skills":
                    skill = self.choose_skill(actor)
                    return (ActionKind.SKILL, skill.id) if skill else None
                item = self.choose_item(actor)
                return (ActionKind.ITEM, item.id) if item else None

    def choose_skill(self, actor: Combatant) -> Skill | None:
        """Choose one of the actor's skills.

        Skills that are on cooldown or too expensive are listed but cannot be
        picked.

        Args:
            actor (Combatant): The acting combatant.

        Returns:
            Skill | None: The selected skill, or None to go back.

        """
        table = Table(title="Skills", pad_edge=False)
        table.add_column("#", style="cyan")
        table.add_column("Name", style="bold")
        table.add_column("Cost", justify="right")
        table.add_column("Effect")
        table.add_column("Ready", justify="right")
        for i, skill in enumerate(actor.skills, 1):
            effect = []
            if skill.damage:
                effect.append(f"[red]DMG {skill.damage}[/]")
            if skill.healing:
                effect.append(f"[green]HEAL {skill.healing}[/]")
            if skill.effect:
                effect.append(f"[magenta]{skill.effect.kind}[/]")
            if skill.cleanses:
                effect.append("[cyan]cleanse[/]")
            ready = (
                "[green]yes[/]"
                if actor.can_use_skill(skill)
                else f"[dim]{skill.current_cooldown}r[/]"
            )
            table.add_row(
                str(i), skill.name, str(skill.energy_cost), " ".join(effect), ready
            )
        table.add_row()
        table.add_row("q", "Back", "", "", "")
        return self._choose(table, actor.skills, "Skill > ", actor.can_use_skill)

    def choose_item(self, actor: Combatant) -> ItemDescriptor | None:
        """Choose a consumable from the actor's side pool.

        Args:
            actor (Combatant): The acting combatant.

        Returns:
            ItemDescriptor | None: The selected item, or None to go back.

        """
        pool = self.session.state.pool(actor.side)
        items = [
            item
            for item_id in pool.available()
            if (item := self.session.catalog.get(item_id)) is not None
        ]
        table = Table(title="Items", pad_edge=False)
        table.add_column("#", style="cyan")
        table.add_column("Name", style="bold")
        table.add_column("Left", justify="right")
        table.add_column("Description")
        for i, item in enumerate(items, 1):
            table.add_row(
                str(i),
                f"{item.effect.emoji} {item.name}",
                str(pool.count(item.id)),
                item.description,
            )
        table.add_row()
        table.add_row("q", "Back", "", "")
        return self._choose(
            table, items, "Item > ", lambda item: actor.energy >= item.energy_cost
        )

    def choose_target(self, targets: list[int]) -> int | None:
        """Choose a target among the legal participant indices.

        Args:
            targets (list[int]): The legal target indices.

        Returns:
            int | None: The selected participant index, or None to go back.

        """
        if not targets:
            cprint("[yellow]No legal target for this action.[/]")
            return None
        participants = self.session.state.participants
        table = Table(title="Targets", pad_edge=False)
        table.add_column("#", style="cyan", no_wrap=True)
        table.add_column("Name", style="bold")
        table.add_column("HP", justify="right")
        table.add_column("Effects")
        for i, index in enumerate(targets, 1):
            target = participants[index]
            table.add_row(
                str(i),
                target.colored_name,
                f"{target.health:>3}/{target.max_health:<3}",
                " ".join(str(e) for e in target.status_effects),
            )
        table.add_row()
        table.add_row("q", "Back", "", "")
        return self._choose(table, targets, "Target > ")

    def _choose(
        self,
        table: Table,
        options: list[Any],
        question: str,
        enabled: Any = None,
    ) -> Any | None:
        prompt = "\n" + ccapture(table) + "\n" + question
        while True:
            answer = self.prompt_session.prompt(ANSI(prompt))
            if not answer:
                continue
            if answer.lower() == "q":
                return None
            index = self.get_digit_choice(answer) - 1
            if 0 <= index < len(options):
                option = options[index]
                if enabled is None or enabled(option):
                    return option

    @staticmethod
    def get_digit_choice(answer: str) -> int:
        """
        Convert a single digit string input to its integer value.

        Args:
            answer (str): User input string to parse.

        Returns:
            int: The integer value of the digit (0-9), or -1 if invalid input.

        """
        if isinstance(answer, str) and len(answer) == 1 and answer.isdigit():
            return int(answer)
        return -1

    @staticmethod
    def get_alpha_choice(answer: Any) -> int:
        """
        Convert a single alphabetic character to its index position.

        Maps 'a' or 'A' to 0, 'b' or 'B' to 1, etc. Case-insensitive.

        Args:
            answer (Any): User input to parse.

        Returns:
            int: The index position (0-25 for a-z), or -1 if invalid input.

        """
        if isinstance(answer, str) and len(answer) == 1 and answer.isalpha():
            return ord(answer.lower()) - ord("a")
        return -1
