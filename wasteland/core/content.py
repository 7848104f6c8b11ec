import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

from catchery import log_warning
from character.combatant import Combatant
from character.skill import Skill
from items.consumable import ItemCatalog, ItemDescriptor

from core.config import CombatConfig
from core.constants import Side
from core.utils import Singleton, cprint


class ContentRepository(metaclass=Singleton):
    """
    One-stop registry for every game-asset that needs fast by-id access.
    """

    # Action-related attributes.
    skills: dict[str, Skill]
    items: dict[str, ItemDescriptor]
    # Combatant-related attributes.
    enemies: dict[str, Combatant]
    party: dict[str, Combatant]
    # Rules.
    config: CombatConfig

    def __init__(self, data_dir: Path | None = None) -> None:
        """
        Initialize the ContentRepository.

        Args:
            data_dir (Path | None):
                The directory containing data files to load.

        """
        if data_dir:
            self.reload(data_dir)
            self.loaded = True
        elif not hasattr(self, "loaded"):
            raise ValueError(
                "ContentRepository must be initialized with a valid data_dir on first use."
            )

    def reload(self, root: Path) -> None:
        """
        (Re)load all JSON assets from disk.

        Args:
            root (Path):
                The directory containing data files to load.

        """
        # Skills first, combatant templates refer to them by id.
        self.skills = _load_json_file(
            root / "skills.json",
            self._load_skills,
            "skills",
        )
        self.items = _load_json_file(
            root / "items.json",
            self._load_items,
            "items",
        )
        self.enemies = _load_json_file(
            root / "enemies.json",
            self._load_enemies,
            "enemies",
        )
        self.party = _load_json_file(
            root / "party.json",
            self._load_party,
            "party members",
        )
        self.config = CombatConfig.load(root / "combat_config.json")
        self._spawned: dict[str, int] = {}

    def _get_from_collection(self, collection_name: str, entry_id: str) -> Any | None:
        """
        Generic helper to get an entry from any collection.

        Args:
            collection_name (str):
                Name of the collection attribute (e.g., 'skills', 'items')
            entry_id (str):
                Id of the entry to retrieve

        Returns:
            Any | None:
                The entry if found, None otherwise

        """
        collection = getattr(self, collection_name, None)
        if collection is None:
            log_warning(
                f"Collection '{collection_name}' not found in ContentRepository.",
                {"collection_name": collection_name, "entry_id": entry_id},
            )
            return None
        entry = collection.get(entry_id)
        if entry is None:
            log_warning(
                f"Entry '{entry_id}' not found in collection '{collection_name}'.",
                {"collection_name": collection_name, "entry_id": entry_id},
            )
        return entry

    def get_skill(self, skill_id: str) -> Skill | None:
        """Get a skill by id, or None if not found."""
        return self._get_from_collection("skills", skill_id)

    def get_item(self, item_id: str) -> ItemDescriptor | None:
        """Get an item descriptor by id, or None if not found."""
        return self._get_from_collection("items", item_id)

    def item_catalog(self) -> ItemCatalog:
        """Build the item catalog handed to combat sessions."""
        return ItemCatalog(items=dict(self.items))

    def make_enemy(self, template_id: str) -> Combatant | None:
        """
        Spawn a fresh enemy from a template.

        Args:
            template_id (str):
                Id of the enemy template.

        Returns:
            Combatant | None:
                An independent copy with a unique id, or None if the template
                is unknown.

        """
        return self._spawn("enemies", template_id)

    def make_party_member(self, template_id: str) -> Combatant | None:
        """
        Create a fresh party member from a template.

        Args:
            template_id (str):
                Id of the party member template.

        Returns:
            Combatant | None:
                An independent copy with a unique id, or None if the template
                is unknown.

        """
        return self._spawn("party", template_id)

    def _spawn(self, collection_name: str, template_id: str) -> Combatant | None:
        template: Combatant | None = self._get_from_collection(
            collection_name, template_id
        )
        if template is None:
            return None
        count = self._spawned.get(template_id, 0) + 1
        self._spawned[template_id] = count
        return template.model_copy(deep=True, update={"id": f"{template_id}_{count}"})

    @staticmethod
    def _load_skills(data: list[dict]) -> dict[str, Skill]:
        """
        Load skills from JSON data.

        Args:
            data (list[dict]): List of skill data dictionaries.

        Returns:
            dict[str, Skill]: Dictionary mapping skill ids to Skill objects.

        Raises:
            ValueError: If duplicate skill ids are found.

        """
        skills = {}
        for skill_data in data:
            skill = Skill(**skill_data)
            if skill.id in skills:
                raise ValueError(f"Duplicate skill id: {skill.id}")
            skills[skill.id] = skill
        return skills

    @staticmethod
    def _load_items(data: list[dict]) -> dict[str, ItemDescriptor]:
        """
        Load consumable items from JSON data.

        Args:
            data (list[dict]): List of item data dictionaries.

        Returns:
            dict[str, ItemDescriptor]: Dictionary mapping item ids to descriptors.

        Raises:
            ValueError: If duplicate item ids are found.

        """
        catalog = ItemCatalog.from_items([ItemDescriptor(**d) for d in data])
        return catalog.items

    def _load_enemies(self, data: list[dict]) -> dict[str, Combatant]:
        """Load enemy templates from JSON data."""
        return self._load_combatants(data, Side.ENEMY)

    def _load_party(self, data: list[dict]) -> dict[str, Combatant]:
        """Load party member templates from JSON data."""
        return self._load_combatants(data, Side.ALLY)

    def _load_combatants(self, data: list[dict], side: Side) -> dict[str, Combatant]:
        """
        Load combatant templates from JSON data.

        Args:
            data (list[dict]): List of combatant data dictionaries.
            side (Side): The side every loaded combatant fights on.

        Returns:
            dict[str, Combatant]: Dictionary mapping template ids to combatants.

        Raises:
            ValueError: If a duplicate id or an unknown skill id is found.

        """
        combatants: dict[str, Combatant] = {}
        for combatant_data in data:
            skills: list[Skill] = []
            for skill_id in combatant_data.get("skills", []):
                if skill_id not in self.skills:
                    raise ValueError(
                        f"Unknown skill '{skill_id}' for {combatant_data.get('id')}"
                    )
                skills.append(self.skills[skill_id].model_copy(deep=True))
            combatant = Combatant(**{**combatant_data, "side": side, "skills": skills})
            if combatant.id in combatants:
                raise ValueError(f"Duplicate combatant id: {combatant.id}")
            combatants[combatant.id] = combatant
        return combatants


def _load_json_file(
    filepath: Path,
    loader_func: Callable[[list[dict]], dict[str, Any]],
    description: str,
) -> dict[str, Any]:
    """Helper to load and validate JSON files"""
    try:
        cprint(
            f"  Loading {description} using {loader_func.__name__}...",
            style="bold green",
        )
        # Validate file path
        if not filepath.exists():
            raise FileNotFoundError(f"File not found: {filepath}")
        if not filepath.is_file():
            raise ValueError(f"Not a file: {filepath}")
        # Load and validate JSON
        with open(filepath, encoding="utf-8") as f:
            data = json.load(f)
        if not data:
            raise ValueError(f"Empty data list in {filepath}")
        if not isinstance(data, list):
            raise ValueError(f"Expected list in {filepath}, got {type(data).__name__}")
        return loader_func(data)
    except (json.JSONDecodeError, FileNotFoundError, ValueError) as e:
        raise ValueError(f"File {filepath} raised an error: {e}")
