"""
Consumable items module for the combat resolver.

The inventory collaborator supplies an item catalog (id to effect descriptor)
and the quantities each side carries into the fight. Quantities are shared by
every member of a side.
"""

from typing import Any

from pydantic import BaseModel, Field

from core.constants import ItemEffectKind
from effects.status_effect import StatusEffectTemplate


class ItemDescriptor(BaseModel):
    """Describes what a consumable does when used in combat."""

    id: str = Field(
        description="Unique identifier of the item.",
    )
    name: str = Field(
        description="Name of the item.",
    )
    description: str = Field(
        default="No description.",
        description="Description of the item.",
    )
    effect: ItemEffectKind = Field(
        description="The instant effect of the item.",
    )
    amount: int = Field(
        default=0,
        ge=0,
        description="Health restored by INSTANT_HEAL items.",
    )
    buff: StatusEffectTemplate | None = Field(
        default=None,
        description="Status effect granted by STAT_BUFF items.",
    )
    energy_cost: int = Field(
        default=0,
        ge=0,
        description="Energy deducted from the user.",
    )
    tags: set[str] = Field(
        default_factory=set,
        description="Free-form tags consumed by the targeting configuration.",
    )

    def model_post_init(self, _: Any) -> None:
        if self.effect == ItemEffectKind.STAT_BUFF and self.buff is None:
            raise ValueError(f"Item '{self.id}' is a STAT_BUFF but has no buff.")
        if self.effect == ItemEffectKind.INSTANT_HEAL and self.amount <= 0:
            raise ValueError(f"Item '{self.id}' is an INSTANT_HEAL but heals nothing.")


class ItemCatalog(BaseModel):
    """Read-only mapping of item ids to their descriptors."""

    items: dict[str, ItemDescriptor] = Field(
        default_factory=dict,
        description="The known items, by id.",
    )

    @classmethod
    def from_items(cls, items: list[ItemDescriptor]) -> "ItemCatalog":
        """
        Build a catalog from a list of descriptors.

        Args:
            items (list[ItemDescriptor]):
                The descriptors to index.

        Returns:
            ItemCatalog:
                The catalog.

        Raises:
            ValueError:
                If two descriptors share the same id.

        """
        catalog: dict[str, ItemDescriptor] = {}
        for item in items:
            if item.id in catalog:
                raise ValueError(f"Duplicate item id: {item.id}")
            catalog[item.id] = item
        return cls(items=catalog)

    def get(self, item_id: str) -> ItemDescriptor | None:
        """Get an item descriptor by id, or None if unknown."""
        return self.items.get(item_id)

    def __contains__(self, item_id: object) -> bool:
        return item_id in self.items


class ConsumablePool(BaseModel):
    """The consumables a whole side shares during a fight."""

    quantities: dict[str, int] = Field(
        default_factory=dict,
        description="Units left, by item id.",
    )

    def model_post_init(self, _: Any) -> None:
        if any(quantity < 0 for quantity in self.quantities.values()):
            raise ValueError("Consumable quantities must be non-negative.")

    def count(self, item_id: str) -> int:
        """Get how many units of an item are left."""
        return self.quantities.get(item_id, 0)

    def has(self, item_id: str) -> bool:
        """Check if at least one unit of the item is left."""
        return self.count(item_id) > 0

    def take(self, item_id: str) -> int:
        """
        Consume one unit of an item.

        Args:
            item_id (str):
                The item to consume.

        Returns:
            int:
                The units left afterwards.

        Raises:
            ValueError:
                If no unit is left.

        """
        if not self.has(item_id):
            raise ValueError(f"No '{item_id}' left in the pool.")
        self.quantities[item_id] -= 1
        return self.quantities[item_id]

    def available(self) -> list[str]:
        """Get the ids of the items with at least one unit left."""
        return [item_id for item_id, quantity in self.quantities.items() if quantity > 0]
