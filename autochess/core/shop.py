"""
Shop generation.

Every slot is an independent uniform draw from the catalog, so duplicates
are allowed. Slots carry no identity across refreshes.
"""
import random
from dataclasses import dataclass
from typing import List, Optional

from unit_data import UnitDataLoader


@dataclass(frozen=True)
class ShopSlot:
    """One purchasable offer."""
    unit_id: str
    cost: int

    def to_dict(self):
        return {"unit_id": self.unit_id, "cost": self.cost}


class ShopGenerator:
    """
    Samples shop offers from the unit catalog.
    """

    def __init__(self, data_loader: UnitDataLoader, rng: Optional[random.Random] = None):
        """
        Args:
            data_loader: Unit catalog
            rng: Random source. If None, an unseeded one is created.
        """
        self.data_loader = data_loader
        self.rng = rng or random.Random()
        self._unit_ids = data_loader.get_unit_ids()

    def random_unit_id(self) -> str:
        """Uniformly random archetype id."""
        return self.rng.choice(self._unit_ids)

    def generate(self, size: int) -> List[ShopSlot]:
        """
        Sample a fresh shop.

        Args:
            size: Number of slots

        Returns:
            Ordered list of slots, cost copied from the catalog
        """
        shop = []
        for _ in range(size):
            unit_id = self.random_unit_id()
            shop.append(ShopSlot(unit_id=unit_id, cost=self.data_loader.get_unit_by_id(unit_id).cost))
        return shop
