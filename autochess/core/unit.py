"""
Unit instance representation.

A lightweight, data-driven unit class whose stats come from the
UnitDataLoader instead of being hardcoded.
"""
from typing import Optional, Dict, Any
from dataclasses import dataclass

from unit_data import UnitStats


@dataclass
class Unit:
    """
    Unit instance on a board or about to be placed.

    This class represents a unit ON THE BOARD, not the archetype. Attack,
    max health, role and heal power are copied from the catalog when the
    unit is created or upgraded and never recomputed during combat; health
    is then mutated by damage and healing.
    """

    unit_id: str
    """Catalog archetype id"""

    star: int = 1
    """Star level (1-3)"""

    position: Optional[int] = None
    """Board cell index, or None when not placed"""

    attack: int = 0
    health: int = 0
    max_health: int = 0
    role: str = "melee"
    heal_power: int = 0
    name: str = ""
    icon: str = ""

    @classmethod
    def from_stats(cls, stats: UnitStats, position: Optional[int] = None) -> "Unit":
        """Create a full-health unit from catalog stats."""
        return cls(
            unit_id=stats.unit_id,
            star=stats.star,
            position=position,
            attack=stats.attack,
            health=stats.health,
            max_health=stats.max_health,
            role=stats.role,
            heal_power=stats.heal_power,
            name=stats.name,
            icon=stats.icon,
        )

    @property
    def is_alive(self) -> bool:
        return self.health > 0

    @property
    def is_support(self) -> bool:
        return self.role == "support"

    def apply_stats(self, stats: UnitStats):
        """
        Replace derived stats after a star upgrade.

        Position is kept; health is refilled to the new max.
        """
        self.star = stats.star
        self.attack = stats.attack
        self.health = stats.health
        self.max_health = stats.max_health
        self.role = stats.role
        self.heal_power = stats.heal_power
        self.name = self.name or stats.name
        self.icon = self.icon or stats.icon

    def take_damage(self, damage: int) -> int:
        """
        Apply damage, clamping health at 0.

        Returns:
            Health actually lost
        """
        old_health = self.health
        self.health = max(0, self.health - damage)
        return old_health - self.health

    def heal(self, amount: int) -> int:
        """
        Heal a living unit.

        Returns:
            Actual amount healed (capped at max health)
        """
        if not self.is_alive:
            return 0

        old_health = self.health
        self.health = min(self.max_health, self.health + amount)
        return self.health - old_health

    def reset_for_combat(self):
        """Full revival: health back to max."""
        self.health = self.max_health

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "unit_id": self.unit_id,
            "name": self.name,
            "icon": self.icon,
            "star": self.star,
            "position": self.position,
            "attack": self.attack,
            "health": self.health,
            "max_health": self.max_health,
            "role": self.role,
            "heal_power": self.heal_power,
            "is_alive": self.is_alive,
        }

    def __repr__(self):
        stars_str = "*" * self.star
        return f"{self.name or self.unit_id} {stars_str} ({self.health}/{self.max_health}, atk {self.attack})"


def create_unit(stats: UnitStats, position: Optional[int] = None) -> Unit:
    """
    Factory function to create a Unit instance.

    Args:
        stats: Catalog stats at the desired star level
        position: Board cell, if already placed

    Returns:
        Unit instance
    """
    return Unit.from_stats(stats, position=position)
