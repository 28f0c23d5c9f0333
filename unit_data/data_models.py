"""
Data models for the auto-chess unit catalog
"""
from dataclasses import dataclass
from typing import Any, Dict


ROLE_TAGS = ("melee", "ranged", "magic", "tank", "assassin", "support")


@dataclass(frozen=True)
class UnitArchetype:
    """Unit template from the catalog (never mutated)"""
    unit_id: str
    name: str
    icon: str
    base_attack: int
    base_health: int
    cost: int
    role: str
    heal_power: int = 0
    description: str = ""

    def __repr__(self):
        return f"UnitArchetype(id='{self.unit_id}', cost={self.cost}, role='{self.role}')"


@dataclass(frozen=True)
class StarMultiplier:
    """Attack/health scaling for one star level"""
    attack: float
    health: float


@dataclass(frozen=True)
class UnitStats:
    """
    Stats of an archetype at a given star level.

    All scaled attributes are already floored.
    """
    unit_id: str
    star: int
    attack: int
    health: int
    max_health: int
    role: str
    heal_power: int
    name: str
    icon: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "unit_id": self.unit_id,
            "star": self.star,
            "attack": self.attack,
            "health": self.health,
            "max_health": self.max_health,
            "role": self.role,
            "heal_power": self.heal_power,
            "name": self.name,
            "icon": self.icon,
        }
