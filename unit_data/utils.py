"""
Helper utilities for working with the unit catalog
"""
import math
from typing import Dict

from .data_models import StarMultiplier, UnitArchetype, UnitStats


def calculate_unit_stats(
    archetype: UnitArchetype,
    star: int,
    star_multipliers: Dict[int, StarMultiplier],
) -> UnitStats:
    """
    Scale an archetype to a star level.

    Attribute at star N = floor(base * multiplier[N]). Health and max health
    start out equal.

    Args:
        archetype: Catalog entry
        star: Star level (must be a key of star_multipliers)
        star_multipliers: Star level -> multiplier table

    Returns:
        UnitStats for that star level
    """
    if star not in star_multipliers:
        raise ValueError(f"Unknown star level: {star}")

    multiplier = star_multipliers[star]
    attack = math.floor(archetype.base_attack * multiplier.attack)
    health = math.floor(archetype.base_health * multiplier.health)

    return UnitStats(
        unit_id=archetype.unit_id,
        star=star,
        attack=attack,
        health=health,
        max_health=health,
        role=archetype.role,
        heal_power=archetype.heal_power,
        name=archetype.name,
        icon=archetype.icon,
    )


def get_unit_power_score(unit) -> float:
    """
    Rough strength estimate of a unit.

    Args:
        unit: UnitStats, or anything with attack, max_health and heal_power

    Returns:
        Power score (higher = stronger)
    """
    return unit.attack * 2.0 + unit.max_health * 0.5 + unit.heal_power * 3.0
