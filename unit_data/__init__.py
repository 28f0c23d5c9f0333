"""
Auto-chess unit catalog package
"""
from .data_loader import UnitDataLoader
from .data_models import ROLE_TAGS, StarMultiplier, UnitArchetype, UnitStats
from .utils import calculate_unit_stats, get_unit_power_score

__all__ = [
    'UnitDataLoader',
    'UnitArchetype', 'StarMultiplier', 'UnitStats', 'ROLE_TAGS',
    'calculate_unit_stats', 'get_unit_power_score',
]
