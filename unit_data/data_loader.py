"""
Data Loader for the auto-chess unit catalog
Loads and parses unit archetypes and star multipliers from JSON
"""
import json
from pathlib import Path
from typing import Dict, List, Optional

from .data_models import ROLE_TAGS, StarMultiplier, UnitArchetype, UnitStats
from .utils import calculate_unit_stats


class UnitDataLoader:
    """
    Loads the unit catalog from JSON and provides convenient access methods.

    Usage:
        loader = UnitDataLoader()
        units = loader.get_all_units()
        warrior = loader.get_unit_by_id("warrior")
        stats = loader.stats_for("warrior", 2)
    """

    CATALOG_FILE = "units.json"

    def __init__(self, data_dir: Optional[Path] = None):
        """
        Initialize the data loader.

        Args:
            data_dir: Path to data directory. If None, uses the bundled data/ directory
        """
        if data_dir is None:
            self.data_dir = Path(__file__).parent / "data"
        else:
            self.data_dir = Path(data_dir)

        # Storage for loaded data
        self.units: Dict[str, UnitArchetype] = {}
        self.star_multipliers: Dict[int, StarMultiplier] = {}

        # Lookup indices
        self.units_by_role: Dict[str, List[UnitArchetype]] = {}
        self.units_by_cost: Dict[int, List[UnitArchetype]] = {}

        self._load_all()

    def _load_json(self, filename: str) -> dict:
        """Load a JSON file from the data directory"""
        filepath = self.data_dir / filename
        with open(filepath, "r", encoding="utf-8") as f:
            return json.load(f)

    def _load_all(self):
        """Load all data files"""
        data = self._load_json(self.CATALOG_FILE)
        self._load_units(data)
        self._load_star_multipliers(data)
        self._build_indices()

    def _load_units(self, data: dict):
        """Parse the "units" table"""
        for unit_data in data.get("units", []):
            role = unit_data.get("role", "melee")
            if role not in ROLE_TAGS:
                raise ValueError(f"Unit {unit_data.get('id')!r} has unknown role {role!r}")

            unit = UnitArchetype(
                unit_id=unit_data["id"],
                name=unit_data.get("name", unit_data["id"]),
                icon=unit_data.get("icon", ""),
                base_attack=unit_data.get("baseAttack", 0),
                base_health=unit_data.get("baseHealth", 0),
                cost=unit_data.get("cost", 1),
                role=role,
                heal_power=unit_data.get("healPower", 0),
                description=unit_data.get("description", ""),
            )
            self.units[unit.unit_id] = unit

        if not self.units:
            raise ValueError(f"No units found in {self.data_dir / self.CATALOG_FILE}")

    def _load_star_multipliers(self, data: dict):
        """Parse the "starMultipliers" table (JSON keys are strings)"""
        for star, multiplier in data.get("starMultipliers", {}).items():
            self.star_multipliers[int(star)] = StarMultiplier(
                attack=multiplier.get("attack", 1.0),
                health=multiplier.get("health", 1.0),
            )

        if not self.star_multipliers:
            self.star_multipliers = {1: StarMultiplier(attack=1.0, health=1.0)}

    def _build_indices(self):
        """Build lookup indices for fast access"""
        for unit in self.units.values():
            self.units_by_role.setdefault(unit.role, []).append(unit)
            self.units_by_cost.setdefault(unit.cost, []).append(unit)

    def get_all_units(self) -> List[UnitArchetype]:
        """Get all units in catalog order"""
        return list(self.units.values())

    def get_unit_ids(self) -> List[str]:
        """Get all unit ids in catalog order"""
        return list(self.units.keys())

    def get_unit_by_id(self, unit_id: str) -> Optional[UnitArchetype]:
        """Get unit by id"""
        return self.units.get(unit_id)

    def get_units_by_role(self, role: str) -> List[UnitArchetype]:
        """Get all units with a role tag"""
        return self.units_by_role.get(role, [])

    def get_units_by_cost(self, cost: int) -> List[UnitArchetype]:
        """Get all units of a specific cost"""
        return self.units_by_cost.get(cost, [])

    @property
    def max_star(self) -> int:
        return max(self.star_multipliers)

    def stats_for(self, unit_id: str, star: int) -> UnitStats:
        """
        Stats of a unit at a star level.

        Raises:
            ValueError: unknown unit id or star level
        """
        archetype = self.units.get(unit_id)
        if archetype is None:
            raise ValueError(f"Unknown unit id: {unit_id}")
        return calculate_unit_stats(archetype, star, self.star_multipliers)

    # ==== Utility Methods ====

    def get_stats(self) -> Dict[str, int]:
        """Get statistics about loaded data"""
        return {
            "units": len(self.units),
            "star_levels": len(self.star_multipliers),
            "roles": len(self.units_by_role),
        }
